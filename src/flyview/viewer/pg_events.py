"""pygame -> flyview event translation. The only module that reads pygame events."""

from __future__ import annotations

import pygame

from .events import CloseRequested, Event, KeyInput, MouseMotion, Resized


def translate_event(event: pygame.event.Event) -> Event | None:
    if event.type == pygame.QUIT:
        return CloseRequested()
    if event.type in (pygame.KEYDOWN, pygame.KEYUP):
        return KeyInput(event.key, event.type == pygame.KEYDOWN)
    if event.type == pygame.MOUSEMOTION:
        dx, dy = event.rel
        return MouseMotion(float(dx), float(dy))
    if event.type == pygame.VIDEORESIZE:
        return Resized(int(event.w), int(event.h))
    return None
