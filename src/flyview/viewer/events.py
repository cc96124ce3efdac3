"""Host-independent input events understood by `frame.dispatch`."""

from __future__ import annotations

from typing import NamedTuple, Union


class KeyInput(NamedTuple):
    code: int
    pressed: bool


class MouseMotion(NamedTuple):
    dx: float
    dy: float


class Resized(NamedTuple):
    width: int
    height: int


class FrameTick(NamedTuple):
    pass


class CloseRequested(NamedTuple):
    pass


Event = Union[KeyInput, MouseMotion, Resized, FrameTick, CloseRequested]
