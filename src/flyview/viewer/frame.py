from __future__ import annotations

import logging

import numpy as np

from . import config
from .camera import CameraState, aspect_from_size
from .controller import CameraController
from .events import CloseRequested, Event, FrameTick, KeyInput, MouseMotion, Resized

logger = logging.getLogger(__name__)


class ViewProjSnapshot:
    """Read-only copy of the view-projection matrix as 16 column-major float32s."""

    __slots__ = ("values",)

    def __init__(self, column_major) -> None:
        values = np.array(column_major, dtype=np.float32)
        if values.shape != (16,):
            raise ValueError("view-projection snapshot expects 16 floats")
        values.flags.writeable = False
        self.values = values

    def tobytes(self) -> bytes:
        return self.values.tobytes()

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.values).all())

    def __len__(self) -> int:
        return 16

    def __repr__(self) -> str:
        return f"ViewProjSnapshot({self.values.tolist()})"


class ViewerContext:
    """Everything one window owns: camera, controller and the last snapshot."""

    def __init__(self, width: int = config.WIDTH, height: int = config.HEIGHT, **camera_kwargs) -> None:
        self.camera = CameraState(aspect_from_size(width, height), **camera_kwargs)
        self.controller = CameraController(self.camera)
        self.running = True
        self.camera.refresh()
        self.latest = snapshot(self.camera)


def snapshot(camera: CameraState) -> ViewProjSnapshot:
    return ViewProjSnapshot(camera.view_proj.to_column_major())


def on_resize(ctx: ViewerContext, width: int, height: int) -> ViewProjSnapshot:
    ctx.camera.set_aspect(aspect_from_size(width, height))
    logger.debug("resize %dx%d -> aspect %.4f", width, height, ctx.camera.aspect)
    ctx.latest = snapshot(ctx.camera)
    return ctx.latest


def on_frame_tick(ctx: ViewerContext) -> ViewProjSnapshot:
    ctx.controller.update()
    ctx.latest = snapshot(ctx.camera)
    return ctx.latest


def dispatch(ctx: ViewerContext, event: Event):
    """Route one event into the context.

    Returns True/False for key events (consumed or not) and the new snapshot
    for resize and frame events.
    """
    if isinstance(event, KeyInput):
        return ctx.controller.handle_key(event.code, event.pressed)
    if isinstance(event, MouseMotion):
        ctx.controller.handle_mouse_motion(event.dx, event.dy)
        return None
    if isinstance(event, Resized):
        return on_resize(ctx, event.width, event.height)
    if isinstance(event, FrameTick):
        return on_frame_tick(ctx)
    if isinstance(event, CloseRequested):
        ctx.running = False
        return None
    raise TypeError(f"unknown event: {event!r}")
