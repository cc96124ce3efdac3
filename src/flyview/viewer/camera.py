from __future__ import annotations

import math

from . import config
from flyview.linalg import Mat4, Vec3

# Remaps GL clip z from [-w, w] to [0, w] for [0, 1] depth backends.
DEPTH_ZERO_TO_ONE = Mat4.from_rows(
    (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 0.5, 0.5),
        (0.0, 0.0, 0.0, 1.0),
    )
)


def forward(yaw: float, pitch: float) -> Vec3:
    return Vec3(
        math.cos(yaw) * math.cos(pitch),
        math.sin(pitch),
        math.sin(yaw) * math.cos(pitch),
    ).norm()


def right(forward_vec: Vec3, up: Vec3) -> Vec3:
    return forward_vec.cross(up).norm()


def clamp_pitch(pitch: float, limit: float = config.MAX_PITCH) -> float:
    return max(-limit, min(limit, pitch))


def clamp_aspect(aspect: float) -> float:
    # `not aspect > MIN_ASPECT` also catches NaN from 0 / 0.
    if not aspect > config.MIN_ASPECT:
        return config.MIN_ASPECT
    return aspect


def aspect_from_size(width: int, height: int) -> float:
    if height <= 0 or width <= 0:
        return config.MIN_ASPECT
    return clamp_aspect(width / height)


class CameraState:
    """Eye position, look angles and projection parameters for one window.

    `view_proj` is derived data: it is only ever written by `refresh()`.
    """

    def __init__(
        self,
        aspect: float,
        position: Vec3 | None = None,
        yaw: float = config.START_YAW,
        pitch: float = config.START_PITCH,
        *,
        fov_y: float = config.FOV_Y,
        z_near: float = config.Z_NEAR,
        z_far: float = config.Z_FAR,
        depth_zero_to_one: bool = config.DEPTH_ZERO_TO_ONE,
    ) -> None:
        self.position = position if position is not None else Vec3(*config.START_POS)
        self.yaw = yaw
        self.pitch = clamp_pitch(pitch)
        self.up = Vec3(*config.WORLD_UP)
        self.aspect = clamp_aspect(aspect)
        self.fov_y = fov_y
        self.z_near = z_near
        self.z_far = z_far
        self.depth_zero_to_one = depth_zero_to_one
        self._view_proj: Mat4 | None = None

    @property
    def view_proj(self) -> Mat4:
        if self._view_proj is None:
            raise RuntimeError("view_proj read before the camera was first updated")
        return self._view_proj

    def forward(self) -> Vec3:
        return forward(self.yaw, self.pitch)

    def set_aspect(self, aspect: float) -> None:
        self.aspect = clamp_aspect(aspect)
        self.refresh()

    def refresh(self) -> Mat4:
        self._view_proj = build_view_projection(self)
        return self._view_proj


def build_view_projection(state: CameraState) -> Mat4:
    view = Mat4.look_at(state.position, state.position + state.forward(), state.up)
    proj = Mat4.perspective(state.fov_y, state.aspect, state.z_near, state.z_far)
    if state.depth_zero_to_one:
        return DEPTH_ZERO_TO_ONE @ proj @ view
    return proj @ view
