from __future__ import annotations

import numpy as np

from . import config
from flyview.linalg import Mat4, Vec3

# Interleaved (x, y, z, u, v) for a unit cube centred on the origin.
CUBE_VERTICES = np.array(
    [
        # front
        (-0.5, -0.5, 0.5, 0.0, 1.0),
        (0.5, -0.5, 0.5, 1.0, 1.0),
        (0.5, 0.5, 0.5, 1.0, 0.0),
        (-0.5, 0.5, 0.5, 0.0, 0.0),
        # back
        (-0.5, -0.5, -0.5, 1.0, 1.0),
        (0.5, -0.5, -0.5, 0.0, 1.0),
        (0.5, 0.5, -0.5, 0.0, 0.0),
        (-0.5, 0.5, -0.5, 1.0, 0.0),
    ],
    dtype=np.float32,
)

CUBE_INDICES = np.array(
    [
        0, 1, 2, 2, 3, 0,  # front
        1, 5, 6, 6, 2, 1,  # right
        5, 4, 7, 7, 6, 5,  # back
        4, 0, 3, 3, 7, 4,  # left
        3, 2, 6, 6, 7, 3,  # top
        4, 5, 1, 1, 0, 4,  # bottom
    ],
    dtype=np.uint16,
)  # fmt: skip


class Instance:
    def __init__(self, position: Vec3, axis: Vec3 | None = None, angle: float = 0.0):
        self.position = position
        self.axis = axis if axis is not None else Vec3.unit_y()
        self.angle = angle

    def model(self) -> Mat4:
        p = self.position
        return Mat4.translate(p.x, p.y, p.z) @ Mat4.rotate(self.axis, self.angle)


def default_instances() -> list[Instance]:
    return [Instance(Vec3(*pos)) for pos in config.INSTANCE_POSITIONS]


def pack_instances(instances: list[Instance]) -> np.ndarray:
    """Model matrices as an (N, 16) float32 array, each row column-major."""
    out = np.empty((len(instances), 16), dtype=np.float32)
    for i, inst in enumerate(instances):
        out[i] = inst.model().to_column_major()
    return out


def advance_instances(instances: list[Instance]) -> None:
    # Slide the first cube along +x, wrapping back near the origin.
    if not instances:
        return
    p = instances[0].position
    p.x = p.x % config.INSTANCE_SLIDE_WRAP + config.INSTANCE_SLIDE_STEP
