from __future__ import annotations

from . import config
from .camera import CameraState, clamp_pitch, right
from flyview.linalg import Vec3

DIRECTIONS = ("forward", "backward", "left", "right", "up", "down")


class InputState:
    """Pressed flags for the six movement directions plus motion tuning."""

    def __init__(
        self,
        speed: float = config.SPEED,
        sensitivity: float = config.MOUSE_SENSITIVITY,
    ) -> None:
        self.speed = speed
        self.sensitivity = sensitivity
        self.forward = False
        self.backward = False
        self.left = False
        self.right = False
        self.up = False
        self.down = False


class CameraController:
    """Turns key and mouse events into camera motion.

    Key and mouse handlers only record input. `update()` runs once per frame
    tick, moves the camera and recomputes its matrix.

    NaN mouse deltas are not filtered: they end up in yaw (and position on
    the next move) and stay there.
    """

    def __init__(
        self,
        camera: CameraState,
        input_state: InputState | None = None,
        bindings: dict[int, str] | None = None,
    ) -> None:
        self.camera = camera
        self.input = input_state if input_state is not None else InputState()
        self.bindings = dict(bindings if bindings is not None else config.KEY_BINDINGS)

    def handle_key(self, code: int, pressed: bool) -> bool:
        direction = self.bindings.get(code)
        if direction is None:
            return False
        setattr(self.input, direction, bool(pressed))
        return True

    def handle_mouse_motion(self, dx: float, dy: float) -> None:
        cam = self.camera
        cam.yaw += dx * self.input.sensitivity
        # Screen y grows downward; moving the mouse up looks up.
        cam.pitch -= dy * self.input.sensitivity
        cam.pitch = clamp_pitch(cam.pitch)

    def movement(self) -> Vec3:
        """Unnormalized sum of the pressed direction vectors."""
        cam = self.camera
        keys = self.input
        forward_vec = cam.forward()
        right_vec = right(forward_vec, cam.up)

        move = Vec3()
        if keys.forward:
            move = move + forward_vec
        if keys.backward:
            move = move - forward_vec
        if keys.right:
            move = move + right_vec
        if keys.left:
            move = move - right_vec
        if keys.up:
            move = move + cam.up
        if keys.down:
            move = move - cam.up
        return move

    def update(self) -> None:
        move = self.movement()
        # Normalize so diagonals move at `speed`, not speed * sqrt(2).
        if move.mag2() > 0:
            self.camera.position = self.camera.position + move.norm() * self.input.speed
        self.camera.refresh()
