import math
import random

import pygame
import pytest

from flyview.viewer import config
from flyview.viewer.camera import CameraState
from flyview.viewer.controller import DIRECTIONS, CameraController, InputState


@pytest.fixture
def controller():
    return CameraController(CameraState(800 / 600))


def displacement(ctrl, before):
    p = ctrl.camera.position
    return (p.x - before[0], p.y - before[1], p.z - before[2])


def pressed(ctrl):
    return [d for d in DIRECTIONS if getattr(ctrl.input, d)]


def test_bound_keys_are_consumed(controller):
    assert controller.handle_key(pygame.K_w, True) is True
    assert controller.input.forward is True
    assert controller.handle_key(pygame.K_w, False) is True
    assert controller.input.forward is False


@pytest.mark.parametrize(
    "key, direction",
    [
        (pygame.K_UP, "forward"),
        (pygame.K_s, "backward"),
        (pygame.K_DOWN, "backward"),
        (pygame.K_a, "left"),
        (pygame.K_LEFT, "left"),
        (pygame.K_d, "right"),
        (pygame.K_RIGHT, "right"),
        (pygame.K_SPACE, "up"),
        (pygame.K_LCTRL, "down"),
    ],
)
def test_default_bindings(controller, key, direction):
    assert controller.handle_key(key, True)
    assert pressed(controller) == [direction]


def test_unknown_key_not_consumed(controller):
    assert controller.handle_key(pygame.K_q, True) is False
    assert pressed(controller) == []


def test_custom_bindings():
    ctrl = CameraController(CameraState(1.0), bindings={7: "up"})
    assert ctrl.handle_key(7, True)
    assert ctrl.input.up
    assert not ctrl.handle_key(pygame.K_w, True)


def test_controllers_do_not_share_bindings():
    first = CameraController(CameraState(1.0))
    second = CameraController(CameraState(1.0))
    first.bindings[pygame.K_q] = "up"
    assert first.handle_key(pygame.K_q, True)
    assert not second.handle_key(pygame.K_q, True)
    assert pygame.K_q not in config.KEY_BINDINGS


def test_no_keys_no_motion(controller):
    before = controller.camera.position.to_tuple()
    controller.update()
    assert controller.camera.position.to_tuple() == before


def test_forward_moves_speed_along_view(controller):
    controller.handle_key(pygame.K_w, True)
    before = controller.camera.position.to_tuple()
    controller.update()
    assert displacement(controller, before) == pytest.approx((config.SPEED, 0.0, 0.0))


def test_diagonal_is_not_faster(controller):
    controller.handle_key(pygame.K_w, True)
    controller.handle_key(pygame.K_d, True)
    before = controller.camera.position.to_tuple()
    controller.update()
    dx, dy, dz = displacement(controller, before)
    assert math.sqrt(dx * dx + dy * dy + dz * dz) == pytest.approx(config.SPEED)
    # Bisects forward (+x) and right (+z).
    step = config.SPEED / math.sqrt(2)
    assert (dx, dy, dz) == pytest.approx((step, 0.0, step))


def test_three_directions_still_speed(controller):
    for key in (pygame.K_w, pygame.K_a, pygame.K_SPACE):
        controller.handle_key(key, True)
    before = controller.camera.position.to_tuple()
    controller.update()
    dx, dy, dz = displacement(controller, before)
    assert math.sqrt(dx * dx + dy * dy + dz * dz) == pytest.approx(config.SPEED)


def test_opposite_keys_cancel(controller):
    controller.handle_key(pygame.K_w, True)
    controller.handle_key(pygame.K_s, True)
    before = controller.camera.position.to_tuple()
    controller.update()
    assert controller.camera.position.to_tuple() == before


def test_vertical_uses_world_up_even_when_pitched(controller):
    controller.camera.pitch = 1.0
    controller.handle_key(pygame.K_SPACE, True)
    before = controller.camera.position.to_tuple()
    controller.update()
    assert displacement(controller, before) == pytest.approx((0.0, config.SPEED, 0.0))


def test_speed_comes_from_input_state():
    ctrl = CameraController(CameraState(1.0), InputState(speed=2.0))
    ctrl.handle_key(pygame.K_w, True)
    ctrl.update()
    assert ctrl.camera.position.x == pytest.approx(-3.0)


def test_mouse_scenario(controller):
    controller.handle_mouse_motion(100, 0)
    assert controller.camera.yaw == pytest.approx(0.5)
    controller.handle_mouse_motion(0, 1000)
    assert controller.camera.pitch == -(math.pi / 2 - 0.01)


def test_mouse_up_looks_up(controller):
    controller.handle_mouse_motion(0, -10)
    assert controller.camera.pitch > 0


def test_pitch_stays_clamped_for_any_sequence(controller):
    rng = random.Random(1234)
    for _ in range(2000):
        controller.handle_mouse_motion(rng.uniform(-500, 500), rng.uniform(-800, 800))
        assert -config.MAX_PITCH <= controller.camera.pitch <= config.MAX_PITCH
        assert abs(controller.camera.pitch) < math.pi / 2


def test_yaw_delta_independent_of_updates(controller):
    controller.handle_mouse_motion(10, 0)
    yaw = controller.camera.yaw
    for _ in range(5):
        controller.update()
    assert controller.camera.yaw == yaw

    other = CameraController(CameraState(800 / 600))
    other.handle_mouse_motion(10, 0)
    assert other.camera.yaw == yaw


def test_update_refreshes_matrix(controller):
    controller.update()
    first = controller.camera.view_proj.m
    controller.handle_key(pygame.K_w, True)
    controller.update()
    assert controller.camera.view_proj.m != first


def test_nan_delta_is_not_filtered(controller):
    controller.handle_mouse_motion(math.nan, 0)
    assert math.isnan(controller.camera.yaw)
