from __future__ import annotations

import math

import pygame

# Window
WIDTH = 800
HEIGHT = 600
TITLE = "flyview"
FPS_LIMIT = 60
CLEAR_COLOR = (25, 51, 76)

# Projection
FOV_Y = math.pi / 4
Z_NEAR = 0.1
Z_FAR = 100.0
# Floor for width / height when the window collapses to zero height.
MIN_ASPECT = 1e-6
# GL clip space is z in [-w, w]. Set for backends that expect [0, w].
DEPTH_ZERO_TO_ONE = False

# Camera
START_POS = (-5.0, 0.0, 0.0)
START_YAW = 0.0
START_PITCH = 0.0
WORLD_UP = (0.0, 1.0, 0.0)
SPEED = 0.1  # units per frame tick
MOUSE_SENSITIVITY = 0.005  # radians per mouse unit
PITCH_EPSILON = 0.01
MAX_PITCH = math.pi / 2 - PITCH_EPSILON

# Key code -> movement direction.
KEY_BINDINGS = {
    pygame.K_w: "forward",
    pygame.K_UP: "forward",
    pygame.K_s: "backward",
    pygame.K_DOWN: "backward",
    pygame.K_a: "left",
    pygame.K_LEFT: "left",
    pygame.K_d: "right",
    pygame.K_RIGHT: "right",
    pygame.K_SPACE: "up",
    pygame.K_LCTRL: "down",
}
QUIT_KEYS = (pygame.K_ESCAPE,)

# Scene
INSTANCE_POSITIONS = ((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
INSTANCE_SLIDE_STEP = 0.1
INSTANCE_SLIDE_WRAP = 10.0
CHECKER_SIZE = 256
CHECKER_TILES = 8
CHECKER_COLORS = ((230, 230, 230), (60, 140, 90))
