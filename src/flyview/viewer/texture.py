from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pygame

from . import config

logger = logging.getLogger(__name__)


def checkerboard(
    size: int = config.CHECKER_SIZE,
    tiles: int = config.CHECKER_TILES,
    colors=config.CHECKER_COLORS,
) -> np.ndarray:
    """(size, size, 4) uint8 RGBA checkerboard."""
    cell = max(1, size // max(1, tiles))
    yy, xx = np.indices((size, size))
    odd = ((xx // cell) + (yy // cell)) % 2 == 1
    img = np.empty((size, size, 4), dtype=np.uint8)
    img[..., :3] = colors[0]
    img[odd, :3] = colors[1]
    img[..., 3] = 255
    return img


def load_rgba(path: str | Path) -> tuple[int, int, bytes]:
    """Read an image file into (width, height, RGBA bytes), flipped for GL."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"texture not found: {p}")
    surf = pygame.image.load(str(p))
    w, h = surf.get_size()
    return w, h, pygame.image.tobytes(surf, "RGBA", True)


def diffuse_source(path: str | Path | None = None) -> tuple[int, int, bytes]:
    if path is not None:
        logger.info("loading texture %s", path)
        return load_rgba(path)
    logger.info("no texture given, using generated checkerboard")
    img = checkerboard()
    # GL's first row is the bottom of the image.
    return img.shape[1], img.shape[0], np.ascontiguousarray(img[::-1]).tobytes()
