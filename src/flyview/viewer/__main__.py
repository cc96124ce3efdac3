from __future__ import annotations

import argparse
import logging

import pygame
from OpenGL.error import GLError

from . import config
from .events import FrameTick, KeyInput, Resized
from .frame import ViewerContext, dispatch
from .pg_events import translate_event
from .scene import advance_instances, default_instances, pack_instances
from .texture import diffuse_source

logger = logging.getLogger("flyview")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="flyview", add_help=True)
    parser.add_argument("--width", type=int, default=config.WIDTH, help="Initial window width.")
    parser.add_argument("--height", type=int, default=config.HEIGHT, help="Initial window height.")
    parser.add_argument("--texture", default=None, help="Image file for the cube (default: checkerboard).")
    parser.add_argument("--fps", type=int, default=config.FPS_LIMIT, help="Frame rate cap.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    pygame.display.set_mode(
        (args.width, args.height), pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE
    )
    pygame.display.set_caption(config.TITLE)
    logger.info("window %dx%d created", args.width, args.height)

    # GL calls need the context from set_mode.
    from .gl_draw import Renderer

    renderer = Renderer(diffuse_source(args.texture))
    renderer.resize(args.width, args.height)

    ctx = ViewerContext(args.width, args.height)
    instances = default_instances()

    clock = pygame.time.Clock()
    pygame.mouse.set_visible(False)
    pygame.event.set_grab(True)

    while ctx.running:
        for pg_event in pygame.event.get():
            event = translate_event(pg_event)
            if event is None:
                continue
            if isinstance(event, KeyInput) and event.pressed and event.code in config.QUIT_KEYS:
                logger.info("escape pressed")
                ctx.running = False
                break
            if isinstance(event, Resized):
                logger.info("resizing window to %dx%d", event.width, event.height)
                renderer.resize(event.width, event.height)
            dispatch(ctx, event)
        if not ctx.running:
            break

        snap = dispatch(ctx, FrameTick())
        advance_instances(instances)
        try:
            renderer.upload_camera(snap)
            renderer.upload_instances(pack_instances(instances))
            renderer.draw()
        except GLError as e:
            logger.error("rendering failed: %s", e)
        pygame.display.flip()

        clock.tick(args.fps)

    logger.info("closing window")
    pygame.quit()


if __name__ == "__main__":
    main()
