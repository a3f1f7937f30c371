#!/usr/bin/env python
import logging
from typing import cast

import jsonargparse

from .color import Color
from .draw import PixelCanvas
from .pixel_access import AlphaBlendWriter
from .ppm import save_image
from .render_config import RenderConfig
from .scene import Scene, SceneDrawer, load_scene

logger = logging.getLogger()


def render(config: RenderConfig) -> PixelCanvas:
    """Render the scene and commands described by `config`."""
    scene = load_scene(config.scene) if config.scene else Scene()
    if config.scene is None:
        scene.background = Color(config.background)
    if config.width is not None:
        scene.width = config.width
    if config.height is not None:
        scene.height = config.height
    scene.commands.extend(config.commands)

    drawer = SceneDrawer(writer=AlphaBlendWriter() if config.blend else None)
    return drawer.render(scene)


def main():
    jsonargparse.set_parsing_settings(docstring_parse_attribute_docstrings=True)

    args = cast(
        "RenderConfig",
        jsonargparse.auto_cli(RenderConfig),  # pyright: ignore[reportUnknownMemberType]
    )

    logger.info(f"Rendering {args.scene or 'empty scene'}")
    canvas = render(args)
    save_image(canvas, args.output)


if __name__ == "__main__":
    main()
