"""
Scenes: YAML shape lists and text drawing commands.

A scene file looks like:

    width: 160
    height: 96
    background: "#000000"
    shapes:
      - type: rect
        x: 10
        y: 10
        width: 40
        height: 20
        fill: 0xff0000
        outline: [255, 255, 255]
        thickness: 2
    commands:
      - fill 80 50 0x00ff00
"""

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import Any, Literal, cast

import yaml

from .color import Color, ColorLike, to_color
from .draw import PixelCanvas
from .errors import SceneError
from .pixel_access import PixelWriter
from .shape import Circle, Ellipse, Line, Rectangle, Shape, Triangle

logger = getLogger(__name__)

Command = Literal[
    "size",
    "clear",
    "pixel",
    "line",
    "rect",
    "frame",
    "circle",
    "ring",
    "ellipse",
    "oval",
    "triangle",
    "fill",
]

SHAPES: dict[str, type[Shape]] = {
    "rect": Rectangle,
    "circle": Circle,
    "ellipse": Ellipse,
    "triangle": Triangle,
    "line": Line,
}

# scene keys that are style, not geometry
_STYLE_KEYS = {"fill": "fill_color", "outline": "outline_color", "thickness": "outline_thickness"}


@dataclass
class Scene:
    width: int = 160
    height: int = 96
    background: Color = Color.BLACK
    shapes: list[Shape] = field(default_factory=list[Shape])
    commands: list[str] = field(default_factory=list[str])


def _parse_color(value: Any) -> Color:
    if isinstance(value, list):
        value = tuple(cast(list[int], value))
    try:
        return to_color(cast(ColorLike, value))
    except (TypeError, ValueError) as e:
        raise SceneError(f"Bad color {value!r}: {e}") from e


def parse_shape(entry: dict[str, Any]) -> Shape:
    """Turn one `shapes:` entry into a `Shape`."""
    entry = dict(entry)
    kind = entry.pop("type", None)
    cls = SHAPES.get(str(kind))
    if cls is None:
        raise SceneError(f"Unknown shape type {kind!r}")

    kwargs: dict[str, Any] = {}
    for key, value in entry.items():
        name = _STYLE_KEYS.get(key, key)
        if name in ("fill_color", "outline_color") and value is not None:
            value = _parse_color(value)
        kwargs[name] = value
    kwargs.setdefault("fill_color", None)

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise SceneError(f"Bad {kind} entry {entry}: {e}") from e


def load_scene(source: Path | str) -> Scene:
    """Load a scene from a YAML file path or YAML text."""
    if isinstance(source, Path):
        with open(source, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    else:
        data = yaml.safe_load(source)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SceneError("Scene must be a mapping")
    data = cast(dict[str, Any], data)

    scene = Scene()
    scene.width = int(data.get("width", scene.width))
    scene.height = int(data.get("height", scene.height))
    if "background" in data:
        scene.background = _parse_color(data["background"])
    scene.shapes = [parse_shape(entry) for entry in data.get("shapes") or []]
    scene.commands = [str(c) for c in data.get("commands") or []]
    logger.info(
        f"Loaded {scene.width}x{scene.height} scene with {len(scene.shapes)} shapes"
    )
    return scene


class SceneDrawer:
    def __init__(
        self, width: int = 160, height: int = 96, writer: PixelWriter | None = None
    ):
        self.writer: PixelWriter | None = writer
        self.pcanvas: PixelCanvas = PixelCanvas(width, height, writer)

    def render(self, scene: Scene) -> PixelCanvas:
        # the background is stored as is, the writer only applies to drawing
        self.pcanvas = PixelCanvas(scene.width, scene.height)
        self.pcanvas.clear(scene.background)
        if self.writer is not None:
            self.pcanvas.writer = self.writer
        for shape in scene.shapes:
            self.pcanvas.draw(shape)
        for command in scene.commands:
            self.add_text_command(command)
        return self.pcanvas

    def add_text_command(self, s: str) -> bool:
        """Run one drawing command. Returns True if the canvas was drawn on."""
        parts = s.split()
        if not parts:
            return False
        try:
            cmd, args = cast("Command", parts[0]), [int(a, 0) for a in parts[1:]]
        except ValueError:
            logger.warning(f"Bad arguments in cmd '{s}'")
            return False

        try:
            return self._run(cmd, args)
        except ValueError as e:
            logger.warning(f"Bad arguments in cmd '{s}': {e}")
            return False

    def _run(self, cmd: "Command", args: list[int]) -> bool:
        c = self.pcanvas
        match cmd:
            case "size" if len(args) == 2:
                c = self.pcanvas = PixelCanvas(args[0], args[1], self.writer)
                return False
            case "clear":
                c.clear(args[0] if args else 0)
            case "pixel" if len(args) == 3:
                c.set_pixel(*args)
            case "line" if len(args) == 5:
                c.line_maybe_axis_aligned(*args)
            case "line" if len(args) == 6:
                x1, y1, x2, y2, col, thickness = args
                c.thick_line_maybe_axis_aligned(x1, y1, x2, y2, thickness, col)
            case "rect" if len(args) == 5:
                c.fill_rect(*args)
            case "frame" if len(args) in (5, 6):
                x, y, w, h, col, *rest = args
                c.thick_outline_rect(x, y, w, h, rest[0] if rest else 1, col)
            case "circle" if len(args) == 4:
                c.fill_circle(*args)
            case "ring" if len(args) in (4, 5):
                x, y, r, col, *rest = args
                c.thick_outline_circle(x, y, r, rest[0] if rest else 1, col)
            case "ellipse" if len(args) == 5:
                c.fill_ellipse(*args)
            case "oval" if len(args) in (5, 6):
                x, y, a, b, col, *rest = args
                c.thick_outline_ellipse(x, y, a, b, rest[0] if rest else 1, col)
            case "triangle" if len(args) == 7:
                c.fill_triangle(*args)
            case "fill" if len(args) == 3:
                c.flood_fill(*args)
            case _:
                logger.warning(f"Unhandled cmd '{cmd}' with {len(args)} arguments")
                return False
        return True
