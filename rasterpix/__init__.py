"""Software rasterizer drawing into a flat packed-color pixel buffer."""

from .color import Color, to_color
from .draw import PixelCanvas
from .errors import RasterError, SceneError, SizeMismatchError
from .pen import Pen, PenState
from .pixel_access import AlphaBlendWriter, OverwriteWriter, PixelWriter
from .ppm import encode_buffer, encode_canvas, save_image, to_image
from .shape import Circle, Ellipse, Line, Rectangle, Triangle

__all__ = [
    "AlphaBlendWriter",
    "Circle",
    "Color",
    "Ellipse",
    "Line",
    "OverwriteWriter",
    "Pen",
    "PenState",
    "PixelCanvas",
    "PixelWriter",
    "RasterError",
    "Rectangle",
    "SceneError",
    "SizeMismatchError",
    "Triangle",
    "encode_buffer",
    "encode_canvas",
    "save_image",
    "to_color",
    "to_image",
]
