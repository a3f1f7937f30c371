"""
Image export.

PPM (`P6`) is simple enough to write directly and most viewers (and web
browsers) open it. Other formats go through Pillow.
"""

import array
import sys
from collections.abc import Sequence
from logging import getLogger
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from .draw import PixelCanvas

logger = getLogger(__name__)

# Raw byte order of one packed pixel in memory, as Pillow's raw decoder names it
_RAW_MODE = "BGRX" if sys.byteorder == "little" else "XRGB"


def _to_bytes(buffer: Sequence[int]) -> bytes:
    if isinstance(buffer, array.array) and buffer.itemsize == 4:
        return buffer.tobytes()
    return array.array("I", buffer).tobytes()


def to_image(canvas: PixelCanvas) -> Image.Image:
    """Return the canvas as a Pillow RGB image (alpha byte dropped)."""
    return buffer_to_image(canvas.array, canvas.width, canvas.height)


def buffer_to_image(buffer: Sequence[int], width: int, height: int) -> Image.Image:
    return Image.frombytes(
        "RGB", (width, height), _to_bytes(buffer), "raw", _RAW_MODE
    )


def encode_buffer(
    buffer: Sequence[int], width: int, height: int, stream: BinaryIO
) -> None:
    """Write `buffer` to `stream` as a binary PPM.

    The header is a single line `P6 {width} {height} 255`, followed by
    `width * height * 3` bytes of R, G, B in row-major order.
    """
    stream.write(f"P6 {width} {height} 255\n".encode("ascii"))
    if width * height:
        stream.write(buffer_to_image(buffer, width, height).tobytes())


def encode_canvas(canvas: PixelCanvas, stream: BinaryIO) -> None:
    encode_buffer(canvas.array, canvas.width, canvas.height, stream)


def save_image(canvas: PixelCanvas, path: Path | str) -> Path:
    """Save the canvas to `path`. `.ppm` is written directly, any other
    extension is handed to Pillow."""
    path = Path(path)
    if path.suffix.lower() == ".ppm":
        with open(path, "wb") as f:
            encode_canvas(canvas, f)
    else:
        to_image(canvas).save(path)
    logger.info(f"Saved {canvas.width}x{canvas.height} image to {path}")
    return path
