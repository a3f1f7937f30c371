"""
Packed 32-bit colors.

A color is stored as a single integer whose little-endian bytes are
`[B, G, R, A]`, so `R` lives in bits 16-23 and the alpha (or unused) byte
in bits 24-31. This matches the layout most window/framebuffer libraries
expect for `0x00RRGGBB` pixels.
"""

from typing import Self, TypeAlias

ColorLike: TypeAlias = int | tuple[int, int, int] | tuple[int, int, int, int] | str


class Color(int):
    """A packed `0xAARRGGBB` color value.

    `Color` is an `int`, so it can be written into a pixel buffer as is
    and compares equal to the raw packed value.
    """

    def __new__(cls, value: int = 0) -> Self:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"packed color out of range: {value:#x}")
        return super().__new__(cls, value)

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> Self:
        return cls.rgba(r, g, b, 0)

    @classmethod
    def rgba(cls, r: int, g: int, b: int, a: int) -> Self:
        for channel in (r, g, b, a):
            if not 0 <= channel <= 0xFF:
                raise ValueError(f"color channel out of range: {channel}")
        return cls(int.from_bytes(bytes((b, g, r, a)), "little"))

    @classmethod
    def gray(cls, c: int) -> Self:
        return cls.rgb(c, c, c)

    def to_rgb(self) -> tuple[int, int, int]:
        b, g, r, _ = int(self).to_bytes(4, "little")
        return r, g, b

    def to_rgba(self) -> tuple[int, int, int, int]:
        b, g, r, a = int(self).to_bytes(4, "little")
        return r, g, b, a

    @property
    def alpha(self) -> int:
        return (self >> 24) & 0xFF

    def __repr__(self) -> str:
        return f"Color(0x{int(self):08x})"

    __str__ = __repr__

    # Named colors, filled in below the class body.
    BLACK: "Color"
    GRAY: "Color"
    WHITE: "Color"
    LIGHT_GRAY: "Color"
    RED: "Color"
    DARK_RED: "Color"
    GREEN: "Color"
    DARK_GREEN: "Color"
    BLUE: "Color"
    DARK_BLUE: "Color"
    CYAN: "Color"
    TEAL: "Color"
    MAGENTA: "Color"
    PURPLE: "Color"
    YELLOW: "Color"
    OLIVE: "Color"
    BROWN: "Color"
    GOLD: "Color"
    INDIGO: "Color"
    SKY_BLUE: "Color"


Color.BLACK = Color.rgb(0, 0, 0)
Color.GRAY = Color.rgb(128, 128, 128)
Color.WHITE = Color.rgb(255, 255, 255)
Color.LIGHT_GRAY = Color.rgb(192, 192, 192)
Color.RED = Color.rgb(255, 0, 0)
Color.DARK_RED = Color.rgb(128, 0, 0)
Color.GREEN = Color.rgb(0, 255, 0)
Color.DARK_GREEN = Color.rgb(0, 128, 0)
Color.BLUE = Color.rgb(0, 0, 255)
Color.DARK_BLUE = Color.rgb(0, 0, 128)
Color.CYAN = Color.rgb(0, 255, 255)
Color.TEAL = Color.rgb(0, 128, 128)
Color.MAGENTA = Color.rgb(255, 0, 255)
Color.PURPLE = Color.rgb(128, 0, 128)
Color.YELLOW = Color.rgb(255, 255, 0)
Color.OLIVE = Color.rgb(128, 128, 0)
Color.BROWN = Color.rgb(165, 42, 42)
Color.GOLD = Color.rgb(255, 215, 0)
Color.INDIGO = Color.rgb(75, 0, 130)
Color.SKY_BLUE = Color.rgb(135, 205, 250)


def to_color(value: ColorLike) -> Color:
    """Convert any supported color representation to a `Color`.

    - `Color` or `int`: raw packed value (`0xAARRGGBB`)
    - `(r, g, b)` or `(r, g, b, a)`: channel bytes
    - `"#rrggbb"` or `"#rrggbbaa"`: hex string
    """
    match value:
        case Color():
            return value
        case bool():
            raise TypeError("bool is not a color")
        case int():
            return Color(value)
        case (r, g, b):
            return Color.rgb(r, g, b)
        case (r, g, b, a):
            return Color.rgba(r, g, b, a)
        case str() if value.startswith("#") and len(value) in (7, 9):
            channels = [int(value[i : i + 2], 16) for i in range(1, len(value), 2)]
            return Color.rgba(*channels) if len(channels) == 4 else Color.rgb(*channels)
        case _:
            raise TypeError(f"Can not convert {value!r} to a color")
