"""
Pixel write policies.

Every write the canvas makes goes through a `PixelWriter`, chosen when the
canvas is created. `OverwriteWriter` stores colors as they are;
`AlphaBlendWriter` mixes them over what is already in the buffer.
"""

import array
from collections.abc import MutableSequence
from typing import Protocol

from typing_extensions import override


class PixelWriter(Protocol):
    def write(self, buffer: MutableSequence[int], index: int, color: int) -> None: ...

    def fill(
        self, buffer: MutableSequence[int], start: int, stop: int, color: int
    ) -> None:
        """Write `color` to `buffer[start:stop]`."""
        ...


class OverwriteWriter(PixelWriter):
    @override
    def write(self, buffer: MutableSequence[int], index: int, color: int) -> None:
        buffer[index] = color

    @override
    def fill(
        self, buffer: MutableSequence[int], start: int, stop: int, color: int
    ) -> None:
        if stop <= start:
            return
        if isinstance(buffer, array.array):
            buffer[start:stop] = array.array(buffer.typecode, [color]) * (stop - start)
        else:
            buffer[start:stop] = [color] * (stop - start)


def blend(dst: int, src: int) -> int:
    """Blend `src` over `dst` using the alpha byte of `src` as opacity.

    The alpha byte of `dst` is kept.
    """
    alpha = (src >> 24) & 0xFF
    if alpha == 0xFF:
        return (dst & 0xFF000000) | (src & 0xFFFFFF)
    if alpha == 0:
        return dst
    inv = 0xFF - alpha
    out = dst & 0xFF000000
    for shift in (0, 8, 16):
        s = (src >> shift) & 0xFF
        d = (dst >> shift) & 0xFF
        out |= ((s * alpha + d * inv + 127) // 255) << shift
    return out


class AlphaBlendWriter(PixelWriter):
    """Blends colors made with `Color.rgba` over the existing pixels.

    Colors made with `Color.rgb` have an alpha byte of 0 and are therefore
    fully transparent under this policy.
    """

    @override
    def write(self, buffer: MutableSequence[int], index: int, color: int) -> None:
        buffer[index] = blend(buffer[index], color)

    @override
    def fill(
        self, buffer: MutableSequence[int], start: int, stop: int, color: int
    ) -> None:
        for i in range(start, stop):
            buffer[i] = blend(buffer[i], color)
