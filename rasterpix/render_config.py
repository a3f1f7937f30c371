from dataclasses import dataclass, field
from pathlib import Path


class HexInt(int):
    def __repr__(self) -> str:  # used in help default printing
        return f"{int(self):06x}"

    __str__ = __repr__


@dataclass
class RenderConfig:
    scene: Path | None = None
    """YAML scene file to render"""

    output: Path = Path("out.png")
    """Image to write, .ppm is encoded directly, other formats use Pillow"""

    width: int | None = None
    """Canvas width, overrides the scene"""
    height: int | None = None
    """Canvas height, overrides the scene"""

    background: int = HexInt(0x000000)
    """Background color when the scene sets none"""

    commands: list[str] = field(default_factory=list[str])
    """Drawing commands applied after the scene, e.g. 'circle 32 32 10 0xff0000'"""

    blend: bool = False
    """Alpha blend drawing colors (0xAARRGGBB) instead of overwriting"""
