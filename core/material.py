from dataclasses import dataclass
from typing import Tuple
from core.geometry import Triangle

# 채널당 8비트 RGB
Color = Tuple[int, int, int]

VOID_COLOR: Color = (30, 30, 30)
GROUND_COLOR: Color = (200, 200, 200)


def make_color(r, g, b) -> Color:
    color = (int(r), int(g), int(b))
    for channel in color:
        if channel < 0 or channel > 255:
            raise ValueError(f"Color channel out of range 0-255: {color}")
    return color


@dataclass(frozen=True)
class ColoredSurface:
    triangle: Triangle
    color: Color

    def __post_init__(self):
        object.__setattr__(self, "color", make_color(*self.color))
