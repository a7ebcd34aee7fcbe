import os
from dataclasses import dataclass, field, replace
from typing import Iterable, Tuple
from core.math import Vec3
from core.geometry import Triangle
from core.material import Color, ColoredSurface, VOID_COLOR


@dataclass
class RenderSettings:
    width: int = 500
    height: int = 500
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive: {self.width}x{self.height}")
        if self.workers <= 0:
            raise ValueError(f"Worker count must be positive: {self.workers}")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Scene:
    """
    한 프레임 동안 읽기 전용으로 공유되는 장면 스냅샷.
    프레임 사이에 카메라를 옮길 때는 with_origin() 으로 새 스냅샷을 만든다.
    """
    origin: Vec3
    sun: Vec3
    ambient_light: float = 0.4
    diffuse_light: float = 0.2
    grid_size: float = 40.0
    surfaces: Tuple[ColoredSurface, ...] = ()
    background: Color = VOID_COLOR

    def __post_init__(self):
        object.__setattr__(self, "surfaces", tuple(self.surfaces))

    def with_origin(self, origin: Vec3) -> "Scene":
        return replace(self, origin=origin)

    def with_surfaces(self, surfaces: Iterable[ColoredSurface]) -> "Scene":
        return replace(self, surfaces=tuple(surfaces))


def colored(triangles: Iterable[Triangle], color: Color) -> Tuple[ColoredSurface, ...]:
    return tuple(ColoredSurface(tri, color) for tri in triangles)
