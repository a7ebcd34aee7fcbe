from typing import List
from core.math import Vec3
from core.material import ColoredSurface
from core.scene import Scene, colored
from core import shapes


class DemoSceneBuilder:
    """메쉬 파일 없이 쓸 수 있는 기본 장면: 바닥, 떠 있는 삼각형, 사면체, 정육면체"""

    def __init__(self):
        self.origin = Vec3(-5, 3, 1.25)
        self.sun = Vec3(0, 5, 0)
        self.ambient_light = 0.4
        self.diffuse_light = 0.2
        self.grid_size = 3.0

        self.ground_size = 5.0

    def build_scene(self) -> Scene:
        return Scene(
            origin=self.origin,
            sun=self.sun,
            ambient_light=self.ambient_light,
            diffuse_light=self.diffuse_light,
            grid_size=self.grid_size,
            surfaces=self.build_surfaces(),
        )

    def build_surfaces(self) -> List[ColoredSurface]:
        surfaces: List[ColoredSurface] = []

        # 바닥
        ground = shapes.plane(Vec3(0.3, 0, 0), self.ground_size, self.ground_size)
        surfaces.extend(colored(ground, (0, 255, 0)))

        # 사면체
        tetra = shapes.tetrahedron(Vec3(-1, 0, 0.25), Vec3(1, 0, 0.25),
                                   Vec3(-1, 0, 2.25), Vec3(0, 1, 1.25))
        surfaces.extend(colored(tetra, (0, 0, 255)))

        # 정육면체
        surfaces.extend(colored(shapes.cube(Vec3(0.25, 0.5, -0.8), 1.0), (255, 0, 0)))

        # 태양 아래 떠 있는 삼각형
        hanging = shapes.triangle(Vec3(-0.5, 2.5, -0.5), Vec3(0.5, 2.5, -0.5), Vec3(0, 2.5, 0.5))
        surfaces.extend(colored([hanging], (255, 200, 0)))

        return surfaces
