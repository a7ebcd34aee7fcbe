import sys
from pathlib import Path
from typing import List, Tuple
import numpy as np

from core.math import Vec3, FLOAT_EPS, CollinearVectorsError
from core.material import Color, ColoredSurface, GROUND_COLOR
from core.scene import Scene, colored
from core import shapes


class ObjSceneBuilder:
    """Wavefront OBJ 메쉬를 읽어 바닥 평면과 함께 장면을 만드는 빌더"""

    def __init__(self,
                 path,
                 color: Color = (255, 100, 100),
                 y_offset: float = 10.0,     # 모든 꼭짓점을 아래로 내리는 양
                 ground_size: float = 60.0,
                 ground_color: Color = GROUND_COLOR):
        self.path = Path(path)
        self.color = color
        self.y_offset = y_offset
        self.ground_size = ground_size
        self.ground_color = ground_color

        # 기본 환경 (카메라는 애니메이션 드라이버가 옮긴다)
        self.origin = Vec3(-5, 70, 0)
        self.sun = Vec3(-80, 150, 80)
        self.ambient_light = 0.4
        self.diffuse_light = 0.2
        self.grid_size = 40.0

        self.skipped = 0
        self.max_dim = 0.0

    def build_scene(self) -> Scene:
        surfaces = self.parse_wavefront()
        print(f"OBJ 로드: {self.path.name}, {len(surfaces)} triangles "
              f"(건너뜀 {self.skipped}), 최대 좌표 {self.max_dim:.2f}")
        return Scene(
            origin=self.origin,
            sun=self.sun,
            ambient_light=self.ambient_light,
            diffuse_light=self.diffuse_light,
            grid_size=self.grid_size,
            surfaces=surfaces,
        )

    def read_mesh(self) -> Tuple[np.ndarray, List[Tuple[int, ...]]]:
        """꼭짓점 배열 (n, 3) 과 0 기반 인덱스의 면 목록을 반환"""
        if not self.path.exists():
            raise FileNotFoundError(f"OBJ file not found: {self.path}")

        vertices: List[Tuple[float, float, float]] = []
        faces: List[Tuple[int, ...]] = []
        with self.path.open("r", encoding="utf-8", errors="ignore") as handle:
            for line_no, raw_line in enumerate(handle, start=1):
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                parts = line.split()
                if parts[0] == "v":
                    if len(parts) < 4:
                        raise ValueError(f"{self.path}:{line_no}: vertex needs 3 coordinates")
                    try:
                        vertices.append((float(parts[1]), float(parts[2]), float(parts[3])))
                    except ValueError:
                        raise ValueError(f"{self.path}:{line_no}: bad vertex '{line}'") from None
                elif parts[0] == "f":
                    if len(parts) < 4:
                        raise ValueError(f"{self.path}:{line_no}: face needs at least 3 vertices")
                    faces.append(tuple(self._resolve_index(token, len(vertices), line_no)
                                       for token in parts[1:]))
                # vt, vn, o, g, usemtl 등은 무시

        return np.array(vertices, dtype=np.float64).reshape(-1, 3), faces

    def _resolve_index(self, token: str, vertex_count: int, line_no: int) -> int:
        # "v", "v/vt", "v//vn", "v/vt/vn" 모두 첫 번째 값만 사용
        try:
            idx = int(token.split("/")[0])
        except ValueError:
            raise ValueError(f"{self.path}:{line_no}: bad face index '{token}'") from None
        # 음수 인덱스는 지금까지 읽은 꼭짓점 기준 상대 위치
        resolved = idx - 1 if idx > 0 else vertex_count + idx
        if idx == 0 or resolved < 0 or resolved >= vertex_count:
            raise ValueError(f"{self.path}:{line_no}: face index out of range '{token}'")
        return resolved

    def parse_wavefront(self) -> List[ColoredSurface]:
        vertices, faces = self.read_mesh()
        out: List[ColoredSurface] = []
        self.skipped = 0

        if len(vertices):
            self.max_dim = float(np.abs(vertices).max())
        shifted = vertices - np.array([0.0, self.y_offset, 0.0])
        min_y = min(0.0, float(shifted[:, 1].min())) if len(shifted) else 0.0

        for face in faces:
            # 다각형은 첫 꼭짓점 기준 부채꼴로 삼각형 분할
            for k in range(1, len(face) - 1):
                p1, p2, p3 = (Vec3(*shifted[idx].tolist()) for idx in (face[0], face[k], face[k + 1]))
                try:
                    out.append(ColoredSurface(shapes.triangle(p1, p2, p3), self.color))
                except CollinearVectorsError as e:
                    self.skipped += 1
                    print(f"삼각형 건너뜀: {e}", file=sys.stderr)

        # 가장 낮은 높이 바로 아래에 바닥 평면 추가
        ground = shapes.plane(Vec3(0, min_y - 2.0 * FLOAT_EPS, 0), self.ground_size, self.ground_size)
        out.extend(colored(ground, self.ground_color))
        return out
