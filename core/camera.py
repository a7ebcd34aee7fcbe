from core.math import Vec3, Ray, AXIS_Y, CollinearVectorsError


def interpolated(cur: int, maximum: int) -> float:
    # 픽셀 좌표를 [-1, 1] 범위로 변환
    return 2.0 * (cur / maximum) - 1.0


class Camera:
    """
    원점(월드 중심)을 바라보는 핀홀 카메라.
    화면 평면은 월드 중심을 지나고, 반폭은 grid_size.
    """

    def __init__(self,
                 origin: Vec3,       # 카메라 위치
                 grid_size: float,   # 화면 평면의 반 크기 (줌)
                 width: int,
                 height: int):
        self.origin = origin
        self.grid_size = grid_size
        self.width = width
        self.height = height

        self.vx = origin.cross(AXIS_Y).normalized()
        self.vy = origin.cross(self.vx).normalized()
        if self.vx.is_zero() or self.vy.is_zero():
            # 카메라가 수직축 위에 있으면 화면 기저를 만들 수 없다
            raise CollinearVectorsError(origin, AXIS_Y)

    def get_ray(self, col: int, row: int) -> Ray:
        pt = (Vec3()
              + (interpolated(col, self.width) * self.grid_size) * self.vx
              + (interpolated(row, self.height) * self.grid_size) * self.vy)
        return Ray(self.origin, Vec3.between(self.origin, pt))

    def get_ray_for_index(self, index: int) -> Ray:
        # 행 우선(row-major) 버퍼의 선형 인덱스
        row, col = divmod(index, self.width)
        return self.get_ray(col, row)
