import math
import numpy as np

FLOAT_EPS = 1e-8


def is_zero(f: float) -> bool:
    return abs(f) <= FLOAT_EPS


class CollinearVectorsError(ValueError):
    """세 점(또는 두 벡터)이 평면을 만들지 못할 때 발생"""

    def __init__(self, v1=None, v2=None):
        self.v1 = v1
        self.v2 = v2
        if v1 is None or v2 is None:
            super().__init__("collinear vectors")
        else:
            super().__init__(f"collinear vectors: {v1!r}, {v2!r}")


class Vec3:
    __slots__ = ("x", "y", "z")

    def __init__(self, x=0.0, y=0.0, z=0.0):
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))
        object.__setattr__(self, "z", float(z))

    def __setattr__(self, name, value):
        raise AttributeError("Vec3 is immutable")

    def __reduce__(self):
        return (Vec3, (self.x, self.y, self.z))

    @staticmethod
    def between(a: "Vec3", b: "Vec3") -> "Vec3":
        # a 에서 b 로 향하는 벡터
        return Vec3(b.x - a.x, b.y - a.y, b.z - a.z)

    def __add__(self, other):
        return Vec3(self.x + other.x,
                    self.y + other.y,
                    self.z + other.z)

    def __sub__(self, other):
        return Vec3(self.x - other.x,
                    self.y - other.y,
                    self.z - other.z)

    def __mul__(self, t):
        # 스칼라 곱만 지원
        if isinstance(t, Vec3):
            return NotImplemented
        return Vec3(self.x * t, self.y * t, self.z * t)

    __rmul__ = __mul__

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def __getitem__(self, axis: int) -> float:
        if axis == 0:
            return self.x
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        raise IndexError(f"Vec3 axis out of range: {axis}")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def dot(self, other):
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        # 가운데 성분은 부호를 뒤집은 형태로 계산 (삼각형 내부 판정이 이 순서에 의존)
        return Vec3(
            (self.y * other.z - self.z * other.y),
            -(self.x * other.z - self.z * other.x),
            (self.x * other.y - self.y * other.x)
        )

    def length(self):
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self):
        if self.is_zero():
            return Vec3(0, 0, 0)
        l = self.length()
        return Vec3(self.x / l, self.y / l, self.z / l)

    def cos(self, other) -> float:
        denom = self.length() * other.length()
        if denom == 0:
            return 0.0
        return self.dot(other) / denom

    def is_zero(self) -> bool:
        return is_zero(self.x) and is_zero(self.y) and is_zero(self.z)

    def is_collinear(self, other) -> bool:
        return self.cross(other).is_zero()

    def is_codirectional(self, other) -> bool:
        return (self.is_collinear(other)
                and self.x * other.x >= -FLOAT_EPS
                and self.y * other.y >= -FLOAT_EPS
                and self.z * other.z >= -FLOAT_EPS)

    def to_np(self):
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __repr__(self):
        return f"Vec3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


# 점과 벡터는 같은 표현을 쓰고 용도로만 구분한다
Point = Vec3
Vector = Vec3

AXIS_X = Vec3(1, 0, 0)
AXIS_Y = Vec3(0, 1, 0)
AXIS_Z = Vec3(0, 0, 1)


class Ray:
    def __init__(self, origin: Vec3, direction: Vec3):
        # direction 은 정규화하지 않는다: t 는 direction 길이 단위
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Vec3:
        return self.origin + t * self.direction

    def __repr__(self):
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"
