from abc import ABC, abstractmethod
from typing import Optional, Tuple
from core.math import Vec3, Point, Vector, Ray, CollinearVectorsError, is_zero


class Hittable(ABC):
    @abstractmethod
    def intersect(self, ray: Ray) -> Optional[float]:
        """광선 파라미터 t 를 반환, 교차하지 않으면 None"""
        pass

    @abstractmethod
    def contains(self, pt: Point) -> bool:
        pass


class Plane(Hittable):
    """a*x + b*y + c*z + d = 0 형태의 무한 평면"""

    def __init__(self, p: Point, v1: Vector, v2: Vector):
        n = v1.cross(v2)
        if n.is_zero():
            raise CollinearVectorsError(v1, v2)
        # 법선은 정규화하지 않은 외적 그대로 사용
        self.a = n.x
        self.b = n.y
        self.c = n.z
        self.d = -(n.x * p.x + n.y * p.y + n.z * p.z)

    def intersect(self, ray: Ray) -> Optional[float]:
        direction, origin = ray.direction, ray.origin
        sum_t = self.a * direction.x + self.b * direction.y + self.c * direction.z
        sum_rhs = -self.d - self.a * origin.x - self.b * origin.y - self.c * origin.z
        if is_zero(sum_t):
            return None  # 광선과 평면이 평행 (평면 위에 놓인 경우 포함)
        return sum_rhs / sum_t

    def contains(self, pt: Point) -> bool:
        return is_zero(self.subs(pt))

    def subs(self, pt: Point) -> float:
        return self.a * pt.x + self.b * pt.y + self.c * pt.z + self.d

    def normal(self) -> Vector:
        return Vec3(self.a, self.b, self.c)

    def coefficients(self) -> Tuple[float, float, float, float]:
        return self.a, self.b, self.c, self.d

    def __repr__(self):
        return f"Plane({self.a:.3f}, {self.b:.3f}, {self.c:.3f}, {self.d:.3f})"


class Triangle(Hittable):
    def __init__(self, p1: Point, p2: Point, p3: Point):
        self.plane = Plane(p1, Vec3.between(p1, p2), Vec3.between(p1, p3))
        self.vertices = (p1, p2, p3)

    def intersect(self, ray: Ray) -> Optional[float]:
        t = self.plane.intersect(ray)
        if t is None:
            return None
        if self.is_inside(ray.at(t)):
            return t
        return None

    def contains(self, pt: Point) -> bool:
        return self.plane.contains(pt) and self.is_inside(pt)

    def is_inside(self, pt: Point) -> bool:
        """
        각 꼭짓점마다 (꼭짓점→pt) × (꼭짓점→다음 꼭짓점) 을 구해서,
        지금까지의 합과 같은 방향인지 확인한다. 모두 같은 방향이면 내부.
        변/꼭짓점 위의 점은 영벡터가 나오므로 내부로 취급된다.
        """
        last = Vec3()
        for pos, vertex in enumerate(self.vertices):
            next_vertex = self.vertices[(pos + 1) % 3]
            v = Vec3.between(vertex, pt).cross(Vec3.between(vertex, next_vertex))
            if not v.is_codirectional(last):
                return False
            last = v + last
        return True

    def centroid(self) -> Point:
        p1, p2, p3 = self.vertices
        return Vec3((p1.x + p2.x + p3.x) / 3.0,
                    (p1.y + p2.y + p3.y) / 3.0,
                    (p1.z + p2.z + p3.z) / 3.0)

    def __repr__(self):
        return f"Triangle{self.vertices!r}"
