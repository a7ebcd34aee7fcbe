"""꼭짓점들로부터 삼각형 묶음을 만드는 도우미 함수들"""
from typing import List, Tuple
from core.math import Vec3, Point
from core.geometry import Triangle


def triangle(p1: Point, p2: Point, p3: Point) -> Triangle:
    return Triangle(p1, p2, p3)


def quad(p1: Point, p2: Point, p3: Point, p4: Point) -> Tuple[Triangle, Triangle]:
    # p1, p2 는 대각선의 양 끝
    return triangle(p1, p2, p3), triangle(p1, p2, p4)


def plane(center: Point, length: float, width: float) -> Tuple[Triangle, Triangle]:
    """center 를 중심으로 하는 수평(XZ) 사각형"""
    half_l = length / 2.0
    half_w = width / 2.0
    p1 = center + Vec3(half_l, 0, half_w)
    p2 = center + Vec3(-half_l, 0, -half_w)
    return quad(p1, p2,
                center + Vec3(half_l, 0, -half_w),
                center + Vec3(-half_l, 0, half_w))


def tetrahedron(p1: Point, p2: Point, p3: Point, h: Point) -> List[Triangle]:
    return [
        triangle(p1, p2, h),
        triangle(p2, p3, h),
        triangle(p3, p1, h),
        triangle(p1, p2, p3),
    ]


def cube(center: Point, size: float) -> List[Triangle]:
    half = size / 2.0
    # 면 위의 네 점: 0,1 이 대각선, 2,3 이 나머지 대각선
    corners = [(-half, -half), (half, half), (half, -half), (-half, half)]
    out: List[Triangle] = []
    for dim in range(3):
        d1, d2 = [i for i in range(3) if i != dim]
        for side in (-1, 1):
            vs = []
            for ds1, ds2 in corners:
                diff = [0.0, 0.0, 0.0]
                diff[dim] = side * half
                diff[d1] = ds1
                diff[d2] = ds2
                vs.append(center + Vec3(*diff))
            out.extend(quad(vs[0], vs[1], vs[2], vs[3]))
    return out
