import pytest

from core.math import Vec3, Ray, CollinearVectorsError, FLOAT_EPS
from core.geometry import Plane, Triangle


def _floor_triangle():
    return Triangle(Vec3(0, 0, 0), Vec3(4, 0, 0), Vec3(0, 0, 4))


def _assert_close(a: Vec3, b: Vec3, tol=1e-8):
    assert (a - b).length() <= tol, f"{a!r} != {b!r}"


def test_plane_rejects_collinear_vectors():
    with pytest.raises(CollinearVectorsError):
        Plane(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(2, 0, 0))
    with pytest.raises(ValueError):
        Plane(Vec3(1, 1, 1), Vec3(0, 0, 0), Vec3(0, 1, 0))


def test_plane_accepts_tiny_but_valid_span():
    plane = Plane(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 0, 1e-3))
    assert not plane.normal().is_zero()


def test_plane_coefficients_pass_through_point():
    plane = Plane(Vec3(1, 2, 3), Vec3(1, 0, 0), Vec3(0, 1, 0))
    assert plane.normal() == Vec3(0, 0, 1)
    assert plane.subs(Vec3(1, 2, 3)) == pytest.approx(0.0)
    assert plane.contains(Vec3(-7, 11, 3))
    assert not plane.contains(Vec3(1, 2, 3.001))


def test_plane_intersect_returns_signed_parameter():
    plane = Plane(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 0, 1))
    assert plane.intersect(Ray(Vec3(0, 5, 0), Vec3(0, -1, 0))) == pytest.approx(5.0)
    assert plane.intersect(Ray(Vec3(0, 5, 0), Vec3(0, -2, 0))) == pytest.approx(2.5)
    # 평면이 광선 뒤에 있으면 음수
    assert plane.intersect(Ray(Vec3(0, 5, 0), Vec3(0, 1, 0))) == pytest.approx(-5.0)


def test_plane_intersect_parallel_ray_is_none():
    plane = Plane(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 0, 1))
    assert plane.intersect(Ray(Vec3(0, 1, 0), Vec3(1, 0, 1))) is None
    # 평면 위에 놓인 광선도 교차 없음
    assert plane.intersect(Ray(Vec3(0, 0, 0), Vec3(1, 0, 0))) is None


def test_triangle_rejects_degenerate_points():
    with pytest.raises(CollinearVectorsError):
        Triangle(Vec3(0, 0, 0), Vec3(1, 1, 1), Vec3(2, 2, 2))
    with pytest.raises(CollinearVectorsError):
        Triangle(Vec3(1, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0))


@pytest.mark.parametrize("inside", [
    Vec3(1, 0, 1),
    Vec3(0.5, 0, 3),
    Vec3(3, 0, 0.5),
    Vec3(4 / 3, 0, 4 / 3),
])
@pytest.mark.parametrize("origin", [
    Vec3(3, 5, 2),
    Vec3(-10, 1, -10),
    Vec3(2, -7, 9),
])
def test_triangle_intersect_hits_point_inside(inside, origin):
    tri = _floor_triangle()
    ray = Ray(origin, Vec3.between(origin, inside))
    t = tri.intersect(ray)
    assert t is not None
    assert t == pytest.approx(1.0)
    _assert_close(ray.at(t), inside)


def test_triangle_intersect_parallel_ray_misses():
    tri = _floor_triangle()
    assert tri.intersect(Ray(Vec3(0, 1, 0), Vec3(1, 0, 1))) is None
    assert tri.intersect(Ray(Vec3(1, -3, 1), Vec3(0, 0, 1))) is None


def test_triangle_intersect_outside_point_misses():
    tri = _floor_triangle()
    assert tri.intersect(Ray(Vec3(5, 10, 5), Vec3(0, -1, 0))) is None
    assert tri.intersect(Ray(Vec3(-1, 10, 1), Vec3(0, -1, 0))) is None


def test_triangle_intersect_keeps_sign_of_parameter():
    tri = _floor_triangle()
    assert tri.intersect(Ray(Vec3(1, -5, 1), Vec3(0, -1, 0))) == pytest.approx(-5.0)


def test_triangle_contains_vertices_and_centroid():
    tri = _floor_triangle()
    for vertex in tri.vertices:
        assert tri.contains(vertex)
    assert tri.contains(tri.centroid())


def test_triangle_does_not_contain_far_point_on_same_plane():
    tri = _floor_triangle()
    assert tri.plane.contains(Vec3(100, 0, 100))
    assert not tri.contains(Vec3(100, 0, 100))
    assert not tri.contains(Vec3(-50, 0, 2))


def test_triangle_does_not_contain_point_off_plane():
    tri = _floor_triangle()
    assert not tri.contains(Vec3(1, 1, 1))
    assert not tri.contains(Vec3(1, 1e-3, 1))


def test_boundary_is_inclusive():
    tri = _floor_triangle()
    assert tri.contains(Vec3(2, 0, 0))
    assert tri.contains(Vec3(2, 0, 2))
    assert tri.contains(Vec3(0, 0, 1))
    assert not tri.contains(Vec3(2, 0, -0.1))
    assert not tri.contains(Vec3(2.1, 0, 2))


def test_containment_independent_of_winding():
    ccw = Triangle(Vec3(0, 0, 0), Vec3(0, 0, 4), Vec3(4, 0, 0))
    assert ccw.contains(Vec3(1, 0, 1))
    assert not ccw.contains(Vec3(3, 0, 3))


def test_triangle_in_tilted_plane():
    tri = Triangle(Vec3(1, 0, 0), Vec3(0, 1, 0), Vec3(0, 0, 1))
    centroid = tri.centroid()
    assert tri.contains(centroid)
    origin = Vec3(0, 0, 0)
    t = tri.intersect(Ray(origin, Vec3(1, 1, 1)))
    assert t == pytest.approx(1 / 3)
    assert abs(tri.plane.subs(Vec3(1, 1, 1) * t)) <= FLOAT_EPS
