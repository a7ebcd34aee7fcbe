from core.math import Vec3, Point, Ray, FLOAT_EPS
from core.geometry import Triangle
from core.material import Color
from core.scene import Scene


def is_covered(scene: Scene, pt: Point, sun_ray: Ray) -> bool:
    """pt 를 포함하지 않는 다른 삼각형이 태양 방향 광선을 가리는지 검사"""
    for surface in scene.surfaces:
        if surface.triangle.contains(pt):
            continue  # 자기 그림자 방지
        t = surface.triangle.intersect(sun_ray)
        if t is not None and t >= -FLOAT_EPS:
            return True
    return False


def compute_lights(scene: Scene, surface: Triangle, pt: Point) -> float:
    sun_ray = Ray(pt, Vec3.between(pt, scene.sun))
    covered = is_covered(scene, pt, sun_ray)

    # 카메라와 태양이 평면의 서로 다른 쪽에 있으면 뒷면으로 보고 있는 것
    different_halves = surface.plane.subs(scene.origin) * surface.plane.subs(scene.sun) <= 0.0

    if covered or different_halves:
        return scene.ambient_light

    cos = abs(sun_ray.direction.cos(surface.plane.normal()))
    return (1.0 - scene.diffuse_light) + cos * scene.diffuse_light


def shade(color: Color, brightness: float) -> Color:
    # 채널별로 밝기를 곱하고 정수로 버림 (u8 범위로 포화)
    return tuple(max(0, min(255, int(c * brightness))) for c in color)
