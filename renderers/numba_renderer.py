import math
import time
from typing import List, Tuple
import numpy as np
import numba
from numba import njit, prange

from core.math import FLOAT_EPS
from core.scene import Scene, RenderSettings
from core.camera import Camera
from renderers.base_renderer import BaseRenderer, RendererFactory, allocate_buffer, chunk_ranges

# 아래 커널들은 cpu_renderer 와 같은 연산 순서를 그대로 따른다


@njit(cache=True)
def nb_is_zero(f):
    return abs(f) <= FLOAT_EPS


@njit(cache=True)
def nb_cross(ax, ay, az, bx, by, bz):
    return (ay * bz - az * by,
            -(ax * bz - az * bx),
            ax * by - ay * bx)


@njit(cache=True)
def nb_is_codirectional(ax, ay, az, bx, by, bz):
    cx, cy, cz = nb_cross(ax, ay, az, bx, by, bz)
    if not (nb_is_zero(cx) and nb_is_zero(cy) and nb_is_zero(cz)):
        return False
    return ax * bx >= -FLOAT_EPS and ay * by >= -FLOAT_EPS and az * bz >= -FLOAT_EPS


@njit(cache=True)
def nb_length(x, y, z):
    return math.sqrt(x * x + y * y + z * z)


@njit(cache=True)
def nb_subs(planes, i, px, py, pz):
    return planes[i, 0] * px + planes[i, 1] * py + planes[i, 2] * pz + planes[i, 3]


@njit(cache=True)
def nb_plane_intersect(planes, i, ox, oy, oz, dx, dy, dz):
    a = planes[i, 0]
    b = planes[i, 1]
    c = planes[i, 2]
    d = planes[i, 3]
    sum_t = a * dx + b * dy + c * dz
    sum_rhs = -d - a * ox - b * oy - c * oz
    if nb_is_zero(sum_t):
        return False, 0.0
    return True, sum_rhs / sum_t


@njit(cache=True)
def nb_is_inside(verts, i, px, py, pz):
    lx = 0.0
    ly = 0.0
    lz = 0.0
    for k in range(3):
        n = (k + 1) % 3
        vx = verts[i, 3 * k]
        vy = verts[i, 3 * k + 1]
        vz = verts[i, 3 * k + 2]
        nx = verts[i, 3 * n]
        ny = verts[i, 3 * n + 1]
        nz = verts[i, 3 * n + 2]
        cx, cy, cz = nb_cross(px - vx, py - vy, pz - vz,
                              nx - vx, ny - vy, nz - vz)
        if not nb_is_codirectional(cx, cy, cz, lx, ly, lz):
            return False
        lx = cx + lx
        ly = cy + ly
        lz = cz + lz
    return True


@njit(cache=True)
def nb_triangle_intersect(verts, planes, i, ox, oy, oz, dx, dy, dz):
    ok, t = nb_plane_intersect(planes, i, ox, oy, oz, dx, dy, dz)
    if not ok:
        return False, 0.0
    px = ox + dx * t
    py = oy + dy * t
    pz = oz + dz * t
    if nb_is_inside(verts, i, px, py, pz):
        return True, t
    return False, 0.0


@njit(cache=True)
def nb_compute_lights(verts, planes, hit, px, py, pz, cam, env):
    sun_x = env[0]
    sun_y = env[1]
    sun_z = env[2]
    ambient = env[3]
    diffuse = env[4]

    dx = sun_x - px
    dy = sun_y - py
    dz = sun_z - pz

    covered = False
    for j in range(verts.shape[0]):
        # 교차점을 포함하는 삼각형은 제외 (자기 그림자 방지)
        if nb_is_zero(nb_subs(planes, j, px, py, pz)) and nb_is_inside(verts, j, px, py, pz):
            continue
        ok, t = nb_triangle_intersect(verts, planes, j, px, py, pz, dx, dy, dz)
        if ok and t >= -FLOAT_EPS:
            covered = True
            break

    different_halves = (nb_subs(planes, hit, cam[0], cam[1], cam[2])
                        * nb_subs(planes, hit, sun_x, sun_y, sun_z)) <= 0.0
    if covered or different_halves:
        return ambient

    a = planes[hit, 0]
    b = planes[hit, 1]
    c = planes[hit, 2]
    denom = nb_length(dx, dy, dz) * nb_length(a, b, c)
    cos = 0.0
    if denom != 0:
        cos = (dx * a + dy * b + dz * c) / denom
    return (1.0 - diffuse) + abs(cos) * diffuse


@njit(parallel=True, cache=True)
def nb_render(out, starts, ends, verts, planes, colors, cam, env, background, width, height):
    """
    cam: [origin(3), vx(3), vy(3), grid_size]
    env: [sun(3), ambient, diffuse]
    구간 하나당 prange 반복 하나, 구간끼리는 겹치지 않는다
    """
    ox = cam[0]
    oy = cam[1]
    oz = cam[2]
    grid = cam[9]
    for chunk in prange(starts.shape[0]):
        for idx in range(starts[chunk], ends[chunk]):
            row = idx // width
            col = idx % width
            u = (2.0 * (col / width) - 1.0) * grid
            v = (2.0 * (row / height) - 1.0) * grid
            tx = 0.0 + cam[3] * u + cam[6] * v
            ty = 0.0 + cam[4] * u + cam[7] * v
            tz = 0.0 + cam[5] * u + cam[8] * v
            dx = tx - ox
            dy = ty - oy
            dz = tz - oz

            closest = -1
            closest_t = 0.0
            for i in range(verts.shape[0]):
                ok, t = nb_triangle_intersect(verts, planes, i, ox, oy, oz, dx, dy, dz)
                if not ok or t < -FLOAT_EPS:
                    continue
                if closest < 0 or t < closest_t:
                    closest = i
                    closest_t = t

            if closest < 0:
                out[idx, 0] = background[0]
                out[idx, 1] = background[1]
                out[idx, 2] = background[2]
                continue

            px = ox + dx * closest_t
            py = oy + dy * closest_t
            pz = oz + dz * closest_t
            brightness = nb_compute_lights(verts, planes, closest, px, py, pz, cam, env)
            for ch in range(3):
                value = int(colors[closest, ch] * brightness)
                out[idx, ch] = max(0, min(255, value))


def prepare_scene_data(scene: Scene) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """삼각형 데이터를 평탄한 배열로 변환: 꼭짓점 (n, 9), 평면 계수 (n, 4), 색 (n, 3)"""
    n = len(scene.surfaces)
    verts = np.zeros((n, 9), dtype=np.float64)
    planes = np.zeros((n, 4), dtype=np.float64)
    colors = np.zeros((n, 3), dtype=np.int64)
    for i, surface in enumerate(scene.surfaces):
        tri = surface.triangle
        for k, vertex in enumerate(tri.vertices):
            verts[i, 3 * k:3 * k + 3] = (vertex.x, vertex.y, vertex.z)
        planes[i] = tri.plane.coefficients()
        colors[i] = surface.color
    return verts, planes, colors


def prepare_camera_data(camera: Camera) -> np.ndarray:
    return np.array([
        camera.origin.x, camera.origin.y, camera.origin.z,
        camera.vx.x, camera.vx.y, camera.vx.z,
        camera.vy.x, camera.vy.y, camera.vy.z,
        camera.grid_size,
    ], dtype=np.float64)


def prepare_env_data(scene: Scene) -> np.ndarray:
    return np.array([
        scene.sun.x, scene.sun.y, scene.sun.z,
        scene.ambient_light, scene.diffuse_light,
    ], dtype=np.float64)


class NumbaRenderer(BaseRenderer):
    """numba 로 컴파일한 병렬 레이캐스팅 렌더러"""

    def __init__(self):
        super().__init__("numba_raycaster")

    def get_capabilities(self) -> List[str]:
        return [
            "ray_casting",
            "shadows",
            "diffuse_lighting",
            "jit_compiled",
            "parallel_chunks",
        ]

    def render(self, scene: Scene, settings: RenderSettings) -> np.ndarray:
        start_time = time.time()

        print(f"Numba 렌더링 시작: {settings.width}x{settings.height}, "
              f"{len(scene.surfaces)} triangles, {settings.workers} workers")

        camera = Camera(scene.origin, scene.grid_size, settings.width, settings.height)
        verts, planes, colors = prepare_scene_data(scene)
        camera_data = prepare_camera_data(camera)
        env_data = prepare_env_data(scene)
        background = np.array(scene.background, dtype=np.int64)

        ranges = chunk_ranges(settings.pixel_count, settings.workers)
        starts = np.array([start for start, _ in ranges], dtype=np.int64)
        ends = np.array([end for _, end in ranges], dtype=np.int64)

        buffer = allocate_buffer(settings)
        numba.set_num_threads(max(1, min(settings.workers, numba.config.NUMBA_NUM_THREADS)))
        nb_render(buffer, starts, ends, verts, planes, colors,
                  camera_data, env_data, background,
                  settings.width, settings.height)

        elapsed = time.time() - start_time
        minutes = int(elapsed // 60)
        seconds = elapsed % 60
        print(f"Numba 렌더링 완료: {minutes}분 {seconds:.2f}초")

        return buffer.reshape(-1)


# 렌더러 등록
RendererFactory.register("numba_raycaster", NumbaRenderer)
