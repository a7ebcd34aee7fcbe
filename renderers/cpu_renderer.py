import time
from concurrent.futures import ThreadPoolExecutor
from typing import List
import numpy as np

from core.math import Ray, FLOAT_EPS
from core.material import Color
from core.scene import Scene, RenderSettings
from core.camera import Camera
from core.lighting import compute_lights, shade
from renderers.base_renderer import BaseRenderer, RendererFactory, allocate_buffer, chunk_ranges


def cast_ray(scene: Scene, ray: Ray) -> Color:
    """가장 가까운 삼각형을 찾아 음영을 계산, 없으면 배경색"""
    closest_t = None
    closest_surface = None
    for surface in scene.surfaces:
        t = surface.triangle.intersect(ray)
        # 광선의 양의 방향에 있는 교차점만
        if t is None or t < -FLOAT_EPS:
            continue
        # 같은 거리면 먼저 나온 삼각형 유지
        if closest_t is None or t < closest_t:
            closest_t = t
            closest_surface = surface

    if closest_surface is None:
        return scene.background

    brightness = compute_lights(scene, closest_surface.triangle, ray.at(closest_t))
    return shade(closest_surface.color, brightness)


def render_chunk(scene: Scene, camera: Camera, offset: int, chunk: np.ndarray) -> None:
    """chunk 는 전체 버퍼의 [offset, offset + len(chunk)) 구간 뷰"""
    for i in range(len(chunk)):
        ray = camera.get_ray_for_index(offset + i)
        chunk[i] = cast_ray(scene, ray)


def cast_rays(scene: Scene, settings: RenderSettings) -> np.ndarray:
    camera = Camera(scene.origin, scene.grid_size, settings.width, settings.height)
    buffer = allocate_buffer(settings)
    ranges = chunk_ranges(settings.pixel_count, settings.workers)

    # 각 작업은 서로 겹치지 않는 버퍼 구간에만 쓴다
    with ThreadPoolExecutor(max_workers=settings.workers) as executor:
        futures = [
            executor.submit(render_chunk, scene, camera, start, buffer[start:end])
            for start, end in ranges
        ]
        for future in futures:
            future.result()

    return buffer.reshape(-1)


class CPURenderer(BaseRenderer):
    """CPU 기반 레이캐스팅 렌더러 (스레드 풀)"""

    def __init__(self):
        super().__init__("cpu_raycaster")

    def get_capabilities(self) -> List[str]:
        return [
            "ray_casting",
            "shadows",
            "diffuse_lighting",
            "thread_pool",
        ]

    def render(self, scene: Scene, settings: RenderSettings) -> np.ndarray:
        """메인 렌더링 함수"""
        start_time = time.time()

        print(f"CPU 렌더링 시작: {settings.width}x{settings.height}, "
              f"{len(scene.surfaces)} triangles, {settings.workers} workers")

        buffer = cast_rays(scene, settings)

        elapsed = time.time() - start_time
        minutes = int(elapsed // 60)
        seconds = elapsed % 60
        print(f"CPU 렌더링 완료: {minutes}분 {seconds:.2f}초")

        return buffer


# 렌더러 등록
RendererFactory.register("cpu_raycaster", CPURenderer)
