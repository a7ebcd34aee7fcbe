import math
import os
import time
import argparse
from typing import List
from core.math import Vec3
from core.scene import RenderSettings
from scene_builders.demo_scene_builder import DemoSceneBuilder
from scene_builders.obj_scene_builder import ObjSceneBuilder
from renderers.base_renderer import RendererFactory, buffer_to_image

# 렌더러 모듈들 import (등록을 위해)
import renderers.cpu_renderer

try:
    import renderers.numba_renderer

    NUMBA_AVAILABLE = True
except Exception as e:
    NUMBA_AVAILABLE = False
    print(f"Numba 렌더러 사용 불가: {e}")


def orbit_origins(base: Vec3, radius: float, steps: int, frames: int) -> List[Vec3]:
    """수직축을 중심으로 도는 카메라 위치들 (높이는 base 의 y 유지)"""
    origins = []
    for step in range(frames):
        angle = (step / steps) * 2.0 * math.pi
        origins.append(Vec3(math.sin(angle) * radius, base.y, math.cos(angle) * radius))
    return origins


def main(argv=None):
    parser = argparse.ArgumentParser(description='Triangle mesh ray caster with hard shadows')
    parser.add_argument('--renderer', '-r',
                        choices=RendererFactory.list_available(),
                        default='numba_raycaster' if NUMBA_AVAILABLE else 'cpu_raycaster',
                        help='렌더러 선택')
    parser.add_argument('--scene',
                        choices=['demo', 'obj'],
                        default='demo',
                        help='씬 선택: demo (기본 도형) 또는 obj (--obj 파일)')
    parser.add_argument('--obj', default='test/tower.obj',
                        help='OBJ 메쉬 파일 경로')
    parser.add_argument('--width', '-w', type=int, default=500,
                        help='이미지 가로 크기')
    parser.add_argument('--height', type=int, default=500,
                        help='이미지 세로 크기')
    parser.add_argument('--workers', '-j', type=int, default=os.cpu_count() or 1,
                        help='작업 스레드 수')
    parser.add_argument('--frames', '-f', type=int, default=1,
                        help='렌더링할 프레임 수 (0 이면 카메라 고정 한 장)')
    parser.add_argument('--steps', type=int, default=65,
                        help='한 바퀴를 이루는 프레임 수')
    parser.add_argument('--radius', type=float, default=None,
                        help='카메라 궤도 반지름 (기본: obj 160, demo 는 초기 위치 기준)')
    parser.add_argument('--output', '-o', default='output{frame}.png',
                        help='출력 파일명 ({frame} 이 프레임 번호로 바뀜)')

    args = parser.parse_args(argv)

    settings = RenderSettings(
        width=args.width,
        height=args.height,
        workers=args.workers,
    )

    # 씬 생성
    print(f"장면 생성 중: {args.scene}")
    if args.scene == 'obj':
        scene = ObjSceneBuilder(args.obj).build_scene()
        radius = args.radius if args.radius is not None else 160.0
    else:
        scene = DemoSceneBuilder().build_scene()
        radius = args.radius if args.radius is not None else math.hypot(scene.origin.x, scene.origin.z)

    print(f"렌더러 생성: {args.renderer}")
    renderer = RendererFactory.create(args.renderer)
    print(f"지원 기능: {', '.join(renderer.get_capabilities())}")

    if args.frames > 0:
        origins = orbit_origins(scene.origin, radius, args.steps, args.frames)
    else:
        origins = [scene.origin]

    start_time = time.time()
    for frame, origin in enumerate(origins):
        # 프레임마다 카메라만 바뀐 새 스냅샷
        frame_scene = scene.with_origin(origin)
        buffer = renderer.render(frame_scene, settings)
        output = args.output.format(frame=frame)
        buffer_to_image(buffer, settings).save(output)
        print(f"이미지 저장: {output}")

    elapsed = time.time() - start_time
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    print(f"총 실행 시간: {minutes}분 {seconds:.2f}초 ({len(origins)} frames)")


if __name__ == "__main__":
    main()
