from abc import ABC, abstractmethod
from typing import List, Tuple
import numpy as np
from PIL import Image
from core.scene import Scene, RenderSettings


def chunk_ranges(pixel_count: int, workers: int) -> List[Tuple[int, int]]:
    """
    버퍼를 floor(pixel_count / workers) 크기의 연속 구간으로 나눈다.
    나누어 떨어지지 않으면 남은 픽셀이 마지막 구간 하나로 붙는다.
    """
    chunk_size = max(1, pixel_count // workers)
    return [(start, min(pixel_count, start + chunk_size))
            for start in range(0, pixel_count, chunk_size)]


def allocate_buffer(settings: RenderSettings) -> np.ndarray:
    # (픽셀 수, 3) 형태, 평탄화하면 행 우선 RGB 바이트열
    return np.zeros((settings.pixel_count, 3), dtype=np.uint8)


def buffer_to_image(buffer: np.ndarray, settings: RenderSettings) -> Image.Image:
    """평탄한 RGB 버퍼를 PIL Image 로 변환"""
    expected = settings.pixel_count * 3
    if buffer.size != expected:
        raise ValueError(f"Buffer has {buffer.size} bytes, expected {expected}")
    image_array = np.ascontiguousarray(buffer, dtype=np.uint8).reshape((settings.height, settings.width, 3))
    return Image.fromarray(image_array, 'RGB')


class BaseRenderer(ABC):
    """모든 렌더러가 구현해야 하는 베이스 클래스"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def render(self, scene: Scene, settings: RenderSettings) -> np.ndarray:
        """장면을 렌더링하여 길이 width*height*3 의 uint8 버퍼를 반환"""
        pass

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        """이 렌더러가 지원하는 기능들을 반환"""
        pass

    def get_name(self) -> str:
        return self.name

    def supports(self, feature: str) -> bool:
        """특정 기능을 지원하는지 확인"""
        return feature in self.get_capabilities()


class RendererFactory:
    """렌더러 팩토리 클래스"""

    _renderers = {}

    @classmethod
    def register(cls, name: str, renderer_class):
        """새로운 렌더러를 등록"""
        cls._renderers[name] = renderer_class

    @classmethod
    def create(cls, name: str, **kwargs) -> BaseRenderer:
        """등록된 렌더러를 생성"""
        if name not in cls._renderers:
            raise ValueError(f"Unknown renderer: {name}")
        return cls._renderers[name](**kwargs)

    @classmethod
    def list_available(cls) -> List[str]:
        """사용 가능한 렌더러 목록 반환"""
        return list(cls._renderers.keys())
