import logging
from dataclasses import dataclass
from typing import Callable

from errors import InvalidInput
from models.config import ConverterConfig
from render.animation import convert_animation, convert_still
from render.encoder import MATRIX_BUFFER_SIZE, to_byte_stream
from render.rasterizer import RESAMPLE_FILTERS
from utils import decoder

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    stream: bytes  # little-endian 0x00RRGGBB, 4 байта на пиксель
    frame_count: int
    animated: bool


class Converter:
    """Конвертирует загруженные изображения в байтовый поток для матрицы 64x64"""

    def __init__(self, resample: str = "bilinear", max_upload_bytes: int | None = None, max_frames: int | None = None):
        if resample not in RESAMPLE_FILTERS:
            raise ValueError(f"Unknown resample filter: {resample}")
        self.resample = resample
        self.max_upload_bytes = max_upload_bytes
        self.max_frames = max_frames

    def configure(self, cfg: ConverterConfig) -> None:
        """Применяет настройки из config.yaml"""
        self.resample = cfg.resample
        self.max_upload_bytes = cfg.max_upload_bytes
        self.max_frames = cfg.max_frames
        logger.info(f"Converter configured: resample={self.resample}, max_upload_bytes={self.max_upload_bytes}, max_frames={self.max_frames}")

    def check_size(self, size: int) -> None:
        """Проверяет размер загрузки до декодирования"""
        if self.max_upload_bytes is not None and size > self.max_upload_bytes:
            raise InvalidInput(f"Upload is {size} bytes, limit is {self.max_upload_bytes}")

    def convert_image(self, data: bytes) -> bytes:
        """Статичное изображение -> байтовый поток одного кадра"""
        self.check_size(len(data))
        image = decoder.decode_still(data)
        buffer = convert_still(image.width, image.height, image.rgba, resample=self.resample)
        return to_byte_stream(buffer)

    def convert_animation(self, data: bytes, on_progress: Callable[[float], None] | None = None) -> bytes:
        """Анимация -> байтовый поток всех кадров подряд"""
        self.check_size(len(data))
        frames = decoder.decode_animation(data, max_frames=self.max_frames)
        buffer = convert_animation(frames, on_progress=on_progress, resample=self.resample)
        return to_byte_stream(buffer)

    def convert(self, data: bytes, on_progress: Callable[[float], None] | None = None) -> ConversionResult:
        """Сам определяет, анимация это или нет"""
        self.check_size(len(data))
        if decoder.is_animated(data):
            stream = self.convert_animation(data, on_progress=on_progress)
            animated = True
        else:
            stream = self.convert_image(data)
            animated = False

        frame_count = len(stream) // MATRIX_BUFFER_SIZE
        logger.info(f"Converted {'animation' if animated else 'image'}: {frame_count} frame(s), {len(stream)} bytes")
        return ConversionResult(stream=stream, frame_count=frame_count, animated=animated)
