import logging
from collections.abc import Sequence
from typing import Callable, Iterable

import numpy as np

from render.encoder import encode_frame
from render.frame import MATRIX_SIZE
from render.rasterizer import rasterize

logger = logging.getLogger(__name__)


def convert_animation(
    frames: Iterable,
    on_progress: Callable[[float], None] | None = None,
    resample: str = "bilinear",
) -> np.ndarray:
    """
    Конвертирует последовательность кадров (width, height, RGBA) в один общий буфер PixelCode.
    Кадр i занимает срез [i*4096, (i+1)*4096), порядок кадров сохраняется.
    on_progress вызывается после каждого кадра с долей (i+1)/frame_count.
    """
    if not isinstance(frames, Sequence):
        frames = list(frames)

    frame_count = len(frames)
    # выделяем весь буфер сразу
    buffer = np.zeros(MATRIX_SIZE * frame_count, dtype=np.uint32)
    if frame_count == 0:
        return buffer

    for i, (width, height, pixels) in enumerate(frames):
        raster = rasterize(width, height, pixels, resample=resample)
        encode_frame(raster, out=buffer[i * MATRIX_SIZE:(i + 1) * MATRIX_SIZE])

        if on_progress:
            on_progress((i + 1) / frame_count)

    logger.debug(f"Converted {frame_count} frames")
    return buffer


def convert_still(width: int, height: int, pixels, resample: str = "bilinear") -> np.ndarray:
    """Один кадр, без отчета о прогрессе"""
    raster = rasterize(width, height, pixels, resample=resample)
    return encode_frame(raster)
