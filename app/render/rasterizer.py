import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

from errors import InvalidInput, ResourceError
from render.frame import MATRIX_HEIGHT, MATRIX_WIDTH, RasterFrame

logger = logging.getLogger(__name__)

# только сглаживающие фильтры, nearest не допускается
RESAMPLE_FILTERS = {
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


@dataclass(frozen=True)
class Placement:
    """Куда и в каком размере исходник попадает на матрицу"""
    scale: float
    new_width: int
    new_height: int
    left: int
    top: int


def compute_placement(source_width: int, source_height: int) -> Placement:
    """
    Вписывает исходник в 64x64 без обрезки с сохранением пропорций.
    Сторона, упирающаяся в границу матрицы, становится ровно 64,
    вторая округляется вниз, остаток заполняется черным по центру.
    """
    if source_width <= 0 or source_height <= 0:
        raise InvalidInput(f"Image has zero dimension: {source_width}x{source_height}")

    img_ratio = source_width / source_height
    target_ratio = MATRIX_WIDTH / MATRIX_HEIGHT

    if img_ratio > target_ratio:
        # исходник шире цели - упираемся в ширину
        scale = MATRIX_WIDTH / source_width
        new_width = MATRIX_WIDTH
        new_height = source_height * MATRIX_WIDTH // source_width
    else:
        # исходник выше цели или пропорции совпадают
        scale = MATRIX_HEIGHT / source_height
        new_width = source_width * MATRIX_HEIGHT // source_height
        new_height = MATRIX_HEIGHT

    left = (MATRIX_WIDTH - new_width) // 2
    top = (MATRIX_HEIGHT - new_height) // 2

    return Placement(scale=scale, new_width=new_width, new_height=new_height, left=left, top=top)


def _as_rgba_bytes(source_pixels) -> bytes:
    if isinstance(source_pixels, np.ndarray):
        return np.ascontiguousarray(source_pixels, dtype=np.uint8).tobytes()
    return bytes(source_pixels)


def rasterize(source_width: int, source_height: int, source_pixels, resample: str = "bilinear") -> RasterFrame:
    """
    Приводит RGBA изображение произвольного размера к кадру 64x64 RGB.
    source_pixels: RGBA данные (4 байта на пиксель), bytes или numpy массив
    """
    placement = compute_placement(source_width, source_height)

    if resample not in RESAMPLE_FILTERS:
        raise InvalidInput(f"Unknown resample filter: {resample}")

    raw = _as_rgba_bytes(source_pixels)
    expected = source_width * source_height * 4
    if len(raw) != expected:
        raise InvalidInput(f"Expected {expected} bytes of RGBA data for {source_width}x{source_height}, got {len(raw)}")

    # черный фон - он же поля при несовпадении пропорций
    canvas = Image.new("RGBA", (MATRIX_WIDTH, MATRIX_HEIGHT), (0, 0, 0, 255))

    if placement.new_width > 0 and placement.new_height > 0:
        try:
            with Image.frombytes("RGBA", (source_width, source_height), raw) as source:
                resized = source.resize(
                    (placement.new_width, placement.new_height),
                    resample=RESAMPLE_FILTERS[resample],
                )
            # прозрачные пиксели накладываются на черный фон
            canvas.alpha_composite(resized, dest=(placement.left, placement.top))
        except MemoryError as e:
            raise ResourceError(f"Not enough memory to resample {source_width}x{source_height} image") from e
    else:
        logger.debug(f"Degenerate placement for {source_width}x{source_height}, frame stays black")

    # альфа больше не нужна
    rgb = np.asarray(canvas.convert("RGB"), dtype=np.uint8)
    return RasterFrame(rgb)
