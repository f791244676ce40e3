import io
import logging
from contextlib import contextmanager
from typing import Iterator, NamedTuple

from PIL import Image, UnidentifiedImageError

from errors import DecodeError, InvalidInput, ResourceError

logger = logging.getLogger(__name__)


class DecodedImage(NamedTuple):
    width: int
    height: int
    rgba: bytes  # RGBA данные (4 байта на пиксель)


@contextmanager
def open_image(data: bytes) -> Iterator[Image.Image]:
    """Открывает изображение из байтов, закрывает его на любом выходе"""
    if not data:
        raise DecodeError("Empty image data")

    try:
        with Image.open(io.BytesIO(data)) as image:
            yield image
    except Image.DecompressionBombError as e:
        raise ResourceError(f"Image is too large to decode: {e}") from e
    except MemoryError as e:
        raise ResourceError("Not enough memory to decode image") from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e


def _to_decoded(image: Image.Image) -> DecodedImage:
    # конвертируем в RGBA если нужно
    frame = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = frame.size
    return DecodedImage(width=width, height=height, rgba=frame.tobytes())


def is_animated(data: bytes) -> bool:
    with open_image(data) as image:
        return bool(getattr(image, "is_animated", False))


def decode_still(data: bytes) -> DecodedImage:
    """Декодирует статичное изображение (для анимации берется первый кадр)"""
    with open_image(data) as image:
        return _to_decoded(image)


def decode_animation(data: bytes, max_frames: int | None = None) -> list[DecodedImage]:
    """Декодирует все кадры анимации в порядке следования"""
    frames = []

    with open_image(data) as image:
        total = getattr(image, "n_frames", 1)
        if max_frames is not None and total > max_frames:
            raise InvalidInput(f"Animation has {total} frames, limit is {max_frames}")

        # извлекаем все фреймы
        try:
            frame_index = 0
            while True:
                image.seek(frame_index)
                frames.append(_to_decoded(image))
                frame_index += 1
        except EOFError:
            pass  # достигли конца анимации

    logger.debug(f"Decoded {len(frames)} animation frames")
    return frames
