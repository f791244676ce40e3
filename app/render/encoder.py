import numpy as np

from errors import InvalidInput
from render.frame import MATRIX_SIZE, RasterFrame

# размер одного кадра в байтовом потоке (4 байта на пиксель)
MATRIX_BUFFER_SIZE = MATRIX_SIZE * 4


def to_pixel_code(r: int, g: int, b: int) -> int:
    """Упаковывает цвет в 32-битный код 0x00RRGGBB"""
    r = min(max(int(r), 0), 255)
    g = min(max(int(g), 0), 255)
    b = min(max(int(b), 0), 255)
    return (r << 16) | (g << 8) | b


def encode_frame(frame: RasterFrame, out: np.ndarray | None = None) -> np.ndarray:
    """
    Кодирует весь кадр в PixelCode построчно (то же что to_pixel_code для каждого пикселя).
    Если передан out - пишет прямо в него (срез общего буфера анимации).
    """
    pixels = frame.pixels.astype(np.uint32)
    codes = (pixels[..., 0] << 16) | (pixels[..., 1] << 8) | pixels[..., 2]
    codes = codes.reshape(-1)

    if out is None:
        return codes

    if out.shape != codes.shape:
        raise ValueError(f"Output slice must hold {codes.size} pixel codes, got shape {out.shape}")
    out[:] = codes
    return out


def to_byte_stream(buffer) -> bytes:
    """Сериализует буфер PixelCode в little-endian байты, 4 байта на пиксель"""
    codes = np.asarray(buffer, dtype=np.uint32)
    return codes.astype("<u4", copy=False).tobytes()


def from_byte_stream(stream: bytes) -> np.ndarray:
    """Обратное преобразование байтового потока в буфер PixelCode"""
    if len(stream) % 4 != 0:
        raise InvalidInput(f"Byte stream length {len(stream)} is not a multiple of 4")
    return np.frombuffer(stream, dtype="<u4").astype(np.uint32)


def frame_count(stream: bytes) -> int:
    """Проверяет поток так же, как контроллер дисплея, и возвращает число кадров"""
    size = len(stream)
    if size < MATRIX_BUFFER_SIZE:
        raise InvalidInput(f"Frame buffer must be at least {MATRIX_BUFFER_SIZE} bytes, got {size}")
    if size % MATRIX_BUFFER_SIZE != 0:
        raise InvalidInput(f"Frame buffer size must be divisible by {MATRIX_BUFFER_SIZE}, got {size}")
    return size // MATRIX_BUFFER_SIZE
