import io

import pytest
from PIL import Image


def solid_rgba(width: int, height: int, color: tuple[int, int, int, int]) -> bytes:
    return bytes(color) * (width * height)


def image_bytes(width: int, height: int, color, fmt: str = "PNG") -> bytes:
    mode = "RGBA" if len(color) == 4 else "RGB"
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


def gif_bytes(colors: list[tuple[int, int, int]], size: tuple[int, int] = (16, 16)) -> bytes:
    frames = [Image.new("RGB", size, color) for color in colors]
    buffer = io.BytesIO()
    frames[0].save(buffer, format="GIF", save_all=True, append_images=frames[1:], duration=100, loop=0)
    return buffer.getvalue()


@pytest.fixture
def red_png() -> bytes:
    return image_bytes(100, 50, (255, 0, 0))


@pytest.fixture
def rgb_gif() -> bytes:
    return gif_bytes([(255, 0, 0), (0, 255, 0), (0, 0, 255)])
