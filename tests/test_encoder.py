import numpy as np
import pytest

from errors import InvalidInput
from render.encoder import (
    MATRIX_BUFFER_SIZE,
    encode_frame,
    frame_count,
    from_byte_stream,
    to_byte_stream,
    to_pixel_code,
)
from render.frame import RasterFrame


def test_pixel_code_layout():
    assert to_pixel_code(0x12, 0x34, 0x56) == 0x00123456
    assert to_pixel_code(255, 255, 255) == 0x00FFFFFF
    assert to_pixel_code(0, 0, 0) == 0


def test_pixel_code_is_pure():
    assert to_pixel_code(1, 2, 3) == to_pixel_code(1, 2, 3)


def test_pixel_code_clamps_out_of_range():
    assert to_pixel_code(300, -5, 0) == 0x00FF0000


def test_byte_stream_is_little_endian():
    assert to_byte_stream([0x00123456]) == b"\x56\x34\x12\x00"
    assert to_byte_stream([0x00FF0000, 0x000000FF]) == b"\x00\x00\xff\x00\xff\x00\x00\x00"


def test_byte_stream_length():
    assert to_byte_stream([]) == b""
    assert len(to_byte_stream(np.arange(4096, dtype=np.uint32))) == 4 * 4096


def test_byte_stream_restores_rgb():
    colors = [(255, 0, 0), (0, 128, 0), (1, 2, 3), (255, 255, 255)]
    stream = to_byte_stream([to_pixel_code(*c) for c in colors])

    for i, (r, g, b) in enumerate(colors):
        value = int.from_bytes(stream[i * 4:(i + 1) * 4], "little") & 0x00FFFFFF
        assert value == (r << 16) | (g << 8) | b

    assert from_byte_stream(stream).tolist() == [to_pixel_code(*c) for c in colors]


def test_encode_frame_matches_pixel_codes():
    rng = np.random.default_rng(0)
    frame = RasterFrame(rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8))

    codes = encode_frame(frame)

    assert codes.dtype == np.uint32
    assert codes.shape == (4096,)
    for y, x in [(0, 0), (0, 63), (17, 5), (63, 63)]:
        assert codes[y * 64 + x] == to_pixel_code(*frame.get_pixel(x, y))


def test_encode_frame_writes_into_slice():
    frame = RasterFrame(np.full((64, 64, 3), 7, dtype=np.uint8))
    buffer = np.zeros(3 * 4096, dtype=np.uint32)

    encode_frame(frame, out=buffer[4096:8192])

    assert not buffer[:4096].any()
    assert (buffer[4096:8192] == 0x070707).all()
    assert not buffer[8192:].any()


def test_encode_frame_rejects_wrong_slice():
    with pytest.raises(ValueError):
        encode_frame(RasterFrame(), out=np.zeros(10, dtype=np.uint32))


def test_from_byte_stream_rejects_partial_code():
    with pytest.raises(InvalidInput):
        from_byte_stream(b"\x00\x01\x02")


def test_frame_count():
    assert MATRIX_BUFFER_SIZE == 16384
    assert frame_count(bytes(MATRIX_BUFFER_SIZE)) == 1
    assert frame_count(bytes(3 * MATRIX_BUFFER_SIZE)) == 3


@pytest.mark.parametrize("size", [0, 100, MATRIX_BUFFER_SIZE - 4, MATRIX_BUFFER_SIZE + 4])
def test_frame_count_rejects_bad_sizes(size):
    with pytest.raises(InvalidInput):
        frame_count(bytes(size))
