#!/usr/bin/env python3
"""Конвертирует изображение или анимацию в файл буфера кадров для матрицы 64x64"""
import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from PIL import Image

from converter import Converter
from errors import ConverterError
from render.encoder import from_byte_stream
from render.frame import MATRIX_HEIGHT, MATRIX_WIDTH
from render.rasterizer import RESAMPLE_FILTERS

logger = logging.getLogger(__name__)

# как часто контроллер переключает кадры анимации
FRAME_DURATION_MS = 50


def stream_to_images(stream: bytes) -> list[Image.Image]:
    """Собирает кадры обратно из байтового потока (для предпросмотра)"""
    codes = from_byte_stream(stream).reshape(-1, MATRIX_HEIGHT, MATRIX_WIDTH)
    images = []
    for frame in codes:
        rgb = np.stack([(frame >> 16) & 0xFF, (frame >> 8) & 0xFF, frame & 0xFF], axis=-1).astype(np.uint8)
        images.append(Image.fromarray(rgb))
    return images


def write_preview(stream: bytes, path: Path) -> None:
    images = stream_to_images(stream)
    if len(images) > 1:
        images[0].save(path, save_all=True, append_images=images[1:], duration=FRAME_DURATION_MS, loop=0)
    else:
        images[0].save(path)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Конвертация изображения в буфер LED-матрицы 64x64")
    parser.add_argument("image", help="Путь к изображению или анимации")
    parser.add_argument("-o", "--output", help="Выходной .bin файл (по умолчанию <image>.bin)")
    parser.add_argument("--filter", default="bilinear", choices=sorted(RESAMPLE_FILTERS), help="Фильтр масштабирования")
    parser.add_argument("--preview", help="Дополнительно сохранить PNG/GIF предпросмотр кадров")
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = Path(args.image)
    output = Path(args.output) if args.output else source.with_suffix(".bin")

    try:
        data = source.read_bytes()
    except OSError as e:
        logger.error(f"Не удалось прочитать {source}: {e}")
        return 1

    def on_progress(progress: float) -> None:
        print(f"\r{progress:6.1%}", end="", file=sys.stderr, flush=True)
        if progress >= 1.0:
            print(file=sys.stderr)

    converter = Converter(resample=args.filter)
    try:
        result = converter.convert(data, on_progress=on_progress)
    except ConverterError as e:
        logger.error(f"Ошибка конвертации: {e}")
        return 1

    output.write_bytes(result.stream)
    print(f"Записан {output} (кадров: {result.frame_count}, байт: {len(result.stream)})")

    if args.preview:
        write_preview(result.stream, Path(args.preview))
        print(f"Записан предпросмотр {args.preview}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
