import asyncio
import logging
from fastapi import APIRouter, UploadFile, File, HTTPException, Response
from api.errors import to_http_exception
from dependencies import converter
from errors import ConverterError
from render.encoder import MATRIX_BUFFER_SIZE

logger = logging.getLogger(__name__)

router = APIRouter()

MEDIA_TYPE = "application/octet-stream"


# читаем загрузку кусками, чтобы не держать в памяти больше лимита
UPLOAD_CHUNK_SIZE = 64 * 1024


def _log_progress(filename: str):
    def on_progress(progress: float) -> None:
        logger.debug(f"{filename}: {progress:.0%}")
    return on_progress


def _stream_response(stream: bytes, animated: bool | None = None) -> Response:
    frames = len(stream) // MATRIX_BUFFER_SIZE
    if animated is None:
        animated = frames > 1
    return Response(
        content=stream,
        media_type=MEDIA_TYPE,
        headers={
            "X-Frame-Count": str(frames),
            "X-Animated": "true" if animated else "false",
        },
    )


async def read_upload(file: UploadFile) -> bytes:
    """Читает загруженный файл, обрывая чтение при превышении max_upload_bytes"""
    chunks = []
    total = 0
    try:
        if file.size is not None:
            converter.check_size(file.size)

        while chunk := await file.read(UPLOAD_CHUNK_SIZE):
            total += len(chunk)
            converter.check_size(total)
            chunks.append(chunk)
    except ConverterError as e:
        raise to_http_exception(e)

    if total == 0:
        raise HTTPException(status_code=400, detail="Пустой файл")
    return b"".join(chunks)


@router.post("/image")
async def convert_image(file: UploadFile = File(...)):
    """Конвертирует статичное изображение в буфер одного кадра"""
    data = await read_upload(file)
    try:
        stream = await asyncio.to_thread(converter.convert_image, data)
    except ConverterError as e:
        raise to_http_exception(e)
    return _stream_response(stream, animated=False)


@router.post("/animation")
async def convert_animation(file: UploadFile = File(...)):
    """Конвертирует анимацию (GIF, APNG, WebP) в буфер всех кадров"""
    data = await read_upload(file)
    try:
        stream = await asyncio.to_thread(converter.convert_animation, data, _log_progress(file.filename or "upload"))
    except ConverterError as e:
        raise to_http_exception(e)
    # статичная картинка тоже проходит, тогда это один кадр
    return _stream_response(stream)


@router.post("")
async def convert_auto(file: UploadFile = File(...)):
    """Сам определяет тип файла"""
    data = await read_upload(file)
    try:
        result = await asyncio.to_thread(converter.convert, data, _log_progress(file.filename or "upload"))
    except ConverterError as e:
        raise to_http_exception(e)
    return _stream_response(result.stream, animated=result.animated)
