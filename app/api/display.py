import asyncio
from fastapi import APIRouter, File, Request, UploadFile
from pydantic import BaseModel, Field
from api.convert import read_upload
from api.errors import to_http_exception
from dependencies import converter, driver
from errors import ConverterError


router = APIRouter()


class SetColorRequest(BaseModel):
    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)


class SetSettingsRequest(BaseModel):
    brightness: int = Field(ge=0, le=255)
    speed: int = Field(ge=0, le=0xFFFF)


@router.post("/upload")
async def upload_to_display(file: UploadFile = File(...)):
    """Конвертирует файл и отправляет результат на контроллер"""
    data = await read_upload(file)
    try:
        result = await asyncio.to_thread(converter.convert, data)
        await driver.send_stream(result.stream)
    except ConverterError as e:
        raise to_http_exception(e)
    return {
        "status": "ok",
        "frames": result.frame_count,
        "animated": result.animated,
        "bytes": len(result.stream),
    }


@router.post("/buffer")
async def send_buffer(request: Request):
    """Отправляет уже сконвертированный буфер (например, из CLI) как есть"""
    stream = await request.body()
    try:
        frames = await driver.send_stream(stream)
    except ConverterError as e:
        raise to_http_exception(e)
    return {"status": "ok", "frames": frames, "bytes": len(stream)}


@router.post("/color")
async def set_color(request: SetColorRequest):
    """Заливает матрицу одним цветом"""
    try:
        await driver.set_color(request.red, request.green, request.blue)
    except ConverterError as e:
        raise to_http_exception(e)
    return {"status": "ok", "color": request.model_dump()}


@router.post("/settings")
async def set_settings(request: SetSettingsRequest):
    """Устанавливает яркость и скорость"""
    try:
        await driver.set_settings(request.brightness, request.speed)
    except ConverterError as e:
        raise to_http_exception(e)
    return {"status": "ok", "settings": request.model_dump()}


@router.get("/info")
async def get_info():
    """Возвращает информацию о контроллере"""
    try:
        return await driver.get_info()
    except ConverterError as e:
        raise to_http_exception(e)


@router.get("/status")
async def get_status():
    """Состояние подключения к контроллеру, без обращения к самому устройству"""
    return {
        "configured": driver.transport is not None,
        "connected": await driver.is_connected(),
    }
