import logging
from typing import Optional
from urllib.parse import urlparse

from errors import TransportError
from models.config import DeviceConfig
from render.encoder import frame_count
from transport.base import TransportBase
from transport.http import HTTPTransport


logger = logging.getLogger(__name__)


class Driver:
    """Драйвер для отправки буферов кадров в транспорт"""

    def __init__(self):
        self._transport: Optional[TransportBase] = None

    def init_from_config(self, device: DeviceConfig) -> None:
        """
        Инициализирует транспорт из URI конфига.
        Примеры:
            - http://esp-home.local - REST API контроллера
            - https://192.168.1.100:8443
        Пустой URI - работаем только как конвертер, без отправки на устройство
        """
        if not device.transport:
            logger.warning("Транспорт не указан, отправка на контроллер отключена")
            self._transport = None
            return

        parsed = urlparse(device.transport)
        scheme = parsed.scheme

        if scheme in ("http", "https"):
            self._transport = HTTPTransport(device.transport, device=device)
            logger.info(f"Инициализирован HTTP транспорт: {device.transport}")
        else:
            raise ValueError(f"Неизвестный тип транспорта: {scheme}")

    def use_transport(self, transport: Optional[TransportBase]) -> None:
        self._transport = transport

    async def start(self) -> None:
        """Запускает транспорт"""
        if self._transport:
            await self._transport.start()

    async def stop(self) -> None:
        """Останавливает транспорт"""
        if self._transport:
            await self._transport.stop()

    def _require_transport(self) -> TransportBase:
        if self._transport is None:
            raise TransportError("Display controller transport is not configured")
        return self._transport

    async def is_connected(self) -> bool:
        """False если транспорт не настроен или еще не запущен"""
        if self._transport is None:
            return False
        return await self._transport.is_connected()

    async def send_stream(self, stream: bytes) -> int:
        """Проверяет поток и отправляет его на контроллер, возвращает число кадров"""
        frames = frame_count(stream)
        await self._require_transport().send_buffer(stream)
        return frames

    async def set_color(self, red: int, green: int, blue: int) -> None:
        await self._require_transport().set_color(red, green, blue)

    async def set_settings(self, brightness: int, speed: int) -> None:
        await self._require_transport().set_settings(brightness, speed)

    async def get_info(self) -> dict:
        return await self._require_transport().get_info()

    @property
    def transport(self) -> Optional[TransportBase]:
        return self._transport
