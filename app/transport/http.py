import logging
from typing import Optional

import httpx

from errors import TransportError
from models.config import DeviceConfig
from transport.base import TransportBase


logger = logging.getLogger(__name__)


class HTTPTransport(TransportBase):
    """HTTP транспорт до REST API контроллера на ESP32"""

    def __init__(
        self,
        base_url: str,
        device: DeviceConfig | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        base_url - адрес контроллера, например http://esp-home.local
        device - пути эндпоинтов и таймаут
        transport - подменяемый транспорт httpx (для тестов)
        """
        self.base_url = base_url.rstrip("/")
        self.device = device or DeviceConfig(transport=base_url)
        self._http_transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        """Создает HTTP клиент"""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.device.timeout,
            transport=self._http_transport,
        )
        logger.info(f"HTTP транспорт запущен: {self.base_url}")

    async def stop(self) -> None:
        """Закрывает HTTP клиент"""
        if self._client:
            await self._client.aclose()
            self._client = None
        logger.info("HTTP транспорт остановлен")

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        if not self._client:
            raise TransportError("HTTP transport is not started")

        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Контроллер вернул {e.response.status_code} на {method} {path}: {e.response.text}")
            raise TransportError(f"Display controller returned {e.response.status_code}: {e.response.text}") from e
        except httpx.HTTPError as e:
            logger.error(f"Ошибка запроса {method} {path}: {e}")
            raise TransportError(f"Display controller is unreachable: {e}") from e

        return response

    async def send_buffer(self, stream: bytes) -> None:
        """Отправляет весь буфер кадров одним запросом"""
        await self._request(
            "POST",
            self.device.buffer_path,
            content=stream,
            headers={"Content-Type": "application/octet-stream"},
        )
        logger.info(f"Отправлен буфер {len(stream)} байт")

    async def set_color(self, red: int, green: int, blue: int) -> None:
        await self._request("POST", self.device.color_path, json={"red": red, "green": green, "blue": blue})

    async def set_settings(self, brightness: int, speed: int) -> None:
        await self._request("POST", self.device.settings_path, json={"brightness": brightness, "speed": speed})

    async def get_info(self) -> dict:
        response = await self._request("GET", self.device.info_path)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Display controller returned invalid JSON: {e}") from e

    async def is_connected(self) -> bool:
        """HTTP без постоянного соединения, True если клиент создан"""
        return self._client is not None
