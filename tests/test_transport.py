import asyncio
import json

import httpx
import pytest

from errors import InvalidInput, TransportError
from models.config import DeviceConfig
from transport.driver import Driver
from transport.http import HTTPTransport


class RecordingDevice:
    """Эмулятор REST API контроллера"""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="GIF buffer must be greater than 16384")
        if request.url.path == "/system/info":
            return httpx.Response(200, json={"version": "v5.1", "cores": 2})
        return httpx.Response(200, text="ok")


def _transport(device) -> HTTPTransport:
    return HTTPTransport("http://esp-home.local", transport=httpx.MockTransport(device))


async def _run(transport: HTTPTransport, call):
    await transport.start()
    try:
        return await call(transport)
    finally:
        await transport.stop()


def test_send_buffer_posts_raw_bytes():
    device = RecordingDevice()
    stream = bytes(range(256)) * 64

    asyncio.run(_run(_transport(device), lambda t: t.send_buffer(stream)))

    request = device.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/gif"
    assert request.headers["content-type"] == "application/octet-stream"
    assert request.content == stream


def test_color_and_settings_are_json():
    device = RecordingDevice()

    async def calls(t):
        await t.set_color(1, 2, 3)
        await t.set_settings(128, 50)

    asyncio.run(_run(_transport(device), calls))

    assert device.requests[0].url.path == "/api/rgb"
    assert json.loads(device.requests[0].content) == {"red": 1, "green": 2, "blue": 3}
    assert device.requests[1].url.path == "/api/settings"
    assert json.loads(device.requests[1].content) == {"brightness": 128, "speed": 50}


def test_get_info():
    info = asyncio.run(_run(_transport(RecordingDevice()), lambda t: t.get_info()))
    assert info == {"version": "v5.1", "cores": 2}


def test_custom_paths():
    device = RecordingDevice()
    cfg = DeviceConfig(transport="http://device", buffer_path="/upload")
    transport = HTTPTransport("http://device", device=cfg, transport=httpx.MockTransport(device))

    asyncio.run(_run(transport, lambda t: t.send_buffer(b"\x00" * 4)))

    assert device.requests[0].url.path == "/upload"


def test_error_status_raises_transport_error():
    with pytest.raises(TransportError):
        asyncio.run(_run(_transport(RecordingDevice(status_code=400)), lambda t: t.send_buffer(b"1234")))


def test_unreachable_device_raises_transport_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(_run(_transport(refuse), lambda t: t.get_info()))
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_not_started_raises():
    with pytest.raises(TransportError):
        asyncio.run(_transport(RecordingDevice()).send_buffer(b""))


def test_driver_picks_transport_by_scheme():
    driver = Driver()

    driver.init_from_config(DeviceConfig(transport="http://192.168.1.100"))
    assert isinstance(driver.transport, HTTPTransport)

    driver.init_from_config(DeviceConfig(transport=""))
    assert driver.transport is None

    with pytest.raises(ValueError):
        driver.init_from_config(DeviceConfig(transport="udp://192.168.1.100:5555"))


def test_driver_validates_stream_before_sending():
    device = RecordingDevice()
    driver = Driver()
    driver.use_transport(_transport(device))

    async def send():
        await driver.start()
        try:
            with pytest.raises(InvalidInput):
                await driver.send_stream(b"\x00" * 100)
            return await driver.send_stream(b"\x00" * 2 * 16384)
        finally:
            await driver.stop()

    assert asyncio.run(send()) == 2
    assert len(device.requests) == 1


def test_driver_without_transport():
    with pytest.raises(TransportError):
        asyncio.run(Driver().send_stream(b"\x00" * 16384))


def test_driver_is_connected_follows_transport_lifecycle():
    driver = Driver()
    assert not asyncio.run(driver.is_connected())

    driver.use_transport(_transport(RecordingDevice()))

    async def lifecycle():
        before = await driver.is_connected()
        await driver.start()
        running = await driver.is_connected()
        await driver.stop()
        return before, running, await driver.is_connected()

    assert asyncio.run(lifecycle()) == (False, True, False)
