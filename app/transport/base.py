from abc import ABC, abstractmethod


class TransportBase(ABC):
    """Базовый класс для всех транспортов до контроллера дисплея"""

    @abstractmethod
    async def send_buffer(self, stream: bytes) -> None:
        """Отправляет байтовый поток кадров 64x64 (little-endian 0x00RRGGBB)"""
        pass

    @abstractmethod
    async def set_color(self, red: int, green: int, blue: int) -> None:
        """Заливает матрицу одним цветом"""
        pass

    @abstractmethod
    async def set_settings(self, brightness: int, speed: int) -> None:
        """Устанавливает яркость и скорость анимации"""
        pass

    @abstractmethod
    async def get_info(self) -> dict:
        """Возвращает информацию о контроллере"""
        pass

    @abstractmethod
    async def is_connected(self) -> bool:
        """Проверяет подключен ли транспорт"""
        pass

    @abstractmethod
    async def start(self) -> None:
        """Запускает транспорт"""
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Останавливает транспорт"""
        pass
