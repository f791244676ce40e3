# ошибки конвертера, api/ переводит их в HTTP коды


class ConverterError(Exception):
    """Базовая ошибка конвертера"""
    pass


class InvalidInput(ConverterError):
    """Некорректные входные данные (нулевой размер, неверная длина буфера, лимиты)"""
    pass


class DecodeError(ConverterError):
    """Не удалось декодировать изображение или анимацию"""
    pass


class ResourceError(ConverterError):
    """Не удалось выделить ресурсы для декодирования или отрисовки"""
    pass


class TransportError(ConverterError):
    """Контроллер дисплея недоступен или вернул ошибку"""
    pass
