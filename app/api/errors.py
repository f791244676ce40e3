import logging
from fastapi import HTTPException
from errors import ConverterError, DecodeError, InvalidInput, ResourceError, TransportError

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    InvalidInput: 400,
    DecodeError: 422,
    ResourceError: 500,
    TransportError: 502,
}


def to_http_exception(e: ConverterError) -> HTTPException:
    """Переводит ошибку конвертера в HTTP ответ"""
    status_code = 500
    for error_type, code in _STATUS_CODES.items():
        if isinstance(e, error_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error(f"{type(e).__name__}: {e}", exc_info=e.__cause__ is not None)
    else:
        logger.warning(f"{type(e).__name__}: {e}")

    return HTTPException(status_code=status_code, detail=str(e))
