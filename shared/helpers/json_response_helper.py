from shared.core.errors import AppError
from shared.utils.enums import ErrorKind


def error_response(message: str, kind: ErrorKind = ErrorKind.INVALID_INPUT):
    raise AppError(kind, message)
