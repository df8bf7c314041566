# product_api/errors.py
from enum import Enum
from http import HTTPStatus


class ErrorKind(str, Enum):
    """Error kinds surfaced to clients. The value is the wire name."""

    NOT_FOUND = "NotFoundError"
    VALIDATION = "ValidationError"
    AUTH = "AuthError"
    INTERNAL = "InternalServerError"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTH: 401,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self):
        return {"error": self.kind.value, "message": self.message}


def not_found(message: str = "Product not found") -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, message)


def invalid(message: str) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message)


def unauthorized(message: str = "Invalid or missing API Key") -> ServiceError:
    return ServiceError(ErrorKind.AUTH, message)


def error_name_for_status(status_code: int) -> str:
    """Wire name for a bare HTTP status, e.g. 405 -> "MethodNotAllowedError"."""
    for kind, code in _STATUS_CODES.items():
        if code == status_code:
            return kind.value
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return ErrorKind.INTERNAL.value
    return "".join(word for word in phrase.replace("-", " ").split() if word.isalnum()) + "Error"
