from __future__ import annotations

import enum
from http import HTTPStatus

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"


class ErrorCode(str, enum.Enum):
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def status(self) -> HTTPStatus:
        return STATUS[self]

    @classmethod
    def from_status(cls, status: int) -> ErrorCode:
        for code, code_status in STATUS.items():
            if code_status == status:
                return code
        return cls.INTERNAL_ERROR if status >= 500 else cls.BAD_REQUEST


STATUS = {
    ErrorCode.BAD_REQUEST: HTTPStatus.BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorCode.FORBIDDEN: HTTPStatus.FORBIDDEN,
    ErrorCode.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorCode.CONFLICT: HTTPStatus.CONFLICT,
    ErrorCode.UNSUPPORTED_MEDIA_TYPE: HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
    ErrorCode.INTERNAL_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class APIError(Exception):
    def __init__(self, code: ErrorCode, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause

    @property
    def status(self) -> HTTPStatus:
        return self.code.status


def is_unique_violation(error: IntegrityError) -> bool:
    if getattr(error.orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(error.orig)


def from_integrity_error(error: IntegrityError, noun: str) -> APIError:
    if is_unique_violation(error):
        return APIError(ErrorCode.CONFLICT, f"{noun} already exists", error)
    return APIError(ErrorCode.BAD_REQUEST, f"invalid {noun}", error)
