# util/errors.py
from typing import Iterable
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @property
    def message(self) -> str:
        return str(self.detail)


class UnknownNamespace(AppError):
    def __init__(self, name: str, available: Iterable[str]) -> None:
        info = ErrorMessage.UNKNOWN_NAMESPACE.value
        super().__init__(
            info.message.format(name=name, available=", ".join(available)),
            info.http_status,
        )
        self.name = name


class UnmappedClassification(AppError):
    def __init__(self, folder: str) -> None:
        info = ErrorMessage.UNMAPPED_FOLDER.value
        super().__init__(info.message.format(folder=folder), info.http_status)
        self.folder = folder


class TooManyKeys(AppError):
    def __init__(self, count: int, maximum: int) -> None:
        info = ErrorMessage.TOO_MANY_KEYS.value
        super().__init__(
            info.message.format(count=count, maximum=maximum), info.http_status
        )


class InvalidCursor(AppError):
    def __init__(self) -> None:
        info = ErrorMessage.INVALID_CURSOR.value
        super().__init__(info.message, info.http_status)


class PaginationExhausted(AppError):
    def __init__(self, store: str, pages: int) -> None:
        info = ErrorMessage.PAGINATION_EXHAUSTED.value
        super().__init__(info.message.format(store=store, pages=pages), info.http_status)


class StoreUnavailable(AppError):
    def __init__(self, store: str, reason: str = "request failed") -> None:
        info = ErrorMessage.STORE_UNAVAILABLE.value
        super().__init__(
            info.message.format(store=store, reason=reason), info.http_status
        )
        self.store = store


class ToolNotFound(AppError):
    def __init__(self, name: str) -> None:
        info = ErrorMessage.TOOL_NOT_FOUND.value
        super().__init__(info.message.format(name=name), info.http_status)


class InvalidToolArguments(AppError):
    def __init__(self, name: str, details: str) -> None:
        info = ErrorMessage.INVALID_TOOL_ARGUMENTS.value
        super().__init__(
            info.message.format(name=name, details=details), info.http_status
        )
