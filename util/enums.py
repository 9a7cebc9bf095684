# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class NamespaceCategory(str, Enum):
    SYSTEM = "system"
    COURTS = "courts"
    CLAIMANTS = "claimants"
    GOVERNMENT = "government"
    COMPLAINTS = "complaints"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    UNKNOWN_NAMESPACE = ErrorInfo(
        'Unknown namespace: "{name}". Available: {available}',
        status.HTTP_400_BAD_REQUEST,
    )
    UNMAPPED_FOLDER = ErrorInfo(
        'Folder "{folder}" is not mapped. Use email_list_folders to see available folders.',
        status.HTTP_404_NOT_FOUND,
    )
    TOO_MANY_KEYS = ErrorInfo(
        "Too many keys: {count} requested, at most {maximum} allowed",
        status.HTTP_400_BAD_REQUEST,
    )
    INVALID_CURSOR = ErrorInfo(
        "Cursor was not issued for this namespace and prefix",
        status.HTTP_400_BAD_REQUEST,
    )
    PAGINATION_EXHAUSTED = ErrorInfo(
        "Listing of {store} did not complete after {pages} pages",
        status.HTTP_502_BAD_GATEWAY,
    )
    STORE_UNAVAILABLE = ErrorInfo(
        "Store {store} is unavailable: {reason}",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    TOOL_NOT_FOUND = ErrorInfo(
        'Unknown tool: "{name}"', status.HTTP_404_NOT_FOUND
    )
    INVALID_TOOL_ARGUMENTS = ErrorInfo(
        "Invalid arguments for {name}: {details}",
        422,
    )
