# model/tool_args.py
from typing import Any
from pydantic import BaseModel, ConfigDict, Field
from config.settings import settings


class _Args(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NoArgs(_Args):
    pass


class NamespaceArgs(_Args):
    namespace: str = Field(
        min_length=1,
        description="Namespace name (e.g. 'court-of-appeal', 'liu', 'email-bodies')",
    )


class ListKeysArgs(NamespaceArgs):
    prefix: str | None = Field(default=None, description="Key prefix filter")
    limit: int = Field(
        default=settings.LIST_DEFAULT_LIMIT,
        ge=1,
        le=settings.LIST_MAX_LIMIT,
        description=f"Max keys per page (default {settings.LIST_DEFAULT_LIMIT})",
    )
    cursor: str | None = Field(
        default=None, description="Pagination cursor from previous call"
    )


class CountKeysArgs(NamespaceArgs):
    prefix: str | None = Field(default=None, description="Key prefix filter")


class GetKeyArgs(NamespaceArgs):
    key: str = Field(description="Key to retrieve")
    include_metadata: bool = Field(
        default=False, description="Return {value, metadata} instead of the raw value"
    )


class PutKeyArgs(NamespaceArgs):
    key: str = Field(description="Key to write")
    value: str = Field(description="Value to store")
    metadata: dict[str, Any] | None = Field(
        default=None, description="Optional metadata object"
    )


class DeleteKeyArgs(NamespaceArgs):
    key: str = Field(description="Key to delete")


class BulkGetArgs(NamespaceArgs):
    keys: list[str] = Field(
        max_length=settings.BULK_GET_MAX,
        description=f"Array of keys (max {settings.BULK_GET_MAX})",
    )


class FolderStatsArgs(_Args):
    folder: str = Field(
        description="IMAP folder path (e.g. 'INBOX/Courts/Court of Appeal')"
    )


class EmailStoreArgs(_Args):
    folder: str = Field(description="IMAP folder path")
    key: str = Field(description="KV key for the email metadata")
    metadata: str = Field(description="JSON string of email metadata")
    body: str = Field(description="Email body text")
    body_key: str | None = Field(
        default=None,
        description="UUID key for the email body; derived from the body when omitted",
    )
