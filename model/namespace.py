# model/namespace.py
from typing import Any
from pydantic import BaseModel, ConfigDict, Field
from util.enums import NamespaceCategory


class Namespace(BaseModel):
    model_config = ConfigDict(frozen=True)

    human_name: str
    store_id: str
    category: NamespaceCategory


class FolderMapping(BaseModel):
    model_config = ConfigDict(frozen=True)

    folder: str
    store_id: str
    human_name: str


class KeyPage(BaseModel):
    keys: list[str] = Field(default_factory=list)
    cursor: str | None = None
    complete: bool = True


class StoredEntry(BaseModel):
    value: str
    metadata: dict[str, Any] | None = None


class KeyReadFailure(BaseModel):
    # Per-key sentinel in bulk reads; the batch itself still succeeds.
    error: str
