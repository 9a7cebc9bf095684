# service/entity_router.py
from typing import Mapping, Optional
from model.namespace import FolderMapping
from repository.namespaces import FOLDER_MAP


class EntityRouter:
    """Folder path -> owning namespace. Static lookup, never touches a store."""

    def __init__(self, folders: Mapping[str, FolderMapping] = FOLDER_MAP) -> None:
        self._folders = folders

    def route(self, folder: str) -> Optional[FolderMapping]:
        return self._folders.get(folder)

    def mappings(self) -> list[FolderMapping]:
        return list(self._folders.values())
