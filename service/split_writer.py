# service/split_writer.py
import logging
from typing import Optional
from pydantic import BaseModel
from repository.namespace_registry import NamespaceRegistry
from repository.namespaces import BODIES_NAMESPACE
from service.entity_router import EntityRouter
from service.store_accessor import StoreAccessor
from util import functions
from util.errors import UnmappedClassification

logger = logging.getLogger(__name__)


class SplitWriteResult(BaseModel):
    metadata_key: str
    body_key: str


class SplitEntityWriter:
    """
    Stores an email as two entries: metadata in the folder's namespace,
    body in the shared bodies namespace.

    Metadata is written first, body second. The writes are not coordinated:
    if the body write fails, the metadata entry stays and points at a body
    key that does not exist. Nothing is rolled back; the error propagates.
    """

    def __init__(
        self,
        registry: NamespaceRegistry,
        router: EntityRouter,
        bodies_namespace: str = BODIES_NAMESPACE,
    ) -> None:
        self._registry = registry
        self._router = router
        self._bodies_namespace = bodies_namespace

    async def write_split(
        self,
        folder: str,
        metadata_key: str,
        metadata_value: str,
        body_value: str,
        body_key: Optional[str] = None,
    ) -> SplitWriteResult:
        mapping = self._router.route(folder)
        if mapping is None:
            raise UnmappedClassification(folder)

        folder_store = StoreAccessor(self._registry.resolve(mapping.store_id))
        bodies_store = StoreAccessor(self._registry.resolve(self._bodies_namespace))
        body_key = body_key or functions.body_uuid(body_value)

        await folder_store.put(
            metadata_key,
            metadata_value,
            {"folder": folder, "body_uuid": body_key, "stored_at": functions.utc_iso_now()},
        )
        try:
            await bodies_store.put(
                body_key,
                body_value,
                {
                    "folder": folder,
                    "humanName": mapping.human_name,
                    "stored_at": functions.utc_iso_now(),
                },
            )
        except Exception:
            logger.warning(
                "email.store.body_failed folder=%s metadata_key=%s body_key=%s dangling=true",
                folder,
                metadata_key,
                body_key,
            )
            raise

        logger.info(
            "email.store.ok folder=%s store=%s metadata_key=%s body_key=%s bytes=%d",
            folder,
            mapping.store_id,
            metadata_key,
            body_key,
            len(body_value),
        )
        return SplitWriteResult(metadata_key=metadata_key, body_key=body_key)
