# service/store_accessor.py
import asyncio
import logging
from typing import Any, Optional, Sequence, Union
from config.settings import settings
from model.namespace import KeyPage, KeyReadFailure, StoredEntry
from repository.kv_store import KVStore
from util.errors import PaginationExhausted, StoreUnavailable, TooManyKeys
from util.timing import timed

logger = logging.getLogger(__name__)

BulkValue = Union[str, None, KeyReadFailure]


class StoreAccessor:
    """Uniform operations against one resolved namespace store."""

    def __init__(
        self,
        store: KVStore,
        *,
        default_limit: int = settings.LIST_DEFAULT_LIMIT,
        max_limit: int = settings.LIST_MAX_LIMIT,
        page_size: int = settings.LIST_ALL_PAGE_SIZE,
        max_pages: int = settings.LIST_ALL_MAX_PAGES,
        bulk_max: int = settings.BULK_GET_MAX,
    ) -> None:
        self._store = store
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._page_size = page_size
        self._max_pages = max_pages
        self._bulk_max = bulk_max

    @property
    def store_id(self) -> str:
        return self._store.store_id

    def _clamp(self, limit: Optional[int]) -> int:
        if limit is None:
            return self._default_limit
        return max(1, min(int(limit), self._max_limit))

    async def list_page(
        self,
        prefix: Optional[str] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> KeyPage:
        return await self._store.list(prefix or None, cursor or None, self._clamp(limit))

    async def list_all(self, prefix: Optional[str] = None) -> list[str]:
        """
        Follow cursors from the first page until the store reports completion.
        Gives up with PaginationExhausted after max_pages pages.
        """
        keys: list[str] = []
        cursor: Optional[str] = None
        with timed(logger, "kv.list_all", store=self.store_id) as fields:
            for pages in range(1, self._max_pages + 1):
                page = await self._store.list(
                    prefix or None, cursor, self._clamp(self._page_size)
                )
                keys.extend(page.keys)
                if page.complete:
                    fields.update(pages=pages, keys=len(keys))
                    return keys
                cursor = page.cursor
            fields.update(pages=self._max_pages, keys=len(keys), exhausted=True)
        raise PaginationExhausted(self.store_id, self._max_pages)

    async def count(self, prefix: Optional[str] = None) -> int:
        return len(await self.list_all(prefix))

    async def get(self, key: str) -> Optional[str]:
        return await self._store.get(key)

    async def get_with_metadata(self, key: str) -> Optional[StoredEntry]:
        return await self._store.get_with_metadata(key)

    async def _read_one(self, key: str) -> BulkValue:
        try:
            return await self._store.get(key)
        except StoreUnavailable as e:
            return KeyReadFailure(error=e.message)
        except Exception as e:
            logger.error("kv.get_many.key_error store=%s err=%s", self.store_id, type(e).__name__)
            return KeyReadFailure(error=f"{type(e).__name__}: {e}")

    async def get_many(self, keys: Sequence[str]) -> dict[str, BulkValue]:
        if len(keys) > self._bulk_max:
            raise TooManyKeys(len(keys), self._bulk_max)
        values = await asyncio.gather(*(self._read_one(k) for k in keys))
        results = dict(zip(keys, values))
        failed = sum(isinstance(v, KeyReadFailure) for v in results.values())
        if failed:
            logger.warning(
                "kv.get_many.partial store=%s failed=%d total=%d",
                self.store_id,
                failed,
                len(results),
            )
        return results

    async def put(
        self, key: str, value: str, metadata: Optional[dict[str, Any]] = None
    ) -> bool:
        await self._store.put(key, value, metadata)
        return True

    async def delete(self, key: str) -> bool:
        await self._store.delete(key)
        return True
