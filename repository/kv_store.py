# repository/kv_store.py
import base64
import binascii
import json
import logging
from typing import Any, Optional, Protocol
from redis.asyncio import Redis
from redis.exceptions import RedisError
from config.cache import get_redis
from model.namespace import KeyPage, StoredEntry
from repository.namespaces import KV
from util.errors import InvalidCursor, StoreUnavailable
from util.functions import lex_successor

logger = logging.getLogger(__name__)


class KVStore(Protocol):
    """One independent key-value namespace."""

    store_id: str

    async def list(
        self, prefix: Optional[str], cursor: Optional[str], limit: int
    ) -> KeyPage: ...

    async def get(self, key: str) -> Optional[str]: ...

    async def get_with_metadata(self, key: str) -> Optional[StoredEntry]: ...

    async def put(
        self, key: str, value: str, metadata: Optional[dict[str, Any]] = None
    ) -> None: ...

    async def delete(self, key: str) -> None: ...


def encode_cursor(store_id: str, prefix: Optional[str], last_key: str) -> str:
    raw = json.dumps([store_id, prefix or "", last_key], separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str, store_id: str, prefix: Optional[str]) -> str:
    """Return the last key a cursor points past; reject foreign cursors."""
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
        issued_store, issued_prefix, last_key = json.loads(raw)
    except (binascii.Error, UnicodeError, ValueError, TypeError):
        raise InvalidCursor() from None
    if issued_store != store_id or issued_prefix != (prefix or ""):
        raise InvalidCursor()
    if not isinstance(last_key, str):
        raise InvalidCursor()
    return last_key


class RedisKVStore:
    """
    Redis-backed namespace. Layout under {KV}:{store_id}:
      v:<key>  value string
      m:<key>  JSON metadata (absent when none was given)
      idx      sorted set of keys, all scores 0, so ZRANGEBYLEX gives key order

    Any Redis failure surfaces as StoreUnavailable for this store only.
    """

    def __init__(self, store_id: str) -> None:
        self.store_id = store_id
        self._base = f"{KV}:{store_id}"

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    def _value_key(self, key: str) -> str:
        return f"{self._base}:v:{key}"

    def _meta_key(self, key: str) -> str:
        return f"{self._base}:m:{key}"

    @property
    def _index(self) -> str:
        return f"{self._base}:idx"

    def _unavailable(self, op: str, e: Exception) -> StoreUnavailable:
        logger.error("kv.%s.error store=%s err=%s", op, self.store_id, type(e).__name__)
        return StoreUnavailable(self.store_id, type(e).__name__)

    async def list(
        self, prefix: Optional[str], cursor: Optional[str], limit: int
    ) -> KeyPage:
        lo = f"[{prefix}" if prefix else "-"
        if cursor:
            lo = f"({decode_cursor(cursor, self.store_id, prefix)}"
        upper = lex_successor(prefix) if prefix else None
        hi = f"({upper}" if upper is not None else "+"
        try:
            r = await self._client()
            # One extra member tells us whether another page exists.
            members = await r.zrangebylex(self._index, lo, hi, start=0, num=limit + 1)
        except RedisError as e:
            raise self._unavailable("list", e) from e

        keys = list(members[:limit])
        if len(members) <= limit or not keys:
            return KeyPage(keys=keys, cursor=None, complete=True)
        return KeyPage(
            keys=keys,
            cursor=encode_cursor(self.store_id, prefix, keys[-1]),
            complete=False,
        )

    async def get(self, key: str) -> Optional[str]:
        try:
            r = await self._client()
            return await r.get(self._value_key(key))
        except RedisError as e:
            raise self._unavailable("get", e) from e

    async def get_with_metadata(self, key: str) -> Optional[StoredEntry]:
        try:
            r = await self._client()
            async with r.pipeline(transaction=False) as pipe:
                pipe.get(self._value_key(key))
                pipe.get(self._meta_key(key))
                value, raw_meta = await pipe.execute()
        except RedisError as e:
            raise self._unavailable("get", e) from e
        if value is None:
            return None
        try:
            metadata = json.loads(raw_meta) if raw_meta else None
        except ValueError as e:
            logger.error("kv.get.bad_metadata store=%s key=%s", self.store_id, key)
            raise StoreUnavailable(
                self.store_id, f'metadata for "{key}" is not valid JSON'
            ) from e
        return StoredEntry(value=value, metadata=metadata)

    async def put(
        self, key: str, value: str, metadata: Optional[dict[str, Any]] = None
    ) -> None:
        try:
            r = await self._client()
            async with r.pipeline(transaction=True) as pipe:
                pipe.set(self._value_key(key), value)
                if metadata:
                    pipe.set(self._meta_key(key), json.dumps(metadata))
                else:
                    pipe.delete(self._meta_key(key))
                pipe.zadd(self._index, {key: 0})
                await pipe.execute()
        except RedisError as e:
            raise self._unavailable("put", e) from e

    async def delete(self, key: str) -> None:
        try:
            r = await self._client()
            async with r.pipeline(transaction=True) as pipe:
                pipe.delete(self._value_key(key), self._meta_key(key))
                pipe.zrem(self._index, key)
                await pipe.execute()
        except RedisError as e:
            raise self._unavailable("delete", e) from e
