"""Shared fixtures: in-memory namespace stores and a minimal fake Redis."""

from __future__ import annotations

import os

# Before any project import: no limiter, no .env loading.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("RATE_LIMIT_TIMES", "0")

from typing import Any, Optional

import pytest

from model.namespace import KeyPage, StoredEntry
from repository import kv_store
from repository.kv_store import decode_cursor, encode_cursor
from repository.namespace_registry import NamespaceRegistry
from repository.namespaces import NAMESPACES
from service.entity_router import EntityRouter
from service.fleet_health import FleetHealthAggregator
from service.split_writer import SplitEntityWriter
from service.tool_service import ToolService
from util.errors import StoreUnavailable


class InMemoryKVStore:
    """KVStore double with lexicographic listing and failure injection."""

    def __init__(self, store_id: str, keys: Optional[dict[str, str]] = None) -> None:
        self.store_id = store_id
        self.data: dict[str, StoredEntry] = {
            k: StoredEntry(value=v) for k, v in (keys or {}).items()
        }
        self.calls: list[tuple[str, Any]] = []
        self.failing_ops: set[str] = set()
        self.failing_keys: set[str] = set()
        self.never_complete = False

    def _check(self, op: str, key: Optional[str] = None) -> None:
        self.calls.append((op, key))
        if op in self.failing_ops or (key is not None and key in self.failing_keys):
            raise StoreUnavailable(self.store_id, "injected")

    async def list(
        self, prefix: Optional[str], cursor: Optional[str], limit: int
    ) -> KeyPage:
        self._check("list")
        keys = sorted(k for k in self.data if not prefix or k.startswith(prefix))
        if cursor:
            last = decode_cursor(cursor, self.store_id, prefix)
            keys = [k for k in keys if k > last]
        page = keys[:limit]
        if self.never_complete:
            return KeyPage(
                keys=page,
                cursor=encode_cursor(self.store_id, prefix, page[-1] if page else ""),
                complete=False,
            )
        if len(keys) <= limit:
            return KeyPage(keys=page, cursor=None, complete=True)
        return KeyPage(
            keys=page, cursor=encode_cursor(self.store_id, prefix, page[-1]), complete=False
        )

    async def get(self, key: str) -> Optional[str]:
        self._check("get", key)
        entry = self.data.get(key)
        return entry.value if entry else None

    async def get_with_metadata(self, key: str) -> Optional[StoredEntry]:
        self._check("get", key)
        return self.data.get(key)

    async def put(
        self, key: str, value: str, metadata: Optional[dict[str, Any]] = None
    ) -> None:
        self._check("put", key)
        self.data[key] = StoredEntry(value=value, metadata=metadata or None)

    async def delete(self, key: str) -> None:
        self._check("delete", key)
        self.data.pop(key, None)

    @property
    def writes(self) -> list[tuple[str, Any]]:
        return [c for c in self.calls if c[0] in ("put", "delete")]


@pytest.fixture
def stores() -> dict[str, InMemoryKVStore]:
    """One empty store per registered namespace, keyed by store id."""
    return {ns.store_id: InMemoryKVStore(ns.store_id) for ns in NAMESPACES}


@pytest.fixture
def registry(stores) -> NamespaceRegistry:
    return NamespaceRegistry(bindings=stores)


@pytest.fixture
def router() -> EntityRouter:
    return EntityRouter()


@pytest.fixture
def writer(registry, router) -> SplitEntityWriter:
    return SplitEntityWriter(registry, router)


@pytest.fixture
def fleet(registry) -> FleetHealthAggregator:
    return FleetHealthAggregator(registry)


@pytest.fixture
def tool_service(registry, router, writer, fleet) -> ToolService:
    return ToolService(registry, router, writer, fleet)


# ── Fake Redis (only the commands RedisKVStore issues) ─────────────────


def _lex_bound(bound: str, lower: bool):
    if bound == "-":
        return None if lower else ("", False)
    if bound == "+":
        return None
    return bound[1:], bound[0] == "["


class FakeRedis:
    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.zsets: dict[str, set[str]] = {}
        self.fail = False

    def _guard(self) -> None:
        if self.fail:
            from redis.exceptions import ConnectionError

            raise ConnectionError("fake outage")

    async def get(self, name: str) -> Optional[str]:
        self._guard()
        return self.strings.get(name)

    async def zrangebylex(self, name, min, max, start=None, num=None):
        self._guard()
        members = sorted(self.zsets.get(name, set()))
        lo = _lex_bound(min, lower=True)
        hi = None if max == "+" else _lex_bound(max, lower=False)
        out = []
        for m in members:
            if lo is not None and (m < lo[0] or (m == lo[0] and not lo[1])):
                continue
            if hi is not None and (m > hi[0] or (m == hi[0] and not hi[1])):
                continue
            out.append(m)
        if start is not None and num is not None:
            out = out[start : start + num]
        return out

    def pipeline(self, transaction: bool = True) -> "FakePipeline":
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, redis: FakeRedis) -> None:
        self._r = redis
        self._ops: list[tuple[str, tuple]] = []

    async def __aenter__(self) -> "FakePipeline":
        return self

    async def __aexit__(self, *args: Any) -> None:
        self._ops.clear()

    def get(self, name):
        self._ops.append(("get", (name,)))
        return self

    def set(self, name, value):
        self._ops.append(("set", (name, value)))
        return self

    def delete(self, *names):
        self._ops.append(("delete", names))
        return self

    def zadd(self, name, mapping):
        self._ops.append(("zadd", (name, mapping)))
        return self

    def zrem(self, name, *values):
        self._ops.append(("zrem", (name, values)))
        return self

    async def execute(self) -> list:
        self._r._guard()
        out = []
        for op, args in self._ops:
            if op == "get":
                out.append(self._r.strings.get(args[0]))
            elif op == "set":
                self._r.strings[args[0]] = args[1]
                out.append(True)
            elif op == "delete":
                out.append(sum(self._r.strings.pop(n, None) is not None for n in args))
            elif op == "zadd":
                zs = self._r.zsets.setdefault(args[0], set())
                added = [m for m in args[1] if m not in zs]
                zs.update(args[1])
                out.append(len(added))
            elif op == "zrem":
                zs = self._r.zsets.setdefault(args[0], set())
                removed = [m for m in args[1] if m in zs]
                zs.difference_update(args[1])
                out.append(len(removed))
        self._ops.clear()
        return out


@pytest.fixture
def fake_redis(monkeypatch) -> FakeRedis:
    fake = FakeRedis()

    async def _get_redis() -> FakeRedis:
        return fake

    monkeypatch.setattr(kv_store, "get_redis", _get_redis)
    return fake
