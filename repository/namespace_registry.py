# repository/namespace_registry.py
from types import MappingProxyType
from typing import Iterable, Mapping, Optional
from model.namespace import Namespace
from repository.kv_store import KVStore, RedisKVStore
from repository.namespaces import NAMESPACES
from util.enums import NamespaceCategory
from util.errors import UnknownNamespace


class NamespaceRegistry:
    """
    Read-only view over the registered namespaces and the stores bound to them.

    A reference may be a raw store id ("KV_COURT_OF_APPEAL") or a human name
    ("court-of-appeal"); both go through `resolve`.
    """

    def __init__(
        self,
        bindings: Optional[Mapping[str, KVStore]] = None,
        namespaces: Iterable[Namespace] = NAMESPACES,
    ) -> None:
        self._namespaces: tuple[Namespace, ...] = tuple(namespaces)
        self._name_to_id = MappingProxyType(
            {ns.human_name: ns.store_id for ns in self._namespaces}
        )
        if bindings is None:
            bindings = {ns.store_id: RedisKVStore(ns.store_id) for ns in self._namespaces}
        self._bindings = MappingProxyType(dict(bindings))

    def namespaces(self) -> tuple[Namespace, ...]:
        return self._namespaces

    def names(self) -> list[str]:
        return list(self._name_to_id)

    def categories(self) -> dict[str, list[str]]:
        out: dict[str, list[str]] = {c.value: [] for c in NamespaceCategory}
        for ns in self._namespaces:
            out[ns.category.value].append(ns.human_name)
        return out

    def names_in(self, category: NamespaceCategory) -> set[str]:
        return {ns.human_name for ns in self._namespaces if ns.category == category}

    def resolve(self, name_or_id: str) -> KVStore:
        # Raw store id first, then human name.
        store = self._bindings.get(name_or_id)
        if store is not None:
            return store
        store_id = self._name_to_id.get(name_or_id)
        if store_id is not None and store_id in self._bindings:
            return self._bindings[store_id]
        raise UnknownNamespace(name_or_id, self.names())
