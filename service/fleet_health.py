# service/fleet_health.py
import asyncio
import logging
from typing import Iterable, Optional
from model.namespace import Namespace
from repository.namespace_registry import NamespaceRegistry
from service.store_accessor import StoreAccessor
from util.enums import NamespaceCategory
from util.timing import timed

logger = logging.getLogger(__name__)

# Recorded when a namespace holds more than one key, or its probe failed.
MORE_THAN_ONE = -1


class FleetHealthAggregator:
    """
    Cheap per-namespace probe: one single-key list call each, never a full count.
    Reports 0 or 1 exactly and -1 for "more than one" (or unreachable).
    """

    def __init__(self, registry: NamespaceRegistry) -> None:
        self._registry = registry

    def default_excluded(self) -> set[str]:
        return self._registry.names_in(NamespaceCategory.SYSTEM)

    async def _probe(self, ns: Namespace) -> int:
        try:
            store = StoreAccessor(self._registry.resolve(ns.store_id))
            page = await store.list_page(limit=1)
        except Exception as e:
            logger.warning(
                "pipeline.probe.error namespace=%s err=%s", ns.human_name, type(e).__name__
            )
            return MORE_THAN_ONE
        if page.complete and len(page.keys) <= 1:
            return len(page.keys)
        return MORE_THAN_ONE

    async def scan(self, excluded: Optional[Iterable[str]] = None) -> dict[str, int]:
        skip = self.default_excluded() if excluded is None else set(excluded)
        targets = [ns for ns in self._registry.namespaces() if ns.human_name not in skip]
        with timed(logger, "pipeline.scan", namespaces=len(targets)):
            counts = await asyncio.gather(*(self._probe(ns) for ns in targets))
        return {ns.human_name: n for ns, n in zip(targets, counts)}
