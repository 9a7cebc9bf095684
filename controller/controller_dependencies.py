# controller/controller_dependencies.py
from functools import lru_cache
from fastapi import Depends
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from repository.namespace_registry import NamespaceRegistry
from service.entity_router import EntityRouter
from service.fleet_health import FleetHealthAggregator
from service.split_writer import SplitEntityWriter
from service.tool_service import ToolService


@lru_cache(maxsize=1)
def get_tool_service() -> ToolService:
    # Registry and folder table are read-only, so one instance serves every request.
    _registry = NamespaceRegistry()
    _router = EntityRouter()
    _writer = SplitEntityWriter(_registry, _router)
    _fleet = FleetHealthAggregator(_registry)
    return ToolService(_registry, _router, _writer, _fleet)


def rate_limit_dependencies() -> list:
    # RATE_LIMIT_TIMES=0 turns the limiter off (local runs, tests).
    if settings.RATE_LIMIT_TIMES <= 0:
        return []
    return [
        Depends(
            RateLimiter(times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS)
        )
    ]
