# service/tool_service.py
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional
from pydantic import BaseModel, ValidationError
from config.settings import settings
from model.api import ToolDescriptor, ToolResult
from model.namespace import KeyReadFailure
from model.tool_args import (
    BulkGetArgs,
    CountKeysArgs,
    DeleteKeyArgs,
    EmailStoreArgs,
    FolderStatsArgs,
    GetKeyArgs,
    ListKeysArgs,
    NoArgs,
    PutKeyArgs,
)
from repository.namespace_registry import NamespaceRegistry
from service.entity_router import EntityRouter
from service.fleet_health import FleetHealthAggregator
from service.split_writer import SplitEntityWriter
from service.store_accessor import StoreAccessor
from util.errors import AppError, InvalidToolArguments, ToolNotFound, UnmappedClassification

logger = logging.getLogger(__name__)

PIPELINE_NOTE = "-1 means namespace has >1 key (use kv_keys_count for exact)"


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_model: type[BaseModel]
    handler: Callable[[Any], Awaitable[ToolResult]]

    def describe(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            inputSchema=self.args_model.model_json_schema(),
        )


def _summarize(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', '')}")
    return "; ".join(parts)


class ToolService:
    """
    Named tools over the namespace layer.

    invoke() validates arguments before running anything: bad arguments raise
    InvalidToolArguments, an unknown name raises ToolNotFound. Failures inside
    a tool come back as ToolResult(is_error=True).
    """

    def __init__(
        self,
        registry: NamespaceRegistry,
        router: EntityRouter,
        writer: SplitEntityWriter,
        fleet: FleetHealthAggregator,
    ) -> None:
        self._registry = registry
        self._router = router
        self._writer = writer
        self._fleet = fleet
        self._tools: dict[str, Tool] = {
            t.name: t
            for t in (
                # KV
                Tool(
                    "kv_keys_list",
                    "List keys in a KV namespace. Use human-readable names like "
                    "'court-of-appeal', 'liu', 'ico', etc.",
                    ListKeysArgs,
                    self._keys_list,
                ),
                Tool(
                    "kv_keys_count",
                    "Count total keys in a KV namespace (paginates automatically)",
                    CountKeysArgs,
                    self._keys_count,
                ),
                Tool("kv_key_get", "Get the value of a single key", GetKeyArgs, self._key_get),
                Tool(
                    "kv_key_put",
                    "Write a key-value pair to a KV namespace",
                    PutKeyArgs,
                    self._key_put,
                ),
                Tool(
                    "kv_key_delete",
                    "Delete a key from a KV namespace",
                    DeleteKeyArgs,
                    self._key_delete,
                ),
                Tool(
                    "kv_keys_bulk_get",
                    f"Get values for multiple keys at once (max {settings.BULK_GET_MAX})",
                    BulkGetArgs,
                    self._keys_bulk_get,
                ),
                # Discovery
                Tool(
                    "namespaces_list",
                    "List all available KV namespace names and their categories",
                    NoArgs,
                    self._namespaces_list,
                ),
                # Email / folders
                Tool(
                    "email_list_folders",
                    "List IMAP folders that are mapped to KV namespaces for email processing",
                    NoArgs,
                    self._email_list_folders,
                ),
                Tool(
                    "email_folder_stats",
                    "Get email processing stats for a mapped IMAP folder",
                    FolderStatsArgs,
                    self._email_folder_stats,
                ),
                Tool(
                    "email_store",
                    "Store an email's metadata in its folder KV namespace and body "
                    "in the shared email-bodies namespace",
                    EmailStoreArgs,
                    self._email_store,
                ),
                # Pipeline
                Tool(
                    "pipeline_status",
                    "Get pipeline health: counts across all mapped namespaces",
                    NoArgs,
                    self._pipeline_status,
                ),
            )
        }

    def tools(self) -> list[Tool]:
        return list(self._tools.values())

    def get_tool(self, name: str) -> Tool:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFound(name)
        return tool

    async def invoke(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> ToolResult:
        tool = self.get_tool(name)
        try:
            args = tool.args_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            logger.info("tool.invalid_args name=%s errors=%d", name, e.error_count())
            raise InvalidToolArguments(name, _summarize(e)) from e

        try:
            result = await tool.handler(args)
        except AppError as e:
            logger.warning("tool.error name=%s status=%d msg=%s", name, e.status_code, e.message)
            return ToolResult.error(e.message)
        except Exception as e:
            logger.exception("tool.failed name=%s err=%s", name, type(e).__name__)
            return ToolResult.error(f"{name} failed: {type(e).__name__}: {e}")

        logger.info("tool.ok name=%s is_error=%s", name, result.is_error)
        return result

    def _accessor(self, namespace: str) -> StoreAccessor:
        return StoreAccessor(self._registry.resolve(namespace))

    # ---------------- KV ----------------

    async def _keys_list(self, args: ListKeysArgs) -> ToolResult:
        page = await self._accessor(args.namespace).list_page(
            prefix=args.prefix, cursor=args.cursor, limit=args.limit
        )
        return ToolResult.of_json(
            {
                "keys": page.keys,
                "count": len(page.keys),
                "list_complete": page.complete,
                "cursor": None if page.complete else page.cursor,
            }
        )

    async def _keys_count(self, args: CountKeysArgs) -> ToolResult:
        count = await self._accessor(args.namespace).count(args.prefix)
        return ToolResult.of_json({"count": count, "prefix": args.prefix or None}, indent=None)

    async def _key_get(self, args: GetKeyArgs) -> ToolResult:
        accessor = self._accessor(args.namespace)
        if args.include_metadata:
            entry = await accessor.get_with_metadata(args.key)
            if entry is None:
                return ToolResult.error(f'Key "{args.key}" not found')
            return ToolResult.of_json(entry.model_dump())
        value = await accessor.get(args.key)
        if value is None:
            return ToolResult.error(f'Key "{args.key}" not found')
        return ToolResult(text=value)

    async def _key_put(self, args: PutKeyArgs) -> ToolResult:
        await self._accessor(args.namespace).put(args.key, args.value, args.metadata)
        return ToolResult.of_json({"success": True, "key": args.key}, indent=None)

    async def _key_delete(self, args: DeleteKeyArgs) -> ToolResult:
        await self._accessor(args.namespace).delete(args.key)
        return ToolResult.of_json(
            {"success": True, "key": args.key, "deleted": True}, indent=None
        )

    async def _keys_bulk_get(self, args: BulkGetArgs) -> ToolResult:
        results = await self._accessor(args.namespace).get_many(args.keys)
        return ToolResult.of_json(
            {
                k: v.model_dump() if isinstance(v, KeyReadFailure) else v
                for k, v in results.items()
            }
        )

    # ---------------- Discovery ----------------

    async def _namespaces_list(self, args: NoArgs) -> ToolResult:
        return ToolResult.of_json(
            {"total": len(self._registry.names()), "categories": self._registry.categories()}
        )

    # ---------------- Email / folders ----------------

    async def _email_list_folders(self, args: NoArgs) -> ToolResult:
        folders = [
            {"folder": m.folder, "binding": m.store_id, "humanName": m.human_name}
            for m in self._router.mappings()
        ]
        return ToolResult.of_json({"total": len(folders), "folders": folders})

    async def _email_folder_stats(self, args: FolderStatsArgs) -> ToolResult:
        mapping = self._router.route(args.folder)
        if mapping is None:
            raise UnmappedClassification(args.folder)
        count = await self._accessor(mapping.store_id).count(settings.EMAIL_KEY_PREFIX)
        return ToolResult.of_json(
            {
                "folder": args.folder,
                "humanName": mapping.human_name,
                "binding": mapping.store_id,
                "emailCount": count,
            }
        )

    async def _email_store(self, args: EmailStoreArgs) -> ToolResult:
        written = await self._writer.write_split(
            args.folder, args.key, args.metadata, args.body, body_key=args.body_key
        )
        return ToolResult.of_json(
            {"success": True, "metadata_key": written.metadata_key, "body_key": written.body_key},
            indent=None,
        )

    # ---------------- Pipeline ----------------

    async def _pipeline_status(self, args: NoArgs) -> ToolResult:
        counts = await self._fleet.scan()
        return ToolResult.of_json(
            {"status": "ok", "namespace_counts": counts, "note": PIPELINE_NOTE}
        )
