# mcp_server.py
"""
MCP interface for the MobiCycle KV namespaces.

Each tool is a thin wrapper over ToolService.invoke so the MCP endpoint and
the REST endpoint share argument validation and result formatting. Errors are
raised as ToolError, which FastMCP reports as an isError result.

Served over streamable HTTP, either mounted into main:app at /mcp or
standalone with `python mcp_server.py`.
"""

from typing import Any, Optional
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from config.settings import settings
from controller.controller_dependencies import get_tool_service
from util.errors import AppError

mcp = FastMCP(settings.SERVER_NAME)


async def _run(name: str, **arguments: Any) -> str:
    # Drop unset optionals so the argument model applies its own defaults.
    args = {k: v for k, v in arguments.items() if v is not None}
    try:
        result = await get_tool_service().invoke(name, args)
    except AppError as e:
        raise ToolError(e.message) from e
    if result.is_error:
        raise ToolError(result.text)
    return result.text


# =============================================================================
# KV tools
# =============================================================================


@mcp.tool()
async def kv_keys_list(
    namespace: str,
    prefix: Optional[str] = None,
    limit: int = settings.LIST_DEFAULT_LIMIT,
    cursor: Optional[str] = None,
) -> str:
    """
    List keys in a KV namespace. Use human-readable names like
    'court-of-appeal', 'liu', 'ico', etc.

    Args:
        namespace: Namespace name (e.g. 'court-of-appeal', 'liu', 'email-bodies')
        prefix: Key prefix filter
        limit: Max keys per page (default 100)
        cursor: Pagination cursor from previous call
    """
    return await _run(
        "kv_keys_list", namespace=namespace, prefix=prefix, limit=limit, cursor=cursor
    )


@mcp.tool()
async def kv_keys_count(namespace: str, prefix: Optional[str] = None) -> str:
    """Count total keys in a KV namespace (paginates automatically)."""
    return await _run("kv_keys_count", namespace=namespace, prefix=prefix)


@mcp.tool()
async def kv_key_get(namespace: str, key: str, include_metadata: bool = False) -> str:
    """Get the value of a single key. With include_metadata, returns {value, metadata}."""
    return await _run(
        "kv_key_get", namespace=namespace, key=key, include_metadata=include_metadata
    )


@mcp.tool()
async def kv_key_put(
    namespace: str, key: str, value: str, metadata: Optional[dict[str, Any]] = None
) -> str:
    """Write a key-value pair to a KV namespace."""
    return await _run(
        "kv_key_put", namespace=namespace, key=key, value=value, metadata=metadata
    )


@mcp.tool()
async def kv_key_delete(namespace: str, key: str) -> str:
    """Delete a key from a KV namespace."""
    return await _run("kv_key_delete", namespace=namespace, key=key)


@mcp.tool()
async def kv_keys_bulk_get(namespace: str, keys: list[str]) -> str:
    """Get values for multiple keys at once (max 100)."""
    return await _run("kv_keys_bulk_get", namespace=namespace, keys=keys)


# =============================================================================
# Namespace discovery
# =============================================================================


@mcp.tool()
async def namespaces_list() -> str:
    """List all available KV namespace names and their categories."""
    return await _run("namespaces_list")


# =============================================================================
# Email / folder tools
# =============================================================================


@mcp.tool()
async def email_list_folders() -> str:
    """List IMAP folders that are mapped to KV namespaces for email processing."""
    return await _run("email_list_folders")


@mcp.tool()
async def email_folder_stats(folder: str) -> str:
    """Get email processing stats for a mapped IMAP folder (e.g. 'INBOX/Courts/Court of Appeal')."""
    return await _run("email_folder_stats", folder=folder)


@mcp.tool()
async def email_store(
    folder: str, key: str, metadata: str, body: str, body_key: Optional[str] = None
) -> str:
    """
    Store an email's metadata in its folder KV namespace and body in the
    shared email-bodies namespace.

    Args:
        folder: IMAP folder path
        key: KV key for the email metadata
        metadata: JSON string of email metadata
        body: Email body text
        body_key: UUID key for the email body; derived from the body when omitted
    """
    return await _run(
        "email_store", folder=folder, key=key, metadata=metadata, body=body, body_key=body_key
    )


# =============================================================================
# Pipeline
# =============================================================================


@mcp.tool()
async def pipeline_status() -> str:
    """Get pipeline health: counts across all mapped namespaces."""
    return await _run("pipeline_status")


if __name__ == "__main__":
    from util.logger import init_logger

    init_logger()
    mcp.run(transport="streamable-http")
