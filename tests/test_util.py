"""Tests for the shared util and config helpers."""

import logging

import pytest
from pydantic import TypeAdapter
from redis.exceptions import ConnectionError as RedisConnectionError

from config import cache
from model.api import ToolResult
from util.enums import ErrorMessage
from util.errors import InvalidToolArguments
from util.logger import ColoredFormatter, EventFilter
from util.types import ToolPayload


def test_tool_payload_is_a_valid_response_model():
    adapter = TypeAdapter(ToolPayload)
    payload = adapter.validate_python(ToolResult.error("boom").to_payload())
    assert payload == {"content": [{"type": "text", "text": "boom"}], "isError": True}


def test_invalid_arguments_status_is_422():
    assert ErrorMessage.INVALID_TOOL_ARGUMENTS.value.http_status == 422
    assert InvalidToolArguments("kv_key_get", "key: missing").status_code == 422


def _record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("service.x", logging.INFO, __file__, 1, msg, args, None)


@pytest.mark.parametrize(
    "msg,args,event",
    [
        ("kv.list_all.done ms=%d store=%s", (12, "KV_LIU"), "kv.list_all.done"),
        ("tool.ok name=%s", ("kv_key_get",), "tool.ok"),
        ("Application startup complete.", (), "-"),
        ("plainword", (), "-"),
    ],
)
def test_event_filter_extracts_dotted_name(msg, args, event):
    record = _record(msg, *args)
    assert EventFilter().filter(record) is True
    assert record.event == event


def test_colored_formatter_highlights_level_and_event():
    record = _record("fleet.scan.done ms=%d", 3)
    EventFilter().filter(record)
    out = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert f"{ColoredFormatter.COLORS['INFO']}INFO{ColoredFormatter.RESET}" in out
    assert f"{ColoredFormatter.EVENT}fleet.scan.done{ColoredFormatter.RESET}" in out
    assert record.levelname == "INFO"


@pytest.mark.parametrize(
    "url,expected",
    [
        ("redis://localhost:6379/0", "redis://localhost:6379/0"),
        ("redis://:secret@cache:6380/1", "redis://***@cache:6380/1"),
        ("rediss://user:pw@host/0", "rediss://***@host/0"),
    ],
)
def test_redacted_url(url, expected):
    assert cache.redacted_url(url) == expected


class _UnreachableRedis:
    def __init__(self) -> None:
        self.closed = False

    async def ping(self):
        raise RedisConnectionError("refused")

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_get_redis_does_not_cache_failed_connection(monkeypatch):
    created = []

    def fake_from_url(url, **kwargs):
        client = _UnreachableRedis()
        created.append(client)
        return client

    monkeypatch.setattr(cache, "_client", None)
    monkeypatch.setattr(cache, "from_url", fake_from_url)

    for _ in range(2):
        with pytest.raises(RedisConnectionError):
            await cache.get_redis()

    assert len(created) == 2
    assert all(c.closed for c in created)
    assert cache._client is None
