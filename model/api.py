# model/api.py
import json
from typing import Any
from pydantic import BaseModel
from util.types import ToolPayload


class ToolResult(BaseModel):
    text: str
    is_error: bool = False

    @classmethod
    def of_json(cls, obj: Any, *, indent: int | None = 2) -> "ToolResult":
        return cls(text=json.dumps(obj, indent=indent, ensure_ascii=False))

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(text=message, is_error=True)

    def to_payload(self) -> ToolPayload:
        return {"content": [{"type": "text", "text": self.text}], "isError": self.is_error}


class ToolDescriptor(BaseModel):
    name: str
    description: str
    inputSchema: dict[str, Any]


class ToolListResponse(BaseModel):
    tools: list[ToolDescriptor]


class HealthResponse(BaseModel):
    name: str
    version: str
    transport: str
    mcp_endpoint: str
    status: str
