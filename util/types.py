# util/types.py
from typing import Literal

from typing_extensions import TypedDict


# Flow: Narrow types for the tool result envelope.
ContentType = Literal["text"]


class TextContent(TypedDict):
    type: ContentType
    text: str


class ToolPayload(TypedDict):
    content: list[TextContent]
    isError: bool
