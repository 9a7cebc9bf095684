# controller/tool_controller.py
from typing import Any
from fastapi import APIRouter, Body, Depends
from model.api import ToolListResponse
from service.tool_service import ToolService
from util.constants import InternalURIs
from util.types import ToolPayload
from controller.controller_dependencies import get_tool_service, rate_limit_dependencies

tool_router = APIRouter(dependencies=rate_limit_dependencies())


@tool_router.get(InternalURIs.TOOLS, response_model=ToolListResponse)
async def list_tools(
    service: ToolService = Depends(get_tool_service),
) -> ToolListResponse:
    return ToolListResponse(tools=[t.describe() for t in service.tools()])


@tool_router.post(InternalURIs.TOOL_CALL)
async def call_tool(
    tool_name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    service: ToolService = Depends(get_tool_service),
) -> ToolPayload:
    result = await service.invoke(tool_name, arguments)
    return result.to_payload()
