"""Tools API — list tools and invoke them by name."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from app.api.v1.dependencies import get_tool_context, get_tool_registry
from app.tools.base import ToolContext, UnknownToolError
from app.tools.registry import ToolRegistry

router = APIRouter()


@router.get("/tools")
async def list_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    """List every registered tool with its argument schema."""
    specs = registry.list_tools()
    return {
        "tools": [
            {
                "name": s.name,
                "description": s.description,
                "input_schema": s.input_schema(),
            }
            for s in specs
        ],
        "count": len(specs),
    }


@router.post("/tools/{name}")
async def call_tool(
    name: str,
    arguments: Dict[str, Any] = Body(default={}),
    registry: ToolRegistry = Depends(get_tool_registry),
    ctx: ToolContext = Depends(get_tool_context),
):
    """Invoke a tool. Tool failures come back as results with is_error set."""
    try:
        result = await registry.call(name, arguments, ctx)
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return result.to_response()
