"""Tool registry with auto-discovery and uniform error reporting."""

import importlib
import inspect
import logging
import pkgutil
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.media.errors import MediaError
from app.tools.base import BaseTool, ToolContext, ToolError, ToolResult, ToolSpec, UnknownToolError

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Discovers, lists, and invokes tools.

    - Auto-discovers BaseTool subclasses in app/tools/
    - Converts tool, media and validation failures into error results
    """

    def __init__(self):
        self._tools: Dict[str, BaseTool] = {}

    def discover(self) -> None:
        """Scan app.tools package for BaseTool subclasses and register them."""
        import app.tools as tools_pkg

        for importer, modname, ispkg in pkgutil.walk_packages(
            tools_pkg.__path__, prefix="app.tools."
        ):
            if ispkg:
                continue
            if modname in ("app.tools.base", "app.tools.registry"):
                continue
            try:
                mod = importlib.import_module(modname)
            except Exception as e:
                logger.warning("Failed to import %s: %s", modname, e)
                continue

            for name, obj in inspect.getmembers(mod, inspect.isclass):
                if (
                    issubclass(obj, BaseTool)
                    and obj is not BaseTool
                    and not inspect.isabstract(obj)
                ):
                    self.register(obj())

    def register(self, tool: BaseTool) -> None:
        name = tool.spec().name
        self._tools[name] = tool
        logger.info("Registered tool: %s", name)

    def list_tools(self) -> List[ToolSpec]:
        return sorted((t.spec() for t in self._tools.values()), key=lambda s: s.name)

    def get(self, name: str) -> Optional[BaseTool]:
        return self._tools.get(name)

    async def call(self, name: str, args: Dict[str, Any], ctx: ToolContext) -> ToolResult:
        """Invoke a tool by name. Unknown names raise UnknownToolError."""
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        try:
            return await tool.invoke(args, ctx)
        except ValidationError as e:
            return ToolResult(f"Error: invalid arguments for {name}: {_validation_summary(e)}", is_error=True)
        except (ToolError, MediaError, OSError) as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResult(f"Error: {e}", is_error=True)


def _validation_summary(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)
