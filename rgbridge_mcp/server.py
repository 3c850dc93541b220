"""MCP server for rgbridge.

Exposes 2 tools:
- search: run ripgrep, return structured results
- history: list, clear, clean up or rerun recorded searches
"""

import asyncio
import json
import logging
import os
from typing import Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.models import InitializationOptions
from mcp.server.lowlevel import NotificationOptions
from mcp.types import Tool, TextContent

from rgbridge import __version__
from rgbridge.config import initialize_config
from rgbridge.constants import MAX_HISTORY_DAYS
from rgbridge.history import SearchHistory
from rgbridge.primitives.errors import SearchError
from rgbridge.search import SearchRequest, SearchService


logger = logging.getLogger(__name__)


class RGBridgeServer:
    """MCP Server for rgbridge."""

    def __init__(self):
        """Initialize server from the user's config."""
        self.config = initialize_config()
        self.history = SearchHistory(self.config.history_dir())
        self.history.load()
        self.service = SearchService(
            binary=self.config.rg_binary,
            max_results=self.config.max_results,
            history=self.history,
        )
        self.server = Server("rgbridge")
        self._setup_handlers()

    async def handle_search(self, **arguments) -> dict:
        root_path = arguments.pop("root_path", None) or self.config.default_search_path
        request = SearchRequest(root_path=root_path, **arguments)
        response = await self.service.search(request)
        return response.to_dict()

    async def handle_history(
        self,
        action: str = "list",
        max_days: int = MAX_HISTORY_DAYS,
        entry_id: Optional[str] = None,
    ) -> dict:
        if action == "list":
            return {
                "history": [e.to_dict() for e in self.history.entries],
                "total": len(self.history.entries),
            }
        if action == "clear":
            self.history.clear()
            return {"cleared": True}
        if action == "cleanup":
            removed = self.history.cleanup(max_days=max_days)
            return {"removed": removed, "total": len(self.history.entries)}
        if action == "rerun":
            entry = self.history.get(str(entry_id)) if entry_id is not None else None
            if entry is None:
                return {"error": f"No history entry with id {entry_id}"}
            response = await self.service.search(entry.to_request())
            return response.to_dict()
        return {"error": f"Unknown history action: {action}"}

    def _setup_handlers(self):
        """Register MCP handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return the 2 MCP tools."""
            return [
                Tool(
                    name="search",
                    description="Search file contents with ripgrep; one result per matched line",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "pattern": {"type": "string"},
                            "root_path": {"type": "string"},
                            "case_insensitive": {"type": "boolean", "default": False},
                            "whole_word": {"type": "boolean", "default": False},
                            "regex": {"type": "boolean", "default": False},
                            "ignore_hidden": {"type": "boolean", "default": False},
                            "max_depth": {"type": "integer", "minimum": 0, "default": 0},
                            "include_types": {"type": "array", "items": {"type": "string"}},
                            "exclude_types": {"type": "array", "items": {"type": "string"}},
                        },
                        "required": ["pattern"],
                    },
                ),
                Tool(
                    name="history",
                    description="List, clear, clean up or rerun recorded searches",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "action": {
                                "type": "string",
                                "enum": ["list", "clear", "cleanup", "rerun"],
                                "default": "list",
                            },
                            "max_days": {"type": "integer", "default": MAX_HISTORY_DAYS},
                            "entry_id": {
                                "type": "string",
                                "description": "History entry to run again (rerun only)",
                            },
                        },
                    },
                ),
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Dispatch to appropriate tool."""
            try:
                if name == "search":
                    result = await self.handle_search(**arguments)
                elif name == "history":
                    result = await self.handle_history(**arguments)
                else:
                    result = {"error": f"Unknown tool: {name}"}
            except (SearchError, TypeError) as e:
                logger.warning("Tool %s failed: %s", name, e)
                result = {"error": str(e)}

            return [TextContent(type="text", text=json.dumps(result, default=str))]

    async def start(self):
        """Start the MCP server."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="rgbridge",
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


async def run_stdio():
    """Run in stdio mode."""
    server = RGBridgeServer()
    await server.start()


def debug_enabled() -> bool:
    """RGBRIDGE_DEBUG=true echoes debug logs to stderr."""
    return os.getenv("RGBRIDGE_DEBUG", "false").lower() == "true"


def main():
    """Entry point."""
    from rgbridge.utils.logger import get_logger
    get_logger(
        "rgbridge",
        console_level=logging.DEBUG if debug_enabled() else logging.WARNING,
    )
    asyncio.run(run_stdio())


if __name__ == "__main__":
    main()
