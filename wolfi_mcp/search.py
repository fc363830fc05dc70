"""The search_packages tool."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wolfi_mcp.tools import (
    BaseTool,
    PackageRepository,
    ToolDefinition,
    ToolHandler,
    ToolParameter,
    ToolResult,
    text_result,
)


class SearchTool(BaseTool):
    """Finds packages whose name contains a query."""

    def __init__(self) -> None:
        super().__init__(
            ToolDefinition(
                "search_packages",
                "Search for packages in the Alpine package database",
                (
                    ToolParameter(
                        "query",
                        "The package name to search for (supports partial matches)",
                        required=True,
                    ),
                ),
            )
        )

    def make_handler(self, repo: PackageRepository) -> ToolHandler:
        def handler(arguments: Mapping[str, Any]) -> ToolResult:
            query = arguments["query"].lower()
            results = repo.search(query)
            if not results:
                return text_result("No packages found matching your query.")
            parts = [f"Found {len(results)} packages matching '{query}':\n\n"]
            for number, pkg in enumerate(results, start=1):
                parts.append(f"{number}. {pkg.name} ({pkg.version})\n")
                if pkg.description:
                    parts.append(f"   Description: {pkg.description}\n")
                parts.append("\n")
            return text_result("".join(parts))

        return handler