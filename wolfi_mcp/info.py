"""The package_info tool."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from wolfi_mcp.tools import (
    BaseTool,
    PackageRepository,
    ToolDefinition,
    ToolHandler,
    ToolParameter,
    ToolResult,
    error_result,
    text_result,
)


class InfoTool(BaseTool):
    """Reports every field of one package as JSON."""

    def __init__(self) -> None:
        super().__init__(
            ToolDefinition(
                "package_info",
                "Get detailed information about a specific package",
                (ToolParameter("package", "The exact package name", required=True),),
            )
        )

    def make_handler(self, repo: PackageRepository) -> ToolHandler:
        def handler(arguments: Mapping[str, Any]) -> ToolResult:
            package_name = arguments["package"]
            pkg = repo.get_package_info(package_name)
            if pkg is None:
                return text_result(f"Package '{package_name}' not found.")
            try:
                details = json.dumps(pkg.to_dict(), indent=2, ensure_ascii=False)
            except (TypeError, ValueError) as exc:
                return error_result(f"Error formatting package details: {exc}")
            return text_result(details)

        return handler