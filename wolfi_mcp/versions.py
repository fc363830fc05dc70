"""The compare_versions tool."""

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


class VersionsTool(BaseTool):
    """Lists every indexed version of a package."""

    def __init__(self) -> None:
        super().__init__(
            ToolDefinition(
                "compare_versions",
                "Compare versions of packages",
                (
                    ToolParameter(
                        "package", "The package name to compare versions for", required=True
                    ),
                ),
            )
        )

    def make_handler(self, repo: PackageRepository) -> ToolHandler:
        def handler(arguments: Mapping[str, Any]) -> ToolResult:
            package_name = arguments["package"]
            versions = repo.get_package_versions(package_name)
            if not versions:
                return text_result(f"No versions found for package '{package_name}'.")
            # Plain string ordering of version labels.
            versions.sort(key=lambda pkg: pkg.version)
            parts = [f"Versions of {package_name}:\n\n"]
            for number, pkg in enumerate(versions, start=1):
                parts.append(f"{number}. Version: {pkg.version}\n")
                parts.append(f"   Architecture: {pkg.arch}\n")
                parts.append(f"   Size: {pkg.size} bytes\n")
                if pkg.origin:
                    parts.append(f"   Origin: {pkg.origin}\n")
                parts.append("\n")
            return text_result("".join(parts))

        return handler