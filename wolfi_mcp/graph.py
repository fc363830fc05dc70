"""The package_graph tool and its dependency queries."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from wolfi_mcp.tools import (
    BaseTool,
    Package,
    PackageRepository,
    ToolDefinition,
    ToolHandler,
    ToolParameter,
    ToolResult,
    error_result,
    text_result,
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_MIN_DEPTH = 1
_MAX_DEPTH = 5
_QUERY_TYPES = "requires, provides, depends_on, required_by, what_provides"


class GraphTool(BaseTool):
    """Answers provides/requires questions about the package graph."""

    def __init__(self) -> None:
        super().__init__(
            ToolDefinition(
                "package_graph",
                "Query the package dependency graph using provides and requires relationships",
                (
                    ToolParameter(
                        "package",
                        "The package name to start the graph query from",
                        required=True,
                    ),
                    ToolParameter(
                        "query_type",
                        "The type of query to perform: 'requires', 'provides', "
                        "'depends_on', 'required_by', 'what_provides'",
                        required=True,
                    ),
                    ToolParameter(
                        "depth", "Maximum depth of the graph traversal (default: 1)"
                    ),
                ),
            )
        )

    def make_handler(self, repo: PackageRepository) -> ToolHandler:
        def handler(arguments: Mapping[str, Any]) -> ToolResult:
            package_name = arguments["package"]
            query_type = arguments["query_type"]

            depth = 1
            raw_depth = arguments.get("depth")
            if isinstance(raw_depth, str):
                match = _LEADING_INT.match(raw_depth)
                if match is None:
                    reason = "unexpected EOF" if not raw_depth.strip() else "expected integer"
                    return error_result(f"Invalid depth value '{raw_depth}': {reason}")
                depth = int(match.group(1))
            depth = min(max(depth, _MIN_DEPTH), _MAX_DEPTH)

            kind = query_type.lower()
            if kind == "what_provides":
                lines = [f"Packages that provide {package_name}:\n\n"]
                providers = sorted(find_packages_providing(repo, package_name))
                if providers:
                    lines.extend(_numbered(providers))
                else:
                    lines.append("No packages found that provide this capability.\n")
                return text_result("".join(lines))

            pkg = repo.get_package_info(package_name)
            if pkg is None:
                return text_result(f"Package '{package_name}' not found.")

            if kind in ("requires", "dependencies"):
                lines = [f"Dependencies required by {pkg.name} ({pkg.version}):\n\n"]
                if pkg.dependencies:
                    lines.extend(_numbered(pkg.dependencies))
                else:
                    lines.append("No dependencies found.\n")
            elif kind == "provides":
                lines = [f"Capabilities provided by {pkg.name} ({pkg.version}):\n\n"]
                if pkg.provides:
                    lines.extend(_numbered(pkg.provides))
                else:
                    lines.append("No explicit provides found.\n")
                    lines.append(
                        f"This package implicitly provides: {pkg.name}={pkg.version}\n"
                    )
            elif kind == "depends_on":
                lines = [
                    f"Dependency graph for {pkg.name} ({pkg.version}) with depth {depth}:\n\n",
                    dependency_graph(repo, pkg, depth),
                ]
            elif kind == "required_by":
                lines = [f"Packages that depend on {pkg.name}:\n\n"]
                required_by = sorted(find_packages_requiring(repo, pkg.name))
                if required_by:
                    lines.extend(_numbered(required_by))
                else:
                    lines.append("No packages found that depend on this package.\n")
            else:
                return error_result(
                    f"Unknown query type: {query_type}. Supported types: {_QUERY_TYPES}"
                )
            return text_result("".join(lines))

        return handler


def _numbered(items: list[str]) -> list[str]:
    return [f"{number}. {item}\n" for number, item in enumerate(items, start=1)]


def dependency_graph(repo: PackageRepository, pkg: Package, max_depth: int) -> str:
    """Render the dependency tree of pkg down to max_depth levels."""
    out: list[str] = []
    visited: set[str] = set()

    def walk(node: Package, prefix: str, depth: int) -> None:
        if depth > max_depth:
            return
        visited.add(node.name)
        if depth == 0:
            out.append(f"{node.name} ({node.version})\n")
        else:
            out.append(f"{prefix}├─ {node.name} ({node.version})\n")
        if depth == max_depth:
            return

        child_prefix = prefix + "│  "
        last = len(node.dependencies) - 1
        for index, dep in enumerate(node.dependencies):
            dep_name = dep.split("=")[0]
            if ":" in dep_name:
                continue
            if dep_name in visited:
                out.append(f"{child_prefix}├─ {dep_name} [already visited]\n")
                continue
            dep_pkg = repo.get_package_info(dep_name)
            if dep_pkg is not None:
                walk(dep_pkg, child_prefix, depth + 1)
            else:
                out.append(f"{child_prefix}├─ {dep_name} [not found in index]\n")
            if depth == 0 and index < last:
                out.append("\n")

    walk(pkg, "", 0)
    return "".join(out)


def find_packages_requiring(repo: PackageRepository, package_name: str) -> list[str]:
    """Return the names of packages that list package_name as a dependency."""
    requiring: list[str] = []
    for pkg in repo.get_all_packages():
        for dep in pkg.dependencies:
            dep_name = dep.split("=")[0]
            cut = re.search(r"[<>]", dep_name)
            if cut is not None:
                dep_name = dep_name[: cut.start()].strip()
            if ":" in dep_name:
                continue
            if dep_name == package_name:
                requiring.append(pkg.name)
                break
    return requiring


def find_packages_providing(repo: PackageRepository, capability: str) -> list[str]:
    """Return the names of packages named after or providing capability."""
    providing: list[str] = []
    for pkg in repo.get_all_packages():
        if pkg.name == capability or any(
            provide.split("=")[0] == capability for provide in pkg.provides
        ):
            providing.append(pkg.name)
    return providing