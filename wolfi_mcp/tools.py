"""Core types shared by the package tools: packages, the repository and tool plumbing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

ToolHandler = Callable[[Mapping[str, Any]], "ToolResult"]


@dataclass
class Package:
    """A single entry of an APK index."""

    name: str
    version: str = ""
    arch: str = ""
    description: str = ""
    license: str = ""
    origin: str = ""
    maintainer: str = ""
    url: str = ""
    dependencies: list[str] = field(default_factory=list)
    provides: list[str] = field(default_factory=list)
    install_if: list[str] = field(default_factory=list)
    size: int = 0
    installed_size: int = 0
    provider_priority: int = 0
    repo_commit: str = ""
    replaces: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the package as a JSON-ready mapping."""
        return {
            "Name": self.name,
            "Version": self.version,
            "Arch": self.arch,
            "Description": self.description,
            "License": self.license,
            "Origin": self.origin,
            "Maintainer": self.maintainer,
            "URL": self.url,
            "Dependencies": list(self.dependencies),
            "Provides": list(self.provides),
            "InstallIf": list(self.install_if),
            "Size": self.size,
            "InstalledSize": self.installed_size,
            "ProviderPriority": self.provider_priority,
            "RepoCommit": self.repo_commit,
            "Replaces": list(self.replaces),
        }


@dataclass(frozen=True)
class ToolParameter:
    """A string argument accepted by a tool."""

    name: str
    description: str = ""
    required: bool = False


@dataclass(frozen=True)
class ToolDefinition:
    """The name, description and input schema of a tool."""

    name: str
    description: str = ""
    parameters: tuple[ToolParameter, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return the definition in the shape used by tools/list."""
        properties = {
            param.name: {"type": "string", "description": param.description}
            for param in self.parameters
        }
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        required = [param.name for param in self.parameters if param.required]
        if required:
            schema["required"] = required
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": schema,
        }


@dataclass(frozen=True)
class ToolResult:
    """The text outcome of a tool call, possibly flagged as an error."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the result in the shape used by tools/call."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


def text_result(text: str) -> ToolResult:
    """Build a successful text result."""
    return ToolResult(text)


def error_result(message: str) -> ToolResult:
    """Build a result flagged as an error."""
    return ToolResult(message, is_error=True)


class PackageRepository:
    """An in-memory collection of packages, queried by the tools."""

    def __init__(self, packages: Iterable[Package] | None = None) -> None:
        self._packages: list[Package] = list(packages or ())
        self._by_name: dict[str, Package] = {pkg.name: pkg for pkg in self._packages}

    def get_package_info(self, name: str) -> Package | None:
        """Return the package with this exact name, the most recently added one winning."""
        return self._by_name.get(name)

    def search(self, query: str) -> list[Package]:
        """Return the packages whose name contains the query, ignoring case."""
        needle = query.lower()
        return [pkg for pkg in self._packages if needle in pkg.name.lower()]

    def get_all_packages(self) -> list[Package]:
        """Return every package in the order it was added."""
        return list(self._packages)

    def get_package_versions(self, name: str) -> list[Package]:
        """Return every entry carrying this exact name."""
        return [pkg for pkg in self._packages if pkg.name == name]


class BaseTool(ABC):
    """A tool with a fixed definition whose handler is bound to a repository."""

    def __init__(self, tool: ToolDefinition) -> None:
        self.tool = tool

    @abstractmethod
    def make_handler(self, repo: PackageRepository) -> ToolHandler:
        """Return the function that answers calls of this tool against repo."""


class _ToolSink(Protocol):
    def add_tool(self, tool: ToolDefinition, handler: ToolHandler) -> None: ...


def register_all(srv: _ToolSink, repo: PackageRepository, *args: BaseTool) -> None:
    """Register each tool with the server, bound to the given repository."""
    for tool in args:
        srv.add_tool(tool.tool, tool.make_handler(repo))