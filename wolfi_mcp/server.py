"""A Model Context Protocol server speaking JSON-RPC over stdio."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from wolfi_mcp.tools import ToolDefinition, ToolHandler

_DEFAULT_PROTOCOL = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


@dataclass(frozen=True)
class Config:
    """Server identity reported to clients."""

    name: str
    version: str


def default_config() -> Config:
    """Return the default server configuration."""
    return Config(name="Alpine Package Database", version="1.0.0")


class _RpcError(Exception):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class Server:
    """Dispatches MCP requests to registered tools."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._tools: dict[str, tuple[ToolDefinition, ToolHandler]] = {}

    def add_tool(self, tool: ToolDefinition, handler: ToolHandler) -> None:
        """Register a tool and the handler answering it."""
        self._tools[tool.name] = (tool, handler)

    def _capabilities(self) -> dict[str, Any]:
        caps: dict[str, Any] = {
            "resources": {"subscribe": True, "listChanged": True},
            "logging": {},
        }
        if self._tools:
            caps["tools"] = {"listChanged": True}
        return caps

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": params.get("protocolVersion") or _DEFAULT_PROTOCOL,
            "capabilities": self._capabilities(),
            "serverInfo": {"name": self.config.name, "version": self.config.version},
        }

    def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [self._tools[name][0].to_dict() for name in sorted(self._tools)]}

    def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if name not in self._tools:
            raise _RpcError(INVALID_PARAMS, f"tool '{name}' not found")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise _RpcError(INVALID_PARAMS, "arguments must be an object")
        _, handler = self._tools[name]
        try:
            result = handler(arguments)
        except Exception as exc:  # recover from any handler failure
            raise _RpcError(
                INTERNAL_ERROR, f"panic recovered in {name} tool handler: {exc}"
            ) from exc
        return result.to_dict()

    def handle_message(self, message: Any) -> dict[str, Any] | None:
        """Answer one decoded JSON-RPC message; notifications give None."""
        if (
            not isinstance(message, dict)
            or message.get("jsonrpc") != "2.0"
            or not isinstance(message.get("method"), str)
        ):
            request_id = message.get("id") if isinstance(message, dict) else None
            return _error(request_id, INVALID_REQUEST, "Invalid Request")

        if "id" not in message:
            return None
        request_id = message["id"]
        params = message.get("params") or {}
        if not isinstance(params, dict):
            return _error(request_id, INVALID_PARAMS, "params must be an object")

        methods = {
            "initialize": self._initialize,
            "ping": lambda _params: {},
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": lambda _params: {"resources": []},
            "resources/templates/list": lambda _params: {"resourceTemplates": []},
            "logging/setLevel": lambda _params: {},
        }
        method = methods.get(message["method"])
        if method is None:
            return _error(request_id, METHOD_NOT_FOUND, f"Method {message['method']} not found")
        try:
            result = method(params)
        except _RpcError as exc:
            return _error(request_id, exc.code, exc.message)
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def serve(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Read newline-delimited JSON-RPC from stdin and write replies to stdout."""
        source = stdin if stdin is not None else sys.stdin
        sink = stdout if stdout is not None else sys.stdout
        for line in source:
            line = line.strip()
            if not line:
                continue
            try:
                message = json.loads(line)
            except json.JSONDecodeError:
                response: dict[str, Any] | None = _error(None, PARSE_ERROR, "Parse error")
            else:
                response = self.handle_message(message)
            if response is not None:
                sink.write(json.dumps(response, ensure_ascii=False) + "\n")
                sink.flush()


def _error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }