import io
import json

from wolfi_mcp.search import SearchTool
from wolfi_mcp.server import Server, default_config
from wolfi_mcp.tools import (
    BaseTool,
    Package,
    PackageRepository,
    ToolDefinition,
    register_all,
    text_result,
)


class _MockTool(BaseTool):
    def __init__(self, name="mock_tool"):
        super().__init__(ToolDefinition(name, "A mock tool for testing"))

    def make_handler(self, repo):
        return lambda arguments: text_result("Mock tool response")


class _FailingTool(BaseTool):
    def __init__(self):
        super().__init__(ToolDefinition("boom"))

    def make_handler(self, repo):
        def handler(arguments):
            raise RuntimeError("kaput")

        return handler


def _request(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def _server_with_search():
    srv = Server(default_config())
    repo = PackageRepository([Package("alpine-base", "3.15.0")])
    tool = SearchTool()
    srv.add_tool(tool.tool, tool.make_handler(repo))
    return srv


def test_default_config():
    cfg = default_config()
    assert cfg.name == "Alpine Package Database"
    assert cfg.version == "1.0.0"


def test_add_tool_lists_it():
    srv = _server_with_search()
    reply = srv.handle_message(_request("tools/list"))
    assert [t["name"] for t in reply["result"]["tools"]] == ["search_packages"]


def test_register_all_with_server():
    srv = Server(default_config())
    register_all(srv, PackageRepository(None), _MockTool("b_tool"), _MockTool("a_tool"))
    reply = srv.handle_message(_request("tools/list"))
    assert [t["name"] for t in reply["result"]["tools"]] == ["a_tool", "b_tool"]


def test_initialize():
    srv = _server_with_search()
    reply = srv.handle_message(_request("initialize", {"protocolVersion": "2024-11-05"}))
    result = reply["result"]
    assert result["serverInfo"] == {"name": "Alpine Package Database", "version": "1.0.0"}
    assert result["protocolVersion"] == "2024-11-05"
    assert result["capabilities"]["resources"] == {"subscribe": True, "listChanged": True}
    assert "tools" in result["capabilities"]


def test_call_tool():
    srv = _server_with_search()
    reply = srv.handle_message(
        _request("tools/call", {"name": "search_packages", "arguments": {"query": "alpine"}})
    )
    assert reply["result"]["isError"] is False
    assert reply["result"]["content"][0]["text"].startswith("Found 1 packages matching 'alpine'")


def test_call_unknown_tool():
    srv = _server_with_search()
    reply = srv.handle_message(_request("tools/call", {"name": "nope"}))
    assert reply["error"]["code"] == -32602


def test_handler_failure_is_recovered():
    srv = Server(default_config())
    register_all(srv, PackageRepository(None), _FailingTool())
    reply = srv.handle_message(_request("tools/call", {"name": "boom"}))
    assert reply["error"]["code"] == -32603
    assert "kaput" in reply["error"]["message"]


def test_unknown_method_and_notification():
    srv = Server(default_config())
    assert srv.handle_message(_request("nope"))["error"]["code"] == -32601
    assert srv.handle_message({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None
    assert srv.handle_message({"id": 3})["error"]["code"] == -32600


def test_serve_round_trip():
    srv = _server_with_search()
    lines = [
        json.dumps(_request("ping", request_id=7)),
        "",
        "not json",
        json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
    ]
    out = io.StringIO()
    srv.serve(io.StringIO("\n".join(lines) + "\n"), out)
    replies = [json.loads(line) for line in out.getvalue().splitlines()]
    assert replies[0] == {"jsonrpc": "2.0", "id": 7, "result": {}}
    assert replies[1]["error"]["code"] == -32700
    assert len(replies) == 2