import pytest

from wolfi_mcp.search import SearchTool
from wolfi_mcp.tools import Package, PackageRepository


@pytest.fixture
def handler():
    repo = PackageRepository(
        [
            Package("alpine-base", "3.15.0", description="Meta package for Alpine base"),
            Package("alpine-keys", "2.4-r1", description="Public keys for Alpine Linux packages"),
            Package("zlib", "1.3"),
        ]
    )
    return SearchTool().make_handler(repo)


def test_tool_name():
    assert SearchTool().tool.name == "search_packages"
    assert SearchTool().tool.parameters[0].required is True


def test_search_with_results(handler):
    result = handler({"query": "alpine"})
    assert result.is_error is False
    assert result.text == (
        "Found 2 packages matching 'alpine':\n\n"
        "1. alpine-base (3.15.0)\n"
        "   Description: Meta package for Alpine base\n\n"
        "2. alpine-keys (2.4-r1)\n"
        "   Description: Public keys for Alpine Linux packages\n\n"
    )


def test_query_is_lowered(handler):
    result = handler({"query": "ZLIB"})
    assert result.text == "Found 1 packages matching 'zlib':\n\n1. zlib (1.3)\n\n"


def test_search_without_results(handler):
    result = handler({"query": "nonexistent"})
    assert result.is_error is False
    assert result.text == "No packages found matching your query."


def test_missing_query(handler):
    with pytest.raises(KeyError):
        handler({})