import pytest

from wolfi_mcp.tools import Package, PackageRepository
from wolfi_mcp.versions import VersionsTool


@pytest.fixture
def handler():
    repo = PackageRepository(
        [
            Package("alpine-base", "3.15.0", arch="x86_64", size=1024),
            Package("alpine-base", "3.14.0", arch="x86_64", size=1000),
            Package("alpine-base", "3.16.0", arch="aarch64", size=1048, origin="alpine"),
        ]
    )
    return VersionsTool().make_handler(repo)


def test_tool_name():
    assert VersionsTool().tool.name == "compare_versions"


def test_multiple_versions(handler):
    result = handler({"package": "alpine-base"})
    assert result.is_error is False
    assert result.text == (
        "Versions of alpine-base:\n\n"
        "1. Version: 3.14.0\n   Architecture: x86_64\n   Size: 1000 bytes\n\n"
        "2. Version: 3.15.0\n   Architecture: x86_64\n   Size: 1024 bytes\n\n"
        "3. Version: 3.16.0\n   Architecture: aarch64\n   Size: 1048 bytes\n"
        "   Origin: alpine\n\n"
    )


def test_nonexistent_package(handler):
    result = handler({"package": "nonexistent-package"})
    assert result.is_error is False
    assert result.text == "No versions found for package 'nonexistent-package'."