# wolfi_mcp

A Model Context Protocol (MCP) server that answers questions about an
in-memory collection of Wolfi or Alpine APK packages. It speaks
newline-delimited JSON-RPC 2.0 over standard input and output, so an
MCP-aware client can ask it to search packages, show package details, list
versions and walk the dependency graph.

## Tools

The server offers four tools:

| Tool               | Arguments                                 | What it returns                                               |
|--------------------|-------------------------------------------|---------------------------------------------------------------|
| `search_packages`  | `query`                                   | Packages whose name contains the query, ignoring case         |
| `package_info`     | `package`                                 | Every field of the package as indented JSON                   |
| `compare_versions` | `package`                                 | Every entry with that name, with version, arch, size, origin  |
| `package_graph`    | `package`, `query_type`, optional `depth` | Dependency and capability relationships                       |

`package_graph` understands these query types (case does not matter):

- `requires` (or `dependencies`): the package's direct dependencies
- `provides`: the capabilities the package lists, or its implicit `name=version`
- `depends_on`: a dependency tree down to `depth` levels (clamped to 1..5, default 1)
- `required_by`: packages that list this one as a dependency
- `what_provides`: packages named after, or providing, the given capability

`compare_versions` orders versions as plain strings, not by APK version rules.
An unknown query type or a `depth` that does not start with an integer gives
a result flagged as an error.

## Using it from Python

Build a repository from packages, register the tools on a server and serve
over stdio:

```python
import sys

from wolfi_mcp.tools import Package, PackageRepository, register_all
from wolfi_mcp.server import Server, default_config
from wolfi_mcp.search import SearchTool
from wolfi_mcp.info import InfoTool
from wolfi_mcp.versions import VersionsTool
from wolfi_mcp.graph import GraphTool

repo = PackageRepository([
    Package(name="busybox", version="1.36.1-r5", description="Size optimized toolbox"),
    Package(name="openssl", version="3.3.0-r0", dependencies=["libcrypto3"]),
])

srv = Server(default_config())
register_all(srv, repo, SearchTool(), InfoTool(), VersionsTool(), GraphTool())
srv.serve(sys.stdin, sys.stdout)
```

`Server.handle_message` answers one decoded JSON-RPC message and returns the
reply (or `None` for a notification), which is handy for tests and embedding.
The server handles `initialize`, `ping`, `tools/list`, `tools/call`,
`resources/list`, `resources/templates/list` and `logging/setLevel`; the
resource lists are always empty.

Each tool's `make_handler(repo)` returns a function taking the call's
argument mapping and returning a `ToolResult` (`text`, `is_error`).

The graph helpers can be used on their own as well:

```python
from wolfi_mcp.graph import dependency_graph, find_packages_providing, find_packages_requiring

print(find_packages_requiring(repo, "libcrypto3"))
print(find_packages_providing(repo, "busybox"))
print(dependency_graph(repo, repo.get_package_info("openssl"), 2))
```

## Index files and caching

`wolfi_mcp.cli` holds helpers for locating index files:

- `get_apk_index_path(index_path)` accepts a local path (returned as an
  absolute path) or an `http://` / `https://` URL. URLs are downloaded into
  the user cache directory as `APKINDEX_<hash>.tar.gz`. An empty path
  downloads the default Wolfi index for the current architecture
  (`x86_64` or `aarch64`). Failures raise `CliError`.
- `user_cache_dir()` follows the platform's conventions: `XDG_CACHE_HOME` or
  `~/.cache` on Linux, `~/Library/Caches` on macOS, `%LOCALAPPDATA%` on Windows.
- `download_file(url, path)` writes a URL's body to a file, raising
  `DownloadError` on failure or a non-200 status.
- `merge_packages(existing, new)` combines packages from several indexes by
  name: a later package replaces an earlier one when its version is equal or
  compares greater as a plain string.
- `parse_args(argv)` parses a repeatable `-index` / `--index PATH` option.

## What it does not do

- It does not read `APKINDEX.tar.gz` archives. The helpers above fetch and
  locate the files, but turning one into `Package` objects is left to the
  caller.
- It installs no command. There is no entry point that downloads an index
  and starts the server; wire the pieces together in Python as shown above.