"""MCP server and tools for querying an in-memory APK package repository."""

__version__ = "0.1.0"