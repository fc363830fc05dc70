"""Command-line helpers: locating, downloading and merging APK indexes."""

from __future__ import annotations

import argparse
import hashlib
import os
import platform
import shutil
import sys
import urllib.error
import urllib.request
from collections.abc import Iterable, Sequence
from pathlib import Path

from wolfi_mcp.tools import Package

DEFAULT_WOLFI_URL = "https://packages.wolfi.dev/os/{arch}/APKINDEX.tar.gz"
CACHE_SUB_DIR = "wolfi-mcp"
CACHE_FILE = "APKINDEX.tar.gz"


class CliError(Exception):
    """Raised when an index cannot be located or fetched."""


class DownloadError(CliError):
    """Raised when a file cannot be downloaded to disk."""


def download_file(url: str, path: str | os.PathLike[str]) -> None:
    """Fetch url and write its body to path."""
    try:
        out = open(path, "wb")
    except OSError as exc:
        raise DownloadError(f"failed to create file {path}: {exc}") from exc
    with out:
        try:
            response = urllib.request.urlopen(url)
        except urllib.error.HTTPError as exc:
            exc.close()
            raise DownloadError(f"bad status code: {exc.code}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise DownloadError(f"failed to download file from {url}: {exc}") from exc
        with response:
            status = getattr(response, "status", 200)
            if status != 200:
                raise DownloadError(f"bad status code: {status}")
            try:
                shutil.copyfileobj(response, out)
            except OSError as exc:
                raise DownloadError(f"failed to save downloaded data: {exc}") from exc


def _home_dir() -> str:
    try:
        return str(Path.home())
    except (RuntimeError, KeyError) as exc:
        raise CliError(f"could not get user home directory: {exc}") from exc


def user_cache_dir() -> str:
    """Return the per-user cache directory for this application."""
    if sys.platform == "darwin":
        return os.path.join(_home_dir(), "Library", "Caches", CACHE_SUB_DIR)
    if sys.platform == "win32":
        local_app_data = os.environ.get("LOCALAPPDATA", "")
        if not local_app_data:
            local_app_data = os.path.join(_home_dir(), "AppData", "Local")
        return os.path.join(local_app_data, CACHE_SUB_DIR, "cache")
    xdg_cache_home = os.environ.get("XDG_CACHE_HOME", "")
    if xdg_cache_home:
        return os.path.join(xdg_cache_home, CACHE_SUB_DIR)
    return os.path.join(_home_dir(), ".cache", CACHE_SUB_DIR)


def is_url(s: str) -> bool:
    """Tell whether s is an http or https URL."""
    return s.startswith(("http://", "https://"))


def _ensure_cache_dir() -> str:
    try:
        cache_dir = user_cache_dir()
    except CliError as exc:
        raise CliError(f"error determining cache directory: {exc}") from exc
    try:
        os.makedirs(cache_dir, mode=0o755, exist_ok=True)
    except OSError as exc:
        raise CliError(f"error creating cache directory: {exc}") from exc
    return cache_dir


def _default_arch() -> str:
    return "aarch64" if platform.machine().lower() in ("arm64", "aarch64") else "x86_64"


def get_apk_index_path(index_path: str) -> str:
    """Return an absolute local path holding the index, downloading it if needed."""
    if index_path:
        if not is_url(index_path):
            return os.path.abspath(index_path)
        cache_dir = _ensure_cache_dir()
        url_hash = hashlib.sha256(index_path.encode("utf-8")).hexdigest()[:8]
        cache_file_path = os.path.join(cache_dir, f"APKINDEX_{url_hash}.tar.gz")
        print(f"Downloading APKINDEX from {index_path}...")
        try:
            download_file(index_path, cache_file_path)
        except DownloadError as exc:
            raise CliError(
                f"error downloading index file from {index_path}: {exc}"
            ) from exc
        return os.path.abspath(cache_file_path)

    cache_dir = _ensure_cache_dir()
    cache_file_path = os.path.join(cache_dir, CACHE_FILE)
    url = DEFAULT_WOLFI_URL.format(arch=_default_arch())
    print(f"Downloading Wolfi APKINDEX from {url}...")
    try:
        download_file(url, cache_file_path)
    except DownloadError as exc:
        raise CliError(f"error downloading index file: {exc}") from exc
    return os.path.abspath(cache_file_path)


def merge_packages(existing: Iterable[Package], new: Iterable[Package]) -> list[Package]:
    """Merge two package lists by name.

    A later package replaces an earlier one of the same name when its version
    is equal or compares greater as a plain string.
    """
    merged: dict[str, Package] = {pkg.name: pkg for pkg in existing}
    for pkg in new:
        current = merged.get(pkg.name)
        if current is None or pkg.version == current.version or pkg.version > current.version:
            merged[pkg.name] = pkg
    return list(merged.values())


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the command line; index paths are collected in order."""
    parser = argparse.ArgumentParser(prog="wolfi-mcp")
    parser.add_argument(
        "-index",
        "--index",
        dest="index",
        action="append",
        default=[],
        metavar="PATH",
        help=(
            "Path to APKINDEX.tar.gz file (can be specified multiple times, "
            "if not provided, downloads from Wolfi repository)"
        ),
    )
    return parser.parse_args(argv)