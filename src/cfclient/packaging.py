"""Packaging app source into the zip the Cloud Controller expects."""

from __future__ import annotations

import fnmatch
import io
import os
import zipfile
from pathlib import Path
from typing import BinaryIO

CFIGNORE = ".cfignore"

# Directories never uploaded
EXCLUDE_DIRS = {
    "__pycache__",
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
}

EXCLUDE_FILE_PREFIXES = (".env", CFIGNORE)


def load_cfignore(project_dir: Path) -> set[str]:
    """Read ``.cfignore`` patterns, skipping blank lines and comments."""
    path = project_dir / CFIGNORE
    if not path.is_file():
        return set()
    patterns = set()
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.add(line.strip("/"))
    return patterns


def _matches(rel_str: str, name: str, pattern: str) -> bool:
    if any(c in pattern for c in "*?["):
        return fnmatch.fnmatch(rel_str, pattern) or fnmatch.fnmatch(name, pattern)
    return rel_str == pattern or rel_str.startswith(pattern + "/")


def _should_exclude(path: Path, root: Path, ignores: set[str]) -> bool:
    """Check if a path should be left out of the zip."""
    rel = path.relative_to(root)

    for part in rel.parts:
        if part in EXCLUDE_DIRS or part.endswith(".egg-info"):
            return True

    if path.is_file() and any(path.name.startswith(p) for p in EXCLUDE_FILE_PREFIXES):
        return True

    rel_str = rel.as_posix()
    return any(_matches(rel_str, path.name, pattern) for pattern in ignores)


def zip_directory(project_dir: str | os.PathLike[str], ignores: set[str] | None = None) -> bytes:
    """Zip a directory in memory, entries in sorted order.

    Args:
        project_dir: Directory to package.
        ignores: Extra relative paths or glob patterns to leave out, added to
            any listed in the directory's ``.cfignore``.
    """
    root = Path(project_dir)
    if not root.is_dir():
        raise ValueError(f"Not a directory: {root}")
    patterns = load_cfignore(root) | (ignores or set())

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        for item in sorted(root.rglob("*")):
            if _should_exclude(item, root, patterns):
                continue
            if item.is_file():
                zf.write(item, arcname=item.relative_to(root).as_posix())
    return buf.getvalue()


def read_bits(source: bytes | BinaryIO | str | os.PathLike[str]) -> bytes:
    """Normalize push input to zip bytes.

    Accepts raw bytes, a binary file object, a ``.zip`` file path or a
    directory path (zipped with ``zip_directory``).
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if hasattr(source, "read"):
        return source.read()

    path = Path(source)
    if path.is_dir():
        return zip_directory(path)
    if path.is_file():
        if not zipfile.is_zipfile(path):
            raise ValueError(f"Not a zip archive: {path}")
        return path.read_bytes()
    raise FileNotFoundError(f"No such file or directory: {path}")
