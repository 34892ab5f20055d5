"""Expansion of {{query.file.*}} placeholders in query text."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from .errors import TaskQueryError

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*query\.file\.(\w+)\s*\}\}")


class PlaceholderError(TaskQueryError):
    """Raised when a placeholder is unknown or has no file to refer to."""

    pass


def query_file_properties(file_path: str) -> dict[str, str]:
    """The values available as {{query.file.<name>}} for a query in `file_path`.

    For 'a/b/c.md': path 'a/b/c.md', root 'a/', folder 'a/b/' and
    filename 'c.md'.
    """
    path = PurePosixPath(file_path)
    parts = path.parts
    root = f"{parts[0]}/" if len(parts) > 1 else "/"
    folder = f"{path.parent}/" if str(path.parent) != "." else "/"
    return {
        "path": file_path,
        "root": root,
        "folder": folder,
        "filename": path.name,
    }


def expand_placeholders(source: str, file_path: str | None) -> str:
    """Replace placeholders with properties of the query's file.

    Raises:
        PlaceholderError: If a placeholder is used without a file path,
            or names an unknown property
    """
    if PLACEHOLDER_PATTERN.search(source) is None:
        return source

    if file_path is None:
        raise PlaceholderError(
            "The query uses {{query.file...}} placeholders but has no file path"
        )
    properties = query_file_properties(file_path)

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in properties:
            raise PlaceholderError(f"Unknown placeholder: {match.group(0)}")
        return properties[name]

    return PLACEHOLDER_PATTERN.sub(replace, source)
