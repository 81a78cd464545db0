"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote, unquote


def ensure_leading_slash(path: str) -> str:
    """Prefix path with '/' if missing."""
    if not path.startswith("/"):
        return "/" + path
    return path


def strip_trailing_slash(path: str) -> str:
    """Remove a single trailing slash (except for root)."""
    if path != "/" and path.endswith("/"):
        return path[:-1]
    return path


def split_path(path: str) -> List[str]:
    """Split path into its non-empty components."""
    return [part for part in path.split("/") if part]


def decode_value(value: str) -> str:
    """Percent-decode a query value, keeping it raw if decoding fails."""
    if "%" not in value:
        return value
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


def merge_parameters(*parameter_maps: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge parameter mappings (later maps take precedence)."""
    result: Dict[str, Any] = {}

    for parameters in parameter_maps:
        result.update(parameters)

    return result


def build_uri(
    scheme: str,
    path: str = "/",
    query: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build a URI in the form the parser accepts.

    Values are percent-encoded; keys are written as given.
    """
    uri = f"{scheme}://{path.lstrip('/')}"

    if query:
        pairs = [f"{key}={quote(str(value), safe='')}" for key, value in query.items()]
        uri += "?" + "&".join(pairs)

    return uri


__all__ = [
    "ensure_leading_slash",
    "strip_trailing_slash",
    "split_path",
    "decode_value",
    "merge_parameters",
    "build_uri",
]
