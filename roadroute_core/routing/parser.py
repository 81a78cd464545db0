"""URI Parser - Scheme, path and query decomposition.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Accepted grammar::

    <scheme>://<path>[?<key>=<value>[&<key>=<value>]*]

Query rules:
- Tokens are split on the first '='; a token without '=' is a key
  with an empty value.
- A token with more than one '=' keeps only the text up to the
  second '=' as its value (``a=b=c`` gives ``{"a": "b"}``).
- Values are percent-decoded when the result is valid UTF-8, else
  kept raw. Keys are never decoded and '+' is not a space.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from roadroute_core.errors import MalformedURIError
from roadroute_core.utils.helpers import decode_value, ensure_leading_slash, split_path

logger = logging.getLogger(__name__)

SCHEME_SEPARATOR = "://"
DATA_SCHEME = "data"


@dataclass(frozen=True)
class ParsedURI:
    """Decomposed URI."""

    scheme: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    fragment: str = ""
    raw: str = field(default="", compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    def __hash__(self) -> int:
        return hash((self.scheme, self.path, frozenset(self.query.items()), self.fragment))

    @property
    def path_components(self) -> List[str]:
        """Non-empty path segments."""
        return split_path(self.path)

    def has_scheme(self, scheme: str) -> bool:
        """Check scheme (case-insensitive)."""
        return self.scheme.lower() == scheme.lower()

    @property
    def is_data(self) -> bool:
        """Check if this URI uses the reserved data scheme."""
        return self.has_scheme(DATA_SCHEME)


class URIParser:
    """URI parser.

    Usage:
        parser = URIParser()
        parsed = parser.parse("myapp://detail/123?name=test")
        parsed.scheme   # "myapp"
        parsed.path     # "/detail/123"
        parsed.query    # {"name": "test"}
    """

    def __init__(self, strip_fragment: bool = False, decode_values: bool = True):
        self.strip_fragment = strip_fragment
        self.decode_values = decode_values

    def parse(self, uri: str) -> ParsedURI:
        """Parse a URI string.

        Raises:
            MalformedURIError: If the URI has no '://' separator
        """
        scheme, sep, remainder = uri.partition(SCHEME_SEPARATOR)
        if not sep:
            raise MalformedURIError(uri)

        fragment = ""
        if self.strip_fragment and "#" in remainder:
            remainder, _, fragment = remainder.partition("#")

        path, _, query_string = remainder.partition("?")

        return ParsedURI(
            scheme=scheme,
            path=ensure_leading_slash(path),
            query=self.parse_query(query_string),
            fragment=fragment,
            raw=uri,
        )

    def try_parse(self, uri: str) -> Optional[ParsedURI]:
        """Parse a URI, returning None if malformed."""
        try:
            return self.parse(uri)
        except MalformedURIError:
            logger.warning(f"Malformed URI: {uri!r}")
            return None

    def parse_query(self, query_string: str) -> Dict[str, str]:
        """Parse a query string into an ordered mapping."""
        query: Dict[str, str] = {}

        for token in query_string.split("&"):
            if not token:
                continue

            parts = token.split("=")
            key = parts[0]
            value = parts[1] if len(parts) > 1 else ""

            query[key] = decode_value(value) if self.decode_values else value

        return query


_default_parser = URIParser()


def parse_uri(uri: str) -> ParsedURI:
    """Parse a URI with default settings."""
    return _default_parser.parse(uri)


__all__ = [
    "ParsedURI",
    "URIParser",
    "parse_uri",
    "SCHEME_SEPARATOR",
    "DATA_SCHEME",
]
