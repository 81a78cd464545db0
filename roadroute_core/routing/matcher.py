"""Route Matcher - Segment-wise path pattern matching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from roadroute_core.utils.helpers import strip_trailing_slash

PARAM_PREFIX = ":"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching a path against a pattern."""

    matched: bool
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def __hash__(self) -> int:
        return hash((self.matched, frozenset(self.parameters.items())))

    def __bool__(self) -> bool:
        return self.matched


class PatternMatcher(ABC):
    """Abstract pattern matcher."""

    @abstractmethod
    def match(self, pattern: str, value: str) -> MatchResult:
        """Match value against pattern."""
        pass

    def matches(self, pattern: str, value: str) -> bool:
        """Check if value matches pattern."""
        return self.match(pattern, value).matched

    def extract(self, pattern: str, value: str) -> Optional[Dict[str, str]]:
        """Extract variables from pattern match, None if no match."""
        result = self.match(pattern, value)
        if result.matched:
            return dict(result.parameters)
        return None

    def clear_cache(self, pattern: Optional[str] = None) -> None:
        """Drop cached pattern state, if any."""
        pass


class PathMatcher(PatternMatcher):
    """URI path pattern matcher.

    Supports:
    - Exact matches: /home
    - Path parameters: /detail/:id

    Segment counts must be equal; there are no wildcard or optional
    segments. A single trailing slash is ignored on both sides, so
    ``/detail/:id/`` and ``/detail/42/`` behave like their bare forms.
    """

    def __init__(self, max_cache_size: int = 1024):
        self.max_cache_size = max_cache_size
        self._cache: Dict[str, Tuple[Tuple[str, bool], ...]] = {}
        self._lock = threading.Lock()

    def match(self, pattern: str, value: str) -> MatchResult:
        """Match a request path against a pattern."""
        segments = self._compile(pattern)
        parts = strip_trailing_slash(value).split("/")

        if len(segments) != len(parts):
            return MatchResult(matched=False)

        params: Dict[str, str] = {}
        for (segment, is_param), part in zip(segments, parts):
            if is_param:
                params[segment] = part
            elif segment != part:
                return MatchResult(matched=False)

        return MatchResult(matched=True, parameters=params)

    def param_names(self, pattern: str) -> List[str]:
        """List the named parameters a pattern binds."""
        return [segment for segment, is_param in self._compile(pattern) if is_param]

    def _compile(self, pattern: str) -> Tuple[Tuple[str, bool], ...]:
        """Split pattern into (name_or_literal, is_param) segments (cached)."""
        compiled = self._cache.get(pattern)
        if compiled is not None:
            return compiled

        segments = []
        for segment in strip_trailing_slash(pattern).split("/"):
            if segment.startswith(PARAM_PREFIX):
                segments.append((segment[len(PARAM_PREFIX):], True))
            else:
                segments.append((segment, False))

        compiled = tuple(segments)
        with self._lock:
            # Evict oldest entries once full
            while self._cache and len(self._cache) >= self.max_cache_size:
                self._cache.pop(next(iter(self._cache)))
            self._cache[pattern] = compiled
        return compiled

    def clear_cache(self, pattern: Optional[str] = None) -> None:
        """Drop one compiled pattern, or all of them."""
        with self._lock:
            if pattern is None:
                self._cache.clear()
            else:
                self._cache.pop(pattern, None)

    @property
    def cache_size(self) -> int:
        """Number of compiled patterns held."""
        return len(self._cache)


__all__ = [
    "MatchResult",
    "PatternMatcher",
    "PathMatcher",
    "PARAM_PREFIX",
]
