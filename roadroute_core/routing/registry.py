"""Route Registry - Pattern to handler mapping.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from roadroute_core.routing.matcher import PathMatcher, PatternMatcher
from roadroute_core.utils.helpers import ensure_leading_slash

logger = logging.getLogger(__name__)

# (context, parameters) -> handled
NavigationHandler = Callable[[Any, Dict[str, Any]], bool]

# (parameters) -> result or None
DataHandler = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]

# (result, error) -> None
Completion = Callable[[Optional[Dict[str, Any]], Optional[BaseException]], None]

# (uri, parameters, completion) -> None
AsyncDataHandler = Callable[[str, Dict[str, Any], Completion], None]


@dataclass
class Route:
    """Registered route."""

    pattern: str
    handler: Callable
    priority: int = 0
    name: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    order: int = field(default=0, repr=False)


class _RouteTable:
    """Ordered pattern table. Callers hold the registry lock."""

    def __init__(self):
        self._routes: Dict[str, Route] = {}
        self._snapshot: Tuple[Route, ...] = ()

    def put(self, route: Route) -> Optional[Route]:
        previous = self._routes.get(route.pattern)
        if previous is not None:
            route.order = previous.order
        self._routes[route.pattern] = route
        self._rebuild()
        return previous

    def pop(self, pattern: str) -> Optional[Route]:
        route = self._routes.pop(pattern, None)
        if route is not None:
            self._rebuild()
        return route

    def clear(self) -> None:
        self._routes.clear()
        self._snapshot = ()

    def _rebuild(self) -> None:
        self._snapshot = tuple(
            sorted(self._routes.values(), key=lambda r: (-r.priority, r.order))
        )

    @property
    def snapshot(self) -> Tuple[Route, ...]:
        return self._snapshot

    def __contains__(self, pattern: str) -> bool:
        return pattern in self._routes

    def __len__(self) -> int:
        return len(self._routes)


class RouteRegistry:
    """Route Registry.

    Holds navigation routes, the default handler, the async data
    handler, and per-pattern synchronous data handlers.

    Resolution order:
    Candidates are tried by descending priority, then in the order
    their pattern was first registered. Re-registering a pattern
    replaces its handler but keeps its position. The first match wins.

    Lookups match against an immutable snapshot taken under the lock,
    so registrations running concurrently never disturb iteration.

    Usage:
        registry = RouteRegistry()
        registry.register("detail/:id", show_detail)
        registry.register_default(show_not_found)

        match = registry.lookup("/detail/42")
        if match:
            route, params = match
    """

    def __init__(self, matcher: Optional[PatternMatcher] = None):
        self._matcher = matcher or PathMatcher()
        self._routes = _RouteTable()
        self._data_routes = _RouteTable()
        self._default_handler: Optional[NavigationHandler] = None
        self._default_data_handler: Optional[DataHandler] = None
        self._data_handler: Optional[AsyncDataHandler] = None
        self._counter = itertools.count()
        self._lock = threading.RLock()

    @property
    def matcher(self) -> PatternMatcher:
        """Pattern matcher used for lookups."""
        return self._matcher

    @staticmethod
    def normalize(pattern: str) -> str:
        """Normalize a pattern (leading slash)."""
        return ensure_leading_slash(pattern)

    # Navigation routes

    def register(
        self,
        pattern: str,
        handler: NavigationHandler,
        priority: int = 0,
        name: str = "",
        **kwargs,
    ) -> "RouteRegistry":
        """Register a navigation handler.

        Args:
            pattern: Route pattern (e.g., "detail/:id", "/product/:productId/info")
            handler: Callable taking (context, parameters), returning bool
            priority: Route priority (higher = tried first)
            name: Route name
        """
        route = self._make_route(pattern, handler, priority, name, kwargs)

        with self._lock:
            previous = self._routes.put(route)

        if previous is not None:
            logger.debug(f"Replaced route: {route.pattern}")
        else:
            logger.debug(f"Registered route: {route.pattern}")
        return self

    def register_default(self, handler: NavigationHandler) -> "RouteRegistry":
        """Register the fallback navigation handler."""
        with self._lock:
            self._default_handler = handler
        logger.debug("Registered default route handler")
        return self

    def unregister(self, pattern: str) -> bool:
        """Remove a navigation route by pattern."""
        normalized = self.normalize(pattern)
        with self._lock:
            removed = self._routes.pop(normalized)
            if normalized not in self._data_routes:
                self._matcher.clear_cache(normalized)
        return removed is not None

    def lookup(self, path: str) -> Optional[Tuple[Route, Dict[str, str]]]:
        """Find the first route matching a request path.

        Returns:
            Tuple of (route, path parameters) if match, None otherwise
        """
        with self._lock:
            candidates = self._routes.snapshot
        return self._first_match(candidates, path)

    @property
    def default_handler(self) -> Optional[NavigationHandler]:
        """Fallback navigation handler."""
        with self._lock:
            return self._default_handler

    # Data handlers

    def set_data_handler(self, handler: AsyncDataHandler) -> "RouteRegistry":
        """Set the async data handler for data URIs."""
        with self._lock:
            self._data_handler = handler
        logger.debug("Set async data handler")
        return self

    @property
    def data_handler(self) -> Optional[AsyncDataHandler]:
        """Async data handler."""
        with self._lock:
            return self._data_handler

    def register_data(
        self,
        pattern: str,
        handler: DataHandler,
        priority: int = 0,
        name: str = "",
        **kwargs,
    ) -> "RouteRegistry":
        """Register a synchronous data handler for a path pattern."""
        route = self._make_route(pattern, handler, priority, name, kwargs)

        with self._lock:
            self._data_routes.put(route)

        logger.debug(f"Registered data handler: {route.pattern}")
        return self

    def register_default_data(self, handler: DataHandler) -> "RouteRegistry":
        """Register the fallback synchronous data handler."""
        with self._lock:
            self._default_data_handler = handler
        logger.debug("Registered default data handler")
        return self

    def lookup_data(self, path: str) -> List[Tuple[Route, Dict[str, str]]]:
        """Find every data route matching a path, in resolution order."""
        with self._lock:
            candidates = self._data_routes.snapshot

        matches = []
        for route in candidates:
            params = self._matcher.extract(route.pattern, path)
            if params is not None:
                matches.append((route, params))
        return matches

    @property
    def default_data_handler(self) -> Optional[DataHandler]:
        """Fallback synchronous data handler."""
        with self._lock:
            return self._default_data_handler

    # Housekeeping

    def clear(self) -> None:
        """Remove all routes and handlers."""
        with self._lock:
            self._routes.clear()
            self._data_routes.clear()
            self._default_handler = None
            self._default_data_handler = None
            self._data_handler = None
            self._matcher.clear_cache()
        logger.debug("Cleared route registry")

    def get_routes(self) -> List[Route]:
        """Get navigation routes in resolution order."""
        with self._lock:
            return list(self._routes.snapshot)

    def get_data_routes(self) -> List[Route]:
        """Get data routes in resolution order."""
        with self._lock:
            return list(self._data_routes.snapshot)

    def __contains__(self, pattern: str) -> bool:
        with self._lock:
            return self.normalize(pattern) in self._routes

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)

    def _make_route(
        self,
        pattern: str,
        handler: Callable,
        priority: int,
        name: str,
        metadata: Dict[str, Any],
    ) -> Route:
        return Route(
            pattern=self.normalize(pattern),
            handler=handler,
            priority=priority,
            name=name,
            metadata=metadata,
            order=next(self._counter),
        )

    def _first_match(
        self,
        candidates: Tuple[Route, ...],
        path: str,
    ) -> Optional[Tuple[Route, Dict[str, str]]]:
        for route in candidates:
            params = self._matcher.extract(route.pattern, path)
            if params is not None:
                return route, params
        return None


__all__ = [
    "Route",
    "RouteRegistry",
    "NavigationHandler",
    "DataHandler",
    "AsyncDataHandler",
    "Completion",
]
