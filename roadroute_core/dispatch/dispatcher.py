"""Dispatcher - URI routing and data dispatch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from roadroute_core.dispatch.bridge import AsyncDataBridge, completion_future
from roadroute_core.errors import (
    InvalidDataURIError,
    MalformedDataURIError,
    NoDataHandlerError,
    NoRouteMatchedError,
    NotDataSchemeError,
)
from roadroute_core.routing.parser import ParsedURI, URIParser
from roadroute_core.routing.registry import (
    AsyncDataHandler,
    Completion,
    DataHandler,
    NavigationHandler,
    Route,
    RouteRegistry,
)
from roadroute_core.utils.config import RouterConfig
from roadroute_core.utils.helpers import merge_parameters

logger = logging.getLogger(__name__)


@dataclass
class DispatchStats:
    """Dispatcher statistics."""

    routed: int = 0
    fallbacks: int = 0
    unmatched: int = 0
    malformed: int = 0
    data_short_circuits: int = 0
    data_requests: int = 0
    data_errors: int = 0


class Dispatcher:
    """URI Dispatcher.

    Parses a URI, branches on its scheme, and invokes the matching
    handler with merged path and query parameters.

    Flow:
    ┌────────────────────────────────────────────────────────────────┐
    │                          Dispatcher                            │
    │                                                                │
    │  uri ──▶ parse ──▶ scheme == data? ──yes──▶ route(): True      │
    │            │              │                 get_data(): bridge │
    │        malformed          no                                   │
    │            │              ▼                                    │
    │            ▼          registry lookup ──match──▶ handler       │
    │          False            │                                    │
    │                        no match ──▶ default handler or False   │
    └────────────────────────────────────────────────────────────────┘

    Usage:
        dispatcher = Dispatcher()
        dispatcher.register("detail/:id", lambda ctx, params: show(params["id"]))
        dispatcher.route("myapp://detail/123?name=test", context=screen)

        dispatcher.set_data_handler(fetch_remote)
        dispatcher.get_data("data://user/42", on_done)
    """

    def __init__(
        self,
        registry: Optional[RouteRegistry] = None,
        config: Optional[RouterConfig] = None,
    ):
        self.config = config or RouterConfig()
        self.registry = registry if registry is not None else RouteRegistry()
        self.parser = URIParser(
            strip_fragment=self.config.strip_fragment,
            decode_values=self.config.decode_query_values,
        )
        self._stats = DispatchStats()
        self._stats_lock = threading.Lock()

    # Registration shortcuts

    def register(self, pattern: str, handler: NavigationHandler, **kwargs) -> "Dispatcher":
        """Register a navigation handler."""
        self.registry.register(pattern, handler, **kwargs)
        return self

    def register_default(self, handler: NavigationHandler) -> "Dispatcher":
        """Register the fallback navigation handler."""
        self.registry.register_default(handler)
        return self

    def register_data(self, pattern: str, handler: DataHandler, **kwargs) -> "Dispatcher":
        """Register a synchronous data handler."""
        self.registry.register_data(pattern, handler, **kwargs)
        return self

    def register_default_data(self, handler: DataHandler) -> "Dispatcher":
        """Register the fallback synchronous data handler."""
        self.registry.register_default_data(handler)
        return self

    def set_data_handler(self, handler: AsyncDataHandler) -> "Dispatcher":
        """Set the async data handler."""
        self.registry.set_data_handler(handler)
        return self

    def clear(self) -> None:
        """Remove all routes and handlers."""
        self.registry.clear()

    # Navigation

    def route(self, uri: str, context: Any = None) -> bool:
        """Route a URI to its handler.

        Args:
            uri: URI to route (e.g., "myapp://detail/123?name=test")
            context: Opaque caller value passed to the handler

        Returns:
            Handler result, True for data URIs, False if malformed or unmatched
        """
        parsed = self.parser.try_parse(uri)
        if parsed is None:
            self._count("malformed")
            return False

        if self._is_data(parsed):
            self._count("data_short_circuits")
            self._log(f"Data URI not routed: {uri}")
            return True

        match = self.registry.lookup(parsed.path)
        if match is not None:
            route, path_params = match
            # Path parameters win over query parameters
            parameters = merge_parameters(parsed.query, path_params)
            self._count("routed")
            self._log(f"Routing {uri} -> {route.pattern}")
            return route.handler(context, parameters)

        default = self.registry.default_handler
        if default is not None:
            self._count("fallbacks")
            self._log(f"No route for {parsed.path}, using default handler")
            return default(context, dict(parsed.query))

        self._count("unmatched")
        self._log(f"No route for {parsed.path}")
        return False

    def resolve(self, uri: str) -> Tuple[Route, Dict[str, Any]]:
        """Find the route a URI would dispatch to, without invoking it.

        Returns:
            Tuple of (route, merged parameters)

        Raises:
            MalformedURIError: If the URI has no scheme separator
            NoRouteMatchedError: If no registered pattern matches
        """
        parsed = self.parser.parse(uri)

        match = None
        if not self._is_data(parsed):
            match = self.registry.lookup(parsed.path)
        if match is None:
            raise NoRouteMatchedError(parsed.path)

        route, path_params = match
        return route, merge_parameters(parsed.query, path_params)

    # Data

    def get_data(self, uri: str, completion: Completion) -> None:
        """Resolve a data URI through the async data handler.

        The completion receives (result, error). Invalid URIs and a
        missing handler complete immediately with an error; otherwise
        the handler's completion is forwarded verbatim.
        """
        self._count("data_requests")

        try:
            parsed = self._parse_data_uri(uri)
        except InvalidDataURIError as e:
            self._count("data_errors")
            completion(None, e)
            return

        handler = self.registry.data_handler
        if handler is None:
            logger.warning(f"No data handler configured for {uri}")
            self._count("data_errors")
            completion(None, NoDataHandlerError())
            return

        self._log(f"Requesting data: {uri}")
        AsyncDataBridge(handler).request(uri, self.data_parameters(parsed), completion)

    def get_data_future(self, uri: str) -> "Future[Dict[str, Any]]":
        """Resolve a data URI, returning a future for the result."""
        future, completion = completion_future(uri)
        self.get_data(uri, completion)
        return future

    async def get_data_async(self, uri: str) -> Dict[str, Any]:
        """Resolve a data URI from a coroutine."""
        return await asyncio.wrap_future(self.get_data_future(uri))

    def fetch(self, uri: str) -> Optional[Dict[str, Any]]:
        """Resolve a data URI through synchronous data handlers.

        Matching data routes are tried in resolution order with the
        request parameters plus path parameters; a handler returning
        None passes to the next candidate, then to the default data
        handler.

        Returns:
            First non-None handler result, or None if every handler declined

        Raises:
            InvalidDataURIError: If the URI is malformed or not a data URI
            NoDataHandlerError: If no synchronous data handler is registered
        """
        parsed = self._parse_data_uri(uri)
        request_params = self.data_parameters(parsed)

        default = self.registry.default_data_handler
        if default is None and not self.registry.get_data_routes():
            raise NoDataHandlerError()

        for route, path_params in self.registry.lookup_data(parsed.path):
            result = route.handler(merge_parameters(request_params, path_params))
            if result is not None:
                self._log(f"Data handler {route.pattern} resolved {uri}")
                return result

        if default is not None:
            result = default(request_params)
            if result is not None:
                self._log(f"Default data handler resolved {uri}")
                return result

        self._log(f"No data handler produced a result for {uri}")
        return None

    def data_parameters(self, parsed: ParsedURI) -> Dict[str, Any]:
        """Build the request parameters handed to data handlers."""
        return merge_parameters(
            parsed.query,
            {
                "pathComponents": parsed.path_components,
                "path": parsed.path,
                "scheme": parsed.scheme,
            },
        )

    # Stats

    def get_stats(self) -> Dict[str, Any]:
        """Get dispatcher statistics."""
        with self._stats_lock:
            return {
                "routes": len(self.registry),
                "routed": self._stats.routed,
                "fallbacks": self._stats.fallbacks,
                "unmatched": self._stats.unmatched,
                "malformed": self._stats.malformed,
                "data_short_circuits": self._stats.data_short_circuits,
                "data_requests": self._stats.data_requests,
                "data_errors": self._stats.data_errors,
            }

    def _parse_data_uri(self, uri: str) -> ParsedURI:
        parsed = self.parser.try_parse(uri)
        if parsed is None:
            raise MalformedDataURIError(uri)
        if not self._is_data(parsed):
            raise NotDataSchemeError(uri, parsed.scheme)
        return parsed

    def _is_data(self, parsed: ParsedURI) -> bool:
        return parsed.has_scheme(self.config.data_scheme)

    def _count(self, name: str) -> None:
        with self._stats_lock:
            setattr(self._stats, name, getattr(self._stats, name) + 1)

    def _log(self, message: str) -> None:
        if self.config.log_dispatch:
            logger.debug(message)


__all__ = [
    "Dispatcher",
    "DispatchStats",
]
