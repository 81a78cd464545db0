"""RoadRoute - In-process URI Router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RoadRoute dispatches deep-link style URIs to registered handlers:
- URI parsing (scheme, path, query)
- Segment-wise pattern matching with named parameters
- Default (fallback) handler
- Reserved data scheme for out-of-band data retrieval
- Async data bridge with callback, future and awaitable fronts

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                              RoadRoute                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                        Dispatch Pipeline                               │  │
│  │  URI ──▶ Parser ──▶ Scheme Branch ──▶ Registry ──▶ Handler ──▶ Result │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Parser       │  │    Matcher      │  │        Registry             │ │
│  │                 │  │                 │  │                             │ │
│  │ - Scheme        │  │ - Literals      │  │ - Navigation routes         │ │
│  │ - Path          │  │ - :params       │  │ - Default handler           │ │
│  │ - Query         │  │ - Trailing /    │  │ - Data handlers             │ │
│  │ - Fragment      │  │ - Segment count │  │ - Priority ordering         │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
│  ┌─────────────────────────────────┐  ┌──────────────────────────────────┐ │
│  │          Dispatcher             │  │        Async Data Bridge         │ │
│  │                                 │  │                                  │ │
│  │ - route(uri, context)           │  │ - Completion relay               │ │
│  │ - get_data(uri, completion)     │  │ - concurrent.futures.Future      │ │
│  │ - fetch(uri)                    │  │ - asyncio awaitable              │ │
│  └─────────────────────────────────┘  └──────────────────────────────────┘ │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Dispatch Flow:
1. Caller passes a URI (and an opaque context) to the Dispatcher
2. Parser splits it into scheme, path and query parameters
3. Data scheme URIs bypass navigation routes
4. Registry matches the path against registered patterns
5. Handler runs with path parameters merged over query parameters
6. Default handler runs if nothing matched

Usage:
    from roadroute_core import Dispatcher

    router = Dispatcher()

    # Add routes
    router.register("detail/:id", show_detail)
    router.register("/product/:productId/info", show_product)
    router.register_default(show_not_found)

    # Route
    router.route("myapp://detail/123?name=test", context=current_screen)

    # Data
    router.set_data_handler(fetch_remote)
    router.get_data("data://user/42", on_done)
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from roadroute_core.routing.parser import ParsedURI, URIParser, parse_uri
from roadroute_core.routing.matcher import MatchResult, PathMatcher, PatternMatcher
from roadroute_core.routing.registry import Route, RouteRegistry

# Dispatch
from roadroute_core.dispatch.dispatcher import Dispatcher, DispatchStats
from roadroute_core.dispatch.bridge import AsyncDataBridge

# Errors
from roadroute_core.errors import (
    RouterError,
    MalformedURIError,
    InvalidDataURIError,
    NotDataSchemeError,
    MalformedDataURIError,
    NoRouteMatchedError,
    NoDataHandlerError,
    HandlerFailure,
)

# Utils
from roadroute_core.utils.config import RouterConfig, load_config, configure_logging

__all__ = [
    # Version
    "__version__",
    # Routing
    "ParsedURI",
    "URIParser",
    "parse_uri",
    "MatchResult",
    "PathMatcher",
    "PatternMatcher",
    "Route",
    "RouteRegistry",
    # Dispatch
    "Dispatcher",
    "DispatchStats",
    "AsyncDataBridge",
    # Errors
    "RouterError",
    "MalformedURIError",
    "InvalidDataURIError",
    "NotDataSchemeError",
    "MalformedDataURIError",
    "NoRouteMatchedError",
    "NoDataHandlerError",
    "HandlerFailure",
    # Utils
    "RouterConfig",
    "load_config",
    "configure_logging",
]
