"""Router errors.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Exceptions are only raised out of the explicit raising APIs
(``parse_uri``, ``Dispatcher.fetch``, the future/awaitable data
fronts). ``route`` and ``get_data`` report the same conditions as
``False`` or as the error half of a completion.
"""

from __future__ import annotations


class RouterError(Exception):
    """Base class for routing errors."""
    pass


class MalformedURIError(RouterError):
    """Raised when a URI has no scheme separator."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Malformed URI (missing '://'): {uri!r}")


class InvalidDataURIError(RouterError):
    """Raised when a data operation gets an unusable URI."""

    def __init__(self, uri: str, message: str = "invalid URI or not a data scheme"):
        self.uri = uri
        super().__init__(message)


class NotDataSchemeError(InvalidDataURIError):
    """Raised when a data operation gets a non-data URI."""

    def __init__(self, uri: str, scheme: str = ""):
        self.scheme = scheme
        super().__init__(uri)


class MalformedDataURIError(InvalidDataURIError):
    """Raised when a data operation gets a URI that cannot be parsed."""
    pass


class NoRouteMatchedError(RouterError):
    """Raised when no pattern and no default handler fit a path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No route matches {path!r}")


class NoDataHandlerError(RouterError):
    """Raised when no data handler is available for a request."""

    def __init__(self, message: str = "no data handler configured"):
        super().__init__(message)


class HandlerFailure(RouterError):
    """Raised when a data handler completes with neither result nor error."""
    pass


__all__ = [
    "RouterError",
    "MalformedURIError",
    "InvalidDataURIError",
    "NotDataSchemeError",
    "MalformedDataURIError",
    "NoRouteMatchedError",
    "NoDataHandlerError",
    "HandlerFailure",
]
