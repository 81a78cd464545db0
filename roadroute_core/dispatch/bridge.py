"""Async Data Bridge - Completion relay for data URIs.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

The bridge wraps the single external data function::

    handler(uri, parameters, completion)
    completion(result, error)

and relays the handler's completion to the caller unchanged, on
whatever thread the handler completes. Exactly-once completion is
assumed: if the handler never completes, neither does the caller.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, InvalidStateError
from typing import Any, Dict, Optional, Tuple

from roadroute_core.errors import HandlerFailure
from roadroute_core.routing.registry import AsyncDataHandler, Completion

logger = logging.getLogger(__name__)


class AsyncDataBridge:
    """Adapter around an async data handler.

    Usage:
        bridge = AsyncDataBridge(fetch_remote)
        bridge.request("data://user/1", params, on_done)

        future = bridge.submit("data://user/1", params)
        user = future.result(timeout=5)
    """

    def __init__(self, handler: AsyncDataHandler):
        self.handler = handler

    def request(
        self,
        uri: str,
        parameters: Dict[str, Any],
        completion: Completion,
    ) -> None:
        """Invoke the handler and relay its completion verbatim."""

        def relay(result: Optional[Dict[str, Any]], error: Optional[BaseException]) -> None:
            if error is not None:
                logger.debug(f"Data request failed: {uri} ({error})")
            else:
                logger.debug(f"Data request completed: {uri}")
            completion(result, error)

        self.handler(uri, parameters, relay)

    def submit(self, uri: str, parameters: Dict[str, Any]) -> "Future[Dict[str, Any]]":
        """Invoke the handler, returning a future for its result."""
        future, completion = completion_future(uri)
        self.request(uri, parameters, completion)
        return future


def completion_future(uri: str = "") -> Tuple["Future[Dict[str, Any]]", Completion]:
    """Create a future and the completion callback that resolves it.

    An error completes the future with that exception; a completion
    carrying neither result nor error raises HandlerFailure. Completions
    after the first are logged and ignored.
    """
    future: "Future[Dict[str, Any]]" = Future()

    def completion(result: Optional[Dict[str, Any]], error: Optional[BaseException]) -> None:
        try:
            if error is not None:
                if not isinstance(error, BaseException):
                    error = HandlerFailure(str(error))
                future.set_exception(error)
            elif result is None:
                future.set_exception(
                    HandlerFailure(f"Data handler returned no result for {uri!r}")
                )
            else:
                future.set_result(result)
        except InvalidStateError:
            logger.warning(f"Ignoring repeated completion for {uri!r}")

    return future, completion


__all__ = [
    "AsyncDataBridge",
    "completion_future",
]
