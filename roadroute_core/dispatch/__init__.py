"""Dispatch module - URI dispatch and async data bridging."""

from roadroute_core.dispatch.dispatcher import Dispatcher, DispatchStats
from roadroute_core.dispatch.bridge import AsyncDataBridge, completion_future

__all__ = [
    "Dispatcher",
    "DispatchStats",
    "AsyncDataBridge",
    "completion_future",
]
