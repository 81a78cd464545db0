"""Utils module - Configuration and helper functions."""

from roadroute_core.utils.config import (
    RouterConfig,
    load_config,
    configure_logging,
)
from roadroute_core.utils.helpers import (
    build_uri,
    merge_parameters,
    split_path,
)

__all__ = [
    "RouterConfig",
    "load_config",
    "configure_logging",
    "build_uri",
    "merge_parameters",
    "split_path",
]
