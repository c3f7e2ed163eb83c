from __future__ import annotations

from heapwalk.core.types.config import ClassNamesConfig, NavigatorConfig, load_config

__all__ = [
    "ClassNamesConfig",
    "NavigatorConfig",
    "load_config",
]
