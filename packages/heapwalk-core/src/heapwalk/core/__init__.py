"""heapwalk -- object-graph navigation over parsed heap snapshots."""

from __future__ import annotations

from heapwalk.core.excludes import FieldNameExcludes, ReachableExcludes
from heapwalk.core.identity import Normalized, NormalizedKind
from heapwalk.core.navigator import HeapNavigator
from heapwalk.core.types.config import NavigatorConfig, load_config

__all__ = [
    "HeapNavigator",
    "NavigatorConfig",
    "load_config",
    "Normalized",
    "NormalizedKind",
    "ReachableExcludes",
    "FieldNameExcludes",
]
