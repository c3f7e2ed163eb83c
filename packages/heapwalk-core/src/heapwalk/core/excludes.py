"""Reachable-excludes policies: fields left out of reachability computation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ReachableExcludes(Protocol):
    """Decides whether a field is skipped when computing reachability."""

    def is_excluded(self, field_name: str) -> bool:
        """*field_name* is fully qualified, e.g. ``java.lang.ref.Reference.referent``."""
        ...


class FieldNameExcludes:
    """A fixed set of fully qualified field names to exclude."""

    def __init__(self, field_names: Iterable[str] = ()):
        self._names: FrozenSet[str] = frozenset(field_names)

    @classmethod
    def from_file(cls, path: str) -> FieldNameExcludes:
        """Read one field name per line; blank lines and ``#`` comments are skipped."""
        names = []
        for line in Path(path).read_text().splitlines():
            line = line.split("#", 1)[0].strip()
            if line:
                names.append(line)
        logger.debug("Loaded %d reachable excludes from %s", len(names), path)
        return cls(names)

    @property
    def field_names(self) -> FrozenSet[str]:
        return self._names

    def is_excluded(self, field_name: str) -> bool:
        return field_name in self._names

    def __len__(self) -> int:
        return len(self._names)
