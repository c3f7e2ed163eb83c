"""Root chains, root distance and class-hierarchy instance walks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Set, Tuple

if TYPE_CHECKING:
    from heapwalk.model import ClassObject, GCRoot, HeapModel, ObjectInstance

logger = logging.getLogger(__name__)


class ReachabilityEngine:
    """Follows the heap model's nearest-GC-root pointers.

    Every walk takes at least one hop before testing the root flag, so an
    instance that is itself a root is reached through its own pointer.
    """

    def __init__(self, heap: HeapModel):
        self._heap = heap

    def _walk_to_root(
        self, instance: ObjectInstance
    ) -> Tuple[Optional[ObjectInstance], int]:
        """Return ``(root_instance, hops)``; ``root_instance`` is None if the chain breaks."""
        seen: Set[int] = set()
        current = instance
        hops = 0
        while True:
            current = self._heap.nearest_gc_root_pointer(current)
            if current is None:
                return None, hops
            hops += 1
            if self._heap.is_gc_root(current):
                return current, hops
            if current.id in seen:
                logger.debug("Root pointer cycle through %s", current)
                return None, hops
            seen.add(current.id)

    def find_nearest_root(self, instance: ObjectInstance) -> Optional[GCRoot]:
        """Return the first GC root at the end of *instance*'s root chain."""
        root_instance, _ = self._walk_to_root(instance)
        if root_instance is None:
            logger.debug("%s is not reachable from any root", instance)
            return None
        roots = self._heap.gc_roots_of(root_instance)
        if not roots:
            return None
        return roots[0]

    def distance_to_root(self, instance: ObjectInstance) -> int:
        """Return the hop count to the nearest root, or 0 if the chain breaks."""
        root_instance, hops = self._walk_to_root(instance)
        if root_instance is None:
            return 0
        return hops

    def instances_of(
        self, cls: ClassObject, include_subclasses: bool = False
    ) -> Iterator[ObjectInstance]:
        """Lazily yield the instances of *cls*, optionally with its subclasses.

        A class without a superclass is the root of the hierarchy, so with
        ``include_subclasses`` every instance in the snapshot qualifies.
        """
        if include_subclasses and cls.superclass is None:
            yield from self._heap.all_instances()
            return

        stack: List[ClassObject] = [cls]
        while stack:
            current = stack.pop()
            yield from self._heap.instances_of(current)
            if include_subclasses:
                stack.extend(reversed(self._heap.subclasses(current)))
