"""Walk of the runtime's pending-finalization queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Set

from heapwalk.model import ObjectInstance

if TYPE_CHECKING:
    from heapwalk.core.descriptors import ClassDescriptorResolver
    from heapwalk.model import HeapModel

logger = logging.getLogger(__name__)


class FinalizerWalker:
    """Lists the referents queued in ``Finalizer.queue``.

    The queue is a linked list of nodes with ``referent`` and ``next``
    fields; the last node's ``next`` is either absent or the node itself.
    """

    def __init__(
        self,
        heap: HeapModel,
        resolver: ClassDescriptorResolver,
        finalizer_class: str = "java.lang.ref.Finalizer",
    ):
        self._heap = heap
        self._resolver = resolver
        self._finalizer_class = finalizer_class

    def finalizer_objects(self) -> Iterator[ObjectInstance]:
        cls = self._resolver.resolve(self._finalizer_class)
        if cls is None:
            logger.debug("No %s class in snapshot", self._finalizer_class)
            return
        queue = self._heap.static_field(cls, "queue")
        if not isinstance(queue, ObjectInstance):
            logger.debug("%s has no queue", self._finalizer_class)
            return

        node = self._heap.field(queue, "head")
        seen: Set[int] = set()
        while isinstance(node, ObjectInstance):
            seen.add(node.id)
            referent = self._heap.field(node, "referent")
            next_node = self._heap.field(node, "next")
            if isinstance(referent, ObjectInstance):
                yield referent
            if next_node is None or next_node is node:
                break
            if getattr(next_node, "id", None) in seen:
                logger.debug("Finalizer queue loops back to %s", next_node)
                break
            node = next_node
