"""heapwalk.model -- the heap snapshot seen by the navigator.

This package defines the entity types of a parsed heap snapshot, the
:class:`HeapModel` protocol the navigator reads through, and :class:`Heap`,
a small in-memory implementation of that protocol.

Example::

    from heapwalk.model import Heap, RootKind

    heap = Heap()
    obj = heap.add_class(1, "java.lang.Object")
    holder = heap.add_class(2, "Holder", superclass=obj)
    h1 = heap.add_instance(100, holder)
    heap.add_root(h1, RootKind.JAVA_FRAME)
"""

from __future__ import annotations

from .heap import Heap
from .protocol import HeapModel
from .types import (
    ArrayItemValue,
    ClassObject,
    FieldDescriptor,
    FieldValue,
    GCRoot,
    ObjectArrayInstance,
    ObjectFieldValue,
    ObjectInstance,
    PrimitiveArrayInstance,
    RootKind,
)

__all__ = [
    # Snapshot
    "Heap",
    "HeapModel",
    # Types
    "RootKind",
    "ClassObject",
    "ObjectInstance",
    "ObjectArrayInstance",
    "PrimitiveArrayInstance",
    "FieldDescriptor",
    "FieldValue",
    "ObjectFieldValue",
    "ArrayItemValue",
    "GCRoot",
]
