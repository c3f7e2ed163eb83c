"""Class descriptor parsing: object ids, primitive codes and array signatures."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from heapwalk.model import ClassObject, HeapModel

logger = logging.getLogger(__name__)

PRIMITIVE_CODES = {
    "Z": "boolean",
    "C": "char",
    "B": "byte",
    "S": "short",
    "I": "int",
    "J": "long",
    "F": "float",
    "D": "double",
}

_HEX_ID = re.compile(r"[+-]?[0-9a-fA-F]+")
_DECIMAL_ID = re.compile(r"[+-]?[0-9]+")

_ARRAY_MARKER = "["
_REFERENCE_MARKER = "L"


def parse_object_id(descriptor: str) -> Optional[int]:
    """Parse ``0x``-prefixed hex or plain decimal object ids.

    Returns ``None`` when *descriptor* is not a number.  Underscores,
    surrounding whitespace and a second ``0x`` prefix are all rejected.
    """
    if descriptor.startswith("0x"):
        digits = descriptor[2:]
        if _HEX_ID.fullmatch(digits):
            return int(digits, 16)
        return None
    if _DECIMAL_ID.fullmatch(descriptor):
        return int(descriptor)
    return None


def canonical_class_name(descriptor: str) -> str:
    """Turn a JVM-style descriptor into a human-readable class name.

    ``"[I"`` becomes ``"int[]"``, ``"[[Ljava.lang.String;"`` becomes
    ``"java.lang.String[][]"``; plain names pass through unchanged.
    """
    name = descriptor.lstrip(_ARRAY_MARKER)
    dims = len(descriptor) - len(name)

    if len(name) == 1:
        name = PRIMITIVE_CODES.get(name, name)
    if dims > 0 and name.startswith(_REFERENCE_MARKER):
        name = name[1:]
        if name.endswith(";"):
            name = name[:-1]

    return name + "[]" * dims


class ClassDescriptorResolver:
    """Resolves textual or numeric class descriptors against a heap model."""

    def __init__(self, heap: HeapModel):
        self._heap = heap

    def resolve(self, descriptor: str) -> Optional[ClassObject]:
        """Return the class named by *descriptor*, or ``None`` if none is loaded.

        A numeric descriptor is looked up by id only; it never falls back to
        a name lookup.
        """
        object_id = parse_object_id(descriptor)
        if object_id is not None:
            return self._heap.class_by_id(object_id)

        name = canonical_class_name(descriptor)
        cls = self._heap.class_by_name(name)
        if cls is None:
            logger.debug("No class loaded for descriptor %r (%s)", descriptor, name)
        return cls
