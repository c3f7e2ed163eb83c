"""Display strings for string-like instances."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from heapwalk.core.types.config import ClassNamesConfig
    from heapwalk.model import HeapModel, ObjectInstance

logger = logging.getLogger(__name__)

NULL_CHARS_MARKER = "*null*"


class ValueStringifier:
    """Renders strings and char arrays through the heap model's decoders.

    Anything else, and anything the decoders fail on, falls back to the
    instance's own ``str()``.
    """

    def __init__(self, heap: HeapModel, names: ClassNamesConfig):
        self._heap = heap
        self._string_class = names.string
        self._char_array_class = names.char_array

    def render(self, instance: Optional[ObjectInstance]) -> Optional[str]:
        if instance is None:
            return None
        try:
            class_name = instance.java_class.name
            if class_name == self._string_class:
                return self._heap.decode_string_value(instance)
            if class_name == self._char_array_class:
                chars = self._heap.decode_char_array(instance, 0, instance.length)
                if chars is None:
                    return NULL_CHARS_MARKER
                return "".join(chars)
        except Exception:
            logger.warning(
                "Error getting display value of %s", instance, exc_info=True
            )
        return str(instance)
