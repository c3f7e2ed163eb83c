"""Weak-reference classification, resolved once per snapshot."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Set

if TYPE_CHECKING:
    from heapwalk.core.descriptors import ClassDescriptorResolver
    from heapwalk.core.types.config import ClassNamesConfig
    from heapwalk.model import ClassObject, ObjectInstance

logger = logging.getLogger(__name__)


def is_assignable(from_cls: Optional[ClassObject], to_cls: ClassObject) -> bool:
    """Return True if *to_cls* is *from_cls* or one of its superclasses."""
    seen: Set[int] = set()
    cls = from_cls
    while cls is not None:
        if cls is to_cls:
            return True
        if cls.id in seen:
            logger.debug("Superclass cycle detected at %s", cls.name)
            return False
        seen.add(cls.id)
        cls = cls.superclass
    return False


class WeakRefClassification:
    """Decides whether an instance is a weak reference.

    The reference base class and the index of its ``referent`` field are
    looked up at construction and never change afterwards.  Snapshots
    without a reference class classify every instance as strong.
    """

    def __init__(self, resolver: ClassDescriptorResolver, names: ClassNamesConfig):
        weak_class = resolver.resolve(names.weak_reference)
        referent_index = 0
        if weak_class is None:
            # pre-1.2 runtimes
            weak_class = resolver.resolve(names.legacy_weak_reference)
        else:
            for index, declared in enumerate(weak_class.fields):
                if declared.name == names.referent_field:
                    referent_index = index
                    break

        if weak_class is None:
            logger.debug("No weak reference class in snapshot")

        self._weak_reference_class = weak_class
        self._referent_field_index = referent_index

    @property
    def weak_reference_class(self) -> Optional[ClassObject]:
        return self._weak_reference_class

    @property
    def referent_field_index(self) -> int:
        return self._referent_field_index

    def is_weak(self, instance: Optional[ObjectInstance]) -> bool:
        if self._weak_reference_class is None or instance is None:
            return False
        return is_assignable(instance.java_class, self._weak_reference_class)
