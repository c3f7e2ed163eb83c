"""Referrer and referee enumeration with weak-reference filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, List, Union

from heapwalk.model import (
    ClassObject,
    FieldValue,
    ObjectArrayInstance,
    ObjectFieldValue,
    ObjectInstance,
)

if TYPE_CHECKING:
    from heapwalk.core.identity import IdentityNormalizer
    from heapwalk.core.weakrefs import WeakRefClassification
    from heapwalk.model import HeapModel


class ReferenceEnumerator:
    """Lists who points at an object and what an object points at."""

    def __init__(
        self,
        heap: HeapModel,
        weak: WeakRefClassification,
        normalizer: IdentityNormalizer,
    ):
        self._heap = heap
        self._weak = weak
        self._normalizer = normalizer

    def _keep(self, instance: ObjectInstance, include_weak: bool) -> bool:
        return include_weak or not self._weak.is_weak(instance)

    def referrers(
        self, obj: Union[ClassObject, ObjectInstance], include_weak: bool = False
    ) -> Iterator[ObjectInstance]:
        """Yield the instances holding a reference to *obj*.

        For a class these are its instances and its class loader.  Referrers
        are reported as they are, mirrors included.
        """
        references: List[Any] = []
        if isinstance(obj, ObjectInstance):
            references.extend(self._heap.references_to(obj))
        elif isinstance(obj, ClassObject):
            references.extend(self._heap.instances_of(obj))
            references.append(obj.class_loader)

        for reference in references:
            if isinstance(reference, FieldValue):
                instance = reference.defining_instance
            elif isinstance(reference, ObjectInstance):
                instance = reference
            else:
                continue
            if instance is not None and self._keep(instance, include_weak):
                yield instance

    def referees(
        self, obj: Union[ClassObject, ObjectInstance], include_weak: bool = False
    ) -> Iterator[Union[ClassObject, ObjectInstance]]:
        """Yield the objects *obj* references through fields or array elements.

        Field targets that are ``java.lang.Class`` mirrors are replaced by the
        class they mirror.
        """
        values: List[Any] = []
        if isinstance(obj, ObjectInstance):
            values.extend(self._heap.field_values(obj))
        if isinstance(obj, ClassObject):
            values.extend(self._heap.static_field_values(obj))
        if isinstance(obj, ObjectArrayInstance):
            values.extend(self._heap.array_elements(obj))

        for value in values:
            if isinstance(value, ObjectFieldValue):
                target = value.instance
                if target is not None and self._keep(target, include_weak):
                    yield self._normalizer.normalize(target).value
            elif isinstance(value, ObjectInstance):
                if self._keep(value, include_weak):
                    yield value
