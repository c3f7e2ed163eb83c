from __future__ import annotations

from typing import Any, Iterator, List, Optional, Protocol, runtime_checkable

from .types import (
    ClassObject,
    FieldValue,
    GCRoot,
    ObjectArrayInstance,
    ObjectInstance,
)


@runtime_checkable
class HeapModel(Protocol):
    """Read-only surface that every heap snapshot must provide to the navigator."""

    # -- classes -----------------------------------------------------------

    def class_by_id(self, class_id: int) -> Optional[ClassObject]:
        """Return the class whose object id is *class_id*, or ``None``."""
        ...

    def class_by_name(self, name: str) -> Optional[ClassObject]:
        """Return the class with canonical name *name* (``int[]``, ``java.lang.String``)."""
        ...

    def classes_by_regex(self, pattern: str) -> List[ClassObject]:
        """Return every class whose name matches *pattern*."""
        ...

    def all_classes(self) -> List[ClassObject]:
        ...

    def subclasses(self, cls: ClassObject) -> List[ClassObject]:
        """Return the direct subclasses of *cls*."""
        ...

    # -- instances ---------------------------------------------------------

    def all_instances(self) -> Iterator[ObjectInstance]:
        ...

    def instance_by_id(self, object_id: int) -> Optional[ObjectInstance]:
        ...

    def instances_of(self, cls: ClassObject) -> Iterator[ObjectInstance]:
        """Iterate the direct instances of *cls* (subclasses excluded)."""
        ...

    # -- roots -------------------------------------------------------------

    def gc_roots(self) -> List[GCRoot]:
        ...

    def gc_roots_of(self, instance: ObjectInstance) -> List[GCRoot]:
        ...

    def is_gc_root(self, instance: ObjectInstance) -> bool:
        ...

    def nearest_gc_root_pointer(
        self, instance: ObjectInstance
    ) -> Optional[ObjectInstance]:
        """Return the next instance on the shortest path toward a GC root.

        A root points at itself; an unreachable instance yields ``None``.
        """
        ...

    # -- references and values ---------------------------------------------

    def references_to(self, instance: ObjectInstance) -> List[FieldValue]:
        """Return the incoming references of *instance*."""
        ...

    def field_values(self, instance: ObjectInstance) -> List[FieldValue]:
        ...

    def static_field_values(self, cls: ClassObject) -> List[FieldValue]:
        ...

    def array_elements(
        self, array: ObjectArrayInstance
    ) -> List[Optional[ObjectInstance]]:
        ...

    def field(self, instance: ObjectInstance, name: str) -> Any:
        """Return the value of field *name* on *instance*, or ``None``."""
        ...

    def static_field(self, cls: ClassObject, name: str) -> Any:
        ...

    # -- decoding capabilities ---------------------------------------------

    def decode_string_value(self, instance: ObjectInstance) -> str:
        """Decode a ``java.lang.String`` instance into a Python string."""
        ...

    def decode_char_array(
        self, instance: ObjectInstance, offset: int = 0, length: Optional[int] = None
    ) -> Optional[List[str]]:
        """Return *length* characters of a ``char[]`` starting at *offset*."""
        ...
