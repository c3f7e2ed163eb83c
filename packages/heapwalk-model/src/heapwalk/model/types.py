"""Model-level types for a parsed heap snapshot.

Provides enums and dataclasses that describe classes, instances, field
values and GC roots as plain Python objects.  Entities compare by identity:
two lookups of the same object id return the very same Python object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Optional


class RootKind(Enum):
    """Kinds of garbage-collector roots found in heap dumps."""

    UNKNOWN = auto()
    JNI_GLOBAL = auto()
    JNI_LOCAL = auto()
    JAVA_FRAME = auto()
    NATIVE_STACK = auto()
    STICKY_CLASS = auto()
    THREAD_BLOCK = auto()
    MONITOR_USED = auto()
    THREAD_OBJECT = auto()


@dataclass(frozen=True)
class FieldDescriptor:
    """A field declared by a class.

    ``type_name`` is ``"object"`` for reference-typed fields and the
    primitive name (``"int"``, ``"char"``, ...) otherwise.
    """

    name: str
    type_name: str = "object"
    is_static: bool = False


@dataclass(eq=False)
class ClassObject:
    """A loaded class description."""

    id: int
    name: str
    superclass: Optional[ClassObject] = field(default=None, repr=False)
    fields: List[FieldDescriptor] = field(default_factory=list, repr=False)
    class_loader: Optional[ObjectInstance] = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"class {self.name}"


@dataclass(eq=False)
class ObjectInstance:
    """One object on the heap."""

    id: int
    java_class: ClassObject = field(repr=False)

    @property
    def class_name(self) -> str:
        return self.java_class.name

    def __str__(self) -> str:
        return f"{self.java_class.name}@{self.id:#x}"


@dataclass(eq=False)
class ObjectArrayInstance(ObjectInstance):
    """An array whose elements are object references."""

    length: int = 0


@dataclass(eq=False)
class PrimitiveArrayInstance(ObjectInstance):
    """An array of primitive values (``int[]``, ``char[]``, ...)."""

    length: int = 0


@dataclass(eq=False)
class FieldValue:
    """A named value on an instance or class.

    ``defining_instance`` is the object that holds the value: the instance
    for instance fields, the array for array items, and the class mirror (if
    the snapshot has one) for static fields.
    """

    field: FieldDescriptor
    value: Any
    defining_instance: Optional[ObjectInstance] = None


@dataclass(eq=False)
class ObjectFieldValue(FieldValue):
    """A field value holding an object reference (possibly ``None``)."""

    @property
    def instance(self) -> Optional[ObjectInstance]:
        if isinstance(self.value, ObjectInstance):
            return self.value
        return None


@dataclass(eq=False)
class ArrayItemValue(ObjectFieldValue):
    """One element of an object array, seen as an incoming reference."""

    index: int = 0


@dataclass(frozen=True, eq=False)
class GCRoot:
    """A root reference into the object graph."""

    kind: RootKind
    instance: ObjectInstance

    def __str__(self) -> str:
        return f"{self.kind.name.lower()} root -> {self.instance}"
