"""Dict-backed in-memory heap snapshot implementing :class:`HeapModel`.

Snapshots are assembled with the builder methods (``add_class``,
``add_instance``, ``set_field``, ``add_root`` ...).  The inverted reference
index and the nearest-GC-root pointers are derived lazily on first use and
thrown away whenever the snapshot changes.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

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

logger = logging.getLogger(__name__)

CLASS_MIRROR_NAME = "java.lang.Class"

# java.lang.String.coder values (JDK 9+ compact strings)
_CODER_LATIN1 = 0
_CODER_UTF16 = 1


class Heap:
    """An in-memory heap snapshot.

    Class ids and instance ids live in one id space, so the
    ``java.lang.Class`` instance mirroring a class carries that class's id.
    """

    def __init__(self) -> None:
        self._classes: Dict[int, ClassObject] = {}
        self._classes_by_name: Dict[str, ClassObject] = {}
        self._subclasses: Dict[int, List[ClassObject]] = defaultdict(list)
        self._instances: Dict[int, ObjectInstance] = {}
        self._instances_by_class: Dict[int, List[ObjectInstance]] = defaultdict(list)
        self._fields: Dict[int, Dict[str, Any]] = defaultdict(dict)
        self._static_fields: Dict[int, Dict[str, Any]] = defaultdict(dict)
        self._elements: Dict[int, List[Optional[ObjectInstance]]] = {}
        self._primitive_values: Dict[int, List[Any]] = {}
        self._roots: List[GCRoot] = []
        self._roots_by_instance: Dict[int, List[GCRoot]] = defaultdict(list)

        self._inverted: Optional[Dict[int, List[FieldValue]]] = None
        self._nearest: Optional[Dict[int, ObjectInstance]] = None

    # -- building ----------------------------------------------------------

    def add_class(
        self,
        class_id: int,
        name: str,
        superclass: Optional[ClassObject] = None,
        fields: Sequence[FieldDescriptor] = (),
        class_loader: Optional[ObjectInstance] = None,
    ) -> ClassObject:
        """Register a class and return it."""
        if class_id in self._classes:
            raise ValueError(f"Duplicate class id {class_id:#x}")
        cls = ClassObject(
            id=class_id,
            name=name,
            superclass=superclass,
            fields=list(fields),
            class_loader=class_loader,
        )
        self._classes[class_id] = cls
        self._classes_by_name.setdefault(name, cls)
        if superclass is not None:
            self._subclasses[superclass.id].append(cls)
        self._invalidate()
        return cls

    def add_instance(self, object_id: int, cls: ClassObject) -> ObjectInstance:
        """Register a plain object instance of *cls*."""
        return self._register(ObjectInstance(id=object_id, java_class=cls))

    def add_object_array(
        self,
        object_id: int,
        cls: ClassObject,
        elements: Iterable[Optional[ObjectInstance]] = (),
    ) -> ObjectArrayInstance:
        items = list(elements)
        array = ObjectArrayInstance(id=object_id, java_class=cls, length=len(items))
        self._register(array)
        self._elements[object_id] = items
        return array

    def add_primitive_array(
        self, object_id: int, cls: ClassObject, values: Iterable[Any] = ()
    ) -> PrimitiveArrayInstance:
        """Register a primitive array.

        For ``char[]`` the values are one-character strings; for numeric
        arrays they are ints or floats.
        """
        items = list(values)
        array = PrimitiveArrayInstance(id=object_id, java_class=cls, length=len(items))
        self._register(array)
        self._primitive_values[object_id] = items
        return array

    def set_field(self, instance: ObjectInstance, name: str, value: Any) -> None:
        self._fields[instance.id][name] = value
        self._invalidate()

    def set_static_field(self, cls: ClassObject, name: str, value: Any) -> None:
        self._static_fields[cls.id][name] = value
        self._invalidate()

    def add_root(
        self, instance: ObjectInstance, kind: RootKind = RootKind.UNKNOWN
    ) -> GCRoot:
        root = GCRoot(kind=kind, instance=instance)
        self._roots.append(root)
        self._roots_by_instance[instance.id].append(root)
        self._invalidate()
        return root

    def _register(self, instance: ObjectInstance) -> ObjectInstance:
        if instance.id in self._instances:
            raise ValueError(f"Duplicate object id {instance.id:#x}")
        self._instances[instance.id] = instance
        self._instances_by_class[instance.java_class.id].append(instance)
        self._invalidate()
        return instance

    def _invalidate(self) -> None:
        self._inverted = None
        self._nearest = None

    # -- classes -----------------------------------------------------------

    def class_by_id(self, class_id: int) -> Optional[ClassObject]:
        return self._classes.get(class_id)

    def class_by_name(self, name: str) -> Optional[ClassObject]:
        return self._classes_by_name.get(name)

    def classes_by_regex(self, pattern: str) -> List[ClassObject]:
        regex = re.compile(pattern)
        return [c for c in self._classes.values() if regex.search(c.name)]

    def all_classes(self) -> List[ClassObject]:
        return list(self._classes.values())

    def subclasses(self, cls: ClassObject) -> List[ClassObject]:
        return list(self._subclasses.get(cls.id, ()))

    # -- instances ---------------------------------------------------------

    def all_instances(self) -> Iterator[ObjectInstance]:
        return iter(list(self._instances.values()))

    def instance_by_id(self, object_id: int) -> Optional[ObjectInstance]:
        return self._instances.get(object_id)

    def instances_of(self, cls: ClassObject) -> Iterator[ObjectInstance]:
        return iter(list(self._instances_by_class.get(cls.id, ())))

    # -- roots -------------------------------------------------------------

    def gc_roots(self) -> List[GCRoot]:
        return list(self._roots)

    def gc_roots_of(self, instance: ObjectInstance) -> List[GCRoot]:
        return list(self._roots_by_instance.get(instance.id, ()))

    def is_gc_root(self, instance: ObjectInstance) -> bool:
        return bool(self._roots_by_instance.get(instance.id))

    def nearest_gc_root_pointer(
        self, instance: ObjectInstance
    ) -> Optional[ObjectInstance]:
        if self._nearest is None:
            self._nearest = self._compute_nearest_pointers()
        return self._nearest.get(instance.id)

    def _compute_nearest_pointers(self) -> Dict[int, ObjectInstance]:
        """Breadth-first walk from every root, one level at a time."""
        nearest: Dict[int, ObjectInstance] = {}
        current: List[ObjectInstance] = []
        for root in self._roots:
            if root.instance.id not in nearest:
                nearest[root.instance.id] = root.instance
                current.append(root.instance)
        while current:
            next_level: List[ObjectInstance] = []
            for obj in current:
                for target in self._outgoing(obj):
                    if target.id not in nearest:
                        nearest[target.id] = obj
                        next_level.append(target)
            current = next_level
        logger.debug(
            "Computed nearest GC root pointers for %d of %d instances",
            len(nearest),
            len(self._instances),
        )
        return nearest

    def _outgoing(self, obj: ObjectInstance) -> Iterator[ObjectInstance]:
        for value in self.field_values(obj):
            if isinstance(value, ObjectFieldValue) and value.instance is not None:
                yield value.instance
        if isinstance(obj, ObjectArrayInstance):
            for item in self._elements.get(obj.id, ()):
                if item is not None:
                    yield item
        if obj.java_class.name == CLASS_MIRROR_NAME:
            mirrored = self._classes.get(obj.id)
            if mirrored is not None:
                for value in self.static_field_values(mirrored):
                    if isinstance(value, ObjectFieldValue) and value.instance is not None:
                        yield value.instance

    # -- references and values ---------------------------------------------

    def references_to(self, instance: ObjectInstance) -> List[FieldValue]:
        if self._inverted is None:
            self._inverted = self._build_inverted_references()
        return list(self._inverted.get(instance.id, ()))

    def _build_inverted_references(self) -> Dict[int, List[FieldValue]]:
        inverted: Dict[int, List[FieldValue]] = defaultdict(list)
        for obj in self._instances.values():
            for value in self.field_values(obj):
                if isinstance(value, ObjectFieldValue) and value.instance is not None:
                    inverted[value.instance.id].append(value)
            if isinstance(obj, ObjectArrayInstance):
                for index, item in enumerate(self._elements.get(obj.id, ())):
                    if item is not None:
                        inverted[item.id].append(
                            ArrayItemValue(
                                field=FieldDescriptor(name=f"[{index}]"),
                                value=item,
                                defining_instance=obj,
                                index=index,
                            )
                        )
        for cls in self._classes.values():
            for value in self.static_field_values(cls):
                if isinstance(value, ObjectFieldValue) and value.instance is not None:
                    inverted[value.instance.id].append(value)
        return inverted

    def field_values(self, instance: ObjectInstance) -> List[FieldValue]:
        return [
            _make_value(name, value, defining_instance=instance)
            for name, value in self._fields.get(instance.id, {}).items()
        ]

    def static_field_values(self, cls: ClassObject) -> List[FieldValue]:
        mirror = self._instances.get(cls.id)
        return [
            _make_value(name, value, defining_instance=mirror, is_static=True)
            for name, value in self._static_fields.get(cls.id, {}).items()
        ]

    def array_elements(
        self, array: ObjectArrayInstance
    ) -> List[Optional[ObjectInstance]]:
        return list(self._elements.get(array.id, ()))

    def field(self, instance: ObjectInstance, name: str) -> Any:
        return self._fields.get(instance.id, {}).get(name)

    def static_field(self, cls: ClassObject, name: str) -> Any:
        return self._static_fields.get(cls.id, {}).get(name)

    # -- decoding capabilities ---------------------------------------------

    def decode_string_value(self, instance: ObjectInstance) -> str:
        value = self.field(instance, "value")
        if not isinstance(value, PrimitiveArrayInstance):
            raise ValueError(f"{instance} has no value array")
        data = self._primitive_values.get(value.id, [])

        offset = self.field(instance, "offset") or 0
        count = self.field(instance, "count")

        if value.java_class.name == "byte[]":
            raw = bytes(b & 0xFF for b in data)
            if self.field(instance, "coder") == _CODER_UTF16:
                text = raw.decode("utf-16-le", errors="replace")
            else:
                text = raw.decode("latin-1")
        else:
            text = "".join(data)

        if count is None:
            return text[offset:]
        return text[offset:offset + count]

    def decode_char_array(
        self, instance: ObjectInstance, offset: int = 0, length: Optional[int] = None
    ) -> Optional[List[str]]:
        if not isinstance(instance, PrimitiveArrayInstance):
            raise ValueError(f"{instance} is not a primitive array")
        data = self._primitive_values.get(instance.id)
        if data is None:
            return None
        end = len(data) if length is None else offset + length
        return list(data[offset:end])


def _make_value(
    name: str,
    value: Any,
    defining_instance: Optional[ObjectInstance],
    is_static: bool = False,
) -> FieldValue:
    if value is None or isinstance(value, ObjectInstance):
        return ObjectFieldValue(
            field=FieldDescriptor(name=name, is_static=is_static),
            value=value,
            defining_instance=defining_instance,
        )
    return FieldValue(
        field=FieldDescriptor(
            name=name, type_name=_primitive_type_name(value), is_static=is_static
        ),
        value=value,
        defining_instance=defining_instance,
    )


def _primitive_type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "long"
    if isinstance(value, float):
        return "double"
    if isinstance(value, str) and len(value) == 1:
        return "char"
    return "object"
