"""Identity normalization of ``java.lang.Class`` mirror instances."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from heapwalk.model import ClassObject, ObjectInstance

if TYPE_CHECKING:
    from heapwalk.model import HeapModel


class NormalizedKind(Enum):
    CLASS = "class"
    INSTANCE = "instance"


@dataclass(frozen=True)
class Normalized:
    """Either the class a mirror instance stands for, or the instance itself."""

    kind: NormalizedKind
    value: Union[ClassObject, ObjectInstance]

    @property
    def is_class(self) -> bool:
        return self.kind is NormalizedKind.CLASS


class IdentityNormalizer:
    """Maps ``java.lang.Class`` instances onto the class objects they mirror.

    A mirror carries the id of its class, so the lookup is by the instance's
    own id.  Instances of any other class, and mirrors with no matching
    class, come back unchanged.
    """

    def __init__(self, heap: HeapModel, class_mirror_name: str = "java.lang.Class"):
        self._heap = heap
        self._class_mirror_name = class_mirror_name

    def normalize(self, instance: ObjectInstance) -> Normalized:
        if instance.java_class.name == self._class_mirror_name:
            cls = self._heap.class_by_id(instance.id)
            if cls is not None:
                return Normalized(NormalizedKind.CLASS, cls)
        return Normalized(NormalizedKind.INSTANCE, instance)
