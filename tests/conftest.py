"""Shared fixtures for the entire test suite."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from heapwalk.core.types.config import NavigatorConfig
from heapwalk.model import FieldDescriptor, Heap, RootKind


# ---------------------------------------------------------------------------
# Sample heap snapshot
# ---------------------------------------------------------------------------

def _build_sample_heap() -> SimpleNamespace:
    """A small JVM-like snapshot.

    Layout::

        root(frame) -> cache --head--> e1 --next--> e2 --type--> Class mirror of Cache
                         \\--ref--> weak --referent--> target
        orphan: unreachable Entry
        greeting: "hi" backed by a char[]
        Finalizer.queue -> head f1 -> f2 -> f2 (self loop)
    """
    heap = Heap()
    obj = heap.add_class(0x1, "java.lang.Object")
    class_cls = heap.add_class(0x2, "java.lang.Class", superclass=obj)
    string_cls = heap.add_class(
        0x3,
        "java.lang.String",
        superclass=obj,
        fields=[FieldDescriptor("value"), FieldDescriptor("hash", "int")],
    )
    char_array_cls = heap.add_class(0x4, "char[]", superclass=obj)
    reference_cls = heap.add_class(
        0x5,
        "java.lang.ref.Reference",
        superclass=obj,
        fields=[
            FieldDescriptor("queue"),
            FieldDescriptor("referent"),
            FieldDescriptor("next"),
        ],
    )
    weak_cls = heap.add_class(0x6, "java.lang.ref.WeakReference", superclass=reference_cls)
    final_ref_cls = heap.add_class(0x7, "java.lang.ref.FinalReference", superclass=reference_cls)
    finalizer_cls = heap.add_class(0x8, "java.lang.ref.Finalizer", superclass=final_ref_cls)
    queue_cls = heap.add_class(0x9, "java.lang.ref.ReferenceQueue", superclass=obj)
    cache_cls = heap.add_class(0xA, "com.example.Cache", superclass=obj)
    entry_cls = heap.add_class(0xB, "com.example.Entry", superclass=obj)
    special_entry_cls = heap.add_class(0xC, "com.example.SpecialEntry", superclass=entry_cls)
    entry_array_cls = heap.add_class(0xD, "com.example.Entry[]", superclass=obj)

    cache = heap.add_instance(0x100, cache_cls)
    e1 = heap.add_instance(0x101, entry_cls)
    e2 = heap.add_instance(0x102, special_entry_cls)
    weak = heap.add_instance(0x103, weak_cls)
    target = heap.add_instance(0x104, entry_cls)
    orphan = heap.add_instance(0x105, entry_cls)
    cache_mirror = heap.add_instance(cache_cls.id, class_cls)
    entries = heap.add_object_array(0x106, entry_array_cls, [e1, None, cache_mirror])

    heap.set_field(cache, "head", e1)
    heap.set_field(cache, "ref", weak)
    heap.set_field(cache, "size", 2)
    heap.set_field(cache, "entries", entries)
    heap.set_field(e1, "next", e2)
    heap.set_field(e2, "next", None)
    heap.set_field(e2, "type", cache_mirror)
    heap.set_field(weak, "referent", target)
    heap.set_static_field(cache_cls, "INSTANCE", cache)

    chars = heap.add_primitive_array(0x110, char_array_cls, ["h", "i"])
    greeting = heap.add_instance(0x111, string_cls)
    heap.set_field(greeting, "value", chars)
    heap.set_field(cache, "name", greeting)

    queue = heap.add_instance(0x120, queue_cls)
    f1 = heap.add_instance(0x121, finalizer_cls)
    f2 = heap.add_instance(0x122, finalizer_cls)
    pending1 = heap.add_instance(0x123, entry_cls)
    pending2 = heap.add_instance(0x124, entry_cls)
    heap.set_static_field(finalizer_cls, "queue", queue)
    heap.set_field(queue, "head", f1)
    heap.set_field(f1, "referent", pending1)
    heap.set_field(f1, "next", f2)
    heap.set_field(f2, "referent", pending2)
    heap.set_field(f2, "next", f2)

    root = heap.add_root(cache, RootKind.JAVA_FRAME)
    mirror_root = heap.add_root(cache_mirror, RootKind.STICKY_CLASS)

    return SimpleNamespace(
        heap=heap,
        object_cls=obj,
        class_cls=class_cls,
        string_cls=string_cls,
        char_array_cls=char_array_cls,
        reference_cls=reference_cls,
        weak_cls=weak_cls,
        finalizer_cls=finalizer_cls,
        cache_cls=cache_cls,
        entry_cls=entry_cls,
        special_entry_cls=special_entry_cls,
        cache=cache,
        e1=e1,
        e2=e2,
        weak=weak,
        target=target,
        orphan=orphan,
        cache_mirror=cache_mirror,
        entries=entries,
        chars=chars,
        greeting=greeting,
        queue=queue,
        f1=f1,
        f2=f2,
        pending1=pending1,
        pending2=pending2,
        root=root,
        mirror_root=mirror_root,
    )


@pytest.fixture()
def sample():
    """A realistic in-memory snapshot plus handles to its objects."""
    return _build_sample_heap()


@pytest.fixture()
def default_config():
    """Defaults without touching any heapwalk.toml in the working directory."""
    return NavigatorConfig()


# ---------------------------------------------------------------------------
# Mock heap model
# ---------------------------------------------------------------------------

@pytest.fixture()
def mock_heap():
    """MagicMock heap model with empty defaults."""
    heap = MagicMock()
    heap.class_by_id.return_value = None
    heap.class_by_name.return_value = None
    heap.classes_by_regex.return_value = []
    heap.all_classes.return_value = []
    heap.all_instances.return_value = iter([])
    heap.instance_by_id.return_value = None
    heap.instances_of.return_value = iter([])
    heap.subclasses.return_value = []
    heap.gc_roots.return_value = []
    heap.gc_roots_of.return_value = []
    heap.is_gc_root.return_value = False
    heap.nearest_gc_root_pointer.return_value = None
    heap.references_to.return_value = []
    heap.field_values.return_value = []
    heap.static_field_values.return_value = []
    heap.array_elements.return_value = []
    heap.field.return_value = None
    heap.static_field.return_value = None
    return heap
