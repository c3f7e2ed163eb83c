"""Summarize how instances of a suspect class are kept alive.

Builds a small snapshot by hand, then uses the navigator to find each
instance's nearest GC root, its distance to that root, and its strong
referrers.  The findings are collected into Pydantic models so they can be
dumped as JSON.
"""

from typing import List, Optional

from pydantic import BaseModel

from heapwalk.core import HeapNavigator, NavigatorConfig
from heapwalk.model import Heap, RootKind


class RetentionInfo(BaseModel):
    """Why one instance is still on the heap."""
    instance: str
    root: Optional[str] = None
    distance: int
    referrers: List[str] = []


class LeakReport(BaseModel):
    """Retention details for every instance of one class."""
    class_name: str
    instances: List[RetentionInfo]


heap = Heap()
obj = heap.add_class(1, "java.lang.Object")
listener_cls = heap.add_class(2, "com.example.Listener", superclass=obj)
registry_cls = heap.add_class(3, "com.example.Registry", superclass=obj)

registry = heap.add_instance(100, registry_cls)
kept = heap.add_instance(101, listener_cls)
dropped = heap.add_instance(102, listener_cls)
heap.set_field(registry, "first", kept)
heap.add_root(registry, RootKind.STICKY_CLASS)

nav = HeapNavigator(heap, config=NavigatorConfig())
suspect = nav.find_class("com.example.Listener")

report = LeakReport(
    class_name=suspect.name,
    instances=[
        RetentionInfo(
            instance=nav.value_string(inst),
            root=str(nav.find_root(inst)) if nav.find_root(inst) else None,
            distance=nav.distance_to_gc_root(inst),
            referrers=[str(r) for r in nav.referrers(inst)],
        )
        for inst in nav.instances(suspect, include_subclasses=True)
    ],
)

print(report.model_dump_json(indent=2))
