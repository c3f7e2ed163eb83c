"""Compare strong and weak referrers of a cached value.

Shows how ``include_weak`` changes the referrer view when an object is only
held through a ``java.lang.ref.WeakReference``.
"""

from heapwalk.core import HeapNavigator, NavigatorConfig
from heapwalk.model import FieldDescriptor, Heap

heap = Heap()
obj = heap.add_class(1, "java.lang.Object")
reference = heap.add_class(
    2,
    "java.lang.ref.Reference",
    superclass=obj,
    fields=[FieldDescriptor("referent"), FieldDescriptor("queue")],
)
weak_cls = heap.add_class(3, "java.lang.ref.WeakReference", superclass=reference)

value = heap.add_instance(100, obj)
weak = heap.add_instance(101, weak_cls)
heap.set_field(weak, "referent", value)

nav = HeapNavigator(heap, config=NavigatorConfig())

print(f"Weak reference class: {nav.weak_reference_class}")
print(f"Referent field index: {nav.referent_field_index}")
print(f"Strong referrers: {[str(r) for r in nav.referrers(value)]}")
print(f"All referrers:    {[str(r) for r in nav.referrers(value, include_weak=True)]}")
