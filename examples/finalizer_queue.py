"""List objects waiting for finalization.

Builds a two-node ``java.lang.ref.Finalizer`` queue whose tail points at
itself, the way the JDK marks the end of the list, and prints each pending
object with its display value.
"""

from heapwalk.core import HeapNavigator, NavigatorConfig
from heapwalk.model import Heap

heap = Heap()
obj = heap.add_class(1, "java.lang.Object")
finalizer = heap.add_class(2, "java.lang.ref.Finalizer", superclass=obj)
queue_cls = heap.add_class(3, "java.lang.ref.ReferenceQueue", superclass=obj)
string_cls = heap.add_class(4, "java.lang.String", superclass=obj)
chars_cls = heap.add_class(5, "char[]", superclass=obj)

queue = heap.add_instance(100, queue_cls)
heap.set_static_field(finalizer, "queue", queue)

previous = None
for i, text in enumerate(["socket", "stream"]):
    chars = heap.add_primitive_array(200 + i, chars_cls, list(text))
    pending = heap.add_instance(300 + i, string_cls)
    heap.set_field(pending, "value", chars)

    node = heap.add_instance(400 + i, finalizer)
    heap.set_field(node, "referent", pending)
    heap.set_field(node, "next", node)
    if previous is None:
        heap.set_field(queue, "head", node)
    else:
        heap.set_field(previous, "next", node)
    previous = node

nav = HeapNavigator(heap, config=NavigatorConfig())
for pending in nav.finalizer_objects():
    print(f"{pending}: {nav.value_string(pending)!r}")
