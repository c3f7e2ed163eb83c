"""HeapNavigator -- query-facing entry point over one heap snapshot."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Set, Union

from heapwalk.core.descriptors import ClassDescriptorResolver
from heapwalk.core.excludes import FieldNameExcludes, ReachableExcludes
from heapwalk.core.finalizer import FinalizerWalker
from heapwalk.core.identity import IdentityNormalizer
from heapwalk.core.reachability import ReachabilityEngine
from heapwalk.core.references import ReferenceEnumerator
from heapwalk.core.render import ValueStringifier
from heapwalk.core.types.config import NavigatorConfig, load_config
from heapwalk.core.weakrefs import WeakRefClassification
from heapwalk.model import ClassObject, GCRoot, HeapModel, ObjectInstance

logger = logging.getLogger(__name__)


class HeapNavigator:
    """Answers graph questions about a parsed, indexed heap snapshot.

    Usage:
        heap = load_my_snapshot()
        nav = HeapNavigator(heap)
        cls = nav.find_class("[Ljava.lang.String;")
        for obj in nav.instances(cls, include_subclasses=True):
            print(nav.value_string(obj), nav.distance_to_gc_root(obj))

    The navigator never mutates the snapshot.  Apart from the
    reachable-excludes policy, everything it holds is fixed at construction.
    Iterators it returns are lazy and single-use.
    """

    def __init__(
        self,
        heap: HeapModel,
        config: Optional[NavigatorConfig] = None,
        config_path: Optional[str] = None,
    ):
        if not isinstance(heap, HeapModel):
            raise TypeError(
                f"heap must implement HeapModel, got {type(heap).__name__}"
            )

        if config is not None:
            self.config = config
        else:
            self.config = load_config(config_path)

        if self.config.verbose:
            logging.basicConfig(level=logging.DEBUG)

        names = self.config.classes
        self._heap = heap
        self._resolver = ClassDescriptorResolver(heap)
        self._normalizer = IdentityNormalizer(heap, names.class_mirror)
        self._weak = WeakRefClassification(self._resolver, names)
        self._reachability = ReachabilityEngine(heap)
        self._references = ReferenceEnumerator(heap, self._weak, self._normalizer)
        self._finalizer = FinalizerWalker(heap, self._resolver, names.finalizer)
        self._stringifier = ValueStringifier(heap, names)

        self._reachable_excludes: Optional[ReachableExcludes] = None
        if self.config.reachable_excludes_file:
            self._load_excludes(self.config.reachable_excludes_file)

    def _load_excludes(self, path: str) -> None:
        try:
            self._reachable_excludes = FieldNameExcludes.from_file(path)
        except (OSError, UnicodeDecodeError):
            logger.warning(
                "Failed to read reachable excludes: %s", path, exc_info=True
            )

    # -- classes and instances ---------------------------------------------

    def find_class(self, descriptor: str) -> Optional[ClassObject]:
        """Resolve a class by name, JVM descriptor, or hex/decimal object id."""
        return self._resolver.resolve(descriptor)

    def find_thing(self, object_id: int) -> Optional[ObjectInstance]:
        return self._heap.instance_by_id(object_id)

    def classes(self) -> Iterator[ClassObject]:
        return iter(self._heap.all_classes())

    def class_names(self, regex: str) -> Iterator[str]:
        return (cls.name for cls in self._heap.classes_by_regex(regex))

    def instances(
        self, cls: ClassObject, include_subclasses: bool = False
    ) -> Iterator[ObjectInstance]:
        return self._reachability.instances_of(cls, include_subclasses)

    # -- reachability ------------------------------------------------------

    def find_root(self, instance: ObjectInstance) -> Optional[GCRoot]:
        return self._reachability.find_nearest_root(instance)

    def distance_to_gc_root(self, instance: ObjectInstance) -> int:
        return self._reachability.distance_to_root(instance)

    def roots(self) -> Iterator[GCRoot]:
        return iter(self._heap.gc_roots())

    def roots_array(self) -> List[GCRoot]:
        return list(self._heap.gc_roots())

    def root_instances(self) -> Set[Union[ClassObject, ObjectInstance]]:
        """Return the objects held by roots, with class mirrors normalized."""
        return {
            self._normalizer.normalize(root.instance).value
            for root in self._heap.gc_roots()
        }

    # -- references --------------------------------------------------------

    def referrers(
        self, obj: Union[ClassObject, ObjectInstance], include_weak: bool = False
    ) -> Iterator[ObjectInstance]:
        return self._references.referrers(obj, include_weak)

    def referees(
        self, obj: Union[ClassObject, ObjectInstance], include_weak: bool = False
    ) -> Iterator[Union[ClassObject, ObjectInstance]]:
        return self._references.referees(obj, include_weak)

    def finalizer_objects(self) -> Iterator[ObjectInstance]:
        return self._finalizer.finalizer_objects()

    # -- weak references ---------------------------------------------------

    @property
    def weak_reference_class(self) -> Optional[ClassObject]:
        return self._weak.weak_reference_class

    @property
    def referent_field_index(self) -> int:
        return self._weak.referent_field_index

    def is_weak_ref(self, instance: ObjectInstance) -> bool:
        return self._weak.is_weak(instance)

    # -- reachable excludes ------------------------------------------------

    @property
    def reachable_excludes(self) -> Optional[ReachableExcludes]:
        return self._reachable_excludes

    @reachable_excludes.setter
    def reachable_excludes(self, excludes: Optional[ReachableExcludes]) -> None:
        self._reachable_excludes = excludes

    # -- rendering ---------------------------------------------------------

    def value_string(self, instance: Optional[ObjectInstance]) -> Optional[str]:
        """Best-effort display string; ``None`` only for a ``None`` instance."""
        return self._stringifier.render(instance)
