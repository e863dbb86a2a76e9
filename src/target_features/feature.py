"""
Target features

A `Feature` is a handle onto one entry of the feature table. It stores only
the entry's index; every accessor is a projection of the table row.
"""

from collections import deque
from functools import lru_cache
from typing import FrozenSet, List, Optional, Tuple

from .architecture import Architecture
from .errors import UnknownFeature
from .table import FeatureEntry, get_feature_table


@lru_cache(maxsize=None)
def _lookup_index(architecture: Architecture, name: str) -> Optional[int]:
    return get_feature_table().find(architecture, name)


def clear_lookup_cache():
    """Forget memoized lookups (needed after the feature table is replaced)"""
    _lookup_index.cache_clear()


class Feature:
    """A target feature

    `Feature(Architecture.X86, "avx2")` looks the feature up and raises
    `UnknownFeature` if the table has no such entry.
    """

    __slots__ = ('_index',)

    def __init__(self, architecture: Architecture, name: str):
        index = _lookup_index(architecture, name)
        if index is None:
            raise UnknownFeature(architecture, name)
        self._index = index

    @classmethod
    def _from_index(cls, index: int) -> "Feature":
        feature = cls.__new__(cls)
        feature._index = index
        return feature

    @classmethod
    def find(cls, architecture: Architecture, name: str) -> Optional["Feature"]:
        """Look up a feature, returning None if it doesn't exist"""
        index = _lookup_index(architecture, name)
        return None if index is None else cls._from_index(index)

    @property
    def _entry(self) -> FeatureEntry:
        return get_feature_table()[self._index]

    @property
    def index(self) -> int:
        """Position of this feature in the feature table"""
        return self._index

    @property
    def name(self) -> str:
        """Name of the feature"""
        return self._entry.name

    @property
    def architecture(self) -> Architecture:
        """Architecture this feature is for"""
        return self._entry.architecture

    @property
    def description(self) -> str:
        """Human-readable description of the feature"""
        return self._entry.description

    def implies(self) -> Tuple["Feature", ...]:
        """All features implied by the existence of this feature

        For example, "avx2" implies "avx" on x86.
        """
        return tuple(Feature._from_index(i) for i in self._entry.implies)

    def __eq__(self, other):
        if not isinstance(other, Feature):
            return NotImplemented
        return self._index == other._index

    def __hash__(self):
        return hash(self._index)

    def __repr__(self):
        return f"Feature({self.architecture}, {self.name!r})"


def all_features(architecture: Optional[Architecture] = None) -> List[Feature]:
    """Every feature in table order, optionally only those of one architecture"""
    table = get_feature_table()
    if architecture is None:
        indices = range(len(table))
    else:
        indices = table.indices_for(architecture)
    return [Feature._from_index(i) for i in indices]


def implied_closure(feature: Feature) -> FrozenSet[Feature]:
    """Every feature reachable through implication chains of any depth

    Does not rely on the table's implied lists being pre-flattened. The
    feature itself is only included when a cycle leads back to it.
    """
    visited = set()
    worklist = deque(feature.implies())
    while worklist:
        current = worklist.popleft()
        if current in visited:
            continue
        visited.add(current)
        worklist.extend(current.implies())
    return frozenset(visited)
