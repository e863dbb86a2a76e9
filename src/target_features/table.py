"""
Feature table

The ordered, immutable catalog of `(architecture, name, description, implies)`
entries. A feature's identity is its position in this table, so entries are
never reordered once loaded.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from .architecture import Architecture
from .config import default_feature_table_path
from .errors import FeatureTableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureEntry:
    """One row of the feature table"""
    architecture: Architecture
    name: str
    description: str
    implies: Tuple[int, ...] = ()  # Global indices of implied features


class FeatureTable:
    """Ordered, immutable sequence of feature entries"""

    def __init__(self, entries: List[FeatureEntry], source: str = "<memory>"):
        self._entries: Tuple[FeatureEntry, ...] = tuple(entries)
        self.source = source

        positions: Dict[Tuple[Architecture, str], int] = {}
        for i, entry in enumerate(self._entries):
            key = (entry.architecture, entry.name)
            if key in positions:
                raise FeatureTableError(
                    f"{source}: entry {i}: duplicate feature {entry.name!r} for {entry.architecture} "
                    f"(first defined at entry {positions[key]})"
                )
            positions[key] = i

        for i, entry in enumerate(self._entries):
            for implied in entry.implies:
                if not 0 <= implied < len(self._entries):
                    raise FeatureTableError(
                        f"{source}: entry {i} ({entry.name}) implies out-of-range index {implied}"
                    )

                target = self._entries[implied]
                if target.architecture is not entry.architecture:
                    raise FeatureTableError(
                        f"{source}: entry {i} ({entry.name}) implies {target.architecture} "
                        f"feature {target.name!r} from another architecture"
                    )

    @classmethod
    def load_yaml(cls, path: str | Path) -> "FeatureTable":
        """Load a table from a YAML file"""
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise FeatureTableError(f"{path}: invalid YAML: {e}") from e

        table = cls.from_dict(data, source=str(path))
        logger.debug(f"Loaded {len(table)} features from {path}")
        return table

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], source: str = "<memory>") -> "FeatureTable":
        """Build a table from parsed data

        Implied features are given by name and must belong to the same
        architecture; they are resolved to indices here.
        """
        if not data:
            return cls([], source)

        if not isinstance(data, dict) or not isinstance(data.get('features', []), list):
            raise FeatureTableError(f"{source}: expected a mapping with a 'features' list")

        raw_entries = data.get('features') or []
        parsed = [cls._parse_entry(item, i, source) for i, item in enumerate(raw_entries)]

        # Duplicates are rejected when the table is built
        positions: Dict[Tuple[Architecture, str], int] = {}
        for i, (arch, name, _, _) in enumerate(parsed):
            positions.setdefault((arch, name), i)

        entries = []
        for i, (arch, name, description, implied_names) in enumerate(parsed):
            implies = []
            for implied in implied_names:
                index = positions.get((arch, implied))
                if index is None:
                    raise FeatureTableError(
                        f"{source}: entry {i} ({name}) implies unknown {arch} feature {implied!r}"
                    )
                implies.append(index)

            entries.append(FeatureEntry(arch, name, description, tuple(implies)))

        table = cls(entries, source)
        if not table.is_transitively_closed():
            logger.warning(f"{source}: implied feature lists are not transitively closed")

        return table

    @classmethod
    def _parse_entry(cls, item: Any, position: int, source: str):
        """Validate one raw entry, returning (architecture, name, description, implied names)"""
        context = f"{source}: entry {position}"
        if not isinstance(item, dict):
            raise FeatureTableError(f"{context}: expected a mapping")

        for key in ('arch', 'name', 'description'):
            if key not in item:
                raise FeatureTableError(f"{context}: missing '{key}'")

        try:
            arch = Architecture(item['arch'])
        except ValueError:
            raise FeatureTableError(f"{context}: unknown architecture {item['arch']!r}") from None

        name = item['name']
        if not isinstance(name, str) or not name:
            raise FeatureTableError(f"{context}: feature name must be a non-empty string")

        implied_names = item.get('implies') or []
        if not isinstance(implied_names, list) or not all(isinstance(n, str) for n in implied_names):
            raise FeatureTableError(f"{context} ({name}): 'implies' must be a list of names")

        return arch, name, str(item['description']), implied_names

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> FeatureEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[FeatureEntry]:
        return iter(self._entries)

    def find(self, architecture: Architecture, name: str) -> Optional[int]:
        """Index of the first entry matching architecture and name exactly"""
        for i, entry in enumerate(self._entries):
            if entry.architecture is architecture and entry.name == name:
                return i
        return None

    def indices_for(self, architecture: Architecture) -> List[int]:
        """Indices of every entry belonging to an architecture, in table order"""
        return [i for i, entry in enumerate(self._entries) if entry.architecture is architecture]

    def is_transitively_closed(self) -> bool:
        """Check that every implied list already contains the lists of its members"""
        for i, entry in enumerate(self._entries):
            # An entry reached back through a cycle counts as implied by itself
            reachable = set(entry.implies) | {i}
            for index in entry.implies:
                if not set(self._entries[index].implies) <= reachable:
                    return False
        return True


_table: Optional[FeatureTable] = None


def get_feature_table() -> FeatureTable:
    """Get the process-wide feature table, loading it on first use"""
    global _table
    if _table is None:
        _table = FeatureTable.load_yaml(default_feature_table_path())
    return _table


def set_feature_table(table: Optional[FeatureTable]) -> Optional[FeatureTable]:
    """Install a different feature table, returning the previous one

    Passing None makes the next `get_feature_table` reload from config.
    Features and targets built against the previous table must not be used
    with the new one.
    """
    global _table
    from .feature import clear_lookup_cache

    previous, _table = _table, table
    clear_lookup_cache()
    return previous
