"""
Targets

A `Target` pairs an architecture with the set of features enabled on it. The
set is a presence bitset sized to the whole feature table, indexed directly by
`Feature.index`. Targets are immutable: the `with_*`/`without_*` methods
return new values.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .architecture import Architecture
from .errors import ContractViolation, UnknownFeature
from .feature import Feature, implied_closure
from .table import get_feature_table


@dataclass(frozen=True, repr=False)
class Target:
    """A target architecture with optional features"""
    architecture: Architecture
    features: Tuple[bool, ...] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'features', (False,) * len(get_feature_table()))

    @classmethod
    def new(cls, architecture: Architecture) -> "Target":
        """Create a target with no specified features"""
        return cls(architecture)

    @classmethod
    def from_target_arch(cls, target_arch: str, features: Iterable[str] = ()) -> "Target":
        """Create a target from a compiler `target_arch` name and feature names

        Raises ContractViolation if a name doesn't exist for the architecture.
        """
        target = cls(Architecture.from_target_arch(target_arch))
        for name in features:
            target = target.with_feature_str(name)
        return target

    def _resolve(self, name: str) -> Feature:
        try:
            return Feature(self.architecture, name)
        except UnknownFeature as e:
            raise ContractViolation(f"unknown feature {name!r} for {self.architecture}") from e

    def _check_architecture(self, feature: Feature):
        if feature.architecture is not self.architecture:
            raise ContractViolation(
                f"feature {feature.name!r} is for {feature.architecture}, not {self.architecture}"
            )

    def _with_bit(self, index: int, value: bool) -> "Target":
        features = list(self.features)
        features[index] = value
        target = Target(self.architecture)
        object.__setattr__(target, 'features', tuple(features))
        return target

    def supports_feature(self, feature: Feature) -> bool:
        """Returns whether the target supports the specified feature

        A feature is supported when it is enabled directly or appears in the
        implied list of any enabled feature. Only one level of implication is
        followed; implied lists in the table are expected to be closed.
        """
        if self.features[feature.index]:
            return True

        for index, enabled in enumerate(self.features):
            if enabled and feature in Feature._from_index(index).implies():
                return True

        return False

    def supports_feature_str(self, name: str) -> bool:
        """Returns whether the target supports the named feature

        Raises ContractViolation if the name doesn't exist for the architecture.
        """
        return self.supports_feature(self._resolve(name))

    def supports_all(self, features: Iterable[Feature]) -> bool:
        """Returns whether every one of the features is supported"""
        return all(self.supports_feature(feature) for feature in features)

    def transitive_supports_feature(self, feature: Feature) -> bool:
        """Like `supports_feature`, but follows implication chains to any depth"""
        if self.supports_feature(feature):
            return True
        return any(feature in implied_closure(enabled) for enabled in self.enabled_features())

    def with_feature(self, feature: Feature) -> "Target":
        """Add a feature to the target

        Raises ContractViolation if the feature doesn't belong to the target
        architecture.
        """
        self._check_architecture(feature)
        return self._with_bit(feature.index, True)

    def with_feature_str(self, name: str) -> "Target":
        """Add a feature to the target by name"""
        return self.with_feature(self._resolve(name))

    def with_features(self, features: Iterable[Feature]) -> "Target":
        """Add several features to the target"""
        target = self
        for feature in features:
            target = target.with_feature(feature)
        return target

    def without_feature(self, feature: Feature) -> "Target":
        """Remove a feature from the target

        Raises ContractViolation if the feature doesn't belong to the target
        architecture.
        """
        self._check_architecture(feature)
        return self._with_bit(feature.index, False)

    def without_feature_str(self, name: str) -> "Target":
        """Remove a feature from the target by name"""
        return self.without_feature(self._resolve(name))

    def enabled_features(self) -> List[Feature]:
        """Features enabled directly on this target, in table order"""
        return [Feature._from_index(i) for i, enabled in enumerate(self.features) if enabled]

    def __repr__(self):
        names = [feature.name for feature in self.enabled_features()]
        return f"Target({self.architecture}, {names})"
