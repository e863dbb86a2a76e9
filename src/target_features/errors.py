"""
Error types

Lookups of unknown features are recoverable and raise `UnknownFeature`.
Cross-architecture misuse and unresolvable names on the `*_str` conveniences
are programmer errors and raise `ContractViolation`.
"""


class TargetFeatureError(Exception):
    """Base class for recoverable target feature errors"""


class UnknownFeature(TargetFeatureError, LookupError):
    """Raised when the requested feature can't be found"""

    def __init__(self, architecture, name: str):
        self.architecture = architecture
        self.name = name
        super().__init__(f"unknown feature {name!r} for architecture {architecture}")


class FeatureTableError(TargetFeatureError, ValueError):
    """Raised when the feature table data is malformed"""


class ContractViolation(AssertionError):
    """A caller broke a precondition that well-formed code never breaks"""
