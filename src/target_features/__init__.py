"""
Target features

A database of the target features available to a compiler backend, per
architecture, with implication-aware support queries.
"""

import logging

__version__ = "0.1.0"

from .config import apply_log_level, get_config, init_config
from .architecture import Architecture
from .errors import ContractViolation, FeatureTableError, TargetFeatureError, UnknownFeature
from .table import FeatureEntry, FeatureTable, get_feature_table, set_feature_table
from .feature import Feature, all_features, implied_closure
from .target import Target

logging.getLogger(__name__).addHandler(logging.NullHandler())
apply_log_level()

__all__ = [
    "Architecture",
    "Feature", "Target",
    "FeatureEntry", "FeatureTable", "get_feature_table", "set_feature_table",
    "all_features", "implied_closure",
    "TargetFeatureError", "UnknownFeature", "FeatureTableError", "ContractViolation",
    "get_config", "init_config",
]
