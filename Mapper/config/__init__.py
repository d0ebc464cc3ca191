"""
Configuration package for the mapping engine.
"""

from .settings import get_settings, Settings
from .constants import (
    TargetTable,
    DataType,
    TransformationType,
    UnmappedReason,
)

__all__ = [
    "get_settings",
    "Settings",
    "TargetTable",
    "DataType",
    "TransformationType",
    "UnmappedReason",
]
