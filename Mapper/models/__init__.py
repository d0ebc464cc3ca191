"""
Data models for the mapping engine.
"""

from .workflow_state import MappingState
from .collection_model import (
    CategoryCandidate,
    CollectionAnalysis,
    FieldCategory,
    FieldInfo,
    InventoryCategory,
    PurchaseOrderCategory,
    SalesOrderCategory,
    TableCategory,
    UnknownCategory,
    VendorCategory,
)
from .mapping_model import (
    FieldMapping,
    MappingResult,
    RelationshipHint,
    Suggestion,
    TableMapping,
    UnmappedField,
)
from .schema_model import PatternDictionary, PatternEntry, TargetColumn, TargetSchema


# Define public API
__all__ = [
    "MappingState",

    "CategoryCandidate",
    "CollectionAnalysis",
    "FieldCategory",
    "FieldInfo",
    "InventoryCategory",
    "PurchaseOrderCategory",
    "SalesOrderCategory",
    "TableCategory",
    "UnknownCategory",
    "VendorCategory",

    "FieldMapping",
    "MappingResult",
    "RelationshipHint",
    "Suggestion",
    "TableMapping",
    "UnmappedField",

    "PatternDictionary",
    "PatternEntry",
    "TargetColumn",
    "TargetSchema",
]
