"""
BizTrack data mapper - classifies uploaded spreadsheets into target tables
and maps their headers onto table columns.
"""

from .core.workflow_engine import BaseMappingEngine, RuleBasedMappingEngine
from .core.exceptions import MappingError, CollectionValidationError, SchemaDefinitionError
from .models.collection_model import CollectionAnalysis, FieldInfo
from .models.mapping_model import MappingResult
from .config.settings import Settings

__all__ = [
    "BaseMappingEngine",
    "RuleBasedMappingEngine",
    "MappingError",
    "CollectionValidationError",
    "SchemaDefinitionError",
    "CollectionAnalysis",
    "FieldInfo",
    "MappingResult",
    "Settings",
]
