"""
Core package - Mapping pipeline orchestration.
"""

from .exceptions import MappingError, CollectionValidationError, SchemaDefinitionError
from .graph_builder import MappingGraphBuilder
from .workflow_engine import BaseMappingEngine, RuleBasedMappingEngine

__all__ = [
    "MappingError",
    "CollectionValidationError",
    "SchemaDefinitionError",
    "MappingGraphBuilder",
    "BaseMappingEngine",
    "RuleBasedMappingEngine",
]
