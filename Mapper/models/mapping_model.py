"""
Data models for mapping results.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass

from ..config.constants import DataType, TransformationType, UnmappedReason


@dataclass(frozen=True)
class FieldMapping:
    """Represents a mapping from a source header to a target column."""
    source_field: str                  # Original spreadsheet header
    target_field: str                  # Target column name
    confidence: float = 0.0            # Categorization confidence, 0.0-1.0
    transformation_needed: TransformationType = TransformationType.NONE
    matched_pattern: Optional[str] = None
    source_data_type: Optional[DataType] = None
    target_data_type: Optional[DataType] = None
    type_compatible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_field": self.source_field,
            "target_field": self.target_field,
            "confidence": self.confidence,
            "transformation_needed": self.transformation_needed.value,
            "matched_pattern": self.matched_pattern,
            "source_data_type": self.source_data_type.value if self.source_data_type else None,
            "target_data_type": self.target_data_type.value if self.target_data_type else None,
            "type_compatible": self.type_compatible,
        }


@dataclass(frozen=True)
class RelationshipHint:
    """Advisory pointer from a mapped field to another target table's entity."""
    related_table: str
    key: str                               # Source header carrying the reference
    related_column: str = "name"           # Column on related_table matched by value
    sample_values: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "related_table": self.related_table,
            "key": self.key,
            "related_column": self.related_column,
            "sample_values": list(self.sample_values),
        }


@dataclass(frozen=True)
class TableMapping:
    """Mapping of a collection onto one candidate target table."""
    table_name: str
    confidence: float
    reasoning: str
    field_mappings: Tuple[FieldMapping, ...] = ()
    relationships: Tuple[RelationshipHint, ...] = ()

    def get_mapped_fields(self) -> List[str]:
        """Get list of successfully mapped source headers."""
        return [m.source_field for m in self.field_mappings]

    def get_high_confidence_mappings(self, threshold: float = 0.7) -> List[FieldMapping]:
        """Get only mappings at or above the confidence threshold."""
        return [m for m in self.field_mappings if m.confidence >= threshold]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table_name": self.table_name,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "field_mappings": [m.to_dict() for m in self.field_mappings],
            "relationships": [r.to_dict() for r in self.relationships],
        }


@dataclass(frozen=True)
class Suggestion:
    """Ranked candidate column for an unmapped header."""
    field: str
    table: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "table": self.table, "similarity": self.similarity}


@dataclass(frozen=True)
class UnmappedField:
    """A source header that was not mapped onto the chosen table."""
    field_name: str
    reason: UnmappedReason
    suggestions: Tuple[Suggestion, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field_name": self.field_name,
            "reason": self.reason.value,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


@dataclass(frozen=True)
class MappingResult:
    """
    Complete result of mapping one collection.

    tables is ordered best candidate first and is never empty;
    unmapped_fields is relative to tables[0].
    """
    tables: Tuple[TableMapping, ...]
    unmapped_fields: Tuple[UnmappedField, ...] = ()
    source_collection: Optional[str] = None
    requires_review: bool = False

    def __post_init__(self):
        if not self.tables:
            raise ValueError("MappingResult requires at least one table mapping")

    @property
    def best_table(self) -> TableMapping:
        return self.tables[0]

    def get_unmapped_names(self) -> List[str]:
        return [u.field_name for u in self.unmapped_fields]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_collection": self.source_collection,
            "tables": [t.to_dict() for t in self.tables],
            "unmapped_fields": [u.to_dict() for u in self.unmapped_fields],
            "requires_review": self.requires_review,
        }
