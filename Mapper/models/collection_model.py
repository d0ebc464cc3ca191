"""
Collection analysis data models.

These models describe one uploaded record set as handed to the engine by
the spreadsheet parser: its fields, their inferred types, and the category
(target table + column) each header was matched to.
"""

from typing import Any, ClassVar, Dict, Optional, Tuple, Union
from dataclasses import dataclass

from ..config.constants import DataType, TargetTable, UNKNOWN_CATEGORY


# ═══════════════════════════════════════════════════════════════
#  FIELD CATEGORIES
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CategoryCandidate:
    """One (table, column) a header matched with the winning pattern length."""
    table: TargetTable
    field_type: str
    matched_pattern: str


@dataclass(frozen=True)
class UnknownCategory:
    """Header matched no pattern."""
    table: ClassVar[Optional[TargetTable]] = None

    @property
    def category(self) -> str:
        return UNKNOWN_CATEGORY

    @property
    def confidence(self) -> float:
        return 0.0

    @property
    def tables(self) -> Tuple[TargetTable, ...]:
        return ()

    @property
    def is_ambiguous(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"category": UNKNOWN_CATEGORY}


@dataclass(frozen=True)
class TableCategory:
    """
    Header matched a pattern of a target table.

    alternatives holds candidates from other tables whose matched pattern
    tied in length with the winning one; a non-empty tuple marks the
    categorization as ambiguous.
    """
    table: ClassVar[TargetTable]

    field_type: str
    matched_pattern: str
    confidence: float
    alternatives: Tuple[CategoryCandidate, ...] = ()

    @property
    def category(self) -> str:
        return self.table.value

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.alternatives)

    @property
    def tables(self) -> Tuple[TargetTable, ...]:
        return (self.table,) + tuple(alt.table for alt in self.alternatives)

    def candidate_for(self, table: TargetTable) -> Optional[CategoryCandidate]:
        """Return the (table, column) candidate for a table, if any."""
        if table == self.table:
            return CategoryCandidate(self.table, self.field_type, self.matched_pattern)
        for alt in self.alternatives:
            if alt.table == table:
                return alt
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "category": self.category,
            "field_type": self.field_type,
            "matched_pattern": self.matched_pattern,
            "confidence": self.confidence,
        }
        if self.alternatives:
            data["alternatives"] = [
                {"category": alt.table.value, "field_type": alt.field_type}
                for alt in self.alternatives
            ]
        return data


@dataclass(frozen=True)
class InventoryCategory(TableCategory):
    table: ClassVar[TargetTable] = TargetTable.INVENTORY


@dataclass(frozen=True)
class VendorCategory(TableCategory):
    table: ClassVar[TargetTable] = TargetTable.VENDOR


@dataclass(frozen=True)
class PurchaseOrderCategory(TableCategory):
    table: ClassVar[TargetTable] = TargetTable.PURCHASE_ORDER


@dataclass(frozen=True)
class SalesOrderCategory(TableCategory):
    table: ClassVar[TargetTable] = TargetTable.SALES_ORDER


FieldCategory = Union[
    InventoryCategory,
    VendorCategory,
    PurchaseOrderCategory,
    SalesOrderCategory,
    UnknownCategory,
]

CATEGORY_VARIANTS = {
    TargetTable.INVENTORY: InventoryCategory,
    TargetTable.VENDOR: VendorCategory,
    TargetTable.PURCHASE_ORDER: PurchaseOrderCategory,
    TargetTable.SALES_ORDER: SalesOrderCategory,
}

UNKNOWN = UnknownCategory()


def make_category(
    table: TargetTable,
    field_type: str,
    matched_pattern: str,
    confidence: float,
    alternatives: Tuple[CategoryCandidate, ...] = ()
) -> TableCategory:
    """Build the category variant for a table."""
    variant = CATEGORY_VARIANTS[table]
    return variant(
        field_type=field_type,
        matched_pattern=matched_pattern,
        confidence=confidence,
        alternatives=alternatives,
    )


# ═══════════════════════════════════════════════════════════════
#  FIELDS AND COLLECTIONS
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FieldInfo:
    """One distinct header of an uploaded collection."""

    # Required fields
    field_name: str

    # Optional fields (filled by the engine when absent)
    data_type: Optional[DataType] = None
    sample_values: Tuple[Any, ...] = ()
    field_category: Optional[FieldCategory] = None
    type_confidence: float = 0.0

    def __post_init__(self):
        if not isinstance(self.sample_values, tuple):
            object.__setattr__(self, "sample_values", tuple(self.sample_values))
        if isinstance(self.data_type, str) and not isinstance(self.data_type, DataType):
            object.__setattr__(self, "data_type", DataType(self.data_type))

    @property
    def category(self) -> FieldCategory:
        return self.field_category if self.field_category is not None else UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field_name": self.field_name,
            "data_type": self.data_type.value if self.data_type else None,
            "type_confidence": self.type_confidence,
            "sample_values": [str(v) for v in self.sample_values[:3]],
            "field_category": self.category.to_dict(),
        }


@dataclass(frozen=True)
class CollectionAnalysis:
    """
    Complete description of one uploaded record set.

    sample_data is a bounded preview of raw records; fields holds one
    FieldInfo per distinct header.
    """
    collection_name: str
    total_documents: int
    sample_data: Tuple[Dict[str, Any], ...] = ()
    fields: Tuple[FieldInfo, ...] = ()

    def __post_init__(self):
        if not isinstance(self.sample_data, tuple):
            object.__setattr__(self, "sample_data", tuple(self.sample_data))
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.field_name for f in self.fields)

    def get_field(self, name: str) -> Optional[FieldInfo]:
        for f in self.fields:
            if f.field_name == name:
                return f
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "collection_name": self.collection_name,
            "total_documents": self.total_documents,
            "sample_data": [dict(record) for record in self.sample_data[:3]],
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CollectionAnalysis':
        """
        Create instance from the parser's payload. Accepts both the
        camelCase keys of the upload service and snake_case keys.
        """
        def pick(source: Dict[str, Any], snake: str, camel: str, default=None):
            if snake in source:
                return source[snake]
            return source.get(camel, default)

        fields = []
        for raw in pick(data, "fields", "fields", []) or []:
            data_type = pick(raw, "data_type", "dataType")
            try:
                data_type = DataType(data_type) if data_type else None
            except ValueError:
                # Parser-specific type names are re-inferred by the engine
                data_type = None
            fields.append(FieldInfo(
                field_name=pick(raw, "field_name", "fieldName", ""),
                data_type=data_type,
                sample_values=tuple(pick(raw, "sample_values", "sampleValues", []) or []),
            ))

        return cls(
            collection_name=pick(data, "collection_name", "collectionName", ""),
            total_documents=pick(data, "total_documents", "totalDocuments", 0),
            sample_data=tuple(pick(data, "sample_data", "sampleData", []) or []),
            fields=tuple(fields),
        )
