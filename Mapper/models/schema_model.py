"""
Target schema data models.

A TargetSchema describes one relational table uploads can be mapped into.
The PatternDictionary is the flattened, normalized view of every header
pattern across all schemas. Both are immutable and shared by all calls.
"""

from typing import Dict, Iterator, Optional, Tuple
from dataclasses import dataclass

from ..config.constants import DataType, TargetTable


@dataclass(frozen=True)
class TargetColumn:
    """One column of a target table."""
    name: str
    data_type: DataType
    patterns: Tuple[str, ...] = ()
    references: Optional[TargetTable] = None   # Entity this column points at
    reference_column: str = "name"             # Column on the referenced table matched by value


@dataclass(frozen=True)
class TargetSchema:
    """Ordered column definitions of one target table."""
    table: TargetTable
    columns: Tuple[TargetColumn, ...]

    @property
    def table_name(self) -> str:
        return self.table.value

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(col.name for col in self.columns)

    def column(self, name: str) -> TargetColumn:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(f"{self.table_name} has no column '{name}'")


@dataclass(frozen=True)
class PatternEntry:
    """A normalized header pattern pointing at one (table, column)."""
    table: TargetTable
    field_type: str
    pattern: str                 # Normalized text, tokens joined by single spaces
    tokens: Tuple[str, ...]

    @property
    def length(self) -> int:
        return len(self.pattern)


@dataclass(frozen=True)
class PatternDictionary:
    """
    Immutable registry of header patterns across every target table,
    in schema declaration order.
    """
    entries: Tuple[PatternEntry, ...]

    def __iter__(self) -> Iterator[PatternEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def for_table(self, table: TargetTable) -> Tuple[PatternEntry, ...]:
        return tuple(e for e in self.entries if e.table == table)

    def patterns_by_column(self, table: TargetTable) -> Dict[str, Tuple[PatternEntry, ...]]:
        grouped: Dict[str, list] = {}
        for entry in self.for_table(table):
            grouped.setdefault(entry.field_type, []).append(entry)
        return {name: tuple(items) for name, items in grouped.items()}
