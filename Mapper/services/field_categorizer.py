"""
Field Categorizer - Matches one header against the pattern dictionary.

A pattern matches when its token sequence occurs contiguously in the
header's tokens. The longest matching pattern wins; equal-length winners
from different tables make the header ambiguous.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.constants import TargetTable, DEFAULT_TABLE_PRIORITY
from ..config.logging_config import get_logger
from ..config.settings import Settings
from ..models.collection_model import (
    CategoryCandidate,
    FieldCategory,
    UNKNOWN,
    make_category,
)
from ..models.schema_model import PatternEntry
from .database_schema import TargetSchemaRegistry
from .semantic_matcher import FieldNameTokenizer

logger = get_logger(__name__)


def contains_sequence(tokens: Sequence[str], pattern: Sequence[str]) -> bool:
    """Check whether pattern occurs as a contiguous run inside tokens."""
    size = len(pattern)
    if size == 0 or size > len(tokens):
        return False
    for start in range(len(tokens) - size + 1):
        if tuple(tokens[start:start + size]) == tuple(pattern):
            return True
    return False


class FieldCategorizer:
    """
    Categorizes spreadsheet headers into (table, column) pairs.

    Pure: the registry and settings are read-only, so the same header
    always yields the same category.
    """

    def __init__(
        self,
        registry: TargetSchemaRegistry,
        tokenizer: Optional[FieldNameTokenizer] = None,
        settings: Optional[Settings] = None
    ):
        settings = settings or Settings()
        self.registry = registry
        self.tokenizer = tokenizer or registry.tokenizer
        self.min_pattern_length = settings.min_pattern_length
        self.ambiguity_penalty = settings.ambiguity_penalty
        self.table_priority: Tuple[TargetTable, ...] = settings.table_priority or DEFAULT_TABLE_PRIORITY

    def categorize(self, header) -> FieldCategory:
        """
        Categorize one header.

        Args:
            header: Raw header text

        Returns:
            Table category variant, or UNKNOWN when no pattern matches
        """
        tokens = self.tokenizer.tokenize(header)
        if not tokens:
            return UNKNOWN
        normalized = ' '.join(tokens)

        matches = [
            entry for entry in self.registry.patterns
            if entry.length >= self.min_pattern_length
            and contains_sequence(tokens, entry.tokens)
        ]
        if not matches:
            return UNKNOWN

        longest = max(entry.length for entry in matches)
        winners = self._first_per_table([e for e in matches if e.length == longest])

        ordered = sorted(winners, key=lambda e: self.table_priority.index(e.table))
        primary, others = ordered[0], ordered[1:]

        if primary.pattern == normalized:
            confidence = 1.0
        else:
            confidence = 0.5 + 0.5 * len(primary.pattern) / len(normalized)
        if others:
            confidence *= self.ambiguity_penalty
            logger.info(
                "field_categorized_ambiguous",
                header=str(header),
                pattern=primary.pattern,
                tables=[e.table.value for e in ordered],
            )

        return make_category(
            table=primary.table,
            field_type=primary.field_type,
            matched_pattern=primary.pattern,
            confidence=round(confidence, 3),
            alternatives=tuple(
                CategoryCandidate(e.table, e.field_type, e.pattern) for e in others
            ),
        )

    def _first_per_table(self, entries: List[PatternEntry]) -> List[PatternEntry]:
        """Keep one entry per table, the first in schema declaration order."""
        seen: Dict[TargetTable, PatternEntry] = {}
        for entry in entries:
            seen.setdefault(entry.table, entry)
        return list(seen.values())
