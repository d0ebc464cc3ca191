"""
Table Classifier - Picks the dominant target table of a collection.

Each categorized field votes for the tables in its candidate set with its
categorization confidence. Tables are ranked by aggregate score, then by
fewer unmapped fields, then by the configured table priority.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.constants import TargetTable
from ..config.logging_config import get_logger
from ..config.settings import Settings
from ..models.collection_model import (
    FieldCategory,
    FieldInfo,
    TableCategory,
    UnknownCategory,
)

logger = get_logger(__name__)

MAX_REASONING_EXAMPLES = 3


@dataclass(frozen=True)
class TableScore:
    """Aggregate vote of a collection's fields for one table."""
    table: TargetTable
    score: float
    confidence: float
    mapped_count: int
    unmapped_count: int
    reasoning: str


@dataclass(frozen=True)
class TableClassification:
    """Tables ranked best first. Never empty."""
    ranked: Tuple[TableScore, ...]
    total_fields: int

    @property
    def best(self) -> TableScore:
        return self.ranked[0]

    @property
    def has_confident_table(self) -> bool:
        return self.best.score > 0


def candidate_tables(category: FieldCategory) -> Tuple[TargetTable, ...]:
    """Tables a category votes for."""
    if isinstance(category, UnknownCategory):
        return ()
    if isinstance(category, TableCategory):
        return category.tables
    raise TypeError(f"Unhandled field category: {type(category).__name__}")


class TableClassifier:
    """
    Aggregates per-field categorizations into a ranked table decision.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.min_mapping_confidence = settings.min_mapping_confidence
        self.table_priority = settings.table_priority

    def classify(self, fields: Sequence[FieldInfo]) -> TableClassification:
        """
        Rank target tables for a collection.

        Args:
            fields: Categorized fields of one collection

        Returns:
            TableClassification with every table that scored, or the
            priority fallback with confidence 0 when none did
        """
        total = len(fields)
        votes: Dict[TargetTable, List[Tuple[FieldInfo, float]]] = {}

        for field in fields:
            category = field.category
            if category.confidence < self.min_mapping_confidence:
                continue
            for table in candidate_tables(category):
                votes.setdefault(table, []).append((field, category.confidence))

        scored = []
        for table, table_votes in votes.items():
            score = sum(confidence for _, confidence in table_votes)
            if score <= 0:
                continue
            mapped = len(table_votes)
            scored.append((table, score, mapped, total - mapped, table_votes))

        if not scored:
            fallback = self.table_priority[0]
            logger.info(
                "no_confident_table",
                field_count=total,
                fallback_table=fallback.value,
            )
            reasoning = (
                f"No confident table: none of the {total} fields matched a known "
                f"pattern; defaulting to {fallback.value} by table priority"
            )
            return TableClassification(
                ranked=(TableScore(fallback, 0.0, 0.0, 0, total, reasoning),),
                total_fields=total,
            )

        scored.sort(key=lambda item: (
            -round(item[1], 6),
            item[3],
            self.table_priority.index(item[0]),
        ))

        ranked = []
        for position, (table, score, mapped, unmapped, table_votes) in enumerate(scored):
            confidence = min(1.0, max(0.0, score / total)) if total else 0.0
            reasoning = self._build_reasoning(
                table, table_votes, total,
                tie_note=self._tie_note(scored, position),
            )
            ranked.append(TableScore(
                table=table,
                score=round(score, 3),
                confidence=round(confidence, 3),
                mapped_count=mapped,
                unmapped_count=unmapped,
                reasoning=reasoning,
            ))

        best = ranked[0]
        logger.debug(
            "table_classified",
            table=best.table.value,
            score=best.score,
            confidence=best.confidence,
            candidates=len(ranked),
        )
        return TableClassification(ranked=tuple(ranked), total_fields=total)

    def _build_reasoning(
        self,
        table: TargetTable,
        table_votes: List[Tuple[FieldInfo, float]],
        total: int,
        tie_note: Optional[str] = None
    ) -> str:
        """Explain which fields drove a table's score."""
        examples = sorted(
            enumerate(table_votes),
            key=lambda item: (-item[1][1], item[0]),
        )[:MAX_REASONING_EXAMPLES]
        described = ", ".join(
            f"'{field.field_name}'→{field.category.candidate_for(table).field_type}"
            for _, (field, _) in examples
        )
        reasoning = (
            f"Matched {len(table_votes)}/{total} fields to {table.value} patterns, "
            f"including {described}"
        )

        ambiguous = [field.field_name for field, _ in table_votes if field.category.is_ambiguous]
        if ambiguous:
            names = ", ".join(f"'{name}'" for name in ambiguous)
            reasoning += (
                f". {len(ambiguous)} ambiguous field(s) also match other tables "
                f"({names}), lowering certainty"
            )

        if tie_note:
            reasoning += f". {tie_note}"
        return reasoning

    def _tie_note(self, scored: list, position: int) -> Optional[str]:
        """Describe how a score tie with the next-ranked table was resolved."""
        if position + 1 >= len(scored):
            return None
        table, score, _, unmapped, _ = scored[position]
        other, other_score, _, other_unmapped, _ = scored[position + 1]
        if round(score, 6) != round(other_score, 6):
            return None
        if unmapped != other_unmapped:
            return (
                f"Tied with {other.value} on score; resolved by fewer unmapped fields"
            )
        return f"Tied with {other.value} on score; resolved by table priority"
