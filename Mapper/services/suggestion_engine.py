"""
Suggestion Engine - Ranked column candidates for unmapped headers.

Similarity of a header to a column is the best combined similarity
(0.5 * token Jaccard + 0.5 * character ratio, see semantic_matcher) over
the column name and each of its patterns. The chosen table's columns are
searched first; only when none clears the floor are all tables searched.
"""
import logging
from typing import List, Optional, Tuple

from ..config.constants import TargetTable
from ..config.settings import Settings
from ..models.mapping_model import Suggestion
from .database_schema import TargetSchemaRegistry
from .semantic_matcher import FieldNameTokenizer, TokenSimilarityCalculator

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """
    Suggests target columns for headers that matched no usable pattern.
    """

    def __init__(
        self,
        registry: TargetSchemaRegistry,
        tokenizer: Optional[FieldNameTokenizer] = None,
        similarity: Optional[TokenSimilarityCalculator] = None,
        settings: Optional[Settings] = None
    ):
        settings = settings or Settings()
        self.registry = registry
        self.tokenizer = tokenizer or registry.tokenizer
        self.similarity = similarity or TokenSimilarityCalculator()
        self.floor = settings.suggestion_floor
        self.max_suggestions = settings.max_suggestions
        self.table_priority = settings.table_priority

        # Vocabulary is static, so it is tokenized once per engine
        self._vocabulary = {
            table: registry.get_vocabulary(table) for table in registry.tables
        }

    def suggest(self, header, table: TargetTable) -> Tuple[Suggestion, ...]:
        """
        Rank candidate columns for one header.

        Args:
            header: Unmapped header text
            table: Chosen target table, searched first

        Returns:
            Suggestions sorted strictly descending by similarity, each at or
            above the floor, at most max_suggestions long
        """
        tokens = self.tokenizer.tokenize(header)
        if not tokens:
            return ()

        candidates = self._score_tables(tokens, (TargetTable(table),))
        if not candidates:
            candidates = self._score_tables(tokens, self.table_priority)

        candidates.sort(key=lambda c: (-c[0], c[1], c[2]))

        suggestions: List[Suggestion] = []
        for score, _, _, column, candidate_table in candidates:
            if suggestions and score >= suggestions[-1].similarity:
                continue
            suggestions.append(Suggestion(field=column, table=candidate_table.value, similarity=score))
            if len(suggestions) >= self.max_suggestions:
                break

        logger.debug(f"Suggestions for '{header}': {[(s.table, s.field, s.similarity) for s in suggestions]}")
        return tuple(suggestions)

    def _score_tables(self, tokens: List[str], tables) -> list:
        """Score every column of the given tables, keeping those at or above the floor."""
        scored = []
        for table in tables:
            priority = self.table_priority.index(table)
            for position, (column, token_lists) in enumerate(self._vocabulary.get(table, [])):
                score = max(
                    (self.similarity.combined_similarity(tokens, candidate) for candidate in token_lists),
                    default=0.0,
                )
                if score >= self.floor:
                    scored.append((score, priority, position, column, table))
        return scored
