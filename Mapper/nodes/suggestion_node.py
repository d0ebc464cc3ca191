"""
Suggestion Node - Step 4 of the mapping pipeline.
Attaches ranked column suggestions to every unmapped field.
"""
import logging

from ..config.constants import UnmappedReason
from ..models.mapping_model import UnmappedField
from ..models.workflow_state import MappingState

logger = logging.getLogger(__name__)


def suggestion_node(state: MappingState) -> dict:
    """
    STEP 4: Suggest target columns for the best table's unmapped fields.

    A field left without any suggestion above the floor is reported as
    no-pattern-match, whatever the mapper rejected it for.
    """
    engine = state["components"].suggestion_engine
    best_table = state["classification"].best.table

    unmapped = []
    for field, reason in state.get("rejected_fields", ()):
        suggestions = engine.suggest(field.field_name, best_table)
        if not suggestions:
            reason = UnmappedReason.NO_PATTERN_MATCH
        unmapped.append(UnmappedField(
            field_name=field.field_name,
            reason=reason,
            suggestions=suggestions,
        ))

    if unmapped:
        logger.info(f"STEP 4: {len(unmapped)} unmapped fields, "
                    f"{sum(1 for u in unmapped if u.suggestions)} with suggestions")

    return {
        "unmapped_fields": tuple(unmapped),
        "steps_completed": state.get("steps_completed", []) + ["suggest_fields"],
    }
