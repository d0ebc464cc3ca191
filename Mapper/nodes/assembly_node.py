"""
Assembly Node - Final step of the mapping pipeline.
Builds the MappingResult returned to the caller.
"""
import logging

from ..models.mapping_model import MappingResult
from ..models.workflow_state import MappingState

logger = logging.getLogger(__name__)


def assembly_node(state: MappingState) -> dict:
    """STEP 6: Assemble the result and flag it for review when uncertain."""
    settings = state["components"].settings
    tables = state["table_mappings"]
    unmapped = state.get("unmapped_fields", ())

    requires_review = (
        tables[0].confidence < settings.review_confidence_threshold
        or bool(unmapped)
    )

    result = MappingResult(
        tables=tables,
        unmapped_fields=unmapped,
        source_collection=state["collection"].collection_name,
        requires_review=requires_review,
    )

    if requires_review:
        logger.warning(
            f"Mapping of '{result.source_collection}' requires review "
            f"(confidence: {result.best_table.confidence:.2f}, unmapped: {len(unmapped)})"
        )

    return {
        "mapping_result": result,
        "steps_completed": state.get("steps_completed", []) + ["assemble_result"],
    }
