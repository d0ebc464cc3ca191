"""
Classification Node - Step 2 of the mapping pipeline.
Ranks the target tables the collection could belong to.
"""
import logging

from ..models.workflow_state import MappingState

logger = logging.getLogger(__name__)


def classification_node(state: MappingState) -> dict:
    """STEP 2: Aggregate field categories into a ranked table decision."""
    classification = state["components"].classifier.classify(state["fields"])

    best = classification.best
    logger.info(
        f"STEP 2: Selected table {best.table.value} "
        f"(confidence: {best.confidence:.2f}, candidates: {len(classification.ranked)})"
    )

    return {
        "classification": classification,
        "steps_completed": state.get("steps_completed", []) + ["classify_table"],
    }
