"""
Relationship Node - Step 5 of the mapping pipeline.
Adds advisory relationship hints to each table mapping.
"""
import logging
from dataclasses import replace

from ..models.workflow_state import MappingState

logger = logging.getLogger(__name__)


def relationship_node(state: MappingState) -> dict:
    """STEP 5: Detect cross-entity references in mapped fields."""
    components = state["components"]
    fields = state["fields"]

    table_mappings = []
    for table_mapping in state["table_mappings"]:
        schema = components.registry.get_schema(table_mapping.table_name)
        hints = components.relationship_detector.detect(schema, table_mapping.field_mappings, fields)
        table_mappings.append(replace(table_mapping, relationships=hints))

    best = table_mappings[0]
    if best.relationships:
        logger.info(
            f"STEP 5: {best.table_name} references "
            f"{[hint.related_table for hint in best.relationships]}"
        )

    return {
        "table_mappings": tuple(table_mappings),
        "steps_completed": state.get("steps_completed", []) + ["detect_relationships"],
    }
