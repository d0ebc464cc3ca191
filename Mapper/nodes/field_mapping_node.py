"""
Field Mapping Node - Step 3 of the mapping pipeline.
Maps the collection's fields onto every ranked candidate table.
"""
import logging

from ..models.mapping_model import TableMapping
from ..models.workflow_state import MappingState

logger = logging.getLogger(__name__)


def field_mapping_node(state: MappingState) -> dict:
    """
    STEP 3: Build one TableMapping per ranked table.

    Rejected fields are kept only for the best table, since unmapped
    fields are reported relative to it.
    """
    components = state["components"]
    fields = state["fields"]

    table_mappings = []
    rejected_fields = ()
    for position, table_score in enumerate(state["classification"].ranked):
        schema = components.registry.get_schema(table_score.table)
        mappings, rejected = components.field_mapper.map_fields(schema, fields)

        table_mappings.append(TableMapping(
            table_name=schema.table_name,
            confidence=table_score.confidence,
            reasoning=table_score.reasoning,
            field_mappings=tuple(mappings),
        ))
        if position == 0:
            rejected_fields = tuple(rejected)

    best = table_mappings[0]
    logger.info(
        f"STEP 3: Mapped {len(best.field_mappings)}/{len(fields)} fields to {best.table_name}, "
        f"{len(rejected_fields)} unmapped"
    )

    return {
        "table_mappings": tuple(table_mappings),
        "rejected_fields": rejected_fields,
        "steps_completed": state.get("steps_completed", []) + ["map_fields"],
    }
