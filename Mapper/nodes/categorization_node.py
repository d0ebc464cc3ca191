"""
Categorization Node - Step 1 of the mapping pipeline.
Infers missing types and categorizes every header of the collection.
"""
import logging
from dataclasses import replace

from ..models.workflow_state import MappingState

logger = logging.getLogger(__name__)


def categorization_node(state: MappingState) -> dict:
    """
    STEP 1: Type and categorize each field.

    Types and categories already supplied by the parser are kept; only
    missing ones are computed.
    """
    components = state["components"]
    collection = state["collection"]

    fields = []
    for field in collection.fields:
        updates = {}
        if field.data_type is None:
            inference = components.type_inferencer.infer(field.sample_values)
            updates["data_type"] = inference.data_type
            updates["type_confidence"] = inference.confidence
        if field.field_category is None:
            updates["field_category"] = components.categorizer.categorize(field.field_name)
        fields.append(replace(field, **updates) if updates else field)

    categorized = sum(1 for f in fields if f.category.tables)
    logger.info(f"STEP 1: Categorized {categorized}/{len(fields)} fields of '{collection.collection_name}'")

    return {
        "fields": tuple(fields),
        "steps_completed": state.get("steps_completed", []) + ["categorize_fields"],
    }
