"""
MappingState TypedDict - state passed between pipeline nodes.
"""

from typing import Any, Dict, List, Optional, Tuple, TypedDict

from .collection_model import CollectionAnalysis, FieldInfo
from .mapping_model import MappingResult, TableMapping, UnmappedField


class MappingState(TypedDict, total=False):
    """
    State object passed between pipeline nodes.

    Attributes:
        components: Read-only services used by the nodes (MappingComponents)
        collection: Validated input collection

        fields: FieldInfo tuple with inferred types and categories
        classification: Ranked table scores from the table classifier
        table_mappings: One TableMapping per ranked candidate table
        rejected_fields: (FieldInfo, UnmappedReason) pairs for the best table
        unmapped_fields: Rejected fields with their suggestions
        relationships: Relationship hints per table name

        mapping_result: Final assembled result
        steps_completed: Names of finished nodes, in order
    """

    # Input
    components: Any
    collection: CollectionAnalysis

    # Intermediate results
    fields: Tuple[FieldInfo, ...]
    classification: Any
    table_mappings: Tuple[TableMapping, ...]
    rejected_fields: Tuple[Tuple[FieldInfo, Any], ...]
    unmapped_fields: Tuple[UnmappedField, ...]
    relationships: Dict[str, tuple]

    # Output
    mapping_result: Optional[MappingResult]

    # Progress tracking
    steps_completed: List[str]
