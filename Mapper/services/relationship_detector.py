"""
Relationship Detector - Advisory cross-entity hints.

A mapped column that declares a reference to another target table, and
whose source values are free text rather than identifiers, is reported as
a likely relationship keyed by value (e.g. a purchase order's "Point of
contact" naming a vendor).
"""
import logging
from typing import Dict, List, Sequence, Tuple

from ..config.constants import DataType
from ..models.collection_model import FieldInfo
from ..models.mapping_model import FieldMapping, RelationshipHint
from ..models.schema_model import TargetSchema
from .type_inferencer import is_blank

logger = logging.getLogger(__name__)

MAX_HINT_SAMPLES = 3


class RelationshipDetector:
    """Emits relationship hints for mapped reference columns."""

    def detect(
        self,
        schema: TargetSchema,
        mappings: Sequence[FieldMapping],
        fields: Sequence[FieldInfo]
    ) -> Tuple[RelationshipHint, ...]:
        by_name: Dict[str, FieldInfo] = {f.field_name: f for f in fields}
        hints: List[RelationshipHint] = []

        for mapping in mappings:
            column = schema.column(mapping.target_field)
            if column.references is None:
                continue

            field = by_name.get(mapping.source_field)
            source_type = mapping.source_data_type or (field.data_type if field else None)
            if source_type != DataType.STRING:
                continue

            hints.append(RelationshipHint(
                related_table=column.references.value,
                key=mapping.source_field,
                related_column=column.reference_column,
                sample_values=self._distinct_samples(field),
            ))
            logger.debug(
                f"Relationship hint: {schema.table_name}.{column.name} "
                f"-> {column.references.value}.{column.reference_column} via '{mapping.source_field}'"
            )

        return tuple(hints)

    @staticmethod
    def _distinct_samples(field) -> Tuple[str, ...]:
        if field is None:
            return ()
        seen: List[str] = []
        for value in field.sample_values:
            if is_blank(value):
                continue
            text = str(value).strip()
            if text not in seen:
                seen.append(text)
            if len(seen) >= MAX_HINT_SAMPLES:
                break
        return tuple(seen)
