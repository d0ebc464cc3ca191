"""
Field Mapper Service - Maps categorized headers onto the chosen table.

A field is mapped when the chosen table is among its category's candidate
tables; every other field is rejected with the reason it could not be
mapped. Mapping confidence is the categorization confidence as-is.
"""
import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..config.constants import DataType, TransformationType, UnmappedReason
from ..config.settings import Settings
from ..models.collection_model import FieldInfo, TableCategory, UnknownCategory
from ..models.mapping_model import FieldMapping
from ..models.schema_model import TargetColumn, TargetSchema
from .type_inferencer import is_blank, is_native_date, is_native_number

logger = logging.getLogger(__name__)


# Inferred source types each declared column type accepts without loss
COMPATIBLE_TYPES = {
    DataType.DECIMAL: frozenset({DataType.INTEGER, DataType.DECIMAL}),
    DataType.INTEGER: frozenset({DataType.INTEGER}),
    DataType.DATE: frozenset({DataType.DATE}),
    DataType.STRING: frozenset(DataType),
    DataType.IDENTIFIER: frozenset({DataType.IDENTIFIER, DataType.INTEGER, DataType.STRING}),
}

NUMERIC_TYPES = (DataType.INTEGER, DataType.DECIMAL)


class FieldMapperService:
    """
    Service that maps collection fields to the columns of one target table.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.min_mapping_confidence = settings.min_mapping_confidence

    def map_fields(
        self,
        schema: TargetSchema,
        fields: Sequence[FieldInfo]
    ) -> Tuple[List[FieldMapping], List[Tuple[FieldInfo, UnmappedReason]]]:
        """
        Map fields to the columns of a target table.

        Args:
            schema: Schema of the chosen table
            fields: Categorized fields, in collection order

        Returns:
            Tuple of (mappings in field order, rejected fields with reasons)
        """
        mappings: List[FieldMapping] = []
        rejected: List[Tuple[FieldInfo, UnmappedReason]] = []

        for field in fields:
            category = field.category

            if isinstance(category, UnknownCategory):
                rejected.append((field, UnmappedReason.NO_PATTERN_MATCH))
                continue
            if not isinstance(category, TableCategory):
                raise TypeError(f"Unhandled field category: {type(category).__name__}")

            if category.confidence < self.min_mapping_confidence:
                rejected.append((field, UnmappedReason.BELOW_CONFIDENCE_FLOOR))
                continue

            candidate = category.candidate_for(schema.table)
            if candidate is None:
                # An unambiguous match elsewhere means no pattern of this table matched
                reason = (
                    UnmappedReason.AMBIGUOUS_CATEGORY if category.is_ambiguous
                    else UnmappedReason.NO_PATTERN_MATCH
                )
                rejected.append((field, reason))
                continue

            column = schema.column(candidate.field_type)
            mappings.append(self._build_mapping(field, column, candidate.matched_pattern, category.confidence))

        logger.debug(
            f"Mapped {len(mappings)}/{len(fields)} fields to {schema.table_name}, "
            f"{len(rejected)} rejected"
        )
        return mappings, rejected

    def _build_mapping(
        self,
        field: FieldInfo,
        column: TargetColumn,
        matched_pattern: str,
        confidence: float
    ) -> FieldMapping:
        source_type = field.data_type or DataType.STRING
        return FieldMapping(
            source_field=field.field_name,
            target_field=column.name,
            confidence=confidence,
            transformation_needed=self.determine_transformation(field.sample_values, column.data_type),
            matched_pattern=matched_pattern,
            source_data_type=source_type,
            target_data_type=column.data_type,
            type_compatible=self.is_type_compatible(source_type, column.data_type),
        )

    @staticmethod
    def is_type_compatible(source_type: DataType, target_type: DataType) -> bool:
        return source_type in COMPATIBLE_TYPES.get(target_type, frozenset())

    @staticmethod
    def determine_transformation(values: Sequence[Any], target_type: DataType) -> TransformationType:
        """
        Determine the coercion a column copy needs, from the raw sample
        representation and the declared column type.
        """
        samples = [v for v in values if not is_blank(v)]

        if target_type == DataType.DATE:
            if samples and all(is_native_date(v) for v in samples):
                return TransformationType.NONE
            return TransformationType.PARSE_DATE

        if target_type in NUMERIC_TYPES:
            if samples and all(is_native_number(v) for v in samples):
                return TransformationType.NONE
            return TransformationType.PARSE_NUMBER

        if any(not isinstance(v, str) for v in samples):
            return TransformationType.STRINGIFY
        if any(v != v.strip() for v in samples):
            return TransformationType.TRIM_STRING
        return TransformationType.NONE
