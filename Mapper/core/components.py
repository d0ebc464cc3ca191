"""
Mapping Components - The read-only services one engine shares across calls.
"""
from dataclasses import dataclass
from typing import Optional

from ..config.settings import Settings
from ..services.collection_analyzer import CollectionAnalyzerService
from ..services.database_schema import TargetSchemaRegistry, get_schema_registry
from ..services.field_categorizer import FieldCategorizer
from ..services.field_mapper import FieldMapperService
from ..services.relationship_detector import RelationshipDetector
from ..services.semantic_matcher import TokenSimilarityCalculator
from ..services.suggestion_engine import SuggestionEngine
from ..services.table_classifier import TableClassifier
from ..services.type_inferencer import FieldTypeInferencer


@dataclass(frozen=True)
class MappingComponents:
    """Services the pipeline nodes read from the state."""
    settings: Settings
    registry: TargetSchemaRegistry
    type_inferencer: FieldTypeInferencer
    categorizer: FieldCategorizer
    classifier: TableClassifier
    field_mapper: FieldMapperService
    suggestion_engine: SuggestionEngine
    relationship_detector: RelationshipDetector
    analyzer: CollectionAnalyzerService


def build_components(
    settings: Optional[Settings] = None,
    registry: Optional[TargetSchemaRegistry] = None
) -> MappingComponents:
    """
    Wire every mapping service from one settings object and one registry.

    Args:
        settings: Engine settings (defaults used when omitted)
        registry: Schema registry (process-wide default when omitted)

    Returns:
        MappingComponents ready to be shared across calls
    """
    settings = settings or Settings()
    registry = registry or get_schema_registry()

    type_inferencer = FieldTypeInferencer(settings)
    categorizer = FieldCategorizer(registry, settings=settings)

    return MappingComponents(
        settings=settings,
        registry=registry,
        type_inferencer=type_inferencer,
        categorizer=categorizer,
        classifier=TableClassifier(settings),
        field_mapper=FieldMapperService(settings),
        suggestion_engine=SuggestionEngine(
            registry,
            similarity=TokenSimilarityCalculator(),
            settings=settings,
        ),
        relationship_detector=RelationshipDetector(),
        analyzer=CollectionAnalyzerService(categorizer, type_inferencer, settings),
    )
