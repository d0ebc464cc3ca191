"""
Workflow Engine - Executes the mapping pipeline.
Main entry point for classifying one collection and mapping its fields.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from ..config.logging_config import CorrelationIdContext, get_logger, log_function_call
from ..config.settings import Settings
from ..models.collection_model import CollectionAnalysis
from ..models.mapping_model import MappingResult
from ..models.validators import validate_collection
from ..models.workflow_state import MappingState
from ..services.database_schema import TargetSchemaRegistry
from .components import MappingComponents, build_components
from .graph_builder import MappingGraphBuilder

logger = get_logger(__name__)


class BaseMappingEngine(ABC):
    """
    Contract shared by every mapping engine.

    Alternative engines (e.g. a model-driven one) implement map_collection
    with the same input and output types.
    """

    @abstractmethod
    def map_collection(self, analysis: CollectionAnalysis) -> MappingResult:
        """Classify a collection and map its fields."""


class RuleBasedMappingEngine(BaseMappingEngine):
    """
    Deterministic pattern-based mapping engine.

    The compiled graph, settings, registry and services are read-only,
    so one instance can be shared across threads.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        registry: Optional[TargetSchemaRegistry] = None
    ):
        """
        Initialize the engine.

        Args:
            settings: Engine settings (defaults used when omitted)
            registry: Schema registry (process-wide default when omitted)
        """
        self.settings = settings or Settings()
        self.components: MappingComponents = build_components(self.settings, registry)
        self.builder = MappingGraphBuilder()
        self.graph = self.builder.build()

    @log_function_call(logger)
    def map_collection(self, analysis: CollectionAnalysis) -> MappingResult:
        """
        Classify a collection and map its fields.

        Args:
            analysis: Collection produced by the spreadsheet parser

        Returns:
            MappingResult with tables ranked best first

        Raises:
            CollectionValidationError: If there is nothing to classify
        """
        with CorrelationIdContext(collection=analysis.collection_name):
            validate_collection(analysis)

            initial_state: MappingState = {
                "components": self.components,
                "collection": analysis,
                "steps_completed": [],
            }

            try:
                final_state = self.graph.invoke(initial_state)
            except Exception as e:
                logger.error(
                    "mapping_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    exc_info=True,
                )
                raise

            result: MappingResult = final_state["mapping_result"]
            best = result.best_table
            logger.info(
                "collection_mapped",
                table=best.table_name,
                confidence=best.confidence,
                mapped=len(best.field_mappings),
                unmapped=len(result.unmapped_fields),
                requires_review=result.requires_review,
                steps=len(final_state.get("steps_completed", [])),
            )
            return result

    def map_records(
        self,
        collection_name: str,
        records: Sequence[Dict[str, Any]],
        total_documents: Optional[int] = None
    ) -> MappingResult:
        """
        Analyze raw parsed rows and map them in one call.

        Args:
            collection_name: Name of the uploaded record set
            records: Rows as header -> value dictionaries
            total_documents: Full row count when records is a preview

        Returns:
            MappingResult for the analyzed collection
        """
        analysis = self.components.analyzer.analyze_records(
            collection_name, records, total_documents=total_documents
        )
        return self.map_collection(analysis)

    def analyze_records(
        self,
        collection_name: str,
        records: Sequence[Dict[str, Any]],
        total_documents: Optional[int] = None
    ) -> CollectionAnalysis:
        """Build a CollectionAnalysis with this engine's analyzer."""
        return self.components.analyzer.analyze_records(
            collection_name, records, total_documents=total_documents
        )
