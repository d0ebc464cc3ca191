"""
Main entry point for the BizTrack data mapper.
Provides programmatic access to the mapping engine.
"""
from typing import Any, Dict, Optional, Sequence

from .config.logging_config import setup_structured_logging
from .config.settings import Settings, get_settings
from .core.workflow_engine import RuleBasedMappingEngine
from .models.mapping_model import MappingResult

_engine: Optional[RuleBasedMappingEngine] = None


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure logging from settings."""
    settings = settings or get_settings()
    setup_structured_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        json_logs=settings.json_logs,
    )


def get_engine() -> RuleBasedMappingEngine:
    """
    Get the shared mapping engine (singleton pattern), configured from
    the environment.
    """
    global _engine
    if _engine is None:
        _engine = RuleBasedMappingEngine(settings=get_settings())
    return _engine


def map_records(
    collection_name: str,
    records: Sequence[Dict[str, Any]],
    total_documents: Optional[int] = None
) -> Dict[str, Any]:
    """
    Map parsed spreadsheet rows and return the serializable result.

    Args:
        collection_name: Name of the uploaded record set
        records: Rows as header -> value dictionaries
        total_documents: Full row count when records is a preview

    Returns:
        MappingResult.to_dict() output

    Raises:
        CollectionValidationError: If the rows hold nothing to classify
    """
    result: MappingResult = get_engine().map_records(
        collection_name, records, total_documents=total_documents
    )
    return result.to_dict()
