"""
Exceptions raised by the mapping engine.

Poor mapping quality is never an exception: it is reported through
confidence scores and unmapped fields. Only malformed input or an
inconsistent schema definition raise.
"""
from typing import Any, Dict, List, Optional


class MappingError(Exception):
    """Base exception for mapping engine errors."""
    pass


class CollectionValidationError(MappingError):
    """
    The collection handed to the engine cannot be classified.

    Attributes:
        collection_name: Name of the rejected collection (if known)
        errors: List of {"field": ..., "message": ...} entries
    """

    def __init__(
        self,
        message: str,
        collection_name: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(message)
        self.collection_name = collection_name
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "collection_validation_error",
            "message": str(self),
            "collection_name": self.collection_name,
            "errors": self.errors,
        }


class SchemaDefinitionError(MappingError):
    """A target schema or pattern registry definition is inconsistent."""
    pass
