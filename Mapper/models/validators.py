"""
Input validation for collections handed to the mapping engine, using Pydantic.
Rejects collections there is nothing to classify from before any work runs.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..core.exceptions import CollectionValidationError
from .collection_model import CollectionAnalysis


class FieldInput(BaseModel):
    """Validated summary of one FieldInfo"""
    field_name: str = Field(..., max_length=500)
    has_samples: bool = False
    has_type: bool = False

    @field_validator('field_name')
    @classmethod
    def validate_field_name(cls, v):
        """Header must be a string without control characters"""
        if '\x00' in v:
            raise ValueError("Field name contains a null byte")
        return v


class CollectionAnalysisInput(BaseModel):
    """
    Validated collection input.

    Fails fast on:
    - empty fields
    - duplicate field names
    - sample_data headers without a FieldInfo
    - negative total_documents
    - empty sample_data with no field carrying samples or a type
    """
    collection_name: str = Field(default="", max_length=500)
    total_documents: int
    sample_headers: List[str] = Field(default_factory=list)
    sample_record_count: int = Field(default=0, ge=0)
    fields: List[FieldInput]

    @field_validator('total_documents')
    @classmethod
    def validate_total_documents(cls, v):
        """Document count cannot be negative"""
        if v < 0:
            raise ValueError(f"total_documents cannot be negative, got {v}")
        return v

    @field_validator('fields')
    @classmethod
    def validate_fields(cls, v):
        """At least one field, each name unique"""
        if not v:
            raise ValueError("Collection has no fields; there is nothing to classify")

        seen = set()
        duplicates = []
        for field in v:
            if field.field_name in seen and field.field_name not in duplicates:
                duplicates.append(field.field_name)
            seen.add(field.field_name)

        if duplicates:
            raise ValueError(f"Duplicate field names: {duplicates}")
        return v

    @model_validator(mode='after')
    def validate_consistency(self):
        """Every sampled header has a field; some type information exists"""
        names = {f.field_name for f in self.fields}
        missing = [h for h in self.sample_headers if h not in names]
        if missing:
            raise ValueError(f"Headers in sample_data without a FieldInfo: {missing}")

        if self.sample_record_count == 0 and not any(
            f.has_samples or f.has_type for f in self.fields
        ):
            raise ValueError(
                "sample_data is empty and no field carries sample values or a data type"
            )
        return self

    @classmethod
    def from_analysis(cls, analysis: CollectionAnalysis) -> 'CollectionAnalysisInput':
        headers: List[str] = []
        for record in analysis.sample_data:
            for header in record:
                if header not in headers:
                    headers.append(header)

        return cls(
            collection_name=analysis.collection_name or "",
            total_documents=analysis.total_documents,
            sample_headers=headers,
            sample_record_count=len(analysis.sample_data),
            fields=[
                FieldInput(
                    field_name=f.field_name,
                    has_samples=bool(f.sample_values),
                    has_type=f.data_type is not None,
                )
                for f in analysis.fields
            ],
        )


def _format_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into {field, message} entries"""
    prefix = "Value error, "
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "collection"
        message = err.get("msg", "")
        if message.startswith(prefix):
            message = message[len(prefix):]
        errors.append({"field": location, "message": message})
    return errors


def validate_collection(analysis: CollectionAnalysis) -> CollectionAnalysisInput:
    """
    Validate a collection before mapping.

    Args:
        analysis: Collection to validate

    Returns:
        Validated CollectionAnalysisInput

    Raises:
        CollectionValidationError: With one {field, message} entry per problem
    """
    name: Optional[str] = getattr(analysis, "collection_name", None)
    try:
        return CollectionAnalysisInput.from_analysis(analysis)
    except ValidationError as e:
        errors = _format_errors(e)
        summary = "; ".join(f"{err['field']}: {err['message']}" for err in errors)
        raise CollectionValidationError(
            f"Invalid collection '{name}': {summary}",
            collection_name=name,
            errors=errors,
        ) from e
