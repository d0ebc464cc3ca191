"""
Test suite for collection input validation.
"""
import pytest
from pydantic import ValidationError

from Mapper.core.exceptions import CollectionValidationError, MappingError
from Mapper.models.collection_model import CollectionAnalysis, FieldInfo
from Mapper.models.validators import (
    CollectionAnalysisInput,
    FieldInput,
    validate_collection,
)


def collection(fields, sample_data=(), total_documents=1, name="sheet"):
    return CollectionAnalysis(
        collection_name=name,
        total_documents=total_documents,
        sample_data=sample_data,
        fields=fields,
    )


class TestValidateCollection:
    """Fail fast when there is nothing to classify"""

    def test_valid_collection(self):
        analysis = collection(
            [FieldInfo("Item ID", sample_values=("P001",))],
            sample_data=[{"Item ID": "P001"}],
        )
        validated = validate_collection(analysis)
        assert validated.fields[0].field_name == "Item ID"

    def test_empty_fields(self):
        with pytest.raises(CollectionValidationError) as exc:
            validate_collection(collection([]))
        assert exc.value.collection_name == "sheet"
        assert exc.value.errors[0]["field"] == "fields"
        assert "nothing to classify" in exc.value.errors[0]["message"]

    def test_duplicate_field_names(self):
        fields = [FieldInfo("Price", sample_values=("1",)), FieldInfo("Price", sample_values=("2",))]
        with pytest.raises(CollectionValidationError) as exc:
            validate_collection(collection(fields))
        assert "Duplicate field names" in str(exc.value)

    def test_sample_header_without_field(self):
        analysis = collection(
            [FieldInfo("Item ID", sample_values=("P001",))],
            sample_data=[{"Item ID": "P001", "Price": "10"}],
        )
        with pytest.raises(CollectionValidationError) as exc:
            validate_collection(analysis)
        assert exc.value.errors[0]["field"] == "collection"
        assert "'Price'" in exc.value.errors[0]["message"]

    def test_negative_total_documents(self):
        analysis = collection([FieldInfo("Item ID", sample_values=("P001",))], total_documents=-1)
        with pytest.raises(CollectionValidationError) as exc:
            validate_collection(analysis)
        assert exc.value.errors[0]["field"] == "total_documents"

    def test_no_type_information(self):
        with pytest.raises(CollectionValidationError):
            validate_collection(collection([FieldInfo("Item ID")]))

    def test_declared_type_is_enough(self):
        analysis = collection([FieldInfo("Item ID", data_type="identifier")])
        validate_collection(analysis)

    def test_error_is_mapping_error(self):
        with pytest.raises(MappingError):
            validate_collection(collection([]))

    def test_to_dict(self):
        with pytest.raises(CollectionValidationError) as exc:
            validate_collection(collection([]))
        data = exc.value.to_dict()
        assert data["error"] == "collection_validation_error"
        assert data["collection_name"] == "sheet"
        assert data["errors"]


class TestInputModels:

    def test_field_name_null_byte(self):
        with pytest.raises(ValidationError):
            FieldInput(field_name="Item\x00ID")

    def test_field_name_too_long(self):
        with pytest.raises(ValidationError):
            FieldInput(field_name="x" * 600)

    def test_from_analysis_collects_headers(self):
        analysis = collection(
            [FieldInfo("a", sample_values=(1,)), FieldInfo("b")],
            sample_data=[{"a": 1}, {"b": 2, "a": 3}],
        )
        validated = CollectionAnalysisInput.from_analysis(analysis)
        assert validated.sample_headers == ["a", "b"]
        assert validated.sample_record_count == 2


class TestCollectionFromDict:
    """Parser payloads in either key style"""

    def test_camel_case_payload(self):
        analysis = CollectionAnalysis.from_dict({
            "collectionName": "biztrack_vendors",
            "totalDocuments": 2,
            "sampleData": [{"Vendor": "ABC Electronics Ltd"}],
            "fields": [{"fieldName": "Vendor", "dataType": "string", "sampleValues": ["ABC Electronics Ltd"]}],
        })
        assert analysis.collection_name == "biztrack_vendors"
        assert analysis.fields[0].sample_values == ("ABC Electronics Ltd",)
        validate_collection(analysis)

    def test_unknown_data_type_dropped(self):
        analysis = CollectionAnalysis.from_dict({
            "collection_name": "x",
            "total_documents": 1,
            "fields": [{"field_name": "Vendor", "data_type": "ObjectId"}],
        })
        assert analysis.fields[0].data_type is None
