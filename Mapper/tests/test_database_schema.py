"""
Tests for the target schema registry.
"""
import pytest

from Mapper.config.constants import DataType, TargetTable, TARGET_COLUMN_TYPES
from Mapper.core.exceptions import SchemaDefinitionError
from Mapper.models.schema_model import TargetColumn, TargetSchema
from Mapper.services.database_schema import (
    DEFAULT_TARGET_SCHEMAS,
    TargetSchemaRegistry,
    get_schema_registry,
)


class TestDefaultRegistry:
    """The shipped schemas are consistent"""

    def test_tables_in_priority_order(self, registry):
        assert registry.tables == (
            TargetTable.INVENTORY,
            TargetTable.VENDOR,
            TargetTable.PURCHASE_ORDER,
            TargetTable.SALES_ORDER,
        )

    def test_singleton(self):
        assert get_schema_registry() is get_schema_registry()

    def test_declared_types_supported(self, registry):
        for schema in registry.schemas.values():
            for column in schema.columns:
                assert column.data_type in TARGET_COLUMN_TYPES

    def test_patterns_normalized_and_long_enough(self, registry):
        assert len(registry.patterns) > 0
        for entry in registry.patterns:
            assert entry.pattern == ' '.join(entry.tokens)
            assert entry.length >= 3

    def test_references(self, registry):
        po = registry.get_schema(TargetTable.PURCHASE_ORDER)
        so = registry.get_schema(TargetTable.SALES_ORDER)
        assert po.column("supplier").references == TargetTable.VENDOR
        assert so.column("product").references == TargetTable.INVENTORY
        assert so.column("customer").references is None

    def test_get_schema_by_name(self, registry):
        assert registry.get_schema("vendor").table == TargetTable.VENDOR

    def test_unknown_column(self, registry):
        with pytest.raises(KeyError):
            registry.get_schema(TargetTable.VENDOR).column("price")

    def test_schemas_read_only(self, registry):
        with pytest.raises(TypeError):
            registry.schemas[TargetTable.VENDOR] = None

    def test_vocabulary(self, registry):
        vocabulary = dict(registry.get_vocabulary(TargetTable.VENDOR))
        assert list(vocabulary)[0] == "id"
        assert ["id"] in vocabulary["id"]
        assert ["vendor", "id"] in vocabulary["id"]

    def test_patterns_for_table(self, registry):
        by_column = registry.patterns.patterns_by_column(TargetTable.INVENTORY)
        assert "item id" in [e.pattern for e in by_column["id"]]
        assert all(e.table == TargetTable.INVENTORY for e in registry.patterns.for_table(TargetTable.INVENTORY))


class TestSchemaValidation:
    """Inconsistent definitions are rejected at construction"""

    def _inventory(self, *columns):
        return TargetSchema(TargetTable.INVENTORY, tuple(columns))

    def test_duplicate_column(self):
        schema = self._inventory(
            TargetColumn("id", DataType.IDENTIFIER, ("item id",)),
            TargetColumn("id", DataType.STRING, ("sku",)),
        )
        with pytest.raises(SchemaDefinitionError, match="Duplicate column"):
            TargetSchemaRegistry(schemas=(schema,))

    def test_duplicate_table(self):
        schema = self._inventory(TargetColumn("id", DataType.IDENTIFIER, ("item id",)))
        with pytest.raises(SchemaDefinitionError, match="Duplicate schema"):
            TargetSchemaRegistry(schemas=(schema, schema))

    def test_unsupported_type(self):
        schema = self._inventory(TargetColumn("active", DataType.BOOLEAN, ("active",)))
        with pytest.raises(SchemaDefinitionError, match="unsupported type"):
            TargetSchemaRegistry(schemas=(schema,))

    def test_short_pattern(self):
        schema = self._inventory(TargetColumn("id", DataType.IDENTIFIER, ("id",)))
        with pytest.raises(SchemaDefinitionError, match="shorter than"):
            TargetSchemaRegistry(schemas=(schema,))

    def test_unknown_reference(self):
        schema = self._inventory(
            TargetColumn("supplier", DataType.STRING, ("supplier",), references=TargetTable.VENDOR),
        )
        with pytest.raises(SchemaDefinitionError, match="unknown table"):
            TargetSchemaRegistry(schemas=(schema,))

    def test_default_schemas_valid(self):
        registry = TargetSchemaRegistry(schemas=DEFAULT_TARGET_SCHEMAS)
        assert len(registry.tables) == 4
