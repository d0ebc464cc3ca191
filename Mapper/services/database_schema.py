"""
Target Schema Registry - Static definitions of the BizTrack tables.

Holds the column layout, declared types and recognised header patterns of
every target table, plus the flattened PatternDictionary the categorizer
scans. Built once per process and shared read-only by all mapping calls.
"""
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..config.constants import (
    DataType,
    TargetTable,
    TARGET_COLUMN_TYPES,
    DEFAULT_MIN_PATTERN_LENGTH,
)
from ..core.exceptions import SchemaDefinitionError
from ..models.schema_model import (
    PatternDictionary,
    PatternEntry,
    TargetColumn,
    TargetSchema,
)
from .semantic_matcher import FieldNameTokenizer

logger = logging.getLogger(__name__)


def _col(name, data_type, *patterns, references=None, reference_column="name"):
    return TargetColumn(
        name=name,
        data_type=data_type,
        patterns=tuple(patterns),
        references=references,
        reference_column=reference_column,
    )


DEFAULT_TARGET_SCHEMAS: Tuple[TargetSchema, ...] = (
    TargetSchema(TargetTable.INVENTORY, (
        _col("id", DataType.IDENTIFIER,
             "item id", "product id", "sku", "item code", "product code",
             "item number", "product number", "barcode"),
        _col("name", DataType.STRING,
             "item name", "product name", "item", "product", "product title"),
        _col("category", DataType.STRING,
             "type", "category", "item type", "product type",
             "product category", "item category"),
        _col("brand", DataType.STRING, "brand", "manufacturer", "make"),
        _col("price", DataType.DECIMAL,
             "price", "unit price", "selling price", "retail price", "mrp"),
        _col("cost_price", DataType.DECIMAL,
             "cost price", "unit cost", "purchase price", "buying price"),
        _col("stock", DataType.INTEGER,
             "stock", "quantity", "in stock", "stock level", "on hand", "units"),
        _col("reorder_level", DataType.INTEGER,
             "reorder level", "reorder point", "min stock"),
        _col("unit", DataType.STRING, "unit", "unit of measure"),
        _col("status", DataType.STRING,
             "status", "item status", "product status", "availability"),
        _col("location", DataType.STRING,
             "location", "stored location", "warehouse", "bin", "shelf"),
        _col("description", DataType.STRING,
             "notes", "description", "details", "remarks"),
    )),
    TargetSchema(TargetTable.VENDOR, (
        _col("id", DataType.IDENTIFIER,
             "vendor id", "supplier id", "vendor code", "supplier code"),
        _col("name", DataType.STRING,
             "vendor", "supplier", "vendor name", "supplier name",
             "company name", "company"),
        _col("vendor_type", DataType.STRING,
             "vendor type", "supplier type", "business type"),
        _col("contact_person", DataType.STRING,
             "contact", "contact person", "contact name", "representative"),
        _col("phone", DataType.STRING,
             "phone", "mobile", "telephone", "phone number", "contact number"),
        _col("email", DataType.STRING, "email", "email address"),
        _col("address", DataType.STRING,
             "address", "vendor address", "supplier address"),
        _col("website", DataType.STRING, "website", "web site", "url", "homepage"),
        _col("reliability", DataType.STRING,
             "reliability", "rating", "vendor rating", "supplier rating"),
        _col("notes", DataType.STRING, "notes", "remarks", "comments"),
    )),
    TargetSchema(TargetTable.PURCHASE_ORDER, (
        _col("order_number", DataType.IDENTIFIER,
             "order", "order number", "order id", "purchase order",
             "purchase order number"),
        _col("priority", DataType.STRING, "priority", "urgency"),
        _col("category", DataType.STRING, "category", "order category"),
        _col("status", DataType.STRING, "status", "order status"),
        _col("order_date", DataType.DATE,
             "order date", "date ordered", "purchase date", "purchase order date"),
        _col("expected_delivery", DataType.DATE,
             "arrive by", "delivery date", "expected delivery", "expected date",
             "due date", "estimated arrival"),
        _col("total_cost", DataType.DECIMAL,
             "cost", "total cost", "order cost", "total amount"),
        _col("quantity", DataType.INTEGER,
             "quantity ordered", "order quantity", "ordered quantity"),
        _col("supplier", DataType.STRING,
             "point of contact", "ordered from", "purchased from",
             references=TargetTable.VENDOR),
        _col("notes", DataType.STRING, "notes", "remarks", "comments"),
    )),
    TargetSchema(TargetTable.SALES_ORDER, (
        _col("order_number", DataType.IDENTIFIER,
             "order", "order number", "order id", "sales order", "invoice",
             "invoice number"),
        _col("priority", DataType.STRING, "priority"),
        _col("product", DataType.STRING,
             "product", "item sold", "product sold",
             references=TargetTable.INVENTORY),
        _col("status", DataType.STRING,
             "status", "order status", "delivery status", "shipping status"),
        _col("order_date", DataType.DATE,
             "order date", "sale date", "sales date", "date sold"),
        _col("sale_price", DataType.DECIMAL,
             "price", "sale price", "sales price", "order total", "total amount",
             "revenue"),
        _col("quantity", DataType.INTEGER,
             "quantity sold", "units sold", "order quantity"),
        _col("sales_channel", DataType.STRING,
             "sales platform", "platform", "channel", "sales channel", "marketplace"),
        _col("customer", DataType.STRING,
             "point of contact", "customer", "customer name", "buyer", "client"),
        _col("shipping_address", DataType.STRING,
             "shipping address", "delivery address"),
        _col("notes", DataType.STRING, "notes", "remarks", "comments"),
    )),
)


class TargetSchemaRegistry:
    """
    Immutable registry of target schemas and their header patterns.

    The registry validates every definition on construction and raises
    SchemaDefinitionError for an inconsistent one. Patterns are normalised
    with the same tokenizer the categorizer applies to headers.
    """

    def __init__(
        self,
        schemas: Tuple[TargetSchema, ...] = DEFAULT_TARGET_SCHEMAS,
        tokenizer: Optional[FieldNameTokenizer] = None,
        min_pattern_length: int = DEFAULT_MIN_PATTERN_LENGTH
    ):
        self.tokenizer = tokenizer or FieldNameTokenizer()
        self.min_pattern_length = min_pattern_length

        by_table: Dict[TargetTable, TargetSchema] = {}
        for schema in schemas:
            if schema.table in by_table:
                raise SchemaDefinitionError(f"Duplicate schema for table '{schema.table_name}'")
            by_table[schema.table] = schema

        self._schemas: Mapping[TargetTable, TargetSchema] = MappingProxyType(by_table)
        self._validate()
        self.patterns = self._build_pattern_dictionary()

        logger.debug(
            f"Schema registry ready: {len(self._schemas)} tables, {len(self.patterns)} patterns"
        )

    @property
    def schemas(self) -> Mapping[TargetTable, TargetSchema]:
        return self._schemas

    @property
    def tables(self) -> Tuple[TargetTable, ...]:
        return tuple(self._schemas.keys())

    def get_schema(self, table: TargetTable) -> TargetSchema:
        """
        Get the schema of one target table.

        Raises:
            KeyError: If the registry holds no schema for the table
        """
        return self._schemas[TargetTable(table)]

    def get_vocabulary(self, table: TargetTable) -> List[Tuple[str, List[List[str]]]]:
        """
        Get the searchable vocabulary of a table: one entry per column,
        holding the column name and the token lists of the column name
        and each of its patterns.
        """
        schema = self.get_schema(table)
        vocabulary = []
        for column in schema.columns:
            token_lists = [self.tokenizer.tokenize(column.name)]
            token_lists.extend(
                list(entry.tokens) for entry in self.patterns.for_table(schema.table)
                if entry.field_type == column.name
            )
            vocabulary.append((column.name, [t for t in token_lists if t]))
        return vocabulary

    def _validate(self) -> None:
        """Check every schema for internal consistency."""
        for table, schema in self._schemas.items():
            seen = set()
            for column in schema.columns:
                if column.name in seen:
                    raise SchemaDefinitionError(
                        f"Duplicate column '{column.name}' in table '{schema.table_name}'"
                    )
                seen.add(column.name)

                if column.data_type not in TARGET_COLUMN_TYPES:
                    raise SchemaDefinitionError(
                        f"Column '{schema.table_name}.{column.name}' declares unsupported "
                        f"type '{column.data_type}'"
                    )

                if column.references is not None and column.references not in self._schemas:
                    raise SchemaDefinitionError(
                        f"Column '{schema.table_name}.{column.name}' references unknown "
                        f"table '{column.references}'"
                    )

                for pattern in column.patterns:
                    normalized = self.tokenizer.normalize(pattern)
                    if len(normalized) < self.min_pattern_length:
                        raise SchemaDefinitionError(
                            f"Pattern '{pattern}' of '{schema.table_name}.{column.name}' is "
                            f"shorter than {self.min_pattern_length} characters once normalized"
                        )

    def _build_pattern_dictionary(self) -> PatternDictionary:
        entries = []
        for schema in self._schemas.values():
            for column in schema.columns:
                for pattern in column.patterns:
                    tokens = tuple(self.tokenizer.tokenize(pattern))
                    entries.append(PatternEntry(
                        table=schema.table,
                        field_type=column.name,
                        pattern=' '.join(tokens),
                        tokens=tokens,
                    ))
        return PatternDictionary(entries=tuple(entries))


_registry_instance: Optional[TargetSchemaRegistry] = None


def get_schema_registry() -> TargetSchemaRegistry:
    """
    Get the default schema registry (built once per process).

    Returns:
        Shared TargetSchemaRegistry instance
    """
    global _registry_instance
    if _registry_instance is None:
        _registry_instance = TargetSchemaRegistry()
    return _registry_instance
