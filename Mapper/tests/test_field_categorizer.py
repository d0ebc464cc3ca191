"""
Tests for header categorization against the pattern dictionary.
"""
import pytest

from Mapper.config.constants import TargetTable
from Mapper.config.settings import Settings
from Mapper.models.collection_model import (
    InventoryCategory,
    PurchaseOrderCategory,
    SalesOrderCategory,
    UnknownCategory,
    VendorCategory,
)
from Mapper.services.field_categorizer import FieldCategorizer, contains_sequence


class TestFieldCategorizer:
    """Longest-pattern matching with ambiguity detection"""

    @pytest.mark.parametrize("header,variant,field_type", [
        ("Item ID", InventoryCategory, "id"),
        ("Item name", InventoryCategory, "name"),
        ("Vendor", VendorCategory, "name"),
        ("Order date", PurchaseOrderCategory, "order_date"),
        ("Price", InventoryCategory, "price"),
        ("Arrive by", PurchaseOrderCategory, "expected_delivery"),
        ("Sales platform", SalesOrderCategory, "sales_channel"),
        ("Qty", InventoryCategory, "stock"),
    ])
    def test_known_headers(self, categorizer, header, variant, field_type):
        category = categorizer.categorize(header)
        assert isinstance(category, variant)
        assert category.field_type == field_type

    def test_exact_match_confidence(self, categorizer):
        category = categorizer.categorize("Item ID")
        assert category.matched_pattern == "item id"
        assert category.confidence == 1.0
        assert not category.is_ambiguous

    def test_partial_match_confidence(self, categorizer):
        category = categorizer.categorize("Unit Price (USD)")
        assert isinstance(category, InventoryCategory)
        assert category.matched_pattern == "unit price"
        assert category.confidence == pytest.approx(0.5 + 0.5 * 10 / 14, abs=1e-3)

    def test_longest_pattern_wins(self, categorizer):
        category = categorizer.categorize("Vendor type")
        assert isinstance(category, VendorCategory)
        assert category.field_type == "vendor_type"

    def test_cross_table_tie_is_ambiguous(self, categorizer):
        category = categorizer.categorize("Order date")
        assert category.is_ambiguous
        assert category.confidence == 0.75
        assert category.tables == (TargetTable.PURCHASE_ORDER, TargetTable.SALES_ORDER)
        assert category.candidate_for(TargetTable.SALES_ORDER).field_type == "order_date"
        assert category.candidate_for(TargetTable.VENDOR) is None

    def test_notes_matches_every_table(self, categorizer):
        category = categorizer.categorize("Notes")
        assert isinstance(category, InventoryCategory)
        assert category.field_type == "description"
        assert set(category.tables) == set(TargetTable)

    @pytest.mark.parametrize("header", ["x1", "x2", "", "   ", "Zzz"])
    def test_unknown(self, categorizer, header):
        category = categorizer.categorize(header)
        assert isinstance(category, UnknownCategory)
        assert category.category == "unknown"
        assert category.confidence == 0.0
        assert category.tables == ()

    def test_pure(self, categorizer):
        first = categorizer.categorize("Item ID")
        for header in ["Vendor", "Order date", "x1", "Notes"]:
            categorizer.categorize(header)
        assert categorizer.categorize("Item ID") == first

    def test_to_dict(self, categorizer):
        data = categorizer.categorize("Order date").to_dict()
        assert data["category"] == "purchase_order"
        assert data["field_type"] == "order_date"
        assert data["alternatives"] == [{"category": "sales_order", "field_type": "order_date"}]


class TestCategorizerSettings:
    """Thresholds come from injected settings"""

    def test_min_pattern_length(self, registry):
        categorizer = FieldCategorizer(registry, settings=Settings(min_pattern_length=4))
        assert isinstance(categorizer.categorize("Bin"), UnknownCategory)
        assert isinstance(categorizer.categorize("Stock"), InventoryCategory)

    def test_ambiguity_penalty(self, registry):
        categorizer = FieldCategorizer(registry, settings=Settings(ambiguity_penalty=0.5))
        assert categorizer.categorize("Notes").confidence == 0.5

    def test_table_priority_picks_primary(self, registry):
        settings = Settings(table_priority=(
            TargetTable.SALES_ORDER,
            TargetTable.PURCHASE_ORDER,
            TargetTable.VENDOR,
            TargetTable.INVENTORY,
        ))
        categorizer = FieldCategorizer(registry, settings=settings)
        assert isinstance(categorizer.categorize("Order date"), SalesOrderCategory)


class TestContainsSequence:

    def test_contiguous(self):
        assert contains_sequence(["unit", "price", "usd"], ("unit", "price"))
        assert not contains_sequence(["price", "unit"], ("unit", "price"))
        assert not contains_sequence(["unit"], ("unit", "price"))
        assert not contains_sequence(["unit"], ())
