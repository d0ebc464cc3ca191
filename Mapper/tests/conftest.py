"""
Shared fixtures: spreadsheet rows as the upload service parses them.
"""
import pytest

from Mapper.config.settings import Settings
from Mapper.core.components import build_components
from Mapper.services.database_schema import get_schema_registry


INVENTORY_ROWS = [
    {
        "Item ID": "P001",
        "Item name": "Samsung Galaxy S23",
        "Type": "Electronics",
        "Price": "85000",
        "Stock": "50",
        "Status": "Active",
        "Notes": "Latest model with 5G support",
    },
    {
        "Item ID": "P002",
        "Item name": "Office Desk",
        "Type": "Furniture",
        "Price": "12000",
        "Stock": "20",
        "Status": "Active",
        "Notes": "Ergonomic design",
    },
    {
        "Item ID": "P003",
        "Item name": "LED Monitor 24\"",
        "Type": "Electronics",
        "Price": "18000",
        "Stock": "35",
        "Status": "Active",
        "Notes": "Full HD display",
    },
]

VENDOR_ROWS = [
    {
        "Vendor": "ABC Electronics Ltd",
        "Vendor type": "Wholesale",
        "Contact": "Kamal Ahmed - 01712345678",
        "Address": "Gulshan-2, Dhaka",
        "Website": "www.abcelectronics.com.bd",
        "Reliability": "High",
        "Notes": "Preferred supplier for electronics",
    },
    {
        "Vendor": "XYZ Furniture House",
        "Vendor type": "Retail",
        "Contact": "Rina Begum - 01898765432",
        "Address": "Banani, Dhaka",
        "Website": "www.xyzfurniture.com",
        "Reliability": "Medium",
        "Notes": "New vendor, trial period",
    },
]

PURCHASE_ORDER_ROWS = [
    {
        "Priority": "High",
        "Order": "PO-2025-001",
        "Category": "Electronics",
        "Status": "Pending",
        "Order date": "2025-01-15",
        "Arrive by": "2025-01-20",
        "Cost": "500000",
        "Point of contact": "ABC Electronics Ltd",
        "Notes": "Urgent order for new store opening",
    },
    {
        "Priority": "Medium",
        "Order": "PO-2025-002",
        "Category": "Furniture",
        "Status": "Confirmed",
        "Order date": "2025-01-16",
        "Arrive by": "2025-01-25",
        "Cost": "300000",
        "Point of contact": "XYZ Furniture House",
        "Notes": "Regular monthly order",
    },
]

SALES_ORDER_ROWS = [
    {
        "Priority": "High",
        "Order": "SO-2025-001",
        "Product": "Samsung Galaxy S23",
        "Status": "Shipped",
        "Order date": "2025-01-15",
        "Price": "90000",
        "Sales platform": "Daraz",
        "Point of contact": "Customer A - 01723456789",
        "Notes": "Express delivery requested",
    },
    {
        "Priority": "Medium",
        "Order": "SO-2025-002",
        "Product": "Office Desk",
        "Status": "Pending",
        "Order date": "2025-01-16",
        "Price": "15000",
        "Sales platform": "Facebook Marketplace",
        "Point of contact": "Customer B - 01834567890",
        "Notes": "Normal delivery",
    },
]

JUNK_ROWS = [
    {"x1": "a", "x2": "b", "x3": "c"},
    {"x1": "d", "x2": "e", "x3": "f"},
]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def registry():
    return get_schema_registry()


@pytest.fixture
def components(settings, registry):
    return build_components(settings, registry)


@pytest.fixture
def categorizer(components):
    return components.categorizer


@pytest.fixture
def analyzer(components):
    return components.analyzer


@pytest.fixture
def inventory_rows():
    return [dict(row) for row in INVENTORY_ROWS]


@pytest.fixture
def vendor_rows():
    return [dict(row) for row in VENDOR_ROWS]


@pytest.fixture
def purchase_order_rows():
    return [dict(row) for row in PURCHASE_ORDER_ROWS]


@pytest.fixture
def sales_order_rows():
    return [dict(row) for row in SALES_ORDER_ROWS]


@pytest.fixture
def junk_rows():
    return [dict(row) for row in JUNK_ROWS]
