from enum import Enum


class TargetTable(str, Enum):
    INVENTORY = "inventory"
    VENDOR = "vendor"
    PURCHASE_ORDER = "purchase_order"
    SALES_ORDER = "sales_order"


class DataType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"


class TransformationType(str, Enum):
    NONE = "none"
    PARSE_NUMBER = "parse-number"
    PARSE_DATE = "parse-date"
    TRIM_STRING = "trim-string"
    STRINGIFY = "stringify"


class UnmappedReason(str, Enum):
    NO_PATTERN_MATCH = "no-pattern-match"
    AMBIGUOUS_CATEGORY = "ambiguous-category"
    BELOW_CONFIDENCE_FLOOR = "below-confidence-floor"


UNKNOWN_CATEGORY = "unknown"

# Tie-break order when two tables score equally
DEFAULT_TABLE_PRIORITY = (
    TargetTable.INVENTORY,
    TargetTable.VENDOR,
    TargetTable.PURCHASE_ORDER,
    TargetTable.SALES_ORDER,
)

# Types a target column may declare
TARGET_COLUMN_TYPES = frozenset({
    DataType.STRING,
    DataType.IDENTIFIER,
    DataType.INTEGER,
    DataType.DECIMAL,
    DataType.DATE,
})

# Default values
DEFAULT_MIN_PATTERN_LENGTH = 3
DEFAULT_MAJORITY_THRESHOLD = 0.5
DEFAULT_AMBIGUITY_PENALTY = 0.75
DEFAULT_MIN_MAPPING_CONFIDENCE = 0.4
DEFAULT_SUGGESTION_FLOOR = 0.3
DEFAULT_MAX_SUGGESTIONS = 3
DEFAULT_MAX_SAMPLE_RECORDS = 20
DEFAULT_MAX_SAMPLE_VALUES = 10
DEFAULT_CONFIDENCE_THRESHOLD = 0.7
