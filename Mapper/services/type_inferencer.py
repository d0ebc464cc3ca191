"""
Field Type Inferencer - Primitive type detection from sample values.

Types are tried in a fixed priority order (boolean, integer, decimal, date,
identifier); the first one that more than the majority threshold of the
non-blank samples parse as wins. Never raises: anything unparseable
degrades to string.
"""
import re
import math
import numbers
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Optional

import pandas as pd

from ..config.constants import DataType, DEFAULT_MAJORITY_THRESHOLD
from ..config.settings import Settings

logger = logging.getLogger(__name__)


BOOLEAN_LITERALS = frozenset({"true", "false", "yes", "no", "y", "n", "t", "f"})

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%d %b %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%B %d, %Y",
)

INTEGER_RE = re.compile(r'^[+-]?\d+$')
IDENTIFIER_RE = re.compile(r'^(?=.*[A-Za-z])(?=.*\d)\S+$')
NUMERIC_NOISE_RE = re.compile(r'[,\s$€£¥₹৳]')

TYPE_PRIORITY = (
    DataType.BOOLEAN,
    DataType.INTEGER,
    DataType.DECIMAL,
    DataType.DATE,
    DataType.IDENTIFIER,
)


@dataclass(frozen=True)
class TypeInference:
    """Inferred type of one field with the share of samples supporting it."""
    data_type: DataType
    confidence: float


def is_blank(value: Any) -> bool:
    """None, NaN/NaT and whitespace-only strings carry no type information."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def is_native_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_native_date(value: Any) -> bool:
    return isinstance(value, (date, datetime))


class FieldTypeInferencer:
    """
    Infers the primitive type of a field from its sample values.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.majority_threshold = (
            settings.majority_threshold if settings else DEFAULT_MAJORITY_THRESHOLD
        )

    def infer(self, values: Iterable[Any]) -> TypeInference:
        """
        Infer the type of a field.

        Args:
            values: Raw sample values (any mix of strings and native scalars)

        Returns:
            TypeInference with the winning type and its parse ratio
        """
        samples = [v for v in values if not is_blank(v)]
        if not samples:
            return TypeInference(DataType.STRING, 0.0)

        counts = {data_type: 0 for data_type in TYPE_PRIORITY}
        texts: List[str] = []

        for value in samples:
            if isinstance(value, bool):
                counts[DataType.BOOLEAN] += 1
            elif isinstance(value, numbers.Integral):
                counts[DataType.INTEGER] += 1
                counts[DataType.DECIMAL] += 1
            elif is_native_number(value):
                if math.isfinite(value):
                    counts[DataType.DECIMAL] += 1
            elif is_native_date(value):
                counts[DataType.DATE] += 1
            else:
                texts.append(str(value).strip())

        if texts:
            self._count_text_types(texts, counts)

        total = len(samples)
        best_ratio = 0.0
        for data_type in TYPE_PRIORITY:
            ratio = counts[data_type] / total
            if ratio > self.majority_threshold:
                return TypeInference(data_type, round(ratio, 3))
            best_ratio = max(best_ratio, ratio)

        # Share of samples no stricter type could claim
        return TypeInference(DataType.STRING, round(1.0 - best_ratio, 3))

    def _count_text_types(self, texts: List[str], counts: dict) -> None:
        """Add the per-type parse counts of textual samples."""
        series = pd.Series(texts, dtype=object)

        counts[DataType.BOOLEAN] += int(series.str.lower().isin(BOOLEAN_LITERALS).sum())

        cleaned = series.str.replace(NUMERIC_NOISE_RE.pattern, '', regex=True)
        numeric = pd.to_numeric(cleaned, errors="coerce")
        finite = numeric.notna() & numeric.abs().lt(float("inf"))
        integral = finite & cleaned.str.match(INTEGER_RE.pattern)
        counts[DataType.INTEGER] += int(integral.sum())
        counts[DataType.DECIMAL] += int(finite.sum())

        parsed = pd.Series(False, index=series.index)
        for fmt in DATE_FORMATS:
            remaining = ~parsed & ~finite
            if not remaining.any():
                break
            attempt = pd.to_datetime(series[remaining], format=fmt, errors="coerce")
            parsed.loc[attempt[attempt.notna()].index] = True
        counts[DataType.DATE] += int(parsed.sum())

        counts[DataType.IDENTIFIER] += int(series.str.match(IDENTIFIER_RE.pattern).sum())

        summary = {t.value: c for t, c in counts.items()}
        logger.debug(f"Type counts over {len(texts)} text samples: {summary}")
