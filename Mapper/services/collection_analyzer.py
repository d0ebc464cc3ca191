"""
Collection Analyzer Service - Builds a CollectionAnalysis from raw rows.

Mirrors what the upload service does with parsed spreadsheet rows: one
FieldInfo per distinct header (first-seen order), a bounded record preview,
bounded sample values, and the inferred type and category of each field.
"""
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..config.logging_config import get_logger
from ..config.settings import Settings
from ..models.collection_model import CollectionAnalysis, FieldInfo
from .field_categorizer import FieldCategorizer
from .type_inferencer import FieldTypeInferencer, is_blank

logger = get_logger(__name__)


def header_text(header: Any) -> str:
    """
    Header as a plain string: parsers may hand over numbers (e.g. a year
    column) or text with unpaired surrogates, which are replaced.
    """
    return str(header).encode("utf-8", errors="replace").decode("utf-8")


class CollectionAnalyzerService:
    """
    Service that turns parsed records into a CollectionAnalysis.
    """

    def __init__(
        self,
        categorizer: FieldCategorizer,
        type_inferencer: Optional[FieldTypeInferencer] = None,
        settings: Optional[Settings] = None
    ):
        settings = settings or Settings()
        self.categorizer = categorizer
        self.type_inferencer = type_inferencer or FieldTypeInferencer(settings)
        self.max_sample_records = settings.max_sample_records
        self.max_sample_values = settings.max_sample_values

    def analyze_records(
        self,
        collection_name: str,
        records: Sequence[Dict[str, Any]],
        total_documents: Optional[int] = None
    ) -> CollectionAnalysis:
        """
        Analyze parsed records.

        Args:
            collection_name: Name of the uploaded record set
            records: Rows as header -> value dictionaries
            total_documents: Full row count when records is itself a preview

        Returns:
            CollectionAnalysis with typed, categorized fields
        """
        headers: List[str] = []
        values: Dict[str, List[Any]] = {}

        for record in records:
            for raw_header, value in record.items():
                header = header_text(raw_header)
                if header not in values:
                    headers.append(header)
                    values[header] = []
                bucket = values[header]
                if len(bucket) < self.max_sample_values and not is_blank(value):
                    bucket.append(value)

        fields = []
        for header in headers:
            samples = tuple(values[header])
            inference = self.type_inferencer.infer(samples)
            fields.append(FieldInfo(
                field_name=header,
                data_type=inference.data_type,
                sample_values=samples,
                field_category=self.categorizer.categorize(header),
                type_confidence=inference.confidence,
            ))

        analysis = CollectionAnalysis(
            collection_name=collection_name,
            total_documents=len(records) if total_documents is None else total_documents,
            sample_data=tuple(
                {header_text(h): v for h, v in r.items()}
                for r in records[:self.max_sample_records]
            ),
            fields=tuple(fields),
        )

        logger.info(
            "collection_analyzed",
            collection=collection_name,
            records=len(records),
            fields=len(fields),
        )
        return analysis

    def analyze_dataframe(self, collection_name: str, df: pd.DataFrame) -> CollectionAnalysis:
        """
        Analyze a pandas DataFrame (e.g. one parsed worksheet).

        Missing cells become None and numpy scalars become native Python
        values before analysis.
        """
        frame = df.copy()
        frame.columns = [header_text(col) for col in frame.columns]
        records = frame.astype(object).where(frame.notna(), None).to_dict("records")
        return self.analyze_records(collection_name, records, total_documents=len(frame))
