import logging
from typing import Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from ..data.datasets import MetricDataset
from ..database import fetch_rows
from ..models import AdminRecord

logger = logging.getLogger(__name__)

def fetch_records(db: Session, dataset: MetricDataset, year: Optional[int] = None) -> List[AdminRecord]:
    """Rows for one year, validated against the dataset's record schema"""
    year = year or dataset.default_year
    rows = fetch_rows(db, dataset.query, {"year": year})
    records = [dataset.record_model.model_validate(row) for row in rows]
    logger.info(f"Fetched {len(records)} {dataset.key} rows for {year}")
    return records

def filter_records(records: Iterable[AdminRecord], search: Optional[str] = None,
                   region_codes: Optional[Sequence[str]] = None) -> List[AdminRecord]:
    """Case-insensitive search over all values, then an adm1 region filter"""
    filtered = list(records)

    if search:
        needle = search.lower()
        filtered = [
            r for r in filtered
            if any(needle in str(value).lower() for value in r.model_dump().values() if value is not None)
        ]

    if region_codes:
        wanted = set(region_codes)
        filtered = [r for r in filtered if r.adm1_pcode in wanted]

    return filtered
