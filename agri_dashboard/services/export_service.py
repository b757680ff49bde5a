import csv
import io
import json
from datetime import date
from typing import List, Sequence, Tuple

from pydantic import BaseModel

EXPORT_FORMATS = {
    "csv": "text/csv",
    "json": "application/json",
}

def records_to_csv(records: Sequence[BaseModel]) -> str:
    if not records:
        return ""
    rows = [r.model_dump(mode="json") for r in records]
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()), lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()

def records_to_json(records: Sequence[BaseModel]) -> str:
    return json.dumps([r.model_dump(mode="json") for r in records], indent=2, ensure_ascii=False)

def export_records(records: List[BaseModel], fmt: str, dataset_key: str) -> Tuple[str, str, str]:
    """Returns (content, media type, filename)"""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    content = records_to_csv(records) if fmt == "csv" else records_to_json(records)
    filename = f"ethiopia_{dataset_key.replace('-', '_')}_{date.today().isoformat()}.{fmt}"
    return content, EXPORT_FORMATS[fmt], filename
