"""
Tabular metric endpoints: datasets, exports, charts and the agricultural catalog
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import list_response
from ..services.agricultural_service import UnknownCategoryError, get_agricultural_data
from ..services.export_service import export_records
from ..data.datasets import DATASETS, MetricDataset, get_dataset
from ..services.metrics_service import fetch_records, filter_records
from ..visualization.charts import render_chart
from ..visualization.layers import DEFAULT_CHART_FIELDS

router = APIRouter(tags=["metrics"])
logger = logging.getLogger(__name__)

def _dataset_or_404(key: str) -> MetricDataset:
    dataset = get_dataset(key)
    if dataset is None:
        raise HTTPException(status_code=404, detail=f"Unknown dataset: {key}")
    return dataset

def _load(db: Session, dataset: MetricDataset, year: Optional[int],
          search: Optional[str], region: Optional[List[str]]):
    try:
        records = fetch_records(db, dataset, year)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching {dataset.key}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch {dataset.label.lower()} data: {str(e)}")
    return filter_records(records, search=search, region_codes=region)

# =====================================
# DATASETS
# =====================================

@router.get("/datasets")
async def list_datasets():
    """Catalog of metric datasets and their columns"""
    return list_response([d.describe() for d in DATASETS.values()])

@router.get("/metrics/{dataset_key}")
async def get_metrics(
    dataset_key: str,
    year: Optional[int] = Query(None, ge=1900, le=2100),
    search: Optional[str] = None,
    region: Optional[List[str]] = Query(None, description="adm1 pcodes to keep"),
    db: Session = Depends(get_db)
):
    """
    Rows of one dataset for a year, optionally searched and filtered by region
    """
    dataset = _dataset_or_404(dataset_key)
    records = _load(db, dataset, year, search, region)
    response = list_response(records)
    response["year"] = year or dataset.default_year
    return response

@router.get("/metrics/{dataset_key}/export")
async def export_metrics(
    dataset_key: str,
    format: str = Query("csv", pattern=r'^(csv|json)$'),
    year: Optional[int] = Query(None, ge=1900, le=2100),
    search: Optional[str] = None,
    region: Optional[List[str]] = Query(None),
    db: Session = Depends(get_db)
):
    """Download the (filtered) rows as CSV or JSON"""
    dataset = _dataset_or_404(dataset_key)
    records = _load(db, dataset, year, search, region)
    content, media_type, filename = export_records(records, format, dataset.key)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

# =====================================
# CHARTS
# =====================================

@router.get("/charts/{dataset_key}.png")
async def chart_metrics(
    dataset_key: str,
    chart_type: str = Query("bar", pattern=r'^(bar|line|area|pie)$'),
    x_field: Optional[str] = None,
    y: Optional[List[str]] = Query(None, description="Metric columns to plot"),
    year: Optional[int] = Query(None, ge=1900, le=2100),
    region: Optional[List[str]] = Query(None),
    db: Session = Depends(get_db)
):
    """
    PNG chart of a dataset. Without explicit y columns the layer defaults are used.
    """
    dataset = _dataset_or_404(dataset_key)
    records = _load(db, dataset, year, None, region)

    y_fields = y or [f for f in DEFAULT_CHART_FIELDS[dataset.layer] if f in dataset.metric_columns]
    unknown = [f for f in y_fields if f not in dataset.metric_columns]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown metric columns: {', '.join(unknown)}")

    png = render_chart(
        records,
        chart_type,
        x_field or dataset.level.name_field,
        y_fields[:3],
        title=f"{dataset.label} ({year or dataset.default_year})"
    )
    return Response(content=png, media_type="image/png")

# =====================================
# AGRICULTURAL CATALOG
# =====================================

@router.get("/agricultural-data")
async def agricultural_data(category: str = "all", subcategory: Optional[str] = None):
    """Land, crop distribution, livestock and infrastructure reference data"""
    try:
        data = get_agricultural_data(category, subcategory)
    except UnknownCategoryError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "success": True,
        "data": data,
        "category": category,
        "subcategory": subcategory,
    }
