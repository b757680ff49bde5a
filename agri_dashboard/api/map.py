"""
Choropleth map endpoints
"""

import logging
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field, model_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..models import AdminRecord, MapLevel
from ..services.boundary_service import get_agriculture_lands, get_features, get_stations
from ..data.datasets import dataset_for
from ..services.metrics_service import fetch_records
from ..visualization.choropleth import ValueRange
from ..visualization.layers import (
    PRECIPITATION_PARAMETER, DataLayer, ViewPreferences, resolve_active_layer, resolve_parameter,
)
from ..visualization.processor import ChoroplethMap, ChoroplethProcessor, ViewportTransform

router = APIRouter(prefix="/map", tags=["map"])
logger = logging.getLogger(__name__)

# =====================================
# PYDANTIC MODELS
# =====================================

class MapRequest(BaseModel):
    level: MapLevel = MapLevel.REGION
    year: Optional[int] = Field(None, ge=1900, le=2100)
    layers: List[DataLayer] = Field(default_factory=lambda: [DataLayer.WEATHER])
    weather_parameter: str = Field(default='max_temp', pattern=r'^(max_temp|min_temp|precipitation)$')
    land_parameter: Optional[str] = None
    crop_parameter: Optional[str] = None
    pest_parameter: Optional[str] = None
    color_scheme: Optional[str] = Field(None, pattern=r'^(red|blue|green|orange|purple)$')
    base_color: Optional[str] = Field(None, pattern=r'^#[0-9a-fA-F]{6}$')
    bins: int = Field(default=settings.DEFAULT_COLOR_BINS, ge=3, le=20)
    range_min: Optional[float] = None
    range_max: Optional[float] = None
    selected: Optional[str] = None
    show_stations: bool = False
    show_agriculture_lands: bool = False
    show_precipitation_icons: bool = False
    viewport: ViewportTransform = Field(default_factory=ViewportTransform)

    @model_validator(mode="after")
    def check_custom_range(self):
        if (self.range_min is None) != (self.range_max is None):
            raise ValueError("range_min and range_max must be given together")
        if self.range_min is not None and self.range_min > self.range_max:
            raise ValueError("range_min must not exceed range_max")
        return self

    @property
    def preferences(self) -> ViewPreferences:
        return ViewPreferences(
            enabled_layers=set(self.layers),
            show_stations=self.show_stations,
            show_agriculture_lands=self.show_agriculture_lands,
            show_precipitation_icons=self.show_precipitation_icons,
        )

    @property
    def custom_range(self) -> Optional[ValueRange]:
        if self.range_min is None:
            return None
        return ValueRange(self.range_min, self.range_max)

    def parameter_for(self, layer: DataLayer) -> str:
        requested = {
            DataLayer.WEATHER: self.weather_parameter,
            DataLayer.LAND: self.land_parameter,
            DataLayer.CROP: self.crop_parameter,
            DataLayer.PEST: self.pest_parameter,
        }[layer]
        return resolve_parameter(layer, requested)

# =====================================
# RENDERING
# =====================================

processor = ChoroplethProcessor()

def _load_layer_records(db: Session, request: MapRequest) -> Dict[DataLayer, List[AdminRecord]]:
    """Records for every enabled layer that has a dataset at the requested level"""
    records: Dict[DataLayer, List[AdminRecord]] = {}
    for layer in request.preferences.enabled_layers:
        dataset = dataset_for(layer, request.level)
        if dataset is None:
            logger.info(f"No {layer.value} dataset at {request.level.value} level")
            continue
        parameter = request.parameter_for(layer)
        if parameter not in dataset.metric_columns:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown {layer.value} parameter: {parameter}. Expected one of: {', '.join(dataset.metric_columns)}"
            )
        records[layer] = fetch_records(db, dataset, request.year)
    return records

def build_map(db: Session, request: MapRequest) -> ChoroplethMap:
    """Fetch features and layer data, resolve the active layer and shade the map"""
    features = get_features(db, request.level)
    records_by_layer = _load_layer_records(db, request)
    preferences = request.preferences

    layer = resolve_active_layer(preferences, records_by_layer)
    parameter = request.parameter_for(layer) if layer else None
    records = records_by_layer.get(layer, []) if layer else []

    show_icons = (
        preferences.show_precipitation_icons
        and layer == DataLayer.WEATHER
        and parameter == PRECIPITATION_PARAMETER
    )

    choropleth = processor.build(
        features,
        records,
        request.level,
        parameter,
        settings.resolve_base_color(request.color_scheme, request.base_color),
        request.bins,
        layer=layer.value if layer else None,
        selected_code=request.selected,
        custom_range=request.custom_range,
        show_icons=show_icons,
        viewport=request.viewport,
    )

    stations = get_stations(db) if preferences.show_stations else []
    lands = get_agriculture_lands(db) if preferences.show_agriculture_lands else []
    processor.add_markers(choropleth, stations, lands)

    logger.info(
        f"Rendered {len(choropleth.features)} {request.level.value} features "
        f"(layer: {choropleth.layer or 'none'}, parameter: {parameter or 'none'})"
    )
    return choropleth

def _render(db: Session, request: MapRequest) -> ChoroplethMap:
    try:
        return build_map(db, request)
    except SQLAlchemyError as e:
        logger.error(f"Database error rendering map: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch map data: {str(e)}")

# =====================================
# ENDPOINTS
# =====================================

@router.post("/render")
async def render_map(request: MapRequest, db: Session = Depends(get_db)):
    """
    Render plan: per-feature path and fill, legend, markers and viewport
    """
    choropleth = _render(db, request)
    return {"success": True, "data": choropleth.to_dict()}

@router.post("/render.svg")
async def render_map_svg(request: MapRequest, db: Session = Depends(get_db)):
    """Same map as a standalone SVG document"""
    choropleth = _render(db, request)
    return Response(content=processor.to_svg(choropleth), media_type="image/svg+xml")
