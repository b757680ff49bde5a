"""
Data models for the Ethiopia Agricultural Data Dashboard
Explicit record schemas validated where rows leave the database or the API
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

# Raw metric attribute: numeric, unit-suffixed string ("25°C") or missing
MetricValue = Optional[Union[float, str]]

# =====================================
# ADMINISTRATIVE LEVELS
# =====================================

class MapLevel(str, Enum):
    """Administrative levels following the adm1/adm2/adm3 pcode convention"""
    REGION = "region"
    ZONE = "zone"
    WOREDA = "woreda"

    @property
    def pcode_field(self) -> str:
        """Record column holding the pcode for this level"""
        return {
            MapLevel.REGION: "adm1_pcode",
            MapLevel.ZONE: "adm2_pcode",
            MapLevel.WOREDA: "adm3_pcode",
        }[self]

    @property
    def name_field(self) -> str:
        return {
            MapLevel.REGION: "adm1_en",
            MapLevel.ZONE: "adm2_en",
            MapLevel.WOREDA: "adm3_en",
        }[self]

# =====================================
# BOUNDARY FEATURES
# =====================================

class BoundaryFeature(BaseModel):
    """An administrative boundary polygon. Geometry stays raw GeoJSON;
    malformed shapes are skipped at render time, not rejected here."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[int] = Field(None, validation_alias="gid")
    name: Optional[str] = None
    code: str
    level: MapLevel
    geometry: Optional[Dict[str, Any]] = None
    region_name: Optional[str] = None
    region_code: Optional[str] = None
    zone_name: Optional[str] = None
    zone_code: Optional[str] = None

    @property
    def parent_code(self) -> Optional[str]:
        return self.zone_code or self.region_code

class StationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    geometry: Optional[Dict[str, Any]] = None

class AgricultureLandRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: Optional[str] = None
    region: Optional[str] = None
    major_crops: Optional[str] = None
    land_size: MetricValue = None
    soil_type: Optional[str] = None
    suitability: Optional[str] = None
    challenges: Optional[str] = None
    image: Optional[str] = None
    geometry: Optional[Dict[str, Any]] = None

# =====================================
# METRIC RECORDS
# =====================================

class AdminRecord(BaseModel):
    """Columns shared by every tabular metric dataset"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    adm1_en: Optional[str] = None
    adm1_pcode: Optional[str] = None
    adm2_en: Optional[str] = None
    adm2_pcode: Optional[str] = None
    adm3_en: Optional[str] = None
    adm3_pcode: Optional[str] = None
    year: Optional[int] = None

    def code_for(self, level: MapLevel) -> Optional[str]:
        return getattr(self, level.pcode_field)

    def metric(self, parameter: str) -> Any:
        """Raw value of a metric column, None for unknown columns"""
        if parameter not in type(self).model_fields:
            return None
        return getattr(self, parameter)

class WeatherRecord(AdminRecord):
    data_collection_location_station: Optional[str] = None
    avg_annual_precipitation_mm_day: MetricValue = None
    avg_annual_max_temperature_c: MetricValue = None
    avg_annual_min_temperature_c: MetricValue = None

class LandRecord(AdminRecord):
    total_agri_land: MetricValue = None
    plowed_area: MetricValue = None
    sowed_land: MetricValue = None
    harvested_land: MetricValue = None

class CropProductionRecord(AdminRecord):
    teff_production_mt: MetricValue = None
    maize_production_mt: MetricValue = None
    wheat_production_mt: MetricValue = None
    barley_production_mt: MetricValue = None

class PestRecord(AdminRecord):
    pest_incidence: MetricValue = None
    affected_area_ha: MetricValue = None
    crop_loss_tons: MetricValue = None
    pest_control_cost_etb: MetricValue = None

# =====================================
# API ENVELOPES
# =====================================

class ListResponse(BaseModel):
    success: bool = True
    data: List[Any]
    count: int

def list_response(items: List[Any]) -> Dict[str, Any]:
    """Standard success envelope for list endpoints"""
    data = [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in items]
    return ListResponse(data=data, count=len(data)).model_dump(mode="json")
