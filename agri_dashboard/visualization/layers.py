"""
Data layers and view preferences
The map shades by exactly one data layer, chosen by a fixed priority.
"""

from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Set

from pydantic import BaseModel, Field

class DataLayer(str, Enum):
    WEATHER = "weather"
    LAND = "land"
    CROP = "crop"
    PEST = "pest"

# Highest priority first
LAYER_PRIORITY: List[DataLayer] = [DataLayer.PEST, DataLayer.CROP, DataLayer.LAND, DataLayer.WEATHER]

WEATHER_PARAMETERS: Dict[str, str] = {
    "max_temp": "avg_annual_max_temperature_c",
    "min_temp": "avg_annual_min_temperature_c",
    "precipitation": "avg_annual_precipitation_mm_day",
}

DEFAULT_PARAMETERS: Dict[DataLayer, str] = {
    DataLayer.WEATHER: WEATHER_PARAMETERS["max_temp"],
    DataLayer.LAND: "total_agri_land",
    DataLayer.CROP: "teff_production_mt",
    DataLayer.PEST: "pest_incidence",
}

# Chart defaults, at most three series each
DEFAULT_CHART_FIELDS: Dict[DataLayer, List[str]] = {
    DataLayer.WEATHER: ["avg_annual_max_temperature_c", "avg_annual_min_temperature_c", "avg_annual_precipitation_mm_day"],
    DataLayer.LAND: ["total_agri_land", "plowed_area", "sowed_land"],
    DataLayer.CROP: ["teff_production_mt", "maize_production_mt", "wheat_production_mt"],
    DataLayer.PEST: ["pest_incidence", "affected_area_ha", "crop_loss_tons"],
}

PRECIPITATION_PARAMETER = WEATHER_PARAMETERS["precipitation"]

class ViewPreferences(BaseModel):
    """Independent view toggles plus the set of enabled data layers"""
    enabled_layers: Set[DataLayer] = Field(default_factory=lambda: {DataLayer.WEATHER})
    show_stations: bool = False
    show_agriculture_lands: bool = False
    show_precipitation_icons: bool = False

def resolve_active_layer(preferences: ViewPreferences,
                         records_by_layer: Mapping[DataLayer, Sequence]) -> Optional[DataLayer]:
    """First enabled layer, in priority order, that actually has records"""
    for layer in LAYER_PRIORITY:
        if layer in preferences.enabled_layers and records_by_layer.get(layer):
            return layer
    return None

def resolve_parameter(layer: DataLayer, parameter: Optional[str] = None) -> str:
    """Column to shade by; weather accepts the short aliases"""
    if not parameter:
        return DEFAULT_PARAMETERS[layer]
    if layer == DataLayer.WEATHER:
        return WEATHER_PARAMETERS.get(parameter, parameter)
    return parameter
