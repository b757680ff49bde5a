"""
Metric dataset registry
Each dataset is one table filtered by year; SQL identifiers come only from here.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type

from ..models import AdminRecord, CropProductionRecord, LandRecord, MapLevel, PestRecord, WeatherRecord
from ..visualization.layers import DataLayer

ADMIN_COLUMNS = {
    MapLevel.REGION: ("adm1_en", "adm1_pcode"),
    MapLevel.ZONE: ("adm1_en", "adm1_pcode", "adm2_en", "adm2_pcode"),
    MapLevel.WOREDA: ("adm1_en", "adm1_pcode", "adm2_en", "adm2_pcode", "adm3_en", "adm3_pcode"),
}

@dataclass(frozen=True)
class MetricDataset:
    key: str
    label: str
    table: str
    level: MapLevel
    layer: DataLayer
    admin_columns: Tuple[str, ...]
    metric_columns: Tuple[str, ...]
    order_by: str
    default_year: int
    record_model: Type[AdminRecord]

    @property
    def columns(self) -> Tuple[str, ...]:
        return self.admin_columns + ("year",) + self.metric_columns

    @property
    def query(self) -> str:
        return (
            f"SELECT {', '.join(self.columns)} "
            f"FROM {self.table} "
            f"WHERE year = :year "
            f"ORDER BY {self.order_by}"
        )

    def describe(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "level": self.level.value,
            "layer": self.layer.value,
            "metrics": list(self.metric_columns),
            "default_year": self.default_year,
        }

WEATHER_METRICS = ("avg_annual_precipitation_mm_day", "avg_annual_max_temperature_c", "avg_annual_min_temperature_c")
LAND_METRICS = ("total_agri_land", "plowed_area", "sowed_land", "harvested_land")
CROP_METRICS = ("teff_production_mt", "maize_production_mt", "wheat_production_mt", "barley_production_mt")
PEST_METRICS = ("pest_incidence", "affected_area_ha", "crop_loss_tons", "pest_control_cost_etb")

DATASETS: Dict[str, MetricDataset] = {d.key: d for d in [
    MetricDataset("weather-data", "Regional weather", "r_weather_data", MapLevel.REGION, DataLayer.WEATHER,
                  ("id",) + ADMIN_COLUMNS[MapLevel.REGION], WEATHER_METRICS, "adm1_en", 2020, WeatherRecord),
    MetricDataset("z-weather-data", "Zonal weather", "z_weather_data", MapLevel.ZONE, DataLayer.WEATHER,
                  ("id", "adm2_en", "adm2_pcode"), WEATHER_METRICS, "adm2_en", 2020, WeatherRecord),
    MetricDataset("w-weather-data", "Woreda weather", "w_weather_data", MapLevel.WOREDA, DataLayer.WEATHER,
                  ADMIN_COLUMNS[MapLevel.WOREDA] + ("data_collection_location_station",), WEATHER_METRICS,
                  "adm3_en", 2020, WeatherRecord),
    MetricDataset("land", "Regional land use", "land", MapLevel.REGION, DataLayer.LAND,
                  ("id",) + ADMIN_COLUMNS[MapLevel.REGION], LAND_METRICS, "adm1_en", 2024, LandRecord),
    MetricDataset("w-land", "Woreda land use", "w_land", MapLevel.WOREDA, DataLayer.LAND,
                  ADMIN_COLUMNS[MapLevel.WOREDA], LAND_METRICS, "adm1_en, adm2_en, adm3_en", 2024, LandRecord),
    MetricDataset("z-cropproduction", "Zonal crop production", "z_cropproduction", MapLevel.ZONE, DataLayer.CROP,
                  ADMIN_COLUMNS[MapLevel.ZONE], CROP_METRICS, "adm1_en, adm2_en", 2020, CropProductionRecord),
    MetricDataset("pestdata", "Regional pest incidence", "pest_data", MapLevel.REGION, DataLayer.PEST,
                  ("id",) + ADMIN_COLUMNS[MapLevel.REGION], PEST_METRICS, "adm1_en", 2024, PestRecord),
    MetricDataset("w-pestdata", "Woreda pest incidence", "w_pestdata", MapLevel.WOREDA, DataLayer.PEST,
                  ADMIN_COLUMNS[MapLevel.WOREDA], PEST_METRICS, "adm1_en, adm2_en, adm3_en", 2024, PestRecord),
]}

def get_dataset(key: str) -> Optional[MetricDataset]:
    return DATASETS.get(key)

def dataset_for(layer: DataLayer, level: MapLevel) -> Optional[MetricDataset]:
    """Dataset backing a data layer at a map level, if the store has one"""
    for dataset in DATASETS.values():
        if dataset.layer == layer and dataset.level == level:
            return dataset
    return None
