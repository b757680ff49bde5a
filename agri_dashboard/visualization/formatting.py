"""
Display names and unit formatting for metric parameters
"""

from typing import Any

PARAMETER_LABELS = {
    "total_agri_land": "Total Agricultural Land",
    "plowed_area": "Plowed Area",
    "sowed_land": "Sowed Area",
    "harvested_land": "Harvested Area",
    "teff_production_mt": "Teff Production",
    "wheat_production_mt": "Wheat Production",
    "barley_production_mt": "Barley Production",
    "maize_production_mt": "Maize Production",
    "pest_incidence": "Pest Incidence",
    "affected_area_ha": "Affected Area",
    "avg_annual_max_temperature_c": "Maximum Temperature (°C)",
    "avg_annual_min_temperature_c": "Minimum Temperature (°C)",
    "avg_annual_precipitation_mm_day": "Precipitation (mm/day)",
}

def format_parameter_name(parameter: str) -> str:
    if parameter in PARAMETER_LABELS:
        return PARAMETER_LABELS[parameter]
    return parameter.replace("_", " ").title()

def format_parameter_value(value: Any, parameter: str) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if "_ha" in parameter or "_land" in parameter or parameter.endswith("_area"):
            return f"{value:,} ha"
        if "_mt" in parameter:
            return f"{value:,} MT"
        if "temperature" in parameter or "temp" in parameter:
            return f"{value:g}°C"
        if "precipitation" in parameter:
            return f"{value:g}mm"
        return f"{value:,}"
    return str(value)

def format_bound(value: float) -> str:
    """Legend bound with one decimal"""
    return f"{value:,.1f}"
