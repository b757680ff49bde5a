"""
Choropleth binning
Linear white-to-base color scale over N discrete bins, plus the matching legend.
Nothing here raises: bad input degrades to the neutral fallback color.
"""

import math
import re
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Tuple

from ..config import settings

FALLBACK_COLOR = settings.FALLBACK_COLOR

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")
_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

@dataclass
class MetricSample:
    code: Optional[str]
    value: Optional[float]

@dataclass
class ValueRange:
    min: float
    max: float

    @property
    def is_degenerate(self) -> bool:
        return self.min == self.max

@dataclass
class ColorBin:
    index: int
    low_bound: float
    high_bound: float
    color: str

    def to_dict(self) -> dict:
        return asdict(self)

def parse_numeric_value(raw: Any) -> Optional[float]:
    """Numbers pass through; strings give up their leading number ("23.5°C" -> 23.5)"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw if math.isfinite(raw) else None
    if isinstance(raw, Decimal):
        return float(raw) if raw.is_finite() else None
    if isinstance(raw, str):
        match = _NUMERIC_PREFIX.match(raw)
        if match:
            return float(match.group(1))
    return None

def compute_range(samples: Iterable[MetricSample]) -> ValueRange:
    """Min/max over non-null values; {0, 0} means no data"""
    values = [s.value for s in samples if s.value is not None]
    if not values:
        return ValueRange(0, 0)
    return ValueRange(min(values), max(values))

def hex_to_rgb(color: Any) -> Optional[Tuple[int, int, int]]:
    if not isinstance(color, str):
        return None
    match = _HEX_COLOR.match(color.strip())
    if not match:
        return None
    return tuple(int(channel, 16) for channel in match.groups())

def build_palette(base_color: str, bin_count: int) -> List[str]:
    """bin_count colors from white (index 0) to the base color (last index)"""
    base_rgb = hex_to_rgb(base_color)
    if base_rgb is None or not isinstance(bin_count, int) or bin_count < 1:
        return []

    palette = []
    for i in range(bin_count):
        intensity = i / max(1, bin_count - 1)
        r, g, b = (round(255 - (255 - channel) * intensity) for channel in base_rgb)
        palette.append(f"rgb({r},{g},{b})")
    return palette

def color_for(value: Any, min_value: Any, max_value: Any,
              base_color: str, bin_count: int) -> str:
    """Fill color for a single value; raw strings are parsed first"""
    value = parse_numeric_value(value)
    min_value = parse_numeric_value(min_value)
    max_value = parse_numeric_value(max_value)
    if value is None or min_value is None or max_value is None:
        return FALLBACK_COLOR

    if min_value == max_value:
        # No variance: uniform intensity
        return base_color

    palette = build_palette(base_color, bin_count)
    if not palette:
        return FALLBACK_COLOR

    factor = max(0.0, min(1.0, (value - min_value) / (max_value - min_value)))
    bin_index = math.floor(factor * (bin_count - 1))
    bin_index = max(0, min(bin_count - 1, bin_index))
    return palette[bin_index]

def build_legend(min_value: float, max_value: float, bin_count: int, base_color: str) -> List[ColorBin]:
    """Contiguous bins over [min, max]; the last bin closes exactly on max"""
    palette = build_palette(base_color, bin_count)
    if not palette:
        return []

    step = (max_value - min_value) / bin_count
    legend = []
    for i, color in enumerate(palette):
        low = min_value + i * step
        high = max_value if i == bin_count - 1 else min_value + (i + 1) * step
        legend.append(ColorBin(index=i, low_bound=low, high_bound=high, color=color))
    return legend

def icon_size_for(value: Optional[float], min_value: float, max_value: float) -> float:
    """Precipitation icon radius between 8 and 24 pixels"""
    if value is None:
        return 0
    if min_value == max_value:
        return 12
    factor = max(0.0, min(1.0, (value - min_value) / (max_value - min_value)))
    return 8 + factor * 16
