"""
Choropleth map processor
Turns boundary features and metric records into a render plan and an SVG document
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence
from xml.sax.saxutils import escape, quoteattr

from pydantic import BaseModel, Field

from ..models import AdminRecord, AgricultureLandRecord, BoundaryFeature, MapLevel, StationRecord
from .choropleth import (
    FALLBACK_COLOR, ColorBin, MetricSample, ValueRange,
    build_legend, color_for, compute_range, icon_size_for, parse_numeric_value,
)
from .formatting import format_bound, format_parameter_name, format_parameter_value
from .projector import GeoProjector

ICON_BACKGROUND = "#f3f4f6"
SELECTED_STROKE = "#ffffff"
DEFAULT_STROKE = "#9ca3af"
STATION_COLOR = "#16a34a"
LAND_COLOR = "#ea580c"
MARKER_STROKE = "#ffffff"

class ViewportTransform(BaseModel):
    """Client-side zoom and pan; never persisted"""
    zoom: float = Field(1.0, ge=0.5, le=5)
    pan_x: float = 0.0
    pan_y: float = 0.0

    def zoomed(self, delta: float) -> "ViewportTransform":
        return self.model_copy(update={"zoom": max(0.5, min(5.0, self.zoom + delta))})

    def panned(self, x: float, y: float) -> "ViewportTransform":
        return self.model_copy(update={"pan_x": x, "pan_y": y})

    def reset(self) -> "ViewportTransform":
        return ViewportTransform()

    @property
    def svg_transform(self) -> str:
        return f"translate({self.pan_x:g} {self.pan_y:g}) scale({self.zoom:g})"

@dataclass
class PrecipitationIcon:
    x: float
    y: float
    radius: float

@dataclass
class RenderedFeature:
    code: str
    name: Optional[str]
    level: str
    path: str
    fill: str
    stroke: str
    stroke_width: int
    value: Optional[float] = None
    label: str = ""
    icon: Optional[PrecipitationIcon] = None

@dataclass
class Marker:
    kind: str
    id: int
    x: float
    y: float
    color: str
    label: str = ""

@dataclass
class ChoroplethMap:
    width: int
    height: int
    level: str
    layer: Optional[str]
    parameter: Optional[str]
    title: str
    value_range: ValueRange
    features: List[RenderedFeature] = field(default_factory=list)
    legend: List[ColorBin] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    viewport: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

class ChoroplethProcessor:
    """Assembles choropleth render plans from features and records"""

    def __init__(self, projector: Optional[GeoProjector] = None):
        self.logger = logging.getLogger(__name__)
        self.projector = projector or GeoProjector()

    # =====================================
    # SAMPLES
    # =====================================

    def extract_samples(self, records: Sequence[AdminRecord], level: MapLevel,
                        parameter: str) -> Dict[str, MetricSample]:
        """One sample per pcode at this level; the first record for a code wins"""
        samples: Dict[str, MetricSample] = {}
        for record in records:
            code = record.code_for(level)
            if not code or code in samples:
                continue
            samples[code] = MetricSample(code=code, value=parse_numeric_value(record.metric(parameter)))
        return samples

    # =====================================
    # RENDER PLAN
    # =====================================

    def build(self, features: Sequence[BoundaryFeature], records: Sequence[AdminRecord],
              level: MapLevel, parameter: Optional[str], base_color: str, bin_count: int,
              layer: Optional[str] = None, selected_code: Optional[str] = None,
              custom_range: Optional[ValueRange] = None, show_icons: bool = False,
              viewport: Optional[ViewportTransform] = None) -> ChoroplethMap:
        """
        Shade every drawable feature by its parsed metric value.
        Features without a record, or with an unparseable value, get the fallback color.
        """
        samples = self.extract_samples(records, level, parameter) if parameter else {}
        value_range = custom_range or compute_range(samples.values())
        viewport = viewport or ViewportTransform()

        rendered = []
        skipped = 0
        for feature in features:
            path = self.projector.geometry_to_path(feature.geometry)
            if not path:
                skipped += 1
                continue

            sample = samples.get(feature.code)
            value = sample.value if sample else None
            fill = color_for(value, value_range.min, value_range.max, base_color, bin_count) if sample else FALLBACK_COLOR

            icon = None
            if show_icons:
                # Icons carry the value; every area gets the neutral background
                icon = self._precipitation_icon(feature, value, value_range) if sample else None
                fill = ICON_BACKGROUND

            selected = selected_code is not None and feature.code == selected_code
            rendered.append(RenderedFeature(
                code=feature.code,
                name=feature.name,
                level=level.value,
                path=path,
                fill=fill,
                stroke=SELECTED_STROKE if selected else DEFAULT_STROKE,
                stroke_width=3 if selected else 1,
                value=value,
                label=self._label(feature, sample, parameter),
                icon=icon,
            ))

        if skipped:
            self.logger.info(f"Skipped {skipped} {level.value} features with no drawable geometry")

        legend = []
        has_values = any(s.value is not None for s in samples.values())
        if parameter and has_values and not show_icons:
            legend = build_legend(value_range.min, value_range.max, bin_count, base_color)

        return ChoroplethMap(
            width=self.projector.canvas_width,
            height=self.projector.canvas_height,
            level=level.value,
            layer=layer,
            parameter=parameter,
            title=format_parameter_name(parameter) if parameter else "Administrative Boundaries",
            value_range=value_range,
            features=rendered,
            legend=legend,
            viewport=viewport.model_dump(),
        )

    def _precipitation_icon(self, feature: BoundaryFeature, value: Optional[float],
                            value_range: ValueRange) -> Optional[PrecipitationIcon]:
        radius = icon_size_for(value, value_range.min, value_range.max)
        center = self.projector.ring_centroid(feature.geometry)
        if not radius or center is None:
            return None
        return PrecipitationIcon(x=center[0], y=center[1], radius=radius)

    def _label(self, feature: BoundaryFeature, sample: Optional[MetricSample], parameter: Optional[str]) -> str:
        name = feature.name or feature.code
        if not parameter:
            return name
        value = sample.value if sample else None
        return f"{name}: {format_parameter_value(value, parameter)}"

    # =====================================
    # MARKERS
    # =====================================

    def add_markers(self, choropleth: ChoroplethMap, stations: Sequence[StationRecord] = (),
                    lands: Sequence[AgricultureLandRecord] = ()) -> ChoroplethMap:
        """Point markers for weather stations and agricultural land sites"""
        for station in stations:
            point = self.projector.project_geometry_point(station.geometry)
            if point:
                choropleth.markers.append(Marker("station", station.id, point[0], point[1],
                                                 STATION_COLOR, f"Station {station.id}"))
        for land in lands:
            point = self.projector.project_geometry_point(land.geometry)
            if point:
                choropleth.markers.append(Marker("agriculture_land", land.id, point[0], point[1],
                                                 LAND_COLOR, land.name or f"Land {land.id}"))
        return choropleth

    # =====================================
    # SVG OUTPUT
    # =====================================

    def to_svg(self, choropleth: ChoroplethMap) -> str:
        """Standalone SVG document with the viewport applied as a group transform"""
        viewport = ViewportTransform(**choropleth.viewport)
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{choropleth.width}" height="{choropleth.height}" '
            f'viewBox="0 0 {choropleth.width} {choropleth.height}">',
            f"<title>{escape(choropleth.title)}</title>",
            f'<g transform="{viewport.svg_transform}">',
        ]

        for feature in choropleth.features:
            lines.append(
                f'<path d="{feature.path}" fill={quoteattr(feature.fill)} stroke="{feature.stroke}" '
                f'stroke-width="{feature.stroke_width}" data-code={quoteattr(feature.code)}>'
                f"<title>{escape(feature.label)}</title></path>"
            )
        for feature in choropleth.features:
            if feature.icon:
                lines.append(
                    f'<circle cx="{feature.icon.x:g}" cy="{feature.icon.y:g}" r="{feature.icon.radius:g}" '
                    f'fill="#2563eb" fill-opacity="0.7"/>'
                )
        for marker in choropleth.markers:
            lines.append(
                f'<circle cx="{marker.x:g}" cy="{marker.y:g}" r="4" fill="{marker.color}" '
                f'stroke="{MARKER_STROKE}" data-kind="{marker.kind}"><title>{escape(marker.label)}</title></circle>'
            )
        lines.append("</g>")
        lines.extend(self._legend_svg(choropleth))
        lines.append("</svg>")
        return "\n".join(lines)

    def _legend_svg(self, choropleth: ChoroplethMap) -> List[str]:
        if not choropleth.legend:
            return []
        x = 10
        y = choropleth.height - 20 * len(choropleth.legend) - 30
        lines = [f'<g class="legend"><text x="{x}" y="{y}" font-size="12">{escape(choropleth.title)}</text>']
        for i, color_bin in enumerate(choropleth.legend):
            row_y = y + 8 + i * 20
            lines.append(f'<rect x="{x}" y="{row_y}" width="16" height="16" fill="{color_bin.color}"/>')
            lines.append(
                f'<text x="{x + 22}" y="{row_y + 12}" font-size="11">'
                f"{format_bound(color_bin.low_bound)} - {format_bound(color_bin.high_bound)}</text>"
            )
        lines.append("</g>")
        return lines
