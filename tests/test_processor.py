"""Tests for render plan assembly and SVG output."""

import pytest

from agri_dashboard.models import AgricultureLandRecord, BoundaryFeature, MapLevel, StationRecord, WeatherRecord
from agri_dashboard.visualization.choropleth import FALLBACK_COLOR, ValueRange, build_palette
from agri_dashboard.visualization.processor import (
    DEFAULT_STROKE,
    ICON_BACKGROUND,
    SELECTED_STROKE,
    ChoroplethProcessor,
    ViewportTransform,
)

from conftest import square

MAX_TEMP = "avg_annual_max_temperature_c"
PRECIPITATION = "avg_annual_precipitation_mm_day"


def feature(code: str, geometry: dict, name: str = None) -> BoundaryFeature:
    return BoundaryFeature(code=code, name=name or code, level=MapLevel.REGION, geometry=geometry)


def weather(code: str, **values) -> WeatherRecord:
    return WeatherRecord(adm1_pcode=code, year=2020, **values)


@pytest.fixture
def processor() -> ChoroplethProcessor:
    return ChoroplethProcessor()


class TestExtractSamples:
    def test_first_record_per_code_wins(self, processor: ChoroplethProcessor) -> None:
        records = [weather("ET14", **{MAX_TEMP: "30°C"}), weather("ET14", **{MAX_TEMP: 10.0})]
        samples = processor.extract_samples(records, MapLevel.REGION, MAX_TEMP)
        assert samples["ET14"].value == 30.0

    def test_keyed_by_level_pcode(self, processor: ChoroplethProcessor) -> None:
        record = WeatherRecord(adm1_pcode="ET14", adm2_pcode="ET1401", **{MAX_TEMP: 22.0})
        assert list(processor.extract_samples([record], MapLevel.ZONE, MAX_TEMP)) == ["ET1401"]

    def test_unknown_parameter_is_null(self, processor: ChoroplethProcessor) -> None:
        samples = processor.extract_samples([weather("ET14", **{MAX_TEMP: 22.0})], MapLevel.REGION, "no_such")
        assert samples["ET14"].value is None


class TestBuild:
    def test_single_feature_degenerate_range(self, processor: ChoroplethProcessor) -> None:
        choropleth = processor.build(
            [feature("ET14", square(37, 10))], [weather("ET14", **{MAX_TEMP: "30°C"})],
            MapLevel.REGION, MAX_TEMP, "#dc2626", 5,
        )
        assert len(choropleth.features) == 1
        assert choropleth.features[0].fill == "#dc2626"
        assert choropleth.features[0].value == 30.0
        assert choropleth.features[0].label == "ET14: 30°C"

    def test_fills_span_the_palette(self, processor: ChoroplethProcessor) -> None:
        features = [feature("A", square(35, 5)), feature("B", square(38, 8)), feature("C", square(41, 11))]
        records = [weather("A", **{MAX_TEMP: 10.0}), weather("B", **{MAX_TEMP: 20.0}), weather("C", **{MAX_TEMP: 30.0})]
        choropleth = processor.build(features, records, MapLevel.REGION, MAX_TEMP, "#dc2626", 5)

        palette = build_palette("#dc2626", 5)
        assert [f.fill for f in choropleth.features] == [palette[0], palette[2], palette[4]]
        assert (choropleth.value_range.min, choropleth.value_range.max) == (10.0, 30.0)
        assert len(choropleth.legend) == 5
        assert choropleth.legend[-1].high_bound == 30.0
        assert choropleth.title == "Maximum Temperature (°C)"

    def test_missing_and_unparseable_get_fallback(self, processor: ChoroplethProcessor) -> None:
        features = [feature("A", square(35, 5)), feature("B", square(38, 8)), feature("C", square(41, 11))]
        records = [weather("A", **{MAX_TEMP: 10.0}), weather("B", **{MAX_TEMP: "N/A"})]
        choropleth = processor.build(features, records, MapLevel.REGION, MAX_TEMP, "#dc2626", 5)

        fills = {f.code: f.fill for f in choropleth.features}
        assert fills["A"] == "#dc2626"
        assert fills["B"] == FALLBACK_COLOR
        assert fills["C"] == FALLBACK_COLOR
        assert next(f.label for f in choropleth.features if f.code == "B") == "B: N/A"

    def test_undrawable_features_skipped(self, processor: ChoroplethProcessor) -> None:
        features = [
            feature("A", square(35, 5)),
            feature("B", {"type": "Point", "coordinates": [38, 9]}),
            feature("C", None),
        ]
        choropleth = processor.build(features, [], MapLevel.REGION, MAX_TEMP, "#dc2626", 5)
        assert [f.code for f in choropleth.features] == ["A"]
        assert choropleth.legend == []

    def test_no_parameter_draws_boundaries(self, processor: ChoroplethProcessor) -> None:
        choropleth = processor.build([feature("A", square(35, 5), "Amhara")], [], MapLevel.REGION, None, "#dc2626", 5)
        assert choropleth.title == "Administrative Boundaries"
        assert choropleth.features[0].fill == FALLBACK_COLOR
        assert choropleth.features[0].label == "Amhara"

    def test_custom_range(self, processor: ChoroplethProcessor) -> None:
        features = [feature("A", square(35, 5)), feature("B", square(38, 8))]
        records = [weather("A", **{MAX_TEMP: 10.0}), weather("B", **{MAX_TEMP: 20.0})]
        choropleth = processor.build(features, records, MapLevel.REGION, MAX_TEMP, "#dc2626", 5,
                                     custom_range=ValueRange(0, 100))
        palette = build_palette("#dc2626", 5)
        assert [f.fill for f in choropleth.features] == [palette[0], palette[0]]
        assert choropleth.legend[-1].high_bound == 100

    def test_selected_stroke(self, processor: ChoroplethProcessor) -> None:
        features = [feature("A", square(35, 5)), feature("B", square(38, 8))]
        choropleth = processor.build(features, [], MapLevel.REGION, None, "#dc2626", 5, selected_code="B")
        strokes = {f.code: (f.stroke, f.stroke_width) for f in choropleth.features}
        assert strokes["A"] == (DEFAULT_STROKE, 1)
        assert strokes["B"] == (SELECTED_STROKE, 3)

    def test_precipitation_icons(self, processor: ChoroplethProcessor) -> None:
        features = [feature("A", square(35, 5)), feature("B", square(38, 8)), feature("C", square(41, 11))]
        records = [weather("A", **{PRECIPITATION: 1.0}), weather("B", **{PRECIPITATION: 3.0})]
        choropleth = processor.build(features, records, MapLevel.REGION, PRECIPITATION, "#2563eb", 5,
                                     show_icons=True)
        by_code = {f.code: f for f in choropleth.features}
        assert by_code["A"].fill == ICON_BACKGROUND
        assert by_code["A"].icon.radius == 8
        assert by_code["B"].icon.radius == 24
        assert (by_code["A"].icon.x, by_code["A"].icon.y) == pytest.approx(processor.projector.project_point(35.4, 5.4))
        assert by_code["C"].icon is None
        assert by_code["C"].fill == ICON_BACKGROUND
        assert choropleth.legend == []

    def test_no_parseable_values_has_no_legend(self, processor: ChoroplethProcessor) -> None:
        choropleth = processor.build([feature("A", square(35, 5))], [weather("A", **{MAX_TEMP: "N/A"})],
                                     MapLevel.REGION, MAX_TEMP, "#dc2626", 5)
        assert choropleth.features[0].fill == FALLBACK_COLOR
        assert choropleth.legend == []
        assert 'class="legend"' not in processor.to_svg(choropleth)

    def test_to_dict(self, processor: ChoroplethProcessor) -> None:
        choropleth = processor.build([feature("A", square(35, 5))], [weather("A", **{MAX_TEMP: 1.0})],
                                     MapLevel.REGION, MAX_TEMP, "#dc2626", 5, layer="weather")
        data = choropleth.to_dict()
        assert data["layer"] == "weather"
        assert data["width"] == 800
        assert data["features"][0]["code"] == "A"
        assert data["viewport"] == {"zoom": 1.0, "pan_x": 0.0, "pan_y": 0.0}


class TestMarkers:
    def test_stations_and_lands(self, processor: ChoroplethProcessor) -> None:
        choropleth = processor.build([], [], MapLevel.REGION, None, "#dc2626", 5)
        stations = [StationRecord(id=1, geometry={"type": "Point", "coordinates": [32.5, 15.0]}),
                    StationRecord(id=2, geometry=None)]
        lands = [AgricultureLandRecord(id=7, name="Bahir Dar Farm",
                                       geometry={"type": "Point", "coordinates": [37.39, 11.59]})]
        processor.add_markers(choropleth, stations, lands)

        assert [(m.kind, m.id) for m in choropleth.markers] == [("station", 1), ("agriculture_land", 7)]
        assert (choropleth.markers[0].x, choropleth.markers[0].y) == (0, 0)
        assert choropleth.markers[1].label == "Bahir Dar Farm"


class TestViewport:
    def test_zoom_clamped(self) -> None:
        viewport = ViewportTransform()
        assert viewport.zoomed(10).zoom == 5
        assert viewport.zoomed(-10).zoom == 0.5

    def test_pan_and_reset(self) -> None:
        viewport = ViewportTransform(zoom=2).panned(15, -20)
        assert viewport.svg_transform == "translate(15 -20) scale(2)"
        assert viewport.reset() == ViewportTransform()


class TestToSvg:
    def test_one_path_per_drawable_feature(self, processor: ChoroplethProcessor) -> None:
        features = [feature("A", square(35, 5)), feature("B", {"type": "Point", "coordinates": [38, 9]}),
                    feature("C", square(41, 11))]
        records = [weather("A", **{MAX_TEMP: 10.0}), weather("C", **{MAX_TEMP: 30.0})]
        choropleth = processor.build(features, records, MapLevel.REGION, MAX_TEMP, "#dc2626", 5,
                                     viewport=ViewportTransform(zoom=1.5, pan_x=10, pan_y=5))
        svg = processor.to_svg(choropleth)

        assert svg.startswith("<svg ")
        assert svg.endswith("</svg>")
        assert svg.count("<path ") == 2
        assert 'transform="translate(10 5) scale(1.5)"' in svg
        assert 'data-code="A"' in svg
        assert 'class="legend"' in svg
        assert svg.count("<rect ") == 5

    def test_labels_escaped(self, processor: ChoroplethProcessor) -> None:
        choropleth = processor.build([feature("A", square(35, 5), "Gambela & <Benishangul>")], [],
                                     MapLevel.REGION, None, "#dc2626", 5)
        svg = processor.to_svg(choropleth)
        assert "Gambela &amp; &lt;Benishangul&gt;" in svg
        assert 'class="legend"' not in svg
