"""Tests for active layer resolution and parameter defaults."""

import pytest

from agri_dashboard.visualization.layers import (
    LAYER_PRIORITY,
    DataLayer,
    ViewPreferences,
    resolve_active_layer,
    resolve_parameter,
)

ALL_RECORDS = {layer: [object()] for layer in DataLayer}


class TestResolveActiveLayer:
    def test_priority_order(self) -> None:
        assert LAYER_PRIORITY == [DataLayer.PEST, DataLayer.CROP, DataLayer.LAND, DataLayer.WEATHER]

    def test_pest_beats_everything(self) -> None:
        preferences = ViewPreferences(enabled_layers=set(DataLayer))
        assert resolve_active_layer(preferences, ALL_RECORDS) == DataLayer.PEST

    def test_crop_beats_land(self) -> None:
        preferences = ViewPreferences(enabled_layers={DataLayer.LAND, DataLayer.CROP, DataLayer.WEATHER})
        assert resolve_active_layer(preferences, ALL_RECORDS) == DataLayer.CROP

    def test_land_beats_weather(self) -> None:
        preferences = ViewPreferences(enabled_layers={DataLayer.LAND, DataLayer.WEATHER})
        assert resolve_active_layer(preferences, ALL_RECORDS) == DataLayer.LAND

    def test_default_is_weather(self) -> None:
        assert resolve_active_layer(ViewPreferences(), ALL_RECORDS) == DataLayer.WEATHER

    def test_layer_without_records_is_skipped(self) -> None:
        preferences = ViewPreferences(enabled_layers={DataLayer.PEST, DataLayer.LAND})
        records = {DataLayer.PEST: [], DataLayer.LAND: [object()]}
        assert resolve_active_layer(preferences, records) == DataLayer.LAND

    def test_nothing_enabled(self) -> None:
        assert resolve_active_layer(ViewPreferences(enabled_layers=set()), ALL_RECORDS) is None

    def test_no_records(self) -> None:
        assert resolve_active_layer(ViewPreferences(enabled_layers=set(DataLayer)), {}) is None

    def test_toggles_are_independent(self) -> None:
        preferences = ViewPreferences(show_stations=True, show_precipitation_icons=True)
        assert not preferences.show_agriculture_lands
        assert preferences.enabled_layers == {DataLayer.WEATHER}


class TestResolveParameter:
    @pytest.mark.parametrize("layer, expected", [
        (DataLayer.WEATHER, "avg_annual_max_temperature_c"),
        (DataLayer.LAND, "total_agri_land"),
        (DataLayer.CROP, "teff_production_mt"),
        (DataLayer.PEST, "pest_incidence"),
    ])
    def test_defaults(self, layer, expected) -> None:
        assert resolve_parameter(layer) == expected

    def test_weather_aliases(self) -> None:
        assert resolve_parameter(DataLayer.WEATHER, "precipitation") == "avg_annual_precipitation_mm_day"
        assert resolve_parameter(DataLayer.WEATHER, "min_temp") == "avg_annual_min_temperature_c"

    def test_explicit_column_passes_through(self) -> None:
        assert resolve_parameter(DataLayer.LAND, "plowed_area") == "plowed_area"
