"""Unit tests for metric/imperial dimension display."""

import pytest

from listings.models import FormValue, UnitPreference
from listings.services.units import (
    DimensionInputs,
    format_display,
    to_canonical,
    to_display,
    unit_label,
)


class TestConversion:
    """Tests for the pure conversion helpers."""

    def test_area_to_metric(self) -> None:
        assert format_display("size_sqft", 1000, UnitPreference.METRIC) == "92.90"

    def test_length_to_metric(self) -> None:
        assert format_display("length_ft", 10, "metric") == "3.05"

    def test_imperial_is_identity(self) -> None:
        assert to_display("width_ft", 12.5, UnitPreference.IMPERIAL) == 12.5
        assert to_canonical("width_ft", 12.5, UnitPreference.IMPERIAL) == 12.5

    @pytest.mark.parametrize("field", ["size_sqft", "length_ft", "width_ft", "ceiling_height_ft"])
    @pytest.mark.parametrize("stored", [0.01, 1.0, 12.5, 123.45, 1000.0, 99_999_999.99])
    def test_stored_value_survives_metric_round_trip(self, field: str, stored: float) -> None:
        """Stored feet -> metric display -> feet stays within 0.01."""
        displayed = to_display(field, stored, "metric")

        back = to_canonical(field, displayed, "metric")

        assert abs(back - stored) < 0.01

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(KeyError):
            to_display("price_per_hour", 10, "metric")

    def test_labels(self) -> None:
        assert unit_label("size_sqft", "metric") == "m²"
        assert unit_label("size_sqft", "imperial") == "sq ft"
        assert unit_label("length_ft", "metric") == "m"
        assert unit_label("ceiling_height_ft", "imperial") == "ft"


class TestDimensionInputs:
    """Tests for the per-wizard dimension display state."""

    def test_display_follows_preference(self) -> None:
        # Arrange
        form = FormValue(size_sqft=1000)
        inputs = DimensionInputs(form)

        # Assert - metric by default
        assert inputs.display["size_sqft"] == "92.90"

        # Act - toggle to imperial
        assert inputs.toggle() is UnitPreference.IMPERIAL
        assert inputs.display["size_sqft"] == "1000.00"

        # Act - toggle back
        inputs.toggle()
        assert inputs.display["size_sqft"] == "92.90"

    def test_toggle_and_blur_never_change_stored_values(self) -> None:
        """Only typing writes dimensions; switching units and leaving a box do not."""
        # Arrange
        form = FormValue(size_sqft=1000.0, length_ft=40.0, width_ft=25.0, ceiling_height_ft=12.0)
        inputs = DimensionInputs(form)
        before = {f: getattr(form, f) for f in inputs.FIELDS}

        # Act
        for _ in range(3):
            inputs.toggle()
            for field in inputs.FIELDS:
                inputs.blur(field)

        # Assert
        assert inputs.preference is UnitPreference.IMPERIAL
        assert {f: getattr(form, f) for f in inputs.FIELDS} == before
        assert inputs.display["size_sqft"] == "1000.00"

    def test_metric_input_is_stored_in_feet(self) -> None:
        form = FormValue()
        inputs = DimensionInputs(form)

        written = inputs.input("length_ft", "3.048")

        assert written is True
        assert form.length_ft == pytest.approx(10.0)
        assert inputs.display["length_ft"] == "3.048"

    def test_blur_normalizes_display(self) -> None:
        form = FormValue()
        inputs = DimensionInputs(form)
        inputs.input("size_sqft", "50")

        assert inputs.blur("size_sqft") == "50.00"

    def test_unparseable_input_keeps_form_value(self) -> None:
        form = FormValue(size_sqft=1000)
        inputs = DimensionInputs(form)

        written = inputs.input("size_sqft", "abc")

        assert written is False
        assert form.size_sqft == 1000
        assert inputs.display["size_sqft"] == "abc"

    def test_empty_fields_display_blank(self) -> None:
        inputs = DimensionInputs(FormValue())
        assert inputs.display == {
            "size_sqft": "",
            "length_ft": "",
            "width_ft": "",
            "ceiling_height_ft": "",
        }

    def test_labels_follow_preference(self) -> None:
        inputs = DimensionInputs(FormValue())
        assert inputs.labels["size_sqft"] == "m²"
        assert inputs.labels["width_ft"] == "m"

        inputs.toggle()

        assert inputs.labels == {
            "size_sqft": "sq ft",
            "length_ft": "ft",
            "width_ft": "ft",
            "ceiling_height_ft": "ft",
        }
