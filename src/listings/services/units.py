"""Metric/imperial display conversion for dimension fields.

Dimensions are stored in imperial units (sq ft for area, ft for lengths).
The unit preference only changes the display strings; toggling it never
touches the stored values.
"""

from listings.models import DIMENSION_FIELDS, FormValue, UnitPreference

from .inputs import NumericFieldInputs

SQFT_TO_SQM = 0.092903
FT_TO_M = 0.3048

AREA_FIELDS = frozenset({"size_sqft"})

UNIT_LABELS: dict[UnitPreference, dict[str, str]] = {
    UnitPreference.METRIC: {"area": "m²", "length": "m"},
    UnitPreference.IMPERIAL: {"area": "sq ft", "length": "ft"},
}


def _factor(field: str) -> float:
    if field not in DIMENSION_FIELDS:
        raise KeyError(f"{field} is not a dimension field")
    return SQFT_TO_SQM if field in AREA_FIELDS else FT_TO_M


def to_display(field: str, canonical: float, preference: UnitPreference | str) -> float:
    """Convert a stored imperial value to the preferred unit system."""
    if UnitPreference(preference) is UnitPreference.METRIC:
        return canonical * _factor(field)
    return canonical


def to_canonical(field: str, displayed: float, preference: UnitPreference | str) -> float:
    """Convert a value typed in the preferred unit system to imperial."""
    if UnitPreference(preference) is UnitPreference.METRIC:
        return displayed / _factor(field)
    return displayed


def format_display(field: str, canonical: float, preference: UnitPreference | str) -> str:
    """Display string for a stored value, fixed to 2 decimals."""
    return f"{to_display(field, canonical, preference):.2f}"


def unit_label(field: str, preference: UnitPreference | str) -> str:
    """Unit suffix shown next to a dimension input."""
    kind = "area" if field in AREA_FIELDS else "length"
    return UNIT_LABELS[UnitPreference(preference)][kind]


class DimensionInputs(NumericFieldInputs):
    """Display state for the four dimension inputs of one wizard."""

    FIELDS = DIMENSION_FIELDS

    @property
    def preference(self) -> UnitPreference:
        return UnitPreference(self.form.unit_preference)

    @property
    def labels(self) -> dict[str, str]:
        """Unit suffix for each dimension input in the current unit system."""
        return {field: unit_label(field, self.preference) for field in self.FIELDS}

    def parse(self, field: str, value: float) -> float:
        return to_canonical(field, value, self.preference)

    def format(self, field: str, stored: float) -> str:
        return format_display(field, stored, self.preference)

    def set_preference(self, preference: UnitPreference | str) -> None:
        """Switch the display unit system and recompute display strings."""
        self.form.unit_preference = UnitPreference(preference)
        self.refresh()

    def toggle(self) -> UnitPreference:
        """Flip between metric and imperial display."""
        new = (
            UnitPreference.IMPERIAL
            if self.preference is UnitPreference.METRIC
            else UnitPreference.METRIC
        )
        self.set_preference(new)
        return new
