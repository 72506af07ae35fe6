"""Keystroke-level handling of numeric form inputs.

Each numeric input keeps a *display string* (what the user typed) separate
from the value written to FormValue. A keystroke always updates the display
string; the form value is only written when the sanitized text parses to a
valid non-negative number, so invalid text never lands in the form.
"""

import math
import re

from listings.models import MAX_NUMERIC_VALUE, FormValue

_NON_NUMERIC = re.compile(r"[^\d.]")


def sanitize_numeric(raw: str | None) -> float | None:
    """Parse user input into a non-negative number.

    Strips every character other than digits and ``.``, then keeps only the
    first decimal separator ("1.2.3" reads as 1.23).

    Args:
        raw: Text as typed

    Returns:
        The parsed value, or None if nothing numeric remains.
    """
    if raw is None:
        return None

    sanitized = _NON_NUMERIC.sub("", str(raw))
    head, sep, tail = sanitized.partition(".")
    cleaned = head + sep + tail.replace(".", "")

    if not cleaned or cleaned == ".":
        return None

    try:
        value = float(cleaned)
    except ValueError:
        return None

    if math.isnan(value) or value < 0:
        return None
    return value


def trim_decimal(value: float) -> str:
    """Format to 2 decimals and drop trailing zeros ("12.50" -> "12.5")."""
    text = f"{value:.2f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


class NumericFieldInputs:
    """Display strings for a fixed group of numeric FormValue fields.

    Subclasses set ``FIELDS`` and may override the conversion hooks.
    """

    FIELDS: tuple[str, ...] = ()

    def __init__(self, form: FormValue) -> None:
        self.form = form
        self.display: dict[str, str] = {name: "" for name in self.FIELDS}
        self.refresh()

    def _check_field(self, field: str) -> None:
        if field not in self.FIELDS:
            raise KeyError(f"{field} is not handled by {type(self).__name__}")

    # Conversion hooks

    def parse(self, field: str, value: float) -> float:
        """Turn a sanitized display number into the value to store."""
        return value

    def format(self, field: str, stored: float) -> str:
        """Turn a stored value into its display string."""
        return trim_decimal(stored)

    # Operations

    def refresh(self) -> None:
        """Recompute every display string from the stored form values."""
        for name in self.FIELDS:
            stored = getattr(self.form, name)
            self.display[name] = self._format_stored(name, stored)

    def input(self, field: str, raw: str) -> bool:
        """Handle a keystroke for ``field``.

        Returns:
            True if the form value was written, False if the text did not
            parse and only the display string changed.
        """
        self._check_field(field)
        self.display[field] = raw

        value = sanitize_numeric(raw)
        if value is None:
            return False

        setattr(self.form, field, self.parse(field, value))
        return True

    def blur(self, field: str) -> str:
        """Normalize the display string from the stored value on focus loss."""
        self._check_field(field)
        stored = getattr(self.form, field)
        formatted = self._format_stored(field, stored)
        # Empty or zero values keep whatever the user left in the box
        if formatted:
            self.display[field] = formatted
        return self.display[field]

    def _format_stored(self, field: str, stored: object) -> str:
        if isinstance(stored, bool) or not isinstance(stored, (int, float)):
            return ""
        if not stored or math.isnan(stored):
            return ""
        return self.format(field, float(stored))


class PricingInputs(NumericFieldInputs):
    """Pricing inputs: percentages clamp to 100, money to the column limit."""

    FIELDS = (
        "price_per_hour",
        "price_per_day",
        "minimum_hours",
        "discount_weekly",
        "discount_monthly",
    )
    PERCENT_FIELDS = frozenset({"discount_weekly", "discount_monthly"})
    INTEGER_FIELDS = frozenset({"minimum_hours"})

    def parse(self, field: str, value: float) -> float:
        if field in self.PERCENT_FIELDS:
            return min(value, 100.0)
        return min(value, MAX_NUMERIC_VALUE)

    def format(self, field: str, stored: float) -> str:
        if field in self.INTEGER_FIELDS:
            return str(round(stored))
        return trim_decimal(stored)
