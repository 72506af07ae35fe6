"""Availability calendar for a listing draft.

Dates follow ``default_availability`` unless they have an override. The
override list holds at most one entry per date (a later edit replaces the
earlier one) and is kept sorted by date.
"""

import datetime as dt
from collections.abc import Iterable

from listings.models import AvailabilityAction, AvailabilityOverride, FormValue


class AvailabilityCalendar:
    """Edits the availability fields of one FormValue."""

    def __init__(self, form: FormValue) -> None:
        self.form = form

    def _index(self) -> dict[dt.date, AvailabilityOverride]:
        return {override.date: override for override in self.form.availability}

    def _store(self, overrides: dict[dt.date, AvailabilityOverride]) -> None:
        self.form.availability = [overrides[d] for d in sorted(overrides)]

    def apply(
        self,
        dates: Iterable[dt.date],
        action: AvailabilityAction | str,
        special_price: float | None = None,
    ) -> list[AvailabilityOverride]:
        """Apply a calendar action to the selected dates.

        Args:
            dates: Selected dates (duplicates collapse)
            action: block, unblock, or price
            special_price: Price for the "price" action; ignored otherwise

        Returns:
            The overrides written, in date order.

        Raises:
            ValueError: If special_price is negative for the "price" action
        """
        action = AvailabilityAction(action)
        if action is AvailabilityAction.PRICE and special_price is not None and special_price < 0:
            raise ValueError("Special price must be 0 or more")

        overrides = self._index()
        written: dict[dt.date, AvailabilityOverride] = {}
        for date in dates:
            entry = AvailabilityOverride(
                date=date,
                is_available=action is not AvailabilityAction.BLOCK,
                # A zero price means "no special price"
                special_price=(special_price or None) if action is AvailabilityAction.PRICE else None,
            )
            overrides[entry.date] = entry
            written[entry.date] = entry

        self._store(overrides)
        return [written[d] for d in sorted(written)]

    def remove(self, date: dt.date) -> bool:
        """Drop the override for ``date``; returns False if there was none."""
        overrides = self._index()
        if date not in overrides:
            return False
        del overrides[date]
        self._store(overrides)
        return True

    def reset(self) -> None:
        """Clear every override and make dates available by default."""
        self.form.availability = []
        self.form.default_availability = True

    def set_default(self, available: bool) -> None:
        self.form.default_availability = available

    def get(self, date: dt.date) -> AvailabilityOverride | None:
        return self._index().get(date)

    def is_blocked(self, date: dt.date) -> bool:
        override = self.get(date)
        if override is not None:
            return not override.is_available
        return not self.form.default_availability

    def special_price(self, date: dt.date) -> float | None:
        override = self.get(date)
        return override.special_price if override else None
