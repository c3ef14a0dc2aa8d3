"""Date utilities for the search form and CLI input"""

import datetime
from typing import Optional

from dateutil.parser import parse as parse_date

# Monday-first, indexed by ISO weekday - 1
WEEKDAY_ABBREVIATIONS = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")


def weekday_abbreviation(day: datetime.date) -> str:
    """
    Two-letter weekday used by the search form's display text.

    Built from the ISO weekday rather than ``strftime("%a")`` so the
    result does not depend on the process locale.
    """
    return WEEKDAY_ABBREVIATIONS[day.isoweekday() - 1]


def format_form_date(day: datetime.date) -> str:
    """Machine-readable form value, e.g. 20251217"""
    return f"{day.year:04d}{day.month:02d}{day.day:02d}"


def format_display_date(day: datetime.date) -> str:
    """Human-readable form value, e.g. 12/17/2025 (WE)"""
    return f"{day.month:02d}/{day.day:02d}/{day.year:04d} ({weekday_abbreviation(day)})"


def parse_travel_date(date_spec: str) -> datetime.date:
    """
    Parse a travel date given on the command line.

    Args:
        date_spec: A date in YYYY-MM-DD format

    Returns:
        The parsed date

    Raises:
        ValueError: If the date cannot be parsed
    """
    try:
        return parse_date(date_spec, yearfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid date '{date_spec}': {str(e)}")


def parse_optional_date(date_spec: Optional[str]) -> Optional[datetime.date]:
    if not date_spec:
        return None
    return parse_travel_date(date_spec)
