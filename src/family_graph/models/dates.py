"""Genealogical dates with flexible precision (GEDCOM 5.5 style).

Supports year-only, month-year and full dates, the approximate qualifiers
(ABT, CAL, EST, BEF, AFT) and the two range forms (BET .. AND .., FROM .. TO ..).
"""
from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


class DateQualifier(str, Enum):
    """Precision qualifier for a genealogical date."""
    EXACT = "exact"
    ABOUT = "abt"
    CALCULATED = "cal"
    ESTIMATED = "est"
    BEFORE = "bef"
    AFTER = "aft"
    BETWEEN = "bet"
    FROM = "from"


MONTHS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}
MONTH_NAMES = {number: name for name, number in MONTHS.items()}

# Longer spellings must be tried before their abbreviations share a prefix
_PREFIXES: list[tuple[str, DateQualifier]] = [
    ("ABOUT ", DateQualifier.ABOUT),
    ("ABT ", DateQualifier.ABOUT),
    ("CAL ", DateQualifier.CALCULATED),
    ("EST ", DateQualifier.ESTIMATED),
    ("BEFORE ", DateQualifier.BEFORE),
    ("BEF ", DateQualifier.BEFORE),
    ("AFTER ", DateQualifier.AFTER),
    ("AFT ", DateQualifier.AFTER),
    ("BET ", DateQualifier.BETWEEN),
    ("FROM ", DateQualifier.FROM),
]

_SIMPLE_PREFIX = {
    DateQualifier.ABOUT: "ABT ",
    DateQualifier.CALCULATED: "CAL ",
    DateQualifier.ESTIMATED: "EST ",
    DateQualifier.BEFORE: "BEF ",
    DateQualifier.AFTER: "AFT ",
}


class GenDate(BaseModel):
    """A genealogical date as recorded, plus whatever components parsed."""

    raw: str = ""
    qualifier: DateQualifier = DateQualifier.EXACT
    year: int | None = None
    month: int | None = None
    day: int | None = None

    # End of range for BET/FROM dates
    year2: int | None = None
    month2: int | None = None
    day2: int | None = None

    calendar: str = Field(default="DGREGORIAN")

    def __str__(self) -> str:
        return self.raw or self.format()

    def is_empty(self) -> bool:
        return self.year is None and self.month is None and self.day is None

    def format(self) -> str:
        """Render the parsed components back to GEDCOM text."""
        if self.year is None:
            return ""
        start = _format_simple(self.year, self.month, self.day)
        if self.qualifier == DateQualifier.BETWEEN:
            return f"BET {start} AND {_format_simple(self.year2, self.month2, self.day2)}"
        if self.qualifier == DateQualifier.FROM:
            return f"FROM {start} TO {_format_simple(self.year2, self.month2, self.day2)}"
        return _SIMPLE_PREFIX.get(self.qualifier, "") + start

    def sort_key(self) -> date | None:
        """Earliest calendar date this value can denote, for ordering."""
        if self.year is None:
            return None
        try:
            return date(self.year, self.month or 1, self.day or 1)
        except ValueError:
            return date(self.year, 1, 1)

    def validate(self) -> None:
        """Raise ValueError when a month or day component is out of range."""
        for label, value, upper in (
            ("month", self.month, 12),
            ("day", self.day, 31),
            ("month2", self.month2, 12),
            ("day2", self.day2, 31),
        ):
            if value is not None and not 1 <= value <= upper:
                raise ValueError(f"invalid {label}: {value}")


def parse_gen_date(text: str | None) -> GenDate:
    """Parse GEDCOM-style date text.

    Components that cannot be read are left unset; parsing never fails.
    """
    text = (text or "").strip()
    if not text:
        return GenDate()

    result = GenDate(raw=text)
    body = text.upper()

    for prefix, qualifier in _PREFIXES:
        if body.startswith(prefix):
            result.qualifier = qualifier
            body = body[len(prefix):]
            break

    separator = {DateQualifier.BETWEEN: " AND ", DateQualifier.FROM: " TO "}.get(result.qualifier)
    if separator and separator in body:
        first, second = body.split(separator, 1)
        result.year, result.month, result.day = _parse_simple(first)
        result.year2, result.month2, result.day2 = _parse_simple(second)
        return result

    result.year, result.month, result.day = _parse_simple(body)
    return result


def _parse_simple(text: str) -> tuple[int | None, int | None, int | None]:
    """Parse "1850", "JAN 1850" or "1 JAN 1850"."""
    parts = text.split()
    year = month = day = None

    if len(parts) == 1:
        year = _to_int(parts[0])
    elif len(parts) == 2:
        month = MONTHS.get(parts[0])
        if month is not None:
            year = _to_int(parts[1])
    elif len(parts) == 3:
        day = _to_int(parts[0])
        month = MONTHS.get(parts[1])
        year = _to_int(parts[2])

    return year, month, day


def _to_int(token: str) -> int | None:
    # isdigit() also accepts superscripts and other digits int() rejects
    if not token.isdecimal():
        return None
    try:
        return int(token)
    except ValueError:
        return None


def _format_simple(year: int | None, month: int | None, day: int | None) -> str:
    if year is None:
        return ""
    parts: list[str] = []
    if day is not None:
        parts.append(str(day))
    if month in MONTH_NAMES:
        parts.append(MONTH_NAMES[month])
    parts.append(str(year))
    return " ".join(parts)
