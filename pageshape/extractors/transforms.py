"""Best-effort value normalisation for extracted field text.

Every transform takes the cleaned text of one DOM node and returns a typed
value, or ``None`` when the text cannot be interpreted.  Transforms never
return ``0`` or ``NaN`` as a stand-in for "unparsable" and never raise.
"""

from __future__ import annotations

import html as html_lib
import logging
import re
from typing import Any

import dateparser

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\ufeff]")
_SINGLE_QUOTES_RE = re.compile("[\u2018\u2019]")
_DOUBLE_QUOTES_RE = re.compile("[\u201c\u201d]")

_PRICE_RE = re.compile(r"\d(?:[\d.,]*\d)?")
_COUNT_RE = re.compile(
    r"(\d[\d,]*(?:\.\d+)?)\s*(thousand|million|billion|k|m|b)?\b",
    re.IGNORECASE,
)
_DECIMAL_RE = re.compile(r"\d+(?:\.\d+)?")
_RATING_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:/|out of|of)?\s*(\d+(?:\.\d+)?)?")

_ISO_DURATION_RE = re.compile(
    r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)
_HOURS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:h|hr|hrs|hour|hours)\b", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+)\s*(?:m|min|mins|minute|minutes)\b", re.IGNORECASE)
_INTEGER_RE = re.compile(r"\d+")

_MULTIPLIERS: dict[str, int] = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "million": 1_000_000,
    "b": 1_000_000_000,
    "billion": 1_000_000_000,
}

_TRUE_WORDS = frozenset({"true", "yes", "1", "available", "in stock"})
_FALSE_WORDS = frozenset({"false", "no", "0", "unavailable", "out of stock"})

# Absolute dates only: relative phrases ("3 days ago") would make the
# result depend on the wall clock.
_DATE_SETTINGS: dict[str, Any] = {
    "TIMEZONE": "UTC",
    "TO_TIMEZONE": "UTC",
    "RETURN_AS_TIMEZONE_AWARE": True,
    "PREFER_DAY_OF_MONTH": "first",
    "REQUIRE_PARTS": ["month", "year"],
    "PARSERS": ["custom-formats", "absolute-time"],
}
_MIN_YEAR = 1900
_MAX_YEAR = 2100


def clean_text(text: str | None) -> str:
    """Unescape entities, drop zero-width characters and collapse whitespace."""
    if not text:
        return ""
    text = html_lib.unescape(text)
    text = _ZERO_WIDTH_RE.sub("", text)
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse_price(text: str | None) -> float | None:
    """Parse a money amount: ``"$1,299.99"`` → 1299.99, ``"19,99 €"`` → 19.99.

    Currency symbols and thousands separators are stripped.  A trailing comma
    followed by exactly two digits is read as a decimal comma.  For ranges
    (``"$10 - $20"``) the first amount wins.
    """
    if not text:
        return None
    match = _PRICE_RE.search(text)
    if not match:
        return None
    number = match.group(0)
    if "," in number and "." in number:
        if number.rfind(",") > number.rfind("."):
            number = number.replace(".", "").replace(",", ".")
        else:
            number = number.replace(",", "")
    elif "," in number:
        head, _, tail = number.rpartition(",")
        number = f"{head.replace(',', '')}.{tail}" if len(tail) == 2 else number.replace(",", "")
    try:
        return float(number)
    except ValueError:
        return None


def parse_count(text: str | None) -> int | None:
    """Parse a count with optional magnitude suffix.

    ``"1.2k"`` → 1200, ``"3M"`` → 3000000, ``"2.5 billion"`` → 2500000000,
    ``"1,234 views"`` → 1234.  Suffixes are case-insensitive.
    """
    if not text:
        return None
    match = _COUNT_RE.search(text)
    if not match:
        return None
    try:
        value = float(match.group(1).replace(",", ""))
    except ValueError:
        return None
    suffix = (match.group(2) or "").lower()
    return int(round(value * _MULTIPLIERS.get(suffix, 1)))


def parse_decimal(text: str | None) -> float | None:
    """First decimal number in *text*: ``"4.5 stars"`` → 4.5."""
    if not text:
        return None
    match = _DECIMAL_RE.search(text.replace(",", ""))
    return float(match.group(0)) if match else None


def parse_rating(text: str | None) -> float | None:
    """Parse ``"4.5/5"`` or ``"4 out of 5"``; ratings above the scale are rejected."""
    if not text:
        return None
    match = _RATING_RE.search(text)
    if not match:
        return None
    rating = float(match.group(1))
    scale = float(match.group(2)) if match.group(2) else 5.0
    return rating if rating <= scale else None


def parse_minutes(text: str | None) -> int | None:
    """Duration in minutes from ISO-8601 (``PT1H30M``) or prose (``1 hr 30 mins``)."""
    if not text:
        return None
    stripped = text.strip()
    iso = _ISO_DURATION_RE.match(stripped)
    if iso and any(iso.groups()):
        days, hours, minutes = (int(g) if g else 0 for g in iso.groups()[:3])
        seconds = float(iso.group(4) or 0)
        return days * 1440 + hours * 60 + minutes + int(seconds // 60)

    hours_match = _HOURS_RE.search(stripped)
    minutes_match = _MINUTES_RE.search(stripped)
    if hours_match or minutes_match:
        total = 0.0
        if hours_match:
            total += float(hours_match.group(1)) * 60
        if minutes_match:
            total += int(minutes_match.group(1))
        return int(round(total))

    integer = _INTEGER_RE.search(stripped)
    return int(integer.group(0)) if integer else None


def parse_date(text: str | None) -> str | None:
    """Normalise a date to an ISO-8601 UTC timestamp string.

    Returns None for unparsable input, relative phrases, dates without a
    month and year, and years outside 1900-2100.
    """
    if not text:
        return None
    raw = _WHITESPACE_RE.sub(" ", text.strip())
    parsed = None
    try:
        parsed = dateparser.parse(raw, settings=_DATE_SETTINGS)
        if parsed is None:
            from dateparser.search import search_dates

            found = search_dates(raw, settings=_DATE_SETTINGS)
            if found:
                parsed = found[0][1]
    except Exception as exc:
        logger.debug("Date parse failed for %r: %s", raw, exc)
        return None
    if parsed is None or not (_MIN_YEAR <= parsed.year <= _MAX_YEAR):
        return None
    return parsed.isoformat()


def parse_boolean(text: str | None) -> bool | None:
    """Map ``yes``/``in stock``/``available`` and friends to a bool."""
    if not text:
        return None
    lower = text.lower().strip()
    if lower in _TRUE_WORDS:
        return True
    if lower in _FALSE_WORDS:
        return False
    return None


def as_flag(text: str | None) -> bool | None:
    """True for any accepted text; pairs with a ``contains`` filter."""
    return True if text else None

