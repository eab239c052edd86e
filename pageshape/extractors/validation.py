"""Acceptance checks for extracted field values.

Kept separate from :mod:`pageshape.extractors.transforms`: transforms turn
text into typed values, validation decides whether those values are usable.
A failing field is flagged, never dropped; its best-effort cleaned value
stays in the output.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from pageshape.extractors.transforms import parse_date

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ARTIFACTS: tuple[str, ...] = ("undefined", "null", "nan", "\\n", "\\t", "&nbsp;")


@dataclass(frozen=True)
class FieldValidation:
    """Validation rule for one field.

    For list values ``min_length``/``max_length`` count items, and an
    over-long list is truncated to its first ``max_length`` items.
    """

    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | None = None
    validator: Callable[[Any], bool] | None = None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    cleaned: Any
    error: str | None = None


@dataclass(frozen=True)
class RecordValidation:
    valid: bool
    cleaned: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def _validate_list(value: list[Any], rule: FieldValidation) -> ValidationResult:
    if rule.min_length is not None and len(value) < rule.min_length:
        return ValidationResult(
            False, value, f"Too few items (min: {rule.min_length})",
        )
    if rule.max_length is not None and len(value) > rule.max_length:
        return ValidationResult(
            False, value[: rule.max_length], f"Too many items (max: {rule.max_length})",
        )
    if rule.pattern is not None:
        bad = [item for item in value if not rule.pattern.search(str(item))]
        if bad:
            return ValidationResult(False, value, "Value does not match required pattern")
    return ValidationResult(True, value)


def validate_field(value: Any, rule: FieldValidation | None) -> ValidationResult:
    """Check *value* against *rule*; a missing rule accepts anything."""
    if rule is None:
        return ValidationResult(True, value)

    if _is_missing(value):
        if rule.required:
            return ValidationResult(False, None, "Required field is missing")
        return ValidationResult(True, None if isinstance(value, str) else value)

    if isinstance(value, (list, tuple)):
        result = _validate_list(list(value), rule)
    else:
        text = value.strip() if isinstance(value, str) else str(value)
        cleaned: Any = text if isinstance(value, str) else value
        if rule.min_length is not None and len(text) < rule.min_length:
            return ValidationResult(
                False, cleaned, f"Value too short (min: {rule.min_length})",
            )
        if rule.max_length is not None and len(text) > rule.max_length:
            truncated = text[: rule.max_length]
            return ValidationResult(
                False,
                truncated if isinstance(value, str) else value,
                f"Value too long (max: {rule.max_length})",
            )
        if rule.pattern is not None and not rule.pattern.search(text):
            return ValidationResult(False, cleaned, "Value does not match required pattern")
        result = ValidationResult(True, cleaned)

    if not result.valid:
        return result

    if rule.validator is not None:
        try:
            accepted = bool(rule.validator(result.cleaned))
        except Exception as exc:
            logger.debug("Custom validator raised for %r: %s", result.cleaned, exc)
            accepted = False
        if not accepted:
            return ValidationResult(False, result.cleaned, "Custom validation failed")

    return result


def validate_record(
    fields: Mapping[str, Any],
    rules: Mapping[str, FieldValidation],
) -> RecordValidation:
    """Validate every field of a record.

    The cleaned map keeps every input field plus any ruled field that was
    absent (as ``None``).  ``valid`` is False when any single field fails.
    """
    cleaned: dict[str, Any] = {}
    errors: dict[str, str] = {}

    for name, value in fields.items():
        result = validate_field(value, rules.get(name))
        cleaned[name] = result.cleaned
        if not result.valid:
            errors[name] = result.error or "Validation failed"

    for name, rule in rules.items():
        if name in fields:
            continue
        cleaned[name] = None
        if rule.required:
            errors[name] = "Required field is missing"

    return RecordValidation(valid=not errors, cleaned=cleaned, errors=errors)


# ---------------------------------------------------------------------------
# Reusable validators (for FieldValidation.validator)
# ---------------------------------------------------------------------------

def is_url(value: Any) -> bool:
    parsed = urlparse(str(value))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_email(value: Any) -> bool:
    return bool(_EMAIL_RE.match(str(value)))


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number)


def is_date(value: Any) -> bool:
    return parse_date(str(value)) is not None


def has_min_words(min_words: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return len(str(value).split()) >= min_words

    return check


def is_clean(value: Any) -> bool:
    """False when the text carries common extraction artifacts."""
    lower = str(value).lower()
    return not any(artifact in lower for artifact in _ARTIFACTS)
