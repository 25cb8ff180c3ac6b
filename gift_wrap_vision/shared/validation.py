"""Input validation helpers shared by the calculator and the console surface."""

from __future__ import annotations

import math

from .errors import InvalidInput


def parse_float(value: object, field_name: str, *, minimum: float | None = None) -> float:
    """Parse ``value`` into a finite ``float`` ensuring it meets ``minimum`` if provided.

    Strings coming from form fields are accepted as long as they hold a number.
    ``None``, empty strings and booleans count as missing or non-numeric.
    """

    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{field_name} is required")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidInput(f"{field_name} is required")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{field_name} must be a number") from exc
    if not math.isfinite(number):
        raise InvalidInput(f"{field_name} must be a finite number")
    if minimum is not None and number < minimum:
        raise InvalidInput(f"{field_name} must be at least {minimum}")
    return number
