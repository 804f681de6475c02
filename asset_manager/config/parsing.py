"""
Parsing primitives for environment values.

Every helper here turns a raw environment string into a typed value and
falls back to a default instead of raising. Settings validators call these,
so one bad variable never stops the process from starting.
"""

from datetime import timedelta
from typing import Iterable, Optional

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_DIGITS = "0123456789"

# Nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}


def parse_int(value: Optional[str], default: Optional[int]) -> Optional[int]:
    """
    Parse a base-10 64-bit integer, or return the default.

    Only an optional sign followed by ASCII digits is accepted. Python's
    int() is more forgiving (whitespace, underscores, unicode digits), so
    the check is done by hand first.
    """
    if not value:
        return default

    digits = value[1:] if value[0] in "+-" else value
    if not digits or any(ch not in _DIGITS for ch in digits):
        return default

    parsed = int(value)
    if parsed < INT64_MIN or parsed > INT64_MAX:
        return default
    return parsed


def parse_duration(value: str) -> timedelta:
    """
    Parse a compound duration such as "60s", "1.5h" or "2h30m".

    Each component is a decimal number followed by a unit (ns, us, ms, s,
    m, h). A leading sign applies to the whole string, and a bare "0" needs
    no unit. Raises ValueError for anything else.
    """
    original = value
    negative = False

    if value and value[0] in "+-":
        negative = value[0] == "-"
        value = value[1:]

    if value == "0":
        return timedelta(0)
    if not value:
        raise ValueError(f"invalid duration {original!r}")

    total_ns = 0
    while value:
        if value[0] != "." and value[0] not in _DIGITS:
            raise ValueError(f"invalid duration {original!r}")

        # Integer part
        i = 0
        while i < len(value) and value[i] in _DIGITS:
            i += 1
        whole_digits = value[:i]
        value = value[i:]

        # Fractional part
        frac_digits = ""
        if value.startswith("."):
            value = value[1:]
            i = 0
            while i < len(value) and value[i] in _DIGITS:
                i += 1
            frac_digits = value[:i]
            value = value[i:]

        if not whole_digits and not frac_digits:
            raise ValueError(f"invalid duration {original!r}")

        # Unit runs until the next number
        i = 0
        while i < len(value) and value[i] != "." and value[i] not in _DIGITS:
            i += 1
        unit_name = value[:i]
        value = value[i:]

        if not unit_name:
            raise ValueError(f"missing unit in duration {original!r}")
        unit = _UNITS.get(unit_name)
        if unit is None:
            raise ValueError(f"unknown unit {unit_name!r} in duration {original!r}")

        component = int(whole_digits or "0") * unit
        if frac_digits:
            component += int(frac_digits) * unit // (10 ** len(frac_digits))
        total_ns += component

        if total_ns > INT64_MAX + (1 if negative else 0):
            raise ValueError(f"invalid duration {original!r}")

    # timedelta stops at microseconds
    result = timedelta(microseconds=total_ns // 1_000)
    return -result if negative else result


def parse_duration_or_default(value: Optional[str], default: str) -> timedelta:
    """
    Parse a duration, using the default string when the value is unset.

    If neither string parses, the zero duration is returned.
    """
    candidate = value or default
    try:
        return parse_duration(candidate)
    except ValueError:
        pass

    try:
        return parse_duration(default)
    except ValueError:
        return timedelta(0)


def split_csv(value: Optional[str], default: Iterable[str]) -> list[str]:
    """
    Split a comma-separated value into trimmed, non-empty items.

    An unset or empty value returns the default as-is; the default is
    never merged with what the variable provides.
    """
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]
