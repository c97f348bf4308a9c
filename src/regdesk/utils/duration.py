"""Parsing of duration strings such as "15s", "1m30s" or "250ms" """

import re

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """
    Convert a duration string to seconds.

    A duration is a sequence of decimal numbers, each with a unit suffix,
    e.g. "15s", "1m", "1.5h" or "2m30s". "0" is accepted without a unit.

    Raises:
        ValueError: If the string is not a valid duration
    """
    text = value.strip()
    if text in ("0", "+0", "-0"):
        return 0.0

    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()

    return sign * total
