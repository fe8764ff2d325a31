"""
simulation/format_utils.py

Reads component values written with SI prefixes ("1k", "2.2m", "4.7MEG",
"5V") and renders solved quantities back with a prefix ("15 mA").
"""

import re

# Prefix letter -> multiplier; 'u' is accepted as an ASCII stand-in for 'µ'
SI_PREFIXES = {
    "p": 1e-12,
    "n": 1e-9,
    "u": 1e-6,
    "µ": 1e-6,
    "m": 1e-3,
    "k": 1e3,
    "M": 1e6,
    "G": 1e9,
}

# Output steps, largest first; 'u' is left out so micro prints as 'µ'
_DISPLAY_STEPS = [(1e9, "G"), (1e6, "M"), (1e3, "k"), (1.0, ""), (1e-3, "m"), (1e-6, "µ"), (1e-9, "n"), (1e-12, "p")]

_VALUE_RE = re.compile(r"^([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Zµ]*)$")


def parse_value(raw) -> float:
    """
    Convert a component value to a float.

    Numbers pass through. Strings are a number followed by an optional
    prefix and unit: "10k" -> 10000.0, "2mA" -> 0.002, "5V" -> 5.0.
    "MEG" (any case) is mega, as in SPICE decks.

    Raises:
        ValueError: If the string does not start with a number.
    """
    if not isinstance(raw, str):
        return float(raw)

    match = _VALUE_RE.match(raw.strip())
    if match is None:
        raise ValueError(f"Invalid number format: {raw!r}")

    number, suffix = float(match.group(1)), match.group(2)
    if suffix.upper().startswith("MEG"):
        return number * 1e6
    if suffix:
        # Only the first letter can be a prefix; "V", "A", "Ohm" carry none
        return number * SI_PREFIXES.get(suffix[0], 1.0)
    return number


def format_value(value: float, unit: str = "") -> str:
    """
    Render *value* with the largest prefix that keeps it at or above 1.

    (0.015, "A") -> "15 mA", (1.5, "V") -> "1.500 V"
    """
    if value == 0:
        return f"0 {unit}".rstrip()

    magnitude = abs(value)
    for step, prefix in _DISPLAY_STEPS:
        if magnitude >= step:
            scaled = value / step
            text = str(int(scaled)) if scaled.is_integer() else f"{scaled:.3f}"
            return f"{text} {prefix}{unit}".rstrip()

    return f"{value:.2e} {unit}".rstrip()
