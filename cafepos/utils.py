import math
from typing import Any, Optional

# SQLite INTEGER is a signed 64-bit value
MAX_ID = 2 ** 63 - 1


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce a loosely-typed input (form field, JSON value) to a finite float."""
    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def to_int(value: Any, default: int = 0) -> int:
    number = to_number(value, float(default))
    if not number.is_integer() or abs(number) > MAX_ID:
        return default
    return int(number)


def parse_id(raw: Optional[str]) -> Optional[int]:
    """Parse a numeric path segment; anything but plain ASCII digits within range yields None."""
    if raw is None or not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value <= MAX_ID else None
