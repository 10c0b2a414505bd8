"""Resource parsing utilities for CPU, memory and storage values.

Provides functions to parse Kubernetes quantity strings into exact integers:
- CPU: parsed to millicores (int)
- Memory/Storage: parsed to bytes (int)

Values with sub-unit precision round up, the same way the API server's
MilliValue()/Value() accessors do. Decimal arithmetic keeps the parse exact,
so no float error leaks into aggregated totals.
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)

# Module-level constants to avoid re-creating on every function call.
_BINARY_MULTIPLIERS: dict[str, int] = {
    "Ki": 1024,
    "Mi": 1024**2,
    "Gi": 1024**3,
    "Ti": 1024**4,
    "Pi": 1024**5,
    "Ei": 1024**6,
}
_DECIMAL_MULTIPLIERS: dict[str, Decimal] = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
}
_QUANTITY_PATTERN = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE]|[eE][+-]?\d+)?$"
)


def parse_quantity_decimal(value: Any) -> Decimal | None:
    """Parse a Kubernetes quantity string to an exact Decimal in base units.

    Handles binary suffixes (Ki..Ei), decimal suffixes (n, u, m, k..E) and
    exponent notation ("1e3").

    Args:
        value: Quantity as string or number (e.g., "100m", "8Gi", 2)

    Returns:
        Decimal value in base units, or None when the value is empty or malformed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))

    text = str(value).strip()
    if not text:
        return None

    match = _QUANTITY_PATTERN.match(text)
    if match is None:
        logger.debug("Unparsable quantity %r", text)
        return None

    try:
        number = Decimal(match.group("number"))
    except InvalidOperation:
        logger.debug("Unparsable quantity %r", text)
        return None

    suffix = match.group("suffix") or ""
    if suffix in _BINARY_MULTIPLIERS:
        return number * _BINARY_MULTIPLIERS[suffix]
    if suffix in _DECIMAL_MULTIPLIERS:
        return number * _DECIMAL_MULTIPLIERS[suffix]
    # Exponent form, e.g. "129e6"
    return number.scaleb(int(suffix[1:]))


def _ceil_int(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def parse_cpu_millicores(cpu_str: Any) -> int:
    """Parse CPU string to integer millicores.

    Handles various CPU resource formats:
    - Nanocores: "500000000n" -> 500
    - Microcores: "500000u" -> 500
    - Millicores: "100m" -> 100
    - Decimal: "1.5" -> 1500
    - Integer: "2" -> 2000

    Returns:
        CPU value in millicores. Returns 0 on parse error or empty string.
    """
    parsed = parse_quantity_decimal(cpu_str)
    if parsed is None:
        return 0
    return _ceil_int(parsed * 1000)


def memory_str_to_bytes(memory_str: Any) -> int:
    """Convert memory (or storage) string to integer bytes.

    Handles various memory resource formats:
    - Ki: "1024Ki" -> 1048576 bytes
    - Mi: "512Mi" -> 536870912 bytes
    - Gi: "1Gi" -> 1073741824 bytes
    - M: "129M" -> 129000000 bytes
    - Plain bytes: "128974848"

    Returns:
        Memory value in bytes. Returns 0 on parse error or empty string.
    """
    parsed = parse_quantity_decimal(memory_str)
    if parsed is None:
        return 0
    return _ceil_int(parsed)
