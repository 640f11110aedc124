# unit_str.py

from __future__ import annotations

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from docpyside.config import PX_PER_MM

# ----- Parsing
NUM_UNIT_RE = re.compile(r"^\s*(-?(?:\d+(?:\.\d+)?|\.\d+))\s*([a-zA-Z\"]+)?\s*$")

# ----- Canonical unit table (millimetres as canonical internal)
UNITS_TO_MM = {
    "mm": Decimal("1"),
    "cm": Decimal("10"),
    "in": Decimal("25.4"),
    "pt": Decimal("25.4") / Decimal("72"),
    "px": Decimal("1") / Decimal(str(PX_PER_MM)),
}

_Q_MM  = Decimal("1E-9")   # internal grid (mm)
_Q_OUT = Decimal("1E-6")   # output grid (target units)


def _normalize_unit_token(u: str | None) -> str | None:
    if not u:
        return None
    u = u.lower().strip().replace('"', "in")
    if u in ("inch", "inches"):
        return "in"
    if u in ("pixel", "pixels"):
        return "px"
    return u


def mm_to_px(mm: Union[float, int, Decimal]) -> float:
    """Millimetres to CSS pixels at the fixed page ratio."""
    return float(mm) * PX_PER_MM


def px_to_mm(px: Union[float, int, Decimal]) -> float:
    return float(px) / PX_PER_MM


class UnitStr:
    """
    Physical length stored internally as **Decimal millimetres**.

    Accepts numbers (interpreted in `unit`, default mm) or strings such as
    "25mm", "2.5 cm", "1in", "12pt" or "94.5px". Pixels are CSS pixels, so
    1mm is always PX_PER_MM px regardless of the screen.
    """
    __slots__ = ("_raw", "_value", "_unit")

    def __init__(self, raw: Union[str, float, int, Decimal, "UnitStr"], unit: Optional[str] = None):
        if isinstance(raw, UnitStr):
            self._raw = raw._raw
            self._value = raw._value
            self._unit = _normalize_unit_token(unit) or raw._unit
            return

        self._raw = str(raw)
        raw_unit: Optional[str] = None
        if isinstance(raw, bool):
            raise TypeError("UnitStr does not accept booleans")
        if isinstance(raw, str):
            m = NUM_UNIT_RE.fullmatch(raw.strip())
            if not m:
                raise ValueError(f"Invalid dimension string: {raw!r}")
            value_str, raw_unit = m.groups()
            input_val = Decimal(value_str)
        elif isinstance(raw, (int, float, Decimal)):
            input_val = Decimal(str(raw))
        else:
            raise TypeError(f"Unsupported type for UnitStr: {type(raw)}")

        final_unit = _normalize_unit_token(raw_unit) or _normalize_unit_token(unit) or "mm"
        if final_unit not in UNITS_TO_MM:
            raise ValueError(f"Unsupported unit: {final_unit!r}")

        self._value = (input_val * UNITS_TO_MM[final_unit]).quantize(_Q_MM)
        self._unit = final_unit

    # --------- convenience constructors
    @classmethod
    def from_px(cls, px: Union[int, float, Decimal]) -> "UnitStr":
        return cls(px, unit="px")

    # --------- properties
    @property
    def unit(self) -> str:
        return self._unit

    @property
    def value(self) -> float:
        """Numeric in the display unit."""
        return self.number(self._unit)

    # convenience aliases
    @property
    def mm(self) -> float: return self.number("mm")
    @property
    def px(self) -> float: return self.number("px")
    @property
    def pt(self) -> float: return self.number("pt")

    # --------- conversion
    def number(self, unit: Optional[str] = None) -> float:
        """Return the numeric as float in the requested (or current) unit."""
        tgt = _normalize_unit_token(unit) or self._unit
        if tgt not in UNITS_TO_MM:
            raise ValueError(f"Cannot convert to unsupported unit: {unit!r}")
        return float((self._value / UNITS_TO_MM[tgt]).quantize(_Q_OUT, rounding=ROUND_HALF_UP))

    def to(self, target: str) -> "UnitStr":
        """Return a NEW UnitStr expressed in the target unit."""
        return UnitStr(self, unit=target)

    # --------- comparisons
    def __eq__(self, other) -> bool:
        if isinstance(other, UnitStr):
            return (self._value - other._value).copy_abs() <= _Q_MM
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, UnitStr):
            return self._value < other._value - _Q_MM
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return f"{format(self.value, 'g')} {self._unit}"

    def __repr__(self) -> str:
        return f"UnitStr('{self._raw}') -> {self} | {self._value}mm"
