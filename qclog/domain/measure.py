# qclog/domain/measure.py
"""
Optional numeric value used by every measurement and target field.

A field is either unset (the operator has not typed anything yet), marked
"not applicable" with a dash, or holds a number. Keeping the three cases
explicit avoids the empty-string-or-number juggling of free-form inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


NOT_APPLICABLE_MARK = "-"


class MeasureKind(str, Enum):
    UNSET = "unset"
    NOT_APPLICABLE = "not_applicable"
    VALUE = "value"


@dataclass(frozen=True)
class Measure:
    """Tagged optional number: ``Unset | NotApplicable | Value(x)``."""
    kind: MeasureKind = MeasureKind.UNSET
    value: Optional[float] = None

    @classmethod
    def of(cls, value: Union[int, float]) -> "Measure":
        return cls(MeasureKind.VALUE, float(value))

    @classmethod
    def unset(cls) -> "Measure":
        return cls()

    @classmethod
    def not_applicable(cls) -> "Measure":
        return cls(MeasureKind.NOT_APPLICABLE)

    @classmethod
    def coerce(cls, raw: Any) -> "Measure":
        """Build a Measure from a Measure, a number, ``None`` or a string.

        Strings follow the JSON convention: ``""`` is unset, ``"-"`` is not
        applicable, anything else must be a float literal.
        """
        if isinstance(raw, Measure):
            return raw
        if raw is None:
            return UNSET
        if isinstance(raw, bool):
            raise ValueError(f"not a measurement: {raw!r}")
        if isinstance(raw, (int, float)):
            return cls.of(raw)
        s = str(raw).strip()
        if not s:
            return UNSET
        if s == NOT_APPLICABLE_MARK:
            return NOT_APPLICABLE
        try:
            return cls.of(float(s))
        except ValueError:
            raise ValueError(f"not a measurement: {raw!r}") from None

    @property
    def is_numeric(self) -> bool:
        return self.kind is MeasureKind.VALUE

    @property
    def is_set(self) -> bool:
        return self.kind is not MeasureKind.UNSET

    @property
    def is_not_applicable(self) -> bool:
        return self.kind is MeasureKind.NOT_APPLICABLE

    def as_float(self, default: float = 0.0) -> float:
        if self.kind is MeasureKind.VALUE:
            return float(self.value)
        return default

    def to_json(self) -> Union[str, int, float]:
        if self.kind is MeasureKind.UNSET:
            return ""
        if self.kind is MeasureKind.NOT_APPLICABLE:
            return NOT_APPLICABLE_MARK
        if float(self.value).is_integer():
            return int(self.value)
        return self.value

    @classmethod
    def from_json(cls, raw: Any) -> "Measure":
        return cls.coerce(raw)

    def __str__(self) -> str:
        if self.kind is MeasureKind.UNSET:
            return ""
        if self.kind is MeasureKind.NOT_APPLICABLE:
            return NOT_APPLICABLE_MARK
        return f"{self.value:g}"


UNSET = Measure()
NOT_APPLICABLE = Measure(MeasureKind.NOT_APPLICABLE)
