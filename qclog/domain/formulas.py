"""
Derived metrics for production inspection rows.

These functions implement the geometric and weight statistics shown next
to every sampling interval: out-of-round, ovality, toe-in, eccentricity
and the gain/loss of actual weight per foot against the theoretical
target.

All functions are pure: they depend solely on their inputs and do not
modify any external state. Arguments may be ``Measure`` instances or
anything ``Measure.coerce`` accepts (numbers, numeric strings, ``""``,
``"-"``, ``None``). A metric whose inputs are not all numeric, or whose
denominator is zero, evaluates to ``0.0``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from qclog.domain.measure import Measure

if TYPE_CHECKING:
    from qclog.domain.models import ProductionEntry, TargetSpecifications


GEOMETRY_DECIMALS = 3
WEIGHT_DECIMALS = 2


def _round(x: float, ndigits: int) -> float:
    """Round half away from zero on the exact binary value of ``x``.

    Ties go up, so 14.0625 becomes 14.063 where ``round()`` gives 14.062.
    """
    # + 0.0 turns -0.0 into 0.0
    return float(Decimal(x).quantize(Decimal(1).scaleb(-ndigits), rounding=ROUND_HALF_UP)) + 0.0


def _numbers(*raw: Any) -> Optional[Tuple[float, ...]]:
    measures = [Measure.coerce(r) for r in raw]
    if not all(m.is_numeric for m in measures):
        return None
    return tuple(m.as_float() for m in measures)


def out_of_round(od_maximum: Any, od_minimum: Any) -> float:
    """Return ``odMaximum - odMinimum`` rounded to 3 decimals."""
    nums = _numbers(od_maximum, od_minimum)
    if nums is None:
        return 0.0
    od_max, od_min = nums
    return _round(od_max - od_min, GEOMETRY_DECIMALS)


def ovality(od_maximum: Any, od_minimum: Any) -> float:
    """Normalised roundness deviation.

    ovality = ((odMaximum - odMinimum) / (odMaximum + odMinimum)) * 200

    Returns ``0.0`` when the sum of both diameters is zero.
    """
    nums = _numbers(od_maximum, od_minimum)
    if nums is None:
        return 0.0
    od_max, od_min = nums
    if od_max + od_min == 0:
        return 0.0
    return _round(((od_max - od_min) / (od_max + od_min)) * 200, GEOMETRY_DECIMALS)


def toe_in(od_end: Any, od_average: Any) -> float:
    """Percent deviation of the end-of-run OD from the average OD.

    toeIn = ((odEnd - odAverage) / odAverage) * 100
    """
    nums = _numbers(od_end, od_average)
    if nums is None:
        return 0.0
    end, avg = nums
    if avg == 0:
        return 0.0
    return _round(((end - avg) / avg) * 100, GEOMETRY_DECIMALS)


def eccentricity(wall_maximum: Any, wall_minimum: Any) -> float:
    """Wall thickness uniformity.

    eccentricity = ((wallMaximum - wallMinimum) / wallMaximum) * 100
    """
    nums = _numbers(wall_maximum, wall_minimum)
    if nums is None:
        return 0.0
    w_max, w_min = nums
    if w_max == 0:
        return 0.0
    return _round(((w_max - w_min) / w_max) * 100, GEOMETRY_DECIMALS)


def weight_deviation(actual_wt_per_ft: Any, theo_wt_per_ft: Any) -> Optional[float]:
    """Percent deviation of actual weight per foot from the theoretical one.

    Unset, not-applicable and zero operands count as zero; the deviation
    is undefined (``None``) when either operand is zero.
    """
    actual = Measure.coerce(actual_wt_per_ft).as_float()
    theo = Measure.coerce(theo_wt_per_ft).as_float()
    if actual == 0 or theo == 0:
        return None
    return ((actual - theo) / theo) * 100


def gain_loss(actual_wt_per_ft: Any, theo_wt_per_ft: Any) -> Tuple[float, float]:
    """Split the weight deviation into ``(gain, loss)``.

    A negative deviation (lighter than theoretical) is a gain, a
    non-negative one is a loss. The populated side carries the absolute
    value rounded to 2 decimals and the other side is zero, so at most one
    of them is ever nonzero.
    """
    deviation = weight_deviation(actual_wt_per_ft, theo_wt_per_ft)
    if deviation is None:
        return 0.0, 0.0
    magnitude = _round(abs(deviation), WEIGHT_DECIMALS)
    if deviation < 0:
        return magnitude, 0.0
    return 0.0, magnitude


def calculate_entry_fields(entry: "ProductionEntry", specs: "TargetSpecifications") -> Dict[str, float]:
    """Return every calculated field of a row keyed by its JSON name."""
    gain, loss = gain_loss(entry.actual_wt_per_ft, specs.theo_wt_per_ft)
    return {
        "outOfRound": out_of_round(entry.od_maximum, entry.od_minimum),
        "ovality": ovality(entry.od_maximum, entry.od_minimum),
        "toeIn": toe_in(entry.od_end, entry.od_average),
        "eccentricity": eccentricity(entry.wall_maximum, entry.wall_minimum),
        "gain": gain,
        "loss": loss,
    }
