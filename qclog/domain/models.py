# qclog/domain/models.py
"""
Domain models for the production inspection form.

- ``TargetSpecifications``: the 16 target values for the run (manual or
  scanned from a QR/barcode label).
- ``ProductionEntry``: one sampling interval. Calculated fields are
  properties, recomputed from the raw fields on every read.
- ``ProductionForm``: header, target specs and the ordered entry rows.

Field keys (``odAverage``, ``theoWtPerFt``...) are the names used in the
exported JSON; attributes are their snake_case counterparts.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from qclog.domain import formulas
from qclog.domain.measure import UNSET, Measure


VISUAL_OPTIONS = ("-", "Pass", "Fail")
PRINT_OPTIONS = ("-", "Pass", "Fail")
DIE_HEAD_OPTIONS = ("-", "Yes", "No")
SCRAP_CODES = ("A", "B", "C", "D")


class FieldKind(str, Enum):
    TIME = "time"
    DECIMAL = "decimal"
    INTEGER = "integer"
    CHOICE = "choice"


class EntryField(NamedTuple):
    key: str
    attr: str
    kind: FieldKind
    label: str
    choices: Tuple[str, ...] = ()


# Raw (operator-entered) fields, in table order
ENTRY_FIELDS: Tuple[EntryField, ...] = (
    EntryField("start", "start", FieldKind.TIME, "Start"),
    EntryField("end", "end", FieldKind.TIME, "End"),
    EntryField("odAverage", "od_average", FieldKind.DECIMAL, "OD Avg"),
    EntryField("odMaximum", "od_maximum", FieldKind.DECIMAL, "Caliper Max"),
    EntryField("odMinimum", "od_minimum", FieldKind.DECIMAL, "Caliper Min"),
    EntryField("odEnd", "od_end", FieldKind.DECIMAL, "OD End"),
    EntryField("wallMinimum", "wall_minimum", FieldKind.DECIMAL, "Wall Min"),
    EntryField("wallMaximum", "wall_maximum", FieldKind.DECIMAL, "Wall Max"),
    EntryField("visual", "visual", FieldKind.CHOICE, "Visual", VISUAL_OPTIONS),
    EntryField("print", "print_check", FieldKind.CHOICE, "Print", PRINT_OPTIONS),
    EntryField("odAtSaw", "od_at_saw", FieldKind.DECIMAL, "OD Saw"),
    EntryField("odAtVacTank", "od_at_vac_tank", FieldKind.DECIMAL, "OD Vac"),
    EntryField("meltPress", "melt_press", FieldKind.DECIMAL, "Melt Press"),
    EntryField("dieHeadClean", "die_head_clean", FieldKind.CHOICE, "Die Clean", DIE_HEAD_OPTIONS),
    EntryField("unitStart", "unit_start", FieldKind.INTEGER, "Unit Start"),
    EntryField("unitEnd", "unit_end", FieldKind.INTEGER, "Unit End"),
    EntryField("actualPPH", "actual_pph", FieldKind.DECIMAL, "Act PPH"),
    EntryField("actualWtPerFt", "actual_wt_per_ft", FieldKind.DECIMAL, "Act Wt/Ft"),
    EntryField("acceptedFt", "accepted_ft", FieldKind.INTEGER, "Acc Ft"),
    EntryField("acceptedLbs", "accepted_lbs", FieldKind.DECIMAL, "Acc Lbs"),
    EntryField("scrapFts", "scrap_fts", FieldKind.INTEGER, "Scrap Ft"),
    EntryField("scrapLbs", "scrap_lbs", FieldKind.DECIMAL, "Scrap Lbs"),
    EntryField("scrapCode", "scrap_code", FieldKind.CHOICE, "Code", SCRAP_CODES),
    EntryField("regrindConsumed", "regrind_consumed", FieldKind.DECIMAL, "Regrind %"),
)

ENTRY_FIELD_BY_KEY: Dict[str, EntryField] = {f.key: f for f in ENTRY_FIELDS}

CALCULATED_FIELDS: Tuple[str, ...] = ("outOfRound", "ovality", "toeIn", "eccentricity", "gain", "loss")

# QR payload order is the declaration order
TARGET_SPEC_FIELDS: Tuple[Tuple[str, str, str], ...] = (
    ("odAverage", "od_average", "OD Avg"),
    ("odMax", "od_max", "OD Max"),
    ("odMin", "od_min", "OD Min"),
    ("caliperMaximum", "caliper_maximum", "Cal Max"),
    ("caliperMinimum", "caliper_minimum", "Cal Min"),
    ("outOfRound", "out_of_round", "Out Round"),
    ("ovality", "ovality", "Ovality"),
    ("toeIn", "toe_in", "Toe-in"),
    ("wallMin", "wall_min", "Wall Min"),
    ("wallMax", "wall_max", "Wall Max"),
    ("targetMin", "target_min", "Target Min"),
    ("targetMax", "target_max", "Target Max"),
    ("eccentricity", "eccentricity", "Eccentric"),
    ("goalPPH", "goal_pph", "Goal PPH"),
    ("theoWtPerFt", "theo_wt_per_ft", "Theo Wt/Ft"),
    ("targetGain", "target_gain", "Target Gain"),
)

_SPEC_ATTR_BY_KEY = {key: attr for key, attr, _ in TARGET_SPEC_FIELDS}

# (json key, attribute, label)
HEADER_FIELDS: Tuple[Tuple[str, str, str], ...] = (
    ("productionSite", "production_site", "Production Site"),
    ("date", "date", "Date"),
    ("shift", "shift", "Shift"),
    ("operatorName", "operator_name", "Operator Name"),
    ("productionLine", "production_line", "Production Line"),
    ("workOrderNumber", "work_order_number", "Work Order Number"),
    ("resinCode", "resin_code", "Resin Code"),
    ("colorCode", "color_code", "Color Code"),
)

HEADER_ATTR_BY_KEY = {key: attr for key, attr, _ in HEADER_FIELDS}

FieldValue = Union[str, Measure]


def is_filled(value: Any) -> bool:
    """Whether a raw field value counts as entered."""
    if isinstance(value, Measure):
        return value.is_set
    return value not in ("", None)


@dataclass
class TargetSpecifications:
    """Target values for the run. Each one is unset, ``-`` or a number."""
    od_average: Measure = UNSET
    od_max: Measure = UNSET
    od_min: Measure = UNSET
    caliper_maximum: Measure = UNSET
    caliper_minimum: Measure = UNSET
    out_of_round: Measure = UNSET
    ovality: Measure = UNSET
    toe_in: Measure = UNSET
    wall_min: Measure = UNSET
    wall_max: Measure = UNSET
    target_min: Measure = UNSET
    target_max: Measure = UNSET
    eccentricity: Measure = UNSET
    goal_pph: Measure = UNSET
    theo_wt_per_ft: Measure = UNSET
    target_gain: Measure = UNSET

    def get(self, key: str) -> Measure:
        return getattr(self, _SPEC_ATTR_BY_KEY[key])

    def set(self, key: str, value: Any) -> None:
        setattr(self, _SPEC_ATTR_BY_KEY[key], Measure.coerce(value))

    def values(self) -> List[Measure]:
        return [getattr(self, attr) for _, attr, _ in TARGET_SPEC_FIELDS]

    def is_complete(self) -> bool:
        """Every target is either ``-`` or a nonzero number."""
        return all(_spec_present(m) for m in self.values())

    def has_data(self) -> bool:
        return any(_spec_present(m) for m in self.values())

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr).to_json() for key, attr, _ in TARGET_SPEC_FIELDS}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TargetSpecifications":
        specs = cls()
        for key, attr, _ in TARGET_SPEC_FIELDS:
            if data and key in data:
                setattr(specs, attr, Measure.from_json(data[key]))
        return specs


def _spec_present(m: Measure) -> bool:
    return m.is_not_applicable or (m.is_numeric and m.as_float() != 0)


class RowState(str, Enum):
    OPEN = "open"
    LOCKED = "locked"


@dataclass
class ProductionEntry:
    """One sampling interval of the production table."""
    start: str = ""
    end: str = ""
    od_average: Measure = UNSET
    od_maximum: Measure = UNSET
    od_minimum: Measure = UNSET
    od_end: Measure = UNSET
    wall_minimum: Measure = UNSET
    wall_maximum: Measure = UNSET
    visual: str = ""
    print_check: str = ""
    od_at_saw: Measure = UNSET
    od_at_vac_tank: Measure = UNSET
    melt_press: Measure = UNSET
    die_head_clean: str = ""
    unit_start: Measure = UNSET
    unit_end: Measure = UNSET
    actual_pph: Measure = UNSET
    actual_wt_per_ft: Measure = UNSET
    accepted_ft: Measure = UNSET
    accepted_lbs: Measure = UNSET
    scrap_fts: Measure = UNSET
    scrap_lbs: Measure = UNSET
    scrap_code: str = ""
    regrind_consumed: Measure = UNSET
    state: RowState = RowState.OPEN

    # -- lifecycle --------------------------------------------------------

    @property
    def locked(self) -> bool:
        return self.state is RowState.LOCKED

    def lock(self) -> None:
        self.state = RowState.LOCKED

    def has_started(self) -> bool:
        return is_filled(self.start) or self.od_average.is_set or self.unit_start.is_set

    # -- calculated fields ------------------------------------------------

    @property
    def out_of_round(self) -> float:
        return formulas.out_of_round(self.od_maximum, self.od_minimum)

    @property
    def ovality(self) -> float:
        return formulas.ovality(self.od_maximum, self.od_minimum)

    @property
    def toe_in(self) -> float:
        return formulas.toe_in(self.od_end, self.od_average)

    @property
    def eccentricity(self) -> float:
        return formulas.eccentricity(self.wall_maximum, self.wall_minimum)

    # -- field access -----------------------------------------------------

    def get(self, key: str) -> FieldValue:
        return getattr(self, ENTRY_FIELD_BY_KEY[key].attr)

    def raw_items(self) -> List[Tuple[str, FieldValue]]:
        return [(f.key, getattr(self, f.attr)) for f in ENTRY_FIELDS]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in ENTRY_FIELDS:
            val = getattr(self, f.attr)
            out[f.key] = val.to_json() if isinstance(val, Measure) else val
        out["locked"] = self.locked
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductionEntry":
        entry = cls()
        for f in ENTRY_FIELDS:
            if f.key not in data:
                continue
            raw = data[f.key]
            if f.kind in (FieldKind.TIME, FieldKind.CHOICE):
                setattr(entry, f.attr, "" if raw is None else str(raw))
            else:
                setattr(entry, f.attr, Measure.from_json(raw))
        if data.get("locked"):
            entry.lock()
        return entry


def _random_id() -> str:
    return uuid.uuid4().hex[:9]


@dataclass
class ProductionForm:
    """A production inspection form (one tab of the workspace)."""
    id: str
    random_id: str = field(default_factory=_random_id)
    production_site: str = ""
    date: date = field(default_factory=date.today)
    shift: str = ""
    operator_name: str = ""
    production_line: str = ""
    work_order_number: str = ""
    resin_code: str = ""
    color_code: str = ""
    target_specs: TargetSpecifications = field(default_factory=TargetSpecifications)
    entries: List[ProductionEntry] = field(default_factory=lambda: [ProductionEntry()])

    @property
    def last_entry(self) -> ProductionEntry:
        return self.entries[-1]

    def refresh_id(self) -> None:
        """Rebuild the id from work order, shift and line once all three are set."""
        if self.work_order_number and self.shift and self.production_line:
            self.id = f"{self.work_order_number}-{self.shift}{self.production_line}-{self.random_id}"

    def display_name(self, position: int) -> str:
        if self.work_order_number and self.shift and self.production_line:
            return f"{self.work_order_number}-{self.shift}{self.production_line}"
        return f"Form {position + 1}"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "randomId": self.random_id}
        for key, attr, _ in HEADER_FIELDS:
            val = getattr(self, attr)
            out[key] = val.isoformat() if isinstance(val, date) else val
        out["targetSpecs"] = self.target_specs.to_dict()
        out["entries"] = [e.to_dict() for e in self.entries]
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductionForm":
        form_id = data.get("id") or data.get("formId") or "form-1"
        form = cls(id=str(form_id))
        if data.get("randomId"):
            form.random_id = str(data["randomId"])
        for key, attr, _ in HEADER_FIELDS:
            if key not in data or data[key] is None:
                continue
            if key == "date":
                # aceita data ISO ou timestamp ISO completo
                form.date = date.fromisoformat(str(data[key])[:10])
            else:
                setattr(form, attr, str(data[key]))
        form.target_specs = TargetSpecifications.from_dict(data.get("targetSpecs"))
        entries = [ProductionEntry.from_dict(e) for e in data.get("entries") or []]
        form.entries = entries or [ProductionEntry()]
        return form
