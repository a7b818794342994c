# qclog/usecases/summary.py
"""
UC: Resumo do formulário (rodapé da tabela / comando ``summary``).
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from qclog.domain import formulas
from qclog.domain.models import ProductionForm


@dataclass
class FormSummary:
    completed_entries: int = 0
    total_entries: int = 0
    accepted_lbs: float = 0.0
    accepted_ft: float = 0.0
    scrap_lbs: float = 0.0
    scrap_fts: float = 0.0
    avg_actual_wt_per_ft: float = 0.0
    gain_loss: Optional[float] = None
    gain_loss_label: str = ""
    total_units: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(form: ProductionForm) -> FormSummary:
    s = FormSummary(total_entries=len(form.entries))
    weights = []
    for entry in form.entries:
        if entry.has_started():
            s.completed_entries += 1
        s.accepted_lbs += entry.accepted_lbs.as_float()
        s.accepted_ft += entry.accepted_ft.as_float()
        s.scrap_lbs += entry.scrap_lbs.as_float()
        s.scrap_fts += entry.scrap_fts.as_float()

        wt = entry.actual_wt_per_ft.as_float()
        if wt > 0:
            weights.append(wt)

        u_start, u_end = entry.unit_start, entry.unit_end
        if u_end.is_numeric and u_start.is_numeric:
            lo, hi = u_start.as_float(), u_end.as_float()
            if hi > 0 and lo >= 0 and hi >= lo:
                s.total_units += int(hi - lo + 1)

    s.accepted_lbs = round(s.accepted_lbs, 2)
    s.scrap_lbs = round(s.scrap_lbs, 2)
    if weights:
        avg = sum(weights) / len(weights)
        s.avg_actual_wt_per_ft = round(avg, 3)
        deviation = formulas.weight_deviation(avg, form.target_specs.theo_wt_per_ft)
        if deviation is not None:
            s.gain_loss = round(abs(deviation), formulas.WEIGHT_DECIMALS)
            s.gain_loss_label = "Gain" if deviation < 0 else "Loss"
    return s
