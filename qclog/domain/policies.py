"""
Regras de negócio do formulário de produção.

Este módulo reúne as regras que decidem quando uma linha está completa,
quais campos continuam editáveis depois do bloqueio, quando uma remoção
precisa de confirmação e como cada medição se compara às especificações
alvo. As funções são puras e são usadas pelos casos de uso e pela TUI.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from qclog.domain.measure import Measure
from qclog.domain.models import (
    CALCULATED_FIELDS,
    ENTRY_FIELDS,
    HEADER_ATTR_BY_KEY,
    ProductionEntry,
    ProductionForm,
    TargetSpecifications,
    is_filled,
)
from qclog.domain import formulas


# Campos que precisam estar preenchidos antes de abrir uma nova linha
REQUIRED_ENTRY_FIELDS = (
    "start", "end", "odAverage", "odMaximum", "odMinimum", "odEnd",
    "wallMinimum", "wallMaximum", "odAtSaw", "odAtVacTank",
    "meltPress", "unitStart", "unitEnd", "actualPPH", "actualWtPerFt",
    "acceptedFt", "acceptedLbs", "scrapFts", "scrapLbs", "scrapCode", "regrindConsumed",
)

# Editáveis mesmo com a linha bloqueada
LOCKED_EDITABLE_FIELDS = frozenset({
    "end", "visual", "print", "dieHeadClean", "scrapFts", "scrapLbs", "scrapCode",
})

# Primeira linha: bloqueados enquanto as especificações alvo estão incompletas
FIRST_ROW_GATED_FIELDS = frozenset({
    "start", "odAverage", "odMaximum", "odMinimum", "odEnd", "wallMinimum", "wallMaximum",
})

# Preenchidos automaticamente ao abrir a linha; não contam como dado do operador
CARRIED_OVER_FIELDS = frozenset({"start", "unitStart"})

REQUIRED_HEADER_FIELDS = ("date", "shift", "operatorName", "productionLine", "productionSite")

IN_SPEC = "in_spec"
OUT_OF_SPEC = "out_of_spec"
WARNING = "warning"


def missing_required_fields(entry: ProductionEntry) -> List[str]:
    """Campos obrigatórios ainda vazios, na ordem da tabela."""
    return [key for key in REQUIRED_ENTRY_FIELDS if not is_filled(entry.get(key))]


def is_entry_complete(entry: ProductionEntry) -> bool:
    return not missing_required_fields(entry)


def has_significant_data(entry: ProductionEntry) -> bool:
    """A linha tem algum dado além de início e unidade inicial?

    É o critério para pedir confirmação antes de remover a linha.
    """
    return any(
        is_filled(value)
        for key, value in entry.raw_items()
        if key not in CARRIED_OVER_FIELDS
    )


def entry_has_data(entry: ProductionEntry) -> bool:
    """Critério usado ao fechar um formulário inteiro."""
    return (
        is_filled(entry.start)
        or is_filled(entry.end)
        or entry.od_average.is_numeric
        or entry.unit_start.is_numeric
        or is_filled(entry.visual)
        or is_filled(entry.print_check)
    )


def form_has_data(form: ProductionForm) -> bool:
    has_production_info = any([
        form.production_site, form.operator_name, form.work_order_number,
        form.resin_code, form.color_code, form.production_line,
    ])
    return has_production_info or form.target_specs.has_data() or any(entry_has_data(e) for e in form.entries)


def missing_header_fields(form: ProductionForm) -> List[str]:
    return [key for key in REQUIRED_HEADER_FIELDS if not getattr(form, HEADER_ATTR_BY_KEY[key])]


def is_production_info_complete(form: ProductionForm) -> bool:
    return all(getattr(form, attr) for attr in HEADER_ATTR_BY_KEY.values())


def is_calculated_field(key: str) -> bool:
    return key in CALCULATED_FIELDS


def is_editable_when_locked(key: str) -> bool:
    return key in LOCKED_EDITABLE_FIELDS


def is_first_row_gated(form: ProductionForm, index: int, key: str) -> bool:
    """A primeira linha só recebe medições depois das especificações alvo."""
    return index == 0 and key in FIRST_ROW_GATED_FIELDS and not form.target_specs.is_complete()


# -------------------------
# Conformidade com as specs
# -------------------------

def _limit(m: Measure) -> Optional[float]:
    """Limite ativo: ``None`` se a spec está vazia, marcada com '-' ou zerada."""
    if not m.is_numeric or m.as_float() == 0:
        return None
    return m.as_float()


def _within(value: float, low: Measure, high: Measure) -> Optional[str]:
    lo, hi = _limit(low), _limit(high)
    if lo is None or hi is None:
        return None
    return IN_SPEC if lo <= value <= hi else OUT_OF_SPEC


def _at_most(value: float, target: Measure) -> Optional[str]:
    t = _limit(target)
    if t is None:
        return None
    return IN_SPEC if value <= t else OUT_OF_SPEC


def classify_field(key: str, value, specs: TargetSpecifications) -> Optional[str]:
    """Classifica um valor em relação às especificações alvo.

    Regras:
        - odAverage dentro de [odMin, odMax]
        - odMaximum/odMinimum dentro de [caliperMinimum, caliperMaximum]
        - wallMinimum/wallMaximum dentro de [wallMin, wallMax]
        - outOfRound, ovality, toeIn, eccentricity e gain até o alvo
        - loss é sempre ``WARNING``
        - visual/print: ``Pass`` → ``IN_SPEC``, ``Fail`` → ``OUT_OF_SPEC``

    Valores vazios ou zero e specs vazias, zeradas ou '-' retornam ``None``
    (sem classificação).
    """
    if key in ("visual", "print"):
        if value == "Pass":
            return IN_SPEC
        if value == "Fail":
            return OUT_OF_SPEC
        return None

    try:
        num = Measure.coerce(value).as_float()
    except ValueError:
        return None
    if num == 0:
        return None

    if key == "odAverage":
        return _within(num, specs.od_min, specs.od_max)
    if key in ("odMaximum", "odMinimum"):
        return _within(num, specs.caliper_minimum, specs.caliper_maximum)
    if key in ("wallMinimum", "wallMaximum"):
        return _within(num, specs.wall_min, specs.wall_max)
    if key == "outOfRound":
        return _at_most(num, specs.out_of_round)
    if key == "ovality":
        return _at_most(num, specs.ovality)
    if key == "toeIn":
        return _at_most(num, specs.toe_in)
    if key == "eccentricity":
        return _at_most(num, specs.eccentricity)
    if key == "gain":
        return _at_most(num, specs.target_gain)
    if key == "loss":
        return WARNING
    return None


def entry_conformance(entry: ProductionEntry, specs: TargetSpecifications) -> Dict[str, str]:
    """Status de todos os campos classificáveis da linha (apenas os definidos)."""
    values = {f.key: entry.get(f.key) for f in ENTRY_FIELDS}
    values.update(formulas.calculate_entry_fields(entry, specs))
    out: Dict[str, str] = {}
    for key, value in values.items():
        status = classify_field(key, value, specs)
        if status is not None:
            out[key] = status
    return out
