# qclog/usecases/manage_rows.py
"""
UC: Ciclo de vida das linhas da tabela de produção.

- ``update_entry``: altera um campo; ao começar a preencher a linha i, a
  linha i-1 é bloqueada.
- ``add_entry``: só abre nova linha com a última completa; bloqueia todas as
  anteriores e herda início/unidade da linha anterior.
- ``remove_entry``: nunca remove a única linha nem linhas bloqueadas; dados
  significativos exigem confirmação.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from qclog.adapters.parsers import parse_entry_value
from qclog.config import DEFAULTS
from qclog.domain.errors import (
    CalculatedFieldError,
    QCLogError,
    RowIncompleteError,
    RowLockedError,
    RowRemovalError,
    TargetSpecsIncompleteError,
    UnknownFieldError,
)
from qclog.domain.measure import Measure
from qclog.domain.models import ENTRY_FIELD_BY_KEY, ProductionEntry, ProductionForm, is_filled
from qclog.domain.policies import (
    has_significant_data,
    is_calculated_field,
    is_editable_when_locked,
    is_first_row_gated,
    missing_required_fields,
)
from qclog.infra.logger import log_entry_event, log_system_event

ConfirmFn = Callable[[str], bool]
AutosaveFn = Callable[[ProductionForm], Any]

REMOVE_CONFIRM_MESSAGE = "This row contains data. Are you sure you want to remove it?"


def update_entry(
    form: ProductionForm,
    index: int,
    key: str,
    value: Any,
    gate_first_row: Optional[bool] = None,
) -> ProductionEntry:
    """Altera o campo ``key`` da linha ``index`` e aplica o bloqueio da linha anterior.

    Raises:
        IndexError: linha inexistente.
        CalculatedFieldError: campo calculado.
        UnknownFieldError: campo inexistente.
        RowLockedError: linha bloqueada e campo fora da lista liberada.
        TargetSpecsIncompleteError: primeira linha antes das specs completas.
        ValueError: valor inválido para o tipo do campo.
    """
    if gate_first_row is None:
        gate_first_row = DEFAULTS.gate_first_row_on_specs

    try:
        if not 0 <= index < len(form.entries):
            raise IndexError(f"row {index + 1} does not exist")
        if is_calculated_field(key):
            raise CalculatedFieldError(key)
        spec = ENTRY_FIELD_BY_KEY.get(key)
        if spec is None:
            raise UnknownFieldError(key)

        entry = form.entries[index]
        if entry.locked and not is_editable_when_locked(key):
            raise RowLockedError(index, key)
        if gate_first_row and is_first_row_gated(form, index, key):
            raise TargetSpecsIncompleteError(key)

        new_value = parse_entry_value(spec, value)
    except (IndexError, KeyError, ValueError) as e:
        log_entry_event("update", form.id, index, error=str(e), field=key)
        raise

    had_started = entry.has_started()
    setattr(entry, spec.attr, new_value)
    log_entry_event("update", form.id, index, field=key,
                    value=new_value.to_json() if isinstance(new_value, Measure) else new_value)

    if index > 0 and (had_started or is_filled(new_value)):
        previous = form.entries[index - 1]
        if not previous.locked:
            previous.lock()
            log_entry_event("lock", form.id, index - 1)
    return entry


def next_entry(last: ProductionEntry) -> ProductionEntry:
    entry = ProductionEntry(start=last.end)
    if last.unit_end.is_numeric and last.unit_end.as_float() > 0:
        entry.unit_start = Measure.of(int(last.unit_end.as_float()) + 1)
    return entry


def add_entry(form: ProductionForm, autosave: Optional[AutosaveFn] = None) -> ProductionEntry:
    """Abre uma nova linha se a última estiver completa.

    O ``autosave`` (opcional) recebe o formulário antes da nova linha; sua
    falha é registrada e não impede a inclusão.
    """
    last_index = len(form.entries) - 1
    missing = missing_required_fields(form.last_entry)
    if missing:
        err = RowIncompleteError(missing)
        log_entry_event("add", form.id, last_index, error=str(err))
        raise err

    if autosave is not None:
        try:
            autosave(form)
        except QCLogError as e:
            log_system_event("autosave_failed", {"form_id": form.id, "error": str(e)}, level="warning")

    for entry in form.entries:
        entry.lock()

    new_entry = next_entry(form.last_entry)
    form.entries.append(new_entry)
    log_entry_event("add", form.id, len(form.entries) - 1,
                    start=new_entry.start, unit_start=new_entry.unit_start.to_json())
    return new_entry


def remove_entry(form: ProductionForm, index: Optional[int] = None,
                 confirm: Optional[ConfirmFn] = None) -> bool:
    """Remove a linha ``index`` (padrão: a última).

    Returns:
        ``True`` se removeu; ``False`` se o operador não confirmou.
    """
    if index is None:
        index = len(form.entries) - 1
    if not 0 <= index < len(form.entries):
        raise IndexError(f"row {index + 1} does not exist")

    if len(form.entries) <= 1:
        err = RowRemovalError("Cannot remove the only row")
        log_entry_event("remove", form.id, index, error=str(err))
        raise err
    entry = form.entries[index]
    if entry.locked:
        err = RowRemovalError(f"Row {index + 1} is locked and cannot be removed")
        log_entry_event("remove", form.id, index, error=str(err))
        raise err

    if has_significant_data(entry):
        if confirm is None or not confirm(REMOVE_CONFIRM_MESSAGE):
            log_entry_event("remove_cancelled", form.id, index)
            return False

    del form.entries[index]
    log_entry_event("remove", form.id, index)
    return True
