# qclog/usecases/import_entries.py
"""
UC: Importar linhas de produção de uma planilha (XLSX/CSV).

Obs.:
- As linhas importadas entram como histórico bloqueado.
- A última linha aberta do formulário precisa estar completa, como na
  inclusão manual de linha. Se ela ainda não tem dados do operador
  (vazia, ou só com início/unidade herdados) é substituída pela importação.
- Uma linha importada incompleta só é aceita como última linha, e fica
  aberta para o operador completar; no meio da planilha ela é reportada em
  ``erros``. Se a última linha importada estiver completa, uma nova linha
  aberta é encadeada (início e unidade herdados).
- Linhas com valores inválidos são ignoradas e reportadas em ``erros``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from qclog.adapters.parsers import parse_entry_value
from qclog.adapters.sheet_loader import load_entries_from_sheet
from qclog.domain.errors import RowIncompleteError
from qclog.domain.models import ENTRY_FIELD_BY_KEY, ProductionEntry, ProductionForm, RowState
from qclog.domain.policies import entry_has_data, has_significant_data, missing_required_fields
from qclog.infra.logger import log_entry_event, log_file_operation, log_system_event, print_system
from qclog.usecases.manage_rows import next_entry


def _build_entry(rec: Dict[str, Any]) -> ProductionEntry:
    entry = ProductionEntry()
    for key, raw in rec.items():
        spec = ENTRY_FIELD_BY_KEY[key]
        try:
            setattr(entry, spec.attr, parse_entry_value(spec, raw))
        except ValueError as e:
            raise ValueError(f"{key}: {e}") from e
    return entry


def _has_operator_data(form: ProductionForm) -> bool:
    """A última linha tem algo digitado pelo operador?

    Início e unidade inicial são herdados da linha anterior, exceto na
    primeira linha do formulário.
    """
    last = form.last_entry
    if has_significant_data(last):
        return True
    return len(form.entries) == 1 and entry_has_data(last)


def import_entries(form: ProductionForm, path: str) -> Dict[str, Any]:
    """Lê a planilha e acrescenta as linhas ao formulário.

    Raises:
        RowIncompleteError: a última linha aberta tem dados mas está incompleta
            (o formulário não é alterado).
    """
    log_system_event("import_entries_start", {"form_id": form.id, "file_path": path})
    log_file_operation("import", path)

    last = form.last_entry
    replace_last = False
    if not last.locked:
        if _has_operator_data(form):
            missing = missing_required_fields(last)
            if missing:
                err = RowIncompleteError(missing)
                log_entry_event("import", form.id, len(form.entries) - 1, error=str(err))
                raise err
        else:
            replace_last = True

    try:
        records = load_entries_from_sheet(path)
    except Exception as e:
        log_system_event("import_entries_error", {"file_path": path, "error": str(e)}, level="error")
        raise

    built: List[Tuple[int, ProductionEntry]] = []
    erros: List[Dict[str, Any]] = []
    # linha 1 é o cabeçalho da planilha
    for n, rec in enumerate(records, start=2):
        try:
            built.append((n, _build_entry(rec)))
        except ValueError as e:
            erros.append({"linha": n, "mensagem": str(e)})

    imported: List[ProductionEntry] = []
    for pos, (n, entry) in enumerate(built):
        missing = missing_required_fields(entry)
        if missing and pos < len(built) - 1:
            erros.append({"linha": n, "mensagem": f"incomplete row (missing: {', '.join(missing)})"})
            continue
        imported.append(entry)

    erros.sort(key=lambda e: e["linha"])
    for err in erros:
        log_system_event("import_entries_row_error", {"file_path": path, "linha": err["linha"],
                                                      "error": err["mensagem"]}, level="warning")

    if imported:
        if replace_last:
            form.entries.pop()
        for entry in form.entries:
            entry.lock()
        for entry in imported:
            entry.lock()
            form.entries.append(entry)
            log_entry_event("import", form.id, len(form.entries) - 1)

        tail = form.last_entry
        if missing_required_fields(tail):
            tail.state = RowState.OPEN
        else:
            form.entries.append(next_entry(tail))

    print_system(f">> {len(imported)} linha(s) importada(s), {len(erros)} erro(s).")
    result = {"arquivo": path, "linhas_importadas": len(imported), "erros": erros}
    log_file_operation("import", path, rows_processed=len(imported), errors=len(erros))
    log_system_event("import_entries_success", {"form_id": form.id, "rows_imported": len(imported)})
    return result
