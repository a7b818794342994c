# qclog/usecases/export_form.py
"""
UC: Exportar o formulário como JSON.

O mesmo payload é usado no envio ao workflow remoto: campos do formulário,
``formId``, ``exportDate`` e as linhas com os campos calculados.
"""
from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from qclog.config import EXPORT_DIR
from qclog.domain import formulas
from qclog.domain.errors import MissingHeaderFieldsError
from qclog.domain.models import ProductionForm
from qclog.domain.policies import missing_header_fields
from qclog.infra.logger import log_file_operation, log_system_event


def build_payload(form: ProductionForm, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    entries = []
    for entry in form.entries:
        row = entry.to_dict()
        row.update(formulas.calculate_entry_fields(entry, form.target_specs))
        entries.append(row)
    return {
        **form.to_dict(),
        "formId": form.id,
        "exportDate": now.isoformat(),
        "entries": entries,
    }


# caracteres fora deste conjunto viram "_" no nome do arquivo
_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


def export_filename(form: ProductionForm) -> str:
    safe_id = _UNSAFE_FILENAME_RE.sub("_", form.id).strip("._") or "form"
    return f"production-form-{safe_id}-{form.date.isoformat()}.json"


def require_header(form: ProductionForm) -> None:
    missing = missing_header_fields(form)
    if missing:
        raise MissingHeaderFieldsError(missing)


def export_form(form: ProductionForm, directory: Union[str, Path, None] = None,
                now: Optional[datetime] = None) -> Path:
    """Grava o JSON do formulário e devolve o caminho do arquivo.

    A exportação não exige o cabeçalho completo (só o envio exige).
    """
    log_system_event("export_start", {"form_id": form.id})
    try:
        out_dir = Path(directory if directory is not None else EXPORT_DIR)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / export_filename(form)
        payload = build_payload(form, now)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        log_file_operation("export", str(path), rows_processed=len(form.entries), form_id=form.id)
        log_system_event("export_success", {"form_id": form.id, "path": str(path)})
        return path
    except Exception as e:
        log_system_event("export_error", {"form_id": form.id, "error": str(e)}, level="error")
        raise
