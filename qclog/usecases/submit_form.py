# qclog/usecases/submit_form.py
"""
UC: Enviar o formulário ao workflow remoto (POST JSON).

Obs.: sem novas tentativas. Em falha o formulário não é alterado e o erro
sobe como ``SubmissionError``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from qclog.domain.errors import QCLogError
from qclog.domain.models import ProductionForm
from qclog.infra.logger import log_submission, log_system_event
from qclog.infra.workflow_client import WorkflowClient
from qclog.usecases.export_form import build_payload, require_header


def submit_form(form: ProductionForm, client: Optional[WorkflowClient] = None) -> Dict[str, Any]:
    """Valida o cabeçalho, monta o payload e envia.

    Returns:
        ``{"form_id", "status"}`` do envio bem-sucedido.
    """
    client = client or WorkflowClient()
    log_system_event("submit_start", {"form_id": form.id})
    try:
        require_header(form)
        payload = build_payload(form)
        resp = client.post_json(payload)
    except QCLogError as e:
        log_submission(form.id, client.url, error=str(e))
        log_system_event("submit_error", {"form_id": form.id, "error": str(e)}, level="error")
        raise

    log_submission(form.id, client.url, status=resp.status_code)
    log_system_event("submit_success", {"form_id": form.id, "status": resp.status_code})
    return {"form_id": form.id, "status": resp.status_code}


def autosave(form: ProductionForm, client: Optional[WorkflowClient] = None) -> bool:
    """Envio silencioso usado ao incluir uma linha. Nunca levanta erro."""
    client = client or WorkflowClient()
    if not client.configured:
        return False
    try:
        submit_form(form, client)
    except QCLogError:
        return False
    return True
