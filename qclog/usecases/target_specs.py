# qclog/usecases/target_specs.py
"""
UC: Especificações alvo (leitura de QR/código de barras e edição manual).
"""
from __future__ import annotations

from typing import Any

from qclog.adapters.parsers import parse_measure, parse_qr_payload
from qclog.domain.errors import QRPayloadError, UnknownFieldError
from qclog.domain.models import ProductionForm, TargetSpecifications
from qclog.infra.logger import log_form_event, log_system_event


def apply_qr_payload(form: ProductionForm, payload: str) -> TargetSpecifications:
    """Substitui as especificações do formulário pelo conteúdo lido.

    Em caso de conteúdo inválido o formulário não é alterado.
    """
    log_system_event("qr_scan_start", {"form_id": form.id, "length": len(payload or "")})
    try:
        specs = parse_qr_payload(payload)
    except QRPayloadError as e:
        log_system_event("qr_scan_error", {"form_id": form.id, "error": str(e)}, level="error")
        raise
    form.target_specs = specs
    log_form_event("specs_scanned", form.id, specs=specs.to_dict())
    return specs


def set_target_spec(form: ProductionForm, key: str, value: Any) -> TargetSpecifications:
    """Edição manual de uma especificação (aceita ``-``)."""
    try:
        form.target_specs.get(key)
    except KeyError:
        raise UnknownFieldError(key) from None
    form.target_specs.set(key, parse_measure(value))
    log_form_event("spec", form.id, field=key, value=form.target_specs.get(key).to_json())
    return form.target_specs
