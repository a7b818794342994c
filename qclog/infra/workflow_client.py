# qclog/infra/workflow_client.py
"""
Cliente HTTP do workflow remoto que recebe os formulários enviados.

Um único POST por envio, sem novas tentativas: qualquer falha de rede ou
resposta fora da faixa 2xx vira ``SubmissionError`` e o operador decide se
reenvia.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from qclog.config import DEFAULTS, SUBMIT_URL
from qclog.domain.errors import SubmissionError
from qclog.infra.logger import log_system_event


class WorkflowClient:
    """POST de payload JSON para o endpoint configurado."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.url = url if url is not None else SUBMIT_URL
        self.timeout = timeout if timeout is not None else DEFAULTS.submit_timeout_s
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def post_json(self, payload: Dict[str, Any]) -> requests.Response:
        if not self.configured:
            raise SubmissionError("Submit endpoint is not configured (set QCLOG_SUBMIT_URL)")
        try:
            resp = self.session.post(self.url, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise SubmissionError(f"Failed to send data: {e}") from e

        if not resp.ok:
            log_system_event("workflow_response_error", {"status": resp.status_code, "body": resp.text[:500]},
                             level="error")
            raise SubmissionError(f"HTTP error! status: {resp.status_code}")
        return resp
