# qclog/infra/auth.py
"""
Autenticação do posto de trabalho.

A verificação de credenciais é um colaborador substituível: a aplicação só
conhece o protocolo ``Authenticator``. A implementação padrão compara com
o par usuário/senha configurado (``QCLOG_USERNAME``/``QCLOG_PASSWORD``).
"""

from __future__ import annotations

import hmac
from typing import Optional, Protocol

from qclog.config import DEFAULTS
from qclog.domain.errors import AuthenticationError
from qclog.infra.logger import log_system_event


class Authenticator(Protocol):
    def authenticate(self, username: str, password: str) -> bool:
        ...


class StaticCredentialAuthenticator:
    """Compara com um único par de credenciais."""

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None):
        self.username = username if username is not None else DEFAULTS.username
        self.password = password if password is not None else DEFAULTS.password

    def authenticate(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode(), self.username.encode())
        pass_ok = hmac.compare_digest(password.encode(), self.password.encode())
        return user_ok and pass_ok


def login(authenticator: Authenticator, username: str, password: str) -> str:
    """Valida as credenciais e devolve o usuário autenticado."""
    if not authenticator.authenticate(username, password):
        log_system_event("login_failed", {"username": username}, level="warning")
        raise AuthenticationError("Invalid username or password")
    log_system_event("login_success", {"username": username})
    return username
