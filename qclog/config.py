# qclog/config.py
"""
Configurações globais e valores padrão do registro de inspeção.

Todos os valores podem ser sobrescritos por variáveis de ambiente
(prefixo ``QCLOG_``).
"""

import os
from dataclasses import dataclass


# Diretório padrão para os arquivos JSON exportados
EXPORT_DIR = os.environ.get("QCLOG_EXPORT_DIR", os.getcwd())

# Endpoint do workflow que recebe os formulários enviados
SUBMIT_URL = os.environ.get("QCLOG_SUBMIT_URL", "")


@dataclass
class DefaultConfig:
    """Valores padrão para parâmetros do sistema."""
    max_open_forms: int = 12  # limite de abas abertas
    submit_timeout_s: float = 30.0
    gate_first_row_on_specs: bool = True  # 1a linha bloqueada até specs completas
    username: str = "WorkStation1"
    password: str = "Letmein1"


def _load_defaults() -> DefaultConfig:
    cfg = DefaultConfig()
    timeout = os.environ.get("QCLOG_SUBMIT_TIMEOUT")
    if timeout:
        cfg.submit_timeout_s = float(timeout)
    cfg.username = os.environ.get("QCLOG_USERNAME", cfg.username)
    cfg.password = os.environ.get("QCLOG_PASSWORD", cfg.password)
    return cfg


# Instância global dos valores padrão
DEFAULTS = _load_defaults()
