"""
Sistema de logging das operações do formulário de inspeção.

Este módulo configura e fornece loggers para registrar as operações
relevantes do sistema: ciclo de vida das linhas, alterações de formulário,
envios ao workflow remoto e eventos gerais.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional


# Flag global para habilitar/desabilitar logging
ENABLE_LOGGING = os.environ.get("QCLOG_ENABLE_LOGGING", "0") == "1"
# Flag global para habilitar/desabilitar prints/output
ENABLE_OUTPUT = False

def print_system(*args, **kwargs):
    """Print controlado pelo ENABLE_OUTPUT."""
    if ENABLE_OUTPUT:
        print(*args, **kwargs)

# Configuração base dos loggers
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logger(name: str, log_file: str, level: int = logging.INFO) -> logging.Logger:
    """
    Configura um logger específico com arquivo de saída.

    O arquivo só é aberto na primeira mensagem emitida.

    Args:
        name: Nome do logger
        log_file: Caminho do arquivo de log
        level: Nível de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Logger configurado
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Remove handlers anteriores (reconfiguração)
    while logger.handlers:
        handler = logger.handlers[0]
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding='utf-8', delay=True)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(file_handler)

    return logger

# Diretório base para logs
BASE_DIR = Path(__file__).parent.parent
LOGS_DIR = Path(os.environ.get("QCLOG_LOG_DIR", str(BASE_DIR / "logs")))

LOG_FILES = {
    "forms": "forms.log",
    "entries": "entries.log",
    "submissions": "submissions.log",
    "system": "system.log",
}

# Loggers específicos para cada tipo de operação
form_logger = setup_logger('qclog.forms', str(LOGS_DIR / LOG_FILES["forms"]))
entry_logger = setup_logger('qclog.entries', str(LOGS_DIR / LOG_FILES["entries"]))
submission_logger = setup_logger('qclog.submissions', str(LOGS_DIR / LOG_FILES["submissions"]))
system_logger = setup_logger('qclog.system', str(LOGS_DIR / LOG_FILES["system"]))


def log_form_event(action: str, form_id: str, **kwargs) -> None:
    """
    Log de operações sobre o formulário (criação, cabeçalho, specs, reset).

    Args:
        action: Ação realizada
        form_id: Identificador do formulário
        **kwargs: Dados adicionais
    """
    if not ENABLE_LOGGING:
        return
    log_data = {"action": action, "form_id": form_id, **kwargs}
    form_logger.info(f"FORM_{action.upper()}: {log_data}")

def log_entry_event(action: str, form_id: str, row: int, error: Optional[str] = None, **kwargs) -> None:
    """
    Log do ciclo de vida das linhas (edição, bloqueio, inclusão, remoção).

    Args:
        action: Ação realizada (update, lock, add, remove)
        form_id: Identificador do formulário
        row: Índice da linha (base 0)
        error: Mensagem de erro quando a operação foi rejeitada
        **kwargs: Dados adicionais
    """
    if not ENABLE_LOGGING:
        return
    log_data = {"action": action, "form_id": form_id, "row": row, **kwargs}
    if error:
        entry_logger.warning(f"ENTRY_{action.upper()}_REJECTED: {error} - {log_data}")
    else:
        entry_logger.info(f"ENTRY_{action.upper()}: {log_data}")

def log_submission(form_id: str, url: str, status: Optional[int] = None, error: Optional[str] = None) -> None:
    """
    Registra um envio ao workflow remoto.

    Args:
        form_id: Identificador do formulário
        url: Endpoint de destino
        status: Status HTTP (se houve resposta)
        error: Mensagem de erro (opcional)
    """
    if not ENABLE_LOGGING:
        return
    log_entry = {
        "timestamp": datetime.now().isoformat(),
        "form_id": form_id,
        "url": url,
        "status": status,
        "success": error is None,
    }
    if error:
        submission_logger.error(f"SUBMIT_FAILED: {error} - {log_entry}")
    else:
        submission_logger.info(f"SUBMIT_SUCCESS: {log_entry}")

def log_system_event(event: str, details: Dict[str, Any] = None, level: str = "info") -> None:
    """
    Log para eventos do sistema.

    Args:
        event: Descrição do evento
        details: Detalhes adicionais (opcional)
        level: Nível do log (info, warning, error)
    """
    if not ENABLE_LOGGING:
        return
    log_data = {
        "event": event,
        "details": details or {}
    }
    log_method = getattr(system_logger, level.lower(), system_logger.info)
    log_method(f"SYSTEM_EVENT: {event} - {log_data}")

def log_file_operation(operation: str, file_path: str, rows_processed: int = 0, **kwargs) -> None:
    """
    Log para operações de arquivo (importação/exportação).

    Args:
        operation: Tipo de operação (import, export)
        file_path: Caminho do arquivo
        rows_processed: Número de linhas processadas
        **kwargs: Dados adicionais
    """
    if not ENABLE_LOGGING:
        return
    log_data = {
        "operation": operation,
        "file_path": file_path,
        "rows_processed": rows_processed,
        **kwargs
    }
    system_logger.info(f"FILE_{operation.upper()}: {log_data}")

def get_log_summary(log_type: str = "forms", lines: int = 100) -> Optional[str]:
    """
    Obtém as linhas mais recentes de um log.

    Args:
        log_type: Tipo de log (forms, entries, submissions, system)
        lines: Número de linhas a retornar

    Returns:
        Conteúdo do log como string (``None`` com logging desativado)
    """
    if not ENABLE_LOGGING:
        return None

    filename = LOG_FILES.get(log_type)
    log_file = LOGS_DIR / filename if filename else None
    if not log_file or not log_file.exists():
        return f"Log {log_type} não encontrado."

    try:
        with open(log_file, 'r', encoding='utf-8') as f:
            all_lines = f.readlines()
            recent_lines = all_lines[-lines:] if len(all_lines) > lines else all_lines
            return ''.join(recent_lines)
    except OSError as e:
        return f"Erro ao ler log {log_type}: {str(e)}"
