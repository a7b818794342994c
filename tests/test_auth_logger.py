import pytest

from qclog.domain.errors import AuthenticationError
from qclog.infra import logger as log_mod
from qclog.infra.auth import StaticCredentialAuthenticator, login


# -------------------------
# autenticação
# -------------------------

def test_credenciais_padrao():
    auth = StaticCredentialAuthenticator(username="WorkStation1", password="Letmein1")
    assert auth.authenticate("WorkStation1", "Letmein1")
    assert not auth.authenticate("WorkStation1", "wrong")
    assert not auth.authenticate("workstation1", "Letmein1")


def test_login():
    auth = StaticCredentialAuthenticator(username="op", password="secret")
    assert login(auth, "op", "secret") == "op"
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        login(auth, "op", "nope")


def test_login_aceita_outro_autenticador():
    class AllowAll:
        def authenticate(self, username, password):
            return True

    assert login(AllowAll(), "anyone", "x") == "anyone"


def test_authentication_error_e_permission_error():
    assert issubclass(AuthenticationError, PermissionError)


# -------------------------
# logging
# -------------------------

def test_logging_desativado_nao_retorna_resumo(monkeypatch):
    monkeypatch.setattr(log_mod, "ENABLE_LOGGING", False)
    log_mod.log_system_event("noop")
    assert log_mod.get_log_summary("system") is None


def test_logging_ativo_grava_em_arquivo(monkeypatch, tmp_path):
    monkeypatch.setattr(log_mod, "ENABLE_LOGGING", True)
    monkeypatch.setattr(log_mod, "LOGS_DIR", tmp_path)
    monkeypatch.setattr(log_mod, "system_logger",
                        log_mod.setup_logger("qclog.test.system", str(tmp_path / "system.log")))
    monkeypatch.setattr(log_mod, "entry_logger",
                        log_mod.setup_logger("qclog.test.entries", str(tmp_path / "entries.log")))

    log_mod.log_system_event("export_start", {"form_id": "form-1"})
    log_mod.log_entry_event("add", "form-1", 0, error="missing end")

    system = log_mod.get_log_summary("system")
    assert "SYSTEM_EVENT: export_start" in system
    entries = log_mod.get_log_summary("entries")
    assert "ENTRY_ADD_REJECTED: missing end" in entries
    assert "não encontrado" in log_mod.get_log_summary("submissions")
