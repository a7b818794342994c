import json
from datetime import datetime, timezone
from math import isclose
from unittest.mock import Mock

import pytest
import requests

from qclog.domain.errors import MissingHeaderFieldsError, SubmissionError
from qclog.domain.models import ProductionForm
from qclog.infra.workflow_client import WorkflowClient
from qclog.usecases.export_form import build_payload, export_filename, export_form
from qclog.usecases.submit_form import autosave, submit_form

NOW = datetime(2025, 3, 4, 15, 30, tzinfo=timezone.utc)


def _client(status=200, ok=True, side_effect=None):
    session = Mock()
    if side_effect is not None:
        session.post.side_effect = side_effect
    else:
        session.post.return_value = Mock(ok=ok, status_code=status, text="")
    return WorkflowClient(url="http://workflow.test/submit", timeout=5, session=session), session


# -------------------------
# payload / exportação
# -------------------------

def test_build_payload_inclui_campos_calculados(header_form, fill_row):
    fill_row(header_form, 0)
    payload = build_payload(header_form, now=NOW)
    assert payload["formId"] == header_form.id
    assert payload["id"] == header_form.id
    assert payload["exportDate"] == NOW.isoformat()
    assert payload["productionSite"] == "Plant 2"
    assert payload["targetSpecs"]["odAverage"] == 1.9

    row = payload["entries"][0]
    assert row["odAverage"] == 1.9
    assert row["unitEnd"] == 10
    assert row["outOfRound"] == 0.02
    assert isclose(row["loss"], 2.0)
    assert row["gain"] == 0.0
    assert row["locked"] is False
    # serializável
    json.dumps(payload)


def test_export_form_grava_arquivo(tmp_path, header_form, fill_row):
    fill_row(header_form, 0)
    path = export_form(header_form, tmp_path, now=NOW)
    assert path.name == export_filename(header_form)
    assert path.name == f"production-form-{header_form.id}-{header_form.date.isoformat()}.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["formId"] == header_form.id
    assert data["entries"][0]["ovality"] > 0


def test_export_form_sem_cabecalho_grava(tmp_path):
    form = ProductionForm(id="form-1")
    path = export_form(form, tmp_path, now=NOW)
    assert path.parent == tmp_path
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["formId"] == "form-1"
    assert data["operatorName"] == ""


def test_export_filename_sem_separadores(tmp_path, header_form):
    header_form.work_order_number = "WO/12 3"
    header_form.refresh_id()
    name = export_filename(header_form)
    assert "/" not in name and " " not in name
    assert name.startswith("production-form-WO_12_3-A3-")

    path = export_form(header_form, tmp_path, now=NOW)
    assert path.parent == tmp_path
    assert json.loads(path.read_text(encoding="utf-8"))["formId"] == header_form.id


def test_export_form_diretorio_invalido(tmp_path, header_form):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    with pytest.raises(OSError):
        export_form(header_form, blocker / "out")


def test_payload_volta_para_o_formulario(header_form, fill_row):
    fill_row(header_form, 0)
    loaded = ProductionForm.from_dict(build_payload(header_form, now=NOW))
    assert loaded.id == header_form.id
    assert loaded.random_id == header_form.random_id
    assert loaded.entries[0].od_average == header_form.entries[0].od_average
    assert loaded.target_specs.is_complete()


# -------------------------
# envio
# -------------------------

def test_submit_form_envia_payload(header_form):
    client, session = _client()
    res = submit_form(header_form, client)
    assert res == {"form_id": header_form.id, "status": 200}
    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args[0] == "http://workflow.test/submit"
    assert kwargs["json"]["formId"] == header_form.id
    assert kwargs["timeout"] == 5
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_submit_form_sem_cabecalho_nao_envia():
    client, session = _client()
    with pytest.raises(MissingHeaderFieldsError):
        submit_form(ProductionForm(id="form-1"), client)
    session.post.assert_not_called()


def test_submit_form_erro_http(header_form):
    client, _ = _client(status=500, ok=False)
    with pytest.raises(SubmissionError, match="HTTP error! status: 500"):
        submit_form(header_form, client)


def test_submit_form_erro_de_rede(header_form):
    client, _ = _client(side_effect=requests.ConnectionError("refused"))
    with pytest.raises(SubmissionError, match="Failed to send data"):
        submit_form(header_form, client)


def test_submit_form_sem_endpoint(header_form):
    client = WorkflowClient(url="", session=Mock())
    assert not client.configured
    with pytest.raises(SubmissionError):
        submit_form(header_form, client)


def test_autosave_silencioso(header_form):
    assert autosave(header_form, WorkflowClient(url="", session=Mock())) is False

    client, _ = _client()
    assert autosave(header_form, client) is True

    client, _ = _client(status=503, ok=False)
    assert autosave(header_form, client) is False
