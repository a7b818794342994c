from datetime import date

import pytest

from qclog.domain.errors import FormCloseError, FormLimitError, QRPayloadError, UnknownFieldError
from qclog.domain.measure import NOT_APPLICABLE, Measure
from qclog.domain.models import ProductionForm
from qclog.usecases.manage_forms import FormWorkspace, reset_form, set_header_field
from qclog.usecases.target_specs import apply_qr_payload, set_target_spec


class TestFormWorkspace:

    def test_inicia_com_um_formulario(self):
        ws = FormWorkspace()
        assert [f.id for f in ws.forms] == ["form-1"]
        assert ws.active.id == "form-1"
        assert ws.display_names() == ["Form 1"]

    def test_limite_de_formularios(self):
        ws = FormWorkspace(max_forms=3)
        ws.open_form()
        third = ws.open_form()
        assert ws.active is third
        assert third.id.startswith("form-")
        with pytest.raises(FormLimitError):
            ws.open_form()
        assert len(ws.forms) == 3

    def test_nao_fecha_o_ultimo(self):
        ws = FormWorkspace()
        with pytest.raises(FormCloseError):
            ws.close_form("form-1", confirm=lambda _msg: True)

    def test_fechar_formulario_vazio_sem_confirmacao(self):
        ws = FormWorkspace()
        second = ws.open_form()
        assert ws.close_form(second.id) is True
        assert ws.active.id == "form-1"

    def test_fechar_com_dados_exige_confirmacao(self):
        ws = FormWorkspace()
        second = ws.open_form()
        second.operator_name = "Jordan"
        assert ws.close_form(second.id) is False
        assert ws.close_form(second.id, confirm=lambda _msg: False) is False
        assert len(ws.forms) == 2
        assert ws.close_form(second.id, confirm=lambda _msg: True) is True
        assert len(ws.forms) == 1

    def test_fechar_ativo_ativa_vizinho(self):
        ws = FormWorkspace()
        second = ws.open_form()
        third = ws.open_form()
        ws.activate(second.id)
        ws.close_form(second.id)
        assert ws.active is third
        ws.close_form(third.id)
        assert ws.active.id == "form-1"

    def test_fechar_inativo_mantem_ativo(self):
        ws = FormWorkspace()
        second = ws.open_form()
        ws.close_form("form-1")
        assert ws.active is second


def test_set_header_field_regenera_id():
    form = ProductionForm(id="form-1")
    set_header_field(form, "workOrderNumber", "WO123")
    set_header_field(form, "shift", "A")
    assert form.id == "form-1"
    set_header_field(form, "productionLine", " 3 ")
    assert form.id == f"WO123-A3-{form.random_id}"
    assert form.display_name(0) == "WO123-A3"


def test_set_header_field_data_e_campo_desconhecido():
    form = ProductionForm(id="form-1")
    set_header_field(form, "date", "2025-03-04")
    assert form.date == date(2025, 3, 4)
    with pytest.raises(UnknownFieldError):
        set_header_field(form, "supervisor", "X")
    with pytest.raises(ValueError):
        set_header_field(form, "date", "amanhã")


def test_workspace_acompanha_troca_de_id():
    ws = FormWorkspace()
    form = ws.active
    old_id = form.id
    for key, value in (("workOrderNumber", "WO1"), ("shift", "B"), ("productionLine", "2")):
        set_header_field(form, key, value)
    ws.sync_active(old_id, form)
    assert ws.active is form


def test_reset_form_mantem_id(form, fill_row):
    form.operator_name = "Jordan"
    fill_row(form, 0)
    reset_form(form)
    assert form.id == "form-1"
    assert form.operator_name == ""
    assert len(form.entries) == 1
    assert not form.target_specs.has_data()


# -------------------------
# especificações alvo
# -------------------------

def test_apply_qr_payload(specs_payload):
    form = ProductionForm(id="form-1")
    specs = apply_qr_payload(form, specs_payload)
    assert form.target_specs is specs
    assert specs.is_complete()


def test_apply_qr_payload_invalido_nao_altera(form):
    before = form.target_specs
    with pytest.raises(QRPayloadError):
        apply_qr_payload(form, "1.9*^x")
    assert form.target_specs is before
    assert form.target_specs.is_complete()


def test_set_target_spec():
    form = ProductionForm(id="form-1")
    set_target_spec(form, "toeIn", "-")
    assert form.target_specs.toe_in == NOT_APPLICABLE
    set_target_spec(form, "goalPPH", "500")
    assert form.target_specs.goal_pph == Measure.of(500)
    with pytest.raises(UnknownFieldError):
        set_target_spec(form, "colour", "1")
    with pytest.raises(ValueError):
        set_target_spec(form, "goalPPH", "lots")
