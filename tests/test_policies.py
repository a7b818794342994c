from qclog.domain.measure import NOT_APPLICABLE, Measure
from qclog.domain.models import ProductionEntry, ProductionForm
from qclog.domain.policies import (
    IN_SPEC,
    OUT_OF_SPEC,
    REQUIRED_ENTRY_FIELDS,
    WARNING,
    classify_field,
    entry_conformance,
    form_has_data,
    has_significant_data,
    is_first_row_gated,
    missing_header_fields,
    missing_required_fields,
)


def test_linha_nova_tem_todos_os_obrigatorios_faltando():
    assert len(REQUIRED_ENTRY_FIELDS) == 21
    assert missing_required_fields(ProductionEntry()) == list(REQUIRED_ENTRY_FIELDS)


def test_campos_opcionais_nao_sao_obrigatorios():
    for key in ("visual", "print", "dieHeadClean"):
        assert key not in REQUIRED_ENTRY_FIELDS


def test_dados_significativos_ignoram_inicio_e_unidade():
    entry = ProductionEntry(start="09:00", unit_start=Measure.of(11))
    assert not has_significant_data(entry)
    entry.od_average = Measure.of(1.9)
    assert has_significant_data(entry)


def test_form_has_data():
    form = ProductionForm(id="form-1")
    assert not form_has_data(form)
    form.resin_code = "R-12"
    assert form_has_data(form)


def test_form_has_data_por_specs_ou_linhas(specs):
    form = ProductionForm(id="form-1")
    form.target_specs = specs
    assert form_has_data(form)

    form = ProductionForm(id="form-2")
    form.entries[0].visual = "Pass"
    assert form_has_data(form)


def test_missing_header_fields():
    form = ProductionForm(id="form-1")
    assert missing_header_fields(form) == ["shift", "operatorName", "productionLine", "productionSite"]


def test_primeira_linha_bloqueada_sem_specs(specs):
    form = ProductionForm(id="form-1")
    assert is_first_row_gated(form, 0, "odAverage")
    assert not is_first_row_gated(form, 0, "end")
    assert not is_first_row_gated(form, 1, "odAverage")
    form.target_specs = specs
    assert not is_first_row_gated(form, 0, "odAverage")


def test_classify_od_average(specs):
    assert classify_field("odAverage", 1.9, specs) == IN_SPEC
    assert classify_field("odAverage", 1.95, specs) == OUT_OF_SPEC
    assert classify_field("odAverage", "", specs) is None
    assert classify_field("odAverage", 0, specs) is None


def test_classify_caliper_e_parede(specs):
    assert classify_field("odMaximum", 1.925, specs) == IN_SPEC
    assert classify_field("odMinimum", 1.86, specs) == OUT_OF_SPEC
    assert classify_field("wallMinimum", 0.16, specs) == IN_SPEC
    assert classify_field("wallMaximum", 0.19, specs) == OUT_OF_SPEC


def test_classify_metricas_ate_o_alvo(specs):
    assert classify_field("outOfRound", 0.02, specs) == IN_SPEC
    assert classify_field("outOfRound", 0.06, specs) == OUT_OF_SPEC
    assert classify_field("gain", 2.0, specs) == IN_SPEC
    assert classify_field("gain", 4.0, specs) == OUT_OF_SPEC
    assert classify_field("loss", 1.0, specs) == WARNING
    assert classify_field("loss", 0.0, specs) is None


def test_classify_spec_desativada(specs):
    specs.od_min = NOT_APPLICABLE
    assert classify_field("odAverage", 5.0, specs) is None
    specs.set("ovality", 0)
    assert classify_field("ovality", 99.0, specs) is None


def test_classify_visual_e_print(specs):
    assert classify_field("visual", "Pass", specs) == IN_SPEC
    assert classify_field("print", "Fail", specs) == OUT_OF_SPEC
    assert classify_field("visual", "-", specs) is None


def test_entry_conformance(form, fill_row):
    entry = fill_row(form, 0, visual="Fail")
    status = entry_conformance(entry, form.target_specs)
    assert status["odAverage"] == IN_SPEC
    assert status["outOfRound"] == IN_SPEC
    assert status["eccentricity"] == IN_SPEC
    assert status["loss"] == WARNING
    assert status["visual"] == OUT_OF_SPEC
    assert "gain" not in status
    assert "start" not in status
