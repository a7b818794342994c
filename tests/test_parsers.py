from datetime import date

import pytest

from qclog.adapters.parsers import (
    parse_date,
    parse_entry_value,
    parse_measure,
    parse_qr_payload,
    parse_time,
)
from qclog.domain.errors import QRPayloadError
from qclog.domain.measure import NOT_APPLICABLE, UNSET, Measure
from qclog.domain.models import ENTRY_FIELD_BY_KEY


def test_parse_measure_variantes():
    assert parse_measure("") == UNSET
    assert parse_measure("  ") == UNSET
    assert parse_measure("-") == NOT_APPLICABLE
    assert parse_measure("2.010") == Measure.of(2.01)
    assert parse_measure("5,5") == Measure.of(5.5)
    assert parse_measure(".5") == Measure.of(0.5)
    assert parse_measure(3) == Measure.of(3)


def test_parse_measure_zero_e_valor():
    m = parse_measure("0")
    assert m.is_numeric
    assert m.as_float() == 0.0


def test_parse_measure_invalido():
    with pytest.raises(ValueError):
        parse_measure("abc")
    with pytest.raises(ValueError):
        parse_measure("1.2.3")


def test_parse_measure_sem_traco():
    with pytest.raises(ValueError):
        parse_measure("-", allow_not_applicable=False)


def test_parse_measure_inteiro():
    m = parse_measure("12", integer=True)
    assert m.to_json() == 12
    assert isinstance(m.to_json(), int)
    with pytest.raises(ValueError):
        parse_measure("3.5", integer=True)


def test_measure_json():
    assert Measure.of(2.0).to_json() == 2
    assert Measure.of(2.5).to_json() == 2.5
    assert UNSET.to_json() == ""
    assert NOT_APPLICABLE.to_json() == "-"
    assert Measure.from_json("-") == NOT_APPLICABLE
    with pytest.raises(ValueError):
        Measure.coerce(True)


def test_parse_time():
    assert parse_time("8:05") == "08:05"
    assert parse_time("08:05:00") == "08:05"
    assert parse_time("") == ""
    with pytest.raises(ValueError):
        parse_time("25:00")
    with pytest.raises(ValueError):
        parse_time("noon")


def test_parse_entry_value_opcoes():
    assert parse_entry_value(ENTRY_FIELD_BY_KEY["visual"], "pass") == "Pass"
    assert parse_entry_value(ENTRY_FIELD_BY_KEY["scrapCode"], "b") == "B"
    assert parse_entry_value(ENTRY_FIELD_BY_KEY["dieHeadClean"], "") == ""
    with pytest.raises(ValueError):
        parse_entry_value(ENTRY_FIELD_BY_KEY["visual"], "maybe")


def test_parse_entry_value_campos_de_linha_nao_aceitam_traco():
    with pytest.raises(ValueError):
        parse_entry_value(ENTRY_FIELD_BY_KEY["odAverage"], "-")
    with pytest.raises(ValueError):
        parse_entry_value(ENTRY_FIELD_BY_KEY["unitEnd"], "10.5")


def test_parse_date():
    assert parse_date("2025-03-04") == date(2025, 3, 4)
    assert parse_date("03/04/2025") == date(2025, 3, 4)
    assert parse_date("2025-03-04T10:00:00Z") == date(2025, 3, 4)
    with pytest.raises(ValueError):
        parse_date("ontem")


def test_qr_payload_completo(specs_payload):
    specs = parse_qr_payload(specs_payload)
    assert specs.od_average == Measure.of(1.9)
    assert specs.od_max == Measure.of(1.92)
    assert specs.theo_wt_per_ft == Measure.of(1.0)
    assert specs.target_gain == Measure.of(3.0)
    assert specs.is_complete()


def test_qr_payload_vazios_zeros_e_traco():
    specs = parse_qr_payload("1.9*^*^0*^-")
    assert specs.od_average == Measure.of(1.9)
    assert specs.od_max == UNSET
    assert specs.od_min == UNSET
    assert specs.caliper_maximum == NOT_APPLICABLE
    # posições ausentes ficam sem valor
    assert specs.target_gain == UNSET
    assert not specs.is_complete()
    assert specs.has_data()


def test_qr_payload_posicoes_extras_ignoradas(specs_payload):
    specs = parse_qr_payload(specs_payload + "*^99*^98")
    assert specs.is_complete()
    assert specs.target_gain == Measure.of(3.0)


def test_qr_payload_invalido():
    with pytest.raises(QRPayloadError):
        parse_qr_payload("1.9*^abc")
    with pytest.raises(QRPayloadError):
        parse_qr_payload("")
    with pytest.raises(ValueError):
        parse_qr_payload("   ")
