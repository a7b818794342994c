import pytest

from qclog.adapters.parsers import parse_qr_payload
from qclog.domain.models import ProductionForm
from qclog.usecases.manage_rows import update_entry

# 16 posições, na ordem do QR
SPECS_PAYLOAD = (
    "1.900*^1.920*^1.880*^1.930*^1.870*^0.050*^2.5*^1.0*^"
    "0.150*^0.180*^1.0*^2.0*^10*^500*^1.00*^3.0"
)

COMPLETE_ROW = {
    "start": "08:00",
    "end": "09:00",
    "odAverage": "1.900",
    "odMaximum": "1.910",
    "odMinimum": "1.890",
    "odEnd": "1.905",
    "wallMinimum": "0.160",
    "wallMaximum": "0.170",
    "odAtSaw": "1.900",
    "odAtVacTank": "1.900",
    "meltPress": "2500",
    "unitStart": "1",
    "unitEnd": "10",
    "actualPPH": "480",
    "actualWtPerFt": "1.02",
    "acceptedFt": "1000",
    "acceptedLbs": "1020",
    "scrapFts": "5",
    "scrapLbs": "5.1",
    "scrapCode": "A",
    "regrindConsumed": "10",
}


@pytest.fixture
def specs_payload():
    return SPECS_PAYLOAD


@pytest.fixture
def specs():
    return parse_qr_payload(SPECS_PAYLOAD)


@pytest.fixture
def form(specs):
    f = ProductionForm(id="form-1")
    f.target_specs = specs
    return f


@pytest.fixture
def header_form(form):
    form.production_site = "Plant 2"
    form.shift = "A"
    form.operator_name = "Jordan"
    form.production_line = "3"
    form.work_order_number = "WO123"
    form.refresh_id()
    return form


@pytest.fixture
def fill_row():
    """Preenche a linha ``index`` com valores completos (sobrescritos por ``overrides``)."""
    def _fill(form, index=0, **overrides):
        values = {**COMPLETE_ROW, **overrides}
        for key, value in values.items():
            update_entry(form, index, key, value)
        return form.entries[index]
    return _fill


@pytest.fixture
def complete_row():
    return dict(COMPLETE_ROW)
