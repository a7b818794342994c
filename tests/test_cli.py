import json
from pathlib import Path

from typer.testing import CliRunner

from qclog.adapters.cli import app

runner = CliRunner()

SPECS = (
    "1.900*^1.920*^1.880*^1.930*^1.870*^0.050*^2.5*^1.0*^"
    "0.150*^0.180*^1.0*^2.0*^10*^500*^1.00*^3.0"
)


def _load(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def _new(tmp_path: Path) -> Path:
    path = tmp_path / "form.json"
    result = runner.invoke(app, ["new", str(path)])
    assert result.exit_code == 0, result.output
    return path


def test_cli_new_nao_sobrescreve(tmp_path: Path):
    path = _new(tmp_path)
    result = runner.invoke(app, ["new", str(path)])
    assert result.exit_code == 1
    result = runner.invoke(app, ["new", str(path), "--force"])
    assert result.exit_code == 0


def test_cli_scan_e_set(tmp_path: Path):
    path = _new(tmp_path)
    # sem specs a primeira linha não aceita medições
    result = runner.invoke(app, ["set", str(path), "1", "odAverage", "1.9"])
    assert result.exit_code == 1

    result = runner.invoke(app, ["scan", str(path), SPECS])
    assert result.exit_code == 0, result.output
    assert _load(path)["targetSpecs"]["theoWtPerFt"] == 1

    result = runner.invoke(app, ["set", str(path), "1", "odAverage", "1.9"])
    assert result.exit_code == 0, result.output
    assert _load(path)["entries"][0]["odAverage"] == 1.9


def test_cli_scan_invalido(tmp_path: Path):
    path = _new(tmp_path)
    result = runner.invoke(app, ["scan", str(path), "1.9*^abc"])
    assert result.exit_code == 1
    assert _load(path)["targetSpecs"]["odAverage"] == ""


def test_cli_set_campo_calculado(tmp_path: Path):
    path = _new(tmp_path)
    result = runner.invoke(app, ["set", str(path), "1", "ovality", "1"])
    assert result.exit_code == 1


def test_cli_calc():
    result = runner.invoke(app, ["calc", "--od-max", "2.010", "--od-min", "1.990",
                                 "--actual", "1.05", "--theo", "1.00"])
    assert result.exit_code == 0, result.output
    assert "outOfRound" in result.output
    assert "0.02" in result.output
    assert "5" in result.output


def test_cli_add_row_incompleta(tmp_path: Path):
    path = _new(tmp_path)
    result = runner.invoke(app, ["add-row", str(path)])
    assert result.exit_code == 1
    assert len(_load(path)["entries"]) == 1


def test_cli_remove_unica_linha(tmp_path: Path):
    path = _new(tmp_path)
    result = runner.invoke(app, ["remove-row", str(path), "--yes"])
    assert result.exit_code == 1


def test_cli_header_e_export(tmp_path: Path):
    path = _new(tmp_path)
    for key, value in (("productionSite", "Plant 2"), ("shift", "A"), ("operatorName", "Jordan"),
                       ("productionLine", "3"), ("workOrderNumber", "WO123"), ("date", "2025-03-04")):
        result = runner.invoke(app, ["header", str(path), key, value])
        assert result.exit_code == 0, result.output
    data = _load(path)
    assert data["id"].startswith("WO123-A3-")

    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["export", str(path), "--out", str(out_dir)])
    assert result.exit_code == 0, result.output
    exported = out_dir / f"production-form-{data['id']}-2025-03-04.json"
    assert exported.exists()
    assert _load(exported)["formId"] == data["id"]


def test_cli_export_sem_cabecalho(tmp_path: Path):
    path = _new(tmp_path)
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["export", str(path), "--out", str(out_dir)])
    assert result.exit_code == 0, result.output
    assert len(list(out_dir.glob("production-form-form-1-*.json"))) == 1


def test_cli_export_ordem_com_barra(tmp_path: Path):
    path = _new(tmp_path)
    for key, value in (("workOrderNumber", "WO/123"), ("shift", "A"), ("productionLine", "3")):
        runner.invoke(app, ["header", str(path), key, value])
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["export", str(path), "--out", str(out_dir)])
    assert result.exit_code == 0, result.output
    assert len(list(out_dir.glob("production-form-WO_123-A3-*.json"))) == 1


def test_cli_export_erro_de_arquivo(tmp_path: Path):
    path = _new(tmp_path)
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    result = runner.invoke(app, ["export", str(path), "--out", str(blocker / "out")])
    assert result.exit_code == 1
    assert not isinstance(result.exception, OSError)


def test_cli_submit_sem_endpoint(tmp_path: Path):
    path = _new(tmp_path)
    for key, value in (("productionSite", "Plant 2"), ("shift", "A"), ("operatorName", "Jordan"),
                       ("productionLine", "3")):
        runner.invoke(app, ["header", str(path), key, value])
    result = runner.invoke(app, ["submit", str(path), "--url", ""])
    assert result.exit_code == 1


def test_cli_show_e_summary(tmp_path: Path):
    path = _new(tmp_path)
    runner.invoke(app, ["scan", str(path), SPECS])
    result = runner.invoke(app, ["show", str(path)])
    assert result.exit_code == 0, result.output
    result = runner.invoke(app, ["summary", str(path)])
    assert result.exit_code == 0, result.output
    assert "total_units" in result.output


def test_cli_arquivo_inexistente(tmp_path: Path):
    result = runner.invoke(app, ["show", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
