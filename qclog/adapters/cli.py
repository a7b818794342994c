# qclog/adapters/cli.py
"""
CLI do registro de inspeção de produção (Typer).

O formulário de trabalho é um arquivo JSON (mesmo formato da exportação).
Cada comando carrega o arquivo, aplica a operação e grava de volta.

Comandos principais:
- new <form.json>                    -> cria um formulário vazio
- header <form.json> <campo> <valor> -> altera o cabeçalho
- scan <form.json> <payload>         -> aplica o QR/código de barras das specs
- spec <form.json> <campo> <valor>   -> altera uma especificação alvo
- set <form.json> <linha> <campo> <valor> -> altera um campo de uma linha
- add-row / remove-row <form.json>   -> inclui/remove linhas
- show / summary <form.json>         -> tabela de linhas e resumo
- calc                               -> calcula as métricas derivadas avulsas
- export / submit <form.json>        -> JSON final / envio ao workflow
- import-sheet <form.json> <xlsx|csv> -> importa linhas de planilha
- logs                               -> últimas linhas de um log
- tui                                -> interface terminal
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from qclog.config import DEFAULTS, EXPORT_DIR, SUBMIT_URL
from qclog.domain import formulas
from qclog.domain.errors import QCLogError
from qclog.domain.measure import Measure
from qclog.domain.models import CALCULATED_FIELDS, ENTRY_FIELDS, ProductionForm
from qclog.domain.policies import IN_SPEC, OUT_OF_SPEC, WARNING, entry_conformance
from qclog.infra.logger import get_log_summary
from qclog.infra.workflow_client import WorkflowClient
from qclog.usecases.export_form import export_form
from qclog.usecases.import_entries import import_entries
from qclog.usecases.manage_forms import reset_form, set_header_field
from qclog.usecases.manage_rows import add_entry, remove_entry, update_entry
from qclog.usecases.submit_form import autosave as autosave_form, submit_form
from qclog.usecases.summary import summarize
from qclog.usecases.target_specs import apply_qr_payload, set_target_spec


app = typer.Typer(help="QC Production Log — CLI")
console = Console()

STATUS_STYLE = {IN_SPEC: "bold green", OUT_OF_SPEC: "bold red", WARNING: "bold yellow"}


# -----------------------
# util
# -----------------------

def _fail(e: Exception) -> None:
    console.print(f"[bold red]❌ {e}[/]")
    raise typer.Exit(code=1)


def _load_form(path: str) -> ProductionForm:
    p = Path(path)
    if not p.exists():
        _fail(FileNotFoundError(f"form file not found: {path}"))
    return ProductionForm.from_dict(json.loads(p.read_text(encoding="utf-8")))


def _save_form(form: ProductionForm, path: str) -> None:
    Path(path).write_text(json.dumps(form.to_dict(), indent=2), encoding="utf-8")


def _fmt(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, float):
        return f"{val:.3f}".rstrip("0").rstrip(".") if val else "0"
    return str(val)


def _display_kv(data: Dict[str, Any], title: str = "Resultado") -> None:
    """Exibe um dicionário como tabela de duas colunas."""
    if not data:
        console.print(Panel("Nenhum dado encontrado", title=title, border_style="yellow"))
        return
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Campo")
    table.add_column("Valor", justify="right")
    for key, val in data.items():
        table.add_row(str(key), _fmt(val))
    console.print(table)


def _display_entries(form: ProductionForm) -> None:
    """Tabela de linhas com campos calculados coloridos por conformidade."""
    table = Table(title=f"Production Form {form.display_name(0)}", box=box.ROUNDED)
    table.add_column("#", justify="right")
    for f in ENTRY_FIELDS:
        table.add_column(f.label, justify="right")
    for key in CALCULATED_FIELDS:
        table.add_column(key, justify="right")

    for i, entry in enumerate(form.entries):
        status = entry_conformance(entry, form.target_specs)
        calc = formulas.calculate_entry_fields(entry, form.target_specs)
        cells: List[str] = [f"{i + 1}{' 🔒' if entry.locked else ''}"]
        values = [(f.key, str(entry.get(f.key))) for f in ENTRY_FIELDS]
        values += [(key, _fmt(calc[key])) for key in CALCULATED_FIELDS]
        for key, text in values:
            style = STATUS_STYLE.get(status.get(key, ""))
            cells.append(f"[{style}]{text}[/]" if style and text else text)
        table.add_row(*cells)
    console.print(table)


# -----------------------
# comandos do formulário
# -----------------------

@app.command("new")
def cmd_new(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    force: bool = typer.Option(False, "--force", help="Sobrescreve um arquivo existente"),
):
    """Cria um formulário vazio (uma linha aberta)."""
    if Path(path).exists() and not force:
        _fail(FileExistsError(f"{path} already exists (use --force)"))
    form = ProductionForm(id="form-1")
    _save_form(form, path)
    typer.echo(f">> Formulário criado em: {path}")


@app.command("header")
def cmd_header(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    key: str = typer.Argument(..., help="productionSite | date | shift | operatorName | ..."),
    value: str = typer.Argument(..., help="Novo valor"),
):
    """Altera um campo do cabeçalho (o id é regenerado)."""
    form = _load_form(path)
    try:
        set_header_field(form, key, value)
    except (QCLogError, KeyError, ValueError) as e:
        _fail(e)
    _save_form(form, path)
    typer.echo(f">> {key} = {value} (id: {form.id})")


@app.command("reset")
def cmd_reset(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Não pede confirmação"),
):
    """Limpa cabeçalho, especificações e linhas."""
    if not yes and not typer.confirm("Reset the form? All data will be lost."):
        raise typer.Exit(code=1)
    form = reset_form(_load_form(path))
    _save_form(form, path)
    typer.echo(">> Formulário limpo.")


@app.command("scan")
def cmd_scan(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    payload: str = typer.Argument(..., help="Conteúdo lido do QR/código de barras (separado por *^)"),
):
    """Aplica as especificações alvo lidas do QR/código de barras."""
    form = _load_form(path)
    try:
        specs = apply_qr_payload(form, payload)
    except QCLogError as e:
        _fail(e)
    _save_form(form, path)
    _display_kv(specs.to_dict(), title="Target Specifications")


@app.command("spec")
def cmd_spec(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    key: str = typer.Argument(..., help="odAverage | odMax | ... | targetGain"),
    value: str = typer.Argument(..., help="Número, '-' ou vazio"),
):
    """Altera uma especificação alvo manualmente."""
    form = _load_form(path)
    try:
        set_target_spec(form, key, value)
    except (QCLogError, KeyError, ValueError) as e:
        _fail(e)
    _save_form(form, path)
    typer.echo(f">> {key} = {form.target_specs.get(key)}")


@app.command("set")
def cmd_set(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    row: int = typer.Argument(..., help="Número da linha (1 = primeira)"),
    key: str = typer.Argument(..., help="Campo (ex.: odAverage, unitEnd, visual)"),
    value: str = typer.Argument(..., help="Novo valor ('' limpa)"),
    no_gate: bool = typer.Option(False, "--no-gate", help="Ignora o bloqueio da 1a linha sem specs"),
):
    """Altera um campo de uma linha."""
    form = _load_form(path)
    try:
        update_entry(form, row - 1, key, value, gate_first_row=False if no_gate else None)
    except (QCLogError, KeyError, ValueError, IndexError) as e:
        _fail(e)
    _save_form(form, path)
    typer.echo(f">> Linha {row}: {key} = {form.entries[row - 1].get(key)}")


@app.command("add-row")
def cmd_add_row(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    autosave: bool = typer.Option(False, "--autosave", help="Envia o formulário antes de incluir a linha"),
):
    """Inclui uma nova linha (a última precisa estar completa)."""
    form = _load_form(path)
    try:
        add_entry(form, autosave=autosave_form if autosave else None)
    except QCLogError as e:
        _fail(e)
    _save_form(form, path)
    typer.echo(f">> Linha {len(form.entries)} incluída.")


@app.command("remove-row")
def cmd_remove_row(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    row: Optional[int] = typer.Option(None, "--row", help="Número da linha (padrão: última)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Confirma a remoção de linha com dados"),
):
    """Remove uma linha aberta."""
    form = _load_form(path)
    confirm = (lambda _msg: True) if yes else typer.confirm
    try:
        removed = remove_entry(form, None if row is None else row - 1, confirm=confirm)
    except (QCLogError, IndexError) as e:
        _fail(e)
    if not removed:
        typer.echo("Remoção cancelada.")
        raise typer.Exit(code=1)
    _save_form(form, path)
    typer.echo(">> Linha removida.")


@app.command("show")
def cmd_show(path: str = typer.Argument(..., help="Arquivo JSON do formulário")):
    """Exibe as linhas com os campos calculados."""
    _display_entries(_load_form(path))


@app.command("summary")
def cmd_summary(path: str = typer.Argument(..., help="Arquivo JSON do formulário")):
    """Resumo: totais, peso médio, ganho/perda e unidades."""
    form = _load_form(path)
    _display_kv(summarize(form).to_dict(), title="Production Summary")


@app.command("calc")
def cmd_calc(
    od_maximum: str = typer.Option("", "--od-max", help="Caliper max"),
    od_minimum: str = typer.Option("", "--od-min", help="Caliper min"),
    od_average: str = typer.Option("", "--od-avg", help="OD average"),
    od_end: str = typer.Option("", "--od-end", help="OD end"),
    wall_maximum: str = typer.Option("", "--wall-max", help="Wall max"),
    wall_minimum: str = typer.Option("", "--wall-min", help="Wall min"),
    actual: str = typer.Option("", "--actual", help="Actual wt/ft"),
    theo: str = typer.Option("", "--theo", help="Theoretical wt/ft"),
):
    """Calcula outOfRound, ovality, toeIn, eccentricity e gain/loss."""
    try:
        raw = [Measure.coerce(v) for v in (od_maximum, od_minimum, od_average, od_end,
                                           wall_maximum, wall_minimum, actual, theo)]
    except ValueError as e:
        _fail(e)
    od_max, od_min, od_avg, end, w_max, w_min, act, th = raw
    gain, loss = formulas.gain_loss(act, th)
    _display_kv({
        "outOfRound": formulas.out_of_round(od_max, od_min),
        "ovality": formulas.ovality(od_max, od_min),
        "toeIn": formulas.toe_in(end, od_avg),
        "eccentricity": formulas.eccentricity(w_max, w_min),
        "gain": gain,
        "loss": loss,
    }, title="Derived Metrics")


# -----------------------
# exportação / envio / importação
# -----------------------

@app.command("export")
def cmd_export(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    out_dir: str = typer.Option(EXPORT_DIR, "--out", help="Diretório de saída"),
):
    """Gera o JSON final com campos calculados."""
    form = _load_form(path)
    try:
        out = export_form(form, out_dir)
    except (QCLogError, OSError) as e:
        _fail(e)
    typer.echo(f">> Exportado: {out}")


@app.command("submit")
def cmd_submit(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    url: str = typer.Option(SUBMIT_URL, "--url", help="Endpoint do workflow"),
    timeout: float = typer.Option(DEFAULTS.submit_timeout_s, "--timeout", help="Timeout em segundos"),
):
    """Envia o formulário ao workflow remoto."""
    form = _load_form(path)
    try:
        res = submit_form(form, WorkflowClient(url=url, timeout=timeout))
    except QCLogError as e:
        _fail(e)
    console.print(f"[bold green]✅ Form submitted successfully (HTTP {res['status']})[/]")


@app.command("import-sheet")
def cmd_import_sheet(
    path: str = typer.Argument(..., help="Arquivo JSON do formulário"),
    sheet: str = typer.Argument(..., help="Planilha XLSX ou CSV com as linhas"),
):
    """Importa linhas de produção de uma planilha."""
    form = _load_form(path)
    try:
        info = import_entries(form, sheet)
    except (QCLogError, ValueError, OSError) as e:
        _fail(e)
    _save_form(form, path)
    _display_kv({"arquivo": info["arquivo"], "linhas_importadas": info["linhas_importadas"],
                 "erros": len(info["erros"])}, title="Importação de Linhas")
    for err in info["erros"]:
        console.print(f"[yellow]linha {err['linha']}: {err['mensagem']}[/]")


@app.command("logs")
def cmd_logs(
    log_type: str = typer.Option("forms", "--type", help="forms | entries | submissions | system"),
    lines: int = typer.Option(50, "--lines", help="Número de linhas"),
):
    """Mostra as últimas linhas de um log."""
    content = get_log_summary(log_type, lines)
    if content is None:
        typer.echo("Logging desativado (QCLOG_ENABLE_LOGGING=1 para ativar).")
        return
    console.print(Panel(content or "(vazio)", title=f"Log: {log_type}", border_style="blue"))


@app.command("tui")
def cmd_tui():
    """
    Inicia a Interface Terminal (TUI) interativa.

    A TUI pede login e permite editar vários formulários em abas.
    """
    try:
        from qclog.adapters.mainframe_tui import main as tui_main
        typer.echo("🚀 Iniciando Interface Terminal...")
        tui_main()
    except KeyboardInterrupt:
        typer.echo("\n👋 Saindo do TUI...")
        raise typer.Exit(0)


# Entry point opcional:
def main():
    app()


if __name__ == "__main__":
    main()
