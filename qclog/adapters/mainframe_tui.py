from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical, ScrollableContainer
from textual.widgets import Button, Header, Footer, Static, Tree, Input, DataTable, Label
from textual.screen import ModalScreen, Screen

from qclog.adapters.parsers import parse_qr_payload
from qclog.domain import formulas
from qclog.domain.errors import AuthenticationError, QRPayloadError
from qclog.domain.models import (
    CALCULATED_FIELDS,
    ENTRY_FIELDS,
    HEADER_FIELDS,
    TARGET_SPEC_FIELDS,
    ProductionForm,
)
from qclog.domain.policies import (
    IN_SPEC,
    OUT_OF_SPEC,
    WARNING,
    entry_conformance,
    form_has_data,
    has_significant_data,
)
from qclog.infra.auth import Authenticator, StaticCredentialAuthenticator, login
from qclog.infra.logger import ENABLE_LOGGING, log_system_event, get_log_summary
from qclog.infra.workflow_client import WorkflowClient
from qclog.usecases.export_form import export_form
from qclog.usecases.import_entries import import_entries
from qclog.usecases.manage_forms import CLOSE_CONFIRM_MESSAGE, FormWorkspace, reset_form, set_header_field
from qclog.usecases.manage_rows import REMOVE_CONFIRM_MESSAGE, add_entry, remove_entry, update_entry
from qclog.usecases.submit_form import autosave, submit_form
from qclog.usecases.summary import summarize
from qclog.usecases.target_specs import apply_qr_payload, set_target_spec


STATUS_STYLE = {IN_SPEC: "bold green", OUT_OF_SPEC: "bold red", WARNING: "bold yellow"}

TABLE_COLUMNS: Tuple[str, ...] = ("#",) + tuple(f.label for f in ENTRY_FIELDS) + CALCULATED_FIELDS
# chave do campo por coluna da tabela (coluna 0 é o número da linha)
COLUMN_KEYS: Tuple[Optional[str], ...] = (None,) + tuple(f.key for f in ENTRY_FIELDS) + CALCULATED_FIELDS


def _fmt_calc(val: float) -> str:
    return f"{val:.3f}".rstrip("0").rstrip(".") if val else "0"


def entry_rows(form: ProductionForm) -> List[List[Any]]:
    """Linhas da tabela: campos brutos e calculados, coloridos por conformidade."""
    rows: List[List[Any]] = []
    for i, entry in enumerate(form.entries):
        status = entry_conformance(entry, form.target_specs)
        calc = formulas.calculate_entry_fields(entry, form.target_specs)
        row: List[Any] = [f"{i + 1}{' 🔒' if entry.locked else ''}"]
        cells = [(f.key, str(entry.get(f.key))) for f in ENTRY_FIELDS]
        cells += [(key, _fmt_calc(calc[key])) for key in CALCULATED_FIELDS]
        for key, text in cells:
            row.append(Text(text, style=STATUS_STYLE.get(status.get(key, ""), "")))
        rows.append(row)
    return rows


def status_text(workspace: FormWorkspace, user: Optional[str] = None) -> str:
    """Resumo do formulário ativo e das abas abertas."""
    form = workspace.active
    names = workspace.display_names()
    active_idx = workspace.index_of(form.id)
    tabs = "  ".join(f"[{n}]" if i == active_idx else n for i, n in enumerate(names))
    specs = form.target_specs
    lines = [
        f"👤 User: {user or '-'}",
        f"🗂️ Forms ({len(names)}/{workspace.max_forms}): {tabs}",
        f"🆔 {form.id}",
        f"🏭 Site: {form.production_site or '-'}  Line: {form.production_line or '-'}  "
        f"Shift: {form.shift or '-'}  Date: {form.date.isoformat()}",
        f"👷 Operator: {form.operator_name or '-'}  WO: {form.work_order_number or '-'}  "
        f"Resin: {form.resin_code or '-'}  Color: {form.color_code or '-'}",
        "🎯 Target specs: " + ("complete" if specs.is_complete() else
                              "incomplete (scan or edit before the first row)"),
        "📝 Logging: " + ("on" if ENABLE_LOGGING else "off"),
    ]
    return "\n".join(lines)


class MenuTreeWidget(Tree):
    """Main navigation tree widget."""

    def __init__(self) -> None:
        super().__init__("🧪 QC Production Log - Menu")
        self.setup_menu_tree()

    def setup_menu_tree(self) -> None:
        form_node = self.root.add("📋 Forms", data="forms")
        form_node.add_leaf("➕ New Form", data="new-form")
        form_node.add_leaf("⏭️ Next Form", data="next-form")
        form_node.add_leaf("✖️ Close Form", data="close-form")
        form_node.add_leaf("🧹 Reset Form", data="reset-form")
        form_node.add_leaf("✍️ Production Info", data="edit-header")

        specs_node = self.root.add("🎯 Target Specifications", data="specs")
        specs_node.add_leaf("📷 Scan QR/Barcode", data="scan-specs")
        specs_node.add_leaf("✍️ Edit Specifications", data="edit-specs")

        rows_node = self.root.add("📝 Entries", data="entries")
        rows_node.add_leaf("✍️ Edit Field", data="edit-field")
        rows_node.add_leaf("➕ Add Row", data="add-row")
        rows_node.add_leaf("➖ Remove Last Row", data="remove-row")
        rows_node.add_leaf("📥 Import Rows (XLSX/CSV)", data="import-sheet")

        out_node = self.root.add("📤 Output", data="output")
        out_node.add_leaf("📊 Summary", data="summary")
        out_node.add_leaf("💾 Export JSON", data="export")
        out_node.add_leaf("🚀 Submit", data="submit")

        sys_node = self.root.add("⚙️ System", data="system")
        sys_node.add_leaf("📋 Form Logs", data="logs-forms")
        sys_node.add_leaf("📋 Entry Logs", data="logs-entries")
        sys_node.add_leaf("📋 Submission Logs", data="logs-submissions")
        sys_node.add_leaf("📋 System Logs", data="logs-system")
        sys_node.add_leaf("🚪 Logout", data="logout")


class FormStatus(Static):
    """Header of the active form."""

    def refresh_status(self, workspace: FormWorkspace, user: Optional[str] = None) -> None:
        self.update(status_text(workspace, user))


class LoginScreen(ModalScreen):
    """Credential prompt shown before the workspace."""

    def compose(self) -> ComposeResult:
        with Container(id="login-modal"):
            yield Static("🔐 Login", classes="modal-title")
            with Vertical():
                yield Label("Username:")
                yield Input(placeholder="WorkStation1", id="username-input")
                yield Label("Password:")
                yield Input(password=True, id="password-input")
                with Horizontal():
                    yield Button("Login", variant="primary", id="login-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "login-btn":
            username = self.query_one("#username-input", Input).value.strip()
            password = self.query_one("#password-input", Input).value
            if not username or not password:
                self.notify("❌ Enter username and password", severity="warning")
                return
            self.dismiss({"username": username, "password": password})


class FieldEditForm(ModalScreen):
    """Modal form with one input per field; dismisses with the changed values."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Cancel"),
    ]

    def __init__(self, title: str, fields: Sequence[Tuple[str, str]],
                 values: Optional[Dict[str, str]] = None) -> None:
        super().__init__()
        self.form_title = title
        self.fields = list(fields)
        self.values = dict(values or {})
        self.inputs: Dict[str, Input] = {}

    def compose(self) -> ComposeResult:
        with Container(id="field-edit-modal"):
            yield Static(f"✍️ {self.form_title}", classes="modal-title")
            with ScrollableContainer():
                for key, label in self.fields:
                    yield Label(f"{label}:")
                    self.inputs[key] = Input(value=self.values.get(key, ""), id=f"field-{key}")
                    yield self.inputs[key]
            with Horizontal():
                yield Button("💾 Save", variant="primary", id="save-btn")
                yield Button("❌ Cancel", id="cancel-btn")

    def collect(self) -> Dict[str, str]:
        """Only the fields whose value changed."""
        out: Dict[str, str] = {}
        for key, inp in self.inputs.items():
            if inp.value != self.values.get(key, ""):
                out[key] = inp.value
        return out

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.dismiss(self.collect())
        elif event.button.id == "cancel-btn":
            self.app.pop_screen()


class QRInputForm(ModalScreen):
    """Scanner input: the scanner types the payload and presses Enter."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Cancel"),
    ]

    def compose(self) -> ComposeResult:
        with Container(id="qr-modal"):
            yield Static("📷 Scan QR/Barcode", classes="modal-title")
            with Vertical():
                yield Label("Payload (values separated by *^):")
                yield Input(placeholder="1.900*^1.910*^1.890*^...", id="qr-input")
                with Horizontal():
                    yield Button("Apply", variant="primary", id="apply-btn")
                    yield Button("Cancel", id="cancel-btn")

    @staticmethod
    def payload_error(payload: str) -> Optional[str]:
        """Motivo da rejeição do conteúdo lido, ou ``None`` se for válido."""
        if not payload.strip():
            return "Nothing scanned"
        try:
            parse_qr_payload(payload)
        except QRPayloadError as e:
            return f"Invalid QR payload: {e}"
        return None

    def _submit(self) -> None:
        payload = self.query_one("#qr-input", Input).value
        error = self.payload_error(payload)
        if error:
            # o diálogo continua aberto para uma nova leitura
            self.notify(f"❌ {error}", severity="error")
            return
        self.dismiss({"payload": payload})

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "apply-btn":
            self._submit()
        elif event.button.id == "cancel-btn":
            self.app.pop_screen()


class ConfirmScreen(ModalScreen):
    """Yes/No confirmation."""

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Container(id="confirm-modal"):
            yield Static(f"⚠️ {self.message}", classes="modal-title")
            with Horizontal():
                yield Button("Yes", variant="error", id="yes-btn")
                yield Button("No", id="no-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes-btn")


class FileInputForm(ModalScreen):
    """Modal form for file input operations."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Cancel"),
    ]

    def __init__(self, operation: str, title: str) -> None:
        super().__init__()
        self.operation = operation
        self.title = title
        self.file_input: Optional[Input] = None

    def compose(self) -> ComposeResult:
        with Container(id="file-input-modal"):
            yield Static(f"📁 {self.title}", classes="modal-title")
            with Vertical():
                yield Label("Spreadsheet (.xlsx or .csv):")
                self.file_input = Input(placeholder="entries.xlsx", id="file-input")
                yield self.file_input
                with Horizontal():
                    yield Button("Import", variant="primary", id="execute-btn")
                    yield Button("Cancel", id="cancel-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "execute-btn":
            file_path = self.file_input.value.strip() if self.file_input else ""
            if not file_path:
                self.notify("❌ Enter a file path", severity="warning")
                return
            self.dismiss({"file": file_path})
        elif event.button.id == "cancel-btn":
            self.app.pop_screen()


class OutputScreen(Screen):
    """Screen to display text output."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Back"),
        ("q", "app.pop_screen", "Back"),
    ]

    def __init__(self, title: str, content: str) -> None:
        super().__init__()
        self.title = title
        self.content = content

    def compose(self) -> ComposeResult:
        yield Header()
        with ScrollableContainer():
            yield Static(f"📋 {self.title}", classes="output-title")
            yield Static(self.content, markup=False)
        yield Footer()


class OutputDataTableScreen(Screen):
    """Screen to display a two-dimensional result."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Back"),
        ("q", "app.pop_screen", "Back"),
    ]

    def __init__(self, title: str, columns: list, rows: list) -> None:
        super().__init__()
        self.title = title
        self.columns = columns
        self.rows = rows

    def compose(self) -> ComposeResult:
        yield Header()
        with ScrollableContainer():
            yield Static(f"📋 {self.title}", classes="output-title")
            dt = DataTable(zebra_stripes=True)
            dt.add_columns(*self.columns)
            for row in self.rows:
                dt.add_row(*[str(cell) if cell is not None else "" for cell in row])
            yield dt
        yield Footer()


class QCLogMainframeApp(App):
    """Production inspection log terminal UI."""

    CSS = """
    Screen {
        background: #001122;
    }

    .modal-title {
        background: #003366;
        color: #ffffff;
        text-align: center;
        padding: 1;
        margin-bottom: 1;
    }

    .output-title {
        background: #004488;
        color: #ffffff;
        text-align: center;
        padding: 1;
        margin-bottom: 1;
    }

    Container#login-modal, Container#qr-modal, Container#file-input-modal, Container#confirm-modal {
        background: #112233;
        border: solid #00aaff;
        width: 70;
        height: 18;
        margin: 2;
    }

    Container#field-edit-modal {
        background: #112233;
        border: solid #00aaff;
        width: 70;
        height: 40;
        margin: 2;
    }

    .left-panel {
        width: 36;
    }

    Tree {
        background: #001a33;
        color: #ccddff;
    }

    FormStatus {
        background: #003366;
        color: #ffffff;
        padding: 1;
    }

    Button {
        margin: 1;
    }
    """

    TITLE = "🧪 QC Production Log - Terminal UI"
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("d", "toggle_dark", "Toggle Dark Mode"),
        ("r", "refresh", "Refresh"),
        ("a", "add_row", "Add Row"),
        ("s", "scan", "Scan Specs"),
    ]

    def __init__(self, authenticator: Optional[Authenticator] = None,
                 client: Optional[WorkflowClient] = None, require_login: bool = True) -> None:
        super().__init__()
        self.authenticator = authenticator or StaticCredentialAuthenticator()
        self.client = client or WorkflowClient()
        self.require_login = require_login
        self.user: Optional[str] = None
        self.workspace = FormWorkspace()
        self.menu_tree: Optional[MenuTreeWidget] = None
        self.form_status: Optional[FormStatus] = None
        self.entries_table: Optional[DataTable] = None

    @property
    def form(self) -> ProductionForm:
        return self.workspace.active

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            with Container(classes="left-panel"):
                self.menu_tree = MenuTreeWidget()
                yield self.menu_tree
            with Vertical(classes="right-panel"):
                self.form_status = FormStatus()
                yield self.form_status
                self.entries_table = DataTable(zebra_stripes=True)
                yield self.entries_table
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_view()
        if self.require_login:
            self.push_screen(LoginScreen(), self.on_login_result)

    # -----------------------
    # login
    # -----------------------

    def on_login_result(self, result: Optional[Dict[str, str]]) -> None:
        if not result:
            self.push_screen(LoginScreen(), self.on_login_result)
            return
        try:
            self.user = login(self.authenticator, result["username"], result["password"])
        except AuthenticationError as e:
            self.notify(f"❌ {e}", severity="error")
            self.push_screen(LoginScreen(), self.on_login_result)
            return
        self.notify(f"✅ Welcome, {self.user}")
        self.refresh_view()

    # -----------------------
    # rendering
    # -----------------------

    def refresh_view(self) -> None:
        if self.form_status is not None and self.form_status.is_mounted:
            self.form_status.refresh_status(self.workspace, self.user)
        if self.entries_table is not None and self.entries_table.is_mounted:
            table = self.entries_table
            table.clear(columns=True)
            table.add_columns(*TABLE_COLUMNS)
            for row in entry_rows(self.form):
                table.add_row(*row)

    # -----------------------
    # dispatch
    # -----------------------

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        if not event.node.data:
            return
        self.execute_action(event.node.data)

    def on_data_table_cell_selected(self, event: DataTable.CellSelected) -> None:
        """Edita a célula escolhida na tabela de linhas."""
        if event.data_table is not self.entries_table:
            return
        row, col = event.coordinate.row, event.coordinate.column
        key = COLUMN_KEYS[col] if col < len(COLUMN_KEYS) else None
        if key is None or key in CALCULATED_FIELDS:
            return
        self.open_field_editor(row, key)

    def execute_action(self, action: str) -> None:
        """Executa a ação selecionada no menu."""
        if self.require_login and self.user is None:
            log_system_event("tui_action_denied", {"action": action}, level="warning")
            self.notify("🔐 Log in first", severity="warning")
            return
        log_system_event("tui_action_start", {"action": action, "form_id": self.form.id})

        try:
            # Formulários
            if action == "new-form":
                self.workspace.open_form()
                self.notify("➕ New form opened")
            elif action == "next-form":
                idx = self.workspace.index_of(self.form.id)
                nxt = self.workspace.forms[(idx + 1) % len(self.workspace.forms)]
                self.workspace.activate(nxt.id)
            elif action == "close-form":
                self.close_active_form()
            elif action == "reset-form":
                self.confirm("Reset the form? All data will be lost.", self.on_reset_confirmed)
            elif action == "edit-header":
                values = {key: str(getattr(self.form, attr)) for key, attr, _ in HEADER_FIELDS}
                fields = [(key, label) for key, _, label in HEADER_FIELDS]
                self.push_screen(FieldEditForm("Production Info", fields, values), self.on_header_result)

            # Especificações
            elif action == "scan-specs":
                self.push_screen(QRInputForm(), self.on_qr_result)
            elif action == "edit-specs":
                values = {key: str(self.form.target_specs.get(key)) for key, _, _ in TARGET_SPEC_FIELDS}
                fields = [(key, label) for key, _, label in TARGET_SPEC_FIELDS]
                self.push_screen(FieldEditForm("Target Specifications", fields, values), self.on_specs_result)

            # Linhas
            elif action == "edit-field":
                self.push_screen(
                    FieldEditForm("Edit Field", [("row", "Row"), ("field", "Field"), ("value", "Value")],
                                  {"row": str(len(self.form.entries))}),
                    self.on_field_result,
                )
            elif action == "add-row":
                self.add_row()
            elif action == "remove-row":
                self.remove_last_row()
            elif action == "import-sheet":
                self.push_screen(FileInputForm(action, "Import Rows (XLSX/CSV)"), self.on_file_input_result)

            # Saída
            elif action == "summary":
                self.show_summary()
            elif action == "export":
                path = export_form(self.form)
                self.notify(f"💾 Exported: {path}")
            elif action == "submit":
                submit_form(self.form, self.client)
                self.notify("✅ Form submitted successfully")

            # Sistema
            elif action.startswith("logs-"):
                self.show_log_content(action[len("logs-"):])
            elif action == "logout":
                log_system_event("logout", {"username": self.user})
                self.user = None
                self.push_screen(LoginScreen(), self.on_login_result)

        except Exception as e:
            log_system_event("tui_action_error", {"action": action, "error": str(e)}, level="error")
            self.notify(f"❌ Error: {str(e)}", severity="error")
        self.refresh_view()

    def _guarded(self, fn: Callable[[], Any]) -> Any:
        """Executa ``fn`` exibindo o erro ao operador."""
        try:
            return fn()
        except Exception as e:
            self.notify(f"❌ Error: {str(e)}", severity="error")
            return None
        finally:
            self.refresh_view()

    def confirm(self, message: str, callback: Callable[[bool], None]) -> None:
        self.push_screen(ConfirmScreen(message), callback)

    # -----------------------
    # formulários
    # -----------------------

    def close_active_form(self) -> None:
        form_id = self.form.id
        if form_has_data(self.form):
            self.confirm(CLOSE_CONFIRM_MESSAGE, lambda ok: self.on_close_confirmed(form_id, ok))
        else:
            self.workspace.close_form(form_id)

    def on_close_confirmed(self, form_id: str, ok: Optional[bool]) -> None:
        if ok:
            self._guarded(lambda: self.workspace.close_form(form_id, confirm=lambda _msg: True))

    def on_reset_confirmed(self, ok: Optional[bool]) -> None:
        if ok:
            self._guarded(lambda: reset_form(self.form))

    def on_header_result(self, changes: Optional[Dict[str, str]]) -> None:
        if not changes:
            return

        def apply() -> None:
            old_id = self.form.id
            form = self.form
            for key, value in changes.items():
                set_header_field(form, key, value)
            self.workspace.sync_active(old_id, form)

        self._guarded(apply)

    # -----------------------
    # especificações
    # -----------------------

    def on_qr_result(self, result: Optional[Dict[str, str]]) -> None:
        if result and result.get("payload"):
            if self._guarded(lambda: apply_qr_payload(self.form, result["payload"])) is not None:
                self.notify("🎯 Target specifications loaded")
            else:
                self.push_screen(QRInputForm(), self.on_qr_result)

    def on_specs_result(self, changes: Optional[Dict[str, str]]) -> None:
        if not changes:
            return

        def apply() -> None:
            for key, value in changes.items():
                set_target_spec(self.form, key, value)

        self._guarded(apply)

    # -----------------------
    # linhas
    # -----------------------

    def open_field_editor(self, row: int, key: str) -> None:
        label = next((f.label for f in ENTRY_FIELDS if f.key == key), key)
        current = str(self.form.entries[row].get(key))
        self.push_screen(
            FieldEditForm(f"Row {row + 1}", [(key, label)], {key: current}),
            lambda changes: self.on_cell_result(row, changes),
        )

    def on_cell_result(self, row: int, changes: Optional[Dict[str, str]]) -> None:
        if not changes:
            return
        for key, value in changes.items():
            self._guarded(lambda: update_entry(self.form, row, key, value))

    def on_field_result(self, changes: Optional[Dict[str, str]]) -> None:
        values = changes or {}
        if not values.get("field"):
            return

        def apply() -> None:
            row = int(values.get("row") or len(self.form.entries)) - 1
            update_entry(self.form, row, values["field"].strip(), values.get("value", ""))

        self._guarded(apply)

    def add_row(self) -> None:
        add_entry(self.form, autosave=lambda form: autosave(form, self.client))
        self.notify(f"➕ Row {len(self.form.entries)} added")

    def remove_last_row(self) -> None:
        entry = self.form.last_entry
        if len(self.form.entries) > 1 and not entry.locked and has_significant_data(entry):
            self.confirm(REMOVE_CONFIRM_MESSAGE, self.on_remove_confirmed)
        else:
            remove_entry(self.form)

    def on_remove_confirmed(self, ok: Optional[bool]) -> None:
        if ok:
            self._guarded(lambda: remove_entry(self.form, confirm=lambda _msg: True))

    def on_file_input_result(self, result: Optional[Dict[str, str]]) -> None:
        if not result or "file" not in result:
            return
        info = self._guarded(lambda: import_entries(self.form, result["file"]))
        if info is None:
            return
        rows = [["arquivo", info["arquivo"]], ["linhas_importadas", info["linhas_importadas"]]]
        rows += [[f"linha {e['linha']}", e["mensagem"]] for e in info["erros"]]
        self.push_screen(OutputDataTableScreen("Rows Imported", ["Campo", "Valor"], rows))

    # -----------------------
    # saída / sistema
    # -----------------------

    def show_summary(self) -> None:
        data = summarize(self.form).to_dict()
        rows = [[key, "" if val is None else val] for key, val in data.items()]
        self.push_screen(OutputDataTableScreen("Production Summary", ["Campo", "Valor"], rows))

    def show_log_content(self, log_type: str) -> None:
        log_system_event("view_logs", {"log_type": log_type})
        content = get_log_summary(log_type, lines=500)
        if content is None:
            content = "Logging disabled (set QCLOG_ENABLE_LOGGING=1)."
        self.push_screen(OutputScreen(f"📋 Logs - {log_type}", content))

    # -----------------------
    # bindings
    # -----------------------

    def action_refresh(self) -> None:
        self.refresh_view()
        self.notify("🔄 Refreshed", timeout=2)

    def action_add_row(self) -> None:
        self.execute_action("add-row")

    def action_scan(self) -> None:
        self.execute_action("scan-specs")

    def action_toggle_dark(self) -> None:
        dark = self.theme != "textual-dark"
        self.theme = "textual-dark" if dark else "textual-light"
        self.notify(f"🌙 Dark mode: {'On' if dark else 'Off'}", timeout=2)


def main() -> None:
    """Run the mainframe TUI application."""
    app = QCLogMainframeApp()
    app.run()


if __name__ == "__main__":
    main()
