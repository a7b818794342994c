# qclog/usecases/manage_forms.py
"""
UC: Área de trabalho com vários formulários abertos (abas).

Obs.: o limite de abas vem de ``DEFAULTS.max_open_forms``. Fechar um
formulário com dados pede confirmação; o último formulário aberto nunca
é fechado.
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Callable, List, Optional

from qclog.adapters.parsers import parse_date
from qclog.config import DEFAULTS
from qclog.domain.errors import FormCloseError, FormLimitError, UnknownFieldError
from qclog.domain.models import HEADER_ATTR_BY_KEY, ProductionEntry, ProductionForm, TargetSpecifications
from qclog.domain.policies import form_has_data
from qclog.infra.logger import log_form_event

ConfirmFn = Callable[[str], bool]

CLOSE_CONFIRM_MESSAGE = "This form contains data. Are you sure you want to close it?"


def _new_form_id() -> str:
    return f"form-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


class FormWorkspace:
    """Formulários abertos e o formulário ativo."""

    def __init__(self, max_forms: Optional[int] = None):
        self.max_forms = max_forms if max_forms is not None else DEFAULTS.max_open_forms
        self.forms: List[ProductionForm] = [ProductionForm(id="form-1")]
        self.active_id: str = self.forms[0].id

    @property
    def active(self) -> ProductionForm:
        return self.get(self.active_id)

    def get(self, form_id: str) -> ProductionForm:
        for form in self.forms:
            if form.id == form_id:
                return form
        raise KeyError(form_id)

    def index_of(self, form_id: str) -> int:
        return self.forms.index(self.get(form_id))

    def activate(self, form_id: str) -> ProductionForm:
        form = self.get(form_id)
        self.active_id = form.id
        return form

    def open_form(self) -> ProductionForm:
        if len(self.forms) >= self.max_forms:
            log_form_event("open_rejected", self.active_id, open_forms=len(self.forms))
            raise FormLimitError(f"Maximum of {self.max_forms} forms allowed")
        form = ProductionForm(id=_new_form_id())
        self.forms.append(form)
        self.active_id = form.id
        log_form_event("open", form.id, open_forms=len(self.forms))
        return form

    def close_form(self, form_id: str, confirm: Optional[ConfirmFn] = None) -> bool:
        """Fecha o formulário. Retorna ``False`` se o operador não confirmou."""
        form = self.get(form_id)
        if len(self.forms) <= 1:
            log_form_event("close_rejected", form_id)
            raise FormCloseError("Cannot close the last form")
        if form_has_data(form):
            if confirm is None or not confirm(CLOSE_CONFIRM_MESSAGE):
                log_form_event("close_cancelled", form_id)
                return False

        idx = self.forms.index(form)
        del self.forms[idx]
        if self.active_id == form_id:
            self.active_id = self.forms[min(idx, len(self.forms) - 1)].id
        log_form_event("close", form_id, open_forms=len(self.forms))
        return True

    def sync_active(self, old_id: str, form: ProductionForm) -> None:
        """Acompanha a troca de id de um formulário (cabeçalho editado)."""
        if self.active_id == old_id:
            self.active_id = form.id

    def display_names(self) -> List[str]:
        return [form.display_name(i) for i, form in enumerate(self.forms)]


def set_header_field(form: ProductionForm, key: str, value: Any) -> ProductionForm:
    """Altera um campo do cabeçalho e regenera o id do formulário."""
    attr = HEADER_ATTR_BY_KEY.get(key)
    if attr is None:
        raise UnknownFieldError(key)
    if key == "date":
        new_value = parse_date(value)
    else:
        new_value = "" if value is None else str(value).strip()
    setattr(form, attr, new_value)
    old_id = form.id
    form.refresh_id()
    log_form_event("header", form.id, field=key, previous_id=old_id)
    return form


def reset_form(form: ProductionForm) -> ProductionForm:
    """Limpa cabeçalho, especificações e linhas, mantendo o id."""
    fresh = ProductionForm(id=form.id)
    for attr in HEADER_ATTR_BY_KEY.values():
        setattr(form, attr, getattr(fresh, attr))
    form.target_specs = TargetSpecifications()
    form.entries = [ProductionEntry()]
    log_form_event("reset", form.id)
    return form
