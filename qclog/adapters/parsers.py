"""
Utilidades de parsing para os valores digitados ou lidos por scanner.

Este módulo interpreta o texto que chega da interface (campos da tabela,
cabeçalho, etiqueta QR/código de barras das especificações) e o converte
nos tipos do domínio: ``Measure`` para números, horários ``HH:MM``,
opções fechadas e datas.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, List, Union

from qclog.domain.errors import QRPayloadError
from qclog.domain.measure import NOT_APPLICABLE, NOT_APPLICABLE_MARK, UNSET, Measure
from qclog.domain.models import TARGET_SPEC_FIELDS, EntryField, FieldKind, TargetSpecifications

QR_SEPARATOR = "*^"

_NUM_RE = re.compile(r"^[-+]?(?:\d+(?:[.,]\d*)?|[.,]\d+)(?:[eE][-+]?\d+)?$")
_INT_RE = re.compile(r"^[-+]?\d+$")
_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_measure(txt: Any, allow_not_applicable: bool = True, integer: bool = False) -> Measure:
    """Interpreta um valor numérico opcional.

    Exemplos:
        ""      → Unset
        "-"     → NotApplicable (se ``allow_not_applicable``)
        "2.010" → Value(2.01)
        "5,5"   → Value(5.5)

    Args:
        txt: Texto (ou número) a interpretar.
        allow_not_applicable: Aceita o traço como "não se aplica".
        integer: Exige número inteiro.

    Raises:
        ValueError: se o texto não representar um valor válido.
    """
    if isinstance(txt, Measure):
        m = txt
    elif txt is None:
        m = UNSET
    elif isinstance(txt, (int, float)) and not isinstance(txt, bool):
        m = Measure.of(txt)
    else:
        s = str(txt).strip()
        if not s:
            return UNSET
        if s == NOT_APPLICABLE_MARK:
            m = NOT_APPLICABLE
        elif integer:
            if not _INT_RE.match(s):
                raise ValueError(f"expected a whole number, got {txt!r}")
            m = Measure.of(int(s))
        else:
            if not _NUM_RE.match(s):
                raise ValueError(f"expected a number, got {txt!r}")
            m = Measure.of(float(s.replace(",", ".")))

    if m.is_not_applicable and not allow_not_applicable:
        raise ValueError("'-' is not accepted here")
    if integer and m.is_numeric and not m.as_float().is_integer():
        raise ValueError(f"expected a whole number, got {txt!r}")
    return m


def parse_time(txt: Any) -> str:
    """Normaliza um horário para ``HH:MM`` (vazio permanece vazio)."""
    s = "" if txt is None else str(txt).strip()
    if not s:
        return ""
    m = _TIME_RE.match(s)
    if not m:
        # planilhas costumam trazer HH:MM:SS
        try:
            return datetime.strptime(s, "%H:%M:%S").strftime("%H:%M")
        except ValueError:
            raise ValueError(f"expected a time as HH:MM, got {txt!r}") from None
    return f"{int(m.group(1)):02d}:{m.group(2)}"


def parse_choice(txt: Any, choices: tuple) -> str:
    """Valida uma opção fechada. ``""`` e ``"none"`` limpam a seleção."""
    s = "" if txt is None else str(txt).strip()
    if s == "" or s.lower() == "none":
        return ""
    for choice in choices:
        if s.lower() == choice.lower():
            return choice
    raise ValueError(f"expected one of {', '.join(choices)}, got {txt!r}")


def parse_entry_value(spec: EntryField, raw: Any) -> Union[str, Measure]:
    """Converte o valor bruto de um campo da tabela para o tipo do domínio."""
    if spec.kind is FieldKind.TIME:
        return parse_time(raw)
    if spec.kind is FieldKind.CHOICE:
        return parse_choice(raw, spec.choices)
    return parse_measure(raw, allow_not_applicable=False, integer=spec.kind is FieldKind.INTEGER)


def parse_date(txt: Any) -> date:
    """Aceita ``date``, ``YYYY-MM-DD``, ``MM/DD/YYYY`` ou timestamp ISO."""
    if isinstance(txt, datetime):
        return txt.date()
    if isinstance(txt, date):
        return txt
    s = str(txt).strip()
    for fmt in ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"expected a date, got {txt!r}") from None


def parse_qr_payload(data: str) -> TargetSpecifications:
    """Interpreta a etiqueta QR/código de barras das especificações alvo.

    O conteúdo traz 16 valores posicionais separados por ``*^`` na ordem de
    ``TARGET_SPEC_FIELDS``. Posições vazias, ausentes ou zeradas ficam sem
    valor; ``-`` marca "não se aplica"; posições além da 16a são ignoradas.

    Exemplo:
        "1.900*^1.910*^1.890*^*^-*^..." → odAverage=1.9, odMax=1.91, ...

    Raises:
        QRPayloadError: conteúdo vazio ou alguma posição não numérica.
    """
    if data is None or not str(data).strip():
        raise QRPayloadError("empty QR payload")
    values: List[str] = str(data).split(QR_SEPARATOR)
    specs = TargetSpecifications()
    for pos, (key, _attr, _label) in enumerate(TARGET_SPEC_FIELDS):
        if pos >= len(values):
            break
        raw = values[pos].strip()
        try:
            m = parse_measure(raw)
        except ValueError as e:
            raise QRPayloadError(f"position {pos + 1} ({key}): {e}") from e
        if m.is_numeric and m.as_float() == 0:
            m = UNSET
        specs.set(key, m)
    return specs
