# qclog/adapters/sheet_loader.py
"""
Loader de planilhas (XLSX/CSV) com linhas da tabela de produção.

Essas funções:
- leem a planilha usando pandas, sempre como texto;
- normalizam cabeçalhos (maiúsculas, espaços, sinônimos) para as chaves
  JSON dos campos (``odAverage``, ``unitEnd``...);
- retornam listas de dicionários com os valores brutos.

Observações:
- Não validam os valores. A conversão fica com ``parse_entry_value`` no
  caso de uso de importação, que reporta erros por linha.
- Colunas calculadas (outOfRound, gain...) e desconhecidas são ignoradas.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from qclog.domain.models import ENTRY_FIELDS


# ---------------------------
# utilitários de normalização
# ---------------------------

def _slug(s: Any) -> str:
    """Normaliza cabeçalhos: minúsculas, sem não-alfanumérico."""
    if s is None:
        return ""
    s = str(s).strip().lower()
    s = re.sub(r"[^a-z0-9]+", " ", s)
    return re.sub(r"\s+", " ", s).strip()


def _build_aliases() -> Dict[str, str]:
    aliases: Dict[str, str] = {}
    for f in ENTRY_FIELDS:
        aliases[_slug(f.key)] = f.key
        aliases[_slug(f.label)] = f.key
        aliases[_slug(f.attr)] = f.key
    aliases.update({
        "start time": "start",
        "end time": "end",
        "od average": "odAverage",
        "caliper maximum": "odMaximum",
        "caliper minimum": "odMinimum",
        "od maximum": "odMaximum",
        "od minimum": "odMinimum",
        "wall minimum": "wallMinimum",
        "wall maximum": "wallMaximum",
        "od at saw": "odAtSaw",
        "od at vac tank": "odAtVacTank",
        "melt pressure": "meltPress",
        "die head clean": "dieHeadClean",
        "actual pph": "actualPPH",
        "actual wt ft": "actualWtPerFt",
        "actual wt per ft": "actualWtPerFt",
        "accepted ft": "acceptedFt",
        "accepted lbs": "acceptedLbs",
        "scrap fts": "scrapFts",
        "scrap ft": "scrapFts",
        "scrap lbs": "scrapLbs",
        "scrap code": "scrapCode",
        "regrind": "regrindConsumed",
        "regrind consumed": "regrindConsumed",
    })
    return aliases


ALIASES = _build_aliases()


def _safe_get(row, key) -> Optional[str]:
    """Valor da linha como texto, ``None`` para células vazias/NA."""
    val = row.get(key)
    if val is None or pd.isna(val):
        return None
    s = str(val).strip()
    return s or None


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Renomeia colunas reconhecidas para as chaves dos campos."""
    new_cols = {}
    for col in df.columns:
        key = _slug(col)
        new_cols[col] = ALIASES.get(key, key)
    return df.rename(columns=new_cols)


def read_sheet(path: str) -> pd.DataFrame:
    """Lê XLSX ou CSV como texto."""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype="string", keep_default_na=False)
    if suffix in (".xlsx", ".xlsm", ".xls"):
        return pd.read_excel(path, dtype="string")
    raise ValueError(f"unsupported spreadsheet format: {suffix or path}")


# ---------------------------
# loader público
# ---------------------------

def load_entries_from_sheet(path: str) -> List[Dict[str, Optional[str]]]:
    """Lê a planilha e retorna um dict por linha com as chaves dos campos.

    Linhas totalmente vazias são descartadas. Campos ausentes na planilha
    não aparecem no dict.
    """
    df = _normalize_columns(read_sheet(path))
    known = [f.key for f in ENTRY_FIELDS if f.key in df.columns]
    out: List[Dict[str, Optional[str]]] = []
    for _, row in df.iterrows():
        rec = {key: _safe_get(row, key) for key in known}
        if any(v is not None for v in rec.values()):
            out.append(rec)
    return out
