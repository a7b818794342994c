# qclog/domain/errors.py
"""
Exceções do domínio.

Os erros de validação também herdam de ``ValueError`` para que os
adaptadores possam tratá-los como entrada inválida do operador.
"""

from __future__ import annotations

from typing import Iterable


class QCLogError(Exception):
    """Base de todos os erros da aplicação."""


class RowIncompleteError(QCLogError, ValueError):
    """A última linha ainda tem campos obrigatórios vazios."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            "Please complete all required fields in the previous row before adding a new one "
            f"(missing: {', '.join(self.missing)})"
        )


class RowLockedError(QCLogError, ValueError):
    """Campo não editável em uma linha bloqueada."""

    def __init__(self, index: int, field: str):
        self.index = index
        self.field = field
        super().__init__(f"Row {index + 1} is locked; '{field}' can no longer be edited")


class TargetSpecsIncompleteError(QCLogError, ValueError):
    """Primeira linha bloqueada enquanto as especificações não estão completas."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Fill in all target specifications before entering '{field}' on the first row")


class CalculatedFieldError(QCLogError, ValueError):
    """Tentativa de editar um campo calculado."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"'{field}' is calculated and cannot be edited")


class UnknownFieldError(QCLogError, KeyError):
    """Campo inexistente na linha ou no cabeçalho."""


class RowRemovalError(QCLogError, ValueError):
    """Remoção de linha não permitida."""


class FormLimitError(QCLogError, ValueError):
    """Limite de formulários abertos atingido."""


class FormCloseError(QCLogError, ValueError):
    """Fechamento de formulário não permitido."""


class MissingHeaderFieldsError(QCLogError, ValueError):
    """Campos obrigatórios do cabeçalho não preenchidos."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            "Please fill in all required header fields before saving "
            f"(missing: {', '.join(self.missing)})"
        )


class QRPayloadError(QCLogError, ValueError):
    """Conteúdo de QR/código de barras inválido."""


class SubmissionError(QCLogError, RuntimeError):
    """Falha ao enviar o formulário ao workflow remoto."""


class AuthenticationError(QCLogError, PermissionError):
    """Credenciais inválidas."""
