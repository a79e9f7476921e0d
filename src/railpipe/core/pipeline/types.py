"""
Tipos canônicos do pipeline do railpipe.

Este módulo define o contrato uniforme de retorno de todo Step e o
resultado público de uma execução.

Componentes principais:
    - Ok      → sucesso, carrega o próximo valor
    - Err     → falha, carrega o valor de erro
    - FAILURE → marcador de falha genérica (sem payload)
    - Result  → união pública `Ok | Err`

Princípios fundamentais:
    - Falha de pipeline é dado, não exceção
    - Tipos são imutáveis
    - Nenhuma lógica de execução vive neste módulo

Limites explícitos:
    - Não executa Steps
    - Não valida retornos (responsabilidade do estado/executor)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Ok:
    """Step concluído com sucesso; `value` passa a ser o valor corrente."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Step falhou; `error` passa a ser o erro terminal do pipeline."""

    error: Any

    @property
    def ok(self) -> bool:
        return False


class _Failure:
    """Marcador singleton de falha sem descrição."""

    _instance: "_Failure | None" = None

    def __new__(cls) -> "_Failure":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "FAILURE"

    def __reduce__(self) -> str:
        return "FAILURE"


FAILURE = _Failure()

Result = Union[Ok, Err]


class HookMode(str, Enum):
    """
    Modo de despacho de um hook.

    Valores textuais estáveis, usados nos eventos do RunContext.
    """
    SYNC = "sync"
    ASYNC = "async"
