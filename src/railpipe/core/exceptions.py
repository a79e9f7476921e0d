# src/railpipe/core/exceptions.py
"""
railpipe: Canonical Exceptions (v1)

Este módulo define as exceções tipadas do railpipe.

Objetivo:
- Distinguir falhas de construção do pipeline (bugs) de falhas de dados
- Carregar dados estruturados (serializáveis) junto da mensagem
- Evitar ValueError/TypeError genéricos nos guardrails do engine

Regras:
- Falhas de pipeline (`Err`) NUNCA são exceções; apenas violações de
  contrato e definições inválidas são levantadas.
- Exceções devem carregar apenas dados estruturados em `details`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RailpipeException(Exception):
    """Base class para exceções internas do railpipe.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class TransformContractError(RailpipeException):
    """Step retornou algo fora de `Ok`, `Err` ou `FAILURE`.

    O valor recebido fica em `details["value"]` para inspeção.
    """

    @property
    def value(self) -> Any:
        return self.details.get("value")


@dataclass(frozen=True)
class PipelineDefinitionError(RailpipeException):
    """Definição de pipeline inválida ou impossível de despachar."""


@dataclass(frozen=True)
class DuplicatePipelineError(PipelineDefinitionError):
    """Nome de pipeline registrado mais de uma vez."""
