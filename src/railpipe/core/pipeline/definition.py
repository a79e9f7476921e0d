"""
Definição declarativa de um pipeline.

Este módulo define o `PipelineDefinition`, o builder explícito que produz
as quatro referências consumidas pelo engine:

    - steps          → sequência ordenada de Steps
    - sync_hooks     → hooks síncronos, em ordem de declaração
    - async_hooks    → hooks assíncronos (ordem de término não garantida)
    - error_handler  → referência opcional, chamada apenas em falha

A ordem de declaração é a ordem de execução. Os métodos de registro
aceitam a referência diretamente ou funcionam como decorators:

    numbers = PipelineDefinition("string_to_number")

    @numbers.step
    def cleanup(value, options):
        return Ok(value.strip())

    numbers.step(parse_float)

Decisões arquiteturais:
    - Assinaturas são validadas no registro, não na execução
    - A definição é congelada na primeira execução; registros
      posteriores são erro, garantindo listas estáveis entre lookups

Limites explícitos:
    - Não executa Steps
    - Não descobre funções por convenção de nome
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from railpipe.core.exceptions import PipelineDefinitionError

from .step import Hook, Step, ensure_two_args
from .types import HookMode


class PipelineDefinition:
    """Builder das listas de referências de um pipeline nomeado."""

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._steps: List[Step] = []
        self._sync_hooks: List[Hook] = []
        self._async_hooks: List[Hook] = []
        self._error_handler: Optional[Hook] = None
        self._frozen = False

    def __repr__(self) -> str:
        return (
            f"PipelineDefinition(name={self.name!r}, steps={len(self._steps)}, "
            f"hooks={len(self._sync_hooks)}, async_hooks={len(self._async_hooks)})"
        )

    # -----------------------------
    # Registro
    # -----------------------------
    def step(self, ref: Step) -> Step:
        self._ensure_open()
        self._steps.append(ensure_two_args(ref, role="step"))
        return ref

    def hook(self, ref: Hook) -> Hook:
        self._ensure_open()
        self._sync_hooks.append(ensure_two_args(ref, role="hook"))
        return ref

    def async_hook(self, ref: Hook) -> Hook:
        self._ensure_open()
        self._async_hooks.append(ensure_two_args(ref, role="async hook"))
        return ref

    def add_hook(self, ref: Hook, *, mode: HookMode = HookMode.SYNC) -> Hook:
        if HookMode(mode) is HookMode.ASYNC:
            return self.async_hook(ref)
        return self.hook(ref)

    def error_handler(self, ref: Hook) -> Hook:
        self._ensure_open()
        if self._error_handler is not None:
            raise PipelineDefinitionError(
                message=f"pipeline {self.name!r} already has an error handler",
                details={"pipeline": self.name},
            )
        self._error_handler = ensure_two_args(ref, role="error handler")
        return ref

    # -----------------------------
    # Leitura
    # -----------------------------
    @property
    def steps(self) -> Tuple[Step, ...]:
        return tuple(self._steps)

    @property
    def sync_hooks(self) -> Tuple[Hook, ...]:
        return tuple(self._sync_hooks)

    @property
    def async_hooks(self) -> Tuple[Hook, ...]:
        return tuple(self._async_hooks)

    @property
    def handler(self) -> Optional[Hook]:
        return self._error_handler

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "PipelineDefinition":
        self._frozen = True
        return self

    # -----------------------------
    # Execução
    # -----------------------------
    def execute(self, initial_value: Any, options: Any = None, **kwargs: Any):
        """Atalho para `railpipe.execute(self, initial_value, options)`."""
        from railpipe.core.engine.engine import execute

        return execute(self, initial_value, options, **kwargs)

    def _ensure_open(self) -> None:
        if self._frozen:
            raise PipelineDefinitionError(
                message=f"pipeline {self.name!r} is frozen and cannot be changed",
                details={"pipeline": self.name},
                hint="Registre Steps e hooks antes da primeira execução",
            )
