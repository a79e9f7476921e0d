# src/railpipe/core/pipeline/state.py
"""
Estado de execução de um pipeline.

Este módulo define o `PipelineState`, o registro versionado que é
conduzido pelo executor ao longo dos Steps e, ao final, entregue a
hooks e error handler como visão somente leitura.

Ciclo de vida:
    - criado pelo runner com `value = initial_value`, `valid = True`
    - atualizado apenas pelo executor, um Step por vez
    - congelado de fato ao chegar no dispatcher (dataclass frozen)

Invariantes:
    - `valid is False` ⇔ `error is not None`
    - `executed_steps` cresce monotonicamente, nunca é reordenado
    - Uma vez inválido, nenhuma atualização altera `value`, `error`
      ou `executed_steps`
    - `initial_value` nunca muda

Limites explícitos:
    - Não despacha hooks
    - Não captura exceções levantadas por Steps
    - Não acumula múltiplos erros (apenas o erro da falha)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from railpipe.core.errors import GENERIC_ERROR
from railpipe.core.exceptions import TransformContractError

from .step import describe_ref
from .types import FAILURE, Err, Ok


@dataclass(frozen=True)
class PipelineState:
    """
    Progresso de um pipeline em um instante.

    Instâncias são imutáveis: cada atualização produz uma nova instância
    via `dataclasses.replace`, de modo que hooks observam sempre o mesmo
    estado final, sem atualizações parciais.

    Campos:
        - initial_value: valor de entrada do pipeline
        - value: valor corrente
        - valid: False após a primeira falha
        - error: erro da falha (None enquanto válido)
        - executed_steps: Steps efetivamente invocados, em ordem
        - pipeline: nome da definição que gerou o estado (opcional)
    """

    initial_value: Any
    value: Any
    valid: bool = True
    error: Any = None
    executed_steps: Tuple[Any, ...] = ()
    pipeline: Optional[str] = None

    @classmethod
    def new(cls, initial_value: Any, *, pipeline: Optional[str] = None) -> "PipelineState":
        """Cria um estado válido com `value = initial_value`."""
        return cls(initial_value=initial_value, value=initial_value, pipeline=pipeline)

    def update(self, step: Any, options: Any) -> "PipelineState":
        """
        Aplica `step` ao valor corrente e devolve o novo estado.

        Estados inválidos são devolvidos sem invocar o Step.

        Raises:
            TransformContractError: se o Step retornar algo fora de
                `Ok`, `Err` ou `FAILURE`.
        """
        if not self.valid:
            return self

        outcome = step(self.value, options)
        return self.apply(step, outcome)

    def invalidate(self, error: Any = None) -> "PipelineState":
        """Marca o estado como inválido; sem `error`, usa GENERIC_ERROR."""
        if not self.valid:
            return self
        return replace(
            self,
            valid=False,
            error=GENERIC_ERROR if error is None else error,
        )

    def to_result(self) -> "Ok | Err":
        if self.valid:
            return Ok(self.value)
        return Err(self.error)

    def apply(self, step: Any, outcome: Any) -> "PipelineState":
        """
        Aplica o retorno já obtido de `step` ao estado.

        Raises:
            TransformContractError: se `outcome` não é `Ok`, `Err` ou
                `FAILURE`.
        """
        if not self.valid:
            return self

        if isinstance(outcome, Ok):
            return replace(
                self,
                value=outcome.value,
                executed_steps=self.executed_steps + (step,),
            )

        if isinstance(outcome, Err):
            logged = replace(self, executed_steps=self.executed_steps + (step,))
            return logged.invalidate(outcome.error)

        if outcome is FAILURE:
            logged = replace(self, executed_steps=self.executed_steps + (step,))
            return logged.invalidate()

        raise TransformContractError(
            message=f"expected Ok, Err or FAILURE, got {outcome!r}",
            details={
                "step": describe_ref(step),
                "received": type(outcome).__name__,
                "value": outcome,
            },
            hint="Ajuste o Step para retornar Ok(value), Err(error) ou FAILURE",
        )
