"""
Executor de Steps do railpipe.

Dobra o `PipelineState` pela sequência ordenada de Steps, interrompendo
na primeira falha (short-circuit).

Regras:
    - Estado inválido → Step não é invocado nem registrado
    - `Ok(v)`         → `value = v`, Step registrado
    - `Err(e)`        → Step registrado, estado invalidado com `e`
    - `FAILURE`       → Step registrado, estado invalidado com GENERIC_ERROR
    - outro retorno   → TransformContractError, a run é abortada

Eventos (quando há RunContext):
    - "step ok"               (DEBUG)
    - "step failed"           (INFO, com `error`)
    - "step failed (generic)" (INFO, com `error` = GENERIC_ERROR)

Exceções levantadas por um Step não são capturadas: são bugs, não
falhas de pipeline.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from railpipe.core.errors import TRANSFORM_CONTRACT_ERROR
from railpipe.core.exceptions import TransformContractError
from railpipe.core.pipeline.context import RunContext
from railpipe.core.pipeline.state import PipelineState
from railpipe.core.pipeline.step import Step, describe_ref
from railpipe.core.pipeline.types import FAILURE


def run_steps(
    state: PipelineState,
    steps: Iterable[Step],
    options: Any,
    ctx: Optional[RunContext] = None,
) -> PipelineState:
    for step in steps:
        if not state.valid:
            continue

        ref = describe_ref(step)
        outcome = step(state.value, options)
        try:
            state = state.apply(step, outcome)
        except TransformContractError as e:
            if ctx is not None:
                ctx.log(
                    ref=ref,
                    level="ERROR",
                    message=e.message,
                    type=TRANSFORM_CONTRACT_ERROR,
                    received=e.details.get("received"),
                )
            raise

        if ctx is None:
            continue
        if state.valid:
            ctx.log(ref=ref, level="DEBUG", message="step ok")
        elif outcome is FAILURE:
            ctx.log(ref=ref, level="INFO", message="step failed (generic)", error=repr(state.error))
        else:
            ctx.log(ref=ref, level="INFO", message="step failed", error=repr(state.error))

    return state
