# src/railpipe/core/engine/engine.py
"""
Engine de execução do railpipe.

Compõe executor e dispatcher em uma única chamada:

    1. cria o `PipelineState` inicial
    2. dobra o estado pelos Steps (short-circuit na primeira falha)
    3. despacha error handler e hooks com o estado final
    4. converte o estado em `Ok(value)` ou `Err(error)`

Resultados de falha (`Err`) são desfecho normal, nunca exceção. O engine
só levanta exceções para:
    - TransformContractError: Step retornou formato inválido
    - PipelineDefinitionError: definição inexistente ou inválida
    - exceções de Steps, hooks síncronos e error handler (propagadas)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from railpipe.core.exceptions import PipelineDefinitionError
from railpipe.core.pipeline.context import RunContext
from railpipe.core.pipeline.definition import PipelineDefinition
from railpipe.core.pipeline.registry import PipelineRegistry, default_registry
from railpipe.core.pipeline.state import PipelineState
from railpipe.core.pipeline.types import Err, Ok

from .dispatcher import dispatch
from .executor import run_steps
from .supervisor import HookSupervisor


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma execução: desfecho público, estado final e contexto."""

    result: Union[Ok, Err]
    state: PipelineState
    context: RunContext

    @property
    def ok(self) -> bool:
        return self.state.valid


def resolve_definition(
    definition: Union[str, PipelineDefinition],
    registry: Optional[PipelineRegistry] = None,
) -> PipelineDefinition:
    """Resolve um nome (ou a própria definição) antes de qualquer Step rodar."""
    if isinstance(definition, PipelineDefinition):
        return definition
    if isinstance(definition, str):
        return (registry or default_registry).get(definition)
    raise PipelineDefinitionError(
        message=f"{definition!r} is not a valid pipeline",
        details={"received": type(definition).__name__},
        hint="Passe uma PipelineDefinition ou o nome de uma definição registrada",
    )


class Engine:
    """Runner canônico do railpipe para uma definição."""

    def __init__(
        self,
        definition: Union[str, PipelineDefinition],
        *,
        registry: Optional[PipelineRegistry] = None,
        supervisor: Optional[HookSupervisor] = None,
    ):
        self.definition = resolve_definition(definition, registry).freeze()
        self.supervisor = supervisor

    def run(
        self,
        initial_value: Any,
        options: Any = None,
        *,
        meta: Optional[Mapping[str, Any]] = None,
    ) -> RunResult:
        definition = self.definition
        ctx = RunContext.start(pipeline=definition.name, options=options, meta=dict(meta or {}))
        frozen_options = ctx.options

        if not definition.steps:
            ctx.add_warning(ref=definition.name or "<anonymous>", message="pipeline has no steps")

        initial = PipelineState.new(initial_value, pipeline=definition.name)
        final = run_steps(initial, definition.steps, frozen_options, ctx)

        dispatch(
            final,
            definition.sync_hooks,
            definition.async_hooks,
            definition.handler,
            frozen_options,
            supervisor=self.supervisor,
            ctx=ctx,
        )

        result = final.to_result()
        ctx.log(
            ref=definition.name or "<anonymous>",
            level="INFO",
            message="pipeline succeeded" if final.valid else "pipeline failed",
            executed_steps=len(final.executed_steps),
        )
        return RunResult(result=result, state=final, context=ctx)


def execute(
    definition: Union[str, PipelineDefinition],
    initial_value: Any,
    options: Any = None,
    *,
    registry: Optional[PipelineRegistry] = None,
    supervisor: Optional[HookSupervisor] = None,
) -> Union[Ok, Err]:
    """
    Executa o pipeline `definition` sobre `initial_value`.

    Steps rodam em ordem de declaração; após a primeira falha os demais
    são ignorados. Em seguida o error handler (apenas em falha), os hooks
    assíncronos (lançados, não aguardados) e os hooks síncronos recebem o
    estado final com as mesmas `options`.

    Returns:
        `Ok(value)` se o estado final é válido, senão `Err(error)`.

    Raises:
        PipelineDefinitionError: se `definition` não resolve para uma
            definição válida.
        TransformContractError: se um Step retorna formato inválido.
    """
    engine = Engine(definition, registry=registry, supervisor=supervisor)
    return engine.run(initial_value, options).result
