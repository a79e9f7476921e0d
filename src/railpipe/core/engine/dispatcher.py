"""
Despachante de hooks do railpipe.

Recebe o estado final (imutável) de uma run e executa, nesta ordem fixa:

    1. error handler, se o estado é inválido e há handler configurado
    2. lançamento de todos os hooks assíncronos no `HookSupervisor`
    3. hooks síncronos, em ordem de declaração

Decisões arquiteturais:
    - Hooks assíncronos são lançados e nunca aguardados aqui
    - Exceções de hooks síncronos e do error handler NÃO são capturadas:
      hooks são instrumentação confiável e falhas devem ser ruidosas
    - Todos recebem a mesma instância de `PipelineState`

Limites explícitos:
    - Não altera o resultado da run
    - Não executa Steps
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from railpipe.core.errors import ERROR_HANDLER_RESULT
from railpipe.core.pipeline.context import RunContext
from railpipe.core.pipeline.state import PipelineState
from railpipe.core.pipeline.step import Hook, describe_ref
from railpipe.core.pipeline.types import HookMode

from .supervisor import HookSupervisor, get_default_supervisor


def dispatch(
    final_state: PipelineState,
    sync_hooks: Iterable[Hook],
    async_hooks: Iterable[Hook],
    error_handler: Optional[Hook],
    options: Any,
    *,
    supervisor: Optional[HookSupervisor] = None,
    ctx: Optional[RunContext] = None,
) -> None:
    if not final_state.valid and error_handler is not None:
        handled = error_handler(final_state, options)
        if ctx is not None:
            ctx.log(
                ref=describe_ref(error_handler),
                level="INFO",
                message="error handler invoked",
                type=ERROR_HANDLER_RESULT,
                error=repr(final_state.error),
                result=repr(handled),
            )

    async_hooks = list(async_hooks)
    if async_hooks:
        supervisor = supervisor or get_default_supervisor()
        for hook in async_hooks:
            if ctx is not None:
                ctx.log(ref=describe_ref(hook), level="DEBUG", message="async hook launched", mode=HookMode.ASYNC.value)
            supervisor.launch(hook, final_state, options, ctx)

    for hook in sync_hooks:
        hook(final_state, options)
        if ctx is not None:
            ctx.log(ref=describe_ref(hook), level="DEBUG", message="hook done", mode=HookMode.SYNC.value)
