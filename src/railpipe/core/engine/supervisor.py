"""
Supervisor de hooks assíncronos.

O `HookSupervisor` é o recurso de processo que executa hooks assíncronos
fora da thread do chamador. Ele é criado uma vez e reutilizado por todas
as execuções; nenhuma execução espera pelos hooks que lançou.

Isolamento:
    - cada hook roda como uma unidade independente no pool de threads
    - exceções de um hook são capturadas pelo supervisor, convertidas em
      `RailpipeErrorPayload` e registradas (RunContext + `faults`)
    - a falha de um hook nunca afeta outro hook nem o resultado da run

Limites explícitos:
    - Não cancela hooks em andamento
    - Não impõe timeout (exceto em `drain`, que apenas observa)
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Dict, List, Mapping, Optional, Set

from railpipe.core.config.errors import InvalidEngineConfigError
from railpipe.core.errors import hook_execution_error
from railpipe.core.pipeline.context import RunContext
from railpipe.core.pipeline.state import PipelineState
from railpipe.core.pipeline.step import Hook, describe_ref

DEFAULT_MAX_WORKERS = 4
DEFAULT_THREAD_NAME_PREFIX = "railpipe-hook"


class HookSupervisor:
    """Pool de threads supervisionado para hooks assíncronos."""

    def __init__(
        self,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        thread_name_prefix: str = DEFAULT_THREAD_NAME_PREFIX,
    ):
        if not isinstance(max_workers, int) or max_workers < 1:
            raise ValueError("max_workers must be a positive integer")
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=thread_name_prefix,
        )
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()
        self.faults: List[Dict[str, Any]] = []

    def launch(
        self,
        hook: Hook,
        state: PipelineState,
        options: Any,
        ctx: Optional[RunContext] = None,
    ) -> Future:
        """Submete `hook(state, options)` e retorna imediatamente."""
        ref = describe_ref(hook)
        future = self._executor.submit(self._run_isolated, hook, ref, state, options, ctx)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _run_isolated(
        self,
        hook: Hook,
        ref: str,
        state: PipelineState,
        options: Any,
        ctx: Optional[RunContext],
    ) -> bool:
        try:
            hook(state, options)
        except Exception as e:
            payload = hook_execution_error(hook=ref, pipeline=state.pipeline, exc=e)
            with self._lock:
                self.faults.append(payload.to_dict())
            if ctx is not None:
                ctx.log(ref=ref, level="ERROR", message="async hook failed", error=payload.to_dict())
            return False

        if ctx is not None:
            ctx.log(ref=ref, level="DEBUG", message="async hook done")
        return True

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def drain(self, timeout: Optional[float] = None) -> bool:
        """Espera os hooks em andamento; retorna False se o timeout expirar."""
        with self._lock:
            futures = set(self._pending)
        if not futures:
            return True
        _, not_done = wait(futures, timeout=timeout)
        return not not_done

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


_default_supervisor: Optional[HookSupervisor] = None
_default_lock = threading.Lock()


def get_default_supervisor() -> HookSupervisor:
    """Supervisor de processo, criado na primeira chamada e reutilizado."""
    global _default_supervisor
    with _default_lock:
        if _default_supervisor is None:
            _default_supervisor = HookSupervisor()
        return _default_supervisor


def configure_default_supervisor(config: Optional[Mapping[str, Any]] = None) -> HookSupervisor:
    """
    Cria o supervisor de processo a partir da configuração do engine.

    Lê `engine.async_hooks.max_workers` e
    `engine.async_hooks.thread_name_prefix`. Deve ser chamado na
    inicialização. O supervisor anterior, se houver, não é encerrado:
    runs concorrentes que já o obtiveram continuam lançando hooks nele.
    Quem o criou decide quando chamar `shutdown()`.

    Raises:
        InvalidEngineConfigError: se a seção `engine.async_hooks` não é
            um dict ou contém valores de tipo inválido.
    """
    global _default_supervisor
    engine_cfg = _section(config or {}, "engine")
    hooks_cfg = _section(engine_cfg, "async_hooks", parent="engine.")

    max_workers = hooks_cfg.get("max_workers", DEFAULT_MAX_WORKERS)
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise InvalidEngineConfigError(
            f"engine.async_hooks.max_workers deve ser inteiro positivo, recebido: {max_workers!r}"
        )
    prefix = hooks_cfg.get("thread_name_prefix", DEFAULT_THREAD_NAME_PREFIX)
    if not isinstance(prefix, str):
        raise InvalidEngineConfigError(
            f"engine.async_hooks.thread_name_prefix deve ser str, recebido: {type(prefix).__name__}"
        )

    supervisor = HookSupervisor(max_workers=max_workers, thread_name_prefix=prefix)
    with _default_lock:
        _default_supervisor = supervisor
    return supervisor


def _section(config: Mapping[str, Any], key: str, *, parent: str = "") -> Mapping[str, Any]:
    value = config.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidEngineConfigError(
            f"{parent}{key} deve ser dict, recebido: {type(value).__name__}"
        )
    return value
