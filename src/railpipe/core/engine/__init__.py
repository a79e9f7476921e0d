"""
Engine do railpipe.

Este pacote contém a execução de pipelines lineares:

    - executor   → dobra o estado pelos Steps com short-circuit
    - dispatcher → error handler, hooks assíncronos e síncronos
    - supervisor → pool de threads de processo para hooks assíncronos
    - engine     → runner público (`Engine`, `execute`)

Invariantes:
    - Steps executam em ordem de declaração, no máximo uma vez por run
    - Hooks sempre executam, com sucesso ou falha do pipeline
    - A execução nunca espera hooks assíncronos
"""

from .dispatcher import dispatch
from .engine import Engine, RunResult, execute, resolve_definition
from .executor import run_steps
from .supervisor import HookSupervisor, configure_default_supervisor, get_default_supervisor

__all__ = [
    "Engine",
    "HookSupervisor",
    "RunResult",
    "configure_default_supervisor",
    "dispatch",
    "execute",
    "get_default_supervisor",
    "resolve_definition",
    "run_steps",
]
