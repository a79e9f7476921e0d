"""
railpipe: pipelines lineares com short-circuit e hooks de finalização.

Um pipeline é uma sequência ordenada de Steps aplicada a um valor, seguida
de hooks que observam o desfecho. Cada Step avança o valor (`Ok`) ou
interrompe o pipeline (`Err`); todo pipeline, com sucesso ou falha,
executa seus hooks antes de reportar o resultado.

Exemplo:

    from railpipe import Err, Ok, PipelineDefinition

    numbers = PipelineDefinition("string_to_number")

    @numbers.step
    def ensure_string(value, options):
        return Ok(value) if isinstance(value, str) else Err("Not a string")

    @numbers.step
    def parse(value, options):
        try:
            return Ok(float(value.strip()))
        except ValueError:
            return Err("Invalid number")

    numbers.execute(" 4.5 ")   # Ok(value=4.5)

Limites explícitos:
    - Não faz retry de Steps
    - Não persiste estado entre runs
    - Não suporta grafos condicionais (sequência estritamente linear)
    - Não impõe timeout a Steps ou hooks
"""

from .core.engine import (
    Engine,
    HookSupervisor,
    RunResult,
    configure_default_supervisor,
    execute,
    get_default_supervisor,
)
from .core.errors import GENERIC_ERROR
from .core.exceptions import (
    DuplicatePipelineError,
    PipelineDefinitionError,
    RailpipeException,
    TransformContractError,
)
from .core.pipeline import (
    FAILURE,
    Err,
    Ok,
    PipelineDefinition,
    PipelineRegistry,
    PipelineState,
    Result,
    RunContext,
    default_registry,
    register,
)

__all__ = [
    "Engine",
    "Err",
    "DuplicatePipelineError",
    "FAILURE",
    "GENERIC_ERROR",
    "HookSupervisor",
    "Ok",
    "PipelineDefinition",
    "PipelineDefinitionError",
    "PipelineRegistry",
    "PipelineState",
    "RailpipeException",
    "Result",
    "RunContext",
    "RunResult",
    "TransformContractError",
    "configure_default_supervisor",
    "default_registry",
    "execute",
    "get_default_supervisor",
    "register",
]
