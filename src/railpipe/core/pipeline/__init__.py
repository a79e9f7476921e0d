"""
# Pipeline Core: railpipe

Este pacote define os **contratos canônicos** e as **estruturas
fundamentais** de um pipeline linear no railpipe.

## Componentes

- **types**: `Ok`, `Err`, `FAILURE`, `Result`, `HookMode`
- **state**: `PipelineState`, o estado imutável conduzido pelos Steps
- **step**: protocolos chamáveis e validação de assinatura
- **context**: `RunContext`, log estruturado por execução
- **definition**: `PipelineDefinition`, builder das listas de referências
- **registry**: `PipelineRegistry`, resolução de nomes para definições

## Invariantes

- A ordem de declaração é a ordem de execução
- Uma definição executada nunca muda
- Estado entregue a hooks é somente leitura
"""

from .context import RunContext, freeze_options
from .definition import PipelineDefinition
from .registry import PipelineRegistry, default_registry, register
from .state import PipelineState
from .step import Hook, Step, describe_ref, ensure_two_args
from .types import FAILURE, Err, HookMode, Ok, Result

__all__ = [
    "FAILURE",
    "Err",
    "Hook",
    "HookMode",
    "Ok",
    "PipelineDefinition",
    "PipelineRegistry",
    "PipelineState",
    "Result",
    "Step",
    "RunContext",
    "default_registry",
    "describe_ref",
    "ensure_two_args",
    "freeze_options",
    "register",
]
