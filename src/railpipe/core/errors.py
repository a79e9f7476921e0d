"""
railpipe: Canonical Error Structures (v1)

Este módulo define o payload canônico de erros registrados pelo railpipe
fora do fluxo normal de retorno, em especial falhas de hooks assíncronos,
que não podem alterar o resultado já reportado ao chamador.

Erros registrados devem ser:

- explícitos
- serializáveis
- rastreáveis

Nenhuma falha de hook assíncrono é descartada silenciosamente.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RailpipeErrorPayload:
    """
    Payload canônico de erro do railpipe.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico (v1)
# ---------------------------------------------------------------------------

# Valor usado quando um Step invalida o estado sem descrever o erro
GENERIC_ERROR = "pipeline step failed"

# Hooks
HOOK_EXECUTION_ERROR = "HOOK_EXECUTION_ERROR"
ERROR_HANDLER_RESULT = "ERROR_HANDLER_RESULT"

# Engine
TRANSFORM_CONTRACT_ERROR = "TRANSFORM_CONTRACT_ERROR"


def hook_execution_error(
    *,
    hook: str,
    pipeline: Optional[str],
    exc: BaseException,
    hint: str = "Corrija o hook assíncrono; o resultado do pipeline não foi afetado.",
) -> RailpipeErrorPayload:
    return RailpipeErrorPayload(
        type=HOOK_EXECUTION_ERROR,
        message=str(exc) or "Falha inesperada em hook assíncrono",
        details={
            "hook": hook,
            "pipeline": pipeline,
            "exception_class": exc.__class__.__name__,
        },
        hint=hint,
    )
