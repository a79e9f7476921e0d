"""
Contratos de referências chamáveis do railpipe.

Steps, hooks e o error handler são representados uniformemente como
objetos chamáveis de dois argumentos posicionais. Funções, lambdas,
métodos ligados e objetos com `__call__` são igualmente aceitos.

Assinaturas:
    - Step:         (value, options) -> Ok | Err | FAILURE
    - Hook:         (state, options) -> Any   (retorno ignorado)
    - ErrorHandler: (state, options) -> Any   (retorno apenas registrado)

Limites explícitos:
    - Não executa referências
    - Não decide ordem de execução
"""

from __future__ import annotations

import inspect
from typing import Any, Protocol, runtime_checkable

from railpipe.core.exceptions import PipelineDefinitionError


@runtime_checkable
class Step(Protocol):
    def __call__(self, value: Any, options: Any) -> Any:
        ...


@runtime_checkable
class Hook(Protocol):
    def __call__(self, state: Any, options: Any) -> Any:
        ...



def describe_ref(ref: Any) -> str:
    """Nome legível de uma referência, usado apenas em logs e mensagens."""
    module = getattr(ref, "__module__", None)
    name = getattr(ref, "__qualname__", None) or getattr(ref, "__name__", None)
    if name is None:
        name = type(ref).__qualname__
    return f"{module}.{name}" if module else name


def ensure_two_args(ref: Any, *, role: str) -> Any:
    """
    Valida que `ref` é chamável com exatamente dois argumentos posicionais.

    Referências cuja assinatura não pode ser inspecionada (ex.: builtins
    em C) são aceitas como estão.

    Raises:
        PipelineDefinitionError: se `ref` não é chamável ou não aceita
            `(x, options)`.
    """
    if not callable(ref):
        raise PipelineDefinitionError(
            message=f"{role} must be callable, got {ref!r}",
            details={"role": role, "received": type(ref).__name__},
        )

    try:
        signature = inspect.signature(ref)
    except (TypeError, ValueError):
        return ref

    try:
        signature.bind(None, None)
    except TypeError:
        raise PipelineDefinitionError(
            message=f"{role} {describe_ref(ref)} does not accept 2 parameters",
            details={"role": role, "ref": describe_ref(ref), "signature": str(signature)},
            hint="Declare a função como (value, options) ou (state, options)",
        ) from None

    return ref
