"""
Registro de definições de pipeline.

Este módulo define o `PipelineRegistry`, o colaborador externo que
resolve um nome para as listas de referências de um pipeline.

O registry garante que:
    - cada definição possua um nome válido
    - não existam nomes duplicados
    - a definição retornada seja sempre a mesma (listas estáveis)

Decisões arquiteturais:
    - Definições são congeladas ao serem registradas
    - Nomes desconhecidos são falhas fatais, antes de qualquer Step
    - Existe um registry padrão de processo, usado por `execute(name, ...)`

Limites explícitos:
    - Não executa pipelines
    - Não importa referências (ver `core.config.definitions`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from railpipe.core.exceptions import DuplicatePipelineError, PipelineDefinitionError

from .definition import PipelineDefinition


@dataclass
class PipelineRegistry:
    """
    Registro nomeado de `PipelineDefinition`, preservando ordem de registro.
    """

    _definitions: Dict[str, PipelineDefinition] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, definition: PipelineDefinition) -> PipelineDefinition:
        if not isinstance(definition, PipelineDefinition):
            raise PipelineDefinitionError(
                message=f"expected PipelineDefinition, got {type(definition).__name__}",
                details={"received": type(definition).__name__},
            )

        name = definition.name
        if not isinstance(name, str) or not name.strip():
            raise PipelineDefinitionError(
                message="pipeline name must be a non-empty string",
                details={"received": repr(name)},
            )

        if name in self._definitions:
            raise DuplicatePipelineError(
                message=f"Duplicate pipeline name: {name}",
                details={"pipeline": name},
            )

        self._definitions[name] = definition.freeze()
        self._order.append(name)
        return definition

    def get(self, name: str) -> PipelineDefinition:
        try:
            return self._definitions[name]
        except (KeyError, TypeError):
            raise PipelineDefinitionError(
                message=f"{name!r} is not a valid pipeline",
                details={"pipeline": repr(name), "known": list(self._order)},
                hint="Registre a definição antes de executá-la",
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def list(self) -> List[PipelineDefinition]:
        return [self._definitions[n] for n in self._order]

    def names(self) -> List[str]:
        return list(self._order)


default_registry = PipelineRegistry()


def register(definition: PipelineDefinition) -> PipelineDefinition:
    """Registra `definition` no registry padrão do processo."""
    return default_registry.add(definition)
