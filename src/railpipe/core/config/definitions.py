"""
Construção de definições de pipeline a partir da configuração.

Forma declarativa do contrato de registro: a seção `pipelines` da
configuração é avaliada uma vez, as referências são importadas e as
definições resultantes são registradas (e congeladas).

Referências aceitas:
    - "pacote.modulo:atributo"          (preferida)
    - "pacote.modulo:Classe.metodo"
    - "pacote.modulo.atributo"          (último segmento é o atributo)
"""

from __future__ import annotations

import importlib
from typing import Any, Dict, Iterable, Mapping, Optional

from railpipe.core.exceptions import PipelineDefinitionError
from railpipe.core.pipeline.definition import PipelineDefinition
from railpipe.core.pipeline.registry import PipelineRegistry

from .errors import InvalidConfigRootTypeError

_KNOWN_KEYS = {"steps", "hooks", "async_hooks", "error_handler"}


def resolve_ref(ref: str) -> Any:
    """Importa o objeto apontado por `ref`."""
    if not isinstance(ref, str) or not ref.strip():
        raise PipelineDefinitionError(
            message=f"invalid reference {ref!r}",
            details={"ref": repr(ref)},
            hint="Use o formato 'pacote.modulo:funcao'",
        )

    if ":" in ref:
        module_name, _, attr_path = ref.partition(":")
    else:
        module_name, _, attr_path = ref.rpartition(".")

    if not module_name or not attr_path:
        raise PipelineDefinitionError(
            message=f"invalid reference {ref!r}",
            details={"ref": ref},
            hint="Use o formato 'pacote.modulo:funcao'",
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise PipelineDefinitionError(
            message=f"cannot import module {module_name!r} for {ref!r}",
            details={"ref": ref, "module": module_name, "exc_message": str(e)},
        ) from e

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise PipelineDefinitionError(
                message=f"{ref!r} does not exist",
                details={"ref": ref, "missing": part},
            ) from None

    return target


def _ref_list(name: str, key: str, raw: Any) -> Iterable[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if not isinstance(raw, list):
        raise PipelineDefinitionError(
            message=f"pipeline {name!r}: '{key}' must be a list of references",
            details={"pipeline": name, "key": key, "received": type(raw).__name__},
        )
    return raw


def build_definition(name: str, section: Mapping[str, Any]) -> PipelineDefinition:
    """Monta uma `PipelineDefinition` a partir de uma seção `pipelines.<name>`."""
    if not isinstance(section, Mapping):
        raise InvalidConfigRootTypeError(
            f"pipelines.{name} deve ser dict, recebido: {type(section).__name__}"
        )

    unknown = set(section) - _KNOWN_KEYS
    if unknown:
        raise PipelineDefinitionError(
            message=f"pipeline {name!r}: unknown keys {sorted(unknown)}",
            details={"pipeline": name, "unknown": sorted(unknown)},
        )

    definition = PipelineDefinition(name)
    for ref in _ref_list(name, "steps", section.get("steps")):
        definition.step(resolve_ref(ref))
    for ref in _ref_list(name, "hooks", section.get("hooks")):
        definition.hook(resolve_ref(ref))
    for ref in _ref_list(name, "async_hooks", section.get("async_hooks")):
        definition.async_hook(resolve_ref(ref))

    handler = section.get("error_handler")
    if handler is not None:
        definition.error_handler(resolve_ref(handler))

    return definition


def build_registry(
    config: Dict[str, Any],
    *,
    registry: Optional[PipelineRegistry] = None,
) -> PipelineRegistry:
    """
    Registra todas as definições da seção `pipelines` em `registry`
    (um registry novo, se omitido).
    """
    registry = registry if registry is not None else PipelineRegistry()

    pipelines = config.get("pipelines") or {}
    if not isinstance(pipelines, dict):
        raise InvalidConfigRootTypeError(
            f"pipelines deve ser dict, recebido: {type(pipelines).__name__}"
        )

    for name, section in pipelines.items():
        registry.add(build_definition(name, section or {}))

    return registry
