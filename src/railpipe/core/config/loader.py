# src/railpipe/core/config/loader.py
"""
Loader de configuração do railpipe.

A configuração é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional, ignorado se não existir)

Formato esperado:

    engine:
      async_hooks:
        max_workers: 4
        thread_name_prefix: railpipe-hook
    pipelines:
      string_to_number:
        steps:
          - myapp.numbers:cleanup
          - myapp.numbers:parse
        hooks: [myapp.audit:record]
        async_hooks: [myapp.metrics:emit]
        error_handler: myapp.audit:on_error

Invariantes:
    - O resultado é sempre um `dict` puro
    - Overrides nunca mutam os defaults
    - A mesma entrada sempre produz a mesma configuração
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from railpipe.core.pipeline.registry import PipelineRegistry

from .definitions import build_registry
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .merge import deep_merge


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML ou JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como `{}`.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {path}")

    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega defaults e, se existir, aplica o override local via deep-merge.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se houver conflito estrutural no merge.
    """
    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


@dataclass(frozen=True)
class LoadedPipelines:
    """Configuração efetiva, seu hash e o registry construído a partir dela."""

    config: Dict[str, Any]
    config_hash: str
    registry: PipelineRegistry


def load_pipelines(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
    registry: Optional[PipelineRegistry] = None,
) -> LoadedPipelines:
    """
    Carrega a configuração e constrói (uma única vez) as definições declaradas.

    As definições são congeladas ao entrar no registry, portanto as listas
    de referências permanecem estáveis durante toda a vida do processo.
    """
    config = load_config(defaults_path=defaults_path, local_path=local_path)
    return LoadedPipelines(
        config=config,
        config_hash=compute_config_hash(config),
        registry=build_registry(config, registry=registry),
    )
