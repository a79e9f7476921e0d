"""
Camada de configuração do railpipe.

Carrega, mescla e identifica a configuração declarativa de pipelines e
do engine:

    - loader      → leitura YAML/JSON (defaults + override local)
    - merge       → deep-merge determinístico
    - hashing     → identidade canônica da configuração efetiva
    - definitions → seção `pipelines` → `PipelineRegistry`

Limites explícitos:
    - Não executa pipelines
    - Não descobre funções por convenção de nome
"""

from .definitions import build_definition, build_registry, resolve_ref
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidEngineConfigError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import LoadedPipelines, load_config, load_pipelines
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidEngineConfigError",
    "LoadedPipelines",
    "UnsupportedConfigFormatError",
    "build_definition",
    "build_registry",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "load_pipelines",
    "resolve_ref",
]
