"""
Exceções da camada de configuração do railpipe.

Representam violações estruturais da configuração, detectadas antes de
qualquer execução. Referências de pipeline que não podem ser importadas
são `PipelineDefinitionError` (ver `core.exceptions`), não erros desta
hierarquia.
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração.

    Limites explícitos:
        - Não representa falha de pipeline
        - Não representa violação de contrato de Step
    """


class DefaultsNotFoundError(ConfigError):
    """O arquivo de defaults é obrigatório e não foi encontrado."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração (ou de uma seção) não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"engine": {"async_hooks": {"max_workers": 4}}}
        - override: {"engine": "DEBUG"}
    """


class InvalidEngineConfigError(ConfigError):
    """A seção `engine` da configuração contém tipo ou valor inválido."""
