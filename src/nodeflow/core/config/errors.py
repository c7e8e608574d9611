"""
Exceções da camada de configuração do NodeFlow.

As exceções aqui definidas representam violações estruturais na
configuração (arquivo ausente, formato não suportado, raiz inválida,
conflito de tipos no merge), e não erros de execução de nós.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa falha de um nó ou provedor
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração do NodeFlow."""


class ConfigFileNotFoundError(ConfigError):
    """O arquivo de configuração indicado não existe."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"providers": {"primary": {...}}}
        - override: {"providers": "gemini"}
    """
