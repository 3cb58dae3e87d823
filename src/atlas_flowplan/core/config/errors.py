# src/atlas_flowplan/core/config/errors.py
"""
Exceções da camada de configuração do Atlas FlowPlan.

Estas exceções cobrem falhas de **arquivo e estrutura** de configuração
(arquivo ausente, formato desconhecido, raiz inválida, conflito de tipos
no merge).

Valores semanticamente inválidos para o planner (por exemplo
`bytes_per_reducer <= 0` ou um estimador desconhecido) não pertencem a
esta hierarquia: são reportados como `ConfigurationError` em
`atlas_flowplan.core.exceptions`, no momento da construção do registry.

Invariantes:
    - Todas as exceções deste módulo herdam de `ConfigError`
"""


class ConfigError(Exception):
    """
    Exceção base para erros de carregamento e resolução de configuração.

    Limites explícitos:
        - Não representa erro de grafo
        - Não representa erro de estimativa de reducers
    """


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de defaults da configuração do planner não existe.

    O arquivo de defaults é obrigatório: sem ele não há valor base para
    `reducer_estimation.bytes_per_reducer` nem para a lista de estimadores.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo de configuração não suportada.

    Formatos aceitos: YAML (.yaml, .yml) e JSON (.json). O formato nunca é
    inferido pelo conteúdo.
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"reducer_estimation": {"bytes_per_reducer": 1024}}
        - override: {"reducer_estimation": "fast"}

    Nenhum merge parcial é produzido quando este erro ocorre.
    """
