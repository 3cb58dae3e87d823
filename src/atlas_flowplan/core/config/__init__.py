# src/atlas_flowplan/core/config/__init__.py

"""
Camada de configuração do Atlas FlowPlan.

Este pacote reúne o carregamento, o merge e a identificação (hash) da
configuração de planejamento, além do catálogo de chaves conhecidas
consumidas pelo planner de reducers.

A configuração do planner é um dicionário puro, resolvido a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Chaves relevantes (ver `keys`):
    - reducer_estimation.bytes_per_reducer
    - reducer_estimation.estimators
    - reducer_estimation.default_reducers
    - planner.prune_unused_sources

Limites explícitos:
    - Não valida semântica de grafo
    - Não instancia estimadores (responsabilidade de `estimation.registry`)
    - Não executa planejamento
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .keys import (
    BYTES_PER_REDUCER_KEY,
    DEFAULT_BYTES_PER_REDUCER,
    DEFAULT_REDUCERS_KEY,
    ESTIMATORS_KEY,
    PRUNE_UNUSED_SOURCES_KEY,
    add_reducer_estimator,
    get_setting,
)
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "BYTES_PER_REDUCER_KEY",
    "DEFAULT_BYTES_PER_REDUCER",
    "DEFAULT_REDUCERS_KEY",
    "ESTIMATORS_KEY",
    "PRUNE_UNUSED_SOURCES_KEY",
    "add_reducer_estimator",
    "get_setting",
    "load_config",
    "deep_merge",
]
