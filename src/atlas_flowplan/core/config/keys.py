# src/atlas_flowplan/core/config/keys.py
"""
Chaves canônicas de configuração consumidas pelo planner.

As chaves são caminhos pontilhados sobre o dicionário de configuração
resolvido (`"reducer_estimation.bytes_per_reducer"` corresponde a
`config["reducer_estimation"]["bytes_per_reducer"]`).

Este módulo também expõe o mecanismo de registro de estimadores pela
camada de configuração: `add_reducer_estimator` acrescenta um
identificador ao fim da cadeia, preservando a ordem de registro como
ordem de avaliação.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Optional

BYTES_PER_REDUCER_KEY = "reducer_estimation.bytes_per_reducer"
ESTIMATORS_KEY = "reducer_estimation.estimators"
DEFAULT_REDUCERS_KEY = "reducer_estimation.default_reducers"
PRUNE_UNUSED_SOURCES_KEY = "planner.prune_unused_sources"

# 4 GiB por reducer
DEFAULT_BYTES_PER_REDUCER = 1 << 32

_MISSING = object()


def get_setting(config: Optional[Dict[str, Any]], key: str, default: Any = None) -> Any:
    """
    Lê uma chave pontilhada da configuração.

    Retorna `default` quando qualquer segmento do caminho está ausente,
    quando um nível intermediário não é um dicionário ou quando o valor
    final é `None`.
    """
    node: Any = config or {}
    for part in key.split("."):
        if not isinstance(node, dict):
            return default
        node = node.get(part, _MISSING)
        if node is _MISSING:
            return default
    return default if node is None else node


def _set_setting(config: Dict[str, Any], key: str, value: Any) -> None:
    parts = key.split(".")
    node = config
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def add_reducer_estimator(config: Optional[Dict[str, Any]], identifier: str) -> Dict[str, Any]:
    """
    Retorna uma nova configuração com `identifier` acrescentado à cadeia
    de estimadores (`reducer_estimation.estimators`).

    O primeiro identificador registrado é o primeiro avaliado. O input não
    é mutado. Registrar o mesmo identificador duas vezes é permitido aqui;
    a duplicidade é rejeitada por `build_registry`.

    Raises:
        ValueError: Se `identifier` não for uma string não vazia.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise ValueError("estimator identifier must be a non-empty string")

    out: Dict[str, Any] = deepcopy(config or {})
    current = get_setting(out, ESTIMATORS_KEY, [])
    if isinstance(current, str):
        chain: List[str] = [part.strip() for part in current.split(",") if part.strip()]
    else:
        chain = list(current or [])
    chain.append(identifier)
    _set_setting(out, ESTIMATORS_KEY, chain)
    return out
