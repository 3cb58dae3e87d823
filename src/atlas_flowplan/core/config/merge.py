# src/atlas_flowplan/core/config/merge.py
"""
Deep-merge de configuração do planner.

Política (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total
    - escalar     → sobrescrita direta
    - tipos incompatíveis → `ConfigTypeConflictError`

A sobrescrita total de listas é relevante para
`reducer_estimation.estimators`: um override local substitui a cadeia de
estimadores inteira, nunca intercala identificadores com os defaults.
Para acrescentar um estimador à cadeia existente use
`atlas_flowplan.core.config.keys.add_reducer_estimator`.

Nenhum input é mutado.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` e `override` em um novo dicionário.

    Valores inteiros e de ponto flutuante são considerados compatíveis
    entre si (um YAML com `bytes_per_reducer: 1.5e9` pode sobrescrever um
    default inteiro) e `None` (chave YAML vazia) nunca conflita; qualquer
    outra divergência de tipo é conflito.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se `base`/`override` não forem dicts ou se
            uma mesma chave tiver tipos incompatíveis.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    merged: Dict[str, Any] = deepcopy(base)

    for key, new_value in override.items():
        if key not in merged:
            merged[key] = deepcopy(new_value)
            continue

        old_value = merged[key]

        if isinstance(old_value, dict) and isinstance(new_value, dict):
            merged[key] = deep_merge(old_value, new_value)
            continue

        if isinstance(new_value, list):
            merged[key] = deepcopy(new_value)
            continue

        if old_value is None or new_value is None:
            merged[key] = deepcopy(new_value)
            continue

        if _is_number(old_value) and _is_number(new_value):
            merged[key] = new_value
            continue

        if type(old_value) is not type(new_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(old_value).__name__} vs {type(new_value).__name__}"
            )

        merged[key] = deepcopy(new_value)

    return merged
