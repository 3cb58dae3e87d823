# src/atlas_flowplan/core/config/hashing.py
"""
Hash canônico da configuração efetiva do planner.

O hash identifica a configuração usada em uma sessão de planejamento e é
exposto no `PlanResult`, permitindo associar uma decisão de reducers à
configuração exata que a produziu.

Política (v1): JSON com chaves ordenadas, separadores compactos, UTF-8,
SHA-256.
"""


import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Retorna o SHA-256 hexadecimal (64 caracteres) da configuração.

    Configurações estruturalmente equivalentes produzem o mesmo hash,
    independentemente da ordem original das chaves.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
