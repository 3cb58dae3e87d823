# src/atlas_flowplan/core/config/loader.py
"""
Loader de configuração do Atlas FlowPlan.

Resolve a configuração efetiva de uma sessão de planejamento a partir de
um arquivo de defaults (obrigatório) e de um arquivo local de overrides
(opcional), aplicando `deep_merge` com precedência do arquivo local.

Exemplo de defaults (YAML):

    reducer_estimation:
      bytes_per_reducer: 4294967296
      estimators: [input_size]
      default_reducers: 1
    planner:
      prune_unused_sources: true

Invariantes:
    - O arquivo de defaults é obrigatório
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não valida `bytes_per_reducer` nem identificadores de estimadores
      (isso ocorre em `build_registry`, de forma antecipada)
    - Não persiste configuração nem hash
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


class _ConfigYamlLoader(yaml.SafeLoader):
    """
    `SafeLoader` que também resolve como float a notação exponencial com
    expoente sem sinal (`1.5e9`, `4e9`, `4.0e9`).

    O resolver YAML 1.1 do PyYAML exige expoente com sinal (`1.5e+9`) e
    devolveria esses valores como string, quebrando o merge com defaults
    inteiros.
    """


_ConfigYamlLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(
        r"""^(?:[-+]?[0-9][0-9_]*(?:\.[0-9_]*)?[eE][-+]?[0-9]+
            |[-+]?\.[0-9_]+[eE][-+]?[0-9]+)$""",
        re.X,
    ),
    list("-+0123456789."),
)


def _read_config_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML/JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como `{}`.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=_ConfigYamlLoader)

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
    Carrega e resolve a configuração efetiva do planner.

    O arquivo local é ignorado quando `local_path` é `None` ou quando o
    arquivo não existe; quando presente, seus valores têm prioridade
    sobre os defaults.

    Args:
        defaults_path (str): Caminho do arquivo de defaults.
        local_path (Optional[str]): Caminho opcional de overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se houver conflito estrutural no merge.
    """

    effective = _read_config_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _read_config_file(local_file))

    return effective
