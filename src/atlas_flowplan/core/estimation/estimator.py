# src/atlas_flowplan/core/estimation/estimator.py
"""
Contrato de estimadores de reducers e o estimador por volume de entrada.

Um estimador é uma estratégia nomeada e sem estado:

    estimate(stage, config) -> Optional[int]

`None` significa "sem opinião" e não é erro: o planner simplesmente
consulta o próximo estimador da cadeia.

`InputSizeReducerEstimator` é o estimador padrão:

    reducers = ceil(input_size_bytes / bytes_per_reducer), mínimo 1

Decisões arquiteturais:
    - Aritmética inteira (sem float) para manter a estimativa exata e
      monotônica em `input_size_bytes` para qualquer volume
    - `bytes_per_reducer <= 0` é erro de configuração, nunca divisão
      por zero ou contagem não positiva
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from atlas_flowplan.core.config.keys import BYTES_PER_REDUCER_KEY, DEFAULT_BYTES_PER_REDUCER, get_setting
from atlas_flowplan.core.exceptions import ConfigurationError

from .stage import Stage

_INT_STRING = re.compile(r"[+-]?[0-9]+")
_FLOAT_STRING = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _parse_integral_string(text: str) -> Optional[int]:
    if _INT_STRING.fullmatch(text):
        return int(text)
    if _FLOAT_STRING.fullmatch(text):
        number = float(text)
        if number.is_integer():
            return int(number)
    return None


def coerce_positive_int(value: Any, *, key: str) -> int:
    """
    Converte `value` em inteiro positivo ou levanta `ConfigurationError`.

    Aceita inteiros, floats integrais (YAML `4.0e9`) e strings numéricas
    ASCII com valor integral (`"1024"`, `"1.5e9"`), vindas de configurações
    chave-valor planas. Booleanos são rejeitados.
    """
    parsed: Optional[int] = None

    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float) and value.is_integer():
        parsed = int(value)
    elif isinstance(value, str):
        parsed = _parse_integral_string(value.strip())

    if parsed is None:
        raise ConfigurationError(
            message=f"'{key}' must be an integer",
            details={"key": key, "value": repr(value)},
        )
    if parsed <= 0:
        raise ConfigurationError(
            message=f"'{key}' must be > 0",
            details={"key": key, "value": parsed},
        )
    return parsed


@runtime_checkable
class ReducerEstimator(Protocol):
    """
    Contrato de um estimador de reducers.

    Atributos obrigatórios:
        - id: identificador estável do estimador
    """

    id: str

    def estimate(self, stage: Stage, config: Dict[str, Any]) -> Optional[int]:
        """Número de reducers sugerido para `stage`, ou None (sem opinião)."""
        ...


class InputSizeReducerEstimator:
    """
    Estima reducers pelo volume de entrada do estágio.

    `bytes_per_reducer` vem da chave `reducer_estimation.bytes_per_reducer`
    da configuração recebida em `estimate`; na ausência dela, do valor
    passado no construtor; por fim, do default (4 GiB).

    Sem volume conhecido o estimador não opina.
    """

    id = "input_size"

    def __init__(self, bytes_per_reducer: Optional[int] = None):
        self.bytes_per_reducer: Optional[int] = (
            coerce_positive_int(bytes_per_reducer, key=BYTES_PER_REDUCER_KEY)
            if bytes_per_reducer is not None
            else None
        )

    def resolve_bytes_per_reducer(self, config: Optional[Dict[str, Any]]) -> int:
        value = get_setting(config, BYTES_PER_REDUCER_KEY, None)
        if value is None:
            value = self.bytes_per_reducer if self.bytes_per_reducer is not None else DEFAULT_BYTES_PER_REDUCER
        return coerce_positive_int(value, key=BYTES_PER_REDUCER_KEY)

    def estimate(self, stage: Stage, config: Dict[str, Any]) -> Optional[int]:
        if stage.input_size_bytes is None:
            return None
        per_reducer = self.resolve_bytes_per_reducer(config)
        return max(1, -(-stage.input_size_bytes // per_reducer))

    def __repr__(self) -> str:
        return f"InputSizeReducerEstimator(bytes_per_reducer={self.bytes_per_reducer!r})"
