"""
Atlas FlowPlan — Canonical Exceptions (v1)

Exceções tipadas levantadas pelas operações de grafo e pelo planner de
reducers.

Regras:
- Erros de forma do grafo (`MalformedGraphError`) e de configuração
  (`ConfigurationError`) são fatais para a chamada que os detecta.
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- "Sem opinião" de um estimador e fonte não declarada para um head NÃO
  são exceções: são resolvidos internamente por fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _exception_dataclass(cls):
    """
    `@dataclass(frozen=True)` para exceções.

    Os campos declarados continuam imutáveis, mas os atributos dunder que o
    interpretador grava ao propagar a exceção (`__traceback__`,
    `__cause__`, `__context__`, `__notes__`) seguem o caminho normal de
    `BaseException`; do contrário um `contextmanager` que devolve a
    exceção levantaria `FrozenInstanceError` no lugar dela.
    """
    cls = dataclass(frozen=True)(cls)
    frozen_setattr = cls.__setattr__

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("__") and name.endswith("__"):
            object.__setattr__(self, name, value)
        else:
            frozen_setattr(self, name, value)

    cls.__setattr__ = __setattr__
    return cls


@_exception_dataclass
class FlowPlanException(Exception):
    """Base class para exceções internas do Atlas FlowPlan.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Grafo
# ---------------------------------------------------------------------------

@_exception_dataclass
class MalformedGraphError(FlowPlanException):
    """Ciclo no grafo ou referência a algo que não é um nó de processamento."""


# ---------------------------------------------------------------------------
# Configuração / Registry
# ---------------------------------------------------------------------------

@_exception_dataclass
class ConfigurationError(FlowPlanException):
    """Configuração inválida para estimativa de reducers."""


@_exception_dataclass
class UnknownEstimatorError(ConfigurationError):
    """Identificador de estimador sem factory registrada."""


@_exception_dataclass
class DuplicateEstimatorIdError(ConfigurationError):
    """Dois estimadores com o mesmo `id` na mesma cadeia."""
