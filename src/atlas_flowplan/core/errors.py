"""
Atlas FlowPlan — Canonical Error Structures (v1)

Este módulo define o formato serializável com que falhas de planejamento
chegam à camada de submissão de jobs.

Um erro de planejamento bloqueia a submissão e deve ser:

- explícito
- serializável
- acionável

Fallbacks benignos (estimador sem opinião, head sem fonte declarada) nunca
geram payload de erro.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError, FlowPlanException, MalformedGraphError


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlowPlanErrorPayload:
    """
    Payload canônico de erro do Atlas FlowPlan.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

GRAPH_MALFORMED = "GRAPH_MALFORMED"
PLANNER_CONFIGURATION_ERROR = "PLANNER_CONFIGURATION_ERROR"
PLANNER_EXECUTION_ERROR = "PLANNER_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def graph_malformed(
    *,
    message: str = "Grafo de dataflow malformado",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Remova o ciclo ou a referência inválida entre nós antes de replanejar. Grafos de dataflow devem ser acíclicos.",
) -> FlowPlanErrorPayload:
    return FlowPlanErrorPayload(
        type=GRAPH_MALFORMED,
        message=message,
        details=details or {},
        hint=hint,
    )


def planner_configuration_error(
    *,
    message: str = "Configuração inválida para estimativa de reducers",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise reducer_estimation.* na configuração e declare apenas estimadores registrados.",
) -> FlowPlanErrorPayload:
    return FlowPlanErrorPayload(
        type=PLANNER_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )


def planner_execution_error(
    *,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o grafo e os estimadores registrados. Nenhum fallback é aplicado automaticamente.",
) -> FlowPlanErrorPayload:
    return FlowPlanErrorPayload(
        type=PLANNER_EXECUTION_ERROR,
        message="Falha inesperada durante o planejamento",
        details={
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def exception_to_error(exc: Exception) -> FlowPlanErrorPayload:
    """Converte uma exceção em payload serializável, sem stack trace."""
    if isinstance(exc, MalformedGraphError):
        return graph_malformed(
            message=exc.message,
            details=dict(exc.details or {}),
            **({"hint": exc.hint} if exc.hint else {}),
        )
    if isinstance(exc, ConfigurationError):
        return planner_configuration_error(
            message=exc.message,
            details=dict(exc.details or {}),
            **({"hint": exc.hint} if exc.hint else {}),
        )
    if isinstance(exc, FlowPlanException):
        return FlowPlanErrorPayload(
            type=exc.__class__.__name__,
            message=exc.message,
            details=dict(exc.details or {}),
            hint=exc.hint,
        )
    return planner_execution_error(
        exc_type=exc.__class__.__name__,
        exc_message=str(exc) or None,
    )
