# src/atlas_flowplan/core/estimation/planner.py
"""
Planner de reducers por estágio.

Para cada estágio, a decisão segue uma sequência fixa de precedência:

    1. Override explícito (`stage.explicit_reducer_count`) → usado
       incondicionalmente; nenhum estimador é consultado
    2. Cadeia de estimadores → o primeiro que opinar decide; os seguintes
       não são consultados
    3. Default do registry (`default_reducers`, 1 se não configurado)

Cada estágio é estimado isoladamente: a decisão de um estágio depende
apenas do próprio `Stage` (cujo volume de entrada é fornecido pelo
chamador), nunca de estágios vizinhos.

Quando um `PlanningContext` é informado, cada decisão é registrada como
evento estruturado e o fallback para o default gera um warning não fatal.

Limites explícitos:
    - Não mede volumes de entrada
    - Não despacha estágios para execução
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from atlas_flowplan.core.context import PlanningContext
from atlas_flowplan.core.exceptions import ConfigurationError

from .estimator import coerce_positive_int
from .registry import EstimatorRegistry
from .stage import Stage

DEFAULT_REDUCER_COUNT = 1

DECIDED_BY_EXPLICIT = "explicit"
DECIDED_BY_DEFAULT = "default"


@dataclass(frozen=True)
class ReducerDecision:
    """
    Decisão de paralelismo de um estágio.

    Campos:
        - stage_id: estágio decidido
        - reducers: número de reducers (>= 1)
        - decided_by: "explicit", o `id` do estimador vencedor ou "default"
    """

    stage_id: str
    reducers: int
    decided_by: str


@dataclass(frozen=True)
class ReducerPlan:
    """Decisões de todos os estágios, na ordem em que foram informados."""

    decisions: Tuple[ReducerDecision, ...] = ()

    def reducers_for(self, stage_id: str) -> int:
        for decision in self.decisions:
            if decision.stage_id == stage_id:
                return decision.reducers
        raise KeyError(stage_id)

    def counts(self) -> List[int]:
        return [d.reducers for d in self.decisions]

    def to_dict(self) -> Dict[str, int]:
        return {d.stage_id: d.reducers for d in self.decisions}


def _estimator_answer(value: Any, *, estimator_id: str, stage_id: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            message=f"Estimator '{estimator_id}' returned a non-integer reducer count",
            details={"estimator_id": estimator_id, "stage_id": stage_id, "value": repr(value)},
        )
    return max(1, value)


def decide_reducers(
    stage: Stage,
    registry: EstimatorRegistry,
    config: Optional[Dict[str, Any]] = None,
    ctx: Optional[PlanningContext] = None,
) -> ReducerDecision:
    """
    Aplica a precedência override → cadeia → default a um estágio.

    Raises:
        ConfigurationError: override não positivo, estimador devolvendo
            algo que não é inteiro, ou `bytes_per_reducer` inválido na
            configuração.
    """
    cfg = config if config is not None else {}
    sid = stage.stage_id

    if stage.explicit_reducer_count is not None:
        decision = ReducerDecision(
            stage_id=sid,
            reducers=coerce_positive_int(stage.explicit_reducer_count, key=f"{sid}.explicit_reducer_count"),
            decided_by=DECIDED_BY_EXPLICIT,
        )
    else:
        decision = None
        for estimator in registry.estimators:
            answer = _estimator_answer(
                estimator.estimate(stage, cfg),
                estimator_id=estimator.id,
                stage_id=sid,
            )
            if answer is not None:
                decision = ReducerDecision(stage_id=sid, reducers=answer, decided_by=estimator.id)
                break

        if decision is None:
            decision = ReducerDecision(
                stage_id=sid,
                reducers=registry.default_reducers or DEFAULT_REDUCER_COUNT,
                decided_by=DECIDED_BY_DEFAULT,
            )
            if ctx is not None:
                ctx.add_warning(
                    step_id=sid,
                    message=f"no estimator produced a value; using default of {decision.reducers} reducer(s)",
                )

    if ctx is not None:
        ctx.log(
            step_id=sid,
            level="INFO",
            message="reducers decided",
            reducers=decision.reducers,
            decided_by=decision.decided_by,
            input_size_bytes=stage.input_size_bytes,
        )

    return decision


def estimate_reducers(
    stage: Stage,
    registry: EstimatorRegistry,
    config: Optional[Dict[str, Any]] = None,
    ctx: Optional[PlanningContext] = None,
) -> int:
    """Número de reducers (>= 1) para `stage`. Ver `decide_reducers`."""
    return decide_reducers(stage, registry, config, ctx).reducers


def plan_reducers(
    stages: Iterable[Stage],
    registry: EstimatorRegistry,
    config: Optional[Dict[str, Any]] = None,
    ctx: Optional[PlanningContext] = None,
) -> ReducerPlan:
    """
    Decide reducers para cada estágio de um pipeline multi-estágio.

    Raises:
        ConfigurationError: `stage_id` duplicado ou qualquer erro de
            `decide_reducers`. Nenhum plano parcial é retornado.
    """
    stage_list = list(stages)

    seen = set()
    for stage in stage_list:
        if stage.stage_id in seen:
            raise ConfigurationError(
                message=f"Duplicate stage id: {stage.stage_id}",
                details={"stage_id": stage.stage_id},
            )
        seen.add(stage.stage_id)

    return ReducerPlan(
        decisions=tuple(decide_reducers(stage, registry, config, ctx) for stage in stage_list)
    )
