# src/atlas_flowplan/core/engine/engine.py
"""
Sessão de planejamento do Atlas FlowPlan.

O `Planner` encadeia, para um job, as duas decisões que antecedem a
submissão:

    1. redução do grafo ao subgrafo mínimo executável
       (`extract_upstream_subgraph` quando há um pivot, senão
       `prune_unused_sources`, salvo se desabilitado por configuração)
    2. dimensionamento de reducers por estágio (`plan_reducers`)

Falhas de forma do grafo e de configuração bloqueiam a submissão: o
Planner converte a exceção em `FlowPlanErrorPayload` e devolve um
`PlanResult` FAILED sem grafo nem plano parcial.

Todas as fases registram eventos estruturados no `PlanningContext`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from atlas_flowplan.core.config.hashing import compute_config_hash
from atlas_flowplan.core.config.keys import PRUNE_UNUSED_SOURCES_KEY, get_setting
from atlas_flowplan.core.context import PlanningContext
from atlas_flowplan.core.errors import GRAPH_MALFORMED, FlowPlanErrorPayload, exception_to_error
from atlas_flowplan.core.estimation.planner import ReducerPlan, plan_reducers
from atlas_flowplan.core.estimation.registry import EstimatorRegistry
from atlas_flowplan.core.estimation.stage import Stage
from atlas_flowplan.core.graph.model import FlowGraph, ProcessingNode
from atlas_flowplan.core.graph.ops import (
    copy_graph,
    extract_upstream_subgraph,
    prune_unused_sources,
    validate_graph,
)

GRAPH_PHASE = "planner.graph"
REDUCERS_PHASE = "planner.reducers"


class PlanStatus(str, Enum):
    """Estado final de uma sessão de planejamento."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class PlanResult:
    """
    Resultado de uma sessão de planejamento.

    Campos:
        - status: SUCCESS ou FAILED
        - config_hash: hash da configuração efetiva usada
        - graph: grafo mínimo (None em falha)
        - reducers: plano de reducers (None em falha)
        - error: payload serializável (apenas em falha)
    """

    status: PlanStatus
    config_hash: str
    graph: Optional[FlowGraph] = None
    reducers: Optional[ReducerPlan] = None
    error: Optional[FlowPlanErrorPayload] = None

    @property
    def ok(self) -> bool:
        return self.status == PlanStatus.SUCCESS


class Planner:
    """Sessão de planejamento (redução de grafo + dimensionamento de reducers)."""

    def __init__(
        self,
        *,
        graph: FlowGraph,
        stages: Sequence[Stage],
        registry: EstimatorRegistry,
        ctx: PlanningContext,
        pivot: Optional[ProcessingNode] = None,
    ):
        self.graph: FlowGraph = graph
        self.stages: List[Stage] = list(stages)
        self.registry: EstimatorRegistry = registry
        self.ctx: PlanningContext = ctx
        self.pivot: Optional[ProcessingNode] = pivot

    def _prune_enabled(self) -> bool:
        return bool(get_setting(self.ctx.config, PRUNE_UNUSED_SOURCES_KEY, True))

    def _reduce_graph(self) -> FlowGraph:
        validate_graph(self.graph)

        if self.pivot is not None:
            reduced = extract_upstream_subgraph(self.graph, self.pivot)
            if not reduced.tails:
                self.ctx.add_warning(
                    step_id=GRAPH_PHASE,
                    message=f"pivot '{self.pivot.name}' is not a declared sink; extracted graph has no tail",
                )
        elif self._prune_enabled():
            reduced = prune_unused_sources(self.graph)
        else:
            reduced = copy_graph(self.graph)

        dropped = sorted(set(self.graph.sources) - set(reduced.sources))
        self.ctx.log(
            step_id=GRAPH_PHASE,
            level="INFO",
            message="graph reduced",
            sources=sorted(reduced.sources),
            dropped_sources=dropped,
            tails=[t.name for t in reduced.tails],
            pivot=self.pivot.name if self.pivot is not None else None,
        )
        return reduced

    def run(self) -> PlanResult:
        config_hash = compute_config_hash(self.ctx.config or {})

        try:
            reduced = self._reduce_graph()
            plan = plan_reducers(self.stages, self.registry, self.ctx.config, self.ctx)
        except Exception as exc:
            error = exception_to_error(exc)
            self.ctx.log(
                step_id=GRAPH_PHASE if error.type == GRAPH_MALFORMED else REDUCERS_PHASE,
                level="ERROR",
                message=error.message,
                error=error.to_dict(),
            )
            return PlanResult(status=PlanStatus.FAILED, config_hash=config_hash, error=error)

        self.ctx.log(
            step_id=REDUCERS_PHASE,
            level="INFO",
            message="reducers planned",
            reducers=plan.to_dict(),
        )
        return PlanResult(
            status=PlanStatus.SUCCESS,
            config_hash=config_hash,
            graph=reduced,
            reducers=plan,
        )
