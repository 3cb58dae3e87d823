# src/atlas_flowplan/core/estimation/__init__.py
"""
# Estimation Core — Atlas FlowPlan

Dimensionamento de reducers por estágio de execução.

## Componentes

- **stage**: `Stage`, `stage_from_graph`
- **estimator**: `ReducerEstimator` (Protocol), `InputSizeReducerEstimator`
- **registry**: `EstimatorRegistry`, tabela de factories, `build_registry`
- **planner**: `estimate_reducers`, `decide_reducers`, `plan_reducers`

## Precedência

override explícito → primeiro estimador com opinião → default
"""

from .estimator import InputSizeReducerEstimator, ReducerEstimator
from .planner import (
    DEFAULT_REDUCER_COUNT,
    ReducerDecision,
    ReducerPlan,
    decide_reducers,
    estimate_reducers,
    plan_reducers,
)
from .registry import (
    ESTIMATOR_FACTORIES,
    EstimatorRegistry,
    build_registry,
    register_estimator_factory,
)
from .stage import Stage, stage_from_graph

__all__ = [
    "InputSizeReducerEstimator",
    "ReducerEstimator",
    "DEFAULT_REDUCER_COUNT",
    "ReducerDecision",
    "ReducerPlan",
    "decide_reducers",
    "estimate_reducers",
    "plan_reducers",
    "ESTIMATOR_FACTORIES",
    "EstimatorRegistry",
    "build_registry",
    "register_estimator_factory",
    "Stage",
    "stage_from_graph",
]
