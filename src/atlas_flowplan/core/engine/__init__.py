# src/atlas_flowplan/core/engine/__init__.py
"""
Engine de planejamento do Atlas FlowPlan.

O `Planner` executa uma sessão completa de planejamento para um job:
valida e reduz o grafo e decide reducers por estágio, devolvendo um
`PlanResult` consumido pela camada de submissão.

Invariantes:
    - Um `PlanResult` FAILED nunca carrega grafo ou plano parcial
    - A mesma entrada produz sempre o mesmo plano
"""

from .engine import PlanResult, PlanStatus, Planner

__all__ = ["PlanResult", "PlanStatus", "Planner"]
