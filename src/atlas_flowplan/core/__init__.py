# src/atlas_flowplan/core/__init__.py
"""
Core do Atlas FlowPlan.

Este pacote contém a implementação canônica do planejamento de dataflows:

    - graph      → FlowGraph, merge, cópia, poda de fontes, extração upstream
    - estimation → Stage, estimadores, EstimatorRegistry, planner de reducers
    - config     → resolução de configuração (merge, hashing, chaves)
    - engine     → sessão de planejamento (Planner / PlanResult)
    - context    → PlanningContext (eventos estruturados e warnings)
    - exceptions / errors → exceções tipadas e payloads serializáveis

Princípios fundamentais:
    - Operações de grafo são puras, exceto `merge`
    - Erros de forma e de configuração são fatais e explícitos
    - Fallbacks benignos (sem opinião, fonte ausente) são silenciosos
"""
