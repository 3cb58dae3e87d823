# src/atlas_flowplan/__init__.py
"""
Atlas FlowPlan — planejamento de dataflows batch antes da execução.

Este pacote raiz define o namespace público do Atlas FlowPlan, a camada
que antecede a submissão de um job de dataflow e decide:

    - qual é o subgrafo mínimo necessário para produzir as saídas pedidas
    - quantos reducers cada estágio de execução deve receber

Arquitetura em alto nível:
    - core.graph      → modelo de grafo mutável e operações de redução
    - core.estimation → estágios, estimadores, registry e planner de reducers
    - core.config     → carregamento, merge e hashing de configuração
    - core.engine     → sessão de planejamento (grafo + reducers)

Limites explícitos:
    - Não executa o grafo
    - Não negocia recursos de cluster
    - Não lê nem escreve dados
"""
# src/atlas_flowplan/__init__.py
from .core.graph import FlowGraph, ProcessingNode
from .core.estimation import Stage, build_registry, estimate_reducers

__all__ = ["FlowGraph", "ProcessingNode", "Stage", "build_registry", "estimate_reducers"]
