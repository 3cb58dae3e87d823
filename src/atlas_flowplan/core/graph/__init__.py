# src/atlas_flowplan/core/graph/__init__.py
"""
# Graph Core — Atlas FlowPlan

Modelo mutável de dataflow (`FlowGraph`) e operações de redução de grafo.

## Componentes

- **model**
  - `ProcessingNode`: nó com predecessores ordenados (head quando vazio)
  - `GraphMisc`: tags, traps, checkpoints, nível de asserção e nome
  - `FlowGraph`: fontes, sinks, tails e metadados
- **ops**
  - `merge`, `copy_graph`
  - `prune_unused_sources`, `extract_upstream_subgraph`
  - `upstream_closure`, `heads_of`, `validate_graph`

## Invariantes

- Grafos válidos são acíclicos; ciclos geram `MalformedGraphError`
- Apenas `merge` muta seu argumento
"""

from .model import AssertionLevel, FlowGraph, GraphMisc, ProcessingNode
from .ops import (
    copy_graph,
    extract_upstream_subgraph,
    heads_of,
    merge,
    prune_unused_sources,
    upstream_closure,
    validate_graph,
)

__all__ = [
    "AssertionLevel",
    "FlowGraph",
    "GraphMisc",
    "ProcessingNode",
    "copy_graph",
    "extract_upstream_subgraph",
    "heads_of",
    "merge",
    "prune_unused_sources",
    "upstream_closure",
    "validate_graph",
]
