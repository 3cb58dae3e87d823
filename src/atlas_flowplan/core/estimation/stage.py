# src/atlas_flowplan/core/estimation/stage.py
"""
Estágio de execução consumido pelo planner de reducers.

Um `Stage` corresponde a uma fronteira de reduce paralelo. Ele é produzido
fora deste core (pela camada de planejamento de execução), que informa o
volume de entrada medido ou estimado e, opcionalmente, um número de
reducers imposto pelo usuário.

`stage_from_graph` cobre o caso comum em que o volume de entrada de um
estágio é a soma dos tamanhos das fontes efetivamente lidas por um grafo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from atlas_flowplan.core.graph.model import FlowGraph
from atlas_flowplan.core.graph.ops import prune_unused_sources


@dataclass(frozen=True)
class Stage:
    """
    Unidade de planejamento com uma fronteira de reduce.

    Campos:
        - stage_id: identificador opaco do estágio
        - input_size_bytes: volume de entrada em bytes (None = desconhecido)
        - explicit_reducer_count: override do usuário (None = sem override)
    """

    stage_id: str
    input_size_bytes: Optional[int] = None
    explicit_reducer_count: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.stage_id, str) or not self.stage_id.strip():
            raise ValueError("stage.stage_id must be a non-empty string")
        if self.input_size_bytes is None:
            return
        if isinstance(self.input_size_bytes, bool) or not isinstance(self.input_size_bytes, int):
            raise ValueError(
                f"stage.input_size_bytes must be an int, got {type(self.input_size_bytes).__name__}"
            )
        if self.input_size_bytes < 0:
            raise ValueError(f"stage.input_size_bytes must be >= 0, got {self.input_size_bytes}")


def stage_from_graph(
    stage_id: str,
    graph: FlowGraph,
    size_of: Callable[[Any], Optional[int]],
    *,
    explicit_reducer_count: Optional[int] = None,
) -> Stage:
    """
    Constrói um `Stage` cujo volume de entrada é a soma dos tamanhos das
    fontes usadas por `graph`.

    As fontes são primeiro reduzidas com `prune_unused_sources`, de modo que
    fontes declaradas mas não lidas não inflam a estimativa. Se não houver
    fontes, ou se `size_of` devolver `None` para alguma delas (ex.: o
    probe de filesystem falhou), o volume fica desconhecido.

    Args:
        stage_id (str): Identificador do estágio.
        graph (FlowGraph): Grafo cujas fontes alimentam o estágio.
        size_of (Callable): Probe de tamanho em bytes de um descritor de fonte.
        explicit_reducer_count (Optional[int]): Override do usuário.

    Raises:
        MalformedGraphError: Se o grafo contiver ciclo.
    """
    used = prune_unused_sources(graph).sources

    total: Optional[int] = None
    if used:
        total = 0
        for name in sorted(used):
            size = size_of(used[name])
            if size is None:
                total = None
                break
            total += int(size)

    return Stage(
        stage_id=stage_id,
        input_size_bytes=total,
        explicit_reducer_count=explicit_reducer_count,
    )
