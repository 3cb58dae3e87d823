# src/atlas_flowplan/core/graph/model.py
"""
Modelo mutável de um grafo de dataflow.

Este módulo define as estruturas que descrevem um pipeline lógico antes da
execução:

    - ProcessingNode → nó de processamento com predecessores ordenados
    - GraphMisc      → metadados auxiliares (tags, traps, checkpoints,
                       nível de asserção, nome de exibição)
    - FlowGraph      → fontes nomeadas, sinks nomeados, tails e metadados

Um `FlowGraph` é criado por pipeline lógico, mutado via `merge` enquanto
pipelines são compostos e consumido (sem novas mutações) pelas operações
de `graph.ops`.

Decisões arquiteturais:
    - Nós têm semântica de identidade (`eq=False`): dois nós com o mesmo
      nome são nós distintos
    - Fontes e sinks são indexados pelo nome do nó; descritores são opacos
    - `tails` é uma coleção ordenada sem duplicatas por identidade, para
      que a mesma definição produza sempre a mesma ordem de inspeção

Invariantes:
    - O modelo NÃO exige, na construção, que todo head tenha uma fonte
      declarada; a ausência é tratada como "sem fonte declarada"
    - Chaves de `sources` e `sinks` são únicas (último registro vence)

Limites explícitos:
    - Não detecta ciclos (responsabilidade de `graph.ops`)
    - Não é thread-safe para mutação concorrente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union


class AssertionLevel(str, Enum):
    """
    Nível de asserções avaliadas durante a execução do grafo.

    Valores:
        - NONE: nenhuma asserção é avaliada
        - VALID: apenas asserções de validade
        - STRICT: todas as asserções, inclusive as estritas
    """

    NONE = "none"
    VALID = "valid"
    STRICT = "strict"


@dataclass(eq=False)
class ProcessingNode:
    """
    Nó de processamento do dataflow (um "pipe").

    Um nó sem predecessores (`upstream` vazio) é um **head** e, em geral,
    lê de uma fonte declarada com o mesmo nome. Um nó sem consumidores é
    um **tail** e, em geral, escreve em um sink declarado com o mesmo nome.

    Campos:
        - name: nome do nó (não é globalmente único)
        - upstream: predecessores em ordem de declaração
    """

    name: str
    upstream: Tuple["ProcessingNode", ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("node.name must be a non-empty string")
        self.upstream = tuple(self.upstream)

    @property
    def is_head(self) -> bool:
        return len(self.upstream) == 0

    def then(self, name: str) -> "ProcessingNode":
        """Cria um nó consumidor direto deste nó."""
        return ProcessingNode(name, (self,))

    @classmethod
    def join(cls, name: str, *parents: "ProcessingNode") -> "ProcessingNode":
        """Cria um nó que consome vários predecessores (ex.: join, merge)."""
        if not parents:
            raise ValueError("join requires at least one upstream node")
        return cls(name, parents)

    def __repr__(self) -> str:
        # não recursivo: o grafo pode conter ciclos
        parents = ", ".join(p.name if isinstance(p, ProcessingNode) else repr(p) for p in self.upstream)
        return f"ProcessingNode(name={self.name!r}, upstream=[{parents}])"


NodeRef = Union[ProcessingNode, str]


def _node_name(ref: NodeRef) -> str:
    name = ref.name if isinstance(ref, ProcessingNode) else ref
    if not isinstance(name, str) or not name.strip():
        raise ValueError("source/sink name must be a non-empty string")
    return name


@dataclass
class GraphMisc:
    """
    Metadados auxiliares de um `FlowGraph`.

    Em `merge`, tags acumulam; traps e checkpoints são unidos (o grafo
    mesclado vence em colisão); `assertion_level` e `name` são
    **sobrescritos** incondicionalmente pelo grafo mesclado.
    """

    tags: Set[str] = field(default_factory=set)
    traps: Dict[str, Any] = field(default_factory=dict)
    checkpoints: Dict[str, Any] = field(default_factory=dict)
    assertion_level: Optional[AssertionLevel] = None
    name: Optional[str] = None


@dataclass
class FlowGraph:
    """
    Descrição mutável de um dataflow: fontes, sinks, tails e metadados.

    Os métodos `add_*`/`set_*` são a API de construção; as transformações
    (`merge`, `copy_graph`, `prune_unused_sources`,
    `extract_upstream_subgraph`) vivem em `atlas_flowplan.core.graph.ops`.

    Campos:
        - sources: nome do head → descritor de fonte
        - sinks: nome do tail → descritor de sink
        - tails: nós terminais (sem duplicatas por identidade)
        - misc: metadados auxiliares
    """

    sources: Dict[str, Any] = field(default_factory=dict)
    sinks: Dict[str, Any] = field(default_factory=dict)
    tails: List[ProcessingNode] = field(default_factory=list)
    misc: GraphMisc = field(default_factory=GraphMisc)

    # -----------------------------
    # Sources / sinks
    # -----------------------------
    def add_source(self, node: NodeRef, descriptor: Any) -> "FlowGraph":
        if descriptor is None:
            raise ValueError("source descriptor must not be None")
        self.sources[_node_name(node)] = descriptor
        return self

    def add_sources(self, sources: Mapping[str, Any]) -> "FlowGraph":
        self.sources.update(sources)
        return self

    def add_sink(self, node: NodeRef, descriptor: Any) -> "FlowGraph":
        if descriptor is None:
            raise ValueError("sink descriptor must not be None")
        self.sinks[_node_name(node)] = descriptor
        return self

    def add_sinks(self, sinks: Mapping[str, Any]) -> "FlowGraph":
        self.sinks.update(sinks)
        return self

    # -----------------------------
    # Tails
    # -----------------------------
    def has_tail(self, node: ProcessingNode) -> bool:
        return any(t is node for t in self.tails)

    def add_tail(self, node: ProcessingNode) -> "FlowGraph":
        if not self.has_tail(node):
            self.tails.append(node)
        return self

    def add_tails(self, nodes: Iterable[ProcessingNode]) -> "FlowGraph":
        for node in list(nodes):
            self.add_tail(node)
        return self

    def add_tail_sink(self, node: ProcessingNode, descriptor: Any) -> "FlowGraph":
        """Registra `node` como tail e o sink correspondente ao seu nome."""
        self.add_sink(node, descriptor)
        return self.add_tail(node)

    # -----------------------------
    # Misc
    # -----------------------------
    def add_tags(self, tags: Iterable[str]) -> "FlowGraph":
        self.misc.tags.update(tags)
        return self

    def add_traps(self, traps: Mapping[str, Any]) -> "FlowGraph":
        self.misc.traps.update(traps)
        return self

    def add_checkpoints(self, checkpoints: Mapping[str, Any]) -> "FlowGraph":
        self.misc.checkpoints.update(checkpoints)
        return self

    def set_assertion_level(self, level: Optional[AssertionLevel]) -> "FlowGraph":
        self.misc.assertion_level = AssertionLevel(level) if level is not None else None
        return self

    def set_name(self, name: Optional[str]) -> "FlowGraph":
        self.misc.name = name
        return self
