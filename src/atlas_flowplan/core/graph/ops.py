# src/atlas_flowplan/core/graph/ops.py
"""
Operações puras sobre `FlowGraph`.

Este módulo concentra as transformações de grafo usadas pela camada de
construção de pipelines e pela submissão de jobs:

    - upstream_closure / heads_of → alcançabilidade via predecessores
    - merge                       → composição in-place de dois grafos
    - copy_graph                  → cópia independente
    - prune_unused_sources        → remove fontes não alcançáveis por tails
    - extract_upstream_subgraph   → subgrafo mínimo para computar um nó
    - validate_graph              → validação estrutural (ciclos, nós)

Decisões arquiteturais:
    - A travessia é iterativa e rastreia nós visitados; um ciclo é erro
      fatal (`MalformedGraphError`), nunca truncamento silencioso
    - `merge` é a única operação que muta seu argumento (`target`)
    - `copy_graph`, `prune_unused_sources` e `extract_upstream_subgraph`
      nunca mutam o grafo recebido e podem rodar concorrentemente sobre
      grafos que nenhuma outra thread está mutando
    - Head sem fonte declarada é ignorado (não é erro)

Invariantes:
    - A validação de forma ocorre antes de qualquer cópia, logo nenhum
      grafo parcialmente filtrado é retornado
    - A mesma entrada produz sempre a mesma ordem de heads
"""

from __future__ import annotations

from typing import Any, Dict, List, Set, Tuple

from atlas_flowplan.core.exceptions import MalformedGraphError

from .model import FlowGraph, GraphMisc, ProcessingNode

_VISITING = 1
_DONE = 2


def _require_node(obj: Any, *, referenced_by: str) -> ProcessingNode:
    if not isinstance(obj, ProcessingNode):
        raise MalformedGraphError(
            message="Graph references an object that is not a processing node",
            details={
                "referenced_by": referenced_by,
                "received": type(obj).__name__,
            },
        )
    return obj


def _walk_upstream(start: ProcessingNode) -> List[ProcessingNode]:
    """
    Percorre os predecessores de `start` em profundidade (pré-ordem).

    Retorna todos os nós alcançáveis, incluindo `start`, na ordem de
    descoberta. Um predecessor ainda "em visita" indica ciclo.

    Raises:
        MalformedGraphError: Ciclo detectado ou predecessor inválido.
    """
    _require_node(start, referenced_by="<caller>")

    state: Dict[ProcessingNode, int] = {start: _VISITING}
    order: List[ProcessingNode] = [start]
    stack: List[Tuple[ProcessingNode, Any]] = [(start, iter(start.upstream))]

    while stack:
        node, parents = stack[-1]
        descended = False

        for parent in parents:
            _require_node(parent, referenced_by=node.name)
            mark = state.get(parent)

            if mark == _VISITING:
                on_stack = [n for n, _ in stack]
                first = next(i for i, n in enumerate(on_stack) if n is parent)
                cycle = [n.name for n in on_stack[first:]] + [parent.name]
                raise MalformedGraphError(
                    message=f"Cycle detected upstream of node '{start.name}'",
                    details={"node": start.name, "cycle": cycle},
                )

            if mark is None:
                state[parent] = _VISITING
                order.append(parent)
                stack.append((parent, iter(parent.upstream)))
                descended = True
                break

        if not descended:
            state[node] = _DONE
            stack.pop()

    return order


def upstream_closure(node: ProcessingNode) -> Set[ProcessingNode]:
    """
    Conjunto de nós alcançáveis a partir de `node` seguindo `upstream`,
    incluindo o próprio `node`.

    Raises:
        MalformedGraphError: Se houver ciclo ou referência inválida.
    """
    return set(_walk_upstream(node))


def heads_of(node: ProcessingNode) -> List[ProcessingNode]:
    """Heads (nós sem predecessores) do fecho de `node`, em ordem de descoberta."""
    return [n for n in _walk_upstream(node) if n.is_head]


def _merge_misc(target: FlowGraph, misc: GraphMisc) -> None:
    target.add_tags(misc.tags)
    target.add_traps(misc.traps)
    target.add_checkpoints(misc.checkpoints)
    # sobrescrita incondicional: o último merge define nome e nível de asserção
    target.misc.assertion_level = misc.assertion_level
    target.misc.name = misc.name


def merge(target: FlowGraph, other: FlowGraph) -> FlowGraph:
    """
    Muta `target` adicionando fontes, sinks, tails e metadados de `other`.

    Política:
        - sources/sinks: união por chave, `other` vence em colisão
        - tails: união (duplicatas por identidade são ignoradas)
        - tags: união; traps/checkpoints: união com `other` vencendo
        - assertion_level e name: sobrescritos por `other`, sempre
          (inclusive quando o valor de `other` é `None`)

    A sobrescrita de nome/nível torna o resultado dependente da ordem dos
    merges em uma cadeia longa; o comportamento é preservado como está.

    Returns:
        FlowGraph: o próprio `target`, para encadeamento.
    """
    target.add_sources(other.sources)
    target.add_sinks(other.sinks)
    target.add_tails(other.tails)
    _merge_misc(target, other.misc)
    return target


def copy_graph(graph: FlowGraph) -> FlowGraph:
    """
    Novo `FlowGraph` independente com o mesmo conteúdo de `graph`.

    Mapas, conjuntos e listas são novos; nós e descritores são
    compartilhados por referência. Mutar o resultado nunca afeta o original.
    """
    return merge(FlowGraph(), graph)


def validate_graph(graph: FlowGraph) -> Set[ProcessingNode]:
    """
    Valida a forma do grafo a partir de seus tails.

    Returns:
        Set[ProcessingNode]: todos os nós alcançáveis a partir dos tails.

    Raises:
        MalformedGraphError: tail que não é nó, predecessor inválido ou ciclo.
    """
    nodes: Set[ProcessingNode] = set()
    for tail in graph.tails:
        _require_node(tail, referenced_by="tails")
        if tail in nodes:
            continue
        nodes.update(_walk_upstream(tail))
    return nodes


def prune_unused_sources(graph: FlowGraph) -> FlowGraph:
    """
    Novo grafo contendo apenas as fontes lidas por heads alcançáveis a
    partir de algum tail.

    Algoritmo:
        1. heads = nomes de todos os heads nos fechos dos tails
        2. fontes filtradas = fontes cujo nome está em heads
        3. cópia do grafo com `sources` limpo e repopulado

    Sinks, tails e metadados são preservados. Uma fonte declarada cujo
    nome não corresponde a nenhum head alcançável é descartada.

    Raises:
        MalformedGraphError: Se algum tail alcançar um ciclo.
    """
    head_names: Set[str] = set()
    for tail in graph.tails:
        _require_node(tail, referenced_by="tails")
        head_names.update(h.name for h in heads_of(tail))

    used = {name: src for name, src in graph.sources.items() if name in head_names}

    pruned = copy_graph(graph)
    pruned.sources.clear()
    pruned.add_sources(used)
    return pruned


def extract_upstream_subgraph(graph: FlowGraph, pivot: ProcessingNode) -> FlowGraph:
    """
    Subgrafo mínimo necessário para computar `pivot`.

    O resultado herda apenas os metadados (`misc`) de `graph`; fontes e
    sinks começam vazios. Cada head do fecho de `pivot` que possua fonte
    declarada em `graph` é adicionado; heads sem fonte são ignorados.

    Se `graph.sinks` contém `pivot.name`, `pivot` torna-se o único tail do
    resultado com esse sink. Caso contrário o resultado não tem tails e
    cabe ao chamador tratar "pivot não é uma saída declarada".

    Raises:
        MalformedGraphError: Se `pivot` alcançar um ciclo.
    """
    heads = heads_of(pivot)

    extracted = FlowGraph()
    _merge_misc(extracted, graph.misc)

    for head in heads:
        if head.name in extracted.sources:
            continue
        if head.name in graph.sources:
            extracted.sources[head.name] = graph.sources[head.name]

    if pivot.name in graph.sinks:
        extracted.sinks[pivot.name] = graph.sinks[pivot.name]
        extracted.add_tail(pivot)

    return extracted
