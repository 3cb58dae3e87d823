# tests/core/graph/test_graph_prune.py
"""
Testes de `prune_unused_sources`.

Os testes asseguram que:
- fontes lidas por heads alcançáveis a partir de tails são mantidas
- fontes declaradas mas desconectadas são descartadas
- o resultado é subconjunto das fontes originais e a operação é idempotente
- sinks, tails e metadados são preservados
- o grafo original nunca é mutado
- ciclos abortam a operação sem resultado parcial
"""

import pytest

from atlas_flowplan.core.exceptions import MalformedGraphError
from atlas_flowplan.core.graph.model import FlowGraph, ProcessingNode
from atlas_flowplan.core.graph.ops import prune_unused_sources


def test_keeps_both_branches_and_drops_orphan(two_branch_graph):
    graph, _ = two_branch_graph

    pruned = prune_unused_sources(graph)

    assert set(pruned.sources) == {"clicks", "users"}
    assert pruned.sources["clicks"] == "hdfs://logs/clicks"


def test_result_is_subset_and_idempotent(two_branch_graph):
    graph, _ = two_branch_graph

    once = prune_unused_sources(graph)
    twice = prune_unused_sources(once)

    assert set(once.sources) <= set(graph.sources)
    assert twice.sources == once.sources


def test_sinks_tails_and_misc_are_preserved(two_branch_graph):
    graph, n = two_branch_graph
    graph.add_tags(["nightly"]).set_name("two-branch")

    pruned = prune_unused_sources(graph)

    assert pruned.sinks == graph.sinks
    assert pruned.tails == [n["joined"]]
    assert pruned.misc.tags == {"nightly"}
    assert pruned.misc.name == "two-branch"


def test_input_is_not_mutated(two_branch_graph):
    graph, _ = two_branch_graph
    before = dict(graph.sources)

    prune_unused_sources(graph)

    assert graph.sources == before


def test_source_named_after_missing_head_is_dropped():
    """Um nome de fonte sem head correspondente no grafo é descartado (não é erro)."""
    raw = ProcessingNode("raw")
    graph = FlowGraph()
    graph.add_source(raw, "raw://")
    graph.add_source("ghost", "ghost://")
    graph.add_tail_sink(raw.then("out"), "out://")

    assert set(prune_unused_sources(graph).sources) == {"raw"}


def test_graph_without_tails_has_no_sources(two_branch_graph):
    graph, _ = two_branch_graph
    graph.tails.clear()

    assert prune_unused_sources(graph).sources == {}


def test_head_without_declared_source_is_tolerated():
    synthetic = ProcessingNode("generated")
    graph = FlowGraph().add_tail_sink(synthetic.then("out"), "out://")

    pruned = prune_unused_sources(graph)

    assert pruned.sources == {}
    assert len(pruned.tails) == 1


def test_cycle_aborts_without_partial_result(two_branch_graph):
    graph, n = two_branch_graph
    n["clicks"].upstream = (n["joined"],)
    before = dict(graph.sources)

    with pytest.raises(MalformedGraphError):
        prune_unused_sources(graph)

    assert graph.sources == before
