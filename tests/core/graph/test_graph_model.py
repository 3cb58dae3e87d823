# tests/core/graph/test_graph_model.py
"""
Testes da API de construção de `FlowGraph` e `ProcessingNode`.
"""

import pytest

from atlas_flowplan.core.graph.model import AssertionLevel, FlowGraph, ProcessingNode


def test_head_and_downstream_nodes():
    raw = ProcessingNode("raw")
    parsed = raw.then("parsed")

    assert raw.is_head
    assert not parsed.is_head
    assert parsed.upstream == (raw,)


def test_node_name_must_be_non_empty():
    with pytest.raises(ValueError):
        ProcessingNode("  ")


def test_join_requires_parents():
    with pytest.raises(ValueError):
        ProcessingNode.join("nothing")


def test_sources_and_sinks_are_keyed_by_node_name():
    raw = ProcessingNode("raw")
    out = raw.then("out")

    graph = FlowGraph().add_source(raw, "s3://raw").add_tail_sink(out, "s3://out")

    assert graph.sources == {"raw": "s3://raw"}
    assert graph.sinks == {"out": "s3://out"}
    assert graph.tails == [out]


def test_add_source_by_plain_name_and_last_writer_wins():
    graph = FlowGraph()
    graph.add_source("raw", "v1")
    graph.add_source("raw", "v2")

    assert graph.sources == {"raw": "v2"}


def test_none_descriptor_is_rejected():
    with pytest.raises(ValueError):
        FlowGraph().add_source("raw", None)
    with pytest.raises(ValueError):
        FlowGraph().add_sink("out", None)


def test_tails_have_no_identity_duplicates():
    out = ProcessingNode("out")
    twin = ProcessingNode("out")
    graph = FlowGraph()

    graph.add_tails([out, out, twin])

    assert len(graph.tails) == 2
    assert graph.has_tail(out) and graph.has_tail(twin)


def test_misc_setters():
    graph = FlowGraph()
    graph.add_tags(["daily"]).add_traps({"t": "trap"}).add_checkpoints({"c": "ckpt"})
    graph.set_assertion_level("strict").set_name("job")

    assert graph.misc.tags == {"daily"}
    assert graph.misc.traps == {"t": "trap"}
    assert graph.misc.checkpoints == {"c": "ckpt"}
    assert graph.misc.assertion_level is AssertionLevel.STRICT
    assert graph.misc.name == "job"
