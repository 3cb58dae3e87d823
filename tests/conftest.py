# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas FlowPlan.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas do planner
- contexto de planejamento controlado (PlanningContext)
- grafos de dataflow pequenos e conhecidos
- estimadores dummy para testes de precedência

O objetivo destas fixtures é permitir testes do core (graph, estimation,
config e engine) sem depender de filesystem, cluster ou estimadores reais
de produção.

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Estimadores dummy utilizam duck typing em vez de herança
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Limites explícitos:
    - Nenhuma fixture executa planejamento completo
    - Nenhuma fixture realiza I/O
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def planner_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante a um `flowplan.defaults.yaml` real.

    Returns:
        str: Conteúdo YAML da configuração base.
    """
    return """\
reducer_estimation:
  bytes_per_reducer: 4294967296
  estimators:
    - input_size
  default_reducers: 1
planner:
  prune_unused_sources: true
"""


@pytest.fixture
def planner_config_local_yaml() -> str:
    """
    YAML de overrides locais: reduz o volume por reducer para 1 KiB.

    Returns:
        str: Conteúdo YAML de override.
    """
    return """\
reducer_estimation:
  bytes_per_reducer: 1024
"""


@pytest.fixture
def dummy_config() -> dict:
    """
    Configuração mínima já resolvida, com a cadeia padrão de estimadores.

    Returns:
        dict: Configuração efetiva para testes do planner.
    """
    return {
        "reducer_estimation": {
            "bytes_per_reducer": 1024,
            "estimators": ["input_size"],
        },
        "planner": {"prune_unused_sources": True},
    }


@pytest.fixture
def dummy_ctx(dummy_config):
    """
    PlanningContext determinístico.

    `session_id` e `created_at` são fixos; a configuração é injetada via
    `dummy_config`.
    """
    from atlas_flowplan.core.context import PlanningContext

    return PlanningContext(
        session_id="session-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
        meta={"source": "pytest"},
    )


# =====================================================
# Graph fixtures
# =====================================================

@pytest.fixture
def two_branch_graph():
    """
    Grafo com dois ramos independentes que convergem em um único sink,
    mais uma fonte declarada e desconectada.

        clicks ──> clean_clicks ──┐
                                  ├──> joined ──> (sink "joined")
        users  ──> clean_users ───┘

        orphan (fonte declarada, sem tail alcançando-a)

    Returns:
        tuple: (graph, nodes) onde `nodes` é um dict nome → ProcessingNode.
    """
    from atlas_flowplan.core.graph.model import FlowGraph, ProcessingNode

    clicks = ProcessingNode("clicks")
    users = ProcessingNode("users")
    orphan = ProcessingNode("orphan")
    clean_clicks = clicks.then("clean_clicks")
    clean_users = users.then("clean_users")
    joined = ProcessingNode.join("joined", clean_clicks, clean_users)

    graph = FlowGraph()
    graph.add_source(clicks, "hdfs://logs/clicks")
    graph.add_source(users, "hdfs://dims/users")
    graph.add_source(orphan, "hdfs://tmp/orphan")
    graph.add_tail_sink(joined, "hdfs://out/joined")

    nodes = {
        "clicks": clicks,
        "users": users,
        "orphan": orphan,
        "clean_clicks": clean_clicks,
        "clean_users": clean_users,
        "joined": joined,
    }
    return graph, nodes


# =====================================================
# Estimator fixtures
# =====================================================

@pytest.fixture
def FixedEstimator():
    """
    Fixture factory que fornece um estimador duck-typed com resposta fixa.

    O estimador retornado conta quantas vezes foi consultado (`calls`),
    permitindo verificar que estimadores após o primeiro acerto não são
    consultados.

    Returns:
        type: Classe _FixedEstimator instanciável pelos testes.
    """

    class _FixedEstimator:
        def __init__(self, estimator_id: str = "fixed", answer=None):
            self.id = estimator_id
            self.answer = answer
            self.calls = 0

        def estimate(self, stage, config):
            self.calls += 1
            return self.answer

    return _FixedEstimator
