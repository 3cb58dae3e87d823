# tests/test_smoke.py
"""
Teste de sanidade estrutural (smoke test) do Atlas FlowPlan.

Garante apenas que o ambiente de testes está funcional e que o pacote
pode ser importado. Não valida comportamento de grafo nem de estimativa.
"""


def test_smoke():
    """O pacote raiz importa e expõe a API pública mínima."""
    import atlas_flowplan

    assert hasattr(atlas_flowplan, "FlowGraph")
    assert hasattr(atlas_flowplan, "estimate_reducers")
