# tests/core/config/test_config_merge.py
"""
Testes da política de deep-merge da configuração do planner.

Os testes asseguram que:
- escalares são sobrescritos
- dicionários são mesclados recursivamente
- a lista de estimadores é sobrescrita integralmente
- conflitos de tipo são rejeitados
- inputs não são mutados
"""

import pytest

from atlas_flowplan.core.config.errors import ConfigTypeConflictError
from atlas_flowplan.core.config.merge import deep_merge


def test_merge_scalar_override_does_not_mutate_inputs():
    base = {"reducer_estimation": {"bytes_per_reducer": 4096, "default_reducers": 1}}
    override = {"reducer_estimation": {"bytes_per_reducer": 1024}}

    out = deep_merge(base, override)

    assert out == {"reducer_estimation": {"bytes_per_reducer": 1024, "default_reducers": 1}}
    assert base == {"reducer_estimation": {"bytes_per_reducer": 4096, "default_reducers": 1}}
    assert override == {"reducer_estimation": {"bytes_per_reducer": 1024}}


def test_estimator_chain_is_replaced_not_interleaved():
    """
    A cadeia de estimadores do override substitui a dos defaults.

    Intercalar identificadores mudaria a ordem de avaliação de forma
    implícita; a política de listas é sobrescrita total.
    """
    base = {"reducer_estimation": {"estimators": ["input_size", "history"]}}
    override = {"reducer_estimation": {"estimators": ["history"]}}

    out = deep_merge(base, override)

    assert out["reducer_estimation"]["estimators"] == ["history"]


def test_int_and_float_are_compatible():
    out = deep_merge({"reducer_estimation": {"bytes_per_reducer": 1024}},
                     {"reducer_estimation": {"bytes_per_reducer": 2.0e9}})

    assert out["reducer_estimation"]["bytes_per_reducer"] == 2.0e9


def test_none_never_conflicts():
    out = deep_merge({"planner": {"pivot": None}}, {"planner": {"pivot": "joined"}})

    assert out == {"planner": {"pivot": "joined"}}


def test_type_conflict_raises():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"reducer_estimation": {"bytes_per_reducer": 1024}}, {"reducer_estimation": "fast"})


def test_non_dict_root_raises():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["b"])  # type: ignore[arg-type]
