# tests/core/config/test_config_keys.py
"""
Testes das chaves canônicas e do registro de estimadores via configuração.

Os testes asseguram que:
- chaves pontilhadas são lidas com default em qualquer ausência
- `add_reducer_estimator` preserva a ordem de registro
- o registro nunca muta a configuração recebida
"""

import pytest

from atlas_flowplan.core.config.hashing import compute_config_hash
from atlas_flowplan.core.config.keys import (
    BYTES_PER_REDUCER_KEY,
    ESTIMATORS_KEY,
    add_reducer_estimator,
    get_setting,
)


def test_get_setting_reads_dotted_key(dummy_config):
    assert get_setting(dummy_config, BYTES_PER_REDUCER_KEY) == 1024


def test_get_setting_defaults_on_missing_or_none():
    assert get_setting(None, BYTES_PER_REDUCER_KEY, 7) == 7
    assert get_setting({}, BYTES_PER_REDUCER_KEY, 7) == 7
    assert get_setting({"reducer_estimation": "oops"}, BYTES_PER_REDUCER_KEY, 7) == 7
    assert get_setting({"reducer_estimation": {"bytes_per_reducer": None}}, BYTES_PER_REDUCER_KEY, 7) == 7


def test_add_reducer_estimator_appends_in_registration_order():
    """O primeiro identificador registrado é o primeiro da cadeia."""
    cfg = add_reducer_estimator({}, "history")
    cfg = add_reducer_estimator(cfg, "input_size")

    assert get_setting(cfg, ESTIMATORS_KEY) == ["history", "input_size"]


def test_add_reducer_estimator_does_not_mutate_input(dummy_config):
    before = compute_config_hash(dummy_config)

    out = add_reducer_estimator(dummy_config, "history")

    assert compute_config_hash(dummy_config) == before
    assert get_setting(out, ESTIMATORS_KEY) == ["input_size", "history"]
    assert get_setting(out, BYTES_PER_REDUCER_KEY) == 1024


def test_add_reducer_estimator_rejects_empty_identifier():
    with pytest.raises(ValueError):
        add_reducer_estimator({}, "  ")


def test_config_hash_is_key_order_independent():
    a = {"reducer_estimation": {"bytes_per_reducer": 1024, "estimators": ["input_size"]}}
    b = {"reducer_estimation": {"estimators": ["input_size"], "bytes_per_reducer": 1024}}

    assert compute_config_hash(a) == compute_config_hash(b)
    assert len(compute_config_hash(a)) == 64


def test_add_reducer_estimator_accepts_comma_separated_chain():
    cfg = add_reducer_estimator({"reducer_estimation": {"estimators": "history, runtime"}}, "input_size")

    assert get_setting(cfg, ESTIMATORS_KEY) == ["history", "runtime", "input_size"]
