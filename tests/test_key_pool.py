"""Tests for Gemini key rotation."""

import pytest

from acns.core.exceptions import ConfigurationError
from acns.llm import KeyPool


@pytest.mark.parametrize("size", [1, 2, 3, 5])
def test_round_robin_visits_keys_in_order(size):
    keys = [f"key-{i}" for i in range(size)]
    pool = KeyPool(keys)

    drawn = [pool.next() for _ in range(size * 3)]

    assert drawn == keys * 3


def test_single_key_is_always_returned():
    pool = KeyPool(["only"])
    assert {pool.next() for _ in range(10)} == {"only"}


def test_empty_pool_raises_configuration_error():
    pool = KeyPool([])
    assert pool.is_empty
    assert len(pool) == 0
    with pytest.raises(ConfigurationError):
        pool.next()


def test_repr_hides_key_material():
    pool = KeyPool(["AIza-secret-1", "AIza-secret-2"])
    assert "secret" not in repr(pool)
    assert "size=2" in repr(pool)
