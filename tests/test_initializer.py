# tests/test_initializer.py
import math

import numpy as np

from scratch_mlp.initializer import Initializer, default_initializer


def test_same_seed_same_draws() -> None:
    assert Initializer(7).uniform(3, 3) == Initializer(7).uniform(3, 3)
    assert Initializer(7).normal(3, 3) == Initializer(7).normal(3, 3)


def test_consecutive_calls_are_independent(initializer) -> None:
    # one generator shared across calls, never reseeded
    assert initializer.uniform(4, 4) != initializer.uniform(4, 4)
    assert initializer.normal(4, 4) != initializer.normal(4, 4)


def test_uniform_range(initializer) -> None:
    m = initializer.uniform(50, 40)
    assert m.shape == (50, 40)
    assert all(0.0 <= v < 1.0 for v in m.data)
    assert abs(np.mean(m.data) - 0.5) < 0.05


def test_normal_scales_by_element_count(initializer) -> None:
    m = initializer.normal(100, 100)
    expected = 1 / math.sqrt(100 * 100)
    assert abs(np.mean(m.data)) < expected * 0.1
    assert abs(np.std(m.data) - expected) < expected * 0.05


def test_constant_fills(initializer) -> None:
    assert initializer.zeros(2, 3).data == [0.0] * 6
    assert initializer.ones(3, 2).data == [1.0] * 6


def test_default_initializer_is_shared() -> None:
    from scratch_mlp import initializer as initializer_module
    assert initializer_module.default_initializer is default_initializer
    assert default_initializer.uniform(1, 2).shape == (1, 2)
