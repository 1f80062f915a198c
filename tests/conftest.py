# tests/conftest.py
import pytest

from scratch_mlp.initializer import Initializer
from scratch_mlp.matrix import DenseMatrix


@pytest.fixture
def initializer():
    # fixed seed so every run sees the same draws
    return Initializer(seed=1234)


@pytest.fixture
def matrix_factory(initializer):
    def make(rows, cols, low=-1.0, high=1.0):
        m = initializer.uniform(rows, cols)
        return m.multiply_scalar(high - low).add(initializer.ones(rows, cols).multiply_scalar(low))
    return make


@pytest.fixture
def column():
    def make(*values):
        return DenseMatrix(len(values), 1, values)
    return make
