"""Synthetic training data, handed out one (features, label) sample at a time"""

import math
from typing import Iterator

from scratch_mlp import matrix
from scratch_mlp import initializer as initializers


class DataIterator():
    def __call__(self, count: int) -> Iterator[tuple[matrix.DenseMatrix, matrix.DenseMatrix]]:
        """yield count (features, label) pairs"""
        raise NotImplementedError


class SineSquared(DataIterator):
    def __init__(self, upper: float = math.pi, initializer: initializers.Initializer | None = None):
        """Samples x ~ U(0, upper) with label y = sin(x)^2, both as (1, 1) matrices

        Args:
            upper (float, optional): top of the sampling range. Defaults to pi.
            initializer (Initializer | None, optional): random source. Defaults to the shared one.
        """
        self.upper = upper
        self.initializer = initializer if initializer is not None else initializers.default_initializer

    def __call__(self, count: int) -> Iterator[tuple[matrix.DenseMatrix, matrix.DenseMatrix]]:
        for _ in range(count):
            x = self.initializer.uniform(1, 1).multiply_scalar(self.upper)
            y = x.apply_function(lambda v: math.sin(v) ** 2)
            yield (x, y)
