"""Factories for freshly filled matrices.

An Initializer owns a single numpy Generator for its whole life. Seeding once and
drawing from the same stream every call keeps consecutive matrices independent,
which reseeding on every call would not.
"""

import math
import threading

import numpy as np

from scratch_mlp import matrix


class Initializer():
    def __init__(self, seed: int | None = None):
        """Create a new initializer

        Args:
            seed (int | None, optional): seed for the generator; None pulls fresh OS entropy. Defaults to None.
        """
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self._lock = threading.Lock()  # Generator objects are not thread safe

    def uniform(self, rows: int, cols: int) -> matrix.DenseMatrix:
        """Independent draws from U(0, 1)"""
        with self._lock:
            values = self.rng.random(rows * cols)
        return matrix.DenseMatrix(rows, cols, values.tolist())

    def normal(self, rows: int, cols: int) -> matrix.DenseMatrix:
        """Zero-mean normal draws with std 1/sqrt(rows*cols).

        The scale comes from the element count of the matrix being filled. For a
        weight matrix that is fan_in * fan_out.
        """
        numel = rows * cols
        stdev = 1 / math.sqrt(numel) if numel else 1.0
        with self._lock:
            values = self.rng.normal(0.0, stdev, numel)
        return matrix.DenseMatrix(rows, cols, values.tolist())

    def zeros(self, rows: int, cols: int) -> matrix.DenseMatrix:
        m = matrix.DenseMatrix(rows, cols)
        m.fill(0.0)
        return m

    def ones(self, rows: int, cols: int) -> matrix.DenseMatrix:
        m = matrix.DenseMatrix(rows, cols)
        m.fill(1.0)
        return m


# one generator for the lifetime of the process
default_initializer = Initializer()
