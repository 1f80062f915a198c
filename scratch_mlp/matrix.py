"""A dense 2-D matrix stored as one flat row-major list of floats.

Every algebraic operation hands back a brand new matrix, so results can be chained
without worrying about who else is holding the operands. fill() is the only
method that changes a matrix in place.
"""

import math
import sys
from typing import Callable, Sequence

import numpy as np

from scratch_mlp import errors

CLIP_THRESHOLD = 1e-4
ABNORMAL_LIMIT = 3.0


def _is_normal(value: float) -> bool:
    """Same idea as C's isnormal: finite, and not zero or subnormal"""
    return math.isfinite(value) and abs(value) >= sys.float_info.min


class DenseMatrix():
    def __init__(self, rows: int, cols: int, data: Sequence[float] | None = None):
        """Create a new matrix, zero filled unless data is given

        Args:
            rows (int): number of rows
            cols (int): number of columns
            data (Sequence[float], optional): row-major values, must hold rows*cols of them. Defaults to None.
        """
        if rows < 0 or cols < 0:
            raise errors.InvalidShape(f'Matrix dimensions must be non-negative, got ({rows}, {cols})')
        self.rows = rows
        self.cols = cols
        if data is None:
            self.data = [0.0] * (rows * cols)
        else:
            if len(data) != rows * cols:
                raise errors.InvalidShape(f'Expected {rows * cols} values for a ({rows}, {cols}) matrix, got {len(data)}')
            self.data = [float(v) for v in data]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> 'DenseMatrix':
        """Build a matrix from a nested list, one inner list per row"""
        n_rows = len(rows)
        n_cols = len(rows[0]) if n_rows else 0
        data = []
        for row in rows:
            if len(row) != n_cols:
                raise errors.InvalidShape('All rows must have the same length')
            data.extend(row)
        return cls(n_rows, n_cols, data)

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'DenseMatrix':
        """Copy a 1-D (treated as a column) or 2-D numpy array into a new matrix"""
        array = np.asarray(array, dtype=float)
        if array.ndim == 1:
            array = array.reshape(-1, 1)
        if array.ndim != 2:
            raise errors.InvalidShape(f'Can only build a matrix from 1-D or 2-D arrays, got {array.ndim}-D')
        return cls(array.shape[0], array.shape[1], array.ravel().tolist())

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def numel(self) -> int:
        return self.rows * self.cols

    def __getitem__(self, idx: tuple[int, int]) -> float:
        row, col = idx
        return self.data[row * self.cols + col]

    def __setitem__(self, idx: tuple[int, int], value: float):
        row, col = idx
        self.data[row * self.cols + col] = float(value)

    def tolist(self) -> list[list[float]]:
        return [self.data[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)]

    def to_numpy(self) -> np.ndarray:
        return np.array(self.data, dtype=float).reshape(self.rows, self.cols)

    def copy(self) -> 'DenseMatrix':
        return DenseMatrix(self.rows, self.cols, self.data)

    # --- algebra ---

    def matmul(self, other: 'DenseMatrix') -> 'DenseMatrix':
        """Standard matrix product: (n, k) @ (k, m) -> (n, m)"""
        if self.cols != other.rows:
            raise errors.DimensionMismatch(f'Cannot matmul {self.shape} by {other.shape}')
        out = DenseMatrix(self.rows, other.cols)
        for r in range(self.rows):
            for c in range(other.cols):
                acc = 0.0
                for k in range(self.cols):
                    acc += self.data[r * self.cols + k] * other.data[k * other.cols + c]
                out.data[r * out.cols + c] = acc
        return out

    def _check_same_shape(self, other: 'DenseMatrix', op: str):
        if self.shape != other.shape:
            raise errors.DimensionMismatch(f'Cannot {op} {self.shape} and {other.shape}: shapes must match')

    def multiply_elementwise(self, other: 'DenseMatrix') -> 'DenseMatrix':
        """Hadamard product"""
        self._check_same_shape(other, 'multiply')
        return DenseMatrix(self.rows, self.cols, [a * b for a, b in zip(self.data, other.data)])

    def square(self) -> 'DenseMatrix':
        return self.multiply_elementwise(self)

    def multiply_scalar(self, scalar: float) -> 'DenseMatrix':
        return DenseMatrix(self.rows, self.cols, [v * scalar for v in self.data])

    def add(self, other: 'DenseMatrix') -> 'DenseMatrix':
        self._check_same_shape(other, 'add')
        return DenseMatrix(self.rows, self.cols, [a + b for a, b in zip(self.data, other.data)])

    def negate(self) -> 'DenseMatrix':
        return DenseMatrix(self.rows, self.cols, [-v for v in self.data])

    def sub(self, other: 'DenseMatrix') -> 'DenseMatrix':
        # a - b is a + (-b)
        self._check_same_shape(other, 'subtract')
        return self.add(other.negate())

    def transpose(self) -> 'DenseMatrix':
        out = DenseMatrix(self.cols, self.rows)
        for r in range(self.rows):
            for c in range(self.cols):
                out.data[c * out.cols + r] = self.data[r * self.cols + c]
        return out

    def T(self) -> 'DenseMatrix':
        return self.transpose()

    def apply_function(self, function: Callable[[float], float]) -> 'DenseMatrix':
        """Run function over every element and collect the results in a new matrix"""
        return DenseMatrix(self.rows, self.cols, [function(v) for v in self.data])

    def clip(self) -> 'DenseMatrix':
        """Zero out anything smaller than CLIP_THRESHOLD in magnitude, copy the rest"""
        return DenseMatrix(self.rows, self.cols, [0.0 if abs(v) < CLIP_THRESHOLD else v for v in self.data])

    # --- diagnostics ---

    def is_nan(self) -> bool:
        return any(math.isnan(v) for v in self.data)

    def is_abnormal(self) -> bool:
        """True if any value is NaN, infinite, subnormal or has blown up past ABNORMAL_LIMIT.

        Zero is fine even though it is not a 'normal' float.
        """
        return any((not _is_normal(v) and v != 0.0) or v >= ABNORMAL_LIMIT for v in self.data)

    def fill(self, value: float):
        """Set every element to value, in place"""
        value = float(value)
        for i in range(len(self.data)):
            self.data[i] = value

    # --- operators ---

    def __matmul__(self, other: 'DenseMatrix') -> 'DenseMatrix':
        return self.matmul(other)

    def __add__(self, other: 'DenseMatrix') -> 'DenseMatrix':
        return self.add(other)

    def __sub__(self, other: 'DenseMatrix') -> 'DenseMatrix':
        return self.sub(other)

    def __neg__(self) -> 'DenseMatrix':
        return self.negate()

    def __mul__(self, other):
        # matrix * matrix is elementwise, matrix * number scales
        if isinstance(other, DenseMatrix):
            return self.multiply_elementwise(other)
        return self.multiply_scalar(other)

    def __rmul__(self, other):
        return self.multiply_scalar(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    __hash__ = None

    def describe_shape(self) -> str:
        return f'Matrix Size([{self.rows}, {self.cols}])'

    def __repr__(self) -> str:
        return f'DenseMatrix({self.rows}, {self.cols}, {self.data!r})'

    def __str__(self) -> str:
        return '\n'.join(' '.join(str(v) for v in row) for row in self.tolist())
