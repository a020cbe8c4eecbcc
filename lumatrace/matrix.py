"""
Dense matrix algebra.

Matrices of any size are supported, although the renderer only ever
builds 4x4 ones. Inversion uses the cofactor (adjugate) method:

    inverse[col, row] = cofactor(row, col) / determinant

Note the transpose built into the assignment.
"""

from __future__ import annotations
from typing import Optional, Sequence, Union
import numpy as np

from .tuples import Tuple4


class MatrixDimensionError(ValueError):
    """Raised when matrix dimensions are incompatible for an operation."""
    pass


class Matrix:
    """A row-major matrix of float64 values."""

    __slots__ = ('_data',)

    def __init__(self, rows: Sequence[Sequence[float]]):
        """Create a matrix from a list of rows.

        Args:
            rows: Nested sequences, one per row, all of equal length
        """
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2:
            raise MatrixDimensionError(f"Matrix rows must be equal-length sequences, got shape {data.shape}")
        self._data = data

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Matrix:
        m = cls.__new__(cls)
        m._data = np.asarray(arr, dtype=np.float64)
        return m

    @classmethod
    def identity(cls, n: int = 4) -> Matrix:
        return cls.from_array(np.eye(n, dtype=np.float64))

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls.from_array(np.zeros((rows, cols), dtype=np.float64))

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[index])

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and np.allclose(self._data, other._data)

    # Equality is tolerant, so there is no hash consistent with it
    __hash__ = None

    def __matmul__(self, other: Union[Matrix, Tuple4]) -> Union[Matrix, Tuple4]:
        if isinstance(other, Tuple4):
            return self.multiply_tuple(other)
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def multiply(self, other: Matrix) -> Matrix:
        """Return the matrix product self x other.

        Raises:
            MatrixDimensionError: If self.cols != other.rows
        """
        if self.cols != other.rows:
            raise MatrixDimensionError(
                f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}"
            )
        return Matrix.from_array(self._data @ other._data)

    def multiply_tuple(self, t: Tuple4) -> Tuple4:
        """Multiply a 4-column matrix by a homogeneous tuple."""
        if self.cols != 4:
            raise MatrixDimensionError(f"Cannot multiply {self.rows}x{self.cols} matrix by a 4-tuple")
        return Tuple4.from_array(self._data @ t.to_array())

    def transpose(self) -> Matrix:
        return Matrix.from_array(self._data.T.copy())

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix.from_array(data)

    def _require_square(self, operation: str) -> None:
        if self.rows != self.cols:
            raise MatrixDimensionError(f"{operation} requires a square matrix, got {self.rows}x{self.cols}")

    def minor(self, row: int, col: int) -> float:
        self._require_square("minor")
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        self._require_square("cofactor")
        sign = 1.0 if (row + col) % 2 == 0 else -1.0
        return sign * self.minor(row, col)

    def determinant(self) -> float:
        """Compute the determinant by cofactor expansion along row 0."""
        self._require_square("determinant")
        d = self._data
        if self.rows == 1:
            return float(d[0, 0])
        if self.rows == 2:
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        det = 0.0
        for col in range(self.cols):
            det += float(d[0, col]) * self.cofactor(0, col)
        return det

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Optional[Matrix]:
        """Invert the matrix.

        The determinant is compared against exactly zero, so near-singular
        matrices produce large but finite inverses.

        Returns:
            The inverse, or None if the matrix is singular
        """
        self._require_square("inverse")
        det = self.determinant()
        if det == 0.0:
            return None

        inverted = np.zeros((self.cols, self.rows), dtype=np.float64)
        for row in range(self.rows):
            for col in range(self.cols):
                inverted[col, row] = self.cofactor(row, col) / det
        return Matrix.from_array(inverted)

    def to_array(self) -> np.ndarray:
        return self._data.copy()
