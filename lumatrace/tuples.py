"""
Homogeneous 4-component tuples.

A single type covers both points and vectors:
- Points have w = 1.0 and are moved by translations
- Vectors have w = 0.0 and are only rotated/scaled

Operations that only make sense for directions (dot, cross, normalize)
assert that their operands are vectors.
"""

from __future__ import annotations
import numpy as np


class Tuple4:
    """A homogeneous (x, y, z, w) coordinate backed by a numpy array."""

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        self._data = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Tuple4:
        """Create a Tuple4 from a numpy array of length 4."""
        t = cls.__new__(cls)
        t._data = np.asarray(arr, dtype=np.float64)
        return t

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    def is_point(self) -> bool:
        return self._data[3] == 1.0

    def is_vector(self) -> bool:
        return self._data[3] == 0.0

    def __repr__(self) -> str:
        kind = "point" if self.is_point() else "vector" if self.is_vector() else "tuple"
        return f"{kind}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple4):
            return NotImplemented
        return np.allclose(self._data, other._data)

    # Equality is tolerant, so there is no hash consistent with it
    __hash__ = None

    def __neg__(self) -> Tuple4:
        return Tuple4.from_array(-self._data)

    def __add__(self, other: Tuple4) -> Tuple4:
        return Tuple4.from_array(self._data + other._data)

    def __sub__(self, other: Tuple4) -> Tuple4:
        return Tuple4.from_array(self._data - other._data)

    def __mul__(self, scalar: float) -> Tuple4:
        return Tuple4.from_array(self._data * scalar)

    def __rmul__(self, scalar: float) -> Tuple4:
        return Tuple4.from_array(scalar * self._data)

    def __truediv__(self, scalar: float) -> Tuple4:
        return Tuple4.from_array(self._data / scalar)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def magnitude(self) -> float:
        """Return the length of the vector."""
        return float(np.sqrt(self.dot(self)))

    def normalize(self) -> Tuple4:
        """Return a unit vector in the same direction.

        The zero vector normalizes to itself.
        """
        mag = self.magnitude()
        if mag == 0:
            return vector(0, 0, 0)
        return Tuple4.from_array(self._data / mag)

    def dot(self, other: Tuple4) -> float:
        """Compute the dot product of two vectors."""
        assert self.is_vector() and other.is_vector(), "dot() requires vectors"
        return float(np.dot(self._data[:3], other._data[:3]))

    def cross(self, other: Tuple4) -> Tuple4:
        """Compute the cross product of two vectors."""
        assert self.is_vector() and other.is_vector(), "cross() requires vectors"
        x, y, z = np.cross(self._data[:3], other._data[:3])
        return vector(x, y, z)

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a point (w = 1)."""
    return Tuple4(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a vector (w = 0)."""
    return Tuple4(x, y, z, 0.0)


def reflect(incoming: Tuple4, normal: Tuple4) -> Tuple4:
    """Reflect a vector around the given normal."""
    return incoming - normal * (2 * incoming.dot(normal))
