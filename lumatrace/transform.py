"""
Affine transformations in homogeneous coordinates.

A Transformation wraps a 4x4 Matrix. Transformations compose by matrix
multiplication: chain([A, B, C]) is the matrix A @ B @ C, so when the
result is applied to a tuple C acts first and A acts last.

Rotation angles are given in degrees.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence
import numpy as np

from .matrix import Matrix
from .tuples import Tuple4

AFFINE_BOTTOM_ROW = (0.0, 0.0, 0.0, 1.0)


class SingularTransformError(ValueError):
    """Raised when a transformation that must be invertible is not."""
    pass


class Transformation:
    """A 4x4 affine transformation."""

    __slots__ = ('matrix',)

    def __init__(self, matrix: Matrix):
        if matrix.shape != (4, 4):
            raise ValueError(f"Transformation requires a 4x4 matrix, got {matrix.rows}x{matrix.cols}")
        self.matrix = matrix

    def __repr__(self) -> str:
        return f"Transformation({self.matrix!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transformation):
            return NotImplemented
        return self.matrix == other.matrix

    # Equality is tolerant, so there is no hash consistent with it
    __hash__ = None

    def __matmul__(self, other: Transformation) -> Transformation:
        return Transformation.chain([self, other])

    @classmethod
    def identity(cls) -> Transformation:
        return cls(Matrix.identity(4))

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> Transformation:
        return cls(Matrix([
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]))

    @classmethod
    def scale(cls, x: float, y: float, z: float) -> Transformation:
        return cls(Matrix([
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]))

    @classmethod
    def rotate_x(cls, degrees: float) -> Transformation:
        r = math.radians(degrees)
        c, s = math.cos(r), math.sin(r)
        return cls(Matrix([
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]))

    @classmethod
    def rotate_y(cls, degrees: float) -> Transformation:
        r = math.radians(degrees)
        c, s = math.cos(r), math.sin(r)
        return cls(Matrix([
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]))

    @classmethod
    def rotate_z(cls, degrees: float) -> Transformation:
        r = math.radians(degrees)
        c, s = math.cos(r), math.sin(r)
        return cls(Matrix([
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]))

    @classmethod
    def view(cls, look_from: Tuple4, look_to: Tuple4, up: Tuple4) -> Transformation:
        """Build a camera orientation transform.

        Args:
            look_from: Eye position (point)
            look_to: Point the eye looks at
            up: Approximate up direction (vector)

        Returns:
            Transformation that moves the world in front of the eye
        """
        forward = (look_to - look_from).normalize()
        left = forward.cross(up.normalize())
        true_up = left.cross(forward)
        orientation = cls(Matrix([
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]))
        return cls.chain([
            orientation,
            cls.translation(-look_from.x, -look_from.y, -look_from.z),
        ])

    @staticmethod
    def chain(transformations: Sequence[Transformation]) -> Transformation:
        """Compose transformations by left-to-right matrix multiplication.

        The last transformation in the list is the first one applied to a tuple.
        """
        if not transformations:
            return Transformation.identity()
        matrix = transformations[0].matrix
        for t in transformations[1:]:
            matrix = matrix @ t.matrix
        return Transformation(matrix)

    def inverse(self) -> Optional[Transformation]:
        """Return the inverse transformation, or None if singular."""
        inverted = self.matrix.inverse()
        if inverted is None:
            return None
        return Transformation(inverted)

    def require_inverse(self) -> Transformation:
        """Return the inverse, raising if the transformation is singular."""
        inverted = self.inverse()
        if inverted is None:
            raise SingularTransformError(f"Transformation is not invertible: {self.matrix!r}")
        return inverted

    def transpose(self) -> Transformation:
        return Transformation(self.matrix.transpose())

    def is_affine(self) -> bool:
        """True when the bottom row is (0, 0, 0, 1), up to round-off."""
        return bool(np.allclose(self.matrix.to_array()[3], AFFINE_BOTTOM_ROW))

    def apply(self, t: Tuple4) -> Tuple4:
        """Apply this transformation to a point or vector.

        For an affine map only the top three rows are evaluated and w is
        carried through unchanged, so points stay points and vectors stay
        vectors. Any other matrix (a transpose with a translation, say)
        gets the full product, w included.
        """
        m = self.matrix.to_array()
        if not self.is_affine():
            return Tuple4.from_array(m @ t.to_array())
        xyz = m[:3] @ t.to_array()
        return Tuple4(xyz[0], xyz[1], xyz[2], t.w)
