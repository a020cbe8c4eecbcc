"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .tuples import Tuple4

if TYPE_CHECKING:
    from .transform import Transformation


class Ray:
    """An immutable ray with an origin point and a direction vector.

    The parametric form is: P(t) = origin + t * direction
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Tuple4, direction: Tuple4):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray (w = 1)
            direction: The direction vector (w = 0), not necessarily normalized
        """
        assert origin.is_point(), f"Ray origin must be a point, got {origin!r}"
        assert direction.is_vector(), f"Ray direction must be a vector, got {direction!r}"
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Tuple4:
        """Get the point along the ray at parameter t.

        Args:
            t: The parameter value (may be negative)

        Returns:
            The point at origin + t * direction
        """
        return self.origin + self.direction * t

    def transform(self, transformation: Transformation) -> Ray:
        """Return a new ray with origin and direction transformed."""
        return Ray(transformation.apply(self.origin), transformation.apply(self.direction))

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
