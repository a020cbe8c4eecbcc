"""
Geometric primitives for the ray tracer.

Every primitive is defined in its own object space and placed in the world
with a transformation. Incoming rays are mapped into object space with the
inverse transformation, intersected analytically, and normals are mapped
back with the inverse transpose so they stay perpendicular under
non-uniform scaling.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional
import math

from .tuples import Tuple4, point, vector
from .ray import Ray
from .transform import Transformation, SingularTransformError
from .materials import Material

PARALLEL_EPSILON = 1e-8


@dataclass(frozen=True)
class Intersection:
    """A ray parameter and the id of the primitive it belongs to.

    Attributes:
        t: Distance along the ray (negative values lie behind the origin)
        object_id: Handle of the primitive that was hit
    """
    t: float
    object_id: int


def hit(intersections: Iterable[Intersection]) -> Optional[Intersection]:
    """Select the visible intersection.

    Returns the intersection with the smallest non-negative t, or None if
    there is none. Input order does not matter.
    """
    visible = [i for i in intersections if i.t >= 0.0]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)


class Primitive(ABC):
    """Abstract base class for all renderable surfaces."""

    def __init__(self, object_id: int, transform: Optional[Transformation] = None,
                 material: Optional[Material] = None):
        """Create a primitive.

        Args:
            object_id: Handle used by the world to resolve intersections
            transform: Object-to-world placement (identity if None)
            material: Surface material (default Material if None)

        Raises:
            SingularTransformError: If the placement cannot be inverted
        """
        self.object_id = object_id
        self.transform = transform if transform is not None else Transformation.identity()
        self.material = material if material is not None else Material()
        try:
            self._inverse = self.transform.require_inverse()
        except SingularTransformError as exc:
            raise SingularTransformError(
                f"{type(self).__name__} {object_id} has a non-invertible transform"
            ) from exc
        self._normal_transform = self._inverse.transpose()

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this primitive."""
        return self.local_intersect(ray.transform(self._inverse))

    def surface_normal(self, world_point: Tuple4) -> Tuple4:
        """Return the unit world-space normal at a point on the surface."""
        object_point = self._inverse.apply(world_point)
        object_normal = self.local_normal(object_point)
        n = self._normal_transform.apply(object_normal)
        # The translation column leaks into w; normals must stay vectors
        return vector(n.x, n.y, n.z).normalize()

    @abstractmethod
    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect an object-space ray."""
        pass

    @abstractmethod
    def local_normal(self, object_point: Tuple4) -> Tuple4:
        """Return the (unnormalized) object-space normal."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.object_id})"


class Sphere(Primitive):
    """A unit sphere centered at the object-space origin."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Solve the quadratic |O + tD - C|^2 = 1.

        Both roots are returned in ascending order, whatever their sign.
        """
        sphere_to_ray = ray.origin - point(0, 0, 0)
        a = ray.direction.dot(ray.direction)
        # A zero-length direction never reaches the surface
        if a == 0.0:
            return []
        b = 2.0 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0:
            return []

        sqrtd = math.sqrt(discriminant)
        t1 = (-b - sqrtd) / (2.0 * a)
        t2 = (-b + sqrtd) / (2.0 * a)
        return [Intersection(t1, self.object_id), Intersection(t2, self.object_id)]

    def local_normal(self, object_point: Tuple4) -> Tuple4:
        return object_point - point(0, 0, 0)


class Plane(Primitive):
    """An infinite plane at object-space y = 0 facing +y."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        # Parallel and coplanar rays both miss
        if abs(ray.direction.y) < PARALLEL_EPSILON:
            return []
        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self.object_id)]

    def local_normal(self, object_point: Tuple4) -> Tuple4:
        return vector(0, 1, 0)
