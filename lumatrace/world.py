"""
The world: primitives, lights, and the recursive shading pipeline.

A ray entering color_at() is intersected against every primitive, the
nearest non-negative hit is selected, per-hit geometry is precomputed,
each light is tested for shadowing and evaluated with the Phong model,
and reflective surfaces recurse with a decreasing depth budget.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from .color import Color
from .lights import PointLight
from .materials import Material
from .ray import Ray
from .shapes import Intersection, Primitive, Sphere, hit
from .transform import Transformation
from .tuples import Tuple4, point, reflect

logger = logging.getLogger(__name__)

DEFAULT_SHADOW_BIAS = 1e-5


@dataclass
class IntersectionPrecomp:
    """Geometry derived once for the selected hit.

    Attributes:
        intersection: The hit being shaded
        point: World-space hit position
        eye: Unit vector towards the ray origin
        normal: Surface normal, flipped to face the eye
        inside: True if the ray started inside the primitive
        reflection: Incoming direction reflected about the normal
    """
    intersection: Intersection
    point: Tuple4
    eye: Tuple4
    normal: Tuple4
    inside: bool
    reflection: Tuple4

    @classmethod
    def prepare(cls, intersection: Intersection, ray: Ray, primitive: Primitive) -> IntersectionPrecomp:
        position = ray.at(intersection.t)
        eye = -ray.direction
        normal = primitive.surface_normal(position)
        inside = normal.dot(eye) < 0
        if inside:
            normal = -normal
        return cls(
            intersection=intersection,
            point=position,
            eye=eye,
            normal=normal,
            inside=inside,
            reflection=reflect(ray.direction, normal),
        )

    def over_point(self, bias: float) -> Tuple4:
        """Return the hit point nudged along the normal."""
        return self.point + self.normal * bias


class World:
    """A collection of primitives and lights.

    Primitives are stored by their object_id, so ids must be unique but
    need not be dense. The world must not be mutated while tracing.
    """

    def __init__(self, objects: Optional[Iterable[Primitive]] = None,
                 lights: Optional[Iterable[PointLight]] = None,
                 shadow_bias: float = DEFAULT_SHADOW_BIAS):
        """Create a world.

        Args:
            objects: Primitives with unique object ids
            lights: Point lights
            shadow_bias: Offset along the normal for shadow and reflection rays

        Raises:
            ValueError: If two primitives share an id
        """
        self._objects: dict[int, Primitive] = {}
        self.lights: list[PointLight] = []
        self.shadow_bias = shadow_bias

        for obj in objects or ():
            self.add(obj)
        for light in lights or ():
            self.add_light(light)

        logger.debug("World created with %d primitives and %d lights",
                     len(self._objects), len(self.lights))

    @classmethod
    def default(cls) -> World:
        """Two concentric spheres lit from the upper left."""
        light = PointLight(point(-10, 10, -10), Color(1, 1, 1))
        outer = Sphere(0, Transformation.identity(),
                       Material(Color(0.8, 1.0, 0.6), 0.1, 0.7, 0.2, 200.0, 0.0))
        inner = Sphere(1, Transformation.scale(0.5, 0.5, 0.5),
                       Material(Color(1.0, 1.0, 1.0), 0.1, 0.7, 0.2, 200.0, 0.0))
        return cls([outer, inner], [light])

    def add(self, primitive: Primitive) -> None:
        if primitive.object_id in self._objects:
            raise ValueError(f"Duplicate object id: {primitive.object_id}")
        self._objects[primitive.object_id] = primitive

    def add_light(self, light: PointLight) -> None:
        self.lights.append(light)

    def object(self, object_id: int) -> Primitive:
        """Resolve an object id to its primitive.

        Raises:
            KeyError: If no primitive has this id
        """
        return self._objects[object_id]

    @property
    def objects(self) -> list[Primitive]:
        return list(self._objects.values())

    def __len__(self) -> int:
        return len(self._objects)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every primitive, sorted by t (stable)."""
        intersections: list[Intersection] = []
        for obj in self._objects.values():
            intersections.extend(obj.intersect(ray))
        intersections.sort(key=lambda i: i.t)
        return intersections

    def is_shadowed(self, light: PointLight, position: Tuple4) -> bool:
        """Test whether anything lies between a point and a light.

        The point is used as-is; callers bias it off the surface first.
        """
        to_light = light.position - position
        distance = to_light.magnitude()
        # A point at the light itself has nothing in between
        if distance == 0.0:
            return False
        ray = Ray(position, to_light.normalize())
        h = hit(self.intersect(ray))
        return h is not None and h.t < distance

    def shade_hit(self, comps: IntersectionPrecomp, steps_left: int) -> Color:
        """Sum direct lighting from every light plus the reflected color."""
        material = self.object(comps.intersection.object_id).material
        over_point = comps.over_point(self.shadow_bias)

        color = Color.black()
        for light in self.lights:
            in_shadow = self.is_shadowed(light, over_point)
            color = color + light.lighting(material, over_point, comps.eye, comps.normal, in_shadow)

        return color + self.reflected_color(comps, steps_left)

    def reflected_color(self, comps: IntersectionPrecomp, steps_left: int) -> Color:
        """Color seen along the mirror direction, scaled by reflectivity."""
        reflection = self.object(comps.intersection.object_id).material.reflection
        if reflection == 0.0 or steps_left <= 0:
            return Color.black()

        reflect_ray = Ray(comps.over_point(self.shadow_bias), comps.reflection)
        return self.color_at(reflect_ray, steps_left - 1) * reflection

    def color_at(self, ray: Ray, steps_left: int) -> Color:
        """Trace a ray and return its color; black when nothing is hit.

        Args:
            ray: World-space ray
            steps_left: Remaining reflection bounces
        """
        h = hit(self.intersect(ray))
        if h is None:
            return Color.black()
        comps = IntersectionPrecomp.prepare(h, ray, self.object(h.object_id))
        return self.shade_hit(comps, steps_left)

    def __repr__(self) -> str:
        return f"World(objects={len(self._objects)}, lights={len(self.lights)})"
