"""
Light sources and the local (Phong) lighting model.
"""

from __future__ import annotations

from .color import Color
from .materials import Material
from .tuples import Tuple4, reflect


class PointLight:
    """A point light source.

    Point lights emit light equally in all directions from a single point.
    There is no distance falloff; they produce hard shadows.
    """

    __slots__ = ('position', 'color')

    def __init__(self, position: Tuple4, color: Color):
        """Create a point light.

        Args:
            position: World-space position of the light (point)
            color: Color/intensity of the light
        """
        assert position.is_point(), f"Light position must be a point, got {position!r}"
        self.position = position
        self.color = color

    def lighting(self, material: Material, position: Tuple4, eye: Tuple4,
                 normal: Tuple4, in_shadow: bool = False) -> Color:
        """Evaluate the Phong model for this light at a surface point.

        Args:
            material: Surface material
            position: Point being shaded
            eye: Unit vector from the point towards the viewer
            normal: Unit surface normal facing the viewer
            in_shadow: Whether the light is occluded

        Returns:
            Ambient, plus diffuse and specular when the light reaches the surface
        """
        effective_color = material.color * self.color
        ambient = effective_color * material.ambient

        light_dir = (self.position - position).normalize()
        light_dot_normal = light_dir.dot(normal)
        if light_dot_normal < 0 or in_shadow:
            return ambient

        diffuse = effective_color * material.diffuse * light_dot_normal

        reflect_dot_eye = reflect(-light_dir, normal).dot(eye)
        if reflect_dot_eye <= 0:
            return ambient + diffuse

        factor = reflect_dot_eye ** material.shininess
        specular = self.color * material.specular * factor
        return ambient + diffuse + specular

    def __repr__(self) -> str:
        return f"PointLight(position={self.position}, color={self.color})"
