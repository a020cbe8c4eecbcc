"""
Surface materials for the Phong lighting model.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .color import Color


@dataclass(frozen=True)
class Material:
    """Phong surface description.

    Attributes:
        color: Surface color
        ambient: Fraction of light reflected regardless of geometry
        diffuse: Lambertian reflection coefficient
        specular: Highlight strength
        shininess: Highlight exponent (larger is tighter)
        reflection: Mirror reflectivity in [0, 1]; 0 disables reflection rays
    """
    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflection: float = 0.0

    @classmethod
    def from_color(cls, color: Color) -> Material:
        """Create a material with default coefficients and the given color."""
        return cls(color=color)
