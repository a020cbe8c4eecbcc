"""
Camera module for generating primary rays.

The camera sits at the origin of its own space looking down -z, with a
canvas one unit in front of it. A view transformation places it in the
world.
"""

from __future__ import annotations
import math
from typing import Optional

from .ray import Ray
from .transform import Transformation
from .tuples import Tuple4, point, vector


class Camera:
    """A pinhole camera mapping pixels to world-space rays."""

    def __init__(
        self,
        hsize: int,
        vsize: int,
        fov: float = 60.0,
        transform: Optional[Transformation] = None
    ):
        """Create a camera.

        Args:
            hsize: Horizontal size of the canvas in pixels
            vsize: Vertical size of the canvas in pixels
            fov: Field of view in degrees (across the longer side)
            transform: View transformation (identity if None)

        Raises:
            ValueError: If either canvas dimension is not positive
            SingularTransformError: If the view transformation is not invertible
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        self.hsize = hsize
        self.vsize = vsize
        self.fov = fov
        self.transform = transform if transform is not None else Transformation.identity()
        self._inverse = self.transform.require_inverse()

        half_view = math.tan(math.radians(fov) / 2)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2) / hsize

    @classmethod
    def look_at(cls, hsize: int, vsize: int, fov: float, look_from: Tuple4,
                look_to: Tuple4, up: Tuple4 = vector(0, 1, 0)) -> Camera:
        return cls(hsize, vsize, fov, Transformation.view(look_from, look_to, up))

    def ray_for_pixel(self, x: float, y: float) -> Ray:
        """Return the ray through the centre of pixel (x, y).

        Args:
            x: Column, 0 at the left edge
            y: Row, 0 at the top edge
        """
        x_offset = (x + 0.5) * self.pixel_size
        y_offset = (y + 0.5) * self.pixel_size

        # The camera looks down -z, so +x is to the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self._inverse.apply(point(world_x, world_y, -1.0))
        origin = self._inverse.apply(point(0, 0, 0))
        return Ray(origin, (pixel - origin).normalize())

    def __repr__(self) -> str:
        return f"Camera({self.hsize}x{self.vsize}, fov={self.fov})"
