"""
Renderer module - drives the per-pixel trace.

Implements:
- Row-major pixel loop over a camera
- Progress reporting
- LDR conversion and image output via Pillow
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional
import numpy as np

from .camera import Camera
from .color import Color
from .world import World

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    max_reflection_depth: int = 5
    gamma: float = 1.0

    def __post_init__(self):
        if self.max_reflection_depth < 0:
            raise ValueError(f"max_reflection_depth must be >= 0, got {self.max_reflection_depth}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")


class Renderer:
    """Whitted-style renderer: one primary ray per pixel."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def trace_pixel(self, world: World, camera: Camera, x: int, y: int) -> Color:
        """Compute the color of a single pixel.

        Pixels are independent of each other; the world and camera are only read.
        """
        ray = camera.ray_for_pixel(x, y)
        return world.color_at(ray, self.settings.max_reflection_depth)

    def render(self, world: World, camera: Camera) -> np.ndarray:
        """Render the world and return the image as a numpy array.

        Args:
            world: The world to render
            camera: The camera to render from

        Returns:
            Unclamped image as numpy array of shape (vsize, hsize, 3)
        """
        width, height = camera.hsize, camera.vsize
        image = np.zeros((height, width, 3), dtype=np.float64)

        logger.info("Rendering %dx%d, %d primitives, %d lights, reflection depth %d",
                    width, height, len(world), len(world.lights),
                    self.settings.max_reflection_depth)
        start = time.perf_counter()

        for y in range(height):
            for x in range(width):
                image[y, x] = self.trace_pixel(world, camera, x, y).to_array()
            if self._progress_callback:
                self._progress_callback((y + 1) / height)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def to_ldr(self, hdr_image: np.ndarray) -> np.ndarray:
        """Convert a float image to 8-bit with gamma correction.

        Args:
            hdr_image: Float image array

        Returns:
            LDR image as uint8 array
        """
        gamma = self.settings.gamma
        corrected = np.power(np.clip(hdr_image, 0, None), 1.0 / gamma)
        return np.clip(corrected * 255, 0, 255).astype(np.uint8)

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Image array (float or uint8)
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype == np.float64 or image.dtype == np.float32:
            image = self.to_ldr(image)

        PILImage.fromarray(image, 'RGB').save(filename)
        logger.info("Saved %s", filename)
