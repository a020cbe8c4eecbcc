"""
RGB color values.

Colors are kept as unclamped floats while shading; clamping to the
displayable range only happens when an image is written.
"""

from __future__ import annotations
from typing import Union
import numpy as np


class Color:
    """An RGB triple supporting component-wise arithmetic."""

    __slots__ = ('_data',)

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        self._data = np.array([r, g, b], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Color:
        """Create Color from numpy array."""
        c = cls.__new__(cls)
        c._data = np.asarray(arr, dtype=np.float64)
        return c

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @property
    def r(self) -> float:
        return float(self._data[0])

    @property
    def g(self) -> float:
        return float(self._data[1])

    @property
    def b(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"Color({self.r:.5f}, {self.g:.5f}, {self.b:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return np.allclose(self._data, other._data)

    # Equality is tolerant, so there is no hash consistent with it
    __hash__ = None

    def __add__(self, other: Color) -> Color:
        return Color.from_array(self._data + other._data)

    def __sub__(self, other: Color) -> Color:
        return Color.from_array(self._data - other._data)

    def __mul__(self, other: Union[Color, float]) -> Color:
        # Color * Color is the Hadamard product used to tint light by surface
        if isinstance(other, Color):
            return Color.from_array(self._data * other._data)
        return Color.from_array(self._data * other)

    def __rmul__(self, other: float) -> Color:
        return Color.from_array(other * self._data)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    def clamp(self, min_val: float = 0.0, max_val: float = 1.0) -> Color:
        """Clamp all components to the given range."""
        return Color.from_array(np.clip(self._data, min_val, max_val))
