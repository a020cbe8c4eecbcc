"""
lumatrace - A small Python Whitted-style ray tracer

Features:
- Homogeneous point/vector algebra with 4x4 affine transforms
- Analytic sphere and plane intersection in object space
- Phong lighting with hard shadows from point lights
- Bounded recursive mirror reflections
- JSON/YAML scene descriptions and PNG output
"""

__version__ = "0.1.0"

from .tuples import Tuple4, point, vector, reflect
from .color import Color
from .matrix import Matrix, MatrixDimensionError
from .transform import Transformation, SingularTransformError
from .ray import Ray
from .materials import Material
from .shapes import Intersection, Primitive, Sphere, Plane, hit
from .lights import PointLight
from .world import World, IntersectionPrecomp, DEFAULT_SHADOW_BIAS
from .camera import Camera
from .renderer import Renderer, RenderSettings
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
