"""
Scene description language parser.

Supports JSON and YAML scene descriptions with:
- Camera configuration
- Render settings
- Materials library
- Objects (spheres and planes with transforms and materials)
- Point lights

Example scene file:
```yaml
camera:
  width: 512
  height: 256
  fov: 60
  from: [0, 2.5, -8]
  to: [0, 1, 0]
  up: [0, 1, 0]

render:
  max_reflection_depth: 5

materials:
  floor:
    color: [1, 0.9, 0.9]
    specular: 0
    reflection: 0.5

objects:
  - type: plane
    material: floor

  - type: sphere
    transform:
      - translate: [-0.5, 1, 0.5]
    material:
      color: [0.1, 1, 0.5]
      diffuse: 0.7
      specular: 0.3

lights:
  - position: [-10, 10, -10]
    color: [1, 1, 1]
```

Transform steps are chained in the order listed, so the last step is the
first one applied to the object.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

from .camera import Camera
from .color import Color
from .lights import PointLight
from .materials import Material
from .renderer import RenderSettings
from .shapes import Plane, Primitive, Sphere
from .transform import SingularTransformError, Transformation
from .tuples import Tuple4, point, vector
from .world import DEFAULT_SHADOW_BIAS, World

logger = logging.getLogger(__name__)

PRIMITIVES = {
    'sphere': Sphere,
    'plane': Plane,
}

MATERIAL_KEYS = ('ambient', 'diffuse', 'specular', 'shininess', 'reflection')


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}

    def parse_file(self, filepath: str) -> Tuple[World, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        if path.suffix == '.json':
            try:
                data = json.loads(content)
            except json.JSONDecodeError as exc:
                raise SceneParseError(f"Invalid JSON in {filepath}: {exc}") from exc
        elif path.suffix in ('.yaml', '.yml'):
            import yaml
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as exc:
                raise SceneParseError(f"Invalid YAML in {filepath}: {exc}") from exc
        else:
            raise SceneParseError(f"Unsupported scene file type: {path.suffix}")

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[World, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (world, camera, settings)

        Raises:
            SceneParseError: If any part of the description is malformed
        """
        self.materials = {}
        data = self._require_mapping(data, "Scene")

        # Materials first, objects reference them by name
        materials = self._require_mapping(data.get('materials', {}), "materials")
        for name, mat_data in materials.items():
            self.materials[name] = self._parse_material(mat_data)

        world_data = self._require_mapping(data.get('world', {}), "world")
        shadow_bias = self._parse_number(
            world_data.get('shadow_bias', DEFAULT_SHADOW_BIAS), "shadow_bias")
        world = World(shadow_bias=shadow_bias)

        objects = self._require_list(data.get('objects', []), "objects")
        for object_id, obj_data in enumerate(objects):
            world.add(self._parse_object(object_id, obj_data))

        for light_data in self._require_list(data.get('lights', []), "lights"):
            world.add_light(self._parse_light(light_data))

        camera = self._parse_camera(data.get('camera', {}))
        settings = self._parse_settings(data.get('render', {}))

        logger.debug("Parsed scene: %d objects, %d lights, %d materials",
                     len(world), len(world.lights), len(self.materials))
        return world, camera, settings

    def _require_mapping(self, data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SceneParseError(f"{what} must be a mapping, got {data!r}")
        return data

    def _require_list(self, data: Any, what: str) -> list:
        if not isinstance(data, list):
            raise SceneParseError(f"{what} must be a list, got {data!r}")
        return data

    def _parse_number(self, data: Any, what: str) -> float:
        try:
            return float(data)
        except (TypeError, ValueError) as exc:
            raise SceneParseError(f"{what} must be numeric, got {data!r}") from exc

    def _parse_size(self, data: Any, what: str) -> int:
        # bool is an int subclass, 'true' is not a size
        if isinstance(data, bool):
            raise SceneParseError(f"{what} must be an integer, got {data!r}")
        try:
            size = int(data)
        except (TypeError, ValueError) as exc:
            raise SceneParseError(f"{what} must be an integer, got {data!r}") from exc
        if size <= 0:
            raise SceneParseError(f"{what} must be positive, got {size}")
        return size

    def _parse_triple(self, data: Any, what: str) -> Tuple[float, float, float]:
        if not isinstance(data, (list, tuple)) or len(data) != 3:
            raise SceneParseError(f"{what} must have 3 components, got {data!r}")
        try:
            return float(data[0]), float(data[1]), float(data[2])
        except (TypeError, ValueError) as exc:
            raise SceneParseError(f"{what} must be numeric, got {data!r}") from exc

    def _parse_point(self, data: Any) -> Tuple4:
        return point(*self._parse_triple(data, "Point"))

    def _parse_vector(self, data: Any) -> Tuple4:
        return vector(*self._parse_triple(data, "Vector"))

    def _parse_color(self, data: Any) -> Color:
        if isinstance(data, str) and data.startswith('#') and len(data) == 7:
            hex_color = data[1:]
            try:
                return Color(
                    int(hex_color[0:2], 16) / 255.0,
                    int(hex_color[2:4], 16) / 255.0,
                    int(hex_color[4:6], 16) / 255.0,
                )
            except ValueError as exc:
                raise SceneParseError(f"Invalid hex color: {data!r}") from exc
        return Color(*self._parse_triple(data, "Color"))

    def _parse_material(self, mat_data: Any) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material must be a mapping, got {mat_data!r}")
        unknown = set(mat_data) - set(MATERIAL_KEYS) - {'color'}
        if unknown:
            raise SceneParseError(f"Unknown material keys: {sorted(unknown, key=str)}")

        try:
            kwargs = {key: float(mat_data[key]) for key in MATERIAL_KEYS if key in mat_data}
        except (TypeError, ValueError) as exc:
            raise SceneParseError(f"Material coefficients must be numeric: {exc}") from exc
        if 'color' in mat_data:
            kwargs['color'] = self._parse_color(mat_data['color'])
        return Material(**kwargs)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return Material()
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        return self._parse_material(mat_ref)

    def _parse_transform(self, steps: Any) -> Transformation:
        if not isinstance(steps, list):
            raise SceneParseError(f"Transform must be a list of steps, got {steps!r}")

        chain = []
        for step in steps:
            if not isinstance(step, dict) or len(step) != 1:
                raise SceneParseError(f"Transform step must have exactly one key, got {step!r}")
            (kind, args), = step.items()
            if kind == 'translate':
                chain.append(Transformation.translation(*self._parse_triple(args, "translate")))
            elif kind == 'scale':
                if isinstance(args, (int, float)):
                    args = [args, args, args]
                chain.append(Transformation.scale(*self._parse_triple(args, "scale")))
            elif kind in ('rotate_x', 'rotate_y', 'rotate_z'):
                chain.append(getattr(Transformation, kind)(self._parse_number(args, kind)))
            else:
                raise SceneParseError(f"Unknown transform step: {kind}")
        return Transformation.chain(chain)

    def _parse_object(self, object_id: int, obj_data: Any) -> Primitive:
        obj_data = self._require_mapping(obj_data, "Object")
        obj_type = str(obj_data.get('type', '')).lower()
        if obj_type not in PRIMITIVES:
            raise SceneParseError(f"Unknown object type: {obj_type!r}")

        transform = self._parse_transform(obj_data.get('transform', []))
        material = self._get_material(obj_data.get('material'))
        try:
            return PRIMITIVES[obj_type](object_id, transform, material)
        except SingularTransformError as exc:
            raise SceneParseError(str(exc)) from exc

    def _parse_light(self, light_data: Any) -> PointLight:
        light_data = self._require_mapping(light_data, "Light")
        if 'position' not in light_data:
            raise SceneParseError("Light requires a position")
        position = self._parse_point(light_data['position'])
        color = self._parse_color(light_data.get('color', [1, 1, 1]))
        return PointLight(position, color)

    def _parse_camera(self, cam_data: Any) -> Camera:
        cam_data = self._require_mapping(cam_data, "camera")
        width = self._parse_size(cam_data.get('width', 512), "Camera width")
        height = self._parse_size(cam_data.get('height', 256), "Camera height")
        fov = self._parse_number(cam_data.get('fov', 60.0), "Camera fov")

        look_from = self._parse_point(cam_data.get('from', [0, 0, 0]))
        look_to = self._parse_point(cam_data.get('to', [0, 0, -1]))
        up = self._parse_vector(cam_data.get('up', [0, 1, 0]))
        try:
            return Camera.look_at(width, height, fov, look_from, look_to, up)
        except SingularTransformError as exc:
            raise SceneParseError(f"Degenerate camera orientation: {exc}") from exc

    def _parse_settings(self, render_data: Any) -> RenderSettings:
        render_data = self._require_mapping(render_data, "render")
        try:
            return RenderSettings(
                max_reflection_depth=int(render_data.get('max_reflection_depth', 5)),
                gamma=float(render_data.get('gamma', 1.0)),
            )
        except (TypeError, ValueError) as exc:
            raise SceneParseError(str(exc)) from exc


def load_scene(filepath: str) -> Tuple[World, Camera, RenderSettings]:
    """Load a scene from a file."""
    return SceneParser().parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[World, Camera, RenderSettings]:
    """Parse a scene from a dictionary."""
    return SceneParser().parse_dict(data)
