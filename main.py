#!/usr/bin/env python3
"""
lumatrace - A small Python ray tracer

Main entry point for rendering scenes.
"""

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

from lumatrace.camera import Camera
from lumatrace.color import Color
from lumatrace.lights import PointLight
from lumatrace.materials import Material
from lumatrace.renderer import Renderer, RenderSettings
from lumatrace.scene_parser import SceneParseError, load_scene
from lumatrace.shapes import Plane, Sphere
from lumatrace.transform import Transformation
from lumatrace.tuples import point, vector
from lumatrace.world import World

logger = logging.getLogger("lumatrace")


def create_demo_scene() -> World:
    """Create the demo scene: a reflective floor and walls with three spheres."""
    wall = Material(Color(1.0, 0.9, 0.9), ambient=0.1, diffuse=0.9, specular=0.0,
                    shininess=200.0, reflection=0.5)

    floor = Plane(0, Transformation.identity(), wall)
    left_wall = Plane(1, Transformation.chain([
        Transformation.translation(0, 0, 5),
        Transformation.rotate_y(-45),
        Transformation.rotate_x(90),
    ]), wall)
    right_wall = Plane(2, Transformation.chain([
        Transformation.translation(0, 0, 5),
        Transformation.rotate_y(45),
        Transformation.rotate_x(90),
    ]), wall)

    middle = Sphere(3, Transformation.translation(-0.5, 1, 0.5),
                    Material(Color(0.1, 1.0, 0.5), 0.1, 0.7, 0.3, 200.0, 0.0))
    right = Sphere(4, Transformation.chain([
        Transformation.translation(1.5, 0.5, -1.5),
        Transformation.scale(0.5, 0.5, 0.5),
    ]), Material(Color(0.1, 1.0, 0.5), 0.1, 0.7, 0.3, 200.0, 0.0))
    left = Sphere(5, Transformation.chain([
        Transformation.translation(-1.5, 0.33, -0.75),
        Transformation.scale(0.33, 0.33, 0.33),
    ]), Material(Color(1.0, 0.8, 0.1), 0.1, 0.7, 0.3, 200.0, 0.0))

    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))
    return World([floor, left_wall, right_wall, middle, right, left], [light])


def create_demo_camera(width: int, height: int, fov: float) -> Camera:
    return Camera.look_at(width, height, fov, point(0, 2.5, -8), point(0, 1, 0), vector(0, 1, 0))


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='lumatrace - A small Python ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output scene.png
  python main.py --scene scenes/demo.yaml --output demo.png
  python main.py --width 1024 --height 512 --depth 8 --output big.png
        '''
    )

    parser.add_argument('--scene', type=str, default=None,
                        help='Scene file (.json/.yaml); built-in demo if omitted')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 512)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 256)')
    parser.add_argument('--fov', type=float, default=None, help='Field of view in degrees (default: 60)')
    parser.add_argument('--depth', type=int, default=None, help='Max reflection depth (default: 5)')
    parser.add_argument('--gamma', type=float, default=None, help='Output gamma (default: 1.0)')
    parser.add_argument('--output', type=str, default='scene.png', help='Output filename')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    print("=" * 60)
    print("lumatrace")
    print("=" * 60)

    if args.scene:
        try:
            world, camera, settings = load_scene(args.scene)
        except SceneParseError as exc:
            logger.error("Could not load scene: %s", exc)
            return 1
        print(f"Scene: {args.scene}")
    else:
        world = create_demo_scene()
        camera = create_demo_camera(512, 256, 60.0)
        settings = RenderSettings()
        print("Scene: built-in demo")

    # Command line flags override the scene file
    try:
        if args.width is not None or args.height is not None or args.fov is not None:
            camera = Camera(
                args.width if args.width is not None else camera.hsize,
                args.height if args.height is not None else camera.vsize,
                args.fov if args.fov is not None else camera.fov,
                camera.transform,
            )
        overrides = {}
        if args.depth is not None:
            overrides['max_reflection_depth'] = args.depth
        if args.gamma is not None:
            overrides['gamma'] = args.gamma
        settings = dataclasses.replace(settings, **overrides)
    except ValueError as exc:
        logger.error("Invalid render options: %s", exc)
        return 1

    print(f"  Resolution: {camera.hsize}x{camera.vsize}")
    print(f"  Objects: {len(world)}  Lights: {len(world.lights)}")
    print(f"  Reflection depth: {settings.max_reflection_depth}")

    renderer = Renderer(settings)

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    start_time = time.time()
    image = renderer.render(world, camera)
    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    renderer.save_image(image, str(output_path))
    print(f"Saved to: {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
