"""Tests for geometric primitives and hit selection."""

import math
import numpy as np
import pytest
from lumatrace.materials import Material
from lumatrace.ray import Ray
from lumatrace.shapes import Intersection, Plane, Primitive, Sphere, hit
from lumatrace.transform import Transformation, SingularTransformError
from lumatrace.tuples import point, vector

S2 = math.sqrt(2) / 2


def close(a, b, atol=1e-5):
    return np.allclose(a.to_array(), b.to_array(), atol=atol)


class TestSphereIntersection:
    """Test ray-sphere intersection."""

    def test_two_points(self):
        s = Sphere(0)
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == [4.0, 6.0]
        assert all(i.object_id == 0 for i in xs)

    def test_tangent(self):
        xs = Sphere(0).intersect(Ray(point(0, 1, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == [5.0, 5.0]

    def test_miss(self):
        assert Sphere(0).intersect(Ray(point(0, 2, -5), vector(0, 0, 1))) == []

    def test_origin_inside(self):
        xs = Sphere(3).intersect(Ray(point(0, 0, 0), vector(0, 0, 1)))
        assert [i.t for i in xs] == [-1.0, 1.0]
        assert hit(xs).t == 1.0

    def test_sphere_behind_ray(self):
        xs = Sphere(0).intersect(Ray(point(0, 0, 5), vector(0, 0, 1)))
        assert [i.t for i in xs] == [-6.0, -4.0]
        assert hit(xs) is None

    def test_tagged_with_id(self):
        xs = Sphere(7).intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert {i.object_id for i in xs} == {7}

    def test_scaled(self):
        s = Sphere(0, Transformation.scale(2, 2, 2))
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([3.0, 7.0])

    def test_translated(self):
        s = Sphere(0, Transformation.translation(5, 0, 0))
        assert s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1))) == []

    def test_unnormalized_direction(self):
        xs = Sphere(0).intersect(Ray(point(0, 0, -5), vector(0, 0, 2)))
        assert [i.t for i in xs] == pytest.approx([2.0, 3.0])

    def test_zero_length_direction_misses(self):
        assert Sphere(0).intersect(Ray(point(0, 0, -5), vector(0, 0, 0))) == []
        assert Sphere(0).intersect(Ray(point(0, 0, 0), vector(0, 0, 0))) == []


class TestSphereNormal:
    """Test sphere surface normals."""

    @pytest.mark.parametrize("p,expected", [
        (point(1, 0, 0), vector(1, 0, 0)),
        (point(0, 1, 0), vector(0, 1, 0)),
        (point(0, 0, 1), vector(0, 0, 1)),
    ])
    def test_on_axes(self, p, expected):
        assert Sphere(0).surface_normal(p) == expected

    def test_nonaxial(self):
        k = math.sqrt(3) / 3
        n = Sphere(0).surface_normal(point(k, k, k))
        assert close(n, vector(k, k, k))
        assert n.magnitude() == pytest.approx(1.0)

    def test_translated(self):
        s = Sphere(0, Transformation.translation(0, 1, 0))
        n = s.surface_normal(point(0, 1.70711, -0.70711))
        assert close(n, vector(0, 0.70711, -0.70711))
        assert n.is_vector()

    def test_non_uniformly_scaled_and_rotated(self):
        s = Sphere(0, Transformation.chain([
            Transformation.scale(1, 0.5, 1),
            Transformation.rotate_z(36),
        ]))
        n = s.surface_normal(point(0, S2, -S2))
        assert close(n, vector(0, 0.97014, -0.24254))


class TestPlane:
    """Test ray-plane intersection and normals."""

    def test_normal_is_constant(self):
        p = Plane(0)
        for pos in (point(0, 0, 0), point(10, 0, -10), point(-5, 0, 150)):
            assert p.surface_normal(pos) == vector(0, 1, 0)

    def test_parallel_ray(self):
        assert Plane(0).intersect(Ray(point(0, 10, 0), vector(0, 0, 1))) == []

    def test_coplanar_ray(self):
        assert Plane(0).intersect(Ray(point(0, 0, 0), vector(0, 0, 1))) == []

    def test_nearly_parallel_ray(self):
        assert Plane(0).intersect(Ray(point(0, 1, 0), vector(1, 1e-9, 0))) == []

    def test_from_above(self):
        xs = Plane(4).intersect(Ray(point(0, 1, 0), vector(0, -1, 0)))
        assert xs == [Intersection(1.0, 4)]

    def test_from_below(self):
        xs = Plane(4).intersect(Ray(point(0, -1, 0), vector(0, 1, 0)))
        assert xs == [Intersection(1.0, 4)]

    def test_transformed_normal(self):
        wall = Plane(0, Transformation.rotate_x(90))
        assert close(wall.surface_normal(point(0, 0, 0)), vector(0, 0, 1))

    def test_transformed_intersection(self):
        floor = Plane(0, Transformation.translation(0, -1, 0))
        xs = floor.intersect(Ray(point(0, 0, 0), vector(0, -1, 0)))
        assert [i.t for i in xs] == [1.0]


class TestHit:
    """Test visible hit selection."""

    def test_all_positive(self):
        xs = [Intersection(1, 0), Intersection(2, 0)]
        assert hit(xs) == Intersection(1, 0)

    def test_some_negative(self):
        xs = [Intersection(-1, 0), Intersection(1, 0)]
        assert hit(xs) == Intersection(1, 0)

    def test_all_negative(self):
        assert hit([Intersection(-2, 0), Intersection(-1, 0)]) is None

    def test_empty(self):
        assert hit([]) is None

    def test_lowest_non_negative_unsorted(self):
        xs = [Intersection(5, 0), Intersection(7, 0), Intersection(-3, 0), Intersection(2, 0)]
        assert hit(xs) == Intersection(2, 0)

    def test_zero_counts(self):
        assert hit([Intersection(-0.5, 1), Intersection(0.0, 2)]) == Intersection(0.0, 2)


class TestPrimitiveBase:

    def test_defaults(self):
        s = Sphere(0)
        assert s.transform == Transformation.identity()
        assert s.material == Material()

    def test_singular_transform_fails_at_construction(self):
        with pytest.raises(SingularTransformError):
            Sphere(2, Transformation.scale(1, 0, 1))

    def test_new_shape_via_subclass(self):
        class Floor(Primitive):
            def local_intersect(self, ray):
                return [] if ray.direction.y == 0 else [Intersection(-ray.origin.y / ray.direction.y, self.object_id)]

            def local_normal(self, object_point):
                return vector(0, 1, 0)

        f = Floor(9, Transformation.translation(0, 2, 0))
        xs = f.intersect(Ray(point(0, 5, 0), vector(0, -1, 0)))
        assert xs == [Intersection(3.0, 9)]

    def test_abstract(self):
        with pytest.raises(TypeError):
            Primitive(0)
