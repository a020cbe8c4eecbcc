"""Tests for Transformation."""

import math
import numpy as np
import pytest
from lumatrace.matrix import Matrix
from lumatrace.transform import Transformation, SingularTransformError
from lumatrace.tuples import point, vector

S2 = math.sqrt(2) / 2


def close(a, b, atol=1e-5):
    return np.allclose(a.to_array(), b.to_array(), atol=atol)


class TestTranslation:

    def test_moves_point(self):
        t = Transformation.translation(5, -3, 2)
        assert t.apply(point(-3, 4, 5)) == point(2, 1, 7)

    def test_inverse_moves_back(self):
        inv = Transformation.translation(5, -3, 2).inverse()
        assert inv.apply(point(-3, 4, 5)) == point(-8, 7, 3)

    def test_does_not_affect_vectors(self):
        t = Transformation.translation(5, -3, 2)
        assert t.apply(vector(-3, 4, 5)) == vector(-3, 4, 5)


class TestScale:

    def test_scales_point(self):
        assert Transformation.scale(2, 3, 4).apply(point(-4, 6, 8)) == point(-8, 18, 32)

    def test_scales_vector(self):
        assert Transformation.scale(2, 3, 4).apply(vector(-4, 6, 8)) == vector(-8, 18, 32)

    def test_inverse_shrinks(self):
        inv = Transformation.scale(2, 3, 4).inverse()
        assert inv.apply(vector(-4, 6, 8)) == vector(-2, 2, 2)

    def test_reflection_is_negative_scale(self):
        assert Transformation.scale(-1, 1, 1).apply(point(2, 3, 4)) == point(-2, 3, 4)

    def test_zero_scale_is_singular(self):
        t = Transformation.scale(0, 1, 1)
        assert t.inverse() is None
        with pytest.raises(SingularTransformError):
            t.require_inverse()


class TestRotation:

    def test_rotate_x(self):
        p = point(0, 1, 0)
        assert close(Transformation.rotate_x(45).apply(p), point(0, S2, S2))
        assert close(Transformation.rotate_x(90).apply(p), point(0, 0, 1))

    def test_rotate_x_inverse(self):
        inv = Transformation.rotate_x(45).inverse()
        assert close(inv.apply(point(0, 1, 0)), point(0, S2, -S2))

    def test_rotate_y(self):
        p = point(0, 0, 1)
        assert close(Transformation.rotate_y(45).apply(p), point(S2, 0, S2))
        assert close(Transformation.rotate_y(90).apply(p), point(1, 0, 0))

    def test_rotate_z(self):
        p = point(0, 1, 0)
        assert close(Transformation.rotate_z(45).apply(p), point(-S2, S2, 0))
        assert close(Transformation.rotate_z(90).apply(p), point(-1, 0, 0))


class TestChain:

    def test_individual_steps(self):
        p = point(1, 0, 1)
        a = Transformation.rotate_x(90)
        b = Transformation.scale(5, 5, 5)
        c = Transformation.translation(10, 5, 7)
        p2 = a.apply(p)
        assert close(p2, point(1, -1, 0))
        p3 = b.apply(p2)
        assert close(p3, point(5, -5, 0))
        assert close(c.apply(p3), point(15, 0, 7))

    def test_last_listed_applies_first(self):
        t = Transformation.chain([
            Transformation.translation(10, 5, 7),
            Transformation.scale(5, 5, 5),
            Transformation.rotate_x(90),
        ])
        assert close(t.apply(point(1, 0, 1)), point(15, 0, 7))

    def test_chain_is_matrix_product(self):
        a = Transformation.translation(1, 2, 3)
        b = Transformation.scale(2, 2, 2)
        assert Transformation.chain([a, b]).matrix == a.matrix @ b.matrix
        assert (a @ b) == Transformation.chain([a, b])

    def test_empty_chain_is_identity(self):
        assert Transformation.chain([]) == Transformation.identity()

    @pytest.mark.parametrize("t", [
        Transformation.translation(1, -2, 3),
        Transformation.chain([Transformation.rotate_y(30), Transformation.scale(1, 4, 0.25)]),
        Transformation.chain([
            Transformation.translation(0, 0, 5),
            Transformation.rotate_y(-45),
            Transformation.rotate_x(90),
        ]),
    ])
    def test_inverse_round_trip(self, t):
        p = point(-1.5, 2.25, 7)
        assert close(t.inverse().apply(t.apply(p)), p, atol=1e-9)
        assert (t @ t.inverse()).matrix == Matrix.identity(4)


class TestApplyKeepsKind:

    def test_point_stays_point_after_inverse(self):
        t = Transformation.chain([
            Transformation.translation(1.5, 0.5, -1.5),
            Transformation.scale(0.33, 0.33, 0.33),
            Transformation.rotate_z(17),
        ])
        assert t.inverse().apply(point(3, 1, 2)).is_point()
        assert t.inverse().apply(vector(3, 1, 2)).is_vector()

    def test_transpose(self):
        t = Transformation.translation(1, 2, 3)
        assert t.transpose().matrix == t.matrix.transpose()

    def test_affine_detection(self):
        assert Transformation.rotate_y(30).is_affine()
        assert not Transformation.translation(1, 2, 3).transpose().is_affine()

    def test_non_affine_uses_full_product(self):
        t = Transformation.translation(1, 2, 3).transpose()
        n = t.apply(vector(1, 1, 1))
        assert n.to_array().tolist() == [1.0, 1.0, 1.0, 6.0]

    def test_projective_row_sets_w(self):
        t = Transformation(Matrix([
            [1, 0, 0, 0],
            [0, 1, 0, 0],
            [0, 0, 1, 0],
            [0, 0, 1, 0],
        ]))
        assert t.apply(point(2, 3, 4)).to_array().tolist() == [2.0, 3.0, 4.0, 4.0]

    def test_requires_4x4(self):
        with pytest.raises(ValueError):
            Transformation(Matrix.identity(3))


class TestView:

    def test_default_orientation(self):
        t = Transformation.view(point(0, 0, 0), point(0, 0, -1), vector(0, 1, 0))
        assert t == Transformation.identity()

    def test_looking_positive_z(self):
        t = Transformation.view(point(0, 0, 0), point(0, 0, 1), vector(0, 1, 0))
        assert t == Transformation.scale(-1, 1, -1)

    def test_moves_the_world(self):
        t = Transformation.view(point(0, 0, 8), point(0, 0, 0), vector(0, 1, 0))
        assert t == Transformation.translation(0, 0, -8)

    def test_arbitrary(self):
        t = Transformation.view(point(1, 3, 2), point(4, -2, 8), vector(1, 1, 0))
        assert np.allclose(t.matrix.to_array(), [
            [-0.50709, 0.50709, 0.67612, -2.36643],
            [0.76772, 0.60609, 0.12122, -2.82843],
            [-0.35857, 0.59761, -0.71714, 0.00000],
            [0.00000, 0.00000, 0.00000, 1.00000],
        ], atol=1e-5)
