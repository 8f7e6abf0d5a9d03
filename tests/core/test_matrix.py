import numpy as np
import pytest
from glyphmath.core.matrix import Matrix


class TestMatrix:
    def test_initialization(self):
        assert Matrix() == Matrix(np.identity(3))

        data = [[1, 2, 3], [4, 5, 6], [0, 0, 1]]
        m = Matrix(data)
        assert np.array_equal(m.m, np.array(data))

        copied = Matrix(m)
        assert copied == m
        assert copied.m is not m.m

        with pytest.raises(ValueError):
            Matrix([[1, 2], [3, 4]])
        with pytest.raises(ValueError):
            Matrix("not a matrix")

    def test_equality(self):
        assert Matrix.translation(10, 20) == Matrix.translation(10, 20)
        assert Matrix.translation(10, 20) != Matrix.translation(10, 21)
        assert Matrix() != "not a matrix"

    def test_repr_round_trip(self):
        m = Matrix.translation(10, -20.5)
        assert eval(repr(m)) == m

    def test_copy(self):
        m = Matrix.rotation(45)
        c = m.copy()
        assert c == m
        assert c.m is not m.m

    def test_is_identity(self):
        assert Matrix.identity().is_identity()
        assert Matrix([[1, 0, 1e-10], [0, 1, 0], [0, 0, 1]]).is_identity()
        assert not Matrix.translation(1, 0).is_identity()
        assert not Matrix.rotation(1).is_identity()

    def test_translation(self):
        m = Matrix.translation(50, -30)
        assert m.transform_point((0, 0)) == pytest.approx((50, -30))
        assert m.transform_point((10, 10)) == pytest.approx((60, -20))

    def test_scale(self):
        assert Matrix.scale(2, 3).transform_point((10, 10)) == pytest.approx(
            (20, 30)
        )
        around = Matrix.scale(2, 3, center=(10, 10))
        assert around.transform_point((10, 10)) == pytest.approx((10, 10))
        assert around.transform_point((20, 15)) == pytest.approx((30, 25))

    def test_rotation(self):
        assert Matrix.rotation(90).transform_point((10, 0)) == pytest.approx(
            (0, 10)
        )
        around = Matrix.rotation(90, center=(10, 10))
        assert around.transform_point((10, 10)) == pytest.approx((10, 10))
        assert around.transform_point((20, 10)) == pytest.approx((10, 20))

    def test_composition_order(self):
        # t @ s applies s first.
        m = Matrix.translation(10, 0) @ Matrix.scale(2, 2)
        assert m.transform_point((1, 1)) == pytest.approx((12, 2))
        m = Matrix.scale(2, 2) @ Matrix.translation(10, 0)
        assert m.transform_point((1, 1)) == pytest.approx((22, 2))

    def test_invert(self):
        m = Matrix.translation(5, 7) @ Matrix.rotation(30) @ Matrix.scale(2, 3)
        inv = m.invert()
        assert (m @ inv).is_identity()
        p = m.transform_point((1.5, -2))
        assert inv.transform_point(p) == pytest.approx((1.5, -2))

        with pytest.raises(np.linalg.LinAlgError):
            Matrix.scale(0, 1).invert()

    def test_transform_vector_ignores_translation(self):
        m = Matrix.translation(100, 100) @ Matrix.scale(2, 2)
        assert m.transform_vector((1, 2)) == pytest.approx((2, 4))
