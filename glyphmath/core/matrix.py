import math
from typing import Any, Optional, Tuple
import numpy as np


class Matrix:
    """
    A 3x3 affine transform for 2D glyph coordinates, backed by numpy.

    Composition with `@` is the ordinary matrix product, so
    `t @ r @ s` applies `s` first, then `r`, then `t`.
    """

    def __init__(self, data: Any = None):
        """
        Args:
            data: Another Matrix, anything numpy can turn into a 3x3 float
                  array, or None for the identity.
        """
        if data is None:
            self.m: np.ndarray = np.identity(3, dtype=float)
        elif isinstance(data, Matrix):
            self.m = data.m.copy()
        else:
            try:
                m = np.array(data, dtype=float)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Could not create Matrix from data: {e}")
            if m.shape != (3, 3):
                raise ValueError(f"Expected a 3x3 matrix, got {m.shape}")
            self.m = m

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(np.dot(self.m, other.m))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return False
        return bool(np.allclose(self.m, other.m))

    def __repr__(self) -> str:
        return f"Matrix({self.m.tolist()})"

    def copy(self) -> "Matrix":
        return Matrix(self)

    @staticmethod
    def identity() -> "Matrix":
        return Matrix()

    def is_identity(self) -> bool:
        return bool(np.allclose(self.m, np.identity(3)))

    @staticmethod
    def _about(m: "Matrix", center: Optional[Tuple[float, float]]):
        if center is None:
            return m
        cx, cy = center
        # Move the center to the origin, apply, move back.
        return Matrix.translation(cx, cy) @ m @ Matrix.translation(-cx, -cy)

    @staticmethod
    def translation(tx: float, ty: float) -> "Matrix":
        return Matrix([[1, 0, tx], [0, 1, ty], [0, 0, 1]])

    @staticmethod
    def scale(
        sx: float, sy: float, center: Optional[Tuple[float, float]] = None
    ) -> "Matrix":
        """
        Creates a scaling matrix.

        Args:
            sx: Scale factor along x.
            sy: Scale factor along y.
            center: Fixed point of the scaling. Defaults to the origin.
        """
        m = Matrix([[sx, 0, 0], [0, sy, 0], [0, 0, 1]])
        return Matrix._about(m, center)

    @staticmethod
    def rotation(
        angle_deg: float, center: Optional[Tuple[float, float]] = None
    ) -> "Matrix":
        """
        Creates a counter-clockwise rotation by `angle_deg` degrees about
        `center` (the origin by default).
        """
        angle_rad = math.radians(angle_deg)
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        m = Matrix([[c, -s, 0], [s, c, 0], [0, 0, 1]])
        return Matrix._about(m, center)

    def invert(self) -> "Matrix":
        """
        The inverse transform. Raises `numpy.linalg.LinAlgError` for a
        singular matrix, such as a zero scale.
        """
        return Matrix(np.linalg.inv(self.m))

    def transform_point(
        self, point: Tuple[float, float]
    ) -> Tuple[float, float]:
        x, y, _ = np.dot(self.m, np.array([point[0], point[1], 1.0]))
        return (float(x), float(y))

    def transform_vector(
        self, vector: Tuple[float, float]
    ) -> Tuple[float, float]:
        """Like transform_point, but ignores the translation part."""
        x, y, _ = np.dot(self.m, np.array([vector[0], vector[1], 0.0]))
        return (float(x), float(y))
