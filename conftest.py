import pytest

from glyphmath.config import Tolerances
from glyphmath.core.geo.bezier import Bezier
from glyphmath.core.geo.outline import ContourPoint, PointType
from glyphmath.core.geo.piecewise import Piecewise

# Handle length that makes a cubic approximate a unit quarter circle.
KAPPA = 0.5522847498


@pytest.fixture
def tolerances():
    return Tolerances()


@pytest.fixture
def quarter_circle():
    return Bezier.from_points((1, 0), (1, KAPPA), (KAPPA, 1), (0, 1))


@pytest.fixture
def square_contour():
    """A closed 10x10 square with colocated handles."""
    return [
        ContourPoint(0, 0, ptype=PointType.LINE),
        ContourPoint(10, 0, ptype=PointType.LINE),
        ContourPoint(10, 10, ptype=PointType.LINE),
        ContourPoint(0, 10, ptype=PointType.LINE),
    ]


@pytest.fixture
def square_path():
    """The same square as a closed contour of straight cubics."""
    corners = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
    return Piecewise(
        [Bezier.line(a, b) for a, b in zip(corners, corners[1:])]
    )
