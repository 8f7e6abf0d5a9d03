import pytest

from glyphmath.config import Tolerances
from glyphmath.core.geo.bezier import Bezier
from glyphmath.core.geo.continuity import (
    ContinuityOrder,
    ContinuityOrderError,
    group_continuous,
    is_continuous,
)
from glyphmath.core.geo.piecewise import Piecewise


@pytest.fixture
def gapped():
    """Four straight segments with a gap between the second and third."""
    return Piecewise(
        [
            Bezier.line((0, 0), (1, 0)),
            Bezier.line((1, 0), (2, 0)),
            Bezier.line((2.5, 0), (3.5, 0)),
            Bezier.line((3.5, 0), (4.5, 0)),
        ]
    )


class TestIsContinuous:
    def test_positional(self):
        a = Bezier.line((0, 0), (1, 0))
        b = Bezier.line((1, 0), (1, 1))
        assert is_continuous(a, b, ContinuityOrder.G0)
        assert not is_continuous(a, b, ContinuityOrder.G1)

    def test_gap_breaks_every_order(self):
        a = Bezier.line((0, 0), (1, 0))
        b = Bezier.line((1.1, 0), (2, 0))
        for order in ContinuityOrder:
            assert not is_continuous(a, b, order)

    def test_small_gap_within_tolerance(self):
        a = Bezier.line((0, 0), (1, 0))
        b = Bezier.line((1.0005, 0), (2, 0))
        assert is_continuous(a, b, 0)
        strict = Tolerances(small_distance=0.0001)
        assert not is_continuous(a, b, 0, strict)

    def test_tangent_tolerance(self):
        a = Bezier.line((0, 0), (1, 0))
        b = Bezier.line((1, 0), (2, 0.005))
        assert is_continuous(a, b, 1)
        assert not is_continuous(a, b, 1, Tolerances(tangent_angle=0.001))

    def test_zero_tangent_never_matches(self):
        point = Bezier.from_points((1, 0), (1, 0), (1, 0), (1, 0))
        b = Bezier.line((1, 0), (2, 0))
        assert is_continuous(point, b, 0)
        assert not is_continuous(point, b, 1)

    def test_curvature(self, quarter_circle):
        left, right = quarter_circle.split(0.5)
        assert is_continuous(left, right, ContinuityOrder.G2)

        lead_in = Bezier.line((1, -1), (1, 0))
        assert is_continuous(lead_in, quarter_circle, ContinuityOrder.G1)
        assert not is_continuous(lead_in, quarter_circle, ContinuityOrder.G2)

    def test_invalid_order(self):
        a = Bezier.line((0, 0), (1, 0))
        with pytest.raises(ContinuityOrderError):
            is_continuous(a, a, 3)
        with pytest.raises(ValueError):
            is_continuous(a, a, -1)


class TestGrouping:
    def test_gap_splits_groups(self, gapped):
        grouping = group_continuous(gapped, ContinuityOrder.G1)
        assert grouping.groups == ((0, 1), (2, 3))
        assert len(grouping) == 2
        assert grouping.order is ContinuityOrder.G1

    def test_cuts_preserve_global_parameters(self, gapped):
        grouping = group_continuous(gapped, 1)
        pw = grouping.piecewise
        assert pw.cuts == pytest.approx((0.0, 0.5, 1.0))
        assert pw.segs[0].cuts == pytest.approx((0.0, 0.5, 1.0))
        for t in (0.0, 0.1, 0.3, 0.6, 0.9, 1.0):
            assert pw.at(t).x == pytest.approx(gapped.at(t).x)

    def test_uneven_cuts_are_renormalized(self):
        pw = Piecewise(
            [
                Bezier.line((0, 0), (1, 0)),
                Bezier.line((1, 0), (4, 0)),
                Bezier.line((4, 1), (5, 1)),
            ],
            [0.0, 0.2, 0.8, 1.0],
        )
        grouping = group_continuous(pw, 0)
        assert grouping.groups == ((0, 1), (2,))
        assert grouping.piecewise.cuts == pytest.approx((0.0, 0.8, 1.0))
        inner = grouping.piecewise.segs[0]
        assert inner.cuts == pytest.approx((0.0, 0.25, 1.0))
        assert grouping.piecewise.segs[1].cuts == (0.0, 1.0)

    def test_corners(self, square_path):
        assert len(group_continuous(square_path, 0)) == 1
        # The closing joint is not examined, so a closed square has four
        # runs rather than three.
        assert len(group_continuous(square_path, 1)) == 4

    def test_smooth_contour_is_one_group(self, quarter_circle):
        pw = Piecewise(quarter_circle.split_at_multiple_t([0.25, 0.5, 0.75]))
        grouping = group_continuous(pw, ContinuityOrder.G2)
        assert grouping.groups == ((0, 1, 2, 3),)

    def test_empty(self):
        grouping = group_continuous(Piecewise([]), 2)
        assert grouping.groups == ()
        assert grouping.piecewise.is_empty()

    def test_piecewise_shortcut(self, gapped):
        grouping = gapped.as_continuous_beziers(ContinuityOrder.G0)
        assert grouping.groups == ((0, 1), (2, 3))
