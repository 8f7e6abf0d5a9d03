import math
import numpy as np
import pytest

from glyphmath.core.geo.bezier import Bezier
from glyphmath.core.geo.parameterization import (
    AngleParameterization,
    ArcLengthParameterization,
)
from glyphmath.core.geo.piecewise import Piecewise
from glyphmath.core.geo.search import IntervalSearchError


class TestArcLength:
    def test_even_line_paces_like_identity(self):
        line = Bezier.line((0, 0), (10, 0))
        param = ArcLengthParameterization.from_curve(line, 1000)
        assert param.get_total_arclen() == pytest.approx(10.0)
        for u in (0.0, 0.1, 0.25, 0.5, 0.9, 1.0):
            assert param.parameterize(u) == pytest.approx(u, abs=1e-9)

    def test_table_is_monotonic(self, quarter_circle):
        param = ArcLengthParameterization.from_curve(quarter_circle, 500)
        assert len(param.arclens) == 501
        assert param.arclens[0] == 0.0
        assert np.all(np.diff(param.arclens) >= 0)

    def test_table_is_read_only(self, quarter_circle):
        param = ArcLengthParameterization.from_curve(quarter_circle, 10)
        with pytest.raises(ValueError):
            param.arclens[0] = 1.0

    def test_quarter_circle_length(self, quarter_circle):
        param = ArcLengthParameterization.from_curve(quarter_circle, 2000)
        length = param.get_total_arclen()
        assert length == pytest.approx(math.pi / 2, abs=1e-3)

    def test_parameterize_is_monotonic(self, quarter_circle):
        param = ArcLengthParameterization.from_curve(quarter_circle, 200)
        ts = [param.parameterize(u / 50) for u in range(51)]
        assert all(a <= b for a, b in zip(ts, ts[1:]))

    def test_uneven_handles_move_the_midpoint(self):
        # Handles bunched near the start: half the length is reached later
        # than t = 0.5.
        bez = Bezier.from_points((0, 0), (0.1, 0), (0.2, 0), (10, 0))
        param = ArcLengthParameterization.from_curve(bez, 1000)
        t = param.parameterize(0.5)
        assert t > 0.5
        assert bez.at(t).x == pytest.approx(5.0, abs=0.05)

    def test_get_arclen_from_t(self):
        param = ArcLengthParameterization([0.0, 1.0, 2.0, 3.0, 4.0])
        assert param.get_arclen_from_t(0.0) == 0.0
        assert param.get_arclen_from_t(0.3) == pytest.approx(1.2)
        assert param.get_arclen_from_t(1.0) == pytest.approx(4.0)

    def test_interpolation_and_extrapolation(self):
        param = ArcLengthParameterization([0.0, 1.0, 2.0, 3.0, 4.0])
        assert param.parameterize(0.3) == pytest.approx(0.3)
        assert param.parameterize(1.5) == pytest.approx(1.5)
        assert param.parameterize(-0.25) == pytest.approx(-0.25)

    def test_exact_hit_reports_first_sample(self):
        param = ArcLengthParameterization([0.0, 0.0, 0.0, 1.0, 2.0])
        assert param.parameterize(0.0) == 0.0
        assert param.parameterize(1.0) == 1.0

        plateau = ArcLengthParameterization([0.0, 1.0, 1.0, 2.0])
        assert plateau.parameterize(0.5) == pytest.approx(1 / 3)

    def test_flat_table_is_identity(self):
        point = Bezier.from_points((1, 1), (1, 1), (1, 1), (1, 1))
        param = ArcLengthParameterization.from_curve(point, 100)
        assert param.get_total_arclen() == 0.0
        assert param.parameterize(0.3) == 0.3

    @pytest.mark.parametrize("table", [[], [5.0]])
    def test_short_tables_raise(self, table):
        param = ArcLengthParameterization(table)
        with pytest.raises(IntervalSearchError):
            param.parameterize(0.5)
        with pytest.raises(IntervalSearchError):
            param.get_arclen_from_t(0.5)

    def test_iterations_must_be_positive(self, quarter_circle):
        with pytest.raises(ValueError):
            ArcLengthParameterization.from_curve(quarter_circle, 0)

    def test_works_on_piecewise(self):
        pw = Piecewise(
            [Bezier.line((0, 0), (1, 0)), Bezier.line((1, 0), (1, 3))]
        )
        param = ArcLengthParameterization.from_curve(pw, 1000)
        assert param.get_total_arclen() == pytest.approx(4.0)
        # A quarter of the way by length is the end of the first segment.
        assert param.parameterize(0.25) == pytest.approx(0.5, abs=1e-3)

    def test_from_many_keeps_order(self):
        curves = [Bezier.line((0, 0), (n, 0)) for n in range(1, 6)]
        params = ArcLengthParameterization.from_many(curves, 100, 3)
        totals = [p.get_total_arclen() for p in params]
        assert totals == pytest.approx([1.0, 2.0, 3.0, 4.0, 5.0])


class TestAngle:
    def test_quarter_circle_total(self, quarter_circle):
        param = AngleParameterization.from_curve(quarter_circle, 1000)
        total = param.get_total_angle()
        assert total == pytest.approx(math.pi / 2, abs=1e-6)
        assert np.all(np.diff(param.total_angles) >= 0)

    def test_quarter_intervals(self, quarter_circle):
        param = AngleParameterization.from_curve(quarter_circle, 1000)
        total = param.get_total_angle()
        step = total / 4
        ts = param.find_parameters_for_angle_intervals(step)
        assert len(ts) == 3
        assert ts == sorted(ts)
        for k, t in enumerate(ts, start=1):
            assert param.get_angle_from_t(t) == pytest.approx(k * step)
        assert ts[1] == pytest.approx(0.5, abs=1e-3)

    def test_several_crossings_in_one_sample(self):
        param = AngleParameterization([0.0, 1.0, 2.0])
        ts = param.find_parameters_for_angle_intervals(0.25)
        assert ts == pytest.approx(
            [0.125, 0.25, 0.375, 0.5, 0.625, 0.75, 0.875]
        )

    def test_in_range(self, quarter_circle):
        param = AngleParameterization.from_curve(quarter_circle, 1000)
        total = param.get_total_angle()
        step = total / 3
        ts = param.find_parameters_for_angle_intervals_in_range(
            step, 0.5, 1.0
        )
        assert len(ts) == 1
        assert ts[0] > 0.5
        start = param.get_angle_from_t(0.5)
        assert param.get_angle_from_t(ts[0]) == pytest.approx(start + step)

    @pytest.mark.parametrize(
        "min_t, max_t", [(-0.1, 0.5), (0.2, 1.1), (0.8, 0.2)]
    )
    def test_in_range_rejects_bad_ranges(self, quarter_circle, min_t, max_t):
        param = AngleParameterization.from_curve(quarter_circle, 10)
        with pytest.raises(ValueError):
            param.find_parameters_for_angle_intervals_in_range(
                0.1, min_t, max_t
            )

    @pytest.mark.parametrize("step", [0.0, -1.0, float("nan")])
    def test_step_must_be_positive(self, quarter_circle, step):
        param = AngleParameterization.from_curve(quarter_circle, 10)
        with pytest.raises(ValueError):
            param.find_parameters_for_angle_intervals(step)

    def test_tiny_step_is_rejected(self, quarter_circle):
        param = AngleParameterization.from_curve(quarter_circle, 10)
        with pytest.raises(ValueError, match="crossings"):
            param.find_parameters_for_angle_intervals(1e-300)
        with pytest.raises(ValueError, match="crossings"):
            param.find_parameters_for_angle_intervals_in_range(
                1e-300, 0.0, 0.5
            )

    def test_turning_across_the_branch_cut(self):
        # Heads left and wiggles across the -x axis, where atan2 jumps
        # between pi and -pi.
        bez = Bezier.from_points((0, 0), (-1, 0.1), (-2, -0.1), (-3, 0))
        param = AngleParameterization.from_curve(bez, 1000)
        assert param.get_total_angle() < 1.0

    def test_straight_line_has_no_turning(self):
        param = AngleParameterization.from_curve(
            Bezier.line((0, 0), (5, 5)), 100
        )
        assert param.get_total_angle() == pytest.approx(0.0)
        assert param.find_parameters_for_angle_intervals(0.1) == []
        assert param.parameterize(0.4) == 0.4

    def test_parameterize_halfway(self, quarter_circle):
        param = AngleParameterization.from_curve(quarter_circle, 1000)
        assert param.parameterize(0.5) == pytest.approx(0.5, abs=1e-3)
