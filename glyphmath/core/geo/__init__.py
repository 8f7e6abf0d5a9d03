"""
Curve representation, reparameterization and analysis for glyph outlines.
"""

from .bezier import Bezier
from .continuity import (
    ContinuityGrouping,
    ContinuityOrder,
    ContinuityOrderError,
    group_continuous,
    is_continuous,
)
from .evaluate import (
    Evaluable,
    Primitive,
    rotate,
    scale,
    transform,
    translate,
)
from .interpolator import InterpolationType, Interpolator
from .outline import (
    ContourPoint,
    PointType,
    QuadPoint,
    assert_colocated,
    bezier_from_points,
    contour_from_piecewise,
    outline_from_piecewise,
    piecewise_from_contour,
    piecewise_from_outline,
    resolve_quad_contour,
)
from .parameterization import (
    AngleParameterization,
    ArcLengthParameterization,
    Parameterization,
)
from .polar import WhichHandle
from .piecewise import (
    DegenerateIntervalError,
    EmptyPiecewiseError,
    InvalidCutTableError,
    Piecewise,
)
from .quadbezier import QuadBezier
from .rect import Rect
from .search import (
    IntervalSearchError,
    IntervalSearchResult,
    SearchStatus,
    locate_interval,
)
from .vector import Coordinate, Vector, distance, lerp


__all__ = [
    "AngleParameterization",
    "ArcLengthParameterization",
    "Bezier",
    "ContinuityGrouping",
    "ContinuityOrder",
    "ContinuityOrderError",
    "ContourPoint",
    "Coordinate",
    "DegenerateIntervalError",
    "EmptyPiecewiseError",
    "Evaluable",
    "InterpolationType",
    "Interpolator",
    "IntervalSearchError",
    "IntervalSearchResult",
    "InvalidCutTableError",
    "Parameterization",
    "Piecewise",
    "PointType",
    "Primitive",
    "QuadBezier",
    "QuadPoint",
    "Rect",
    "SearchStatus",
    "Vector",
    "WhichHandle",
    "assert_colocated",
    "bezier_from_points",
    "contour_from_piecewise",
    "distance",
    "group_continuous",
    "is_continuous",
    "lerp",
    "locate_interval",
    "outline_from_piecewise",
    "piecewise_from_contour",
    "piecewise_from_outline",
    "resolve_quad_contour",
    "rotate",
    "scale",
    "transform",
    "translate",
]
