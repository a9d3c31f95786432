"""Catmull-Rom curves and paths.

A Catmull-Rom curve is defined by 4 control points (p0, p1, p2, p3) but only
the section between the two middle points is interpolated. Successive curves
of a path overlap, each one advancing by a single control point, so that the
path goes through every control point except the first and the last, with a
continuous derivative.

The knots of the curve are spaced by |p(i+1) - p(i)|**alpha: alpha = 0 gives
the uniform Catmull-Rom curve, alpha = 0.5 the centripetal one (which
never forms cusps or self-intersections within a curve) and alpha = 1 the
chordal one. See:
https://en.wikipedia.org/wiki/Centripetal_Catmull%E2%80%93Rom_spline
"""

import logging

import numpy

from . import geometry
from .path import Path

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 0.5

# knot intervals are never smaller than this, so that coincident control
# points do not make the knot remapping divide by zero.
MIN_KNOT_INTERVAL = 1e-6

def _knot_interval(a, b, alpha):
    return max(((a - b)**2).sum() ** (0.5 * alpha), MIN_KNOT_INTERVAL)

def interpolate_catmull_rom(curve, t, alpha=DEFAULT_ALPHA):
    """Compute the point(s) on a 2D Catmull-Rom curve at parameter t.

    Parameters:
        curve: array of 4 control points p0, p1, p2, p3; shape=(4,2)
        t: parameter in [0, 1], or array of such parameters. t = 0 maps to
            p1 and t = 1 maps to p2: the extra sections linking p0 to p1 and
            p2 to p3 are not part of the interpolated curve.
        alpha: exponent of the distance between points used to space the
            knots, in [0, 1].

    Returns: array of shape t.shape + (2,)

    If two adjacent control points coincide, the result is finite but the
    curvature around them is degenerate.
    """
    p0, p1, p2, p3 = numpy.asarray(curve, dtype=float)
    t = numpy.asarray(t, dtype=float)
    assert numpy.all((0 <= t) & (t <= 1)), 't is {}, expected value between 0 and 1'.format(t)
    t0 = 0
    t1 = t0 + _knot_interval(p0, p1, alpha)
    t2 = t1 + _knot_interval(p1, p2, alpha)
    t3 = t2 + _knot_interval(p2, p3, alpha)

    # remap t so that t = 0 -> t1 (p1) and t = 1 -> t2 (p2)
    u = t1 + (t2 - t1) * t

    # u is only in [t1, t2], so all blends below must be unclamped
    a1 = geometry.remap_unclamped(t0, t1, p0, p1, u)
    a2 = geometry.remap_unclamped(t1, t2, p1, p2, u)
    a3 = geometry.remap_unclamped(t2, t3, p2, p3, u)

    b1 = geometry.remap_unclamped(t0, t2, a1, a2, u)
    b2 = geometry.remap_unclamped(t1, t3, a2, a3, u)

    return geometry.remap_unclamped(t1, t2, b1, b2, u)


class CatmullRomPath(Path):
    """Series of connected Catmull-Rom curves.

    Curve i is made of control points i to i+3, so that neighbor curves share
    3 points and each control point (except near the extremities) is shared by
    4 curves, playing a different role in each. A valid path has at least 4
    control points, and each additional control point adds one curve.

    Every control point is a key point, including the first and the last
    ones even though the path does not go through them: they only shape the
    tangent at the path start and end.

    Parameters:
        control_points: array-like of shape (n,2), n >= 4. If None, a default
            arc starting at the origin is used.
        alpha: Catmull-Rom tension in [0, 1], used as exponent of the distance
            between points. 0.5 (centripetal) by default.
    """
    DEFAULT_CONTROL_POINTS = ((-1, -1), (0, 0), (1, 0), (2, -1))
    MIN_CONTROL_POINTS_COUNT = 4

    def __init__(self, control_points=None, alpha=DEFAULT_ALPHA):
        self.alpha = alpha
        super().__init__(control_points)

    @property
    def alpha(self):
        return self._alpha

    @alpha.setter
    def alpha(self, alpha):
        if not 0 <= alpha <= 1:
            raise ValueError('Catmull-Rom alpha must be between 0 and 1, got {}'.format(alpha))
        self._alpha = float(alpha)

    def __repr__(self):
        return '{}({}, alpha={})'.format(type(self).__name__, self._control_points.tolist(), self._alpha)

    def interpolate(self, curve, t):
        return interpolate_catmull_rom(curve, t, self._alpha)

    def _are_control_points_valid(self, control_points):
        # no modulo constraint: each curve after the first adds a single point
        return len(control_points) >= self.MIN_CONTROL_POINTS_COUNT

    def get_path_start_point(self):
        """Return the second control point, where the first curve starts."""
        assert len(self._control_points) > 1
        return self._control_points[1].copy()

    def get_path_end_point(self):
        """Return the penultimate control point, where the last curve ends."""
        assert len(self._control_points) > 1
        return self._control_points[-2].copy()

    # key points are control points

    def get_key_points_count(self):
        return self.get_control_points_count()

    def get_key_point(self, key_index):
        return self.get_control_point(key_index)

    def set_key_point(self, key_index, position):
        self.set_control_point(key_index, position)

    def add_key_point(self, position):
        self.add_control_point(position)

    def insert_key_point_at_start(self, position):
        self.insert_control_point(0, position)

    def remove_key_point(self, key_index):
        self.remove_control_point(key_index)

    def get_control_points_count(self):
        return len(self._control_points)

    def get_control_point(self, index):
        assert 0 <= index < len(self._control_points), \
            'Invalid index: {}. Expected index between 0 and {}'.format(index, len(self._control_points) - 1)
        return self._control_points[index].copy()

    def set_control_point(self, index, position):
        """Move the existing control point at index to position."""
        assert 0 <= index < len(self._control_points), \
            'Invalid index: {}. Expected index between 0 and {}'.format(index, len(self._control_points) - 1)
        self._control_points[index] = geometry.as_point(position)

    def get_nearest_control_point_index(self, position):
        """Return the index of the control point nearest to position (lowest
        index on a draw)."""
        return geometry.closest_point(geometry.as_point(position), self._control_points)[0]

    def add_control_point(self, position):
        """Add a control point at the end of the path."""
        self.insert_control_point(len(self._control_points), position)

    def insert_control_point(self, control_index, position):
        """Insert a control point before the control point at control_index.

        control_index 0 inserts at the start of the path, and control_index
        equal to the control points count adds a point at the end."""
        assert self.is_valid(), 'Path is invalid with {} control points, expected at least 4.'.format(
            len(self._control_points))
        assert 0 <= control_index <= len(self._control_points), \
            'Invalid control index: {}. Expected index between 0 and {}.'.format(control_index, len(self._control_points))
        self._control_points = numpy.insert(self._control_points, control_index, geometry.as_point(position), axis=0)

    def remove_control_point(self, control_index):
        """Remove the control point at control_index.

        Refused, with a warning, if the path has only 4 control points left."""
        control_points_count = len(self._control_points)
        if control_points_count <= self.MIN_CONTROL_POINTS_COUNT:
            logger.warning('There are only %d control points, cannot remove one more control point '
                'or there would be less than %d.', control_points_count, self.MIN_CONTROL_POINTS_COUNT)
            return
        assert 0 <= control_index < control_points_count, \
            'Invalid control index: {}. Expected index between 0 and {}.'.format(control_index, control_points_count - 1)
        self._control_points = numpy.delete(self._control_points, control_index, axis=0)

    def _split_curve(self, curve_index, parameter_ratio):
        # Catmull-Rom curves cannot be split exactly: the new key point is on
        # the original curve, but both halves are slightly altered.
        split_point = self.interpolate(self.get_curve(curve_index), parameter_ratio)
        # curve i interpolates between control points i + 1 and i + 2,
        # so the new key point goes at index i + 2
        self.insert_control_point(curve_index + 2, split_point)
        return split_point

    def get_curves_count(self):
        return len(self._control_points) - 3

    def get_curve(self, curve_index):
        self._assert_curve_index(curve_index)
        return self._control_points[curve_index:curve_index+4].copy()
