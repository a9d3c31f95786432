"""Cubic Bezier curves and paths.

A Bezier path is a series of connected cubic Bezier curves. The end point of
each curve is the start point of the next, so it is stored only once, and the
control points of the path follow the layout:

    [key0, out0, in1, key1, out1, in2, key2, ..., in(n), key(n)]

where the key points are the points the path goes through, and out(i) and
in(i) are the tangent points leaving and reaching key point i. A valid path
therefore has 3n + 1 control points for n >= 1 curves.
"""

import logging

import numpy

from . import geometry
from . import interpolate
from .path import Path

logger = logging.getLogger(__name__)

_EPSILON = 1e-12

def interpolate_bezier(curve, t):
    """Compute the point(s) on a 2D cubic Bezier curve at parameter t.

    Parameters:
        curve: array of 4 control points p0, p1, p2, p3; shape=(4,2)
        t: parameter in [0, 1], or array of such parameters.

    Returns: array of shape t.shape + (2,)
    """
    p0, p1, p2, p3 = numpy.asarray(curve, dtype=float)
    t = numpy.asarray(t, dtype=float)[..., numpy.newaxis]
    s = 1 - t
    return s**3 * p0 + 3 * s**2 * t * p1 + 3 * s * t**2 * p2 + t**3 * p3

def split_bezier(curve, t):
    """Split a cubic Bezier curve at parameter t with de Casteljau's algorithm.

    Returns: (left, right), two arrays of 4 control points such that left
    covers the original curve from parameter 0 to t, and right from t to 1.
    left[3] and right[0] are both the point of the curve at t. The split is
    exact: the two curves together trace the same shape as the original."""
    p0, p1, p2, p3 = numpy.asarray(curve, dtype=float)
    a1 = p0 + (p1 - p0) * t
    a2 = p1 + (p2 - p1) * t
    a3 = p2 + (p3 - p2) * t
    b1 = a1 + (a2 - a1) * t
    b2 = a2 + (a3 - a2) * t
    split_point = b1 + (b2 - b1) * t
    return numpy.array([p0, a1, b1, split_point]), numpy.array([split_point, b2, a3, p3])


class BezierPath(Path):
    """Series of connected cubic Bezier curves, see module documentation.

    Key point k is control point 3k; key points count is curves count + 1.

    Parameters:
        control_points: array-like of shape (3n+1,2), n >= 1. If None, a
            default wave from (0, 0) to (3, 0) is used.
    """
    DEFAULT_CONTROL_POINTS = ((0, 0), (1, 1), (2, -1), (3, 0))
    MIN_CONTROL_POINTS_COUNT = 4

    @classmethod
    def from_polyline(cls, points, smoothing=None):
        """Construct a Bezier path approximating a polyline, by fitting a
        smoothing spline to it (see interpolate.fit_spline for the meaning of
        smoothing) and converting the spline to Bezier curves."""
        tck = interpolate.fit_spline(points, smoothing=smoothing)
        return cls(interpolate.spline_to_bezier_points(tck))

    def interpolate(self, curve, t):
        return interpolate_bezier(curve, t)

    def _are_control_points_valid(self, control_points):
        count = len(control_points)
        return count >= self.MIN_CONTROL_POINTS_COUNT and (count - 1) % 3 == 0

    def get_path_start_point(self):
        return self._control_points[0].copy()

    def get_path_end_point(self):
        return self._control_points[-1].copy()

    def get_control_points_count(self):
        """Return the number of control points (not the number of key points)."""
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

    def _assert_key_index(self, key_index, first=0, stop_offset=0):
        stop = self.get_key_points_count() - stop_offset
        assert first <= key_index < stop, \
            'Invalid key index: {}. Expected key index between {} and {}'.format(key_index, first, stop - 1)

    def get_key_points_count(self):
        return self.get_curves_count() + 1

    def get_key_point(self, key_index):
        self._assert_key_index(key_index)
        return self._control_points[3 * key_index].copy()

    def set_key_point(self, key_index, position):
        """Move the key point at key_index to position. Its tangent points
        are left in place."""
        self._assert_key_index(key_index)
        self._control_points[3 * key_index] = geometry.as_point(position)

    def get_in_tangent_point(self, key_index):
        """Return the tangent point reaching key point key_index, which must
        be between 1 and key points count - 1."""
        self._assert_key_index(key_index, first=1)
        return self._control_points[3 * key_index - 1].copy()

    def set_in_tangent_point(self, key_index, position):
        self._assert_key_index(key_index, first=1)
        self._control_points[3 * key_index - 1] = geometry.as_point(position)

    def get_out_tangent_point(self, key_index):
        """Return the tangent point leaving key point key_index, which must
        be between 0 and key points count - 2."""
        self._assert_key_index(key_index, stop_offset=1)
        return self._control_points[3 * key_index + 1].copy()

    def set_out_tangent_point(self, key_index, position):
        self._assert_key_index(key_index, stop_offset=1)
        self._control_points[3 * key_index + 1] = geometry.as_point(position)

    def add_key_point(self, position):
        """Add a key point at the end of the path, choosing tangent points so
        that the path continues smoothly from the previous end.

        The new out tangent of the previous end point mirrors its in tangent,
        and the in tangent of the new key point mirrors that about the line
        joining the two key points, so the new curve comes back smoothly to
        the new key point. (If the new key point is opposite to the current
        end tangent, this may produce a loop.)"""
        self.sanitize_path()
        new_key_point = geometry.as_point(position)
        previous_key_point = self._control_points[-1]
        start_tangent = previous_key_point - self._control_points[-2]
        if (start_tangent**2).sum() < _EPSILON:
            # keep the tangent point visible
            start_tangent = numpy.array([0., 1.])
        new_out_tangent_point = previous_key_point + start_tangent

        axis = new_key_point - previous_key_point
        if (axis**2).sum() < _EPSILON:
            axis = numpy.array([1., 0.])
        end_tangent = geometry.mirror(start_tangent, axis)
        new_in_tangent_point = new_key_point - end_tangent
        self._control_points = numpy.concatenate(
            [self._control_points, [new_out_tangent_point, new_in_tangent_point, new_key_point]])

    def insert_key_point_at_start(self, position):
        """Insert a key point at the start of the path, choosing tangent points
        symmetrically to add_key_point()."""
        self.sanitize_path()
        new_key_point = geometry.as_point(position)
        next_key_point = self._control_points[0]
        end_tangent = next_key_point - self._control_points[1]
        if (end_tangent**2).sum() < _EPSILON:
            end_tangent = numpy.array([0., 1.])
        new_in_tangent_point = next_key_point + end_tangent

        axis = new_key_point - next_key_point
        if (axis**2).sum() < _EPSILON:
            axis = numpy.array([1., 0.])
        start_tangent = geometry.mirror(end_tangent, axis)
        new_out_tangent_point = new_key_point - start_tangent
        self._control_points = numpy.concatenate(
            [[new_key_point, new_out_tangent_point, new_in_tangent_point], self._control_points])

    def remove_key_point(self, key_index):
        """Remove the key point at key_index and its surrounding tangent points:
        its own single tangent point plus the facing tangent point of the
        neighbor for the start and end points, its two tangent points for a
        middle point.

        Refused, with a warning, if there are only 2 key points left."""
        key_points_count = self.get_key_points_count()
        if key_points_count <= 2:
            logger.warning('There are only %d key points, cannot remove one more key point.', key_points_count)
            return
        self._assert_key_index(key_index)
        if key_index == 0:
            first = 0
        elif key_index == key_points_count - 1:
            first = 3 * key_index - 2
        else:
            first = 3 * key_index - 1
        self._control_points = numpy.delete(self._control_points, slice(first, first + 3), axis=0)

    def _split_curve(self, curve_index, parameter_ratio):
        # replace the two tangent points of the curve by the tangent points of
        # both halves around the new key point, so the shape is unchanged
        left, right = split_bezier(self.get_curve(curve_index), parameter_ratio)
        start = 3 * curve_index
        self._control_points = numpy.concatenate(
            [self._control_points[:start+1], left[1:], right[1:3], self._control_points[start+3:]])
        return left[3].copy()

    def get_curves_count(self):
        return (len(self._control_points) - 1) // 3

    def get_curve(self, curve_index):
        self._assert_curve_index(curve_index)
        return self._control_points[3*curve_index:3*curve_index+4].copy()
