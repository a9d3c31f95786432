"""Base class for paths, i.e. series of connected parametric curves.

A path is defined by an ordered list of control points, from which each
concrete subclass extracts curves of 4 points and interpolates them in its own
way. Among the control points, key points are the ones meaningful to a user
editing the path (as opposed to e.g. tangent points).

Parameters:
 - a curve parameter t in [0, 1] addresses one curve;
 - a path parameter in [0, curves count] addresses the whole path: its
   integer part selects the curve and its fractional part is the curve
   parameter, so that the next curve is reached on each integer value;
 - a normalized path parameter in [0, 1] addresses the same point as the
   path parameter normalized parameter * curves count. Every curve gets an
   equal share of the normalized range whatever its length, so a constant
   increase of the normalized parameter does not give a constant speed along
   the path. Use the distance-based methods for (approximately) constant speed.

Nothing is cached: every query recomputes what it needs from the current
control points.
"""

import logging
import math

import numpy

from . import geometry
from . import length

logger = logging.getLogger(__name__)


class Path:
    """Abstract path of connected curves, see module documentation.

    Subclasses define DEFAULT_CONTROL_POINTS and the family-specific methods
    that raise NotImplementedError here.
    """
    DEFAULT_CONTROL_POINTS = ()

    def __init__(self, control_points=None):
        if control_points is None:
            self._init()
            return
        control_points = numpy.array(control_points, dtype=float)
        if control_points.ndim != 2 or control_points.shape[1] != 2:
            logger.error('%s constructed with control points of shape %s, expected shape (n, 2). '
                'Falling back to default initialization.', type(self).__name__, control_points.shape)
            self._init()
        elif self._are_control_points_valid(control_points):
            self._control_points = control_points
        else:
            logger.error('%s constructed with %d control points, which is not a valid count. '
                'Falling back to default initialization.', type(self).__name__, len(control_points))
            self._init()

    def _init(self):
        self._control_points = numpy.array(self.DEFAULT_CONTROL_POINTS, dtype=float)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self._control_points.tolist())

    @property
    def control_points(self):
        """Read-only view of the control points, of shape (n, 2).

        The view reflects later moves of existing points, but not topology
        edits (which rebuild the list of points)."""
        view = self._control_points.view()
        view.flags.writeable = False
        return view

    def interpolate(self, curve, t):
        """Return the point on curve (array of 4 points) at parameter t in [0, 1].

        t may also be an array of parameters, in which case an array of
        points of shape t.shape + (2,) is returned."""
        raise NotImplementedError()

    def is_valid(self):
        return self._are_control_points_valid(self._control_points)

    def _are_control_points_valid(self, control_points):
        raise NotImplementedError()

    def sanitize_path(self):
        """Reset the path to its default control points if they are invalid.

        Call this after loading or bulk-editing control points from outside.
        Never raises: an invalid path is logged and reinitialized, not repaired."""
        if not self.is_valid():
            logger.warning('%s is invalid with %d control points. Reinitializing points.',
                type(self).__name__, len(self._control_points))
            self._init()

    def subtract_path_start_offset(self):
        """Translate all control points so that the path starts at the origin."""
        self._control_points -= self.get_path_start_point()

    # Point and curve accessors

    def get_path_start_point(self):
        raise NotImplementedError()

    def get_path_end_point(self):
        raise NotImplementedError()

    def get_key_points_count(self):
        raise NotImplementedError()

    def get_key_point(self, key_index):
        raise NotImplementedError()

    def set_key_point(self, key_index, position):
        raise NotImplementedError()

    def get_key_points(self):
        """Yield all key points, from start to end."""
        for key_index in range(self.get_key_points_count()):
            yield self.get_key_point(key_index)

    def get_nearest_key_point_index(self, position):
        """Return the index of the key point nearest to position (lowest index
        on a draw)."""
        return geometry.closest_point(geometry.as_point(position), list(self.get_key_points()))[0]

    def add_key_point(self, position):
        """Add a key point at the end of the path."""
        raise NotImplementedError()

    def insert_key_point_at_start(self, position):
        """Insert a key point at the start of the path."""
        raise NotImplementedError()

    def remove_key_point(self, key_index):
        """Remove the key point at key_index. Refused (with a warning) if the
        path would become invalid."""
        raise NotImplementedError()

    def split_curve_at_parameter_ratio(self, curve_index, parameter_ratio):
        """Split the curve at curve_index in two by inserting a key point at
        parameter_ratio along it.

        The shape of the path is preserved as closely as the curve family
        allows, but not its parametric speed: re-evaluate cumulated lengths
        after splitting to move along the path at a given speed.

        A parameter_ratio of exactly 0 or 1 inserts a copy of an existing key
        point. For a Catmull-Rom path this makes two adjacent control points
        coincide: interpolation stays finite (see
        catmull_rom.MIN_KNOT_INTERVAL) but the curvature around them is
        degenerate.

        Returns: the inserted key point, or None if curve_index or
        parameter_ratio is out of range, in which case the path is unchanged.
        """
        curves_count = self.get_curves_count()
        if not 0 <= curve_index < curves_count:
            logger.warning('Cannot split curve %d: expected curve index between 0 and %d.',
                curve_index, curves_count - 1)
            return None
        if not 0 <= parameter_ratio <= 1:
            logger.warning('Cannot split curve %d at parameter ratio %g: expected value between 0 and 1.',
                curve_index, parameter_ratio)
            return None
        return self._split_curve(curve_index, parameter_ratio)

    def _split_curve(self, curve_index, parameter_ratio):
        raise NotImplementedError()

    def get_curves_count(self):
        raise NotImplementedError()

    def get_curve(self, curve_index):
        """Return a copy of the 4 control points of the curve at curve_index."""
        raise NotImplementedError()

    def get_curves(self):
        """Yield each curve of the path, from start to end."""
        for curve_index in range(self.get_curves_count()):
            yield self.get_curve(curve_index)

    def _assert_curve_index(self, curve_index):
        curves_count = self.get_curves_count()
        assert 0 <= curve_index < curves_count, \
            'Invalid curve index: {}. Expected index between 0 and {}.'.format(curve_index, curves_count - 1)

    # Interpolation

    def interpolate_curve(self, curve_index, t):
        """Return the point at parameter t in [0, 1] on the curve at curve_index."""
        self._assert_curve_index(curve_index)
        assert 0 <= t <= 1, 'Parameter t is {}, expected number between 0 and 1.'.format(t)
        return self.interpolate(self.get_curve(curve_index), t)

    def interpolate_path_by_parameter(self, path_t):
        """Return the point at path parameter path_t in [0, curves count].

        Parameters at or beyond the bounds return exactly the path start or
        end point."""
        curves_count = self.get_curves_count()
        if path_t <= 0:
            return self.get_path_start_point()
        if path_t >= curves_count:
            return self.get_path_end_point()
        curve_index = math.floor(path_t)
        return self.interpolate_curve(curve_index, path_t - curve_index)

    def interpolate_path_by_normalized_parameter(self, normalized_t):
        """Return the point at normalized path parameter normalized_t in [0, 1].

        Each curve is associated with an equal range of 1 / curves count, so
        the interpolated point "spends" the same amount of parameter in every
        curve, whatever their lengths."""
        return self.interpolate_path_by_parameter(normalized_t * self.get_curves_count())

    # Length evaluation

    def evaluate_length(self, segments_count_per_curve):
        """Return an evaluation of the path length, as the sum of the curve
        lengths each approximated with segments_count_per_curve segments."""
        return sum(length.evaluate_curve_length(self.interpolate, curve, segments_count_per_curve)
            for curve in self.get_curves())

    def evaluate_curve_length(self, curve_index, segments_count):
        """Return an evaluation of the length of the curve at curve_index,
        approximated with segments_count segments."""
        self._assert_curve_index(curve_index)
        return length.evaluate_curve_length(self.interpolate, self.get_curve(curve_index), segments_count)

    def evaluate_cumulated_curve_lengths(self, curve_index, segments_count):
        """Return the list of CumulatedLengthInfo over the curve at curve_index."""
        self._assert_curve_index(curve_index)
        return length.evaluate_cumulated_curve_lengths(self.interpolate, self.get_curve(curve_index), segments_count)

    def evaluate_cumulated_lengths(self, segments_count_per_curve):
        """Return the list of CumulatedLengthInfo over the whole path, with
        non-normalized path parameters."""
        return length.evaluate_cumulated_path_lengths(self.interpolate, self.get_curves(), segments_count_per_curve)

    def interpolate_path_by_distance(self, distance, segments_count_per_curve=length.DEFAULT_SEGMENTS_COUNT):
        """Return the point at the given distance from the path start, measured
        along the path (arc-length parameterization), approximated with
        segments_count_per_curve segments per curve."""
        cumulated_lengths = self.evaluate_cumulated_lengths(segments_count_per_curve)
        return self.interpolate_path_by_parameter(length.parameter_at_distance(cumulated_lengths, distance))

    def interpolate_path_by_normalized_distance(self, normalized_distance,
            segments_count_per_curve=length.DEFAULT_SEGMENTS_COUNT):
        """Return the point at normalized_distance * path length from the path
        start (0 for start, 1 for end)."""
        cumulated_lengths = self.evaluate_cumulated_lengths(segments_count_per_curve)
        distance = normalized_distance * cumulated_lengths[-1].cumulated_length
        return self.interpolate_path_by_parameter(length.parameter_at_distance(cumulated_lengths, distance))

    def resample_by_distance(self, num_points, segments_count_per_curve=length.DEFAULT_SEGMENTS_COUNT):
        """Return num_points points approximately equally spaced along the path,
        from its start to its end, as an array of shape (num_points, 2)."""
        cumulated_lengths = self.evaluate_cumulated_lengths(segments_count_per_curve)
        distances = numpy.linspace(0, cumulated_lengths[-1].cumulated_length, num_points)
        return numpy.array([self.interpolate_path_by_parameter(length.parameter_at_distance(cumulated_lengths, d))
            for d in distances]).reshape(-1, 2)

    def sample_path(self, preferred_segment_length=length.PREFERRED_SEGMENT_LENGTH,
            max_segments_count=length.MAX_SEGMENTS_COUNT,
            pre_evaluation_segments_count=length.PRE_EVALUATION_SEGMENTS_COUNT):
        """Sample the path into a polyline whose resolution follows the length
        of each curve. See length.sample_curves() for details.

        Returns: points, curve_start_indices"""
        return length.sample_curves(self.interpolate, self.get_curves(), preferred_segment_length,
            max_segments_count, pre_evaluation_segments_count)
