"""Approximate arc length of parametric curves by polyline sampling.

Every function here takes an `interpolate(curve, t)` callable (such as
bezier.interpolate_bezier or a Path's bound interpolate method) which must
accept an array of parameter values and return an array of points.

Lengths are first-order approximations: each curve is sampled at uniform
parameter steps and the distances between consecutive samples are summed.
The error decreases as the number of segments grows but never vanishes for
curved segments, and the estimate is always less than or equal to the true
arc length.

The cumulated length tables built here map a curve (or path) parameter to
the approximate distance from the curve (or path) start. They are the basis
of approximate constant-speed traversal: see parameter_at_distance().
"""

import collections
import math

import numpy

from . import geometry

DEFAULT_SEGMENTS_COUNT = 20

# defaults for length-driven sampling, see sample_curves()
PRE_EVALUATION_SEGMENTS_COUNT = 10
PREFERRED_SEGMENT_LENGTH = 0.1
MAX_SEGMENTS_COUNT = 100

CumulatedLengthInfo = collections.namedtuple('CumulatedLengthInfo', ('parameter', 'cumulated_length'))
CumulatedLengthInfo.__doc__ = """Cumulated length evaluated from the start of a curve or path, at a given parameter.

For a curve, the parameter is the local parameter in [0, 1].
For a path, it is the non-normalized path parameter in [0, curves count]."""


def _sample_curve(interpolate, curve, segments_count):
    assert segments_count >= 1, 'segments_count is {}, expected at least 1'.format(segments_count)
    parameters = numpy.arange(segments_count + 1) / segments_count
    return parameters, interpolate(curve, parameters)

def evaluate_curve_length(interpolate, curve, segments_count):
    """Return an evaluation of the length of a curve as the sum of the lengths
    of segments_count segments joining points sampled at regular parameter
    steps."""
    parameters, points = _sample_curve(interpolate, curve, segments_count)
    return float(geometry.polyline_length(points))

def evaluate_cumulated_curve_lengths(interpolate, curve, segments_count):
    """Return a list of segments_count + 1 CumulatedLengthInfo along a curve.

    The list always starts with (0, 0), so that a search for the parameter
    at a given distance always finds a lower bound. Both fields are
    monotonically non-decreasing, and the last entry is (1, curve length)."""
    parameters, points = _sample_curve(interpolate, curve, segments_count)
    lengths = geometry.cumulative_distances(points, unit=False)
    return [CumulatedLengthInfo(float(p), float(l)) for p, l in zip(parameters, lengths)]

def evaluate_cumulated_path_lengths(interpolate, curves, segments_count_per_curve):
    """Concatenate the cumulated curve lengths of successive curves into a
    table covering a whole path.

    Each curve parameter t of the curve of index i is converted to the path
    parameter i + t, and each cumulated length is offset by the total length
    of the preceding curves. The last entry holds the length of the whole
    path. Note that the end of one curve and the start of the next produce
    two entries with the same parameter and length."""
    cumulated_lengths = []
    length_at_last_curve_end = 0.0
    for curve_index, curve in enumerate(curves):
        curve_lengths = evaluate_cumulated_curve_lengths(interpolate, curve, segments_count_per_curve)
        cumulated_lengths.extend(
            CumulatedLengthInfo(curve_index + info.parameter, length_at_last_curve_end + info.cumulated_length)
            for info in curve_lengths)
        length_at_last_curve_end += curve_lengths[-1].cumulated_length
    return cumulated_lengths

def parameter_at_distance(cumulated_lengths, distance):
    """Return the parameter at which the given distance from the start is
    reached, by linear interpolation in a cumulated length table.

    Distances outside the range of the table are clamped to its first and
    last parameter."""
    parameters, lengths = numpy.array(cumulated_lengths, dtype=float).T
    if distance <= lengths[0]:
        return float(parameters[0])
    if distance >= lengths[-1]:
        return float(parameters[-1])
    # leftmost entry at or beyond distance, so lengths[i-1] < distance <= lengths[i]
    i = int(numpy.searchsorted(lengths, distance, side='left'))
    ratio = (distance - lengths[i-1]) / (lengths[i] - lengths[i-1])
    return float(parameters[i-1] + ratio * (parameters[i] - parameters[i-1]))

def get_length_driven_segments_count(curve_length, preferred_segment_length, max_segments_count):
    """Return the number of segments required to split a curve of given length
    into segments no longer than preferred_segment_length, clamped to
    [1, max_segments_count]."""
    segments_count = math.ceil(curve_length / preferred_segment_length)
    return min(max(segments_count, 1), max_segments_count)

def sample_curves(interpolate, curves, preferred_segment_length=PREFERRED_SEGMENT_LENGTH,
        max_segments_count=MAX_SEGMENTS_COUNT, pre_evaluation_segments_count=PRE_EVALUATION_SEGMENTS_COUNT):
    """Sample successive curves into a polyline with a resolution driven by the
    length of each curve.

    Choosing a number of segments from a resolution requires the curve
    length, which itself requires a number of segments. To break the
    recursion, each curve is first measured with a fixed
    pre_evaluation_segments_count (a medium count is enough unless curves
    are very cuspy), and then sampled with the number of segments given by
    get_length_driven_segments_count().

    Parameters:
        interpolate: function of (curve, t) returning points.
        curves: iterable of curves.
        preferred_segment_length: wanted maximum distance between samples.
        max_segments_count: upper bound of segments per curve.
        pre_evaluation_segments_count: number of segments used to measure
            each curve before sampling it.

    Returns: points, curve_start_indices
        points: array of shape (n, 2): the samples of each curve, excluding
            their end point, followed by the end point of the last curve.
        curve_start_indices: list of the index in points at which each curve
            starts, followed by the index of the last point.
    """
    samples = []
    curve_start_indices = []
    points_count = 0
    last_curve = None
    for curve in curves:
        curve_start_indices.append(points_count)
        curve_length = evaluate_curve_length(interpolate, curve, pre_evaluation_segments_count)
        segments_count = get_length_driven_segments_count(curve_length, preferred_segment_length, max_segments_count)
        curve_points = interpolate(curve, numpy.arange(segments_count) / segments_count)
        samples.append(curve_points)
        points_count += len(curve_points)
        last_curve = curve
    if last_curve is not None:
        samples.append(interpolate(last_curve, numpy.array([1.0])))
        curve_start_indices.append(points_count)
    if not samples:
        return numpy.empty((0, 2)), curve_start_indices
    return numpy.concatenate(samples, axis=0), curve_start_indices
