import logging

import numpy

logger = logging.getLogger(__name__)

def as_point(point):
    """Return point as a new float array of shape (2,)."""
    point = numpy.array(point, dtype=float)
    assert point.shape == (2,), 'expected a 2D point, got shape {}'.format(point.shape)
    return point

def cumulative_distances(points, unit=True):
    """Return cumulative distances along a polyline.

    Parameters:
    points: array of shape (n,m) consisting of n points in m dimensions
    unit: if True, return distances divided by total length of the curve,
          if False, return actual arc lengths."""
    points = numpy.asarray(points, dtype=float)
    distances = numpy.concatenate([[0], numpy.add.accumulate(numpy.sqrt(((points[:-1] - points[1:])**2).sum(axis=1)))])
    if unit:
        distances /= distances[-1]
    return distances

def polyline_length(points):
    """Return the total length of a polyline of shape (n,m)."""
    points = numpy.asarray(points, dtype=float)
    return numpy.sqrt(((points[:-1] - points[1:])**2).sum(axis=1)).sum()

def filter_dup_points(points):
    """Return a polyline with no duplicate or near-duplicate points."""
    points = numpy.asarray(points, dtype=float)
    points_out = [points[0]]
    for point in points[1:]:
        if not numpy.allclose(point, points_out[-1]):
            points_out.append(point)
    return numpy.array(points_out)

def closest_point(point, points):
    """Find the closest position in array 'points' to the provided 'point'.

    Distances are compared squared. If several points are at the same
    distance, the one with the lowest index wins.

    Returns: (index, closest point)"""
    points_arr = numpy.asarray(points, dtype=float)
    distances_squared = ((points_arr - point)**2).sum(axis=1)
    # argmin returns the first occurrence of the minimum
    i = int(numpy.argmin(distances_squared))
    return i, points_arr[i]

def remap_unclamped(a, b, pa, pb, u):
    """Linearly map u from the interval [a, b] to the interval [pa, pb],
    without clamping u to [a, b].

    pa and pb may be points of shape (m) or arrays of points broadcastable
    against u[..., numpy.newaxis]. u may be a scalar or an array."""
    ratio = (numpy.asarray(u, dtype=float) - a) / (b - a)
    return pa + (pb - pa) * ratio[..., numpy.newaxis]

def project_parallel(vector, direction):
    """Return vector projected on direction (which need not be normalized).

    If direction is the zero vector, an error is logged and the zero vector
    is returned."""
    vector = numpy.asarray(vector, dtype=float)
    direction = numpy.asarray(direction, dtype=float)
    direction_sqr_norm = (direction**2).sum()
    if direction_sqr_norm < numpy.finfo(float).eps:
        logger.error('Cannot project %s on direction %s with squared norm %g too close to zero, returning zero vector.',
            vector, direction, direction_sqr_norm)
        return numpy.zeros_like(vector)
    # p = (<v, e> / ||e||^2) * e
    return (vector * direction).sum() / direction_sqr_norm * direction

def project_orthogonal(vector, normal):
    """Return the component of vector orthogonal to normal."""
    vector = numpy.asarray(vector, dtype=float)
    return vector - project_parallel(vector, normal)

def mirror(vector, axis):
    """Return vector mirrored about axis (which need not be normalized).

    This is the opposite of reflecting vector off a surface of normal axis."""
    vector = numpy.asarray(vector, dtype=float)
    # s = p - q = v - 2q
    return vector - 2 * project_orthogonal(vector, axis)
