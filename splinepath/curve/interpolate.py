import numpy
from scipy.interpolate import splev, splprep

from . import geometry

def fit_spline(points, smoothing=None, order=None):
    """Fit a parametric smoothing spline to a given set of x,y points.

    Parameters:
    points: array of n points x,y; shape=(n,2)
    smoothing: smoothing factor: 0 requires perfect interpolation of the
        input points, at the cost of potentially high noise. Very large values
        will result in a low-order polynomial fit to the points. If None, an
        appropriate value based on the scale of the points will be selected.
    order: The desired order of the spline, 1 to 3. If None, will be 1 if
        there are three or fewer input points, and otherwise 3.

    Returns a spline tuple (t,c,k) consisting of:
        t: the knots of the spline curve
        c: the x and y b-spline coefficients for each knot; shape=(m,2)
        k: the order of the spline.

    Note: smoothing factor "s" is an upper bound on the sum of all the distances
    between the original x,y points and the matching points on the smoothed
    spline representation. Duplicate consecutive points are dropped before
    fitting, and the spline is pinned to the first and last points."""
    points = geometry.filter_dup_points(points)
    l = len(points)
    if l < 2:
        raise ValueError('At least 2 distinct points are required to fit a spline, got {}.'.format(l))
    if order is None:
        if l < 4:
            k = 1
        else:
            k = 3
    else:
        k = order
    if not 1 <= k <= 3:
        raise ValueError('Spline order must be between 1 and 3, got {}.'.format(k))
    if l <= k:
        raise ValueError('A spline of order {} requires more than {} distinct points, got {}.'.format(k, k, l))
    # choose input parameter values for the curve as the distances along the polyline:
    # this gives something close to the "natural parameterization" of the curve.
    # (i.e. a parametric curve with first-derivative close to unit magnitude: the curve
    # doesn't accelerate/decelerate, so points along the curve in the x,y plane
    # don't "bunch up" with evenly-spaced parameter values.)
    distances = geometry.cumulative_distances(points, unit=False)

    if smoothing is None:
        smoothing = l * distances[-1] / 600.

    (t, c, k), u, fp, ier, msg = _splprep(distances, points, smoothing, k)
    if ier > 3:
        raise RuntimeError(msg)
    c = numpy.transpose(c)
    c[[0,-1]] = points[[0,-1]]
    return t, c, k


def _splprep(u, points, s, k):
    tck_u, fp, ier, msg = splprep(numpy.transpose(points), u=u, s=s, k=k, full_output=True, quiet=True)
    tck, u = tck_u
    return tck, u, fp, ier, msg


def spline_evaluate(tck, positions, derivative=0):
    """Evaluate a parametric spline (or its derivative) at the given parameter
    positions.

    Returns an array of shape (len(positions), 2)."""
    t, c, k = tck
    return numpy.transpose(splev(positions, (t, numpy.transpose(c), k), der=derivative))


def spline_to_bezier_points(tck):
    """Convert a parametric spline of order at most 3 into the control points
    of an equivalent path of cubic Bezier curves, one curve per knot span.

    Returns an array of shape (3n+1, 2), laid out as
    [key0, out0, in1, key1, ..., in(n), key(n)], where n is the number of
    distinct knot spans.

    Each span is a polynomial of degree <= 3, so its Bezier control points can
    be recovered exactly from the spline evaluated at 4 parameters: the start,
    1/3, 2/3 and the end of the span. Sampling strictly inside the span avoids
    any ambiguity about which side of a knot a derivative would be taken."""
    t, c, k = tck
    if k > 3:
        raise ValueError('Only splines of order 3 or less can be converted to cubic Bezier curves.')
    t = numpy.asarray(t)
    # the first and last k knots are repeated in the non-periodic case
    breakpoints = numpy.unique(t[k:len(t)-k])
    starts = breakpoints[:-1]
    spans = breakpoints[1:] - starts
    positions = starts[:, numpy.newaxis] + spans[:, numpy.newaxis] * numpy.array([0, 1/3, 2/3, 1])
    samples = spline_evaluate(tck, positions.ravel()).reshape(len(starts), 4, 2)
    q0, q1, q2, q3 = samples.transpose(1, 0, 2)
    # solve B(1/3) = q1, B(2/3) = q2 for the two inner control points
    p1 = (-5*q0 + 18*q1 - 9*q2 + 2*q3) / 6
    p2 = (2*q0 - 9*q1 + 18*q2 - 5*q3) / 6
    bezier_points = numpy.empty((3*len(starts) + 1, 2))
    bezier_points[0:-1:3] = q0
    bezier_points[1::3] = p1
    bezier_points[2::3] = p2
    bezier_points[-1] = q3[-1]
    return bezier_points
