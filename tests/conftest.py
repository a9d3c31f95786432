"""Shared pytest fixtures for splinepath tests."""

from __future__ import annotations

import numpy
import pytest

from splinepath.curve.bezier import BezierPath
from splinepath.curve.catmull_rom import CatmullRomPath

# Unit square corners, in the order o, v, w, u used by interpolation tests
O = numpy.array([0., 0.])
U = numpy.array([1., 0.])
V = numpy.array([0., 1.])
W = U + V


@pytest.fixture
def square_curve() -> numpy.ndarray:
    """Curve through the unit square corners (0, 0), (0, 1), (1, 1), (1, 0)."""
    return numpy.array([O, V, W, U])


@pytest.fixture
def catmull_rom_path() -> CatmullRomPath:
    """Default Catmull-Rom path: [(-1, -1), (0, 0), (1, 0), (2, -1)]."""
    return CatmullRomPath()


@pytest.fixture
def bezier_path() -> BezierPath:
    """Default Bezier path: [(0, 0), (1, 1), (2, -1), (3, 0)]."""
    return BezierPath()


@pytest.fixture
def straight_bezier_path() -> BezierPath:
    """Bezier path of 2 straight curves from (0, 0) to (6, 0), at constant speed."""
    return BezierPath([(x, 0) for x in range(7)])
