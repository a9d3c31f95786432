"""Tests for length estimation and distance-based traversal."""

from __future__ import annotations

import math

import numpy
import pytest
from numpy.testing import assert_allclose

from splinepath.curve import length
from splinepath.curve.bezier import BezierPath, interpolate_bezier
from splinepath.curve.catmull_rom import CatmullRomPath

STRAIGHT_CURVE = numpy.array([(0, 0), (1, 0), (2, 0), (3, 0)], dtype=float)

# Usual cubic approximation of the unit quarter circle
_K = 4 / 3 * (math.sqrt(2) - 1)
QUARTER_CIRCLE = numpy.array([(1, 0), (1, _K), (_K, 1), (0, 1)])


class TestCurveLength:
    """Tests for curve length evaluation."""

    def test_straight_curve(self) -> None:
        """Straight curve length is exact for any number of segments."""
        assert length.evaluate_curve_length(interpolate_bezier, STRAIGHT_CURVE, 1) == pytest.approx(3)
        assert length.evaluate_curve_length(interpolate_bezier, STRAIGHT_CURVE, 7) == pytest.approx(3)

    def test_quarter_circle(self) -> None:
        """More segments converge to the arc length from below."""
        coarse = length.evaluate_curve_length(interpolate_bezier, QUARTER_CIRCLE, 4)
        fine = length.evaluate_curve_length(interpolate_bezier, QUARTER_CIRCLE, 100)
        assert fine == pytest.approx(math.pi / 2, abs=1e-3)
        assert coarse < fine

    def test_cumulated_curve_lengths(self) -> None:
        """Table has segments count + 1 entries from (0, 0) to (1, length)."""
        cumulated_lengths = length.evaluate_cumulated_curve_lengths(interpolate_bezier, STRAIGHT_CURVE, 4)
        assert len(cumulated_lengths) == 5
        assert cumulated_lengths[0] == (0, 0)
        assert cumulated_lengths[-1].parameter == pytest.approx(1)
        assert cumulated_lengths[-1].cumulated_length == pytest.approx(3)
        assert cumulated_lengths[2].cumulated_length == pytest.approx(1.5)

    def test_cumulated_lengths_are_monotonic(self) -> None:
        """Parameters and lengths never decrease."""
        cumulated_lengths = length.evaluate_cumulated_curve_lengths(interpolate_bezier, QUARTER_CIRCLE, 16)
        parameters, lengths = numpy.array(cumulated_lengths).T
        assert numpy.all(numpy.diff(parameters) > 0)
        assert numpy.all(numpy.diff(lengths) >= 0)

    def test_cumulated_path_lengths(self, straight_bezier_path: BezierPath) -> None:
        """Path table concatenates curve tables with path parameters and offset lengths."""
        cumulated_lengths = straight_bezier_path.evaluate_cumulated_lengths(3)
        assert len(cumulated_lengths) == 8
        assert cumulated_lengths[0] == (0, 0)
        assert cumulated_lengths[4].parameter == pytest.approx(1)
        assert cumulated_lengths[4].cumulated_length == pytest.approx(3)
        assert cumulated_lengths[-1].parameter == pytest.approx(2)
        assert cumulated_lengths[-1].cumulated_length == pytest.approx(6)

    def test_path_cumulated_curve_lengths(self, straight_bezier_path: BezierPath) -> None:
        """Curve table of a path is local to the curve."""
        cumulated_lengths = straight_bezier_path.evaluate_cumulated_curve_lengths(1, 3)
        assert cumulated_lengths[0] == (0, 0)
        assert cumulated_lengths[-1].cumulated_length == pytest.approx(3)

    def test_path_length_is_sum_of_curves(self) -> None:
        """Path length is the sum of its curve lengths."""
        path = CatmullRomPath([(0, 0), (1, 0), (2, 1), (3, 1), (4, 0)])
        expected = path.evaluate_curve_length(0, 12) + path.evaluate_curve_length(1, 12)
        assert path.evaluate_length(12) == pytest.approx(expected)


class TestParameterAtDistance:
    """Tests for parameter_at_distance."""

    @pytest.fixture
    def cumulated_lengths(self) -> list:
        return length.evaluate_cumulated_curve_lengths(interpolate_bezier, STRAIGHT_CURVE, 4)

    def test_exact_entry(self, cumulated_lengths: list) -> None:
        """A distance in the table gives its parameter."""
        assert length.parameter_at_distance(cumulated_lengths, 1.5) == pytest.approx(0.5)

    def test_between_entries(self, cumulated_lengths: list) -> None:
        """A distance between entries is interpolated linearly."""
        assert length.parameter_at_distance(cumulated_lengths, 1.2) == pytest.approx(0.4)

    def test_clamped(self, cumulated_lengths: list) -> None:
        """Distances outside the table are clamped."""
        assert length.parameter_at_distance(cumulated_lengths, -1) == 0
        assert length.parameter_at_distance(cumulated_lengths, 10) == 1

    def test_accelerating_curve(self) -> None:
        """The parameter differs from the length ratio on a curve with variable speed."""
        curve = [(0, 0), (0, 0), (0, 0), (3, 0)]
        cumulated_lengths = length.evaluate_cumulated_curve_lengths(interpolate_bezier, curve, 20)
        assert length.parameter_at_distance(cumulated_lengths, 0.375) == pytest.approx(0.5)


class TestDistanceTraversal:
    """Tests for distance-based path interpolation."""

    def test_interpolate_path_by_distance(self, straight_bezier_path: BezierPath) -> None:
        """Distance from start along a straight path."""
        assert_allclose(straight_bezier_path.interpolate_path_by_distance(4.5), (4.5, 0))

    def test_interpolate_path_by_distance_on_curve_boundary(self, straight_bezier_path: BezierPath) -> None:
        """The joint between curves is reached at the first curve length."""
        assert_allclose(straight_bezier_path.interpolate_path_by_distance(3), (3, 0))

    def test_interpolate_path_by_normalized_distance(self, straight_bezier_path: BezierPath) -> None:
        """Normalized distance is a ratio of the path length."""
        assert_allclose(straight_bezier_path.interpolate_path_by_normalized_distance(0.25), (1.5, 0))
        assert_allclose(straight_bezier_path.interpolate_path_by_normalized_distance(1), (6, 0))

    def test_constant_speed_differs_from_parameter(self) -> None:
        """On an unevenly split path, distance and normalized parameter disagree."""
        path = BezierPath([(0, 0), (1, 0), (2, 0), (3, 0), (3.1, 0), (3.2, 0), (3.3, 0)])
        by_parameter = path.interpolate_path_by_normalized_parameter(0.5)
        by_distance = path.interpolate_path_by_normalized_distance(0.5)
        assert_allclose(by_parameter, (3, 0))
        assert_allclose(by_distance, (1.65, 0))

    def test_resample_by_distance(self, straight_bezier_path: BezierPath) -> None:
        """Resampled points are equally spaced from start to end."""
        points = straight_bezier_path.resample_by_distance(7)
        assert points.shape == (7, 2)
        assert_allclose(points[:, 0], numpy.arange(7), atol=1e-9)
        assert_allclose(points[:, 1], 0, atol=1e-9)


class TestLengthDrivenSampling:
    """Tests for get_length_driven_segments_count and sample_curves."""

    @pytest.mark.parametrize('curve_length,preferred,maximum,expected', [
        (1.0, 0.25, 100, 4),
        (1.1, 0.25, 100, 5),
        (0, 0.1, 100, 1),
        (100, 0.1, 50, 50),
    ])
    def test_segments_count(self, curve_length: float, preferred: float, maximum: int, expected: int) -> None:
        """Segments count is ceil(length / preferred) clamped to [1, max]."""
        assert length.get_length_driven_segments_count(curve_length, preferred, maximum) == expected

    def test_sample_path(self, straight_bezier_path: BezierPath) -> None:
        """Each curve gets its own number of segments, and the end point is added."""
        points, curve_start_indices = straight_bezier_path.sample_path(0.4)
        assert points.shape == (17, 2)
        assert curve_start_indices == [0, 8, 16]
        assert_allclose(points[:, 0], numpy.arange(17) * 0.375, atol=1e-9)
        assert_allclose(points[-1], (6, 0))

    def test_sample_path_resolution_follows_length(self) -> None:
        """A shorter curve gets fewer samples."""
        path = BezierPath([(0, 0), (1, 0), (2, 0), (3, 0), (3.1, 0), (3.2, 0), (3.3, 0)])
        points, curve_start_indices = path.sample_path(0.4)
        assert curve_start_indices == [0, 8, 9]
        assert len(points) == 10

    def test_sample_path_max_segments(self, straight_bezier_path: BezierPath) -> None:
        """Segments per curve are capped."""
        points, curve_start_indices = straight_bezier_path.sample_path(0.01, max_segments_count=10)
        assert curve_start_indices == [0, 10, 20]

    def test_sample_no_curves(self) -> None:
        """No curves give no points."""
        points, curve_start_indices = length.sample_curves(interpolate_bezier, [])
        assert points.shape == (0, 2)
        assert curve_start_indices == []
