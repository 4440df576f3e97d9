"""Interpolation math and boundary policy of every spline variant."""

import numpy as np
import pytest
from scipy.interpolate import Akima1DInterpolator, CubicSpline

from scene_splines import SplineConfig, evaluate
from scene_splines.core import SplineKind
from scene_splines.exceptions import InsufficientControlPoints, InvalidNumeric


def values_at(spline, parameters):
    return np.array([evaluate(spline, p)[0] for p in parameters])


class TestLinearSpline:
    """Piecewise linear interpolation and extrapolation."""

    def test_midpoint_is_exact(self, build):
        spline = build("linear_spline", [(0.0, [0.0]), (1.0, [10.0])])

        value, terms = evaluate(spline, 0.5)

        assert terms == 1
        assert value.tolist() == [5.0]

    def test_extrapolates_past_both_ends(self, build):
        """Outside the range the boundary segment's line is extended."""
        spline = build("linear_spline", [(0.0, [0.0]), (1.0, [10.0])])

        assert evaluate(spline, -1.0)[0].tolist() == [-10.0]
        assert evaluate(spline, 2.0)[0].tolist() == [20.0]

    def test_clamps_when_extrapolation_disabled(self, build):
        config = SplineConfig(extrapolate=False)
        spline = build("linear_spline", [(0.0, [0.0]), (1.0, [10.0])], config=config)

        assert evaluate(spline, -1.0)[0].tolist() == [0.0]
        assert evaluate(spline, 2.0)[0].tolist() == [10.0]

    def test_vector_values(self, build):
        """Components are interpolated independently."""
        spline = build("linear_spline", [(0.0, [0.0, 1.0, 2.0]), (2.0, [2.0, 1.0, 0.0]),
                                         (4.0, [0.0, 0.0, 0.0])])

        value, terms = evaluate(spline, 3.0)

        assert terms == 3
        np.testing.assert_allclose(value, [1.0, 0.5, 0.0])

    def test_needs_two_points(self, build):
        spline = build("linear_spline", [(0.0, [1.0])])

        with pytest.raises(InsufficientControlPoints):
            evaluate(spline, 0.0)


class TestQuadraticSpline:
    """Three-point Lagrange interpolation."""

    def test_reproduces_quadratic(self, build, quadratic_points):
        spline = build("quadratic_spline", quadratic_points)

        for p in [0.25, 1.5, 2.5, 3.75]:
            assert evaluate(spline, p)[0][0] == pytest.approx(p * p)

    def test_extrapolates_with_boundary_parabola(self, build, quadratic_points):
        spline = build("quadratic_spline", quadratic_points)

        assert evaluate(spline, 5.0)[0][0] == pytest.approx(25.0)
        assert evaluate(spline, -1.0)[0][0] == pytest.approx(1.0)

    def test_passes_through_points(self, build, uneven_points):
        spline = build("quadratic_spline", uneven_points)

        for parameter, value in uneven_points:
            np.testing.assert_allclose(evaluate(spline, parameter)[0], value, atol=1e-12)

    def test_needs_three_points(self, build):
        spline = build("quadratic_spline", [(0.0, [0.0]), (1.0, [1.0])])

        with pytest.raises(InsufficientControlPoints) as excinfo:
            evaluate(spline, 0.5)

        assert excinfo.value.required == 3
        assert excinfo.value.available == 2


class TestNaturalSpline:
    """Natural cubic spline with a cached second-derivative solve."""

    def test_matches_scipy_natural_cubic(self, build, uneven_points):
        spline = build("natural_spline", uneven_points)
        parameters = np.array([p for p, _ in uneven_points])
        values = np.array([v for _, v in uneven_points])
        reference = CubicSpline(parameters, values, bc_type='natural')

        samples = np.linspace(parameters[0], parameters[-1], 57)

        np.testing.assert_allclose(values_at(spline, samples), reference(samples), atol=1e-10)

    def test_second_derivative_vanishes_at_ends(self, build):
        spline = build("natural_spline", [(0.0, [0.0]), (1.0, [2.0]), (2.5, [1.0]), (4.0, [3.0])])
        spline.finalize()
        step = 1e-4

        def second_difference(p0, direction):
            f0 = spline.get(p0)[0]
            f1 = spline.get(p0 + direction * step)[0]
            f2 = spline.get(p0 + 2 * direction * step)[0]
            return (f0 - 2.0 * f1 + f2) / (step * step)

        assert second_difference(0.0, 1.0) == pytest.approx(0.0, abs=1e-2)
        assert second_difference(4.0, -1.0) == pytest.approx(0.0, abs=1e-2)

    def test_two_points_is_linear(self, build):
        spline = build("natural_spline", [(0.0, [0.0]), (2.0, [4.0])])

        assert evaluate(spline, 0.5)[0][0] == pytest.approx(1.0)

    def test_clamps_outside_range(self, build, uneven_points):
        spline = build("natural_spline", uneven_points)

        np.testing.assert_allclose(evaluate(spline, -3.0)[0], uneven_points[0][1])
        np.testing.assert_allclose(evaluate(spline, 9.0)[0], uneven_points[-1][1])


class TestCatmullRomSpline:
    """Catmull-Rom interpolation with duplicated end points."""

    def test_passes_through_every_point(self, build, uneven_points):
        spline = build("catmull_rom_spline", uneven_points)

        for parameter, value in uneven_points:
            np.testing.assert_allclose(evaluate(spline, parameter)[0], value, atol=1e-12)

    def test_uniform_midpoint(self, build, quadratic_points):
        """On a uniform grid the interior midpoint is (-y0 + 9 y1 + 9 y2 - y3) / 16."""
        spline = build("catmull_rom_spline", quadratic_points)

        assert evaluate(spline, 1.5)[0][0] == pytest.approx((-0.0 + 9.0 + 36.0 - 9.0) / 16.0)

    def test_cubic_spline_keyword_is_catmull_rom(self, build, quadratic_points):
        spline = build("cubic_spline", quadratic_points)

        assert spline.kind is SplineKind.CATMULL_ROM

    def test_clamps_outside_range(self, build, quadratic_points):
        spline = build("catmull_rom_spline", quadratic_points)

        assert evaluate(spline, -1.0)[0][0] == 0.0
        assert evaluate(spline, 10.0)[0][0] == 16.0

    def test_needs_four_points(self, build):
        spline = build("catmull_rom_spline", [(0.0, [0.0]), (1.0, [1.0]), (2.0, [0.0])])

        with pytest.raises(InsufficientControlPoints):
            evaluate(spline, 1.0)


class TestSorSpline:
    """Four-coefficient cubic with centered slopes and guide end points."""

    def test_reproduces_quadratic_between_guides(self, build, quadratic_points):
        spline = build("sor_spline", quadratic_points)

        for p in [1.0, 1.5, 2.0, 2.5, 3.0]:
            assert evaluate(spline, p)[0][0] == pytest.approx(p * p)

    def test_guide_points_are_not_reached(self, build, quadratic_points):
        """Outside the second..second-to-last range the curve holds those values."""
        spline = build("sor_spline", quadratic_points)

        assert evaluate(spline, 0.0)[0][0] == 1.0
        assert evaluate(spline, 0.5)[0][0] == 1.0
        assert evaluate(spline, 3.5)[0][0] == 9.0
        assert evaluate(spline, 4.0)[0][0] == 9.0

    def test_interpolate_helper(self, build, quadratic_points):
        """interpolate(i, k, offset) evaluates one cached segment polynomial."""
        spline = build("sor_spline", quadratic_points).finalize()

        assert spline.interpolate(1, 0, 0.0) == pytest.approx(1.0)
        assert spline.interpolate(1, 0, 0.5) == pytest.approx(2.25)
        assert spline.interpolate(2, 0, 1.0) == pytest.approx(9.0)


class TestAkimaSpline:
    """Akima slope selection."""

    def test_matches_scipy_akima(self, build):
        parameters = np.array([0.0, 0.5, 1.7, 2.0, 3.1, 4.0, 5.2])
        values = np.sin(parameters) + 0.3 * parameters
        spline = build("akima_spline", [(p, [v]) for p, v in zip(parameters, values)])
        reference = Akima1DInterpolator(parameters, values)

        samples = np.linspace(parameters[0], parameters[-1], 61)

        np.testing.assert_allclose(values_at(spline, samples)[:, 0], reference(samples), atol=1e-9)

    def test_step_data_does_not_overshoot(self, build):
        spline = build("akima_spline", [(float(x), [0.0 if x < 3 else 1.0]) for x in range(6)])

        sampled = values_at(spline, np.linspace(0.0, 5.0, 101))

        assert sampled.min() >= -1e-12
        assert sampled.max() <= 1.0 + 1e-12

    def test_linear_data_is_exact(self, build):
        spline = build("akima_spline", [(float(x), [2.0 * x + 1.0]) for x in range(5)])

        assert evaluate(spline, 2.3)[0][0] == pytest.approx(5.6)

    def test_clamps_outside_range(self, build, quadratic_points):
        spline = build("akima_spline", quadratic_points)

        assert evaluate(spline, -2.0)[0][0] == 0.0
        assert evaluate(spline, 7.0)[0][0] == 16.0


class TestTcbSpline:
    """Kochanek-Bartels tangents."""

    def test_zero_parameters_match_catmull_rom(self, build, uneven_points):
        tcb = build("tcb_spline", uneven_points)
        catmull_rom = build("catmull_rom_spline", uneven_points)

        samples = np.linspace(-0.5, 5.5, 97)

        np.testing.assert_allclose(values_at(tcb, samples), values_at(catmull_rom, samples),
                                   atol=1e-12)

    def test_full_tension_flattens_tangents(self, build):
        """With tension 1 every tangent is zero, so a uniform midpoint is the mean."""
        points = [(0.0, [0.0]), (1.0, [4.0]), (2.0, [2.0])]
        taut = ((1.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        spline = build("tcb_spline", points, extensions=[taut] * 3)

        assert evaluate(spline, 0.5)[0][0] == pytest.approx(2.0)
        assert evaluate(spline, 1.5)[0][0] == pytest.approx(3.0)

    def test_passes_through_points_for_any_parameters(self, build, uneven_points):
        extensions = [((0.3, -0.2, 0.5), (-0.4, 0.1, 0.0))] * len(uneven_points)
        spline = build("tcb_spline", uneven_points, extensions=extensions)

        for parameter, value in uneven_points:
            np.testing.assert_allclose(evaluate(spline, parameter)[0], value, atol=1e-12)

    def test_bias_changes_shape(self, build, uneven_points):
        neutral = build("tcb_spline", uneven_points)
        biased = build("tcb_spline", uneven_points,
                       extensions=[((0, 0.8, 0), (0, 0.8, 0))] * len(uneven_points))

        assert not np.allclose(evaluate(neutral, 1.0)[0], evaluate(biased, 1.0)[0])

    def test_extension_stores_follow_parameter_order(self, build):
        """TCB triples are stored index-aligned with the sorted control points."""
        spline = build("tcb_spline", [(2.0, [0.0]), (0.0, [1.0])],
                       extensions=[((0.5, 0, 0), (0.6, 0, 0)), ((0.1, 0, 0), (0.2, 0, 0))])

        assert [params.tension for params in spline.incoming] == [0.1, 0.5]
        assert [params.tension for params in spline.outgoing] == [0.2, 0.6]


class TestXSplines:
    """Blanc-Schlick X-splines."""

    @pytest.mark.parametrize("kind", ["basic_x_spline", "general_x_spline", "extended_x_spline"])
    def test_zero_shape_interpolates(self, build, kind, uneven_points):
        spline = build(kind, uneven_points)

        for parameter, value in uneven_points:
            np.testing.assert_allclose(evaluate(spline, parameter)[0], value, atol=1e-12)

    @pytest.mark.parametrize("kind", ["basic_x_spline", "general_x_spline", "extended_x_spline"])
    def test_curve_starts_and_ends_on_end_points(self, build, kind):
        points = [(0.0, [1.0]), (1.0, [3.0]), (2.0, [0.0]), (3.0, [2.0])]
        spline = build(kind, points, extensions=[1.0] * 4)

        assert evaluate(spline, 0.0)[0][0] == pytest.approx(1.0)
        assert evaluate(spline, 3.0)[0][0] == pytest.approx(2.0)
        assert evaluate(spline, -5.0)[0][0] == pytest.approx(1.0)
        assert evaluate(spline, 8.0)[0][0] == pytest.approx(2.0)

    def test_general_positive_shape_approximates(self, build):
        points = [(0.0, [0.0]), (1.0, [1.0]), (2.0, [0.0])]
        spline = build("general_x_spline", points, extensions=[0.0, 1.0, 0.0])

        assert evaluate(spline, 1.0)[0][0] == pytest.approx(2.0 / 3.0)

    def test_basic_uses_last_global_shape(self, build):
        points = [(0.0, [0.0]), (1.0, [1.0]), (2.0, [0.0])]
        spline = build("basic_x_spline", points, extensions=[0.0, 0.5, 1.0])

        assert spline.shape.value == 1.0
        assert evaluate(spline, 1.0)[0][0] == pytest.approx(8.0 / 15.0)

    def test_extended_negative_shape_keeps_point(self, build):
        points = [(0.0, [0.0]), (1.0, [1.0]), (2.0, [0.0]), (3.0, [1.0])]
        sharp = build("extended_x_spline", points, extensions=[0.0, -1.0, -1.0, 0.0])
        smooth = build("extended_x_spline", points)

        assert evaluate(sharp, 1.0)[0][0] == pytest.approx(1.0)
        assert evaluate(sharp, 2.0)[0][0] == pytest.approx(0.0)
        assert not np.isclose(evaluate(sharp, 1.25)[0][0], evaluate(smooth, 1.25)[0][0])

    def test_general_clamps_negative_shape(self, build, caplog):
        with caplog.at_level("WARNING", logger="scene_splines"):
            spline = build("general_x_spline", [(0.0, [0.0]), (1.0, [1.0])],
                           extensions=[-0.5, 0.0])

        assert spline.shapes[0].value == 0.0
        assert "clamped" in caplog.text

    def test_rejects_out_of_range_shape_without_clamping(self, build):
        config = SplineConfig(clamp_shapes=False)

        with pytest.raises(InvalidNumeric):
            build("extended_x_spline", [(0.0, [0.0])], extensions=[1.5], config=config)

    def test_extended_accepts_negative_shape(self, build):
        spline = build("extended_x_spline", [(0.0, [0.0]), (1.0, [1.0])], extensions=[-0.5, 0.25])

        assert [shape.value for shape in spline.shapes] == [-0.5, 0.25]


class TestCoincidentParameters:
    """Zero-length segments are rejected when the cache is built."""

    @pytest.mark.parametrize("kind", ["linear_spline", "natural_spline", "akima_spline"])
    def test_duplicate_parameter_fails_finalize(self, build, kind):
        points = [(0.0, [0.0]), (1.0, [1.0]), (1.0, [2.0]), (2.0, [0.0])]
        spline = build(kind, points)

        with pytest.raises(InvalidNumeric, match="coincident"):
            spline.finalize()


class TestMinimumPoints:
    """Each variant refuses to evaluate below its own minimum point count."""

    @pytest.mark.parametrize("kind, required", [
        ("linear_spline", 2),
        ("quadratic_spline", 3),
        ("natural_spline", 2),
        ("catmull_rom_spline", 4),
        ("sor_spline", 4),
        ("akima_spline", 4),
        ("tcb_spline", 2),
        ("basic_x_spline", 2),
        ("general_x_spline", 2),
        ("extended_x_spline", 2),
    ])
    def test_one_point_short(self, build, kind, required):
        points = [(float(i), [float(i)]) for i in range(required - 1)]
        spline = build(kind, points)

        with pytest.raises(InsufficientControlPoints) as excinfo:
            evaluate(spline, 0.0)

        assert excinfo.value.required == required
        assert excinfo.value.available == required - 1

        enough = points + [(float(required), [0.0])]
        assert evaluate(build(kind, enough), 0.0)[1] == 1
