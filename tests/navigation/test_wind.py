"""Tests for the wind-triangle solver and runway wind components."""

import math

import pytest

from navplan.navigation.wind import runway_wind_components, solve_wind_triangle, wind_components


class TestWindComponents:
    """Tests for head and cross components."""

    def test_wind_on_the_nose(self) -> None:
        """Wind from the course direction is a pure headwind."""
        c = wind_components(90.0, 90.0, 20.0)
        assert c.headwind == pytest.approx(20.0)
        assert c.crosswind == pytest.approx(0.0, abs=1e-9)

    def test_wind_from_the_right(self) -> None:
        """Wind 90 degrees right of course is a positive crosswind."""
        c = wind_components(0.0, 90.0, 20.0)
        assert c.headwind == pytest.approx(0.0, abs=1e-9)
        assert c.crosswind == pytest.approx(20.0)

    def test_wind_from_the_left(self) -> None:
        """Wind 90 degrees left of course is a negative crosswind."""
        assert wind_components(0.0, 270.0, 20.0).crosswind == pytest.approx(-20.0)


class TestSolveWindTriangle:
    """Tests for solve_wind_triangle."""

    def test_still_air(self) -> None:
        """Without wind heading equals course and groundspeed equals TAS."""
        s = solve_wind_triangle(45.0, 110.0, 0.0, 0.0)
        assert s.solvable
        assert s.wind_correction_angle == pytest.approx(0.0)
        assert s.true_heading == pytest.approx(45.0)
        assert s.groundspeed == pytest.approx(110.0)

    def test_pure_headwind(self) -> None:
        """A headwind subtracts from groundspeed."""
        s = solve_wind_triangle(90.0, 100.0, 90.0, 20.0)
        assert s.groundspeed == pytest.approx(80.0)
        assert s.headwind == pytest.approx(20.0)
        assert s.wind_correction_angle == pytest.approx(0.0, abs=1e-9)

    def test_pure_tailwind(self) -> None:
        """A tailwind adds to groundspeed."""
        s = solve_wind_triangle(90.0, 100.0, 270.0, 20.0)
        assert s.groundspeed == pytest.approx(120.0)
        assert s.headwind == pytest.approx(-20.0)

    def test_crosswind_from_right(self) -> None:
        """Crosswind from the right turns the heading right of course."""
        s = solve_wind_triangle(0.0, 100.0, 90.0, 20.0, magnetic_variation=2.0)
        wca = math.degrees(math.asin(0.2))
        assert s.wind_correction_angle == pytest.approx(wca)
        assert s.true_heading == pytest.approx(wca)
        assert s.magnetic_heading == pytest.approx(wca - 2.0)
        assert s.groundspeed == pytest.approx(100.0 * math.cos(math.radians(wca)))

    def test_crosswind_from_left_wraps_heading(self) -> None:
        """A left correction on a north course gives a heading near 360."""
        s = solve_wind_triangle(0.0, 100.0, 270.0, 20.0)
        assert s.wind_correction_angle < 0
        assert s.true_heading == pytest.approx(360.0 - math.degrees(math.asin(0.2)))

    def test_crosswind_equal_to_tas_is_unsolvable(self) -> None:
        """No heading holds the course when crosswind reaches TAS."""
        s = solve_wind_triangle(0.0, 100.0, 90.0, 100.0)
        assert not s.solvable
        assert s.wind_correction_angle is None
        assert s.true_heading is None
        assert s.magnetic_heading is None
        assert s.groundspeed is None

    def test_headwind_stronger_than_tas_is_unsolvable(self) -> None:
        """A headwind above TAS never makes the course good."""
        s = solve_wind_triangle(0.0, 100.0, 0.0, 120.0)
        assert not s.solvable
        assert s.groundspeed is None

    def test_invalid_airspeed(self) -> None:
        """Non-positive airspeed is rejected."""
        with pytest.raises(ValueError, match="airspeed"):
            solve_wind_triangle(0.0, 0.0, 0.0, 10.0)

    def test_negative_wind_speed(self) -> None:
        """Negative wind speed is rejected."""
        with pytest.raises(ValueError, match="Wind speed"):
            solve_wind_triangle(0.0, 100.0, 0.0, -1.0)

    def test_course_is_normalized(self) -> None:
        """Course outside [0, 360) is wrapped."""
        assert solve_wind_triangle(370.0, 100.0, 0.0, 0.0).true_course == pytest.approx(10.0)


class TestRunwayWind:
    """Tests for runway_wind_components."""

    def test_favored_runway_has_largest_headwind(self) -> None:
        """Wind from 240 favors runway 24 over 06."""
        results = runway_wind_components(240.0, 15.0, {"06": 59.0, "24": 239.0})
        by_name = {r.designator: r for r in results}
        assert by_name["24"].favored
        assert not by_name["06"].favored
        assert by_name["24"].headwind == pytest.approx(15.0, abs=0.01)
        assert by_name["06"].headwind == pytest.approx(-15.0, abs=0.01)

    def test_order_is_preserved(self) -> None:
        """Results follow the input order."""
        results = runway_wind_components(180.0, 10.0, {"18R": 182.0, "36L": 2.0, "27": 270.0})
        assert [r.designator for r in results] == ["18R", "36L", "27"]
        assert results[0].favored

    def test_calm_wind_favors_nothing(self) -> None:
        """With calm wind no runway is favored."""
        results = runway_wind_components(0.0, 0.0, {"06": 59.0, "24": 239.0})
        assert not any(r.favored for r in results)

    def test_crosswind_sign(self) -> None:
        """Wind from the right of the runway gives a positive crosswind."""
        (result,) = runway_wind_components(330.0, 10.0, {"24": 240.0})
        assert result.crosswind == pytest.approx(10.0)
        assert result.wind_angle == pytest.approx(90.0)
