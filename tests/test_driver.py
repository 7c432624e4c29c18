"""Tests for the rain driver."""

import io

import pytest
from py_rainflow.core.landscape import Landscape, RainSimulation
from py_rainflow.driver import format_levels, main, read_input, read_input_rain_hours, start


class FlakyLandscape(RainSimulation):
    """Landscape whose rain fails on selected steps."""

    def __init__(self, heights, failing_steps, error=ValueError):
        self.landscape = Landscape(heights)
        self.failing_steps = set(failing_steps)
        self.error = error
        self.calls = 0

    def rain(self, rain_distr, return_result):
        self.calls += 1
        if self.calls in self.failing_steps:
            raise self.error("clouds went missing")
        return self.landscape.rain(rain_distr, return_result)

    def precision(self):
        return self.landscape.precision()


class TestStart:
    """Test the per-step loop."""

    def test_writes_one_line_per_step(self):
        out, err = io.StringIO(), io.StringIO()
        failures = start(2, [1.0, 5.0, 1.0], rain_density=1.0, out=out, err=err)

        assert failures == 0
        assert out.getvalue().splitlines() == ["2.5, 5.0, 2.5", "4.0, 5.0, 4.0"]
        assert err.getvalue() == ""

    def test_failed_step_does_not_stop_run(self):
        out, err = io.StringIO(), io.StringIO()
        landscape = FlakyLandscape([1.0, 1.0], failing_steps=[2])

        failures = start(3, [], landscape=landscape, rain_density=1.0, out=out, err=err)

        assert failures == 1
        assert landscape.calls == 3
        assert out.getvalue().splitlines() == ["2.0, 2.0", "3.0, 3.0"]
        assert err.getvalue() == "Error during 2 st/th invocation of rain(): clouds went missing\n"

    @pytest.mark.parametrize("error", [TypeError, KeyError, OSError])
    def test_any_step_error_is_not_fatal(self, error):
        out, err = io.StringIO(), io.StringIO()
        landscape = FlakyLandscape([1.0, 1.0], failing_steps=[1], error=error)

        failures = start(2, [], landscape=landscape, rain_density=1.0, out=out, err=err)

        assert failures == 1
        assert out.getvalue().splitlines() == ["2.0, 2.0"]
        assert err.getvalue().startswith("Error during 1 st/th invocation of rain(): ")

    def test_zero_steps(self):
        out, err = io.StringIO(), io.StringIO()
        assert start(0, [1.0], out=out, err=err) == 0
        assert out.getvalue() == ""

    def test_invalid_landscape_fails_fast(self):
        with pytest.raises(ValueError):
            start(1, [], out=io.StringIO(), err=io.StringIO())


class TestInput:
    """Test reading input lines."""

    def test_format_levels(self):
        assert format_levels([1.0, 2.5]) == "1.0, 2.5"
        assert format_levels([]) == ""

    def test_read_input(self):
        assert read_input(io.StringIO("1 2.5 -3\n")) == [1.0, 2.5, -3.0]

    def test_read_input_rain_hours(self):
        assert read_input_rain_hours(io.StringIO("4 7\n")) == 4

    def test_read_input_rejects_garbage(self):
        with pytest.raises(ValueError):
            read_input(io.StringIO("1 two 3\n"))


class TestMain:
    """Test the command line entry point."""

    def test_arguments(self, capsys):
        code = main(["--steps", "1", "--heights", "3", "1", "1", "--rain", "1", "--precision", "0.01"])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["3.0, 2.5, 2.5"]

    def test_prompts_for_missing_values(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("1\n0 0\n"))

        code = main(["--rain", "2"])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == [
            "Enter rain hours",
            "Enter landscape heights: ,ex: 1 2 3",
            "2.0, 2.0",
        ]

    def test_check_potential(self, capsys):
        code = main(["--steps", "2", "--heights", "1", "5", "1", "--check-potential"])
        assert code == 0
        assert capsys.readouterr().out.splitlines()[-1] == "4.0, 5.0, 4.0"
