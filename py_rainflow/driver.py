#!/usr/bin/env python3
"""
Run rain steps over a landscape and print water levels after each step.

A failing step is reported and the run continues with the next step.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence, TextIO

import structlog

from .config import settings
from .core.landscape import Landscape, RainSimulation
from .core.potential import PotentialChecker

# Configure logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def format_levels(water_levels: Sequence) -> str:
    """Format water levels as one comma separated line."""
    return ", ".join(str(h) for h in water_levels)


def start(
    steps: int,
    points: Sequence[float],
    landscape: Optional[RainSimulation] = None,
    rain_density: Optional[float] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """
    Rain onto the landscape ``steps`` times, writing levels after each step.

    Args:
        steps: Number of rain steps (hours)
        points: Initial landscape heights, used when no landscape is given
        landscape: Simulation to drive
        rain_density: Rain falling onto one point in one step
        out: Stream receiving water levels
        err: Stream receiving step failures

    Returns:
        Number of failed steps
    """
    if landscape is None:
        landscape = Landscape(points)
    if rain_density is None:
        rain_density = settings.rain_density
    out = out or sys.stdout
    err = err or sys.stderr

    failures = 0
    for n in range(1, steps + 1):
        try:
            water_levels = landscape.rain_uniform(rain_density, True)
        except Exception as e:
            failures += 1
            logger.error("Rain step failed", step=n, error=str(e))
            err.write(f"Error during {n} st/th invocation of rain(): {e}\n")
            continue
        out.write(format_levels(water_levels) + "\n")

    logger.info("Rain finished", steps=steps, failures=failures)
    return failures


def read_input(stream: Optional[TextIO] = None) -> List[float]:
    """Read landscape heights separated by whitespace from one line."""
    stream = stream or sys.stdin
    return [float(x) for x in stream.readline().split()]


def read_input_rain_hours(stream: Optional[TextIO] = None) -> int:
    """Read the number of rain hours, the first value of one line."""
    stream = stream or sys.stdin
    return int(stream.readline().split()[0])


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main function."""
    parser = argparse.ArgumentParser(description="Simulate rain over a one-dimensional landscape")
    parser.add_argument("--steps", type=int, help="Number of rain hours (prompted if not given)")
    parser.add_argument("--heights", type=float, nargs="+", help="Landscape heights (prompted if not given)")
    parser.add_argument("--rain", type=float, default=settings.rain_density,
                        help="Rain falling onto one point in one hour")
    parser.add_argument("--precision", type=float, default=settings.viscosity_coef,
                        help="Viscosity coefficient")
    parser.add_argument("--check-potential", action="store_true", default=settings.check_potential,
                        help="Verify the potential function after every pass")

    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper(), stream=sys.stderr, format="%(message)s")

    steps = args.steps
    if steps is None:
        print("Enter rain hours")
        steps = read_input_rain_hours()

    heights = args.heights
    if heights is None:
        print("Enter landscape heights: ,ex: 1 2 3")
        heights = read_input()

    checker = PotentialChecker() if args.check_potential else None
    landscape = Landscape(heights, precision=args.precision, checker=checker)

    failures = start(steps, heights, landscape=landscape, rain_density=args.rain)
    if checker is not None and checker.violations:
        logger.warning("Potential checks failed", count=len(checker.violations))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
