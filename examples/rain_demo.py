#!/usr/bin/env python3
"""
Simple demo script showing water collecting over a landscape.
"""

import logging

import numpy as np
import structlog
from py_rainflow.core import Landscape, PotentialChecker

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


def main():
    """Demonstrate rain over a few landscapes."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print("Py-Rainflow Rain Demo")
    print("=" * 40)

    landscapes = {
        'slope': [3.0, 1.0, 1.0],
        'peak': [1.0, 5.0, 1.0],
        'valley': [6.0, 4.0, 1.0, 0.0, 1.0, 4.0, 6.0],
        'random': np.random.default_rng(0).uniform(0, 10, 12).round(1).tolist(),
    }

    for name, heights in landscapes.items():
        print(f"\n{name.upper()} landscape: {heights}")
        print("-" * 30)

        checker = PotentialChecker()
        landscape = Landscape(heights, precision=0.01, checker=checker)

        for hour in range(1, 4):
            levels = np.array(landscape.rain_uniform(1.0, True))
            print(f"Hour {hour}: {np.round(levels, 3).tolist()}")

        print(f"Total water: {float(landscape.total_water()):.3f}")
        print(f"Potential checks failed: {len(checker.violations)}")


if __name__ == "__main__":
    main()
