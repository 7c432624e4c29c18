"""
Potential function used to verify water stabilization.

The potential of a landscape is the sum of every point height raised to
the power 1.4. Moving water downhill without overshooting always lowers
it, and it can never fall below the potential of the fully drained
landscape.
"""

from typing import List, Optional, Sequence

import numpy as np
import structlog

logger = structlog.get_logger()

STATE_POWER = 1.4


def _offset(points) -> float:
    """Shift that keeps every height non-negative before exponentiation."""
    return min(0.0, min(float(p.ground) for p in points))


def calc_state(points, offset: float = 0.0) -> float:
    heights = np.array([float(p.height()) for p in points], dtype=np.float64)
    return float(np.sum(np.power(heights - offset, STATE_POWER)))


def calc_state_lbound(points, offset: float = 0.0) -> float:
    grounds = np.array([float(p.ground) for p in points], dtype=np.float64)
    return float(np.sum(np.power(grounds - offset, STATE_POWER)))


class PotentialChecker:
    """
    Checks that every stabilization pass lowers the potential.

    Violations are logged and collected, never raised.
    """

    def __init__(self):
        self.offset = 0.0
        self.state_lbound: Optional[float] = None
        self.state: Optional[float] = None
        self.history: List[float] = []
        self.violations: List[str] = []

    def start(self, points: Sequence) -> None:
        """Record the state before the first pass of a stabilization."""
        self.offset = _offset(points)
        self.state_lbound = calc_state_lbound(points, self.offset)
        self.state = calc_state(points, self.offset)
        self.history = [self.state]

    def after_pass(self, points: Sequence, water_update: Sequence) -> None:
        new_state = calc_state(points, self.offset)
        state, state_lbound = self.state, self.state_lbound

        if state < state_lbound:
            self._report(f"state ({state}) < low bound ({state_lbound})", water_update)
        if new_state < state_lbound:
            self._report(f"new_state ({new_state}) < low bound ({state_lbound})", water_update)
        if new_state > state:
            self._report(f"new_state ({new_state}) > prev_state ({state})", water_update)
        if new_state == state:
            self._report(
                f"new_state ({new_state}) == prev_state ({state}); "
                "pass should not have moved water",
                water_update,
            )

        for wu in water_update:
            if wu.water > (wu.from_height - wu.to_height) / 2:
                self._report(
                    f"update {wu.from_idx}->{wu.to_idx} moves {wu.water}, "
                    f"more than half of the difference {wu.from_height - wu.to_height}",
                    water_update,
                )

        self.state = new_state
        self.history.append(new_state)

    def _report(self, message: str, water_update: Sequence) -> None:
        logger.warning("State function check failed", reason=message,
                       updates=[repr(wu) for wu in water_update])
        self.violations.append(message)
