"""
Water flow simulation over a one-dimensional landscape.

This module implements:
- The rain simulation contract consumed by the driver
- Rainfall injection over every point of the landscape
- Water stabilization: repeated scan/commit passes that move water
  downhill until no point can send water to a neighbor
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
import structlog

from ..config import settings
from .point import Point, neighbors
from .potential import PotentialChecker

logger = structlog.get_logger()


@dataclass
class WaterUpdate:
    """One transfer of water queued during a stabilization pass."""
    from_idx: int
    to_idx: int
    water: Any
    from_height: Any  # Height of the source when the update was queued
    to_height: Any  # Height of the destination when the update was queued


class RainSimulation(ABC):
    """Functions required to simulate rain over a landscape."""

    @abstractmethod
    def rain(self, rain_distr: Callable[[int], Any], return_result: bool) -> List[Any]:
        """
        Simulate one step of falling rain.

        Args:
            rain_distr: Amount of rain falling onto the point with the given index
            return_result: Whether resulting water levels should be returned

        Returns:
            Water level of every point, or an empty list
        """

    def rain_uniform(self, cnt, return_result: bool) -> List[Any]:
        """Simulate one step of rain falling equally onto every point."""
        return self.rain(lambda _: cnt, return_result)

    @abstractmethod
    def precision(self):
        """Return simulation precision."""


class Landscape(RainSimulation):
    """
    Sequence of adjacent ground points that collect rain water.

    Points are visited in order of descending initial ground height. The
    order is computed once and is not updated as water accumulates.
    """

    def __init__(
        self,
        heights: Sequence[float],
        precision: Optional[float] = None,
        number_type: Callable[[float], Any] = float,
        checker: Optional[PotentialChecker] = None,
    ):
        """
        Initialize the landscape.

        Args:
            heights: Initial ground height of every point
            precision: Viscosity coefficient, defaults to settings.viscosity_coef
            number_type: Numeric type used for heights and water
            checker: Optional potential checker run after every pass
        """
        ph = np.asarray(heights, dtype=np.float64)
        if ph.ndim != 1 or ph.size == 0:
            raise ValueError("Landscape requires at least one point height")
        if not np.all(np.isfinite(ph)):
            raise ValueError(f"Landscape heights must be finite: {list(heights)}")

        if precision is None:
            precision = settings.viscosity_coef
        # Zero precision may loop forever because of rounding errors
        if not math.isfinite(precision) or precision <= 0:
            raise ValueError(f"Precision must be a positive number, got {precision}")

        self.number_type = number_type
        self.points = [Point.with_height(h, number_type) for h in ph.tolist()]
        self.points_idx = np.argsort(-ph, kind="stable").tolist()
        self._precision = number_type(precision)

        if checker is None and settings.check_potential:
            checker = PotentialChecker()
        self.checker = checker
        self._raining = False

    def __len__(self) -> int:
        return len(self.points)

    def precision(self):
        return self._precision

    def heights(self) -> List[Any]:
        """Current water level of every point in landscape order."""
        return [p.height() for p in self.points]

    def total_water(self):
        return sum((p.water for p in self.points), self.number_type(0.0))

    def rain(self, rain_distr: Callable[[int], Any], return_result: bool) -> List[Any]:
        if self._raining:
            raise RuntimeError("rain() called while the landscape is already raining")

        self._raining = True
        try:
            amounts = [self.number_type(rain_distr(idx)) for idx in range(len(self.points))]
            for idx, cnt in enumerate(amounts):
                if not math.isfinite(cnt) or cnt < 0:
                    raise ValueError(f"Rain amount must be finite and non-negative, got {cnt} at point {idx}")

            for p, cnt in zip(self.points, amounts):
                p.rain(cnt)

            self.stabilize_water()
        finally:
            self._raining = False

        if return_result:
            return self.heights()
        return []

    def find_water_updates(self) -> List[WaterUpdate]:
        """
        Scan points in priority order and queue water transfers.

        Queued updates are not applied, so every point sees the state
        left by the previous pass.
        """
        water_update = []
        for pi in self.points_idx:
            pw = self.points[pi].water
            if pw <= self._precision:
                continue

            ph = self.points[pi].height()
            send_water_to = [
                ni for ni in neighbors(pi, len(self.points))
                if ph > self.points[ni].height() + self._precision
            ]
            if not send_water_to:
                continue

            equal_fraction = pw / len(send_water_to)
            for ni in send_water_to:
                from_height = self.points[pi].height()
                to_height = self.points[ni].height()
                diff = from_height - to_height
                if diff > self._precision:
                    water_update.append(WaterUpdate(
                        from_idx=pi,
                        to_idx=ni,
                        water=min(equal_fraction, diff / 2),
                        from_height=from_height,
                        to_height=to_height,
                    ))
        return water_update

    def apply_water_updates(self, water_update: List[WaterUpdate]) -> None:
        for wu in water_update:
            self.points[wu.from_idx].water -= wu.water
            self.points[wu.to_idx].water += wu.water

    def stabilize_water(self) -> int:
        """
        Move water between points until the landscape is stable.

        There is no limit on the number of passes; termination relies on
        the precision being large enough to absorb rounding errors.

        Returns:
            Number of passes that moved water
        """
        if self.checker is not None:
            self.checker.start(self.points)

        passes = 0
        while True:
            water_update = self.find_water_updates()
            if not water_update:
                break

            self.apply_water_updates(water_update)
            passes += 1

            if self.checker is not None:
                self.checker.after_pass(self.points, water_update)

        logger.debug("Water stabilized", passes=passes, points=len(self.points))
        return passes
