"""
Core water flow functionality.
"""

from .point import Point, neighbors
from .landscape import Landscape, RainSimulation, WaterUpdate
from .potential import PotentialChecker, calc_state, calc_state_lbound

__all__ = ['Point', 'neighbors', 'Landscape', 'RainSimulation', 'WaterUpdate',
           'PotentialChecker', 'calc_state', 'calc_state_lbound']
