"""
Rainfall simulation over one-dimensional landscapes.
"""

from .core import Landscape, PotentialChecker, RainSimulation, WaterUpdate

__version__ = "0.1.0"

__all__ = ['Landscape', 'PotentialChecker', 'RainSimulation', 'WaterUpdate']
