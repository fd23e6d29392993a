"""
Simulation Module
=================

Composition root for the sail physics: configuration, the per-tick
sailing simulator, and the heading sweep CLI.
"""

from .config import SimulationConfig
from .sailing_simulator import SailingSimulator, BoatInput
from .force_sweep import sweep_headings, run_sweep

__all__ = [
    'SimulationConfig',
    'SailingSimulator', 'BoatInput',
    'sweep_headings', 'run_sweep',
]
