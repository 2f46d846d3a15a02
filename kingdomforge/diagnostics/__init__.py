"""Diagnostics for randomizer configurations."""

from .simulator import RandomizerSimulator, SimulationResult

__all__ = ["RandomizerSimulator", "SimulationResult"]
