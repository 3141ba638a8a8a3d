"""
Roadgen - terrain-aware road generation for procedurally built worlds.

This package computes plausible, deliberately bent roads between settlements
on a weighted terrain grid, for use during world generation.
"""

__version__ = "0.1.0"
