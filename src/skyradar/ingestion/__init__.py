"""Ingestion layer.

Turns provider reports into targets: defensive parsing, local Cartesian
projection, unit conversion and the radar cross-section estimate.
"""

__all__: list[str] = []
