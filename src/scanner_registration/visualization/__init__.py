"""
Visualization Module

This module renders registered beacon maps and scanner positions.
The module uses Plotly as a backend for rendering interactive visualizations.
"""

from .point_cloud import RegistrationVisualizer

__all__ = [
    "RegistrationVisualizer",
]
