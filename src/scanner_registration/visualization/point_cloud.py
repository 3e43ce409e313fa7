"""
Registration Visualization Tools

Interactive 3-D view of a registered beacon map and scanner positions.
"""

from typing import TYPE_CHECKING

import numpy as np
import plotly.graph_objects as go

if TYPE_CHECKING:
    from ..alignment.registration import RegistrationResult


class RegistrationVisualizer:
    """Plotly view of beacons and scanner positions in the global frame."""

    def __init__(self, renderer: str = 'browser'):
        self.renderer = renderer

    def build_figure(self, result: "RegistrationResult", title: str = "Registered scanners") -> go.Figure:
        beacons = np.array(sorted(b.as_tuple() for b in result.beacons), dtype=np.int64).reshape(-1, 3)
        positions = np.array([s.position.as_tuple() for s in result.scanners], dtype=np.int64).reshape(-1, 3)
        labels = [f"scanner {s.index}" for s in result.scanners]

        fig = go.Figure()
        fig.add_trace(go.Scatter3d(
            x=beacons[:, 0], y=beacons[:, 1], z=beacons[:, 2],
            mode='markers',
            marker=dict(size=2, color='steelblue'),
            name=f"beacons ({len(beacons)})",
        ))
        fig.add_trace(go.Scatter3d(
            x=positions[:, 0], y=positions[:, 1], z=positions[:, 2],
            mode='markers+text',
            marker=dict(size=5, color='crimson', symbol='diamond'),
            text=labels,
            name=f"scanners ({len(positions)})",
        ))
        fig.update_layout(
            title=f"{title} (max scanner distance {result.max_scanner_distance})",
            scene=dict(xaxis_title='X', yaxis_title='Y', zaxis_title='Z', aspectmode='data'),
        )
        return fig

    def show(self, result: "RegistrationResult", title: str = "Registered scanners") -> None:
        self.build_figure(result, title=title).show(renderer=self.renderer)
