"""
SVG Renderer

Draws the persisted chart artifact with matplotlib. The figure is created
without pyplot and works headless. Renders are serialized because
``matplotlib.rc_context`` swaps the global rcParams for the duration of a render.
"""

from typing import List, Sequence, Tuple
import io
import logging
import threading

import matplotlib
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path

from .colors import BrandColors
from .models import ChartType, ChartSpecification, ChartSettings
from .exceptions import ChartRenderingError

logger = logging.getLogger(__name__)

LINE_SERIES_ID = "series-line"

_render_lock = threading.Lock()


def smooth_line_path(xs: Sequence[float], ys: Sequence[float]) -> Path:
    """
    Catmull-Rom curve through every point, as cubic Bezier segments.

    The curve passes through each data point; end points reuse themselves
    as the missing neighbour.
    """
    points: List[Tuple[float, float]] = list(zip(xs, ys))
    vertices = [points[0]]
    codes = [Path.MOVETO]
    for i in range(len(points) - 1):
        p0 = points[i - 1] if i > 0 else points[i]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[i + 2] if i + 2 < len(points) else p2
        vertices.extend([
            (p1[0] + (p2[0] - p0[0]) / 6, p1[1] + (p2[1] - p0[1]) / 6),
            (p2[0] - (p3[0] - p1[0]) / 6, p2[1] - (p3[1] - p1[1]) / 6),
            p2,
        ])
        codes.extend([Path.CURVE4] * 3)
    return Path(vertices, codes)


class SvgRenderer:
    """Renders chart specifications to SVG markup."""

    def __init__(self, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()

    def render(self, spec: ChartSpecification, colors: BrandColors) -> str:
        """Render a chart to an SVG string; raises ChartRenderingError on failure."""
        s = self.settings
        try:
            with _render_lock, matplotlib.rc_context({'svg.hashsalt': 'chart-agent', 'svg.fonttype': 'none'}):
                fig = Figure(figsize=(s.width / 100, s.height / 100), dpi=100)
                fig.patch.set_facecolor(colors.background)
                ax = fig.add_subplot()
                self._draw(ax, spec, colors)
                fig.tight_layout()

                buffer = io.StringIO()
                fig.savefig(buffer, format='svg', facecolor=colors.background, metadata={'Date': None})
                return buffer.getvalue()
        except ChartRenderingError:
            raise
        except Exception as e:
            logger.error(f"Error rendering {spec.chart_type.value} chart to SVG: {str(e)}")
            raise ChartRenderingError(str(e), chart_type=spec.chart_type.value)

    def _draw(self, ax, spec: ChartSpecification, colors: BrandColors) -> None:
        s = self.settings
        positions = list(range(len(spec.labels)))

        ax.set_facecolor(colors.background)
        if spec.chart_type == ChartType.BAR:
            ax.bar(positions, spec.values, width=s.bar_width, color=colors.primary, zorder=3)
        elif spec.chart_type == ChartType.LINE:
            if len(positions) > 1:
                ax.add_patch(PathPatch(
                    smooth_line_path(positions, spec.values),
                    fill=False,
                    edgecolor=colors.primary,
                    linewidth=s.line_width,
                    capstyle='round',
                    joinstyle='round',
                    gid=LINE_SERIES_ID,
                    zorder=3,
                ))
            ax.plot(
                positions,
                spec.values,
                linestyle='none',
                color=colors.primary,
                marker='o',
                markersize=s.marker_size,
                zorder=4,
            )
        else:
            raise ChartRenderingError(f"Niet ondersteund grafiektype: {spec.chart_type}")

        ax.set_title(spec.title, color=colors.content, fontsize=s.title_font_size, fontweight='bold')
        ax.set_xticks(positions)
        ax.set_xticklabels(spec.labels, rotation=s.tick_angle, ha='right')
        if spec.unit:
            ax.set_ylabel(spec.unit, color=colors.content, fontsize=s.axis_font_size)

        low = min(0.0, min(spec.values))
        high = max(0.0, max(spec.values))
        if low == high:
            high = low + 1.0
        padding = (high - low) * 0.05
        ax.set_ylim(low - padding if low < 0 else 0.0, high + padding)

        ax.tick_params(colors=colors.content, labelsize=s.axis_font_size)
        for side in ('top', 'right'):
            ax.spines[side].set_visible(False)
        for side in ('left', 'bottom'):
            ax.spines[side].set_color(colors.content)
        ax.yaxis.grid(True, color=colors.content, alpha=s.grid_opacity, zorder=0)
