"""
Chart Generator

Builds the declarative Plotly chart configuration for a validated chart
specification in the requested brand colors. The output is a plain dictionary
(``{"data": [...], "layout": {...}}``) that front-ends hand to Plotly.js.
"""

from typing import Dict, Any, Callable
import logging

import plotly.graph_objects as go

from .colors import BrandColors
from .models import ChartType, ChartSpecification, ChartSettings
from .exceptions import ChartRenderingError

logger = logging.getLogger(__name__)


def color_with_opacity(color: str, opacity: float) -> str:
    """Turn a ``#rgb`` / ``#rrggbb`` color into an ``rgba(...)`` string."""
    hex_value = color.lstrip('#')
    if len(hex_value) == 3:
        hex_value = ''.join(ch * 2 for ch in hex_value)
    if len(hex_value) != 6:
        raise ChartRenderingError(f"Ongeldige kleur: {color}")
    red, green, blue = (int(hex_value[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({red}, {green}, {blue}, {opacity})"


class ChartGenerator:
    """Generates chart configurations using Plotly graph objects."""

    def __init__(self, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()

    def build_options(self, spec: ChartSpecification, colors: BrandColors) -> Dict[str, Any]:
        """
        Build the chart configuration for a specification.

        Args:
            spec: Validated chart specification
            colors: Brand colors to style the chart with

        Returns:
            Plotly figure dictionary
        """
        trace_builders: Dict[ChartType, Callable[[ChartSpecification, BrandColors], go.BaseTraceType]] = {
            ChartType.BAR: self._generate_bar_trace,
            ChartType.LINE: self._generate_line_trace,
        }

        builder = trace_builders.get(spec.chart_type)
        if not builder:
            raise ChartRenderingError(f"Niet ondersteund grafiektype: {spec.chart_type}")

        try:
            fig = go.Figure(data=[builder(spec, colors)], layout=self._base_layout(spec, colors))
            if spec.chart_type == ChartType.BAR:
                fig.update_layout(bargap=round(1 - self.settings.bar_width, 2), hovermode="x")
            else:
                fig.update_layout(hovermode="x unified")
            return fig.to_dict()
        except ValueError as e:
            logger.error(f"Error building {spec.chart_type.value} chart options: {str(e)}")
            raise ChartRenderingError(str(e), chart_type=spec.chart_type.value)

    def _axis_style(self, colors: BrandColors) -> Dict[str, Any]:
        return {
            'showline': True,
            'linecolor': colors.content,
            'ticks': 'outside',
            'tickcolor': colors.content,
            'tickfont': {'color': colors.content, 'size': self.settings.axis_font_size},
        }

    def _base_layout(self, spec: ChartSpecification, colors: BrandColors) -> go.Layout:
        """Layout shared by every chart kind."""
        s = self.settings
        return go.Layout(
            template="none",
            width=s.width,
            height=s.height,
            paper_bgcolor=colors.background,
            plot_bgcolor=colors.background,
            margin={'l': s.margin_left, 'r': s.margin_right, 't': s.margin_top, 'b': s.margin_bottom},
            showlegend=False,
            title={
                'text': spec.title,
                'x': 0.5,
                'xanchor': 'center',
                'font': {'color': colors.content, 'size': s.title_font_size},
            },
            xaxis={
                'type': 'category',
                'tickangle': -s.tick_angle,
                'showgrid': False,
                **self._axis_style(colors),
            },
            yaxis={
                'type': 'linear',
                'rangemode': 'tozero',
                'title': {
                    'text': spec.unit or '',
                    'font': {'color': colors.content, 'size': s.axis_font_size},
                },
                'showgrid': True,
                'gridcolor': color_with_opacity(colors.content, s.grid_opacity),
                'zeroline': False,
                **self._axis_style(colors),
            },
        )

    def _generate_bar_trace(self, spec: ChartSpecification, colors: BrandColors) -> go.Bar:
        """Bar series filled with the primary brand color."""
        return go.Bar(
            x=list(spec.labels),
            y=list(spec.values),
            name=spec.title,
            marker={'color': colors.primary},
        )

    def _generate_line_trace(self, spec: ChartSpecification, colors: BrandColors) -> go.Scatter:
        """Smoothed line series with a circular marker on every point."""
        return go.Scatter(
            x=list(spec.labels),
            y=list(spec.values),
            name=spec.title,
            mode='lines+markers',
            line={'color': colors.primary, 'width': self.settings.line_width, 'shape': 'spline'},
            marker={'color': colors.primary, 'size': self.settings.marker_size, 'symbol': 'circle'},
        )

    def get_supported_chart_types(self) -> list:
        """Get list of supported chart types."""
        return [chart_type.value for chart_type in ChartType]
