"""
Charts Package - Branded Chart Generation

This package turns validated chart specifications into Plotly chart
configurations and SVG artifacts in FD or BNR brand colors.

Core Components:
- ChartOrchestrator: Main interface for chart generation
- ChartGenerator: Builds the declarative Plotly configuration
- SvgRenderer: Draws the persisted SVG artifact

Usage:
    from chart_agent.charts import ChartOrchestrator

    orchestrator = ChartOrchestrator(output_dir="./public/charts")
    artifact = orchestrator.create_bar_chart(
        {"labels": ["Q1", "Q2"], "values": [100, 150], "title": "Omzet"}, "fd"
    )
"""

from .orchestrator import ChartOrchestrator
from .generator import ChartGenerator
from .renderer import SvgRenderer
from .colors import BrandColors, BRAND_COLORS, get_brand_colors
from .models import (
    ChartType,
    ColorScheme,
    ChartSettings,
    ChartSpecification,
    RenderedChartArtifact,
    validate_chart_specification,
)
from .exceptions import ChartGenerationError, ValidationError, ChartRenderingError

__all__ = [
    'ChartOrchestrator',
    'ChartGenerator',
    'SvgRenderer',
    'BrandColors',
    'BRAND_COLORS',
    'get_brand_colors',
    'ChartType',
    'ColorScheme',
    'ChartSettings',
    'ChartSpecification',
    'RenderedChartArtifact',
    'validate_chart_specification',
    'ChartGenerationError',
    'ValidationError',
    'ChartRenderingError',
]
