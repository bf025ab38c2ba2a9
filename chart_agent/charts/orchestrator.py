"""
Chart Orchestrator

Main coordinator for the chart generation pipeline.
Manages the flow from a candidate specification to a rendered, optionally
persisted chart: validate, build the configuration, render SVG, save.
"""

from typing import Dict, Any, Mapping, Optional, Union
from pathlib import Path
import logging
import time

from .colors import get_brand_colors
from .exceptions import ChartRenderingError
from .generator import ChartGenerator
from .models import (
    ChartSettings,
    ChartSpecification,
    ChartType,
    ColorScheme,
    RenderedChartArtifact,
    validate_chart_specification,
)
from .renderer import SvgRenderer

logger = logging.getLogger(__name__)


class ChartOrchestrator:
    """Main class that orchestrates the chart generation process."""

    def __init__(
        self,
        output_dir: Union[str, Path] = "./public/charts",
        save_charts: bool = True,
        settings: ChartSettings = None,
    ):
        self.output_dir = Path(output_dir)
        self.save_charts = save_charts
        self.settings = settings or ChartSettings()
        self.generator = ChartGenerator(self.settings)
        self.renderer = SvgRenderer(self.settings)

    def create_chart(self, candidate: Mapping[str, Any], save: Optional[bool] = None) -> RenderedChartArtifact:
        """
        Validate, build, render and optionally persist a chart.

        Args:
            candidate: Unvalidated chart specification (labels, values, title, unit, chartType, colorScheme)
            save: Override the orchestrator's ``save_charts`` default

        Returns:
            RenderedChartArtifact with the configuration, SVG and file path

        Raises:
            ValidationError: the candidate is not a valid chart specification
            ChartRenderingError: building, rendering or writing the chart failed
        """
        spec = validate_chart_specification(candidate)
        return self.render_specification(spec, save=save)

    def render_specification(self, spec: ChartSpecification, save: Optional[bool] = None) -> RenderedChartArtifact:
        """Render an already validated specification."""
        colors = get_brand_colors(spec.color_scheme)
        options = self.generator.build_options(spec, colors)
        svg = self.renderer.render(spec, colors)

        should_save = self.save_charts if save is None else save
        file_path = self._save_chart(svg, spec.chart_type) if should_save else None

        logger.info(
            f"Rendered {spec.chart_type.value} chart '{spec.title}' "
            f"({len(spec.labels)} points, scheme {spec.color_scheme.value})"
            + (f" -> {file_path}" if file_path else "")
        )
        return RenderedChartArtifact(specification=spec, options=options, svg=svg, file_path=file_path)

    def create_bar_chart(self, data: Mapping[str, Any], color_scheme: Union[ColorScheme, str], save: Optional[bool] = None) -> RenderedChartArtifact:
        """Create a bar chart from labels/values/title/unit in the given color scheme."""
        return self.create_chart({**data, 'chartType': ChartType.BAR.value, 'colorScheme': color_scheme}, save=save)

    def create_line_chart(self, data: Mapping[str, Any], color_scheme: Union[ColorScheme, str], save: Optional[bool] = None) -> RenderedChartArtifact:
        """Create a line chart from labels/values/title/unit in the given color scheme."""
        return self.create_chart({**data, 'chartType': ChartType.LINE.value, 'colorScheme': color_scheme}, save=save)

    def _save_chart(self, svg: str, chart_type: ChartType) -> str:
        """
        Write the SVG to ``{chart_type}-{epoch_ms}.svg``.

        The file is created exclusively, so concurrent writers that land on the
        same millisecond get a numbered suffix instead of overwriting each other.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ChartRenderingError(f"Uitvoermap kan niet worden aangemaakt: {e}", chart_type=chart_type.value)

        stem = f"{chart_type.value}-{int(time.time() * 1000)}"
        attempt = 0
        while True:
            filename = f"{stem}.svg" if attempt == 0 else f"{stem}-{attempt}.svg"
            file_path = self.output_dir / filename
            try:
                handle = open(file_path, 'x', encoding='utf-8')
            except FileExistsError:
                attempt += 1
                continue
            except OSError as e:
                logger.error(f"Failed to create chart file {file_path}: {e}")
                raise ChartRenderingError(f"Grafiek kan niet worden opgeslagen: {e}", chart_type=chart_type.value)

            try:
                with handle:
                    handle.write(svg)
            except OSError as e:
                # no partial artifacts
                file_path.unlink(missing_ok=True)
                logger.error(f"Failed to write chart file {file_path}: {e}")
                raise ChartRenderingError(f"Grafiek kan niet worden opgeslagen: {e}", chart_type=chart_type.value)
            return str(file_path)

    def get_chart_capabilities(self) -> Dict[str, Any]:
        """
        Get information about chart generation capabilities.

        Returns:
            Dictionary with capability information
        """
        return {
            "supported_chart_types": self.generator.get_supported_chart_types(),
            "color_schemes": [scheme.value for scheme in ColorScheme],
            "output_dir": str(self.output_dir),
            "save_charts": self.save_charts,
        }
