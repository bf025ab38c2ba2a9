"""
Chart Generation Data Models

Internal data models for the chart generation system: the closed chart-type and
color-scheme enums, the immutable chart specification, and the rendered artifact
handed back to the tool layer.
"""

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError


class ChartType(str, Enum):
    """Supported chart types."""
    BAR = "bar"
    LINE = "line"


class ColorScheme(str, Enum):
    """Supported brand color schemes."""
    FD = "fd"
    BNR = "bnr"


class ChartSpecification(BaseModel):
    """Validated, immutable description of what to draw."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    labels: Tuple[str, ...] = Field(min_length=1, description="X-as labels")
    values: Tuple[float, ...] = Field(min_length=1, description="Y-as waarden")
    title: str = Field(description="Grafiek titel")
    unit: Optional[str] = Field(default=None, description="Meeteenheid")
    chart_type: ChartType = Field(alias="chartType")
    color_scheme: ColorScheme = Field(alias="colorScheme")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape used on the wire."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


def _pick(candidate: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in candidate:
            return candidate[key]
    return None


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(float(value))


def validate_chart_specification(candidate: Mapping[str, Any]) -> ChartSpecification:
    """
    Validate a candidate chart specification.

    Accepts both the camelCase wire names (``chartType``, ``colorScheme``) and
    their snake_case equivalents.

    Args:
        candidate: Mapping with labels, values, title, unit, chartType and colorScheme

    Returns:
        An immutable ChartSpecification

    Raises:
        ValidationError: with a Dutch message describing the first problem found
    """
    if not isinstance(candidate, Mapping):
        raise ValidationError("Grafiekdata moet een object zijn")

    labels = _pick(candidate, "labels")
    values = _pick(candidate, "values")
    chart_type = _pick(candidate, "chartType", "chart_type")

    if not isinstance(labels, (list, tuple)) or len(labels) == 0:
        raise ValidationError("Labels mogen niet leeg zijn", field="labels", chart_type=chart_type)
    if not isinstance(values, (list, tuple)) or len(values) == 0:
        raise ValidationError("Waarden mogen niet leeg zijn", field="values", chart_type=chart_type)
    if len(labels) != len(values):
        raise ValidationError(
            f"Aantal labels ({len(labels)}) komt niet overeen met aantal waarden ({len(values)})",
            field="values",
            chart_type=chart_type,
        )

    for index, value in enumerate(values):
        if not _is_finite_number(value):
            raise ValidationError(
                f"Waarde op positie {index + 1} is geen geldig getal: {value!r}",
                field="values",
                chart_type=chart_type,
            )

    try:
        chart_type_enum = ChartType(chart_type)
    except ValueError:
        raise ValidationError(
            f"Ongeldig grafiektype: {chart_type!r}. Toegestaan: bar, line",
            field="chartType",
        )

    color_scheme = _pick(candidate, "colorScheme", "color_scheme")
    try:
        color_scheme_enum = ColorScheme(color_scheme)
    except ValueError:
        raise ValidationError(
            f"Ongeldig kleurenschema: {color_scheme!r}. Toegestaan: fd, bnr",
            field="colorScheme",
            chart_type=chart_type_enum.value,
        )

    title = _pick(candidate, "title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Titel is verplicht", field="title", chart_type=chart_type_enum.value)

    unit = _pick(candidate, "unit")
    if unit is not None and not isinstance(unit, str):
        raise ValidationError("Meeteenheid moet tekst zijn", field="unit", chart_type=chart_type_enum.value)

    try:
        return ChartSpecification(
            labels=tuple(str(label) for label in labels),
            values=tuple(float(value) for value in values),
            title=title.strip(),
            unit=unit.strip() if unit and unit.strip() else None,
            chart_type=chart_type_enum,
            color_scheme=color_scheme_enum,
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Ongeldige grafiekdata: {e.errors()[0]['msg']}", chart_type=chart_type_enum.value)


class ChartSettings:
    """Configuration settings for chart generation."""

    def __init__(self):
        # Canvas
        self.width = 800
        self.height = 600
        self.margin_left = 80
        self.margin_right = 40
        self.margin_top = 80
        self.margin_bottom = 80

        # Typography
        self.title_font_size = 18
        self.axis_font_size = 12
        self.tick_angle = 45

        # Series styling
        self.bar_width = 0.6  # fraction of the category band
        self.line_width = 3
        self.marker_size = 8
        self.grid_opacity = 0.2


@dataclass(frozen=True)
class RenderedChartArtifact:
    """Result of chart generation for one tool invocation."""
    specification: ChartSpecification
    options: Dict[str, Any]
    svg: Optional[str] = None
    file_path: Optional[str] = None

    @property
    def chart_type(self) -> ChartType:
        return self.specification.chart_type

    def to_tool_result(self) -> Dict[str, Any]:
        """Convert to the dictionary returned from a chart tool."""
        result = self.specification.to_dict()
        result['renderedConfig'] = self.options
        if self.file_path:
            result['filePath'] = self.file_path
        return result
