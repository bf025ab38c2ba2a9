"""
Chart Tools

The two tools exposed to the model. Each accepts labels, values, title, an
optional unit and a color scheme, and runs validation, configuration building
and rendering through the ChartOrchestrator.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional
import json
import logging

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ..charts import ChartOrchestrator, ChartGenerationError, ChartType, RenderedChartArtifact

logger = logging.getLogger(__name__)

BAR_CHART_TOOL = "create_bar_chart"
LINE_CHART_TOOL = "create_line_chart"

TOOL_CHART_TYPES: Dict[str, ChartType] = {
    BAR_CHART_TOOL: ChartType.BAR,
    LINE_CHART_TOOL: ChartType.LINE,
}

_SUCCESS_MESSAGES: Dict[ChartType, str] = {
    ChartType.BAR: "Staafgrafiek succesvol aangemaakt",
    ChartType.LINE: "Lijngrafiek succesvol aangemaakt",
}


class ChartToolInput(BaseModel):
    """Arguments shared by both chart tools."""
    labels: List[str] = Field(description="X-as labels")
    values: List[float] = Field(description="Y-as waarden, in dezelfde volgorde als de labels")
    title: str = Field(description="Grafiek titel")
    unit: Optional[str] = Field(default=None, description="Meeteenheid")
    colorScheme: Literal["fd", "bnr"] = Field(description="Kleurenschema (FD of BNR)")


@dataclass
class ToolResult:
    """Outcome of one tool invocation."""
    name: str
    success: bool
    payload: Dict[str, Any]
    artifact: Optional[RenderedChartArtifact] = None

    def to_model_content(self) -> str:
        """Serialize for the model; the rendered configuration is left out."""
        visible = {k: v for k, v in self.payload.items() if k != 'renderedConfig'}
        return json.dumps(visible, ensure_ascii=False)


class ChartTools:
    """Executes the chart tools against a ChartOrchestrator."""

    def __init__(self, chart_orchestrator: ChartOrchestrator):
        self.chart_orchestrator = chart_orchestrator

    def create_bar_chart(self, arguments: Mapping[str, Any], save: Optional[bool] = None) -> Dict[str, Any]:
        """Create a bar chart; raises ChartGenerationError with a Dutch message."""
        return self._to_payload(self._create(ChartType.BAR, arguments, save))

    def create_line_chart(self, arguments: Mapping[str, Any], save: Optional[bool] = None) -> Dict[str, Any]:
        """Create a line chart; raises ChartGenerationError with a Dutch message."""
        return self._to_payload(self._create(ChartType.LINE, arguments, save))

    def _create(self, chart_type: ChartType, arguments: Mapping[str, Any], save: Optional[bool]) -> RenderedChartArtifact:
        # the tool decides the chart type, whatever the model put in the arguments
        candidate = {k: v for k, v in arguments.items() if k not in ('chartType', 'chart_type')}
        candidate['chartType'] = chart_type.value
        return self.chart_orchestrator.create_chart(candidate, save=save)

    @staticmethod
    def _to_payload(artifact: RenderedChartArtifact) -> Dict[str, Any]:
        result = artifact.to_tool_result()
        message = _SUCCESS_MESSAGES[artifact.chart_type]
        result['message'] = f"{message}: {artifact.file_path}" if artifact.file_path else message
        result['success'] = True
        return result

    def run(self, name: str, arguments: Mapping[str, Any], save: Optional[bool] = None) -> ToolResult:
        """
        Run a tool by name. Chart errors are returned as a failed ToolResult so
        the model can explain them; they never propagate.

        Raises:
            KeyError: the tool name is unknown
        """
        chart_type = TOOL_CHART_TYPES[name]
        if not isinstance(arguments, Mapping):
            arguments = {}
        try:
            artifact = self._create(chart_type, arguments, save)
        except ChartGenerationError as e:
            logger.warning(f"Tool {name} failed: {e}")
            return ToolResult(name=name, success=False, payload={'success': False, 'error': str(e)})

        return ToolResult(name=name, success=True, payload=self._to_payload(artifact), artifact=artifact)

    def get_tool_definitions(self, save: Optional[bool] = None) -> List[StructuredTool]:
        """LangChain tool definitions to bind to the chat model."""
        def make_tool(name: str, description: str) -> StructuredTool:
            def _invoke(**kwargs: Any) -> str:
                return self.run(name, kwargs, save=save).to_model_content()

            return StructuredTool.from_function(
                func=_invoke,
                name=name,
                description=description,
                args_schema=ChartToolInput,
            )

        return [
            make_tool(BAR_CHART_TOOL, "Maak een staafgrafiek met de opgegeven data in FD- of BNR-kleuren"),
            make_tool(LINE_CHART_TOOL, "Maak een lijngrafiek met de opgegeven data in FD- of BNR-kleuren"),
        ]
