"""
Chart Agent

Drives one request/response cycle: wraps the user's input, sends it with the
caller's conversation history and the two chart tools to the model, executes
the tool calls the model asks for, and returns an AgentResponse.

The agent keeps no state between requests. The caller owns the conversation
history and passes it back on every turn; remembered preferences such as the
color scheme live in that history.
"""

from typing import Any, List, Literal, Mapping, Optional, Sequence, Tuple, Union
import asyncio
import logging

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from pydantic import BaseModel, ConfigDict, Field

from ..charts import ChartOrchestrator, ChartSpecification, RenderedChartArtifact
from ..config import get_config
from ..exceptions import TransportError
from .llm_client import ChatModel, OpenAIChatModel
from .prompts import SYSTEM_PROMPT, get_user_message
from .tools import ChartTools, TOOL_CHART_TYPES

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Er is een fout opgetreden bij het verwerken van je verzoek."
STEP_LIMIT_MESSAGE = "Het verzoek kon niet binnen het maximale aantal stappen worden afgerond."
CHART_CREATED_MESSAGE = "De grafiek is aangemaakt."


class ConversationMessage(BaseModel):
    """One turn of the caller-owned conversation history."""
    role: Literal["system", "user", "assistant"]
    content: str


class AgentResponse(BaseModel):
    """Response returned to the UI or CLI."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    chart_data: Optional[ChartSpecification] = Field(default=None, alias="chartData")
    chart_path: Optional[str] = Field(default=None, alias="chartPath")
    success: bool
    error: Optional[str] = None


HistoryItem = Union[ConversationMessage, Mapping[str, Any]]


def to_langchain_messages(history: Sequence[HistoryItem]) -> List[BaseMessage]:
    """Convert caller history into LangChain messages."""
    message_types = {
        "system": SystemMessage,
        "user": HumanMessage,
        "assistant": AIMessage,
    }
    messages: List[BaseMessage] = []
    for item in history:
        turn = item if isinstance(item, ConversationMessage) else ConversationMessage.model_validate(item)
        messages.append(message_types[turn.role](content=turn.content))
    return messages


def _message_text(message: AIMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content.strip()
    # content blocks
    parts = [block.get("text", "") if isinstance(block, dict) else str(block) for block in content]
    return "".join(parts).strip()


class ChartAgent:
    """Conversational orchestrator around the two chart tools."""

    def __init__(self, model: ChatModel, chart_orchestrator: ChartOrchestrator, max_steps: int = 5):
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        self.model = model
        self.chart_orchestrator = chart_orchestrator
        self.chart_tools = ChartTools(chart_orchestrator)
        self.max_steps = max_steps

    async def process_request(
        self,
        user_message: str,
        conversation_history: Sequence[HistoryItem] = (),
        excel_data: Optional[str] = None,
        save_to_disk: Optional[bool] = None,
    ) -> AgentResponse:
        """
        Process a single chat request.

        Args:
            user_message: The user's newest input
            conversation_history: Earlier turns, oldest first, owned by the caller
            excel_data: Serialized spreadsheet data to attach to this turn
            save_to_disk: Override whether rendered charts are written to disk

        Returns:
            AgentResponse; ``success`` is False only when the request itself failed
        """
        try:
            messages = to_langchain_messages(conversation_history)
            messages.append(HumanMessage(content=get_user_message(user_message, excel_data)))

            message, artifact = await self._run(messages, save_to_disk)

            return AgentResponse(
                message=message,
                chart_data=artifact.specification if artifact else None,
                chart_path=artifact.file_path if artifact else None,
                success=True,
            )
        except Exception as e:
            logger.error(f"Agent error: {type(e).__name__}: {e}", exc_info=True)
            return AgentResponse(
                message=GENERIC_FAILURE_MESSAGE,
                success=False,
                error=str(e) or type(e).__name__,
            )

    async def _run(
        self,
        messages: List[BaseMessage],
        save: Optional[bool],
    ) -> Tuple[str, Optional[RenderedChartArtifact]]:
        """Model/tool loop, capped at ``max_steps`` model calls."""
        tools = self.chart_tools.get_tool_definitions(save=save)
        latest_artifact: Optional[RenderedChartArtifact] = None
        last_text = ""

        for step in range(1, self.max_steps + 1):
            reply = await self.model.generate(SYSTEM_PROMPT, messages, tools)
            text = _message_text(reply)
            if text:
                last_text = text

            if reply.invalid_tool_calls:
                names = ", ".join(str(call.get("name")) for call in reply.invalid_tool_calls)
                raise TransportError(f"Model sent malformed tool call(s): {names}")

            if not reply.tool_calls:
                logger.info(f"Model finished after {step} step(s)")
                final_text = text or last_text or (CHART_CREATED_MESSAGE if latest_artifact else "")
                if not final_text:
                    raise TransportError("Model returned an empty reply")
                return final_text, latest_artifact

            messages.append(reply)
            for index, call in enumerate(reply.tool_calls):
                name = call.get("name")
                if name not in TOOL_CHART_TYPES:
                    raise TransportError(f"Model called unknown tool: {name!r}")

                logger.info(f"Step {step}: executing {name}")
                # rendering and the file write run off the event loop
                result = await asyncio.to_thread(self.chart_tools.run, name, call.get("args") or {}, save=save)
                if result.success:
                    latest_artifact = result.artifact

                messages.append(ToolMessage(
                    content=result.to_model_content(),
                    tool_call_id=call.get("id") or f"call_{step}_{index}",
                ))

        logger.warning(f"Tool loop stopped after {self.max_steps} steps")
        return last_text or STEP_LIMIT_MESSAGE, latest_artifact


def create_chart_agent(
    model: Optional[ChatModel] = None,
    chart_orchestrator: Optional[ChartOrchestrator] = None,
) -> ChartAgent:
    """Build a ChartAgent from the global configuration."""
    app_config = get_config()
    if model is None:
        model = OpenAIChatModel()
    if chart_orchestrator is None:
        chart_orchestrator = ChartOrchestrator(
            output_dir=app_config.CHART_OUTPUT_DIR,
            save_charts=app_config.SAVE_CHARTS,
        )
    return ChartAgent(model, chart_orchestrator, max_steps=app_config.MAX_TOOL_STEPS)
