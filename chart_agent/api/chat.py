"""
Chat API Endpoint

Forwards one user turn, with the caller's conversation history and optional
spreadsheet data, to the chart agent.
"""

from typing import Any, Dict, List, Optional, Union
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field
import json
import logging

from ..agent import AgentResponse, ChartAgent, ConversationMessage, create_chart_agent
from ..config import get_config
from ..security import limiter
from ..utils.error_handling import handle_error, validate_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

# Global chart agent instance
_chart_agent: Optional[ChartAgent] = None


def get_chart_agent() -> ChartAgent:
    """Get or create the chart agent instance."""
    global _chart_agent
    if _chart_agent is None:
        _chart_agent = create_chart_agent()
    return _chart_agent


class ChatRequest(BaseModel):
    """Request model for a chat turn."""

    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(default=None, description="The user's newest message")
    conversation_history: List[ConversationMessage] = Field(
        default_factory=list,
        alias="conversationHistory",
        description="Earlier turns, oldest first",
    )
    excel_data: Optional[Union[str, Dict[str, Any]]] = Field(
        default=None,
        alias="excelData",
        description="Spreadsheet data returned by /api/upload",
    )

    def excel_data_fragment(self) -> Optional[str]:
        if self.excel_data is None or isinstance(self.excel_data, str):
            return self.excel_data
        return json.dumps(self.excel_data, ensure_ascii=False)


@router.post("/chat", response_model=AgentResponse, response_model_exclude_none=True)
@limiter.limit(get_config().CHAT_RATE_LIMIT)
async def chat(
    request: Request,
    chat_request: ChatRequest,
    agent: ChartAgent = Depends(get_chart_agent),
):
    """Process a chat message and return the assistant's reply and chart, if any."""
    validate_message(chat_request.message)

    try:
        logger.info(f"Chat request with {len(chat_request.conversation_history)} earlier turn(s)")
        return await agent.process_request(
            chat_request.message,
            chat_request.conversation_history,
            excel_data=chat_request.excel_data_fragment(),
        )
    except Exception as e:
        logger.error(f"Chat API error: {e}")
        raise handle_error(e)
