import os
import tempfile

# Configuration is read at import time
os.environ["OPENAI_API_KEY"] = "test_key"
os.environ["CHART_OUTPUT_DIR"] = tempfile.mkdtemp(prefix="chart-agent-tests-")

import io
from typing import Any, Dict, List, Optional, Sequence

import httpx
import pytest
import pytest_asyncio
from langchain_core.messages import AIMessage, BaseMessage
from openpyxl import Workbook
from openai import APIError, RateLimitError

from chart_agent.agent import ChartAgent, ChatModel
from chart_agent.charts import ChartOrchestrator


class FakeChatModel(ChatModel):
    """Chat model that replays scripted replies and records what it was sent."""

    def __init__(self, replies: Sequence[Any]):
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    async def generate(self, system_prompt, messages, tools) -> AIMessage:
        self.calls.append({
            "system_prompt": system_prompt,
            "messages": list(messages),
            "tools": [tool.name for tool in tools],
        })
        if not self.replies:
            raise AssertionError("FakeChatModel ran out of scripted replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def tool_call_reply(name: str, args: Dict[str, Any], call_id: str = "call_1", content: str = "") -> AIMessage:
    return AIMessage(content=content, tool_calls=[{"name": name, "args": args, "id": call_id}])


def text_reply(content: str) -> AIMessage:
    return AIMessage(content=content)


def build_workbook(rows: List[List[Any]], sheet_title: Optional[str] = "Sheet1") -> bytes:
    """Build an .xlsx workbook in memory."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet_title:
        sheet.title = sheet_title
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def bar_chart_args():
    return {
        "labels": ["Q1", "Q2"],
        "values": [100, 150],
        "title": "Sales",
        "colorScheme": "fd",
    }


@pytest.fixture
def chart_output_dir(tmp_path):
    return tmp_path / "charts"


@pytest.fixture
def chart_orchestrator(chart_output_dir):
    return ChartOrchestrator(output_dir=chart_output_dir, save_charts=True)


@pytest.fixture
def make_agent(chart_orchestrator):
    """Factory for a ChartAgent driven by scripted replies."""
    def _make(replies: Sequence[Any], max_steps: int = 5):
        model = FakeChatModel(replies)
        return ChartAgent(model, chart_orchestrator, max_steps=max_steps), model
    return _make


@pytest.fixture
def mock_rate_limit_error():
    """RateLimitError with the provider's error format."""
    response = httpx.Response(
        429,
        json={"error": {"message": "Rate limit exceeded", "type": "rate_limit_error"}},
        request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"),
    )
    return RateLimitError("Rate limit exceeded", response=response, body=None)


@pytest.fixture
def mock_api_error():
    """APIError with the provider's error format."""
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return APIError("API error occurred", request=request, body=None)


@pytest_asyncio.fixture
async def async_client():
    """Async client against the FastAPI app."""
    from chart_agent.server import app

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client
