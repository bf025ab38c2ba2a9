"""
Agent Package - Conversational Chart Requests

Connects the language model to the chart tools.

Usage:
    from chart_agent.agent import ChartAgent, OpenAIChatModel
    from chart_agent.charts import ChartOrchestrator

    agent = ChartAgent(OpenAIChatModel(), ChartOrchestrator())
    response = await agent.process_request("Staafgrafiek: Q1=100, Q2=150", history)
"""

from .agent_core import (
    AgentResponse,
    ChartAgent,
    ConversationMessage,
    GENERIC_FAILURE_MESSAGE,
    create_chart_agent,
    to_langchain_messages,
)
from .llm_client import ChatModel, OpenAIChatModel
from .prompts import SYSTEM_PROMPT, get_user_message
from .tools import ChartTools, ChartToolInput, ToolResult, BAR_CHART_TOOL, LINE_CHART_TOOL

__all__ = [
    'AgentResponse',
    'ChartAgent',
    'ConversationMessage',
    'GENERIC_FAILURE_MESSAGE',
    'create_chart_agent',
    'to_langchain_messages',
    'ChatModel',
    'OpenAIChatModel',
    'SYSTEM_PROMPT',
    'get_user_message',
    'ChartTools',
    'ChartToolInput',
    'ToolResult',
    'BAR_CHART_TOOL',
    'LINE_CHART_TOOL',
]
