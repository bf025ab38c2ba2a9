"""
Chat Model Client

The language model is used as a capability: system prompt, message history and
tool definitions in, an AIMessage (text plus tool calls) out. Provider errors
are translated into TransportError here so the agent never sees SDK types.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
import logging

from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_core.tools import BaseTool
from langchain_openai import ChatOpenAI
from openai import APIError, RateLimitError

from ..config import get_config
from ..exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


class ChatModel(ABC):
    """Interface of the tool-calling language model."""

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        messages: Sequence[BaseMessage],
        tools: Sequence[BaseTool],
    ) -> AIMessage:
        """Return the model's next message; raises TransportError when the provider fails."""


class OpenAIChatModel(ChatModel):
    """ChatOpenAI with the chart tools bound per call."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        api_key: Optional[str] = None,
    ):
        app_config = get_config()
        api_key = api_key or app_config.OPENAI_API_KEY
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")

        self.model_name = model_name or app_config.OPENAI_MODEL
        self.llm = ChatOpenAI(
            model=self.model_name,
            temperature=app_config.OPENAI_TEMPERATURE if temperature is None else temperature,
            api_key=api_key,
            max_retries=0,
        )

    async def generate(
        self,
        system_prompt: str,
        messages: Sequence[BaseMessage],
        tools: Sequence[BaseTool],
    ) -> AIMessage:
        llm_with_tools = self.llm.bind_tools(list(tools))
        try:
            reply = await llm_with_tools.ainvoke([SystemMessage(content=system_prompt), *messages])
        except RateLimitError as e:
            logger.error(f"OpenAI rate limit exceeded: {e}")
            raise TransportError(f"OpenAI API rate limit exceeded: {e}") from e
        except APIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise TransportError(f"OpenAI API error: {e}") from e

        if not isinstance(reply, AIMessage):
            raise TransportError(f"Unexpected model output of type {type(reply).__name__}")

        logger.debug(f"Model replied with {len(reply.tool_calls)} tool call(s)")
        return reply
