"""
Chat model gateway
Wraps the OpenAI-compatible chat model behind a per-session chat context.
"""

import logging
from typing import List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_openai import ChatOpenAI

from interview_api import config
from interview_api.core.errors import ConfigurationError, ServiceUnavailableError

logger = logging.getLogger(__name__)


def create_llm_from_config(
    api_key: str,
    base_url: Optional[str],
    model: str,
    temperature: float = 0.8,
    max_tokens: int = 1024
) -> ChatOpenAI:
    """
    Create a chat model client

    Args:
        api_key: API Key
        base_url: API Base URL (None for the library default)
        model: Model name
        temperature: Sampling temperature
        max_tokens: Maximum tokens per reply

    Returns:
        ChatOpenAI: LLM instance
    """
    return ChatOpenAI(
        temperature=temperature,
        max_tokens=max_tokens,
        model_name=model,
        api_key=api_key,
        base_url=base_url
    )


def describe_llm_error(error: Exception) -> str:
    """Turn a client exception into a short, caller-facing reason."""
    error_str = str(error).lower()

    if "401" in error_str or "unauthorized" in error_str or "invalid api key" in error_str or "authentication" in error_str:
        return "Model API key was rejected, check LLM_API_KEY"
    if "404" in error_str or "not found" in error_str or "model" in error_str and "does not exist" in error_str:
        return "Model not found or wrong API address, check LLM_MODEL and LLM_BASE_URL"
    if "timeout" in error_str or "timed out" in error_str:
        return "Model API timed out"
    if "connection" in error_str or "connect" in error_str or "network" in error_str:
        return "Could not connect to the model API, check LLM_BASE_URL"
    if "rate limit" in error_str or "429" in error_str:
        return "Model API rate limit reached, retry later"
    if "insufficient" in error_str or "quota" in error_str or "balance" in error_str:
        return "Model API quota exhausted"
    return f"Model API call failed: {str(error)[:100]}"


def _reply_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Some providers return a list of content parts
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class ChatSession:
    """
    Stateful chat context owned by exactly one interview session.

    The full message list is kept here and resent on every call, so callers
    only ever pass the newest message.
    """

    def __init__(self, llm: ChatOpenAI):
        self._llm = llm
        self._messages: List[BaseMessage] = []

    def __deepcopy__(self, memo):
        raise TypeError("ChatSession cannot be copied")

    def __copy__(self):
        raise TypeError("ChatSession cannot be copied")

    @property
    def turn_count(self) -> int:
        return len(self._messages)

    async def send(self, text: str) -> str:
        """
        Send one user message and return the model's reply text.

        Raises:
            ServiceUnavailableError: The call failed or the reply was empty
        """
        outgoing = HumanMessage(content=text)
        try:
            response = await self._llm.ainvoke(self._messages + [outgoing])
        except Exception as e:
            logger.error(f"Chat model call failed: {e}", exc_info=True)
            raise ServiceUnavailableError(describe_llm_error(e)) from e

        reply = _reply_text(response)
        if not reply or not reply.strip():
            raise ServiceUnavailableError("Model API returned an empty reply")

        # Only successful exchanges become part of the context
        self._messages.append(outgoing)
        self._messages.append(AIMessage(content=reply))
        return reply


class LLMGateway:
    """Opens chat contexts against the configured model (credential checked lazily)."""

    def open_chat(self) -> ChatSession:
        """
        Open a new chat context

        Returns:
            ChatSession: Fresh context with no history

        Raises:
            ConfigurationError: LLM_API_KEY is not set
        """
        api_key = config.get_llm_api_key()
        if not api_key:
            raise ConfigurationError("LLM_API_KEY is not set. Add it to your .env file.")

        llm = create_llm_from_config(
            api_key=api_key,
            base_url=config.get_llm_base_url(),
            model=config.get_llm_model(),
            temperature=config.get_llm_temperature(),
            max_tokens=config.get_llm_max_tokens()
        )
        return ChatSession(llm)
