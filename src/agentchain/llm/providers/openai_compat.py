"""
OpenAI-Compatible LLM Provider

Hosted providers that expose an OpenAI-compatible chat completions API:
OpenAI, Grok (xAI), MiniMax and Gemini.
"""
import logging
from typing import Optional

from langchain_openai import ChatOpenAI

from .base import BaseLLMProvider

logger = logging.getLogger("agentchain.llm.openai_compat")


class OpenAICompatibleProvider(BaseLLMProvider):
    """
    Hosted provider reached through langchain's ChatOpenAI.

    The API key is supplied per call, so one provider instance serves
    callers with different credentials.
    """

    requires_api_key = True

    def __init__(
        self,
        name: str,
        base_url: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        timeout: float = 300.0,
    ):
        self.name = name
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        logger.info(f"{name} provider initialized: base_url={base_url}, model={model}")

    def create_llm(self, api_key: Optional[str] = None) -> ChatOpenAI:
        return ChatOpenAI(
            model=self.model,
            base_url=self.base_url,
            api_key=api_key,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
            max_retries=0,
        )
