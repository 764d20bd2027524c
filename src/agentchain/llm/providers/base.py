"""
Base LLM Provider

Abstract base class for LLM providers.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage


class ProviderError(RuntimeError):
    """Raised when a model call fails"""


class BaseLLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    Implementations:
    - OllamaProvider: Local Ollama models (no API key)
    - OpenAICompatibleProvider: OpenAI, Grok, MiniMax, Gemini
    """

    name: str = "base"
    requires_api_key: bool = False

    @abstractmethod
    def create_llm(self, api_key: Optional[str] = None) -> BaseChatModel:
        """Create a chat model for one call"""
        pass

    async def generate(
        self,
        system_prompt: str,
        user_input: str,
        api_key: Optional[str] = None,
    ) -> str:
        """
        Generate a response for one agent step.

        Args:
            system_prompt: Agent's system prompt
            user_input: Rendered step input
            api_key: Credential for hosted providers

        Returns:
            Response text

        Raises:
            ProviderError: On missing credentials or provider/network failure
        """
        if self.requires_api_key and not api_key:
            raise ProviderError(f"Missing API key for provider '{self.name}'")

        llm = self.create_llm(api_key)
        try:
            response = await llm.ainvoke(build_messages(system_prompt, user_input))
        except Exception as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e

        return extract_content(response)

    async def health_check(self) -> bool:
        """Check if the provider is reachable"""
        return True


def build_messages(system_prompt: str, user_input: str) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))
    messages.append(HumanMessage(content=user_input))
    return messages


def extract_content(response) -> str:
    """Flatten a chat model response to text"""
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, list):
        # Content blocks: keep text parts only
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return content if isinstance(content, str) else str(content)
