"""
Ollama LLM Provider

Provider for local Ollama models. Needs no API key.
"""
import logging
from typing import List, Optional

import httpx
from langchain_ollama import ChatOllama

from .base import BaseLLMProvider

logger = logging.getLogger("agentchain.llm.ollama")


class OllamaProvider(BaseLLMProvider):
    """
    Ollama LLM provider for local models.

    Generation goes through langchain's ChatOllama; health checks and
    model listing hit the Ollama HTTP API directly.
    """

    name = "ollama"
    requires_api_key = False

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        default_model: str = "qwen2.5:7b",
        temperature: float = 0.7,
        max_tokens: int = 2048,
        timeout: float = 300.0,  # 5 minutes for CPU
    ):
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        logger.info(f"OllamaProvider initialized: base_url={self.base_url}, model={self.default_model}")

    def create_llm(self, api_key: Optional[str] = None) -> ChatOllama:
        return ChatOllama(
            base_url=self.base_url,
            model=self.default_model,
            temperature=self.temperature,
            num_predict=self.max_tokens,
            client_kwargs={"timeout": self.timeout},
        )

    async def health_check(self) -> bool:
        """Check if Ollama is available"""
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(10.0)) as client:
                response = await client.get(f"{self.base_url}/api/tags")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def list_models(self) -> List[str]:
        """List available models"""
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(10.0)) as client:
                response = await client.get(f"{self.base_url}/api/tags")
            if response.status_code == 200:
                data = response.json()
                return [m.get("name", "") for m in data.get("models", [])]
        except httpx.HTTPError as e:
            logger.error(f"Failed to list models: {e}")
        return []
