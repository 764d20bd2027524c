"""
Model Invoker

The model-call capability used by the orchestrator:
invoke(system_prompt, input, credentials, provider_hint) -> text.
Selects a provider by the agent's preferred provider hint.
"""
import logging
from typing import Dict, Optional, Union

from ..config import Config
from ..models.agent import ModelProvider
from .credentials import CredentialStore
from .providers.base import BaseLLMProvider, ProviderError
from .providers.ollama import OllamaProvider
from .providers.openai_compat import OpenAICompatibleProvider

logger = logging.getLogger("agentchain.llm.invoker")


class ModelInvoker:
    """
    Dispatches model calls to registered providers.

    Usage:
        invoker = ModelInvoker({"ollama": OllamaProvider()}, default_provider="ollama")
        text = await invoker.invoke(agent.system_prompt, "Task: ...", api_key, "grok")
    """

    def __init__(
        self,
        providers: Dict[str, BaseLLMProvider],
        default_provider: str = ModelProvider.OLLAMA.value,
        credential_store: Optional[CredentialStore] = None,
    ):
        self.providers = dict(providers)
        self.default_provider = default_provider
        self.credential_store = credential_store

    @classmethod
    def from_config(cls, credential_store: Optional[CredentialStore] = None) -> "ModelInvoker":
        """Build an invoker with every provider configured from Config"""
        common = {
            "temperature": Config.LLM_TEMPERATURE,
            "max_tokens": Config.LLM_MAX_TOKENS,
            "timeout": Config.LLM_TIMEOUT,
        }
        providers: Dict[str, BaseLLMProvider] = {
            ModelProvider.OLLAMA.value: OllamaProvider(
                base_url=Config.LLM_BASE_URL,
                default_model=Config.DEFAULT_MODEL,
                **common,
            ),
        }
        hosted = {
            ModelProvider.OPENAI: (Config.OPENAI_BASE_URL, Config.OPENAI_MODEL),
            ModelProvider.GROK: (Config.GROK_BASE_URL, Config.GROK_MODEL),
            ModelProvider.MINIMAX: (Config.MINIMAX_BASE_URL, Config.MINIMAX_MODEL),
            ModelProvider.GEMINI: (Config.GEMINI_BASE_URL, Config.GEMINI_MODEL),
        }
        for provider, (base_url, model) in hosted.items():
            providers[provider.value] = OpenAICompatibleProvider(
                name=provider.value, base_url=base_url, model=model, **common
            )

        return cls(providers, default_provider=Config.DEFAULT_PROVIDER, credential_store=credential_store)

    def resolve_provider(self, provider_hint: Union[ModelProvider, str, None] = None) -> BaseLLMProvider:
        """
        Pick the provider for a hint, or the default provider.

        Raises:
            ProviderError: If the hint names no registered provider
        """
        name = provider_hint.value if isinstance(provider_hint, ModelProvider) else provider_hint
        name = name or self.default_provider
        provider = self.providers.get(name)
        if provider is None:
            raise ProviderError(f"Unknown model provider: {name}")
        return provider

    async def invoke(
        self,
        system_prompt: str,
        user_input: str,
        credentials: Optional[str] = None,
        provider_hint: Union[ModelProvider, str, None] = None,
    ) -> str:
        """
        Run one model call.

        When no credentials are given, falls back to the credential store
        entry for the selected provider.

        Raises:
            ProviderError: On any model-call failure
        """
        provider = self.resolve_provider(provider_hint)

        api_key = credentials
        if not api_key and self.credential_store is not None:
            api_key = self.credential_store.api_key_for(provider.name)

        logger.info(f"Invoking provider={provider.name}, input_chars={len(user_input)}")
        return await provider.generate(system_prompt, user_input, api_key=api_key)

    async def health_check(self) -> Dict[str, bool]:
        """Reachability of every registered provider"""
        results = {}
        for name, provider in self.providers.items():
            try:
                results[name] = await provider.health_check()
            except Exception as e:
                logger.warning(f"Health check failed for {name}: {e}")
                results[name] = False
        return results
