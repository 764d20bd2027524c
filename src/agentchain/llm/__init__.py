"""Agent Chain LLM Integration"""
from .providers.base import BaseLLMProvider, ProviderError
from .providers.ollama import OllamaProvider
from .providers.openai_compat import OpenAICompatibleProvider
from .credentials import CredentialStore, KNOWN_SECRET_KEYS, provider_key_name
from .invoker import ModelInvoker

__all__ = [
    'BaseLLMProvider',
    'ProviderError',
    'OllamaProvider',
    'OpenAICompatibleProvider',
    'CredentialStore',
    'KNOWN_SECRET_KEYS',
    'provider_key_name',
    'ModelInvoker',
]
