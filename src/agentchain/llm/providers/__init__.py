"""LLM Providers"""
from .base import BaseLLMProvider, ProviderError
from .ollama import OllamaProvider
from .openai_compat import OpenAICompatibleProvider

__all__ = ['BaseLLMProvider', 'ProviderError', 'OllamaProvider', 'OpenAICompatibleProvider']
