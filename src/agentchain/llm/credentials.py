"""
Credential Store

In-memory map of credential references (API keys, service hosts),
seeded from the environment. Exported and restored by ProfileService.
"""
import logging
import os
from typing import Dict, Optional

logger = logging.getLogger("agentchain.llm.credentials")

# Keys carried in a profile document
KNOWN_SECRET_KEYS = [
    "openai_api_key",
    "anthropic_api_key",
    "gemini_api_key",
    "grok_api_key",
    "minimax_api_key",
    "tavily_api_key",
    "cohere_api_key",
    "qdrant_api_key",
    "qdrant_host",
    "qdrant_collection",
]


def provider_key_name(provider: str) -> str:
    """Credential key used for a model provider: grok -> grok_api_key"""
    return f"{provider}_api_key"


class CredentialStore:
    """
    Credential references by key.

    Usage:
        store = CredentialStore.from_env()
        store.set("grok_api_key", "xai-...")
        key = store.api_key_for("grok")
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    @classmethod
    def from_env(cls) -> "CredentialStore":
        """Seed from upper-case environment variables (GROK_API_KEY, ...)"""
        return cls({key: os.getenv(key.upper(), "") for key in KNOWN_SECRET_KEYS})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: Optional[str]):
        """Store a value; empty values remove the key"""
        if value:
            self._values[key] = value
        else:
            self._values.pop(key, None)

    def api_key_for(self, provider: str) -> Optional[str]:
        return self.get(provider_key_name(provider))

    def as_dict(self) -> Dict[str, Optional[str]]:
        """All known keys (None when unset) plus any extra stored keys"""
        data: Dict[str, Optional[str]] = {key: self._values.get(key) for key in KNOWN_SECRET_KEYS}
        for key, value in self._values.items():
            data.setdefault(key, value)
        return data

    def restore(self, secrets: Dict[str, Optional[str]]) -> int:
        """
        Restore non-empty values from a profile.

        Returns:
            Number of values restored
        """
        restored = 0
        for key, value in secrets.items():
            if value:
                self.set(str(key), str(value))
                restored += 1
        logger.info(f"Restored {restored} credentials")
        return restored

    def __len__(self) -> int:
        return len(self._values)
