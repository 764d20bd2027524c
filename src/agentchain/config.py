"""
Agent Chain Configuration

Configuration class for the agent chain engine.
"""
import os
from pathlib import Path
from urllib.parse import quote_plus
from dotenv import load_dotenv

# Load .env file from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


class Config:
    """Configuration class for the Agent Chain engine"""

    # Base paths
    BASE_DIR = Path(__file__).parent.parent.parent
    PACKAGE_DIR = Path(__file__).parent

    # Durable storage (application-scoped directory)
    APP_DATA_DIR = Path(os.getenv("APP_DATA_DIR", str(Path.home() / ".agentchain")))
    REGISTRY_FILE = os.getenv("REGISTRY_FILE", "agents.json")
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file").lower()

    # Database settings (STORAGE_BACKEND=postgres)
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "agentchain")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")
    POSTGRES_DSN = os.getenv("POSTGRES_DSN", "")
    REGISTRY_KEY = os.getenv("REGISTRY_KEY", "default")

    # Preset manifest (empty = bundled manifest)
    PRESET_MANIFEST_URL = os.getenv("PRESET_MANIFEST_URL", "")
    PRESET_FETCH_TIMEOUT = float(os.getenv("PRESET_FETCH_TIMEOUT", "10"))

    # API settings
    API_HOST = os.getenv("API_HOST", "127.0.0.1")
    API_PORT = int(os.getenv("API_PORT", "8200"))
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # LLM settings
    DEFAULT_PROVIDER = os.getenv("DEFAULT_PROVIDER", "ollama")
    LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "2048"))
    LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "300"))

    # Ollama (local, no key)
    LLM_BASE_URL = os.getenv("LLM_BASE_URL", "http://localhost:11434")
    DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "qwen2.5:7b")

    # Hosted providers (OpenAI-compatible chat completions).
    # API keys (OPENAI_API_KEY etc.) are read by CredentialStore.from_env
    OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    GROK_BASE_URL = os.getenv("GROK_BASE_URL", "https://api.x.ai/v1")
    GROK_MODEL = os.getenv("GROK_MODEL", "grok-2-latest")

    MINIMAX_BASE_URL = os.getenv("MINIMAX_BASE_URL", "https://api.minimax.chat/v1")
    MINIMAX_MODEL = os.getenv("MINIMAX_MODEL", "abab6.5s-chat")

    GEMINI_BASE_URL = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
    )
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

    @staticmethod
    def get_registry_path() -> Path:
        """Path of the registry document for the file backend"""
        return Config.APP_DATA_DIR / Config.REGISTRY_FILE

    @staticmethod
    def get_postgres_dsn() -> str:
        """Get PostgreSQL DSN with password handling"""
        if Config.POSTGRES_DSN:
            return Config.POSTGRES_DSN
        if Config.DB_PASSWORD:
            password = quote_plus(Config.DB_PASSWORD)
            return f"postgresql://{Config.DB_USER}:{password}@{Config.DB_HOST}:{Config.DB_PORT}/{Config.DB_NAME}"
        return f"postgresql://{Config.DB_USER}@{Config.DB_HOST}:{Config.DB_PORT}/{Config.DB_NAME}"
