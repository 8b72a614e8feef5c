"""Server and LLM provider configurations."""

import os
from dotenv import load_dotenv

load_dotenv()

API_CONFIG = {
    "host": os.getenv("CHAINWEAVER_HOST", "0.0.0.0"),
    "port": int(os.getenv("CHAINWEAVER_PORT", "5001")),
    "cors_origins": os.getenv("CHAINWEAVER_CORS_ORIGINS", "*").split(","),
    "default_user_id": os.getenv("CHAINWEAVER_DEFAULT_USER", "anonymous")
}

LLM_CONFIG = {
    "default_provider": "openai",
    "default_model": "gpt-3.5-turbo",
    "default_temperature": 0.7,
    "default_max_tokens": 1000
}

# Base URL / timeout per vendor. API keys are never read from the environment
# here: every execution request brings its own keys.
PROVIDER_CONFIG = {
    "openai": {
        "base_url": os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        "timeout": float(os.getenv("OPENAI_TIMEOUT", "30"))
    },
    "anthropic": {
        "base_url": os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com"),
        "timeout": float(os.getenv("ANTHROPIC_TIMEOUT", "30"))
    },
    "google": {
        "base_url": os.getenv("GOOGLE_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
        "timeout": float(os.getenv("GOOGLE_TIMEOUT", "30"))
    },
    "deepseek": {
        "base_url": os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1"),
        "timeout": float(os.getenv("DEEPSEEK_TIMEOUT", "30"))
    }
}
