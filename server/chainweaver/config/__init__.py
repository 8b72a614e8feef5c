"""Application configuration and settings."""

from .api_config import (
    API_CONFIG,
    LLM_CONFIG,
    PROVIDER_CONFIG
)

from .model_config import (
    MODEL_REGISTRY,
    MODEL_PRICING
)

from .execution_config import (
    EXECUTION_CONFIG
)

__all__ = [
    'API_CONFIG',
    'LLM_CONFIG',
    'PROVIDER_CONFIG',
    'MODEL_REGISTRY',
    'MODEL_PRICING',
    'EXECUTION_CONFIG'
]
