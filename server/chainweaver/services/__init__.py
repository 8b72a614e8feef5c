"""LLM provider implementations and the per-request provider registry."""

from .llm_client_interface import LLMProviderInterface
from .openai_llm_client import OpenAIProvider, DeepSeekProvider
from .anthropic_llm_client import AnthropicProvider
from .google_llm_client import GoogleProvider
from .provider_registry import (
    PROVIDER_CLASSES,
    ProviderFactory,
    ProviderRegistry,
    create_provider,
    validate_provider_key,
    get_supported_provider_info
)

__all__ = [
    'LLMProviderInterface',
    'OpenAIProvider',
    'DeepSeekProvider',
    'AnthropicProvider',
    'GoogleProvider',
    'PROVIDER_CLASSES',
    'ProviderFactory',
    'ProviderRegistry',
    'create_provider',
    'validate_provider_key',
    'get_supported_provider_info'
]
