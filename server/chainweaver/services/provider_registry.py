import logging
from typing import Any, Callable, Dict, List, Mapping, Type, Union

from .llm_client_interface import LLMProviderInterface
from .openai_llm_client import OpenAIProvider, DeepSeekProvider
from .anthropic_llm_client import AnthropicProvider
from .google_llm_client import GoogleProvider
from ..config import MODEL_REGISTRY
from ..models import ProviderConfig
from ..utils import ProviderNotRegisteredError, UnsupportedProviderError

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: Dict[str, Type[LLMProviderInterface]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "google": GoogleProvider,
    "deepseek": DeepSeekProvider
}

ProviderFactory = Callable[[str, ProviderConfig], LLMProviderInterface]


def _coerce_config(config: Union[ProviderConfig, Mapping[str, Any]]) -> ProviderConfig:
    if isinstance(config, ProviderConfig):
        return config
    return ProviderConfig.model_validate(config)


def create_provider(provider_type: str, config: ProviderConfig) -> LLMProviderInterface:
    """Provider id에 해당하는 구현체 생성"""
    provider_class = PROVIDER_CLASSES.get(provider_type)
    if provider_class is None:
        raise UnsupportedProviderError(
            f"Unsupported provider type: {provider_type}", provider=provider_type
        )
    return provider_class(config)


class ProviderRegistry:
    """
    요청 단위 Provider 레지스트리

    executeWorkflow 호출마다 새로 생성되며 다른 실행과 공유되지 않는다.
    """

    def __init__(self, provider_factory: ProviderFactory = create_provider):
        self._provider_factory = provider_factory
        self._providers: Dict[str, LLMProviderInterface] = {}

    def register(self, provider_type: str, config: Union[ProviderConfig, Mapping[str, Any]]) -> None:
        """Provider 등록 (같은 id의 기존 등록은 교체)"""
        self._providers[provider_type] = self._provider_factory(provider_type, _coerce_config(config))
        logger.debug(f"Registered provider '{provider_type}'")

    def get(self, provider_type: str) -> LLMProviderInterface:
        provider = self._providers.get(provider_type)
        if provider is None:
            raise ProviderNotRegisteredError(
                f"Provider {provider_type} not registered. Please configure API key first.",
                provider=provider_type
            )
        return provider

    def is_registered(self, provider_type: str) -> bool:
        return provider_type in self._providers

    def get_available_providers(self) -> List[str]:
        return list(self._providers.keys())

    def get_all_provider_info(self) -> List[Dict[str, Any]]:
        return [provider.get_info() for provider in self._providers.values()]


async def validate_provider_key(
    provider_type: str,
    api_key: str,
    provider_factory: ProviderFactory = create_provider
) -> bool:
    """임시 Provider 인스턴스로 API 키 검증 (실패 시 False)"""
    try:
        provider = provider_factory(provider_type, ProviderConfig(api_key=api_key))
        return await provider.validate_api_key(api_key)
    except Exception as e:
        logger.warning(f"API key validation for '{provider_type}' failed: {e}")
        return False


def get_supported_provider_info() -> List[Dict[str, Any]]:
    """API 키 없이 지원 Provider 목록 반환"""
    return [
        {
            "id": provider_type,
            "name": provider_class.name,
            "models": list(MODEL_REGISTRY.get(provider_type, {}).get("models", []))
        }
        for provider_type, provider_class in PROVIDER_CLASSES.items()
    ]
