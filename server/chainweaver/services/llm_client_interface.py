from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..config import LLM_CONFIG, MODEL_PRICING, MODEL_REGISTRY, PROVIDER_CONFIG
from ..models import LLMConfig, LLMResponse, ProviderConfig


class LLMProviderInterface(ABC):
    """통합된 LLM Provider 인터페이스 - 요청별로 생성되는 단일 실행 인터페이스"""

    id: str = ""
    name: str = ""

    def __init__(self, config: ProviderConfig):
        defaults = PROVIDER_CONFIG.get(self.id, {})
        self.api_key = config.api_key
        self.base_url = config.base_url or defaults.get("base_url")
        self.timeout = config.timeout or defaults.get("timeout", 30)

    @property
    def models(self) -> List[str]:
        return list(MODEL_REGISTRY.get(self.id, {}).get("models", []))

    @abstractmethod
    async def execute(self, prompt: str, config: LLMConfig) -> LLMResponse:
        """프롬프트 실행. 업스트림 실패 시 ProviderExecutionError 발생"""
        pass

    @abstractmethod
    async def validate_api_key(self, api_key: str) -> bool:
        """API 키 유효성 확인. 유효하지 않은 키는 예외 없이 False 반환"""
        pass

    def calculate_cost(self, model: str, prompt_tokens: int, completion_tokens: int) -> float:
        """
        정적 가격표로 비용 계산 (1K 토큰당 USD)

        Unknown models are priced with the provider's fallback entry.
        """
        pricing = MODEL_PRICING.get(self.id, {})
        model_pricing = pricing.get(model)
        if model_pricing is None:
            fallback = MODEL_REGISTRY.get(self.id, {}).get("fallback_pricing_model")
            model_pricing = pricing.get(fallback, {"input": 0.0, "output": 0.0})

        input_cost = (prompt_tokens / 1000) * model_pricing["input"]
        output_cost = (completion_tokens / 1000) * model_pricing["output"]
        return input_cost + output_cost

    def get_info(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "models": self.models}

    @staticmethod
    def _temperature(config: LLMConfig) -> float:
        if config.temperature is None:
            return LLM_CONFIG["default_temperature"]
        return config.temperature

    @staticmethod
    def _max_tokens(config: LLMConfig) -> int:
        return config.max_tokens or LLM_CONFIG["default_max_tokens"]

    @staticmethod
    def _optional(value: Optional[float], default: float) -> float:
        return default if value is None else value
