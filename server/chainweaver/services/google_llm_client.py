import asyncio
import logging
import time
from typing import Any, Dict

import requests

from .llm_client_interface import LLMProviderInterface
from ..models import LLMConfig, LLMResponse, TokenUsage
from ..utils import ProviderExecutionError, elapsed_ms

logger = logging.getLogger(__name__)


class GoogleProvider(LLMProviderInterface):
    """Google AI Studio (Gemini) Provider

    generateContent REST API를 직접 호출한다. SDK의 genai.configure()는
    프로세스 전역 키를 설정하므로 요청별 키 격리를 위해 사용하지 않는다.
    """

    id = "google"
    name = "Google"

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {"x-goog-api-key": api_key, "Content-Type": "application/json"}

    def _build_body(self, prompt: str, config: LLMConfig) -> Dict[str, Any]:
        generation_config = {
            "temperature": self._temperature(config),
            "maxOutputTokens": self._max_tokens(config)
        }
        if config.top_p is not None:
            generation_config["topP"] = config.top_p
        if config.frequency_penalty is not None:
            generation_config["frequencyPenalty"] = config.frequency_penalty
        if config.presence_penalty is not None:
            generation_config["presencePenalty"] = config.presence_penalty

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config
        }
        if config.system_prompt:
            body["systemInstruction"] = {"parts": [{"text": config.system_prompt}]}
        return body

    def _generate_sync(self, prompt: str, config: LLMConfig) -> Dict[str, Any]:
        model = config.model
        if model.startswith("models/"):
            model = model[len("models/"):]

        try:
            response = requests.post(
                f"{self.base_url}/models/{model}:generateContent",
                headers=self._headers(self.api_key),
                json=self._build_body(prompt, config),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ProviderExecutionError(
                f"{self.name} execution failed: {e}", provider=self.id
            ) from e

        if not response.ok:
            try:
                message = response.json().get("error", {}).get("message") or "Unknown error"
            except ValueError:
                message = response.text or "Unknown error"
            raise ProviderExecutionError(
                f"{self.name} execution failed: {self.name} API error: {message}",
                provider=self.id
            )

        return response.json()

    async def execute(self, prompt: str, config: LLMConfig) -> LLMResponse:
        start_time = time.time()

        # 동기 HTTP 호출을 별도 스레드에서 실행하여 이벤트 루프 블로킹 방지
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, self._generate_sync, prompt, config)

        candidates = data.get("candidates") or []
        if not candidates:
            reason = data.get("promptFeedback", {}).get("blockReason", "no candidates returned")
            raise ProviderExecutionError(
                f"{self.name} execution failed: {reason}", provider=self.id
            )
        parts = candidates[0].get("content", {}).get("parts", [])
        content = "".join(part.get("text", "") for part in parts)

        usage = data.get("usageMetadata", {})
        prompt_tokens = usage.get("promptTokenCount", 0)
        completion_tokens = usage.get("candidatesTokenCount", 0)

        return LLMResponse(
            content=content,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=usage.get("totalTokenCount", prompt_tokens + completion_tokens)
            ),
            cost=self.calculate_cost(config.model, prompt_tokens, completion_tokens),
            execution_time=elapsed_ms(start_time),
            model=config.model,
            provider=self.id
        )

    def _list_models_sync(self, api_key: str) -> bool:
        try:
            response = requests.get(
                f"{self.base_url}/models",
                headers=self._headers(api_key),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.info(f"{self.name} API key validation failed: {e}")
            return False
        return response.ok

    async def validate_api_key(self, api_key: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._list_models_sync, api_key)
