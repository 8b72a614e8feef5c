import logging
import time

from anthropic import AsyncAnthropic, APIError, APIStatusError

from .llm_client_interface import LLMProviderInterface
from ..models import LLMConfig, LLMResponse, TokenUsage
from ..utils import ProviderExecutionError, elapsed_ms

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProviderInterface):
    """Anthropic Messages API Provider"""

    id = "anthropic"
    name = "Anthropic"

    def _create_client(self, api_key: str) -> AsyncAnthropic:
        return AsyncAnthropic(
            api_key=api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0
        )

    async def execute(self, prompt: str, config: LLMConfig) -> LLMResponse:
        start_time = time.time()
        client = self._create_client(self.api_key)

        request = {
            "model": config.model,
            "max_tokens": self._max_tokens(config),
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._temperature(config)
        }
        if config.top_p is not None:
            request["top_p"] = config.top_p
        if config.system_prompt:
            request["system"] = config.system_prompt

        try:
            response = await client.messages.create(**request)
        except APIError as e:
            raise ProviderExecutionError(
                f"{self.name} execution failed: {self.name} API error: {self._error_message(e)}",
                provider=self.id
            ) from e
        finally:
            await client.close()

        content = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        prompt_tokens = response.usage.input_tokens
        completion_tokens = response.usage.output_tokens

        return LLMResponse(
            content=content,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens
            ),
            cost=self.calculate_cost(config.model, prompt_tokens, completion_tokens),
            execution_time=elapsed_ms(start_time),
            model=config.model,
            provider=self.id
        )

    async def validate_api_key(self, api_key: str) -> bool:
        """models.list 호출로 키 유효성 확인 (토큰 소모 없음)"""
        client = self._create_client(api_key)
        try:
            await client.models.list(limit=1)
            return True
        except APIError as e:
            logger.info(f"{self.name} API key validation failed: {e}")
            return False
        finally:
            await client.close()

    @staticmethod
    def _error_message(error: APIError) -> str:
        if isinstance(error, APIStatusError) and isinstance(error.body, dict):
            body = error.body.get("error", error.body)
            if isinstance(body, dict) and body.get("message"):
                return body["message"]
        return error.message or "Unknown error"
