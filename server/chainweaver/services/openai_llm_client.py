import logging
import time

from openai import AsyncOpenAI, APIError, APIStatusError, AuthenticationError, RateLimitError

from .llm_client_interface import LLMProviderInterface
from ..models import LLMConfig, LLMResponse, TokenUsage
from ..utils import ProviderExecutionError, elapsed_ms

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProviderInterface):
    """OpenAI Chat Completions API Provider"""

    id = "openai"
    name = "OpenAI"

    def _create_client(self, api_key: str) -> AsyncOpenAI:
        # retries are the caller's business, never the SDK's
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0
        )

    async def execute(self, prompt: str, config: LLMConfig) -> LLMResponse:
        start_time = time.time()
        client = self._create_client(self.api_key)

        messages = []
        if config.system_prompt:
            messages.append({"role": "system", "content": config.system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await client.chat.completions.create(
                model=config.model,
                messages=messages,
                temperature=self._temperature(config),
                max_tokens=self._max_tokens(config),
                top_p=self._optional(config.top_p, 1),
                frequency_penalty=self._optional(config.frequency_penalty, 0),
                presence_penalty=self._optional(config.presence_penalty, 0)
            )
        except AuthenticationError as e:
            raise ProviderExecutionError(
                f"{self.name} execution failed: {self.name} API 인증 실패: {self._error_message(e)}",
                provider=self.id
            ) from e
        except RateLimitError as e:
            raise ProviderExecutionError(
                f"{self.name} execution failed: {self.name} API 사용량 초과: {self._error_message(e)}",
                provider=self.id
            ) from e
        except APIError as e:
            raise ProviderExecutionError(
                f"{self.name} execution failed: {self.name} API error: {self._error_message(e)}",
                provider=self.id
            ) from e
        finally:
            await client.close()

        if not response.choices:
            raise ProviderExecutionError(
                f"{self.name} execution failed: no choices returned", provider=self.id
            )

        usage = response.usage
        prompt_tokens = usage.prompt_tokens if usage else 0
        completion_tokens = usage.completion_tokens if usage else 0

        return LLMResponse(
            content=response.choices[0].message.content or "",
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=usage.total_tokens if usage else prompt_tokens + completion_tokens
            ),
            cost=self.calculate_cost(config.model, prompt_tokens, completion_tokens),
            execution_time=elapsed_ms(start_time),
            model=config.model,
            provider=self.id
        )

    async def validate_api_key(self, api_key: str) -> bool:
        """models.list 호출로 키 유효성 확인 (무료 호출)"""
        client = self._create_client(api_key)
        try:
            await client.models.list()
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


class DeepSeekProvider(OpenAIProvider):
    """DeepSeek Provider (OpenAI 호환 엔드포인트 사용)"""

    id = "deepseek"
    name = "DeepSeek"
