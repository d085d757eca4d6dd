"""
OpenAI model client - chat completions behind the ModelClient contract.
"""

import json
import os

from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    RateLimitError,
)

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.config.settings import settings
from cotflow.domain.output import ExecutionResult
from cotflow.llm.base import ModelClient
from cotflow.prompt.substitutor import substitute
from cotflow.utils.logging import get_logger
from cotflow.utils.retry import retry_async

logger = get_logger(__name__)

# Retryable exceptions for OpenAI
OPENAI_RETRYABLE = (
    APIConnectionError,
    RateLimitError,
    InternalServerError,
    APITimeoutError,
)

_FLOAT_OPTIONS = ("temperature", "top_p", "frequency_penalty", "presence_penalty")
_INT_OPTIONS = ("max_tokens",)


class OpenAIModelClient(ModelClient):
    """
    Model client for OpenAI-compatible chat completion APIs.

    The ``prompt`` parameter is sent as a single user message after its
    remaining ``${parameters.*}`` placeholders are filled from the call
    parameters. ``stop`` is read as a JSON list.

    Examples:
        >>> client = OpenAIModelClient(model_names={"my-model": "gpt-4o-mini"})
        >>> result = await client.predict("my-model", {"prompt": "Hello"})
        >>> result.response_text()
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model_names: dict[str, str] | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """
        Args:
            api_key: API key (falls back to settings, then OPENAI_API_KEY)
            base_url: API base URL (falls back to settings, then OPENAI_BASE_URL)
            model_names: Maps model ids to provider model names; unmapped ids
                are sent as-is
            client: Pre-built AsyncOpenAI client
        """
        resolved_api_key = api_key
        if resolved_api_key is None and settings.openai_api_key:
            resolved_api_key = settings.openai_api_key.get_secret_value()
        if resolved_api_key is None:
            resolved_api_key = os.getenv("OPENAI_API_KEY")

        resolved_base_url = base_url or settings.openai_base_url or os.getenv("OPENAI_BASE_URL")

        self.model_names = dict(model_names or {})
        self.client = client or AsyncOpenAI(api_key=resolved_api_key, base_url=resolved_base_url)

    def build_request(self, model_id: str, parameters: dict[str, str]) -> dict:
        """Map a flat parameter map to chat completion arguments."""
        prompt = parameters.get("prompt")
        if prompt is None:
            raise InvalidArgumentError("Model call requires a prompt parameter")
        prompt = substitute(prompt, {k: v for k, v in parameters.items() if k != "prompt"})

        request: dict = {
            "model": parameters.get("model") or self.model_names.get(model_id, model_id),
            "messages": [{"role": "user", "content": prompt}],
        }

        if "stop" in parameters:
            try:
                stop = json.loads(parameters["stop"])
            except json.JSONDecodeError:
                stop = [parameters["stop"]]
            # The API accepts at most four stop sequences.
            request["stop"] = stop[:4] if isinstance(stop, list) else [str(stop)]

        for option in _FLOAT_OPTIONS:
            if option in parameters:
                request[option] = float(parameters[option])
        for option in _INT_OPTIONS:
            if option in parameters:
                request[option] = int(parameters[option])

        return request

    @retry_async(exceptions=OPENAI_RETRYABLE)
    async def _complete(self, request: dict) -> str:
        completion = await self.client.chat.completions.create(**request)
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def predict(self, model_id: str, parameters: dict[str, str]) -> ExecutionResult:
        request = self.build_request(model_id, parameters)
        logger.debug("model_request", model_id=model_id, model=request["model"])
        text = await self._complete(request)
        logger.debug("model_response", model_id=model_id, length=len(text))
        return ExecutionResult.of_response(text)

    async def close(self) -> None:
        await self.client.close()


__all__ = ["OpenAIModelClient", "OPENAI_RETRYABLE"]
