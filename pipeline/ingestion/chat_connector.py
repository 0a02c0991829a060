"""
Azure OpenAI chat-completion connector.

Sends one user prompt to a deployment's chat/completions endpoint and returns
the generated text from ``choices[0].message.content``. Every failure is
raised as ChatCompletionError tagged with the stage that failed, so the
caller can decide what to substitute.
"""

import enum
import logging
from typing import Optional

import httpx

from pipeline.config import ChatSettings

logger = logging.getLogger(__name__)


class ChatFailure(str, enum.Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    MALFORMED_RESPONSE = "malformed_response"


class ChatCompletionError(Exception):
    """A chat-completion request that produced no model text."""

    def __init__(self, failure: ChatFailure, message: str,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.failure = failure
        self.status_code = status_code


class ChatCompletionClient:
    """
    Minimal async client for one Azure OpenAI deployment.

    Args:
        settings: Endpoint, key and deployment to call.
        transport: Optional httpx transport, used by tests to stub the API.
    """

    def __init__(self, settings: ChatSettings,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def build_payload(self, prompt: str) -> dict:
        return {
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.settings.max_tokens,
        }

    async def complete(self, prompt: str) -> str:
        if not self.settings.is_configured:
            raise ChatCompletionError(
                ChatFailure.TRANSPORT,
                "Azure OpenAI endpoint, API key or deployment id not set",
            )

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.settings.request_timeout,
            ) as client:
                resp = await client.post(
                    self.settings.completions_url,
                    json=self.build_payload(prompt),
                    headers={"api-key": self.settings.api_key},
                )
                resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise ChatCompletionError(
                ChatFailure.TRANSPORT, f"chat completion timed out: {e}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise ChatCompletionError(
                ChatFailure.HTTP_STATUS,
                f"chat completion HTTP error {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise ChatCompletionError(
                ChatFailure.TRANSPORT, f"chat completion network error: {e}"
            ) from e

        try:
            payload = resp.json()
        except ValueError as e:
            raise ChatCompletionError(
                ChatFailure.MALFORMED_RESPONSE, "chat completion returned malformed JSON"
            ) from e

        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ChatCompletionError(
                ChatFailure.MALFORMED_RESPONSE,
                "chat completion response missing choices[0].message.content",
            ) from e

        if not isinstance(content, str):
            raise ChatCompletionError(
                ChatFailure.MALFORMED_RESPONSE, "chat completion content is not text"
            )

        logger.info(
            "Chat completion received from deployment %s (%d chars)",
            self.settings.deployment, len(content),
        )
        return content
