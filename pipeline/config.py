"""
Chat-completion settings for the AirTrend pipeline.

Read from the environment (or a local .env file) when the pipeline is built,
never at import time, so a missing key only degrades to fallback data.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_VERSION = "2025-01-01-preview"
DEFAULT_MAX_TOKENS = 2000
DEFAULT_REQUEST_TIMEOUT = 100.0  # seconds


@dataclass(frozen=True)
class ChatSettings:
    """Azure OpenAI deployment the pipeline prompts."""
    endpoint: str
    api_key: str
    deployment: str
    api_version: str = DEFAULT_API_VERSION
    max_tokens: int = DEFAULT_MAX_TOKENS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls) -> "ChatSettings":
        return cls(
            endpoint=os.getenv("AZURE_OPENAI_ENDPOINT", "").rstrip("/"),
            api_key=os.getenv("AZURE_OPENAI_API_KEY", ""),
            deployment=os.getenv("AZURE_OPENAI_DEPLOYMENT_ID", ""),
            api_version=os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_API_VERSION),
            max_tokens=int(os.getenv("CHAT_MAX_TOKENS", str(DEFAULT_MAX_TOKENS))),
            request_timeout=float(
                os.getenv("CHAT_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
            ),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key and self.deployment)

    @property
    def completions_url(self) -> str:
        return (
            f"{self.endpoint}/openai/deployments/{self.deployment}"
            f"/chat/completions?api-version={self.api_version}"
        )
