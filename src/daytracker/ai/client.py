"""Generative-language API client for the day tracker coach."""

import logging
import os
import time
from dataclasses import dataclass

import anthropic

from .errors import (
    CoachAPIError,
    CoachAuthError,
    CoachConnectivityError,
    CoachResponseError,
    CoachTimeoutError,
)

logger = logging.getLogger(__name__)


@dataclass
class CoachClientConfig:
    """Configuration for the coach client."""

    api_key: str
    model: str = "claude-3-5-haiku-latest"
    max_tokens: int = 500
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls, **overrides: object) -> "CoachClientConfig":
        """Create config from environment variables.

        Raises:
            ValueError: If ANTHROPIC_API_KEY is not set.
        """
        api_key = os.environ.get("ANTHROPIC_API_KEY", "").strip()
        if not api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Set it to use AI suggestions and summaries."
            )
        return cls(api_key=api_key, **overrides)  # type: ignore[arg-type]


@dataclass
class CoachResponse:
    """Text returned by the API."""

    text: str
    tokens_used: int
    model: str
    latency_ms: int


class CoachClient:
    """Client for single-prompt API calls."""

    def __init__(self, config: CoachClientConfig) -> None:
        self._config = config
        self._client = anthropic.Anthropic(
            api_key=config.api_key,
            timeout=config.timeout_seconds,
        )

    @property
    def model(self) -> str:
        return self._config.model

    def complete(
        self,
        prompt: str,
        temperature: float = 0.7,
        system: str | None = None,
    ) -> CoachResponse:
        """Send one prompt and return the reply text.

        Raises:
            CoachAuthError: If authentication fails.
            CoachTimeoutError: If the request times out.
            CoachConnectivityError: If the API cannot be reached.
            CoachAPIError: If the API returns an error.
            CoachResponseError: If the reply has no text.
        """
        start_time = time.time()

        kwargs: dict[str, object] = {
            "model": self._config.model,
            "max_tokens": self._config.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        try:
            response = self._client.messages.create(**kwargs)  # type: ignore[call-overload]
        except anthropic.AuthenticationError as e:
            raise CoachAuthError("Invalid API key. Please check your ANTHROPIC_API_KEY.") from e
        except anthropic.APITimeoutError as e:
            # Timeout first: it subclasses APIConnectionError
            raise CoachTimeoutError(
                f"Request timed out after {self._config.timeout_seconds} seconds."
            ) from e
        except anthropic.APIConnectionError as e:
            raise CoachConnectivityError(f"Failed to connect to the AI service: {e}") from e
        except anthropic.APIStatusError as e:
            raise CoachAPIError(f"API error: {e.message}", status_code=e.status_code) from e

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.content:
            raise CoachResponseError("The AI service returned an empty response.")
        text = getattr(response.content[0], "text", None)
        if not isinstance(text, str):
            raise CoachResponseError("The AI service returned no text.")

        logger.debug(f"AI response in {latency_ms}ms")
        return CoachResponse(
            text=text.strip(),
            tokens_used=response.usage.input_tokens + response.usage.output_tokens,
            model=response.model,
            latency_ms=latency_ms,
        )


__all__ = ["CoachClient", "CoachClientConfig", "CoachResponse"]
