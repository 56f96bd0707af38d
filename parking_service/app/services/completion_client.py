import logging
from typing import List, Optional

import requests

from shared.core.config import Settings
from shared.helpers.json_response_helper import error_response
from shared.utils.enums import ErrorKind

logger = logging.getLogger(__name__)


class CompletionClient:
    """Buffered (non-streaming) client for an OpenAI compatible chat completions API."""

    def __init__(self, api_key: Optional[str], base_url: str, model: str,
                 max_tokens: int = 800, temperature: float = 0.7, timeout: float = 30):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            model=settings.OPENAI_MODEL,
            max_tokens=settings.CHAT_MAX_TOKENS,
            temperature=settings.CHAT_TEMPERATURE,
            timeout=settings.CHAT_TIMEOUT_SECONDS,
        )

    def complete(self, messages: List[dict]) -> Optional[str]:
        """Returns the generated text, or None when the API produced no content."""
        if not self.api_key:
            return error_response(
                message="Chat assistant is not configured",
                kind=ErrorKind.CONFIGURATION
            )

        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "model": self.model,
                    "messages": messages,
                    "max_tokens": self.max_tokens,
                    "temperature": self.temperature,
                    "stream": False,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError):
            logger.exception("Completion API call failed")
            return error_response(message="Failed to generate a reply",
                                  kind=ErrorKind.UPSTREAM_FAILURE)

        choices = body.get("choices") or []
        if not choices:
            return None
        content = (choices[0].get("message") or {}).get("content")
        return content.strip() if isinstance(content, str) and content.strip() else None
