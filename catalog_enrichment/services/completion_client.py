import logging
import time
from typing import Callable, Dict, List, Optional

import requests

from catalog_enrichment.core.config import Settings
from catalog_enrichment.core.errors import CompletionError

logger = logging.getLogger(__name__)


class CompletionClient:
    """Chat-completions client for the text service (OpenAI-compatible API)."""

    def __init__(
        self,
        config: Settings,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._api_key = config.deepseek_api_key
        self._api_url = config.deepseek_api_url
        self._model = config.deepseek_model
        self._temperature = config.text_temperature
        self._max_retries = config.text_max_retries
        self._timeout = config.request_timeout
        self._session = session or requests.Session()
        self._sleep = sleep

    def _post(self, messages: List[Dict[str, str]], max_tokens: int) -> str:
        response = self._session.post(
            self._api_url,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self._model,
                "messages": messages,
                "temperature": self._temperature,
                "max_tokens": max_tokens,
            },
            timeout=self._timeout,
        )

        if response.status_code // 100 != 2:
            raise CompletionError(f"Text service error: {response.status_code} - {response.text[:200]}")

        try:
            return response.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CompletionError(f"Malformed text service response: {e}") from e

    def complete(self, messages: List[Dict[str, str]], max_tokens: int) -> str:
        """Return the completion text, retrying transport failures with linear backoff."""
        if not self._api_key:
            raise CompletionError("Text service API key not configured")

        attempts = self._max_retries + 1
        last_error: Optional[Exception] = None
        for attempt in range(1, attempts + 1):
            try:
                logger.info("Text service call attempt %d/%d", attempt, attempts)
                content = self._post(messages, max_tokens)
                logger.info("Text service call successful")
                return content
            except (requests.RequestException, CompletionError) as e:
                last_error = e
                logger.warning("Text service attempt %d failed: %s", attempt, e)
                if attempt < attempts:
                    self._sleep(1.0 * attempt)

        raise CompletionError(str(last_error) if last_error else "Text service error")
