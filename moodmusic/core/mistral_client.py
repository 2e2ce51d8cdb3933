# ============================================================================
# FILE: moodmusic/core/mistral_client.py
# Mistral chat-completions client
# ============================================================================
import logging
from typing import Optional

import httpx

from moodmusic.core.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.mistral.ai/v1/chat/completions"


class MistralClient:
    """Single-shot text completion against the Mistral chat API"""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        model: str = "mistral-large-2411",
        temperature: float = 0.7,
        timeout: Optional[float] = 30.0,
    ):
        self.http_client = http_client
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.temperature = temperature
        self.timeout = timeout

    async def complete(self, prompt: str) -> str:
        """
        Send one user message and return the model's reply text.

        There is no retry: any failure raises UpstreamUnavailable.
        """
        if not self.api_key:
            logger.warning("MISTRAL_API_KEY not configured")
            raise UpstreamUnavailable()

        try:
            response = await self.http_client.post(
                self.api_url,
                json={
                    "model": self.model,
                    "messages": [{"role": "user", "content": prompt}],
                    "temperature": self.temperature,
                },
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
            content = result["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            logger.error(f"Mistral API returned {e.response.status_code}")
            raise UpstreamUnavailable() from e
        except httpx.HTTPError as e:
            logger.error(f"Mistral API error: {str(e)[:100]}")
            raise UpstreamUnavailable() from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Mistral API returned an unexpected body: {str(e)[:100]}")
            raise UpstreamUnavailable() from e

        if not isinstance(content, str):
            logger.error("Mistral API returned non-text content")
            raise UpstreamUnavailable()
        return content
