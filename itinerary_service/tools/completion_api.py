"""Chat completion API integration (OpenAI-compatible endpoint)"""
import asyncio
import logging
from typing import Optional
import httpx

from ..config import settings
from ..agents.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the completion API cannot produce text"""


class CompletionTimeoutError(CompletionError):
    """Raised when the completion API does not answer within the timeout"""


class CompletionAPIError(CompletionError):
    """Raised when the completion API answers with a non-success status"""
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Completion API error: {status_code} - {body}")


class CompletionAPI:
    """
    Chat completion client
    Docs: https://platform.openai.com/docs/api-reference/chat
    """

    # Provider error bodies are mirrored into job errors, keep them short
    MAX_ERROR_BODY_CHARS = 500

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None
    ):
        self.api_key = api_key or settings.completion_api_key
        self.url = settings.completion_api_url
        self.timeout_seconds = settings.completion_timeout_seconds if timeout_seconds is None else timeout_seconds
        # Wall-clock timeout is enforced in complete(), not by httpx
        self.client = client or httpx.AsyncClient(timeout=None)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def complete(self, prompt: str, timeout_seconds: Optional[float] = None) -> str:
        """
        Send one chat completion request and return the generated text

        Args:
            prompt: User instruction
            timeout_seconds: Override for the wall-clock timeout

        Returns:
            Content of the first completion choice

        Raises:
            CompletionTimeoutError: If no answer arrives before the timeout
            CompletionAPIError: If the API answers with a non-success status
            CompletionError: If the request fails or the answer has no content
        """
        timeout = self.timeout_seconds if timeout_seconds is None else timeout_seconds

        payload = {
            "model": settings.model_name,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt}
            ],
            "temperature": settings.model_temperature,
            "max_tokens": settings.max_output_tokens
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            response = await asyncio.wait_for(
                self.client.post(self.url, json=payload, headers=headers),
                timeout=timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise CompletionTimeoutError("Completion API request timed out")
        except httpx.RequestError as e:
            raise CompletionError(f"Completion API request failed: {type(e).__name__}") from e

        if response.status_code < 200 or response.status_code >= 300:
            raise CompletionAPIError(
                response.status_code,
                response.text[:self.MAX_ERROR_BODY_CHARS]
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CompletionError("Completion API returned no message content") from e

        if not isinstance(content, str):
            raise CompletionError("Completion API returned no message content")

        usage = data.get("usage") or {}
        logger.info(f"Completion API call completed. Tokens used: {usage.get('total_tokens', 'unknown')}")

        return content
