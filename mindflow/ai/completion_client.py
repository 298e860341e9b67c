"""
Client for the hosted chat-completion API (Perplexity, OpenAI-compatible).

One call = one POST. No retry, no backoff, no caching: a failure is reported
to the caller exactly once.
"""

import logging
from typing import Any, Optional

import httpx

from mindflow.ai.errors import EmptyCompletionError, UpstreamError, UpstreamTransportError
from mindflow.ai.prompts import build_messages

logger = logging.getLogger(__name__)


def _content_of(envelope: Any) -> Optional[str]:
    """Read choices[0].message.content, or None when any step is missing."""
    if not isinstance(envelope, dict):
        return None
    choices = envelope.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else None


class CompletionClient:
    """Thin wrapper around one upstream completion endpoint."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        api_key: str,
        api_url: str,
        model: str,
    ):
        self._http = http
        self.api_key = api_key
        self.api_url = api_url
        self.model = model

    async def complete(self, prompt: str) -> str:
        """
        Send `prompt` and return the generated text.

        Raises:
            UpstreamError: non-2xx answer (status is preserved for the proxy)
            UpstreamTransportError: no answer at all
            EmptyCompletionError: answer without generated text
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {"model": self.model, "messages": build_messages(prompt)}

        try:
            response = await self._http.post(self.api_url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            logger.error("Completion request failed: %s", exc)
            raise UpstreamTransportError(f"Completion request failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Completion API returned %d",
                response.status_code,
                extra={"upstream_status": response.status_code},
            )
            raise UpstreamError(response.status_code, response.text)

        try:
            envelope = response.json()
        except ValueError as exc:
            raise EmptyCompletionError("Completion response was not JSON") from exc

        content = _content_of(envelope)
        if not content:
            raise EmptyCompletionError()
        return content
