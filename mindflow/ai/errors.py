"""
Generation failures.

Every failure on the path topic -> curriculum is a GenerationError. Callers at
the UI boundary treat them uniformly as "generation failed"; the subclasses
exist so the proxy endpoints can pick the right HTTP status.
"""

from typing import Optional


class GenerationError(Exception):
    """Base class for any failed generation round trip."""

    status_code: int = 500


class InvalidTopicError(GenerationError, ValueError):
    """Blank topic, rejected before any network call."""

    status_code = 400


class UpstreamError(GenerationError):
    """The completion API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Perplexity API error: {status_code} - {body}")


class UpstreamTransportError(GenerationError):
    """The request never got an HTTP answer (DNS, connect, timeout...)."""


class EmptyCompletionError(GenerationError):
    """The completion envelope had no generated text."""

    def __init__(self, message: str = "No content generated"):
        super().__init__(message)


class MalformedGenerationError(GenerationError, ValueError):
    """Generated text was not valid JSON or did not match the expected schema."""


class ProxyError(GenerationError):
    """A MindFlow proxy endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, error: Optional[str] = None):
        self.status_code = status_code
        self.error = error or "Generation failed"
        super().__init__(f"{status_code}: {self.error}")
