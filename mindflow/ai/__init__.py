"""
AI Gateway - everything that talks to the hosted completion API.

- Prompts are built here and nowhere else
- The API key never leaves the server process
- Generated text is parsed tolerantly and validated before use
"""

from mindflow.ai.completion_client import CompletionClient
from mindflow.ai.curriculum_generator import CurriculumGenerator
from mindflow.ai.errors import (
    EmptyCompletionError,
    GenerationError,
    InvalidTopicError,
    MalformedGenerationError,
    ProxyError,
    UpstreamError,
    UpstreamTransportError,
)
from mindflow.ai.json_extract import extract_json, strip_code_fence

__all__ = [
    "CompletionClient",
    "CurriculumGenerator",
    "EmptyCompletionError",
    "GenerationError",
    "InvalidTopicError",
    "MalformedGenerationError",
    "ProxyError",
    "UpstreamError",
    "UpstreamTransportError",
    "extract_json",
    "strip_code_fence",
]
