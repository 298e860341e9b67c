"""
Curriculum gateway - the learner-side view of the two proxy endpoints.

Talks only to the MindFlow server, never to the completion API, so no
credential is needed here. Every failure surfaces as a GenerationError.
"""

from typing import Any, Dict, List

import httpx
from pydantic import ValidationError

from mindflow.ai.errors import (
    InvalidTopicError,
    MalformedGenerationError,
    ProxyError,
    UpstreamTransportError,
)
from mindflow.logging_config import get_logger
from mindflow.schemas.curriculum import Curriculum, DeepDiveTopics, DifficultyLevel

logger = get_logger(__name__)

CURRICULUM_PATH = "/api/generate-curriculum"
DEEP_DIVE_PATH = "/api/generate-deep-dive"


class CurriculumGateway:
    """Async client for the generation proxies."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        try:
            response = await self._http.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(f"Request to {path} failed: {exc}") from exc

        if not response.is_success:
            try:
                error = response.json().get("error")
            except (ValueError, AttributeError):
                error = response.text or None
            raise ProxyError(response.status_code, error)

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedGenerationError(f"{path} returned a non-JSON body") from exc

    async def generate_curriculum(self, topic: str, difficulty: DifficultyLevel) -> Curriculum:
        """
        Ask the server for a curriculum.

        Raises:
            InvalidTopicError: blank topic (no request is made)
            GenerationError: any transport, status or schema failure
        """
        topic = (topic or "").strip()
        if not topic:
            raise InvalidTopicError("Topic must not be empty")

        data = await self._post(
            CURRICULUM_PATH,
            {"topic": topic, "difficulty": DifficultyLevel(difficulty).value},
        )
        try:
            return Curriculum.model_validate(data)
        except ValidationError as exc:
            raise MalformedGenerationError("Curriculum response does not match schema") from exc

    async def generate_deep_dive_topics(self, current_topic: str, difficulty: DifficultyLevel) -> List[str]:
        """Ask the server for follow-up topics. May return an empty list."""
        current_topic = (current_topic or "").strip()
        if not current_topic:
            raise InvalidTopicError("Topic must not be empty")

        data = await self._post(
            DEEP_DIVE_PATH,
            {"currentTopic": current_topic, "difficulty": DifficultyLevel(difficulty).value},
        )
        try:
            return DeepDiveTopics.model_validate(data).topics
        except ValidationError as exc:
            raise MalformedGenerationError("Deep-dive response does not match schema") from exc
