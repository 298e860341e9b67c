"""
Curriculum Generator - prompt -> completion -> JSON -> typed curriculum.

Pipeline position:  proxy endpoint → CurriculumGenerator → CompletionClient
                    → extract_json() → pydantic validation → audit warnings

The generated document is trusted once it validates; the audit only logs the
lenient cases (dangling edges, odd correctIndex, cycles).
"""

from __future__ import annotations

import logging
from typing import List

from pydantic import ValidationError

from mindflow.ai.completion_client import CompletionClient
from mindflow.ai.errors import MalformedGenerationError
from mindflow.ai.json_extract import extract_json
from mindflow.ai.prompts import build_curriculum_prompt, build_deep_dive_prompt
from mindflow.engines.validation.curriculum_validator import CurriculumValidator
from mindflow.schemas.curriculum import Curriculum, DeepDiveTopics

logger = logging.getLogger(__name__)


class CurriculumGenerator:
    """Generates curricula and deep-dive suggestions via the completion API."""

    def __init__(self, completion: CompletionClient):
        self.completion = completion

    async def generate_curriculum(self, topic: str, difficulty: str) -> Curriculum:
        """
        Generate a full curriculum for `topic` at `difficulty`.

        Raises:
            GenerationError: any upstream, parsing or schema failure
        """
        logger.info("Generating curriculum", extra={"topic": topic, "difficulty": str(difficulty)})
        raw_text = await self.completion.complete(build_curriculum_prompt(topic, difficulty))
        document = extract_json(raw_text)

        try:
            curriculum = Curriculum.model_validate(document)
        except ValidationError as exc:
            raise MalformedGenerationError(
                f"Generated curriculum does not match schema: {exc.error_count()} error(s)"
            ) from exc

        for issue in CurriculumValidator.audit(curriculum):
            logger.warning("Curriculum audit: %s", issue.message, extra={"check": issue.check.value})

        logger.info(
            "Curriculum generated: %d concepts, %d nodes, %d edges, %d questions",
            len(curriculum.concepts),
            len(curriculum.flowchart.nodes),
            len(curriculum.flowchart.edges),
            len(curriculum.quiz),
        )
        return curriculum

    async def generate_deep_dive_topics(self, current_topic: str, difficulty: str) -> List[str]:
        """
        Generate follow-up topics for a learner who aced `current_topic`.

        Raises:
            GenerationError: any upstream, parsing or schema failure
        """
        raw_text = await self.completion.complete(build_deep_dive_prompt(current_topic, difficulty))
        document = extract_json(raw_text)

        try:
            result = DeepDiveTopics.model_validate(document)
        except ValidationError as exc:
            raise MalformedGenerationError("Generated deep-dive topics do not match schema") from exc

        logger.info("Deep-dive topics generated: %d", len(result.topics))
        return result.topics
