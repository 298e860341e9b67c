"""Generation endpoints - server-side proxies to the completion API."""

from fastapi import APIRouter, HTTPException, status

from mindflow.ai.errors import GenerationError, UpstreamError
from mindflow.api.deps import Generator
from mindflow.logging_config import get_logger
from mindflow.schemas.common import ErrorResponse
from mindflow.schemas.curriculum import (
    Curriculum,
    CurriculumRequest,
    DeepDiveRequest,
    DeepDiveTopics,
)

logger = get_logger(__name__)
router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    405: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _raise_for_generation_error(exc: GenerationError, what: str) -> None:
    """Translate a generation failure into the proxy's HTTP error."""
    if isinstance(exc, UpstreamError):
        # Forward upstream status (429, 401, 503...) unchanged
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    logger.error("Error generating %s: %s", what, exc)
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc) or "Unknown error",
    ) from exc


@router.post(
    "/generate-curriculum",
    response_model=Curriculum,
    responses=_ERROR_RESPONSES,
)
async def generate_curriculum(body: CurriculumRequest, generator: Generator):
    """Generate a full curriculum for a topic and audience level."""
    topic = (body.topic or "").strip()
    difficulty = (body.difficulty or "").strip()
    if not topic or not difficulty:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing topic or difficulty",
        )

    try:
        return await generator.generate_curriculum(topic, difficulty)
    except GenerationError as exc:
        _raise_for_generation_error(exc, "curriculum")


@router.post(
    "/generate-deep-dive",
    response_model=DeepDiveTopics,
    responses=_ERROR_RESPONSES,
)
async def generate_deep_dive(body: DeepDiveRequest, generator: Generator):
    """Suggest follow-up topics after a high quiz score."""
    current_topic = (body.current_topic or "").strip()
    difficulty = (body.difficulty or "").strip()
    if not current_topic or not difficulty:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing currentTopic or difficulty",
        )

    try:
        topics = await generator.generate_deep_dive_topics(current_topic, difficulty)
    except GenerationError as exc:
        _raise_for_generation_error(exc, "deep dive topics")
    return DeepDiveTopics(topics=topics)
