"""
FastAPI dependencies for the upstream completion client.
"""

from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends

from mindflow.ai.completion_client import CompletionClient
from mindflow.ai.curriculum_generator import CurriculumGenerator
from mindflow.config import get_settings


async def get_completion_client() -> AsyncGenerator[CompletionClient, None]:
    """Yield a completion client bound to a per-request HTTP connection pool."""
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as http:
        yield CompletionClient(
            http,
            api_key=settings.perplexity_api_key,
            api_url=settings.perplexity_api_url,
            model=settings.perplexity_model,
        )


def get_curriculum_generator(
    completion: Annotated[CompletionClient, Depends(get_completion_client)],
) -> CurriculumGenerator:
    return CurriculumGenerator(completion)


Generator = Annotated[CurriculumGenerator, Depends(get_curriculum_generator)]
