"""
API routes.
"""

from fastapi import APIRouter

from mindflow.api import generation

router = APIRouter()

router.include_router(generation.router, tags=["Generation"])
