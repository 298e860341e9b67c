"""
Pydantic schemas for curriculum documents and API envelopes.
"""

from mindflow.schemas.common import ErrorResponse, HealthResponse
from mindflow.schemas.curriculum import (
    Concept,
    Curriculum,
    CurriculumRequest,
    DeepDiveRequest,
    DeepDiveTopics,
    DifficultyLevel,
    Flowchart,
    FlowEdge,
    FlowNode,
    QuizQuestion,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "Concept",
    "Curriculum",
    "CurriculumRequest",
    "DeepDiveRequest",
    "DeepDiveTopics",
    "DifficultyLevel",
    "Flowchart",
    "FlowEdge",
    "FlowNode",
    "QuizQuestion",
]
