"""Orchestration layer - quiz state machine, deep-dive trigger, learning session."""

from mindflow.orchestration.quiz_state_machine import (
    InvalidQuizTransition,
    QuizPhase,
    QuizSession,
)
from mindflow.orchestration.deep_dive import DeepDiveTrigger
from mindflow.orchestration.learning_session import AppStatus, LearningSession, LearningTab

__all__ = [
    "InvalidQuizTransition",
    "QuizPhase",
    "QuizSession",
    "DeepDiveTrigger",
    "AppStatus",
    "LearningSession",
    "LearningTab",
]
