"""
State machine for one quiz run.

Phases are ANSWERING (no option chosen), REVEALED (choice locked, answer and
explanation visible) and SUMMARY (all questions done). Valid transitions and
the events that trigger them are defined here.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from mindflow.logging_config import get_logger
from mindflow.schemas.curriculum import QuizQuestion

if TYPE_CHECKING:
    from mindflow.orchestration.deep_dive import DeepDiveTrigger

logger = get_logger(__name__)

# Deep dive is offered strictly above this percentage
DEEP_DIVE_THRESHOLD = 80


class QuizPhase(str, Enum):
    ANSWERING = "answering"
    REVEALED = "revealed"
    SUMMARY = "summary"


class QuizEvent(str, Enum):
    SELECT = "select"
    NEXT = "next"
    FINISH = "finish"
    RESTART = "restart"


# (from_phase, event) -> to_phase
_TRANSITIONS: Dict[Tuple[QuizPhase, QuizEvent], QuizPhase] = {
    (QuizPhase.ANSWERING, QuizEvent.SELECT): QuizPhase.REVEALED,
    (QuizPhase.REVEALED, QuizEvent.NEXT): QuizPhase.ANSWERING,
    (QuizPhase.REVEALED, QuizEvent.FINISH): QuizPhase.SUMMARY,
    (QuizPhase.SUMMARY, QuizEvent.RESTART): QuizPhase.ANSWERING,
}


class InvalidQuizTransition(ValueError):
    """Raised when an event is not allowed in the current phase."""


def valid_events(phase: QuizPhase) -> List[QuizEvent]:
    """Return the events accepted in `phase`."""
    return [event for (f, event) in _TRANSITIONS if f == phase]


def can_transition(phase: QuizPhase, event: QuizEvent) -> bool:
    return (phase, event) in _TRANSITIONS


def score_percentage(score: int, total: int) -> int:
    """round(100 * score / total), halves rounded up; 0 for an empty quiz."""
    if total <= 0:
        return 0
    return (200 * score + total) // (2 * total)


class QuizSession:
    """
    Progress through one quiz.

    Lifecycle: created on quiz mount at index 0 with score 0, discarded when
    the curriculum changes. Nothing is persisted.

    Invariants:
    - score never exceeds the number of answered questions
    - a question contributes at most one point
    - the first selection on a question is final
    - current_index stays within the question list
    """

    def __init__(
        self,
        questions: Sequence[QuizQuestion],
        *,
        topic: str = "",
        difficulty: str = "",
        deep_dive: Optional["DeepDiveTrigger"] = None,
    ):
        self.questions: Tuple[QuizQuestion, ...] = tuple(questions)
        self.topic = topic
        self.difficulty = difficulty
        self.deep_dive = deep_dive

        self.current_index = 0
        self.selected_option: Optional[int] = None
        self.score = 0
        self.answered = 0
        self.phase = QuizPhase.ANSWERING if self.questions else QuizPhase.SUMMARY

    # ── Read-only views ─────────────────────────────────────────────────

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.phase == QuizPhase.SUMMARY:
            return None
        return self.questions[self.current_index]

    @property
    def is_answered(self) -> bool:
        return self.phase == QuizPhase.REVEALED

    @property
    def completed(self) -> bool:
        return self.phase == QuizPhase.SUMMARY

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total - 1

    @property
    def percentage(self) -> int:
        return score_percentage(self.score, self.total)

    @property
    def qualifies_for_deep_dive(self) -> bool:
        return self.completed and self.percentage > DEEP_DIVE_THRESHOLD

    @property
    def deep_dive_topics(self) -> List[str]:
        return list(self.deep_dive.topics) if self.deep_dive else []

    # ── Transitions ─────────────────────────────────────────────────────

    def _transition(self, event: QuizEvent) -> QuizPhase:
        if not can_transition(self.phase, event):
            raise InvalidQuizTransition(
                f"Invalid quiz transition: {event.value} in phase {self.phase.value}"
            )
        self.phase = _TRANSITIONS[(self.phase, event)]
        return self.phase

    def select_option(self, index: int) -> Optional[bool]:
        """
        Lock in an answer for the current question.

        Returns:
            True/False for correct/incorrect, or None when the question was
            already answered (the call is ignored).
        Raises:
            ValueError: index is not one of the question's options
        """
        if self.phase != QuizPhase.ANSWERING:
            return None
        question = self.questions[self.current_index]
        if not 0 <= index < len(question.options):
            raise ValueError(
                f"Option {index} out of range for question '{question.id}' "
                f"({len(question.options)} options)"
            )

        self._transition(QuizEvent.SELECT)
        self.selected_option = index
        self.answered += 1
        correct = index == question.correct_index
        if correct:
            self.score += 1
        return correct

    def advance(self) -> QuizPhase:
        """Move past a revealed answer: next question, or the summary after the last."""
        if self.phase == QuizPhase.REVEALED and not self.is_last_question:
            self._transition(QuizEvent.NEXT)
            self.current_index += 1
            self.selected_option = None
            return self.phase

        self._transition(QuizEvent.FINISH)
        self._enter_summary()
        return self.phase

    def restart(self) -> QuizPhase:
        """Start the same quiz over from question one."""
        if not self.questions:
            # Nothing to answer; an empty quiz lives in SUMMARY
            return self.phase
        self._transition(QuizEvent.RESTART)
        self.current_index = 0
        self.selected_option = None
        self.score = 0
        self.answered = 0
        if self.deep_dive:
            self.deep_dive.clear()
        return self.phase

    def _enter_summary(self) -> None:
        logger.info(
            "Quiz completed: %d/%d (%d%%)", self.score, self.total, self.percentage,
            extra={"topic": self.topic},
        )
        if self.deep_dive and self.qualifies_for_deep_dive:
            self.deep_dive.schedule(self.topic, self.difficulty, self.percentage)
