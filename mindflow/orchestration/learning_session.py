"""
Learning session - the top-level state the single-page UI holds.

IDLE -> GENERATING -> READY | ERROR, and back to IDLE on reset. One
curriculum request may be in flight at a time; a response that arrives after
the session has moved on (reset, or a newer request) is discarded.
"""

from enum import Enum
from typing import Optional

from mindflow.ai.errors import GenerationError
from mindflow.client.gateway import CurriculumGateway
from mindflow.flowchart.layout import FlowchartLayout, layout_flowchart
from mindflow.logging_config import get_logger
from mindflow.orchestration.deep_dive import DeepDiveTrigger
from mindflow.orchestration.quiz_state_machine import QuizSession
from mindflow.schemas.curriculum import Curriculum, DifficultyLevel

logger = get_logger(__name__)


class AppStatus(str, Enum):
    IDLE = "IDLE"
    GENERATING = "GENERATING"
    READY = "READY"
    ERROR = "ERROR"


class LearningTab(str, Enum):
    CONCEPTS = "concepts"
    FLOW = "flow"
    QUIZ = "quiz"


class LearningSession:
    """
    Holds the current topic, difficulty, curriculum and quiz.

    All state is in memory and dies with the session. Difficulty is passed
    explicitly to every gateway call.
    """

    def __init__(
        self,
        gateway: CurriculumGateway,
        difficulty: DifficultyLevel = DifficultyLevel.UNDERGRAD,
    ):
        self.gateway = gateway
        self.difficulty = DifficultyLevel(difficulty)
        self.status = AppStatus.IDLE
        self.topic = ""
        self.curriculum: Optional[Curriculum] = None
        self.quiz: Optional[QuizSession] = None
        self.active_tab = LearningTab.CONCEPTS
        self.last_error: Optional[GenerationError] = None
        self._request_seq = 0
        self._layout: Optional[FlowchartLayout] = None

    @property
    def is_generating(self) -> bool:
        return self.status == AppStatus.GENERATING

    @property
    def flowchart_layout(self) -> Optional[FlowchartLayout]:
        """Layout of the current flowchart, recomputed per curriculum."""
        if self.curriculum is None:
            return None
        if self._layout is None:
            flowchart = self.curriculum.flowchart
            self._layout = layout_flowchart(flowchart.nodes, flowchart.edges)
        return self._layout

    def _discard_course(self) -> None:
        self.curriculum = None
        self.quiz = None
        self._layout = None

    async def start(self, topic: str) -> Optional[Curriculum]:
        """
        Generate a curriculum for `topic`.

        Blank topics and calls made while a request is in flight are
        ignored (returns None, no state change). Otherwise ends in READY or
        ERROR, unless the session moved on while waiting.
        """
        topic = (topic or "").strip()
        if not topic:
            logger.debug("Ignoring empty topic")
            return None
        if self.is_generating:
            logger.debug("Generation already in progress; ignoring %r", topic)
            return None

        self._request_seq += 1
        request_seq = self._request_seq
        difficulty = self.difficulty
        self.topic = topic
        self.status = AppStatus.GENERATING
        self.last_error = None

        try:
            curriculum = await self.gateway.generate_curriculum(topic, difficulty)
        except GenerationError as exc:
            if self._is_stale(request_seq, topic):
                return None
            logger.error("Curriculum generation failed: %s", exc, extra={"topic": topic})
            self._fail(exc)
            return None
        except Exception:
            if not self._is_stale(request_seq, topic):
                self._fail(None)
            raise

        if self._is_stale(request_seq, topic):
            logger.info("Discarding stale curriculum", extra={"topic": topic})
            return None

        self._discard_course()
        self.curriculum = curriculum
        self.quiz = QuizSession(
            curriculum.quiz,
            topic=curriculum.topic or topic,
            difficulty=difficulty,
            deep_dive=DeepDiveTrigger(self.gateway.generate_deep_dive_topics),
        )
        self.active_tab = LearningTab.CONCEPTS
        self.status = AppStatus.READY
        return curriculum

    def _fail(self, error: Optional[GenerationError]) -> None:
        self._discard_course()
        self.last_error = error
        self.status = AppStatus.ERROR

    def _is_stale(self, request_seq: int, topic: str) -> bool:
        return (
            request_seq != self._request_seq
            or self.status != AppStatus.GENERATING
            or topic != self.topic
        )

    async def select_deep_dive(self, topic: str) -> Optional[Curriculum]:
        """
        Throw away the current course and start over on a suggested topic.

        A blank suggestion, or one picked while generating, keeps the current
        course untouched.
        """
        if self.is_generating or not (topic or "").strip():
            return None
        self._discard_course()
        self.active_tab = LearningTab.CONCEPTS
        return await self.start(topic)

    def reset(self) -> None:
        """Back to IDLE; any pending response will be ignored."""
        self._request_seq += 1
        self._discard_course()
        self.last_error = None
        self.status = AppStatus.IDLE

    def set_difficulty(self, difficulty: DifficultyLevel) -> None:
        self.difficulty = DifficultyLevel(difficulty)

    def set_tab(self, tab: LearningTab) -> None:
        if self.status != AppStatus.READY:
            raise ValueError(f"No course to show (status {self.status.value})")
        self.active_tab = LearningTab(tab)
