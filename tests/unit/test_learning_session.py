"""Unit tests for LearningSession against a fake gateway."""

import asyncio
from typing import List

import pytest

from mindflow.ai.errors import ProxyError
from mindflow.orchestration.learning_session import AppStatus, LearningSession, LearningTab
from mindflow.schemas.curriculum import Curriculum, DifficultyLevel


class FakeGateway:
    """In-memory gateway; each curriculum call can be held open with `gate`."""

    def __init__(self, curriculum: Curriculum, error: Exception = None):
        self.curriculum = curriculum
        self.error = error
        self.curriculum_calls = []
        self.deep_dive_calls = []
        self.gate = asyncio.Event()
        self.gate.set()

    async def generate_curriculum(self, topic: str, difficulty: DifficultyLevel) -> Curriculum:
        self.curriculum_calls.append((topic, difficulty))
        await self.gate.wait()
        if self.error:
            raise self.error
        return self.curriculum.model_copy(update={"topic": topic})

    async def generate_deep_dive_topics(self, current_topic: str, difficulty: DifficultyLevel) -> List[str]:
        self.deep_dive_calls.append((current_topic, difficulty))
        return ["Chlorophyll", "C4 plants"]


class TestStart:
    """Tests for starting a course."""

    @pytest.mark.asyncio
    async def test_success_goes_ready(self, curriculum):
        gateway = FakeGateway(curriculum)
        session = LearningSession(gateway)

        result = await session.start("  Photosynthesis ")

        assert result is session.curriculum
        assert session.status == AppStatus.READY
        assert session.active_tab == LearningTab.CONCEPTS
        assert gateway.curriculum_calls == [("Photosynthesis", DifficultyLevel.UNDERGRAD)]
        assert session.quiz.total == 5

    @pytest.mark.asyncio
    async def test_blank_topic_is_a_no_op(self, curriculum):
        gateway = FakeGateway(curriculum)
        session = LearningSession(gateway)

        assert await session.start("   ") is None
        assert session.status == AppStatus.IDLE
        assert gateway.curriculum_calls == []

    @pytest.mark.asyncio
    async def test_failure_goes_error(self, curriculum):
        gateway = FakeGateway(curriculum, error=ProxyError(429, "Perplexity API error: 429 - slow down"))
        session = LearningSession(gateway)

        assert await session.start("Photosynthesis") is None
        assert session.status == AppStatus.ERROR
        assert session.curriculum is None
        assert session.last_error.status_code == 429

    @pytest.mark.asyncio
    async def test_second_start_while_generating_is_ignored(self, curriculum):
        gateway = FakeGateway(curriculum)
        gateway.gate.clear()
        session = LearningSession(gateway)

        first = asyncio.create_task(session.start("Photosynthesis"))
        await asyncio.sleep(0)
        assert session.is_generating
        assert await session.start("Mitosis") is None

        gateway.gate.set()
        await first
        assert len(gateway.curriculum_calls) == 1
        assert session.curriculum.topic == "Photosynthesis"

    @pytest.mark.asyncio
    async def test_response_after_reset_is_discarded(self, curriculum):
        gateway = FakeGateway(curriculum)
        gateway.gate.clear()
        session = LearningSession(gateway)

        pending = asyncio.create_task(session.start("Photosynthesis"))
        await asyncio.sleep(0)
        session.reset()
        gateway.gate.set()

        assert await pending is None
        assert session.status == AppStatus.IDLE
        assert session.curriculum is None

    @pytest.mark.asyncio
    async def test_difficulty_is_sent_explicitly(self, curriculum):
        gateway = FakeGateway(curriculum)
        session = LearningSession(gateway)
        session.set_difficulty("5 Year Old (ELI5)")

        await session.start("Photosynthesis")
        assert gateway.curriculum_calls[0][1] is DifficultyLevel.CHILD


class TestTabsAndLayout:

    def test_tabs_need_a_course(self, curriculum):
        session = LearningSession(FakeGateway(curriculum))
        with pytest.raises(ValueError):
            session.set_tab(LearningTab.QUIZ)

    @pytest.mark.asyncio
    async def test_tab_switch_and_layout(self, curriculum):
        session = LearningSession(FakeGateway(curriculum))
        assert session.flowchart_layout is None

        await session.start("Photosynthesis")
        session.set_tab("flow")
        assert session.active_tab == LearningTab.FLOW

        layout = session.flowchart_layout
        assert [n.id for n in layout.nodes] == ["light", "water", "co2", "sugar"]
        assert len(layout.edges) == 4
        assert session.flowchart_layout is layout


class TestDeepDive:

    @pytest.mark.asyncio
    async def test_perfect_quiz_then_select_topic(self, curriculum):
        gateway = FakeGateway(curriculum)
        session = LearningSession(gateway, difficulty=DifficultyLevel.PROFESSIONAL)
        await session.start("Photosynthesis")

        quiz = session.quiz
        for question in curriculum.quiz:
            quiz.select_option(question.correct_index)
            quiz.advance()
        topics = await quiz.deep_dive.wait()

        assert quiz.percentage == 100
        assert gateway.deep_dive_calls == [("Photosynthesis", DifficultyLevel.PROFESSIONAL)]
        assert topics == ["Chlorophyll", "C4 plants"]

        session.set_tab(LearningTab.QUIZ)
        await session.select_deep_dive(topics[0])
        assert session.status == AppStatus.READY
        assert session.curriculum.topic == "Chlorophyll"
        assert session.active_tab == LearningTab.CONCEPTS
        assert session.quiz is not quiz


class TestFailureModes:

    def test_unknown_difficulty_rejected_up_front(self, curriculum):
        with pytest.raises(ValueError):
            LearningSession(FakeGateway(curriculum), difficulty="Expert")

    def test_difficulty_label_is_coerced(self, curriculum):
        session = LearningSession(FakeGateway(curriculum), difficulty="High School Student")
        assert session.difficulty is DifficultyLevel.TEENAGER

    @pytest.mark.asyncio
    async def test_unexpected_error_does_not_leave_session_generating(self, curriculum):
        gateway = FakeGateway(curriculum, error=RuntimeError("boom"))
        session = LearningSession(gateway)

        with pytest.raises(RuntimeError):
            await session.start("Photosynthesis")
        assert session.status == AppStatus.ERROR

        gateway.error = None
        await session.start("Photosynthesis")
        assert session.status == AppStatus.READY
        assert len(gateway.curriculum_calls) == 2

    @pytest.mark.asyncio
    async def test_blank_suggestion_keeps_current_course(self, curriculum):
        gateway = FakeGateway(curriculum)
        session = LearningSession(gateway)
        await session.start("Photosynthesis")
        course, quiz = session.curriculum, session.quiz
        session.set_tab(LearningTab.QUIZ)

        assert await session.select_deep_dive("   ") is None

        assert session.status == AppStatus.READY
        assert session.curriculum is course
        assert session.quiz is quiz
        assert session.active_tab == LearningTab.QUIZ
        assert len(gateway.curriculum_calls) == 1
