"""
Deep-dive trigger - follow-up topic suggestions after a strong quiz result.

Fired by QuizSession when it enters SUMMARY with a percentage above the
threshold. At most one fetch per summary instance: a fetch is skipped while
one is in flight, once results are present, or once an attempt has failed.
Failures leave the list empty and are never retried automatically. Blank
suggestions are dropped.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional

from mindflow.ai.errors import GenerationError
from mindflow.logging_config import get_logger
from mindflow.orchestration.quiz_state_machine import DEEP_DIVE_THRESHOLD

logger = get_logger(__name__)

FetchTopics = Callable[[str, str], Awaitable[List[str]]]


class DeepDiveTrigger:
    """Score-gated, once-per-summary fetch of follow-up topics."""

    def __init__(self, fetch_topics: FetchTopics):
        self._fetch_topics = fetch_topics
        self.topics: List[str] = []
        self.loading = False
        self.attempted = False
        self._epoch = 0
        self._task: Optional["asyncio.Task[List[str]]"] = None

    def should_fire(self, percentage: int) -> bool:
        return (
            percentage > DEEP_DIVE_THRESHOLD
            and not self.topics
            and not self.loading
            and not self.attempted
        )

    def schedule(self, topic: str, difficulty: str, percentage: int) -> Optional["asyncio.Task[List[str]]"]:
        """
        Start the fetch in the background if allowed.

        Returns the task, or None when the fetch was suppressed. Outside a
        running event loop nothing is started and the trigger stays armed.
        """
        if not self.should_fire(percentage):
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; deep-dive fetch not started", extra={"topic": topic})
            return None
        self.loading = True
        self.attempted = True
        self._task = loop.create_task(
            self.fire(topic, difficulty, self._epoch)
        )
        return self._task

    async def fire(self, topic: str, difficulty: str, epoch: int) -> List[str]:
        """Fetch topics; results from an older epoch are dropped."""
        try:
            topics = await self._fetch_topics(topic, difficulty)
        except GenerationError as exc:
            logger.warning("Failed to generate deep-dive topics: %s", exc, extra={"topic": topic})
            topics = []
        except Exception:
            logger.exception("Unexpected error fetching deep-dive topics", extra={"topic": topic})
            topics = []
        finally:
            if epoch == self._epoch:
                self.loading = False

        if epoch != self._epoch:
            logger.debug("Discarding stale deep-dive topics", extra={"topic": topic})
            return []
        self.topics = [t.strip() for t in topics if t and t.strip()]
        return self.topics

    async def wait(self) -> List[str]:
        """Await the in-flight fetch, if any, and return the current topics."""
        if self._task is not None:
            await self._task
        return self.topics

    def clear(self) -> None:
        """Forget suggestions and re-arm; an in-flight result becomes stale."""
        self._epoch += 1
        self.topics = []
        self.loading = False
        self.attempted = False
        self._task = None
