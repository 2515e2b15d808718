"""
QuizSession - One learner session over the engine and the progress store.

Owns:
- The live progress snapshot (persisted after every change)
- The answer attempt for the displayed topic (never persisted)
- Achievement notifications waiting to be shown
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from quizpath.schemas import ProgressSnapshot, TopicKey

from .engine import Achievement, ProgressEngine, ProgressStats, TopicOutcome
from .errors import ProgressImportError
from .store import ProgressStore

logger = logging.getLogger(__name__)


class QuizPhase(str, Enum):
    """Per-topic quiz state for the current visit."""
    UNANSWERED = "unanswered"
    CHECKED = "checked"


@dataclass
class TopicAttempt:
    """The learner's pick for the displayed topic."""
    key: TopicKey
    phase: QuizPhase = QuizPhase.UNANSWERED
    selected: Optional[int] = None
    correct: Optional[bool] = None

    @property
    def is_checked(self) -> bool:
        return self.phase == QuizPhase.CHECKED


class QuizSession:
    """
    Drive the engine from user intents and keep the store in sync.

    The attempt is keyed by the displayed TopicKey and starts over whenever
    the displayed topic changes.
    """

    def __init__(self, engine: ProgressEngine, store: ProgressStore):
        self.engine = engine
        self.store = store
        self.snapshot: ProgressSnapshot = engine.validate(ProgressSnapshot())
        self.attempt = TopicAttempt(key=engine.current_topic_key(self.snapshot))
        self.visit = 0  # bumped whenever the attempt starts over
        self._achievements: list[Achievement] = []

    def start(self) -> ProgressSnapshot:
        """Load stored progress, repair it and persist the repaired state."""
        self._commit(self.engine.validate(self.store.load()))
        logger.info(
            f"Session started at chapter {self.snapshot.current_chapter}, "
            f"topic {self.snapshot.current_topic_index + 1}"
        )
        return self.snapshot

    def _commit(self, snapshot: ProgressSnapshot):
        self.snapshot = self.store.save(snapshot)
        self._sync_attempt()

    def _sync_attempt(self):
        key = self.engine.current_topic_key(self.snapshot)
        if key != self.attempt.key:
            self._new_attempt(key)

    def _new_attempt(self, key: TopicKey):
        self.attempt = TopicAttempt(key=key)
        self.visit += 1

    # -------------------------------------------------------------------------
    # Current position
    # -------------------------------------------------------------------------

    @property
    def chapter(self):
        return self.engine.current_chapter(self.snapshot)

    @property
    def topic(self):
        return self.engine.current_topic(self.snapshot)

    @property
    def topic_completed(self) -> bool:
        return self.snapshot.is_completed(self.attempt.key)

    # -------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------

    def choose_option(self, index: int) -> bool:
        """
        Record the learner's pick for the displayed topic.

        Returns False if the answer was already checked.
        """
        if self.attempt.is_checked:
            return False
        self.attempt.selected = index
        return True

    def select_chapter(self, chapter_id: int) -> bool:
        """Switch chapter. Returns False if the chapter is locked."""
        updated = self.engine.select_chapter(self.snapshot, chapter_id)
        if updated is self.snapshot:
            return False
        self._commit(updated)
        return True

    def prev_topic(self) -> bool:
        updated = self.engine.prev_topic(self.snapshot)
        if updated is self.snapshot:
            return False
        self._commit(updated)
        return True

    def next_topic(self) -> TopicOutcome:
        """
        Check the pending answer or advance past a checked topic.

        Raises:
            NoSelectionError: no option chosen yet; nothing changes
        """
        updated, outcome = self.engine.next_topic(
            self.snapshot,
            self.attempt.selected,
            self.attempt.is_checked,
        )
        if outcome.checked:
            self.attempt.phase = QuizPhase.CHECKED
            self.attempt.correct = outcome.correct
            self._achievements.extend(outcome.achievements)
        else:
            # Advancing always ends the visit, even when there is nowhere to go
            self._new_attempt(self.attempt.key)
        self._commit(updated)
        return outcome

    # -------------------------------------------------------------------------
    # Notifications and progress
    # -------------------------------------------------------------------------

    def pop_achievements(self) -> list[Achievement]:
        """Return and clear pending achievements."""
        pending = self._achievements
        self._achievements = []
        return pending

    def progress(self) -> ProgressStats:
        return self.engine.completion_stats(self.snapshot)

    # -------------------------------------------------------------------------
    # Reset / Export / Import
    # -------------------------------------------------------------------------

    def reset(self) -> ProgressSnapshot:
        """Discard all progress."""
        self.snapshot = self.engine.validate(self.store.reset())
        self._achievements = []
        self._new_attempt(self.engine.current_topic_key(self.snapshot))
        return self.snapshot

    def export(self) -> str:
        return self.store.export(self.snapshot)

    def import_progress(self, text: str) -> bool:
        """Replace progress with an exported document. Returns success."""
        try:
            imported = self.store.import_text(text)
        except ProgressImportError as e:
            logger.warning(f"Import rejected: {e}")
            return False
        self._new_attempt(self.attempt.key)
        self._commit(self.engine.validate(imported))
        return True
