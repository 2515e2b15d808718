"""
ProgressEngine - Chapter unlocking, topic navigation and answer scoring.

Provides:
- Snapshot validation and migration against the knowledge base
- Chapter selection and prev/next topic navigation
- Two-step quiz evaluation (check, then advance)
- Chapter completion, unlocking and achievement events
- Completion statistics for progress display

Every transition takes a snapshot and returns a new one; the input is never
modified, so a transition that raises leaves the caller's snapshot intact.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from quizpath.schemas import (
    Chapter,
    KnowledgeBase,
    ProgressSnapshot,
    Topic,
    TopicKey,
    difficulty_score,
    migrate_state,
)

from .errors import NoSelectionError

logger = logging.getLogger(__name__)


class ChapterStatus(str, Enum):
    """Chapter status for navigation display."""
    LOCKED = "locked"           # Previous chapter not finished
    COMPLETED = "completed"     # Every topic answered correctly
    CURRENT = "current"         # Being studied
    AVAILABLE = "available"     # Unlocked, not current


@dataclass(frozen=True)
class Achievement:
    """Notification emitted when a chapter is finished and the next unlocked."""
    title: str
    chapter_title: str
    description: str


@dataclass
class TopicOutcome:
    """Result of a next-topic request."""
    checked: bool                  # answer was evaluated on this call
    correct: Optional[bool] = None
    advanced: bool = False         # position moved
    achievements: list[Achievement] = field(default_factory=list)


@dataclass
class ChapterProgress:
    chapter_id: int
    title: str
    completed: int
    total: int
    status: ChapterStatus


@dataclass
class ProgressStats:
    completed: int
    total: int
    percent: float
    total_score: int
    correct_answers: int
    wrong_answers: int
    accuracy: float
    chapters: list[ChapterProgress]


def _unique(items: list) -> list:
    return list(dict.fromkeys(items))


class ProgressEngine:
    """
    Pure state transitions over a ProgressSnapshot.

    Holds only the read-only knowledge base; storage and rendering belong to
    the caller.
    """

    def __init__(self, knowledge_base: KnowledgeBase):
        self.knowledge_base = knowledge_base

    # -------------------------------------------------------------------------
    # Validation and migration
    # -------------------------------------------------------------------------

    def validate(self, snapshot: ProgressSnapshot) -> ProgressSnapshot:
        """
        Repair a snapshot so every invariant holds. Never raises.

        - current chapter outside [1, N] resets to 1
        - topic index outside the chapter resets to 0
        - chapter 1 is always unlocked; unknown chapter ids are dropped
        - completed topics are de-duplicated but never removed
        """
        kb = self.knowledge_base
        state = snapshot.model_copy(deep=True)

        if not kb.has_chapter(state.current_chapter):
            state.current_chapter = 1

        chapter = kb.get_chapter(state.current_chapter)
        if not 0 <= state.current_topic_index < chapter.topic_count:
            state.current_topic_index = 0

        unlocked = [cid for cid in _unique(state.unlocked_chapters) if kb.has_chapter(cid)]
        if 1 not in unlocked:
            unlocked.append(1)
        state.unlocked_chapters = unlocked

        state.completed_topics = _unique(state.completed_topics)
        state.total_score = max(0, state.total_score)
        stats = state.statistics
        stats.correct_answers = max(0, stats.correct_answers)
        stats.wrong_answers = max(0, stats.wrong_answers)
        return state

    def migrate(self, raw) -> ProgressSnapshot:
        """Normalize raw loaded data and validate it against the knowledge base."""
        return self.validate(migrate_state(raw))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def current_chapter(self, snapshot: ProgressSnapshot) -> Chapter:
        chapter = self.knowledge_base.get_chapter(snapshot.current_chapter)
        if chapter is None:
            chapter = self.knowledge_base.chapters[0]
        return chapter

    def current_topic(self, snapshot: ProgressSnapshot) -> Topic:
        chapter = self.current_chapter(snapshot)
        index = snapshot.current_topic_index
        if not 0 <= index < chapter.topic_count:
            index = 0
        return chapter.topics[index]

    def current_topic_key(self, snapshot: ProgressSnapshot) -> TopicKey:
        return TopicKey.for_topic(self.current_chapter(snapshot), self.current_topic(snapshot))

    def topic_position(self, snapshot: ProgressSnapshot) -> tuple[int, int]:
        """Current topic position as (1-based index, topics in chapter)."""
        chapter = self.current_chapter(snapshot)
        return (snapshot.current_topic_index + 1, chapter.topic_count)

    # -------------------------------------------------------------------------
    # Completion and unlocking
    # -------------------------------------------------------------------------

    def is_chapter_completed(self, chapter: Chapter, snapshot: ProgressSnapshot) -> bool:
        return all(
            snapshot.is_completed(TopicKey.for_topic(chapter, topic))
            for topic in chapter.topics
        )

    def unlock_next_chapter(
        self,
        snapshot: ProgressSnapshot,
        completed_chapter_id: int,
    ) -> tuple[ProgressSnapshot, Optional[Achievement]]:
        """
        Unlock the chapter after ``completed_chapter_id``.

        Returns the new snapshot and an Achievement if a chapter was newly
        unlocked, otherwise None.
        """
        state = snapshot.model_copy(deep=True)
        next_id = completed_chapter_id + 1
        if not self.knowledge_base.has_chapter(next_id) or state.is_unlocked(next_id):
            return state, None

        state.unlocked_chapters.append(next_id)
        completed = self.knowledge_base.get_chapter(completed_chapter_id)
        title = completed.title if completed else str(completed_chapter_id)
        logger.info(f"Chapter {completed_chapter_id} completed, unlocked chapter {next_id}")
        return state, Achievement(
            title="Chapter complete!",
            chapter_title=title,
            description=f"You finished {title}. The next chapter is now unlocked!",
        )

    def unknown_completed_topics(self, snapshot: ProgressSnapshot) -> list[str]:
        """Completed topic keys that no longer match a topic in the knowledge base."""
        unknown = []
        for text in snapshot.completed_topics:
            try:
                key = TopicKey.parse(text)
            except ValueError:
                unknown.append(text)
                continue
            chapter = self.knowledge_base.get_chapter(key.chapter_id)
            if chapter is None or chapter.topic_index(key.term) is None:
                unknown.append(text)
        return unknown

    def chapter_status(self, chapter: Chapter, snapshot: ProgressSnapshot) -> ChapterStatus:
        if not snapshot.is_unlocked(chapter.id):
            return ChapterStatus.LOCKED
        if self.is_chapter_completed(chapter, snapshot):
            return ChapterStatus.COMPLETED
        if chapter.id == snapshot.current_chapter:
            return ChapterStatus.CURRENT
        return ChapterStatus.AVAILABLE

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def select_chapter(self, snapshot: ProgressSnapshot, chapter_id: int) -> ProgressSnapshot:
        """
        Move to a chapter, landing on its first unfinished topic.

        Locked chapters are a no-op: the same snapshot is returned.
        """
        if not snapshot.is_unlocked(chapter_id):
            return snapshot
        chapter = self.knowledge_base.get_chapter(chapter_id)
        if chapter is None:
            return snapshot

        state = snapshot.model_copy(deep=True)
        state.current_chapter = chapter_id
        state.current_topic_index = 0
        for index, topic in enumerate(chapter.topics):
            if not state.is_completed(TopicKey.for_topic(chapter, topic)):
                state.current_topic_index = index
                break
        return self.validate(state)

    def prev_topic(self, snapshot: ProgressSnapshot) -> ProgressSnapshot:
        """Step back one topic within the current chapter."""
        if snapshot.current_topic_index <= 0:
            return snapshot
        state = snapshot.model_copy(deep=True)
        state.current_topic_index -= 1
        return self.validate(state)

    def next_topic(
        self,
        snapshot: ProgressSnapshot,
        selected_answer: Optional[int],
        already_checked: bool = False,
    ) -> tuple[ProgressSnapshot, TopicOutcome]:
        """
        Check the current answer, or advance if it was already checked.

        An unfinished topic takes two calls: the first evaluates the
        selected answer without moving, the second (with
        ``already_checked=True``) advances. Completed topics advance at once.

        Raises:
            NoSelectionError: unfinished, unchecked topic and no answer given
        """
        state = self.validate(snapshot)
        chapter = self.current_chapter(state)
        topic = self.current_topic(state)
        key = TopicKey.for_topic(chapter, topic)

        if not state.is_completed(key) and not already_checked:
            if selected_answer is None:
                raise NoSelectionError(str(key))
            return self._check_answer(state, chapter, topic, key, selected_answer)

        advanced = self._advance(state, chapter)
        return self.validate(state), TopicOutcome(checked=False, advanced=advanced)

    def _check_answer(
        self,
        state: ProgressSnapshot,
        chapter: Chapter,
        topic: Topic,
        key: TopicKey,
        selected_answer: int,
    ) -> tuple[ProgressSnapshot, TopicOutcome]:
        correct = topic.quiz.is_correct(selected_answer)
        achievements = []

        if correct:
            state.completed_topics.append(str(key))
            state.total_score += difficulty_score(topic.difficulty)
            state.statistics.correct_answers += 1
            if self.is_chapter_completed(chapter, state):
                state, achievement = self.unlock_next_chapter(state, chapter.id)
                if achievement:
                    achievements.append(achievement)
        else:
            state.statistics.wrong_answers += 1

        logger.debug(f"Checked {key}: {'correct' if correct else 'wrong'}")
        outcome = TopicOutcome(checked=True, correct=correct, achievements=achievements)
        return self.validate(state), outcome

    def _advance(self, state: ProgressSnapshot, chapter: Chapter) -> bool:
        """Move to the next topic or the next unlocked chapter, in place."""
        if state.current_topic_index < chapter.topic_count - 1:
            state.current_topic_index += 1
            return True

        next_id = state.current_chapter + 1
        if self.knowledge_base.has_chapter(next_id) and state.is_unlocked(next_id):
            state.current_chapter = next_id
            state.current_topic_index = 0
            return True
        return False

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def completion_stats(self, snapshot: ProgressSnapshot) -> ProgressStats:
        """Completed/total counts overall and per chapter."""
        chapters = []
        completed_total = 0
        for chapter in self.knowledge_base.chapters:
            done = sum(
                1 for topic in chapter.topics
                if snapshot.is_completed(TopicKey.for_topic(chapter, topic))
            )
            completed_total += done
            chapters.append(ChapterProgress(
                chapter_id=chapter.id,
                title=chapter.title,
                completed=done,
                total=chapter.topic_count,
                status=self.chapter_status(chapter, snapshot),
            ))

        total = self.knowledge_base.total_topics
        stats = snapshot.statistics
        answered = stats.correct_answers + stats.wrong_answers
        return ProgressStats(
            completed=completed_total,
            total=total,
            percent=round(completed_total / total * 100, 1) if total > 0 else 0.0,
            total_score=snapshot.total_score,
            correct_answers=stats.correct_answers,
            wrong_answers=stats.wrong_answers,
            accuracy=round(stats.correct_answers / answered * 100, 1) if answered > 0 else 0.0,
            chapters=chapters,
        )
