"""
Knowledge base schemas for QuizPath.

Defines Pydantic models for the static study catalog:
- Chapters with an unlock gate
- Topics (flashcards) with a multiple-choice quiz
- Difficulty tiers and their score values
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


# Points awarded for answering a topic's quiz correctly
DIFFICULTY_SCORES = {
    Difficulty.BEGINNER: 10,
    Difficulty.INTERMEDIATE: 20,
    Difficulty.EXPERT: 30,
}

DIFFICULTY_LABELS = {
    Difficulty.BEGINNER: "Beginner",
    Difficulty.INTERMEDIATE: "Intermediate",
    Difficulty.EXPERT: "Expert",
}


def difficulty_score(difficulty: Difficulty | str) -> int:
    """Score awarded for a correct answer at the given difficulty."""
    return DIFFICULTY_SCORES[Difficulty(difficulty)]


# -----------------------------------------------------------------------------
# Topic and quiz
# -----------------------------------------------------------------------------

class Quiz(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    options: list[str] = Field(..., min_length=2)
    answer: int = Field(..., ge=0)  # index into options

    @model_validator(mode="after")
    def answer_in_options(self):
        if self.answer >= len(self.options):
            raise ValueError(
                f"Quiz answer index {self.answer} out of range for {len(self.options)} options"
            )
        return self

    def is_correct(self, selected: int) -> bool:
        return selected == self.answer


class Topic(BaseModel):
    """A single flashcard: a term, its explanation and one quiz."""
    model_config = ConfigDict(frozen=True)

    term: str = Field(..., min_length=1)   # unique within its chapter
    english: str = ""
    definition: str
    tips: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    quiz: Quiz


# -----------------------------------------------------------------------------
# Chapters
# -----------------------------------------------------------------------------

class Chapter(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    title: str
    icon: str = ""
    description: str = ""
    topics: list[Topic] = Field(..., min_length=1)

    @field_validator("topics")
    @classmethod
    def terms_unique(cls, v):
        seen = set()
        for topic in v:
            if topic.term in seen:
                raise ValueError(f"Duplicate topic term in chapter: {topic.term}")
            seen.add(topic.term)
        return v

    @property
    def topic_count(self) -> int:
        return len(self.topics)

    def topic_index(self, term: str) -> Optional[int]:
        """Position of a topic by term, or None if absent."""
        for idx, topic in enumerate(self.topics):
            if topic.term == term:
                return idx
        return None


class KnowledgeBase(BaseModel):
    """
    The full study catalog, loaded once per session.

    Chapter ids must form the dense sequence 1..N in document order so that
    "next chapter" is always ``id + 1``.
    """
    model_config = ConfigDict(frozen=True)

    chapters: list[Chapter] = Field(..., min_length=1)

    @field_validator("chapters")
    @classmethod
    def ids_dense(cls, v):
        for expected, chapter in enumerate(v, start=1):
            if chapter.id != expected:
                raise ValueError(
                    f"Chapter ids must run 1..N in order; found {chapter.id} at position {expected}"
                )
        return v

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    @property
    def total_topics(self) -> int:
        return sum(chapter.topic_count for chapter in self.chapters)

    def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        """Get a chapter by id, or None if out of range."""
        if 1 <= chapter_id <= len(self.chapters):
            return self.chapters[chapter_id - 1]
        return None

    def has_chapter(self, chapter_id: int) -> bool:
        return self.get_chapter(chapter_id) is not None
