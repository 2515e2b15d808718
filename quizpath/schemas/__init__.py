"""
QuizPath Schemas - Pydantic models for the flashcard learning tool.

This module exports all schema classes for:
- Knowledge: chapters, topics, quizzes, difficulty scoring
- Progress: topic keys, the persisted progress snapshot, migration
"""

# Knowledge base schemas
from .knowledge import (
    Difficulty,
    Quiz,
    Topic,
    Chapter,
    KnowledgeBase,
    DIFFICULTY_SCORES,
    DIFFICULTY_LABELS,
    difficulty_score,
)

# Progress schemas
from .progress import (
    TopicKey,
    Statistics,
    ProgressSnapshot,
    SNAPSHOT_VERSION,
    default_snapshot,
    migrate_state,
)

__all__ = [
    # Knowledge
    'Difficulty',
    'Quiz',
    'Topic',
    'Chapter',
    'KnowledgeBase',
    'DIFFICULTY_SCORES',
    'DIFFICULTY_LABELS',
    'difficulty_score',
    # Progress
    'TopicKey',
    'Statistics',
    'ProgressSnapshot',
    'SNAPSHOT_VERSION',
    'default_snapshot',
    'migrate_state',
]
