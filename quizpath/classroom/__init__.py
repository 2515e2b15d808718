"""
QuizPath Classroom - Runtime components for studying the knowledge base.

This module provides:
- KnowledgeBaseLoader: Load the chapter/topic catalog
- ProgressEngine: Unlocking, navigation and scoring rules
- ProgressStore: Persist the progress snapshot
- QuizSession: Tie engine, store and the current quiz attempt together
"""

from .errors import (
    QuizPathError,
    KnowledgeBaseError,
    NoSelectionError,
    ProgressImportError,
)

from .loader import (
    KnowledgeBaseLoader,
    load_knowledge_base,
)

from .engine import (
    ProgressEngine,
    ChapterStatus,
    Achievement,
    TopicOutcome,
    ChapterProgress,
    ProgressStats,
)

from .store import (
    ProgressStore,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
    STORAGE_KEY,
    export_filename,
)

from .session import (
    QuizSession,
    QuizPhase,
    TopicAttempt,
)

__all__ = [
    # Errors
    "QuizPathError",
    "KnowledgeBaseError",
    "NoSelectionError",
    "ProgressImportError",
    # Loader
    "KnowledgeBaseLoader",
    "load_knowledge_base",
    # Engine
    "ProgressEngine",
    "ChapterStatus",
    "Achievement",
    "TopicOutcome",
    "ChapterProgress",
    "ProgressStats",
    # Store
    "ProgressStore",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    "STORAGE_KEY",
    "export_filename",
    # Session
    "QuizSession",
    "QuizPhase",
    "TopicAttempt",
]
