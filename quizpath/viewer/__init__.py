"""
QuizPath Viewer - Rendering components for the study screen.

This module provides:
- Topic header and knowledge card rendering
- Quiz options and answer feedback
- Chapter navigation labels, progress bar and notifications
"""

from .topic import (
    get_topic_css,
    render_chapter_header,
    render_topic_position,
    render_knowledge_card,
)

from .quiz import (
    get_quiz_css,
    option_letter,
    format_option,
    render_quiz,
    render_feedback,
)

from .progress import (
    get_progress_css,
    STATUS_ICONS,
    chapter_icon,
    chapter_label,
    render_progress_bar,
    render_stats,
    render_achievement,
    render_error,
)

__all__ = [
    # Topic
    "get_topic_css",
    "render_chapter_header",
    "render_topic_position",
    "render_knowledge_card",
    # Quiz
    "get_quiz_css",
    "option_letter",
    "format_option",
    "render_quiz",
    "render_feedback",
    # Progress
    "get_progress_css",
    "STATUS_ICONS",
    "chapter_icon",
    "chapter_label",
    "render_progress_bar",
    "render_stats",
    "render_achievement",
    "render_error",
]
