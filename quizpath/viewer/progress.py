"""
Progress renderer - Chapter navigation, progress bar and notifications.

Provides:
- Status icons for the chapter list
- Overall progress bar
- Achievement banner and error page
"""

import html

from quizpath.classroom import Achievement, ChapterStatus, ProgressStats
from quizpath.schemas import Chapter


STATUS_ICONS = {
    ChapterStatus.LOCKED: "🔒",
    ChapterStatus.COMPLETED: "✅",
}


def get_progress_css() -> str:
    """Get CSS styles for progress display."""
    return """
    <style>
    .progress-summary {
        font-size: 0.95em;
        color: #333;
    }
    .progress-track {
        background: #e0e0e0;
        border-radius: 6px;
        height: 10px;
        overflow: hidden;
        margin-top: 0.4em;
    }
    .progress-fill {
        background: #1976D2;
        height: 100%;
    }
    .achievement-popup {
        background: #fff8e1;
        border: 2px solid #ffb300;
        border-radius: 12px;
        padding: 1em 1.5em;
        margin: 1em 0;
        text-align: center;
    }
    .achievement-popup__title {
        font-size: 1.3em;
        font-weight: 700;
    }
    .error-page {
        text-align: center;
        padding: 40px;
        color: #f44336;
    }
    </style>
    """


def chapter_icon(chapter: Chapter, status: ChapterStatus) -> str:
    """Icon shown next to a chapter in the navigation list."""
    return STATUS_ICONS.get(status, chapter.icon)


def chapter_label(chapter: Chapter, status: ChapterStatus) -> str:
    return f"{chapter_icon(chapter, status)} {chapter.title}".strip()


def render_progress_bar(completed: int, total: int) -> str:
    """Render "completed / total" with a filled bar."""
    percent = round(completed / total * 100, 1) if total > 0 else 0
    return f"""
    <div class="progress-summary">
        <strong>{completed}</strong> / <strong>{total}</strong> topics mastered
        <div class="progress-track"><div class="progress-fill" style="width: {percent}%"></div></div>
    </div>
    """


def render_stats(stats: ProgressStats) -> str:
    """Render score and answer counters."""
    return (
        '<div class="progress-summary">'
        f'Score: <strong>{stats.total_score}</strong> · '
        f'Correct: {stats.correct_answers} · Wrong: {stats.wrong_answers} · '
        f'Accuracy: {stats.accuracy}%'
        '</div>'
    )


def render_achievement(achievement: Achievement) -> str:
    return f"""
    <div class="achievement-popup">
        <div class="achievement-popup__title">🎉 {html.escape(achievement.title)}</div>
        <div class="achievement-popup__desc">{html.escape(achievement.description)}</div>
    </div>
    """


def render_error(message: str) -> str:
    return f'<div class="error-page"><h3>⚠️ {html.escape(message)}</h3></div>'
