"""
Topic renderer - Chapter header and knowledge card for the current topic.
"""

import html

from quizpath.schemas import Chapter, DIFFICULTY_LABELS, Topic


def get_topic_css() -> str:
    """Get CSS styles for the topic view."""
    return """
    <style>
    .chapter-header__title {
        display: flex;
        align-items: center;
        gap: 0.5em;
        margin-bottom: 0.2em;
    }
    .chapter-header__description {
        color: #666;
        margin-top: 0;
    }
    .difficulty-tag {
        font-size: 0.6em;
        border-radius: 12px;
        padding: 0.2em 0.8em;
        color: white;
    }
    .difficulty-tag--beginner { background: #388E3C; }
    .difficulty-tag--intermediate { background: #F57C00; }
    .difficulty-tag--expert { background: #7B1FA2; }
    .topic-progress {
        color: #666;
        font-size: 0.9em;
        margin: 0.8em 0;
    }
    .topic-progress--completed {
        color: #388E3C;
        font-weight: 600;
    }
    .knowledge-card {
        background: #fafafa;
        border-left: 4px solid #1976D2;
        padding: 1em 1.5em;
        border-radius: 0 8px 8px 0;
    }
    .knowledge-card__title {
        margin: 0;
        font-size: 1.6em;
    }
    .knowledge-card__english {
        color: #1976D2;
        font-style: italic;
        margin-top: 0.2em;
    }
    .knowledge-card__definition {
        line-height: 1.6;
    }
    .knowledge-card__tips {
        background: #fff3e0;
        padding: 0.8em 1em;
        border-radius: 8px;
        color: #e65100;
    }
    </style>
    """


def render_chapter_header(chapter: Chapter, topic: Topic) -> str:
    """Render the chapter title with the current topic's difficulty tag."""
    label = DIFFICULTY_LABELS[topic.difficulty]
    return f"""
    <div class="chapter-header">
        <h2 class="chapter-header__title">
            <span>{html.escape(chapter.icon)}</span>
            <span>{html.escape(chapter.title)}</span>
            <span class="difficulty-tag difficulty-tag--{topic.difficulty.value}">{label}</span>
        </h2>
        <p class="chapter-header__description">{html.escape(chapter.description)}</p>
    </div>
    """


def render_topic_position(position: int, total: int, completed: bool) -> str:
    """Render "Topic n / m" with a mastered mark."""
    css = "topic-progress topic-progress--completed" if completed else "topic-progress"
    mark = " ✅ Mastered" if completed else ""
    return f'<div class="{css}">Topic {position} / {total}{mark}</div>'


def render_knowledge_card(topic: Topic) -> str:
    """Render the flashcard for a topic."""
    parts = ['<div class="knowledge-card">']
    parts.append(f'<h3 class="knowledge-card__title">{html.escape(topic.term)}</h3>')
    if topic.english:
        parts.append(f'<p class="knowledge-card__english">{html.escape(topic.english)}</p>')
    parts.append(f'<p class="knowledge-card__definition">{html.escape(topic.definition)}</p>')
    if topic.tips:
        parts.append(
            '<div class="knowledge-card__tips"><strong>💡 Memory tip:</strong><br>'
            f'{html.escape(topic.tips)}</div>'
        )
    parts.append('</div>')
    return ''.join(parts)
