"""
Quiz renderer - Multiple-choice quiz display and answer feedback.

Provides:
- Option list with selected/correct/wrong marks
- Feedback after an answer is checked
"""

import html
from typing import Optional

from quizpath.schemas import Quiz


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #1976D2;
    }
    .quiz-title {
        font-weight: 600;
        color: #1565C0;
        font-size: 1.1em;
        margin-bottom: 0.8em;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #333;
        margin-bottom: 1em;
        line-height: 1.6;
    }
    .quiz-option {
        background: white;
        border: 1px solid #ddd;
        border-radius: 8px;
        padding: 0.6em 1em;
        margin: 0.4em 0;
    }
    .quiz-option--selected {
        border-color: #1976D2;
        background: #bbdefb;
    }
    .quiz-option--correct {
        border-color: #388E3C;
        background: #e8f5e9;
    }
    .quiz-option--wrong {
        border-color: #d32f2f;
        background: #ffebee;
    }
    .quiz-feedback {
        border-radius: 8px;
        padding: 0.8em 1em;
        margin-top: 1em;
        font-weight: 600;
    }
    .quiz-feedback--correct {
        background: #e8f5e9;
        color: #2e7d32;
    }
    .quiz-feedback--wrong {
        background: #ffebee;
        color: #c62828;
    }
    </style>
    """


def option_letter(index: int) -> str:
    """Letter label for an option index (0 -> A)."""
    return chr(ord("A") + index)


def format_option(index: int, text: str) -> str:
    return f"{option_letter(index)}. {text}"


def render_quiz(
    quiz: Quiz,
    selected: Optional[int] = None,
    checked: bool = False,
) -> str:
    """
    Render the quiz question and its options.

    Args:
        quiz: Quiz to display
        selected: Index the learner picked, if any
        checked: Whether the answer has been evaluated

    Returns:
        HTML string for the quiz
    """
    parts = ['<div class="quiz-container">']
    parts.append('<div class="quiz-title">Quick Quiz</div>')
    parts.append(f'<div class="quiz-question">{html.escape(quiz.question)}</div>')

    for i, option in enumerate(quiz.options):
        classes = ["quiz-option"]
        if i == selected:
            classes.append("quiz-option--selected")
        if checked:
            if i == quiz.answer:
                classes.append("quiz-option--correct")
            elif i == selected:
                classes.append("quiz-option--wrong")
        parts.append(
            f'<div class="{" ".join(classes)}" data-index="{i}">'
            f'{html.escape(format_option(i, option))}</div>'
        )

    parts.append('</div>')
    return ''.join(parts)


def render_feedback(quiz: Quiz, correct: bool) -> str:
    """Render the message shown after an answer is checked."""
    if correct:
        return '<div class="quiz-feedback quiz-feedback--correct">✅ Correct!</div>'
    return (
        '<div class="quiz-feedback quiz-feedback--wrong">'
        f'❌ Not quite. The correct answer is {option_letter(quiz.answer)}.'
        '</div>'
    )
