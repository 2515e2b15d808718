"""
Viewer tests: HTML rendering of topics, quizzes and progress.
"""

from quizpath.classroom import Achievement, ChapterStatus
from quizpath.schemas import Quiz, Topic
from quizpath.viewer import (
    chapter_label,
    format_option,
    option_letter,
    render_achievement,
    render_chapter_header,
    render_error,
    render_feedback,
    render_knowledge_card,
    render_progress_bar,
    render_quiz,
    render_topic_position,
)


QUIZ = Quiz(question="Pick <b>", options=["one", "two", "three"], answer=1)


class TestQuizRendering:
    """Test quiz option and feedback rendering."""

    def test_option_letters(self):
        assert option_letter(0) == "A"
        assert option_letter(3) == "D"
        assert format_option(1, "two") == "B. two"

    def test_escapes_question(self):
        assert "Pick &lt;b&gt;" in render_quiz(QUIZ)

    def test_selected_unchecked(self):
        out = render_quiz(QUIZ, selected=0)
        assert 'class="quiz-option quiz-option--selected" data-index="0"' in out
        assert "quiz-option--correct" not in out

    def test_checked_wrong_marks_both(self):
        out = render_quiz(QUIZ, selected=0, checked=True)
        assert "quiz-option--wrong" in out
        assert 'class="quiz-option quiz-option--correct" data-index="1"' in out

    def test_feedback(self):
        assert "Correct" in render_feedback(QUIZ, True)
        wrong = render_feedback(QUIZ, False)
        assert "quiz-feedback--wrong" in wrong
        assert "answer is B" in wrong


class TestTopicRendering:
    """Test the chapter header and knowledge card."""

    def test_knowledge_card(self, knowledge_base):
        topic = knowledge_base.get_chapter(1).topics[0]
        out = render_knowledge_card(topic)
        assert "Model" in out
        assert "Remember Model" in out

    def test_card_without_tips(self):
        topic = Topic(term="X", definition="d", quiz=QUIZ)
        assert "knowledge-card__tips" not in render_knowledge_card(topic)

    def test_chapter_header(self, knowledge_base):
        chapter = knowledge_base.get_chapter(1)
        out = render_chapter_header(chapter, chapter.topics[1])
        assert "Basics" in out
        assert "difficulty-tag--intermediate" in out
        assert "Intermediate" in out

    def test_topic_position(self):
        assert "Topic 2 / 3" in render_topic_position(2, 3, False)
        assert "Mastered" in render_topic_position(2, 3, True)


class TestProgressRendering:
    """Test navigation labels and progress widgets."""

    def test_chapter_labels(self, knowledge_base):
        chapter = knowledge_base.get_chapter(2)
        assert chapter_label(chapter, ChapterStatus.LOCKED) == "🔒 Networks"
        assert chapter_label(chapter, ChapterStatus.COMPLETED) == "✅ Networks"
        assert chapter_label(chapter, ChapterStatus.AVAILABLE) == "🧠 Networks"

    def test_progress_bar(self):
        out = render_progress_bar(1, 4)
        assert "width: 25.0%" in out
        assert "width: 0%" in render_progress_bar(0, 0)

    def test_achievement(self):
        achievement = Achievement(title="Done", chapter_title="Basics", description="You <did> it")
        out = render_achievement(achievement)
        assert "Done" in out
        assert "You &lt;did&gt; it" in out

    def test_error(self):
        assert "&lt;oops&gt;" in render_error("<oops>")
