"""
QuizSession tests: attempt state, persistence and achievements.
"""

import json

import pytest

from quizpath.classroom import NoSelectionError, ProgressStore, QuizPhase, QuizSession
from quizpath.schemas import ProgressSnapshot, TopicKey


class TestSessionStart:
    """Test session start-up."""

    def test_start_with_defaults(self, session):
        assert session.snapshot.current_chapter == 1
        assert session.attempt.key == TopicKey(1, "Model")
        assert session.attempt.phase == QuizPhase.UNANSWERED

    def test_start_repairs_and_persists(self, engine, store):
        store.save(ProgressSnapshot(current_chapter=9, unlocked_chapters=[]))
        session = QuizSession(engine, store)
        session.start()
        assert session.snapshot.current_chapter == 1
        assert store.load().unlocked_chapters == [1]


class TestSessionQuiz:
    """Test the check-then-advance flow through the session."""

    def test_next_without_choice(self, session):
        before = session.snapshot
        with pytest.raises(NoSelectionError):
            session.next_topic()
        assert session.snapshot is before
        assert session.attempt.phase == QuizPhase.UNANSWERED

    def test_check_then_advance(self, session, store):
        session.choose_option(1)
        outcome = session.next_topic()
        assert outcome.checked and outcome.correct
        assert session.attempt.is_checked
        assert session.attempt.correct is True
        assert store.load().total_score == 10

        outcome = session.next_topic()
        assert outcome.advanced
        assert session.attempt.key == TopicKey(1, "Overfitting")
        assert session.attempt.phase == QuizPhase.UNANSWERED
        assert session.attempt.selected is None
        assert store.load().current_topic_index == 1

    def test_choice_locked_after_check(self, session):
        session.choose_option(0)
        session.next_topic()
        assert session.choose_option(1) is False
        assert session.attempt.selected == 0

    def test_wrong_answer_then_advance(self, session):
        session.choose_option(0)
        outcome = session.next_topic()
        assert outcome.correct is False
        session.next_topic()
        assert session.snapshot.current_topic_index == 1
        assert not session.snapshot.is_completed("1-Model")
        assert session.snapshot.statistics.wrong_answers == 1

    def test_stuck_at_end_allows_retry(self, session):
        session.choose_option(1)
        session.next_topic()
        session.next_topic()
        # Overfitting: wrong answer, next chapter still locked
        session.choose_option(0)
        session.next_topic()
        outcome = session.next_topic()
        assert not outcome.advanced
        assert session.attempt.phase == QuizPhase.UNANSWERED
        session.choose_option(2)
        outcome = session.next_topic()
        assert outcome.correct is True

    def test_restarted_attempt_is_a_new_visit(self, session):
        session.choose_option(1)
        session.next_topic()
        session.next_topic()
        session.choose_option(0)
        session.next_topic()
        visit = session.visit
        session.next_topic()
        assert session.visit == visit + 1
        assert session.attempt.selected is None
        with pytest.raises(NoSelectionError):
            session.next_topic()
        assert session.snapshot.statistics.wrong_answers == 1

    def test_navigation_resets_attempt(self, session):
        session.choose_option(1)
        session.next_topic()
        session.next_topic()
        session.choose_option(2)
        assert session.prev_topic() is True
        assert session.attempt.key == TopicKey(1, "Model")
        assert session.attempt.selected is None

    def test_prev_at_start(self, session):
        assert session.prev_topic() is False

    def test_select_locked_chapter(self, session):
        assert session.select_chapter(2) is False
        assert session.snapshot.current_chapter == 1


class TestSessionAchievements:
    """Test achievement delivery."""

    def test_chapter_completion_queues_achievement(self, session):
        for answer in (1, 2):
            session.choose_option(answer)
            session.next_topic()
            session.next_topic()
        achievements = session.pop_achievements()
        assert len(achievements) == 1
        assert achievements[0].chapter_title == "Basics"
        assert session.pop_achievements() == []
        assert session.snapshot.current_chapter == 2
        assert session.select_chapter(2) is True

    def test_progress(self, session):
        session.choose_option(1)
        session.next_topic()
        stats = session.progress()
        assert (stats.completed, stats.total) == (1, 5)


class TestSessionData:
    """Test reset, export and import through the session."""

    def test_reset(self, session, store):
        session.choose_option(1)
        session.next_topic()
        session.reset()
        assert session.snapshot.completed_topics == []
        assert session.attempt.phase == QuizPhase.UNANSWERED
        assert store.load().total_score == 0

    def test_export_matches_snapshot(self, session):
        data = json.loads(session.export())
        assert data["currentChapter"] == session.snapshot.current_chapter

    def test_import(self, session, engine, tmp_path):
        source = QuizSession(engine, ProgressStore(tmp_path / "source.db"))
        source.start()
        source.choose_option(1)
        source.next_topic()

        assert session.import_progress(source.export()) is True
        assert session.snapshot.completed_topics == ["1-Model"]
        assert session.snapshot.total_score == 10

    def test_import_invalid(self, session):
        before = session.snapshot
        assert session.import_progress("garbage") is False
        assert session.snapshot is before

    def test_import_repairs(self, session):
        text = json.dumps({"currentChapter": 42, "unlockedChapters": []})
        assert session.import_progress(text) is True
        assert session.snapshot.current_chapter == 1
        assert session.snapshot.unlocked_chapters == [1]
