"""
ProgressStore tests: persistence, reset, export and import.
"""

import json
import sqlite3
from datetime import date

import pytest

from quizpath.classroom import ProgressImportError, ProgressStore, STORAGE_KEY, export_filename
from quizpath.schemas import ProgressSnapshot, default_snapshot


class TestLoadSave:
    """Test loading and saving snapshots."""

    def test_load_empty_gives_defaults(self, store):
        assert store.load() == default_snapshot()

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "progress.db"
        ProgressStore(path)
        assert path.exists()

    def test_save_and_load(self, store):
        snapshot = ProgressSnapshot(
            current_chapter=2,
            completed_topics=["1-Model"],
            unlocked_chapters=[1, 2],
            total_score=10,
        )
        saved = store.save(snapshot)
        loaded = store.load()
        assert loaded == saved
        assert loaded.current_chapter == 2
        assert loaded.completed_topics == ["1-Model"]

    def test_save_stamps_last_visit(self, store):
        snapshot = ProgressSnapshot()
        saved = store.save(snapshot)
        assert saved.last_visit is not None
        assert snapshot.last_visit is None
        assert store.load().last_visit == saved.last_visit

    def test_save_overwrites(self, store):
        store.save(ProgressSnapshot(total_score=10))
        store.save(ProgressSnapshot(total_score=40))
        assert store.load().total_score == 40

    def test_separate_keys(self, tmp_path):
        path = tmp_path / "progress.db"
        ProgressStore(path, key="a").save(ProgressSnapshot(total_score=10))
        assert ProgressStore(path, key="b").load().total_score == 0

    def test_corrupted_value_gives_defaults(self, store):
        conn = sqlite3.connect(str(store.db_path))
        conn.execute(
            "INSERT INTO progress_state (key, value, updated_at) VALUES (?, ?, ?)",
            (STORAGE_KEY, "{not json", "2024-01-01"),
        )
        conn.commit()
        conn.close()
        assert store.load() == default_snapshot()

    def test_legacy_shape_is_migrated(self, store):
        legacy = {"currentChapter": 2, "completedTopics": {"0": "1-Model"}}
        conn = sqlite3.connect(str(store.db_path))
        conn.execute(
            "INSERT INTO progress_state (key, value, updated_at) VALUES (?, ?, ?)",
            (STORAGE_KEY, json.dumps(legacy), "2024-01-01"),
        )
        conn.commit()
        conn.close()
        loaded = store.load()
        assert loaded.completed_topics == ["1-Model"]
        assert loaded.unlocked_chapters == [1]
        assert loaded.statistics.correct_answers == 0


class TestReset:
    """Test resetting progress."""

    def test_reset(self, store):
        store.save(ProgressSnapshot(total_score=50))
        assert store.reset() == default_snapshot()
        assert store.load() == default_snapshot()

    def test_reset_database_error_gives_defaults(self, store):
        conn = sqlite3.connect(str(store.db_path))
        conn.execute("DROP TABLE progress_state")
        conn.commit()
        conn.close()
        assert store.reset() == default_snapshot()


class TestExportImport:
    """Test export and import of progress documents."""

    def test_export_format(self, store):
        text = store.export(ProgressSnapshot(total_score=10))
        data = json.loads(text)
        assert data["totalScore"] == 10
        assert "currentChapter" in data
        assert text.startswith("{\n  ")

    def test_export_stored_by_default(self, store):
        store.save(ProgressSnapshot(total_score=70))
        assert json.loads(store.export())["totalScore"] == 70

    def test_import(self, store):
        text = json.dumps({"totalScore": 20, "completedTopics": ["1-Model"]})
        imported = store.import_text(text)
        assert imported.total_score == 20
        assert store.load().completed_topics == ["1-Model"]

    def test_import_round_trip(self, store, tmp_path):
        snapshot = ProgressSnapshot(completed_topics=["1-Model"], unlocked_chapters=[1, 2], total_score=10)
        other = ProgressStore(tmp_path / "other.db")
        imported = other.import_text(store.export(snapshot))
        assert imported.completed_topics == snapshot.completed_topics
        assert imported.unlocked_chapters == snapshot.unlocked_chapters

    @pytest.mark.parametrize("text", ["not json", "[1, 2]", "42", ""])
    def test_import_rejects_malformed(self, store, text):
        store.save(ProgressSnapshot(total_score=30))
        with pytest.raises(ProgressImportError):
            store.import_text(text)
        assert store.load().total_score == 30

    def test_export_filename(self):
        assert export_filename(date(2024, 3, 9)) == "quizpath-progress-2024-03-09.json"
