"""
ProgressStore - Persist the learner's progress snapshot in ~/.quizpath/progress.db.

Stores a single JSON snapshot under a fixed key:
- load/save with migration of older data
- reset to defaults
- export/import as pretty-printed JSON text

Progress is stored separately from the knowledge base so content can be
updated without losing progress.
"""

import json
import logging
import sqlite3
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from quizpath.schemas import ProgressSnapshot, default_snapshot, migrate_state

from .errors import ProgressImportError

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".quizpath"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
STORAGE_KEY = "quizpath_state"


class ProgressStore:
    """
    Key/value persistence of one progress snapshot in SQLite.

    Loading never fails: missing or unreadable data yields defaults.
    """

    def __init__(self, db_path: Optional[Path] = None, key: str = STORAGE_KEY):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.quizpath/progress.db)
            key: Row key the snapshot is stored under
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.key = key
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS progress_state (
                    key TEXT PRIMARY KEY,
                    value JSON NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _read_raw(self) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT value FROM progress_state WHERE key = ?",
                (self.key,)
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def _write(self, snapshot: ProgressSnapshot):
        conn = self._get_connection()
        try:
            now = datetime.now(timezone.utc).isoformat()
            conn.execute(
                """INSERT INTO progress_state (key, value, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET
                     value = excluded.value,
                     updated_at = excluded.updated_at""",
                (self.key, json.dumps(snapshot.to_wire(), ensure_ascii=False), now)
            )
            conn.commit()
        finally:
            conn.close()

    def _delete(self):
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM progress_state WHERE key = ?", (self.key,))
            conn.commit()
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Load / Save
    # -------------------------------------------------------------------------

    def load(self) -> ProgressSnapshot:
        """Load the stored snapshot, falling back to defaults."""
        try:
            saved = self._read_raw()
            if saved:
                return migrate_state(json.loads(saved))
        except (sqlite3.Error, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load progress, using defaults: {e}")
        return default_snapshot()

    def save(self, snapshot: ProgressSnapshot) -> ProgressSnapshot:
        """
        Persist a snapshot, stamping last_visit.

        Returns:
            The stamped snapshot (the argument is not modified)
        """
        stamped = snapshot.model_copy(
            update={"last_visit": datetime.now(timezone.utc).isoformat()}
        )
        try:
            self._write(stamped)
        except sqlite3.Error as e:
            logger.error(f"Failed to save progress: {e}")
        return stamped

    def reset(self) -> ProgressSnapshot:
        """Delete stored progress and return a default snapshot."""
        try:
            self._delete()
            logger.info("Progress reset")
        except sqlite3.Error as e:
            logger.error(f"Failed to reset stored progress: {e}")
        return default_snapshot()

    # -------------------------------------------------------------------------
    # Export / Import
    # -------------------------------------------------------------------------

    def export(self, snapshot: Optional[ProgressSnapshot] = None) -> str:
        """Serialize a snapshot (default: the stored one) as pretty JSON."""
        if snapshot is None:
            snapshot = self.load()
        return json.dumps(snapshot.to_wire(), ensure_ascii=False, indent=2)

    def import_text(self, text: str) -> ProgressSnapshot:
        """
        Replace stored progress with an exported document.

        Raises:
            ProgressImportError: text is not a JSON object; nothing is written
        """
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise ProgressImportError(f"Not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ProgressImportError("Progress document must be a JSON object")

        snapshot = self.save(migrate_state(data))
        logger.info(f"Imported progress: {len(snapshot.completed_topics)} completed topics")
        return snapshot


def export_filename(today: Optional[date] = None) -> str:
    """Download filename for exported progress."""
    today = today or date.today()
    return f"quizpath-progress-{today.isoformat()}.json"
