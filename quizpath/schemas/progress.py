"""
Progress tracking schemas for QuizPath.

Defines the persisted progress snapshot and its migration:
- TopicKey: stable identity of a topic (chapter id + term)
- ProgressSnapshot: the complete learner state, camelCase on the wire
- migrate_state: normalize any accepted raw shape into a snapshot
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .knowledge import Chapter, Topic


# Bump when the wire format changes; migrate_state upgrades older data
SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class TopicKey:
    """Identity of a topic used for completion tracking."""
    chapter_id: int
    term: str

    def __str__(self) -> str:
        return f"{self.chapter_id}-{self.term}"

    @classmethod
    def for_topic(cls, chapter: Chapter, topic: Topic) -> "TopicKey":
        return cls(chapter_id=chapter.id, term=topic.term)

    @classmethod
    def parse(cls, text: str) -> "TopicKey":
        """
        Parse the canonical "<chapter>-<term>" form.

        Terms may contain dashes, so only the first one separates the parts.
        """
        chapter, sep, term = text.partition("-")
        if not sep or not term or not chapter.isdigit():
            raise ValueError(f"Invalid topic key: {text!r}")
        return cls(chapter_id=int(chapter), term=term)


# -----------------------------------------------------------------------------
# Snapshot
# -----------------------------------------------------------------------------

class Statistics(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_study_time: int = 0   # reserved, not driven by the engine
    correct_answers: int = 0
    wrong_answers: int = 0
    streak_days: int = 0        # reserved, not driven by the engine


class ProgressSnapshot(BaseModel):
    """
    Complete persisted progress state.

    Collections are stored as ordered lists; membership semantics are those
    of a set (see migrate_state for de-duplication).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schema_version: int = SNAPSHOT_VERSION
    current_chapter: int = 1
    current_topic_index: int = 0
    completed_topics: list[str] = Field(default_factory=list)  # TopicKey text
    unlocked_chapters: list[int] = Field(default_factory=lambda: [1])
    total_score: int = 0
    statistics: Statistics = Field(default_factory=Statistics)
    last_visit: Optional[str] = None

    def is_completed(self, key: TopicKey | str) -> bool:
        return str(key) in self.completed_topics

    def is_unlocked(self, chapter_id: int) -> bool:
        return chapter_id in self.unlocked_chapters

    def to_wire(self) -> dict[str, Any]:
        """Serializable dict using the camelCase wire names."""
        return self.model_dump(by_alias=True, mode="json")


def default_snapshot() -> ProgressSnapshot:
    return ProgressSnapshot()


# -----------------------------------------------------------------------------
# Migration
# -----------------------------------------------------------------------------

def _as_int(value: Any, default: Optional[int]) -> Optional[int]:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"-?\d+", text):
            return int(text)
    return default


def _set_order(value: Any) -> tuple:
    number = _as_int(value, None) if not isinstance(value, str) else None
    if number is not None:
        return (0, number, "")
    return (1, 0, str(value))


def _as_list(value: Any, default: list) -> list:
    """Normalize a set-like or array-like value into a list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (set, frozenset)):
        # Numbers first in numeric order, then everything else by text
        return sorted(value, key=_set_order)
    if isinstance(value, Mapping):
        # Array-like objects: {"0": a, "1": b}
        keys = list(value.keys())
        if all(_as_int(k, None) is not None for k in keys):
            keys.sort(key=lambda k: _as_int(k, 0))
        return [value[k] for k in keys]
    return list(default)


def _unique(items: list) -> list:
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def _field(raw: Mapping, name: str, default: Any) -> Any:
    """Read a field by wire name, falling back to the Python name."""
    alias = to_camel(name)
    if alias in raw:
        return raw[alias]
    return raw.get(name, default)


def migrate_state(raw: Any) -> ProgressSnapshot:
    """
    Merge raw loaded data over defaults into a canonical snapshot.

    Missing fields take defaults, unknown fields are dropped, set-like
    collections become ordered lists and the statistics block always exists.
    Idempotent. Does not check the snapshot against a knowledge base; see
    ProgressEngine.migrate for that.
    """
    if isinstance(raw, ProgressSnapshot):
        raw = raw.to_wire()
    if not isinstance(raw, Mapping):
        return default_snapshot()

    completed = []
    for item in _as_list(_field(raw, "completed_topics", []), []):
        if isinstance(item, TopicKey):
            item = str(item)
        if isinstance(item, str) and item:
            completed.append(item)

    unlocked = []
    for item in _as_list(_field(raw, "unlocked_chapters", [1]), [1]):
        chapter_id = _as_int(item, None)
        if chapter_id is not None:
            unlocked.append(chapter_id)

    raw_stats = _field(raw, "statistics", None)
    if not isinstance(raw_stats, Mapping):
        raw_stats = {}
    statistics = Statistics(**{
        name: max(0, _as_int(_field(raw_stats, name, 0), 0))
        for name in Statistics.model_fields
    })

    last_visit = _field(raw, "last_visit", None)
    if not isinstance(last_visit, str):
        last_visit = None

    return ProgressSnapshot(
        schema_version=SNAPSHOT_VERSION,
        current_chapter=_as_int(_field(raw, "current_chapter", 1), 1),
        current_topic_index=_as_int(_field(raw, "current_topic_index", 0), 0),
        completed_topics=_unique(completed),
        unlocked_chapters=_unique(unlocked),
        total_score=_as_int(_field(raw, "total_score", 0), 0),
        statistics=statistics,
        last_visit=last_visit,
    )
