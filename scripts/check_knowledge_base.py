#!/usr/bin/env python3
"""
check_knowledge_base.py - Validate a knowledge base document before shipping it.

Loads the document with the same loader the app uses and reports
per-chapter topic counts, difficulty mix and the maximum score. With
--progress, also lists completed topics in an exported progress file that
the knowledge base no longer contains.

Usage:
  python scripts/check_knowledge_base.py
  python scripts/check_knowledge_base.py --input data/knowledge_base.yaml
  python scripts/check_knowledge_base.py --progress quizpath-progress-2024-01-01.json
"""

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from quizpath.classroom import KnowledgeBaseError, ProgressEngine, load_knowledge_base
from quizpath.schemas import Difficulty, difficulty_score, migrate_state
from quizpath.utils import configure_logging

configure_logging(logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_INPUT = PROJECT_ROOT / "data" / "knowledge_base.yaml"


def check_progress(knowledge_base, progress_path: Path):
    """Report completed topics in an exported progress file that no longer exist."""
    try:
        snapshot = migrate_state(json.loads(progress_path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read progress file: {e}")
        sys.exit(1)

    unknown = ProgressEngine(knowledge_base).unknown_completed_topics(snapshot)
    for key in unknown:
        logger.warning(f"  Completed topic not in knowledge base: {key}")
    logger.info(
        f"Progress: {len(snapshot.completed_topics)} completed topics, "
        f"{len(unknown)} unknown"
    )


def main():
    parser = argparse.ArgumentParser(
        description="Validate a QuizPath knowledge base",
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=DEFAULT_INPUT,
        help=f"Knowledge base document (default: {DEFAULT_INPUT})"
    )
    parser.add_argument(
        "--progress",
        type=Path,
        help="Exported progress file to check against the knowledge base"
    )
    args = parser.parse_args()

    logger.info(f"Loading knowledge base from {args.input}...")
    try:
        knowledge_base = load_knowledge_base(args.input)
    except (FileNotFoundError, KnowledgeBaseError) as e:
        logger.error(f"Invalid knowledge base: {e}")
        sys.exit(1)

    max_score = 0
    for chapter in knowledge_base.chapters:
        mix = Counter(topic.difficulty for topic in chapter.topics)
        chapter_score = sum(difficulty_score(topic.difficulty) for topic in chapter.topics)
        max_score += chapter_score
        breakdown = ", ".join(f"{d.value}={mix.get(d, 0)}" for d in Difficulty)
        logger.info(
            f"  Chapter {chapter.id} {chapter.title}: {chapter.topic_count} topics "
            f"({breakdown}), {chapter_score} points"
        )

    logger.info(
        f"OK: {knowledge_base.chapter_count} chapters, {knowledge_base.total_topics} topics, "
        f"max score {max_score}"
    )

    if args.progress:
        check_progress(knowledge_base, args.progress)


if __name__ == "__main__":
    main()
