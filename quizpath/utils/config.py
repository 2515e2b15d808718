"""
Runtime settings for QuizPath.

Values come from the environment, with a project-level .env file loaded
first (existing environment variables win).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Project root (relative to this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_KNOWLEDGE_BASE = PROJECT_ROOT / "data" / "knowledge_base.yaml"
DEFAULT_PROGRESS_DB = Path.home() / ".quizpath" / "progress.db"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    knowledge_base_path: Path
    progress_db_path: Path
    log_level: str = "INFO"


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Read settings from the environment.

    Args:
        env_file: Optional .env file (default: <project root>/.env)

    Environment:
        QUIZPATH_KNOWLEDGE_BASE: knowledge base document
        QUIZPATH_PROGRESS_DB: progress database path
        QUIZPATH_LOG_LEVEL: logging level name
    """
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    knowledge_base = os.environ.get("QUIZPATH_KNOWLEDGE_BASE")
    progress_db = os.environ.get("QUIZPATH_PROGRESS_DB")
    return Settings(
        knowledge_base_path=Path(knowledge_base).expanduser() if knowledge_base else DEFAULT_KNOWLEDGE_BASE,
        progress_db_path=Path(progress_db).expanduser() if progress_db else DEFAULT_PROGRESS_DB,
        log_level=os.environ.get("QUIZPATH_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str | int = logging.INFO):
    """Set up root logging in the project's format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
