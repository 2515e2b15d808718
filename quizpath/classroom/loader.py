"""
KnowledgeBaseLoader - Load the study catalog from a JSON or YAML document.

Accepts:
- A mapping with a top-level "chapters" list
- A bare list of chapters

The validated KnowledgeBase is cached for the life of the loader.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from quizpath.schemas import KnowledgeBase

from .errors import KnowledgeBaseError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class KnowledgeBaseLoader:
    """
    Load a knowledge base document once and serve it for the session.

    The document holds a top-level ``chapters`` list; a bare list of
    chapters is accepted too.
    """

    def __init__(self, path: str | Path):
        """
        Initialize loader with path to the knowledge base document.

        Args:
            path: Path to a .json, .yaml or .yml file
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Knowledge base not found: {path}")
        self._knowledge_base: Optional[KnowledgeBase] = None

    def _read_document(self):
        text = self.path.read_text(encoding="utf-8")
        try:
            if self.path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(text)
            return json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise KnowledgeBaseError(f"Could not parse {self.path}: {e}") from e

    def load(self) -> KnowledgeBase:
        """Parse and validate the document (cached after the first call)."""
        if self._knowledge_base is not None:
            return self._knowledge_base

        document = self._read_document()
        if isinstance(document, list):
            document = {"chapters": document}
        if not isinstance(document, dict):
            raise KnowledgeBaseError(f"Expected a mapping with 'chapters' in {self.path}")

        try:
            knowledge_base = KnowledgeBase.model_validate(document)
        except ValidationError as e:
            raise KnowledgeBaseError(f"Invalid knowledge base {self.path}: {e}") from e

        logger.info(
            f"Loaded knowledge base: {knowledge_base.chapter_count} chapters, "
            f"{knowledge_base.total_topics} topics"
        )
        self._knowledge_base = knowledge_base
        return knowledge_base


def load_knowledge_base(path: str | Path) -> KnowledgeBase:
    """Load and validate a knowledge base document."""
    return KnowledgeBaseLoader(path).load()
