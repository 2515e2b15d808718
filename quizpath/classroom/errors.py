"""Exceptions raised by the QuizPath runtime."""


class QuizPathError(Exception):
    """Base class for QuizPath errors."""


class KnowledgeBaseError(QuizPathError):
    """The knowledge base document could not be parsed or failed validation."""


class NoSelectionError(QuizPathError):
    """Advancing an unanswered topic without choosing an option."""

    def __init__(self, topic_key: str):
        super().__init__(f"Choose an answer before continuing: {topic_key}")
        self.topic_key = topic_key


class ProgressImportError(QuizPathError):
    """Imported progress text is not a valid progress document."""
