"""Shared fixtures for QuizPath tests."""

import pytest

from quizpath.classroom import ProgressEngine, ProgressStore, QuizSession
from quizpath.schemas import KnowledgeBase


def make_topic(term, difficulty="beginner", answer=1):
    return {
        "term": term,
        "english": term.lower(),
        "definition": f"Definition of {term}",
        "tips": f"Remember {term}",
        "difficulty": difficulty,
        "quiz": {
            "question": f"What is {term}?",
            "options": ["wrong", "right", "also wrong"],
            "answer": answer,
        },
    }


KB_DATA = {
    "chapters": [
        {
            "id": 1,
            "title": "Basics",
            "icon": "🤖",
            "description": "First chapter",
            "topics": [
                make_topic("Model", "beginner", 1),
                make_topic("Overfitting", "intermediate", 2),
            ],
        },
        {
            "id": 2,
            "title": "Networks",
            "icon": "🧠",
            "description": "Second chapter",
            "topics": [
                make_topic("Neuron", "expert", 0),
                make_topic("Layer", "beginner", 1),
            ],
        },
        {
            "id": 3,
            "title": "Language",
            "icon": "💬",
            "description": "Third chapter",
            "topics": [
                make_topic("Token", "beginner", 1),
            ],
        },
    ]
}


@pytest.fixture
def kb_data():
    return KB_DATA


@pytest.fixture
def knowledge_base():
    return KnowledgeBase.model_validate(KB_DATA)


@pytest.fixture
def engine(knowledge_base):
    return ProgressEngine(knowledge_base)


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "progress.db")


@pytest.fixture
def session(engine, store):
    session = QuizSession(engine, store)
    session.start()
    return session
