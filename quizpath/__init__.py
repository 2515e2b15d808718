"""
QuizPath - Chapter-by-chapter flashcard quizzes with local progress tracking.

Subpackages:
- schemas: knowledge base and progress models
- classroom: loader, progress engine, store and session
- viewer: HTML rendering for the Streamlit app
"""

__version__ = "0.1.0"
