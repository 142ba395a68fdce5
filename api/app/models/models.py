"""
Models module - re-exports all models.

Importing this module registers every table with SQLModel metadata:
    from app.models.models import Question
"""
from app.models.enums import QuestionSort
from app.models.user import User
from app.models.topic import Topic
from app.models.question import Question
from app.models.reply import Reply

__all__ = [
    'QuestionSort',
    'User',
    'Topic',
    'Question',
    'Reply',
]
