"""
Models package - imports all models.
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
