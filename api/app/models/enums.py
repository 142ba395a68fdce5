"""
Model enums.
"""
from enum import Enum


class QuestionSort(str, Enum):
    """Orderings accepted by the question listing."""
    NEWEST = "new"
    OLDEST = "old"
    MOST_REPLIES = "answers"

    @classmethod
    def _missing_(cls, value):
        # Long names are accepted as aliases of the short query values
        aliases = {
            "newest-first": cls.NEWEST,
            "oldest-first": cls.OLDEST,
            "most-replies-first": cls.MOST_REPLIES,
        }
        if isinstance(value, str):
            return aliases.get(value.strip().lower())
        return None
