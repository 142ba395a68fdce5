"""
Forum operations for the client-only variant.

Users, topics and questions live in LocalStorage; replies are stored inside
their question. Every mutation validates first and writes afterwards, so a
rejected action never touches the stored data.
"""
import logging
import secrets
import string
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.core.security import ensure_author, get_password_hash, verify_password
from app.local.storage import KEYS, LocalStorage
from app.models.enums import QuestionSort
from app.schemas.auth import Identity
from app.services.auth_service import INVALID_CREDENTIALS
from app.services.seed_service import DEMO_TOPICS, DEMO_USERNAME, DEMO_PASSWORD, DEMO_QUESTION
from app.services.validation import clean_color, clean_text, clean_optional_text, validate_credentials
from app.utils.time_utils import parse_timestamp, utc_now

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

_ID_ALPHABET = string.ascii_lowercase + string.digits


def uid(prefix: str = "id") -> str:
    """Random record id such as q_k3j9x0ab."""
    return prefix + "_" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(8))


def now() -> str:
    return utc_now().isoformat()


def _created(record: Record) -> datetime:
    return parse_timestamp(record["created_at"])


def require_identity(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise AuthenticationError("Sign in required")
    return identity


class LocalForum:
    """The whole forum kept in one local storage file."""

    def __init__(self, storage: LocalStorage, seed: bool = True):
        self.storage = storage
        self.users: List[Record] = storage.get(KEYS["users"], [])
        self.topics: List[Record] = storage.get(KEYS["topics"], [])
        self.questions: List[Record] = storage.get(KEYS["questions"], [])
        if seed:
            self.seed()

    @classmethod
    def open(cls, path: Optional[str] = None) -> "LocalForum":
        return cls(LocalStorage(path or settings.local_store_path))

    def save(self) -> None:
        self.storage.update({
            KEYS["users"]: self.users,
            KEYS["topics"]: self.topics,
            KEYS["questions"]: self.questions,
        })

    def seed(self) -> None:
        """Fill empty collections with demo content."""
        if self.topics and self.users and self.questions:
            return
        if not self.topics:
            self.topics = [
                {"id": uid("t"), "title": title, "color": color, "created_at": now()}
                for title, color in DEMO_TOPICS
            ]
        if not self.users:
            self.users = [{
                "id": uid("u"),
                "username": DEMO_USERNAME,
                "password_hash": get_password_hash(DEMO_PASSWORD),
                "created_at": now(),
            }]
        if not self.questions:
            topic = next((t for t in self.topics if t["title"] == DEMO_QUESTION["topic"]), self.topics[0])
            self.questions = [{
                "id": uid("q"),
                "title": DEMO_QUESTION["title"],
                "body": DEMO_QUESTION["body"],
                "topic_id": topic["id"],
                "author": DEMO_USERNAME,
                "created_at": now(),
                "replies": [{
                    "id": uid("r"),
                    "question_id": None,
                    "body": DEMO_QUESTION["reply"],
                    "author": DEMO_USERNAME,
                    "created_at": now(),
                }],
            }]
            self.questions[0]["replies"][0]["question_id"] = self.questions[0]["id"]
        self.save()

    # ------------------------------------------------------------------
    # Session and onboarding
    # ------------------------------------------------------------------

    def current_identity(self) -> Optional[Identity]:
        session = self.storage.get(KEYS["session"])
        if not session:
            return None
        return Identity(user_id=session["user_id"], username=session["username"])

    def _start_session(self, user: Record) -> Identity:
        identity = Identity(user_id=user["id"], username=user["username"])
        self.storage.set(KEYS["session"], {"user_id": user["id"], "username": user["username"]})
        return identity

    def logout(self) -> None:
        self.storage.delete(KEYS["session"])

    def onboarding_hidden(self) -> bool:
        return bool(self.storage.get(KEYS["onboarding"], False))

    def hide_onboarding(self) -> None:
        self.storage.set(KEYS["onboarding"], True)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def _find_user(self, username: str) -> Optional[Record]:
        wanted = (username or "").strip().lower()
        return next((u for u in self.users if u["username"].lower() == wanted), None)

    def register(self, username: str, password: str, password_confirm: Optional[str] = None) -> Identity:
        """Create an account and sign it in."""
        username = validate_credentials(username, password)
        if password_confirm is not None and password_confirm != password:
            raise ValidationError("Passwords do not match")
        if self._find_user(username):
            raise ConflictError("Username already taken")

        user = {
            "id": uid("u"),
            "username": username,
            "password_hash": get_password_hash(password),
            "created_at": now(),
        }
        self.users.append(user)
        self.save()
        logger.info(f"Registered local user {username}")
        return self._start_session(user)

    def login(self, username: str, password: str) -> Identity:
        user = self._find_user(username)
        if not user or not verify_password(password or "", user["password_hash"]):
            raise AuthenticationError(INVALID_CREDENTIALS)
        return self._start_session(user)

    # ------------------------------------------------------------------
    # Topics
    # ------------------------------------------------------------------

    def list_topics(self) -> List[Record]:
        """Topics, most recent first."""
        return sorted(reversed(self.topics), key=_created, reverse=True)

    def get_topic(self, topic_id: str) -> Record:
        topic = next((t for t in self.topics if t["id"] == topic_id), None)
        if topic is None:
            raise NotFoundError("Topic not found")
        return topic

    def topic_question_count(self, topic_id: str) -> int:
        return sum(1 for q in self.questions if q["topic_id"] == topic_id)

    def create_topic(self, identity: Optional[Identity], title: str, color: Optional[str] = None) -> Record:
        require_identity(identity)
        topic = {
            "id": uid("t"),
            "title": clean_text(title, "Title required"),
            "color": clean_color(color, settings.default_topic_color),
            "created_at": now(),
        }
        self.topics.append(topic)
        self.save()
        return topic

    def update_topic(
        self,
        identity: Optional[Identity],
        topic_id: str,
        title: Optional[str] = None,
        color: Optional[str] = None
    ) -> Record:
        require_identity(identity)
        topic = self.get_topic(topic_id)
        new_title = clean_optional_text(title, "Title required")
        new_color = clean_color(color)
        if new_title is not None:
            topic["title"] = new_title
        if new_color is not None:
            topic["color"] = new_color
        self.save()
        return topic

    def delete_topic(self, identity: Optional[Identity], topic_id: str) -> int:
        """Delete a topic; its questions move to the oldest remaining topic."""
        require_identity(identity)
        topic = self.get_topic(topic_id)
        dependents = [q for q in self.questions if q["topic_id"] == topic_id]

        self.topics.remove(topic)
        if dependents:
            if self.topics:
                fallback = min(self.topics, key=_created)
            else:
                fallback = {
                    "id": uid("t"),
                    "title": settings.fallback_topic_title,
                    "color": settings.default_topic_color,
                    "created_at": now(),
                }
                self.topics.append(fallback)
            for question in dependents:
                question["topic_id"] = fallback["id"]
        self.save()
        return len(dependents)

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def list_questions(
        self,
        search: Optional[str] = None,
        topic_id: Optional[str] = None,
        sort: QuestionSort = QuestionSort.NEWEST
    ) -> List[Record]:
        questions = list(self.questions)
        term = (search or "").strip().lower()
        if term:
            questions = [
                q for q in questions
                if term in q["title"].lower() or term in q["body"].lower()
            ]
        if topic_id is not None:
            questions = [q for q in questions if q["topic_id"] == topic_id]

        # sorted() is stable, so ties keep insertion order
        if sort == QuestionSort.OLDEST:
            return sorted(questions, key=_created)
        if sort == QuestionSort.MOST_REPLIES:
            return sorted(questions, key=lambda q: len(q.get("replies") or []), reverse=True)
        return sorted(reversed(questions), key=_created, reverse=True)

    def get_question(self, question_id: str) -> Record:
        question = next((q for q in self.questions if q["id"] == question_id), None)
        if question is None:
            raise NotFoundError("Question not found")
        return question

    def _ensure_topic(self, topic_id: str) -> None:
        if not any(t["id"] == topic_id for t in self.topics):
            raise ValidationError(f"Unknown topic: {topic_id}")

    def create_question(self, identity: Optional[Identity], title: str, body: str, topic_id: str) -> Record:
        identity = require_identity(identity)
        question = {
            "id": uid("q"),
            "title": clean_text(title, "Title required"),
            "body": clean_text(body, "Body required"),
            "topic_id": topic_id,
            "author": identity.username,
            "created_at": now(),
            "replies": [],
        }
        self._ensure_topic(topic_id)
        self.questions.append(question)
        self.save()
        return question

    def update_question(
        self,
        identity: Optional[Identity],
        question_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
        topic_id: Optional[str] = None
    ) -> Record:
        identity = require_identity(identity)
        question = self.get_question(question_id)
        ensure_author(question["author"], identity)

        new_title = clean_optional_text(title, "Title required")
        new_body = clean_optional_text(body, "Body required")
        if topic_id is not None:
            self._ensure_topic(topic_id)
            question["topic_id"] = topic_id
        if new_title is not None:
            question["title"] = new_title
        if new_body is not None:
            question["body"] = new_body
        self.save()
        return question

    def delete_question(self, identity: Optional[Identity], question_id: str) -> None:
        """Delete a question; its embedded replies go with it."""
        identity = require_identity(identity)
        question = self.get_question(question_id)
        ensure_author(question["author"], identity)
        self.questions.remove(question)
        self.save()

    # ------------------------------------------------------------------
    # Replies
    # ------------------------------------------------------------------

    def _find_reply(self, reply_id: str):
        for question in self.questions:
            for reply in question.get("replies") or []:
                if reply["id"] == reply_id:
                    return question, reply
        raise NotFoundError("Reply not found")

    def add_reply(self, identity: Optional[Identity], question_id: str, body: str) -> Record:
        question = self.get_question(question_id)
        identity = require_identity(identity)
        reply = {
            "id": uid("r"),
            "question_id": question_id,
            "body": clean_text(body, "Body required"),
            "author": identity.username,
            "created_at": now(),
        }
        question.setdefault("replies", []).append(reply)
        self.save()
        return reply

    def update_reply(self, identity: Optional[Identity], reply_id: str, body: str) -> Record:
        identity = require_identity(identity)
        _, reply = self._find_reply(reply_id)
        ensure_author(reply["author"], identity)
        reply["body"] = clean_text(body, "Body required")
        self.save()
        return reply

    def delete_reply(self, identity: Optional[Identity], reply_id: str) -> None:
        identity = require_identity(identity)
        question, reply = self._find_reply(reply_id)
        ensure_author(reply["author"], identity)
        question["replies"].remove(reply)
        self.save()
