"""
Streamlit front end for the client-only forum.

Run with: streamlit run api/app/local/ui.py
"""
import html
from datetime import datetime
from typing import Optional

import streamlit as st

from app.core.config import settings
from app.core.exceptions import ForumException
from app.local.forum import LocalForum
from app.models.enums import QuestionSort
from app.schemas.auth import Identity
from app.services.validation import is_valid_color
from app.utils.time_utils import parse_timestamp, time_ago

SORT_LABELS = {
    QuestionSort.NEWEST: "Newest first",
    QuestionSort.OLDEST: "Oldest first",
    QuestionSort.MOST_REPLIES: "Most replies",
}
ALL_TOPICS = "all"


def go(view: str, **params) -> None:
    st.session_state["view"] = view
    st.session_state["params"] = params
    st.rerun()


def notify(text: str, error: bool = False) -> None:
    st.toast(text, icon="⚠️" if error else "✅")


def run_action(action, success: str) -> bool:
    """Run a forum action, turning its failures into error toasts."""
    try:
        action()
    except ForumException as exc:
        notify(str(exc), error=True)
        return False
    notify(success)
    return True


def parse_created(record) -> datetime:
    return parse_timestamp(record["created_at"])


def topic_label(forum: LocalForum, topic_id: str) -> str:
    topic = next((t for t in forum.topics if t["id"] == topic_id), None)
    return topic["title"] if topic else "No topic"


def topic_color(topic) -> str:
    """Stored color if it is a #rrggbb value, the default otherwise."""
    color = topic.get("color")
    return color if is_valid_color(color) else settings.default_topic_color


def render_user_area(forum: LocalForum, identity: Optional[Identity]) -> None:
    with st.sidebar:
        if identity is None:
            st.caption("Browsing as guest")
            if st.button("Sign in / Register"):
                go("auth")
        else:
            st.markdown(f"Signed in as **{identity.username}**")
            if st.button("Sign out"):
                forum.logout()
                go("home")


def render_onboarding(forum: LocalForum) -> None:
    """Welcome panel; Close hides it for this session, the checkbox for good."""
    if forum.onboarding_hidden() or st.session_state.get("onboarding_closed"):
        return
    with st.container(border=True):
        st.markdown(
            "**Welcome!** Browse and search questions freely. Sign in to ask, "
            "reply, and manage topics. Only authors can edit or delete their posts."
        )
        dont_show = st.checkbox("Don't show again", key="onboarding_dont_show")
        if st.button("Close"):
            if dont_show:
                forum.hide_onboarding()
            st.session_state["onboarding_closed"] = True
            st.rerun()


def render_home(forum: LocalForum, identity: Optional[Identity]) -> None:
    left, right = st.columns([3, 1])

    with left:
        search = st.text_input("Search questions")
        topic_options = [ALL_TOPICS] + [t["id"] for t in forum.list_topics()]
        topic_id = st.selectbox(
            "Topic",
            topic_options,
            format_func=lambda tid: "All topics" if tid == ALL_TOPICS else topic_label(forum, tid),
        )
        sort = st.selectbox("Sort", list(QuestionSort), format_func=SORT_LABELS.get)
        if st.button("Ask a question", disabled=identity is None):
            go("question_editor")

        questions = forum.list_questions(
            search=search,
            topic_id=None if topic_id == ALL_TOPICS else topic_id,
            sort=sort,
        )
        if not questions:
            st.info("Nothing found.")
        for question in questions:
            with st.container(border=True):
                st.markdown(f"**{question['title']}**")
                st.caption(
                    f"{topic_label(forum, question['topic_id'])} · {question['author']} · "
                    f"{time_ago(parse_created(question))} · {len(question.get('replies') or [])} replies"
                )
                if st.button("Open", key=f"open-{question['id']}"):
                    go("question", question_id=question["id"])

    with right:
        st.markdown(f"**Topics** ({len(forum.topics)})")
        for topic in forum.list_topics():
            cols = st.columns([4, 1])
            cols[0].markdown(
                f"<span style='color:{topic_color(topic)}'>●</span> {html.escape(topic['title'])} "
                f"({forum.topic_question_count(topic['id'])})",
                unsafe_allow_html=True,
            )
            if identity is not None and cols[1].button("✎", key=f"edit-topic-{topic['id']}"):
                go("topic_editor", topic_id=topic["id"])
        if st.button("New topic", disabled=identity is None):
            go("topic_editor")


def render_auth(forum: LocalForum) -> None:
    login_tab, register_tab = st.tabs(["Sign in", "Register"])
    with login_tab:
        username = st.text_input("Username", key="login_username")
        password = st.text_input("Password", type="password", key="login_password")
        if st.button("Sign in") and run_action(lambda: forum.login(username, password), "Signed in"):
            go("home")
    with register_tab:
        username = st.text_input("Username", key="reg_username")
        password = st.text_input("Password", type="password", key="reg_password")
        password2 = st.text_input("Repeat password", type="password", key="reg_password2")
        if st.button("Create account") and run_action(
            lambda: forum.register(username, password, password2), "Account created, you are signed in"
        ):
            go("home")
    if st.button("Back"):
        go("home")


def render_topic_editor(forum: LocalForum, identity: Optional[Identity], topic_id: Optional[str]) -> None:
    try:
        topic = forum.get_topic(topic_id) if topic_id else {"title": "", "color": settings.default_topic_color}
    except ForumException as exc:
        notify(str(exc), error=True)
        go("home")
        return
    st.subheader("Edit topic" if topic_id else "New topic")
    title = st.text_input("Title", topic["title"])
    color = st.color_picker("Color", topic_color(topic))

    if st.button("Save"):
        if topic_id:
            saved = run_action(lambda: forum.update_topic(identity, topic_id, title, color), "Topic saved")
        else:
            saved = run_action(lambda: forum.create_topic(identity, title, color), "Topic saved")
        if saved:
            go("home")
    if topic_id:
        st.caption("Questions of this topic move to the oldest remaining topic.")
    if topic_id and st.button("Delete topic", type="primary"):
        if run_action(lambda: forum.delete_topic(identity, topic_id), "Topic deleted"):
            go("home")
    if st.button("Cancel"):
        go("home")


def render_question_editor(forum: LocalForum, identity: Optional[Identity], question_id: Optional[str]) -> None:
    if identity is None:
        notify("Sign in required", error=True)
        go("auth")
    try:
        question = forum.get_question(question_id) if question_id else {
            "title": "", "body": "", "topic_id": forum.topics[0]["id"] if forum.topics else None
        }
    except ForumException as exc:
        notify(str(exc), error=True)
        go("home")
        return
    st.subheader("Edit question" if question_id else "Ask a question")
    title = st.text_input("Title", question["title"])
    topic_ids = [t["id"] for t in forum.list_topics()]
    index = topic_ids.index(question["topic_id"]) if question["topic_id"] in topic_ids else 0
    topic_id = st.selectbox("Topic", topic_ids, index=index, format_func=lambda tid: topic_label(forum, tid))
    body = st.text_area("Question", question["body"], height=200)

    if st.button("Save"):
        if question_id:
            saved = run_action(
                lambda: forum.update_question(identity, question_id, title, body, topic_id), "Question saved"
            )
        else:
            saved = run_action(lambda: forum.create_question(identity, title, body, topic_id), "Question saved")
        if saved:
            go("home")
    if st.button("Cancel"):
        go("home")


def render_question(forum: LocalForum, identity: Optional[Identity], question_id: str) -> None:
    try:
        question = forum.get_question(question_id)
    except ForumException as exc:
        notify(str(exc), error=True)
        go("home")
        return

    st.subheader(question["title"])
    st.caption(f"{topic_label(forum, question['topic_id'])} · {question['author']} · "
               f"{time_ago(parse_created(question))}")
    st.write(question["body"])

    is_author = identity is not None and identity.username == question["author"]
    if is_author:
        cols = st.columns(2)
        if cols[0].button("Edit"):
            go("question_editor", question_id=question_id)
        if cols[1].button("Delete") and run_action(
            lambda: forum.delete_question(identity, question_id), "Question deleted"
        ):
            go("home")

    st.markdown(f"**Replies** ({len(question.get('replies') or [])})")
    for reply in question.get("replies") or []:
        with st.container(border=True):
            st.caption(f"{reply['author']} · {time_ago(parse_created(reply))}")
            if identity is not None and identity.username == reply["author"]:
                new_body = st.text_area("Reply", reply["body"], key=f"reply-body-{reply['id']}")
                cols = st.columns(2)
                if cols[0].button("Save", key=f"save-{reply['id']}") and run_action(
                    lambda: forum.update_reply(identity, reply["id"], new_body), "Reply updated"
                ):
                    st.rerun()
                if cols[1].button("Delete", key=f"del-{reply['id']}") and run_action(
                    lambda: forum.delete_reply(identity, reply["id"]), "Reply deleted"
                ):
                    st.rerun()
            else:
                st.write(reply["body"])

    if identity is None:
        st.info("Sign in to reply.")
    else:
        body = st.text_area("Your reply", key="new-reply")
        if st.button("Post reply") and run_action(
            lambda: forum.add_reply(identity, question_id, body), "Reply posted"
        ):
            st.rerun()
    if st.button("Back"):
        go("home")


def main() -> None:
    st.set_page_config(page_title="Forum", layout="wide")
    st.title("Forum")

    forum = LocalForum.open()
    identity = forum.current_identity()
    view = st.session_state.get("view", "home")
    params = st.session_state.get("params", {})

    render_user_area(forum, identity)
    render_onboarding(forum)

    if view == "auth":
        render_auth(forum)
    elif view == "topic_editor":
        render_topic_editor(forum, identity, params.get("topic_id"))
    elif view == "question_editor":
        render_question_editor(forum, identity, params.get("question_id"))
    elif view == "question":
        render_question(forum, identity, params["question_id"])
    else:
        render_home(forum, identity)


if __name__ == "__main__":
    main()
