"""
QuizPath - Chapter-by-chapter flashcard quizzes

Streamlit application: study one topic at a time, answer its quiz,
and unlock the next chapter by mastering every topic in the current one.

Usage:
    streamlit run app.py
"""

import logging

import streamlit as st

from quizpath.classroom import (
    ChapterStatus,
    KnowledgeBaseError,
    KnowledgeBaseLoader,
    NoSelectionError,
    ProgressEngine,
    ProgressStore,
    QuizSession,
    export_filename,
)
from quizpath.utils import configure_logging, load_settings
from quizpath.viewer import (
    chapter_label,
    format_option,
    get_progress_css,
    get_quiz_css,
    get_topic_css,
    render_achievement,
    render_chapter_header,
    render_error,
    render_feedback,
    render_knowledge_card,
    render_progress_bar,
    render_quiz,
    render_stats,
    render_topic_position,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="QuizPath",
    page_icon="🧠",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "session" in st.session_state or "load_error" in st.session_state:
        return

    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        knowledge_base = KnowledgeBaseLoader(settings.knowledge_base_path).load()
    except (FileNotFoundError, KnowledgeBaseError) as e:
        logger.error(f"Failed to load knowledge base: {e}")
        st.session_state.load_error = str(e)
        return

    session = QuizSession(
        ProgressEngine(knowledge_base),
        ProgressStore(settings.progress_db_path),
    )
    session.start()
    st.session_state.session = session
    st.session_state.achievements = []
    st.session_state.notice = None


# -----------------------------------------------------------------------------
# Sidebar: Progress and Chapters
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with progress, chapter list and data tools."""
    session = st.session_state.session
    stats = session.progress()

    st.sidebar.title("🧠 QuizPath")
    st.sidebar.markdown(get_progress_css(), unsafe_allow_html=True)
    st.sidebar.markdown(render_progress_bar(stats.completed, stats.total), unsafe_allow_html=True)
    st.sidebar.markdown(render_stats(stats), unsafe_allow_html=True)

    st.sidebar.divider()
    st.sidebar.subheader("Chapters")

    for chapter_progress in stats.chapters:
        chapter = session.engine.knowledge_base.get_chapter(chapter_progress.chapter_id)
        status = chapter_progress.status
        label = f"{chapter_label(chapter, status)} ({chapter_progress.completed}/{chapter_progress.total})"
        if st.sidebar.button(
            label,
            key=f"chapter_{chapter.id}",
            disabled=status == ChapterStatus.LOCKED,
            type="primary" if chapter.id == session.snapshot.current_chapter else "secondary",
            use_container_width=True,
        ):
            session.select_chapter(chapter.id)
            st.rerun()

    st.sidebar.divider()
    render_data_tools()


def render_data_tools():
    """Export, import and reset controls."""
    session = st.session_state.session

    st.sidebar.subheader("Progress Data")
    st.sidebar.download_button(
        "Export progress",
        data=session.export(),
        file_name=export_filename(),
        mime="application/json",
        use_container_width=True,
    )

    uploaded = st.sidebar.file_uploader("Import progress", type=["json"])
    if uploaded is not None and st.sidebar.button("Apply import", use_container_width=True):
        if session.import_progress(uploaded.getvalue().decode("utf-8", errors="replace")):
            st.session_state.notice = ("success", "Progress imported.")
        else:
            st.session_state.notice = ("error", "That file is not a valid progress export.")
        st.rerun()

    confirm = st.sidebar.checkbox("I understand this cannot be undone")
    if st.sidebar.button("Reset all progress", disabled=not confirm, use_container_width=True):
        session.reset()
        st.session_state.notice = ("info", "Progress has been reset.")
        st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Topic View
# -----------------------------------------------------------------------------

def render_notifications():
    """Show achievements and notices queued by the previous action."""
    for achievement in st.session_state.achievements:
        st.markdown(render_achievement(achievement), unsafe_allow_html=True)
        st.balloons()
    st.session_state.achievements = []

    notice = st.session_state.notice
    if notice:
        kind, message = notice
        getattr(st, kind)(message)
        st.session_state.notice = None


def render_topic_view():
    """Render the current topic, its quiz and the navigation buttons."""
    session = st.session_state.session
    chapter = session.chapter
    topic = session.topic
    attempt = session.attempt
    completed = session.topic_completed
    position, total = session.engine.topic_position(session.snapshot)

    st.markdown(get_topic_css(), unsafe_allow_html=True)
    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.markdown(render_chapter_header(chapter, topic), unsafe_allow_html=True)
    st.markdown(render_topic_position(position, total, completed), unsafe_allow_html=True)
    st.markdown(render_knowledge_card(topic), unsafe_allow_html=True)

    if attempt.is_checked:
        st.markdown(render_quiz(topic.quiz, attempt.selected, checked=True), unsafe_allow_html=True)
        st.markdown(render_feedback(topic.quiz, attempt.correct), unsafe_allow_html=True)
    else:
        st.subheader("📝 Quick Quiz")
        options = topic.quiz.options
        # Widget state lives per visit so a restarted attempt starts blank
        choice = st.radio(
            topic.quiz.question,
            list(range(len(options))),
            index=attempt.selected,
            format_func=lambda i: format_option(i, options[i]),
            key=f"quiz_{attempt.key}_{session.visit}",
        )
        if choice is not None and choice != attempt.selected:
            session.choose_option(choice)

    render_navigation_buttons(completed)


def render_navigation_buttons(completed: bool):
    """Render Previous / Next buttons."""
    session = st.session_state.session
    attempt = session.attempt

    if completed or attempt.is_checked:
        next_label = "Next →"
    else:
        next_label = "Check answer →"

    col1, col2 = st.columns(2)
    with col1:
        if st.button(
            "← Previous",
            disabled=session.snapshot.current_topic_index == 0,
            use_container_width=True,
        ):
            session.prev_topic()
            st.rerun()

    with col2:
        if st.button(next_label, type="primary", use_container_width=True):
            try:
                outcome = session.next_topic()
            except NoSelectionError:
                st.warning("Please answer the quiz question first!")
                return
            st.session_state.achievements.extend(session.pop_achievements())
            if not outcome.checked and not outcome.advanced:
                st.session_state.notice = ("info", "You've reached the last unlocked topic.")
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    if "load_error" in st.session_state:
        st.markdown(get_progress_css(), unsafe_allow_html=True)
        st.markdown(
            render_error("Could not load the knowledge base. Check QUIZPATH_KNOWLEDGE_BASE and reload."),
            unsafe_allow_html=True,
        )
        st.code(st.session_state.load_error)
        return

    render_sidebar()
    render_notifications()
    render_topic_view()


if __name__ == "__main__":
    main()
