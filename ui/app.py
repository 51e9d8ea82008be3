"""Streamlit UI for Scholar's AI Companion - document list + study dashboard.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Any  # noqa: E402

import streamlit as st  # noqa: E402

from ui import helpers as api  # noqa: E402

# Page config
st.set_page_config(
    page_title="Scholar's AI Companion",
    page_icon="🎓",
    layout="wide",
)

# Initialize session state
_DEFAULTS: dict[str, Any] = {
    "view": "home",
    "doc_id": None,
    "error": None,
    "quiz_answers": {},
    "quiz_result": None,
    "card_index": 0,
    "card_checked": False,
    "card_revealed": False,
    "notes_editing": False,
}
for _key, _value in _DEFAULTS.items():
    if _key not in st.session_state:
        st.session_state[_key] = _value


def reset_quiz_state() -> None:
    st.session_state.quiz_answers = {}
    st.session_state.quiz_result = None


def reset_card_state() -> None:
    st.session_state.card_checked = False
    st.session_state.card_revealed = False


def open_document(doc_id: str) -> None:
    api.select_document(doc_id)
    st.session_state.doc_id = doc_id
    st.session_state.view = "dashboard"
    st.session_state.card_index = 0
    reset_card_state()
    reset_quiz_state()


def run_generation(doc: dict[str, Any], feature: str, spinner: str) -> None:
    """Generate a feature and surface failures inline; old output stays on failure."""
    with st.spinner(spinner):
        try:
            outcome = api.generate(doc["id"], feature)
        except Exception as e:
            st.session_state.error = api.error_message(e)
            return
    st.session_state.error = None
    if not outcome.get("applied"):
        st.info("A newer request replaced this one.")
    if feature == "quiz":
        reset_quiz_state()
    if feature == "flashcards":
        st.session_state.card_index = 0
        reset_card_state()
    st.rerun()


# =============================================================================
# HOME - DOCUMENT LIST + UPLOAD
# =============================================================================
def render_home() -> None:
    st.title("🎓 Scholar's AI Companion")
    st.markdown("*Turn any academic document into a complete, interactive study experience.*")
    st.divider()

    col_docs, col_upload = st.columns([3, 2])

    with col_docs:
        st.subheader("📚 My Documents")
        try:
            listing = api.list_documents()
        except Exception as e:
            st.error(f"❌ {api.error_message(e)}")
            return

        documents = listing.get("documents", [])
        if not documents:
            st.info("No documents yet. Upload a PDF or TXT file to get started.")

        for doc in documents:
            with st.container(border=True):
                c_info, c_open, c_delete = st.columns([4, 1, 1])
                with c_info:
                    st.markdown(f"**{doc['name']}** {api.generated_badges(doc.get('generated', []))}")
                    st.caption(
                        f"{api.format_timestamp(doc['timestamp'])} · {doc['wordCount']} words"
                    )
                with c_open:
                    if st.button("Open", key=f"open-{doc['id']}", use_container_width=True):
                        open_document(doc["id"])
                        st.rerun()
                with c_delete:
                    if st.button("🗑️", key=f"delete-{doc['id']}", use_container_width=True):
                        api.delete_document(doc["id"])
                        st.rerun()

    with col_upload:
        st.subheader("⬆️ Upload New Document")
        st.caption("Select a PDF or TXT file to get started.")
        upl = st.file_uploader("PDF or TXT", type=["pdf", "txt"], accept_multiple_files=False)

        if upl is not None:
            st.markdown(f"**{upl.name}** · {api.format_bytes(upl.size)}")

        if st.button("Process Document", type="primary", disabled=upl is None):
            if not api.is_accepted_upload(upl.type):
                st.session_state.error = (
                    f"Please upload a PDF or TXT file. You uploaded a {upl.type} file."
                )
            else:
                with st.spinner("Extracting text…"):
                    try:
                        doc = api.upload_document(upl.name, upl.getvalue(), upl.type)
                    except Exception as e:
                        st.session_state.error = api.error_message(e)
                    else:
                        st.session_state.error = None
                        open_document(doc["id"])
                        st.rerun()

        if st.session_state.error:
            st.error(f"❌ {st.session_state.error}")


# =============================================================================
# DASHBOARD TABS
# =============================================================================
def render_summary(doc: dict[str, Any]) -> None:
    st.markdown("### Document Summary")
    st.caption("A high-level overview of the key topics.")

    if doc["aiOutputs"].get("summary") is None:
        if st.button("Generate Summary", type="primary"):
            run_generation(doc, "summary", "Summarizing…")
        return

    sections = api.get_summary_sections(doc["id"])
    for i, section in enumerate(sections):
        with st.expander(section.get("title") or "Summary", expanded=i == 0):
            st.markdown(section["content"])

    if st.button("🔄 Regenerate Summary"):
        run_generation(doc, "summary", "Summarizing…")


def render_notes(doc: dict[str, Any]) -> None:
    st.markdown("### Interactive Notes")
    st.caption("Editable, topic-based notes from your document.")

    notes = doc["aiOutputs"].get("notes")
    if notes is None:
        if st.button("Generate Notes", type="primary"):
            st.session_state.notes_editing = False
            run_generation(doc, "notes", "Writing notes…")
        return

    c_edit, c_download, c_regen = st.columns(3)
    with c_edit:
        label = "👁️ View" if st.session_state.notes_editing else "✏️ Edit"
        if st.button(label, use_container_width=True):
            st.session_state.notes_editing = not st.session_state.notes_editing
            st.rerun()
    with c_download:
        st.download_button(
            "⬇️ Download .md",
            data=api.export_notes(doc["id"]),
            file_name="study-notes.md",
            mime="text/markdown",
            use_container_width=True,
        )
    with c_regen:
        if st.button("🔄 Regenerate", use_container_width=True):
            run_generation(doc, "notes", "Writing notes…")

    if st.session_state.notes_editing:
        edited = st.text_area("Notes (Markdown)", value=notes, height=500)
        if st.button("💾 Save notes", type="primary") and edited != notes:
            api.update_outputs(doc["id"], {"notes": edited})
            st.toast("Notes saved")
            st.rerun()
    else:
        st.markdown(notes)


def render_flashcards(doc: dict[str, Any]) -> None:
    st.markdown("### Flashcards")
    st.caption("Check your understanding one card at a time.")

    cards = doc["aiOutputs"].get("flashcards")
    if not cards:
        if st.button("Generate Flashcards", type="primary"):
            run_generation(doc, "flashcards", "Creating flashcards…")
        return

    index = min(st.session_state.card_index, len(cards) - 1)
    card = cards[index]
    st.caption(api.card_position_label(index, len(cards)))

    with st.container(border=True):
        st.markdown(f"#### {card['question']}")
        selected = st.radio(
            "Options",
            options=list(range(len(card["options"]))),
            format_func=lambda i: card["options"][i],
            index=None,
            key=f"card-{doc['id']}-{index}",
            disabled=st.session_state.card_checked,
            label_visibility="collapsed",
        )

        c_skip, c_check = st.columns(2)
        with c_skip:
            if st.button("Skip & Show Answer", disabled=st.session_state.card_checked):
                st.session_state.card_revealed = True
        with c_check:
            if st.button("Check Answer", disabled=selected is None or st.session_state.card_checked):
                st.session_state.card_checked = True
                st.session_state.card_revealed = True
                st.rerun()

        if st.session_state.card_checked:
            for i, option in enumerate(card["options"]):
                state = api.option_feedback(i, selected, card["correctOptionIndex"], True)
                if state == "correct":
                    st.success(option)
                elif state == "incorrect":
                    st.error(option)
            if selected == card["correctOptionIndex"]:
                st.markdown("✅ **Correct!**")
            else:
                st.markdown("❌ **Not quite...**")

        if st.session_state.card_revealed:
            st.markdown(f"**Answer:** {card['answer']}")
            st.caption(f"Explanation: {card['explanation']}")
            if st.button("🔁 Try again"):
                reset_card_state()
                st.session_state.pop(f"card-{doc['id']}-{index}", None)
                st.rerun()

    c_prev, c_next, c_download, c_regen = st.columns(4)
    with c_prev:
        if st.button("⬅️ Previous", disabled=index == 0, use_container_width=True):
            st.session_state.card_index = index - 1
            reset_card_state()
            st.rerun()
    with c_next:
        if st.button("Next ➡️", disabled=index >= len(cards) - 1, use_container_width=True):
            st.session_state.card_index = index + 1
            reset_card_state()
            st.rerun()
    with c_download:
        st.download_button(
            "⬇️ Download .json",
            data=api.export_flashcards(doc["id"]),
            file_name="flashcards.json",
            mime="application/json",
            use_container_width=True,
        )
    with c_regen:
        if st.button("🔄 Regenerate", key="regen-cards", use_container_width=True):
            run_generation(doc, "flashcards", "Creating flashcards…")


def render_quiz_results(doc: dict[str, Any], result: dict[str, Any]) -> None:
    st.markdown("### Quiz Complete!")
    c_score, c_pct = st.columns(2)
    c_score.metric("Score", f"{result['score']} / {result['total']}")
    c_pct.metric("Percentage", f"{result['percentage']}%")

    c_restart, c_new, c_download = st.columns(3)
    with c_restart:
        if st.button("🔁 Restart Quiz", use_container_width=True):
            api.restart_quiz(doc["id"])
            reset_quiz_state()
            st.rerun()
    with c_new:
        if st.button("✨ Generate New Quiz", use_container_width=True):
            run_generation(doc, "quiz", "Building quiz…")
    with c_download:
        st.download_button(
            "⬇️ Download Results",
            data=api.quiz_report(result),
            file_name="quiz-results.txt",
            mime="text/plain",
            use_container_width=True,
        )

    if result["answeredCorrectly"]:
        st.markdown("#### ✅ Correct Answers")
        for item in result["answeredCorrectly"]:
            q = item["question"]
            with st.expander(q["question"]):
                st.markdown(f"**Correct Answer:** {q['options'][q['correctAnswerIndex']]}")
                st.caption(f"Explanation: {q['explanation']}")

    if result["answeredIncorrectly"]:
        st.markdown("#### ❌ Incorrect Answers")
        for item in result["answeredIncorrectly"]:
            q = item["question"]
            selected = item.get("selectedAnswer")
            yours = q["options"][selected] if selected is not None else "Not answered"
            with st.expander(q["question"]):
                st.markdown(f"**Your Answer:** {yours}")
                st.markdown(f"**Correct Answer:** {q['options'][q['correctAnswerIndex']]}")
                st.caption(f"Explanation: {q['explanation']}")


def render_quiz(doc: dict[str, Any]) -> None:
    quiz = doc["aiOutputs"].get("quiz")

    if st.session_state.quiz_result is not None:
        render_quiz_results(doc, st.session_state.quiz_result)
        return

    st.markdown("### AI-Generated Quiz")
    st.caption("Test your knowledge with a multiple-choice quiz.")

    if not quiz:
        if st.button("Generate Quiz", type="primary"):
            run_generation(doc, "quiz", "Building quiz…")
        return

    answers: dict[int, int] = st.session_state.quiz_answers
    for q_index, q in enumerate(quiz):
        with st.container(border=True):
            choice = st.radio(
                f"{q_index + 1}. {q['question']}",
                options=list(range(len(q["options"]))),
                format_func=lambda i, opts=q["options"]: opts[i],
                index=answers.get(q_index),
                key=f"quiz-{doc['id']}-{q_index}",
            )
            if choice is not None:
                answers[q_index] = choice

    if st.button("Submit Quiz", type="primary", disabled=not api.all_answered(answers, len(quiz))):
        try:
            st.session_state.quiz_result = api.submit_quiz(doc["id"], answers)
        except Exception as e:
            st.session_state.error = api.error_message(e)
        st.rerun()


def render_dashboard() -> None:
    try:
        doc = api.get_document(st.session_state.doc_id)
    except Exception as e:
        st.session_state.view = "home"
        st.session_state.error = api.error_message(e)
        st.rerun()
        return

    col_title, col_back = st.columns([5, 1])
    with col_title:
        st.title("🧠 Study Dashboard")
        st.markdown(f"You are studying: **{doc['name']}**")
    with col_back:
        if st.button("📚 My Documents", use_container_width=True):
            api.clear_selection()
            st.session_state.view = "home"
            st.session_state.doc_id = None
            st.session_state.error = None
            st.rerun()

    if st.session_state.error:
        st.error(f"❌ {st.session_state.error}")

    tab_summary, tab_notes, tab_cards, tab_quiz = st.tabs(
        ["📄 Summary", "📝 Interactive Notes", "🗂️ Flashcards", "💡 AI Quiz"]
    )
    with tab_summary:
        render_summary(doc)
    with tab_notes:
        render_notes(doc)
    with tab_cards:
        render_flashcards(doc)
    with tab_quiz:
        render_quiz(doc)


if st.session_state.view == "dashboard" and st.session_state.doc_id:
    render_dashboard()
else:
    render_home()
