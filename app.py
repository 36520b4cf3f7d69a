"""
📅 DYNAMIC SCHEDULER — Routine editor
=====================================
- Configure classes and periods, then generate an empty routine
- Type subject + teacher in every box; clashes are refused on the spot
- Teacher load summary per day
- Download as Excel (one sheet per class) or PDF
- All data persisted to disk
"""

import logging
import os
import time
from datetime import timedelta
from typing import List

import streamlit as st

import editor
from conflicts import ConflictError
from models import TimeSlot
from pdf_export import PDF_FILE_NAME, export_schedule_pdf
from teacher_load import build_teacher_day_count
from ui_forms import render_config_form, render_count_inputs
from views import editor_changes, editor_frame, render_teacher_load_table, style_class_grid, toast_html
from xlsx_export import XLSX_FILE_NAME, XLSX_MIME, export_schedule_xlsx


logging.basicConfig(
    level=os.environ.get("SCHEDULER_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# ---------------------------------------------------------------------------
# PAGE CONFIG
# ---------------------------------------------------------------------------

st.set_page_config(page_title="Dynamic Scheduler", page_icon="📅", layout="wide")

PAGE_CSS = """
<style>
    .main .block-container { padding-top: 2rem; }
    .toast-item {
        display: flex;
        justify-content: space-between;
        padding: 8px 12px;
        margin-bottom: 6px;
        border-radius: 8px;
        background-color: #18181b;
        border: 1px solid #27272a;
        animation: fadein 0.25s ease;
    }
    .toast-msg { color: #fafafa; }
    .toast-countdown { color: #71717a; font-size: 0.85em; }
    @keyframes fadein { from { opacity: 0; } to { opacity: 1; } }
</style>
"""

st.markdown(PAGE_CSS, unsafe_allow_html=True)


# ---------------------------------------------------------------------------
# SESSION STATE — Load from disk
# ---------------------------------------------------------------------------

def _init_session():
    if "editor" not in st.session_state:
        st.session_state.editor = editor.load_state()
    if "notifications" not in st.session_state:
        st.session_state.notifications = []  # (expires_at, msg) pairs
    if "grid_version" not in st.session_state:
        # Bumped to throw away a data_editor's unsaved edits after a refused change
        st.session_state.grid_version = 0


_init_session()
state: editor.EditorState = st.session_state.editor


# ---------------------------------------------------------------------------
# NOTIFICATIONS — Stackable, smooth countdown via fragment
# ---------------------------------------------------------------------------

def show_toast(msg: str, duration_sec: int = 3) -> None:
    """Queue a notification next to any still showing."""
    st.session_state.notifications.append((time.time() + duration_sec, msg))


@st.fragment(run_every=timedelta(seconds=1))
def _notification_ticker():
    now = time.time()
    active = [(until, msg) for until, msg in st.session_state.get("notifications", []) if until > now]
    st.session_state.notifications = active
    if active:
        st.markdown(
            "".join(toast_html(msg, int(until - now)) for until, msg in active),
            unsafe_allow_html=True,
        )


# ---------------------------------------------------------------------------
# HANDLERS
# ---------------------------------------------------------------------------

def _on_class_count(n: int) -> None:
    editor.change_class_count(state, n)
    st.rerun()


def _on_period_count(n: int) -> None:
    editor.change_period_count(state, n)
    st.rerun()


def _on_generate(names: List[str], slots: List[TimeSlot]) -> None:
    try:
        editor.set_class_names(state, names)
    except ValueError as e:
        st.error(str(e))
        return
    for i, slot in enumerate(slots):
        editor.change_time_slot(state, i, start=slot.start, end=slot.end)
    editor.generate(state)
    show_toast("Schedule generated")
    st.rerun()


def _on_new_routine() -> None:
    editor.new_routine(state)
    for key in ("cfg_n_classes", "cfg_n_periods"):
        st.session_state.pop(key, None)
    st.session_state.grid_version += 1
    show_toast("Started a new routine")
    st.rerun()


def _apply_grid_edits(class_name: str, edited) -> None:
    """Push every changed field through the store; stop at the first clash."""
    changes = editor_changes(state.schedule, class_name, edited)
    if not changes:
        return
    for day, slot_index, field_name, value in changes:
        if not editor.edit_cell(state, class_name, day, slot_index, field_name, value):
            break
    st.session_state.grid_version += 1
    st.rerun()


# ---------------------------------------------------------------------------
# MAIN
# ---------------------------------------------------------------------------

st.title("📅 Dynamic Scheduler")
st.markdown("*Build the weekly routine class by class. Data persists across refresh.*")

_notification_ticker()

if not state.has_generated:
    st.header("Configuration")
    render_count_inputs(state.config, _on_class_count, _on_period_count)
    render_config_form(state.config, _on_generate)
else:
    if st.button("🆕 Create New Routine", key="new_routine"):
        _on_new_routine()

if state.error:
    st.error(state.error)

if state.schedule is not None:
    schedule = state.schedule
    tab_edit, tab_colour, tab_summary, tab_export = st.tabs([
        "✏️ Edit Routine",
        "🎨 Colour View",
        "👨‍🏫 Teacher Load",
        "📥 Download",
    ])

    # ----- TAB 1: Edit -----
    with tab_edit:
        for class_name in schedule.class_names:
            st.subheader(class_name)
            edited = st.data_editor(
                editor_frame(schedule, class_name),
                key=f"grid_{class_name}_{st.session_state.grid_version}",
                use_container_width=True,
                num_rows="fixed",
            )
            _apply_grid_edits(class_name, edited)

    # ----- TAB 2: Colour view -----
    with tab_colour:
        for class_name in schedule.class_names:
            st.dataframe(style_class_grid(schedule, class_name), use_container_width=True)

    # ----- TAB 3: Teacher load -----
    with tab_summary:
        counts = build_teacher_day_count(schedule, schedule.days, schedule.class_names, schedule.time_slots)
        if not counts:
            st.info("No teacher assignments yet.")
        else:
            st.subheader("Teacher Assignments per Day")
            st.dataframe(render_teacher_load_table(counts, schedule.days), use_container_width=True)

    # ----- TAB 4: Download -----
    with tab_export:
        if not editor.can_export(state):
            st.warning("Cannot download. There's a conflict: " + state.error)
        else:
            try:
                xlsx_bytes = export_schedule_xlsx(schedule)
                pdf_bytes = export_schedule_pdf(schedule)
            except ConflictError as e:
                st.warning("Cannot download. There's a conflict: " + e.message)
            else:
                col_xlsx, col_pdf = st.columns(2)
                with col_xlsx:
                    st.download_button(
                        "📥 Download Excel",
                        data=xlsx_bytes,
                        file_name=XLSX_FILE_NAME,
                        mime=XLSX_MIME,
                        key="dl_xlsx",
                    )
                with col_pdf:
                    st.download_button(
                        "📄 Download PDF",
                        data=pdf_bytes,
                        file_name=PDF_FILE_NAME,
                        mime="application/pdf",
                        key="dl_pdf",
                    )
elif state.has_generated:
    st.info("No schedule found. Create a new routine to start again.")
