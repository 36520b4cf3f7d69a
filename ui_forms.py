"""
🧠 UI FORMS — st.form() to prevent screen jump while typing
==========================================================
Forms batch inputs: no rerun until Submit. Layout stays fixed.
Counts (classes, periods) live outside the form because they change how
many inputs the form shows.
"""

import streamlit as st
from typing import Callable, List

from models import ScheduleConfig, TimeSlot


def render_count_inputs(
    config: ScheduleConfig,
    on_class_count: Callable[[int], None],
    on_period_count: Callable[[int], None],
) -> None:
    """Number of classes / periods. Each change resizes the config right away."""
    col_classes, col_periods = st.columns(2)
    with col_classes:
        n_classes = st.number_input(
            "Number of Classes",
            min_value=1,
            value=len(config.class_names),
            step=1,
            key="cfg_n_classes",
        )
    with col_periods:
        n_periods = st.number_input(
            "Number of Periods",
            min_value=1,
            value=len(config.time_slots),
            step=1,
            key="cfg_n_periods",
        )
    if int(n_classes) != len(config.class_names):
        on_class_count(int(n_classes))
    if int(n_periods) != len(config.time_slots):
        on_period_count(int(n_periods))


def render_config_form(
    config: ScheduleConfig,
    on_generate: Callable[[List[str], List[TimeSlot]], None],
) -> None:
    """
    Class names and slot start/end inside st.form(). No reruns while typing.
    Widget keys include the counts so a resize starts from fresh values.
    """
    shape = f"{len(config.class_names)}x{len(config.time_slots)}"

    with st.form(f"config_form_{shape}", clear_on_submit=False):
        st.markdown("**Class Names**")
        names = []
        for i, class_name in enumerate(config.class_names):
            names.append(
                st.text_input(
                    f"Class {i + 1}",
                    value=class_name,
                    key=f"cfg_class_{shape}_{i}",
                    label_visibility="collapsed",
                )
            )

        st.markdown("**Time Slots (Start - End)**")
        slots = []
        for i, slot in enumerate(config.time_slots):
            col_start, col_end = st.columns(2)
            with col_start:
                start = st.text_input(
                    f"Start {i + 1}", value=slot.start, key=f"cfg_start_{shape}_{i}", placeholder="Start",
                )
            with col_end:
                end = st.text_input(
                    f"End {i + 1}", value=slot.end, key=f"cfg_end_{shape}_{i}", placeholder="End",
                )
            slots.append(TimeSlot(start, end))

        submitted = st.form_submit_button("Generate Schedule", type="primary")

    if submitted:
        on_generate(names, slots)
