#!/usr/bin/env python3
"""
S21 Compensator: Interactive Web Frontend

Launch: streamlit run frontend.py
"""

import streamlit as st

# ─── Page Config ────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="S21 Compensator",
    page_icon="📡",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ─── Imports (lazy, after page config) ──────────────────────────────────────
from s21comp.measurement import ExtractorConfig, load
from s21comp.measurement.csv_source import label_from_filename
from s21comp.analysis import ReferenceNotFoundError, compensate
from s21comp.export import export_compensated_csv
from s21comp.visualization import build_plot_data
from s21comp.visualization.plotly_viz import (
    plot_raw_s21_interactive, plot_compensated_s21_interactive,
)
from s21comp.utils.constants import DEFAULT_MAX_ROWS, DEFAULT_SKIP_ROWS, EXPORT_FILENAME


# ═══════════════════════════════════════════════════════════════════════════════
# Session State Initialization
# ═══════════════════════════════════════════════════════════════════════════════

SESSION_DEFAULTS = {
    "measurements": None,
    "compensation": None,
    "show_charts": False,
    "upload_key": 0,
}


def init_session():
    """Initialize session state for the load → process → plot flow."""
    for key, val in SESSION_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = val


def clear_all():
    """Drop loaded data, results and charts; reset the file picker."""
    st.session_state.measurements = None
    st.session_state.compensation = None
    st.session_state.show_charts = False
    st.session_state.upload_key += 1


init_session()


# ═══════════════════════════════════════════════════════════════════════════════
# Sidebar Settings
# ═══════════════════════════════════════════════════════════════════════════════

with st.sidebar:
    st.title("S21 Compensator")
    st.caption("Reflection-loss compensated S21 from VNA exports")

    st.divider()
    st.subheader("⚙️ Settings")

    ref_name = st.text_input("Reference file name (without .csv)", value="")

    col1, col2 = st.columns(2)
    with col1:
        skip_rows = st.number_input("Skip rows", value=DEFAULT_SKIP_ROWS, min_value=0, step=1,
                                    help="Used only when a file has no BEGIN/END block")
    with col2:
        max_rows = st.number_input("Max rows", value=DEFAULT_MAX_ROWS, min_value=1, step=1,
                                   help="Used only when a file has no BEGIN/END block")

    st.divider()
    dark_mode = st.toggle("🌙 Dark charts", value=False)
    theme = "dark" if dark_mode else "light"

    st.divider()
    if st.button("🗑️ Clear All"):
        clear_all()
        st.rerun()


# ═══════════════════════════════════════════════════════════════════════════════
# Load
# ═══════════════════════════════════════════════════════════════════════════════

st.header("📂 Measurement Files")

uploaded_files = st.file_uploader(
    "Upload CSV sweep files",
    type=["csv", "CSV"],
    accept_multiple_files=True,
    key=f"upload_csv_{st.session_state.upload_key}",
)

if uploaded_files and st.button("📥 Load Files", type="primary"):
    files = [(label_from_filename(f.name), f.getvalue()) for f in uploaded_files]
    config = ExtractorConfig(skip_rows=int(skip_rows), max_rows=int(max_rows))
    with st.spinner(f"Reading {len(files)} files..."):
        st.session_state.measurements = load(files, config)
    st.session_state.compensation = None
    st.session_state.show_charts = False

measurements = st.session_state.measurements

if measurements is not None:
    n_files = len(measurements.outcomes)
    n_ok = sum(o.ok for o in measurements.outcomes)

    for outcome in measurements.outcomes:
        if not outcome.ok:
            st.error(f"Error in {outcome.label}: {outcome.error}")

    if measurements.ok:
        st.success(f"{n_ok} of {n_files} files loaded successfully. Ready to process.")
    else:
        st.error(f"Failed to load any valid data from {n_files} files. "
                 f"Please check file format.")

    st.dataframe(
        [{"File": f"📄 {o.label}", "Status": o.status} for o in measurements.outcomes],
        use_container_width=True,
        hide_index=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Process / Plot / Export
# ═══════════════════════════════════════════════════════════════════════════════

if measurements is not None and measurements.ok:
    st.divider()
    col_p, col_g, col_e = st.columns(3)

    with col_p:
        if st.button("🔄 Process Data", type="primary"):
            try:
                with st.spinner("Processing data..."):
                    st.session_state.compensation = compensate(measurements, ref_name)
                st.session_state.show_charts = False
                st.success("Data processed successfully. Ready to plot.")
            except ReferenceNotFoundError as e:
                st.session_state.compensation = None
                st.error(str(e))

    result = st.session_state.compensation

    with col_g:
        if st.button("📊 Plot Charts", disabled=result is None):
            st.session_state.show_charts = True

    with col_e:
        if result is not None:
            st.download_button(
                "💾 Export CSV",
                data=export_compensated_csv(measurements, result),
                file_name=EXPORT_FILENAME,
                mime="text/csv",
            )
        else:
            st.button("💾 Export CSV", disabled=True)

    if result is not None and st.session_state.show_charts:
        data = build_plot_data(measurements, result)
        st.plotly_chart(plot_raw_s21_interactive(data, theme=theme),
                        use_container_width=True)
        st.plotly_chart(plot_compensated_s21_interactive(data, theme=theme),
                        use_container_width=True)
