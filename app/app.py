"""Table Insights - interactive viewer"""
import sys
from pathlib import Path

import streamlit as st

app_dir = Path(__file__).parent
if str(app_dir) not in sys.path:
    sys.path.insert(0, str(app_dir))

from table_insights.config import load_settings
from table_insights.errors import TableParseError
from table_insights.ingest import parse_table
from ui_components import (
    render_box_plots,
    render_correlation,
    render_distribution,
    render_preview,
    render_statistics,
    render_table_header,
    render_training,
    render_visualization,
)

st.set_page_config(
    page_title="Table Insights",
    page_icon="📊",
    layout="wide"
)


def handle_upload(uploaded) -> None:
    """Parse the uploaded file into session state, or report why it failed."""
    try:
        text = uploaded.getvalue().decode("utf-8-sig")
        table = parse_table(text, file_name=uploaded.name)
    except UnicodeDecodeError as e:
        st.error(f"Error parsing file: {uploaded.name} is not UTF-8 text ({e})")
        return
    except TableParseError as e:
        st.error(f"Error parsing file: {e}")
        return
    st.session_state["table"] = table
    st.session_state.pop("training_result", None)
    st.toast(f"Loaded {len(table)} rows")


def main():
    st.title("📊 Table Insights")
    st.caption("Descriptive statistics, correlation and distributions for delimited text files")

    settings = load_settings()
    table = st.session_state.get("table")

    if table is None:
        uploaded = st.file_uploader("Upload a CSV file", type=["csv", "tsv"])
        if uploaded is not None:
            handle_upload(uploaded)
            table = st.session_state.get("table")
        if table is None:
            return

    st.sidebar.header(table.file_name or "Loaded table")
    st.sidebar.markdown(f"{len(table)} rows × {len(table.headers)} columns")
    if st.sidebar.button("Upload New File"):
        st.session_state.pop("table", None)
        st.session_state.pop("training_result", None)
        st.rerun()

    render_table_header(table)

    tabs = st.tabs([
        "Preview",
        "Statistics",
        "Visualization",
        "Correlation",
        "Distribution",
        "Box Plots",
        "ML Analysis",
    ])

    with tabs[0]:
        render_preview(table)
    with tabs[1]:
        render_statistics(table)
    with tabs[2]:
        render_visualization(table, settings)
    with tabs[3]:
        render_correlation(table)
    with tabs[4]:
        render_distribution(table, settings)
    with tabs[5]:
        render_box_plots(table, settings)
    with tabs[6]:
        render_training(table, settings)


if __name__ == "__main__":
    main()
