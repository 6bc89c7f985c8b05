"""Shared header showing what is loaded."""
import streamlit as st

from table_insights.export import to_csv_text
from table_insights.table import Table, categorical_columns, numeric_columns


def render_table_header(table: Table):
    """
    Render file name, shape, column kinds and the CSV download button.

    Args:
        table: The loaded table
    """
    rows, cols = table.shape
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Rows", f"{rows:,}")
    with col2:
        st.metric("Columns", f"{cols:,}")
    with col3:
        st.metric("Numeric", len(numeric_columns(table)))
    with col4:
        st.metric("Categorical", len(categorical_columns(table)))

    st.download_button(
        label="Download CSV",
        data=to_csv_text(table),
        file_name=table.file_name or "data.csv",
        mime="text/csv",
    )
