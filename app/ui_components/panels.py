"""Statistics and chart panels. Every number comes from table_insights.stats."""
import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from table_insights import preview
from table_insights.config import QuartileMethod, Settings
from table_insights.errors import InsufficientDataError
from table_insights.stats import boxplot, correlation, frequency, summary
from table_insights.stats.histogram import column_histogram
from table_insights.table import Table, categorical_columns, numeric_columns


def render_preview(table: Table):
    """Paged view of the rows, 10 per page."""
    pages = preview.total_pages(table)
    page_no = st.number_input("Page", min_value=1, max_value=pages, value=1, step=1, key="preview_page")
    p = preview.page(table, int(page_no) - 1)
    st.dataframe(pd.DataFrame(p.rows, columns=p.headers), hide_index=True, width="stretch")
    st.caption(f"Page {p.page + 1} of {p.total_pages}")


def render_statistics(table: Table):
    tab1, tab2 = st.tabs(["Summary Statistics", "Missing Values"])

    with tab1:
        rows = []
        for s in summary.summarize(table):
            rows.append({"Column": s.column, "Type": s.kind.value, "Count": s.count, "Missing": s.missing, "Details": summary.stats_details(s)})
        st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")

    with tab2:
        rows = [
            {"Column": m.column, "Missing Count": m.missing, "Percentage": f"{m.percentage:.1f}%"}
            for m in summary.missing_values(table)
        ]
        st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")


def render_visualization(table: Table, settings: Settings):
    """Top values of any column as a bar, line or pie chart."""
    nums = numeric_columns(table)
    if not nums:
        st.info("No numeric columns found for visualization.")
        return

    col1, col2 = st.columns(2)
    with col1:
        column = st.selectbox("Column", list(table.headers), index=list(table.headers).index(nums[0]), key="viz_column")
    with col2:
        chart = st.radio("Chart type", [c.value for c in frequency.ChartType], horizontal=True, key="viz_chart")

    items = frequency.column_frequencies(table, column, n=settings.top_n)
    if not items:
        st.info("Not enough data to chart this column.")
        return

    frame = pd.DataFrame({"name": [i.name for i in items], "count": [i.count for i in items]}).set_index("name")
    if chart == frequency.ChartType.BAR.value:
        st.bar_chart(frame)
    elif chart == frequency.ChartType.LINE.value:
        st.line_chart(frame)
    else:
        fig, ax = plt.subplots(figsize=(6, 6))
        ax.pie(frame["count"], labels=frame.index)
        st.pyplot(fig)
        plt.close(fig)


def render_correlation(table: Table):
    try:
        matrix = correlation.correlation_matrix(table)
    except InsufficientDataError as e:
        st.info(str(e))
        return

    frame = pd.DataFrame(matrix.values, index=matrix.columns, columns=matrix.columns)
    styled = frame.style.format("{:.2f}").map(lambda v: f"background-color: {correlation.correlation_color(v)}")
    st.dataframe(styled, width="stretch")


def render_distribution(table: Table, settings: Settings):
    nums = numeric_columns(table)
    if not nums:
        st.info("No numeric columns found for distribution analysis.")
        return

    column = st.selectbox("Column", nums, key="dist_column")
    hist = column_histogram(table, column, bins=settings.histogram_bins)
    if not hist:
        st.info("Not enough data in this column.")
        return
    frame = pd.DataFrame({"range": [b.label for b in hist], "count": [b.count for b in hist]}).set_index("range")
    st.bar_chart(frame)


def render_box_plots(table: Table, settings: Settings):
    try:
        boxplot.default_box_plot_columns(table)
    except InsufficientDataError as e:
        st.info(str(e))
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        value_col = st.selectbox("Numeric", numeric_columns(table), key="box_numeric")
    with col2:
        group_col = st.selectbox("Category", categorical_columns(table), key="box_category")
    with col3:
        methods = [m.value for m in QuartileMethod]
        method = st.selectbox("Quartiles", methods, index=methods.index(settings.quartile_method.value), key="box_method")

    groups = boxplot.grouped_five_number(table, value_col, group_col, method=QuartileMethod(method))
    if not groups:
        st.info("Not enough data for this selection.")
        return

    st.dataframe(pd.DataFrame([g.model_dump() for g in groups]), hide_index=True, width="stretch")
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bxp(
        [{"label": g.category, "whislo": g.min, "q1": g.q1, "med": g.median, "q3": g.q3, "whishi": g.max, "fliers": []} for g in groups],
        showfliers=False,
    )
    ax.set_xlabel(group_col)
    ax.set_ylabel(value_col)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    plt.tight_layout()
    st.pyplot(fig)
    plt.close(fig)
