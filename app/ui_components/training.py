"""Simulated training panel."""
import pandas as pd
import streamlit as st

from table_insights.config import Settings
from table_insights.models import TrainingTask
from table_insights.table import Table, numeric_columns
from table_insights.training import SimulatedTrainer, eligible_targets


def render_training(table: Table, settings: Settings):
    st.caption("Scores below are simulated. No model is fitted.")

    task = st.radio("Task", [t.value for t in TrainingTask], horizontal=True, key="train_task")
    if task == TrainingTask.CLASSIFICATION.value:
        targets = eligible_targets(table)
        if not targets:
            st.info(
                "No suitable categorical columns found for classification. "
                "Target column should have fewer than 20 unique values."
            )
            return
    else:
        targets = numeric_columns(table)
        if not targets:
            st.info("No numeric columns found for regression.")
            return

    target = st.selectbox("Target column", targets, key="train_target")
    if st.button("Train Model", type="primary", key="train_button"):
        with st.spinner("Training..."):
            result = SimulatedTrainer(delay=settings.training_delay).train(table, target, task)
        st.session_state["training_result"] = result

    result = st.session_state.get("training_result")
    if result is None or result.target not in table.headers:
        return

    if result.accuracy is not None:
        st.metric("Accuracy", f"{result.accuracy * 100:.1f}%")
    if result.r2 is not None:
        col1, col2 = st.columns(2)
        col1.metric("R²", f"{result.r2:.3f}")
        col2.metric("MSE", f"{result.mse:.4f}")
    st.markdown(f"Simulated {result.task.value} on {result.samples} samples")

    if result.feature_importance:
        frame = pd.DataFrame([f.model_dump() for f in result.feature_importance]).set_index("feature")
        st.bar_chart(frame)
