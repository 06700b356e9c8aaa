import pandas as pd
import plotly.express as px
import streamlit as st

from components.domains import DomainConfig
from models.prediction import PredictionResult
from utils.formatting import format_inr, format_percent


def price_range_figure(config: DomainConfig, result: PredictionResult):
    rows = [
        ("Minimum", result.min_value),
        (config.value_label, result.predicted_value),
        ("Maximum", result.max_value),
    ]
    df = pd.DataFrame(
        [{"estimate": name, "value": value} for name, value in rows if value is not None])
    if df.empty:
        return None

    fig = px.bar(df, x="estimate", y="value", text=df["value"].map(format_inr),
                 color="estimate", height=320)
    fig.update_layout(xaxis_title="", yaxis_title="INR", showlegend=False)
    return fig


def render_result(config: DomainConfig, result: PredictionResult):
    with st.container(border=True):
        st.subheader("Valuation Result")
        st.success(
            f"{config.value_label}: **{format_inr(result.predicted_value)}{config.unit_label}**")

        col1, col2 = st.columns(2)
        col1.metric("Lowest Estimate", format_inr(result.min_value))
        col2.metric("Highest Estimate", format_inr(result.max_value))

        if result.price_per_unit is not None:
            st.metric("Price per sqft", format_inr(result.price_per_unit))

        if result.confidence is not None:
            st.write(f"Confidence: {format_percent(result.confidence)}")
            st.progress(min(max(result.confidence, 0.0), 1.0))

        fig = price_range_figure(config, result)
        if fig is not None:
            st.plotly_chart(fig, use_container_width=True)

        st.subheader("Insights")
        st.write(result.insights)
