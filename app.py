"""Main Streamlit application for the production report dashboard."""

import asyncio
import os
import streamlit as st
import plotly.graph_objects as go

from config import setup_logging
from exceptions import DashboardError, ExtractionFailed, FileReadFailed, MissingCredential
from llm_analysis import generate_chart_description, suggest_data_insights
from pipeline import process_upload
from preferences import available_accent_colors, find_accent_color
from presenter import (
    entity_comparison_chart_data,
    loading_capacity_chart_data,
    production_mix_chart_data,
    whatsapp_share_url,
)
from state import DashboardState

setup_logging()

# Page configuration
st.set_page_config(
    page_title="Production Dashboard",
    page_icon="🏭",
    layout="wide"
)

# Initialize session state
if "dashboard" not in st.session_state:
    st.session_state.dashboard = DashboardState()
if "insights" not in st.session_state:
    st.session_state.insights = None
if "chart_descriptions" not in st.session_state:
    st.session_state.chart_descriptions = {}


def reset_analysis():
    """Drop AI output tied to the previous report."""
    st.session_state.insights = None
    st.session_state.chart_descriptions = {}


def api_key_available(api_key: str) -> bool:
    return bool(api_key or os.getenv("OPENAI_API_KEY"))


def accent_css_color(hsl_value: str) -> str:
    """Convert a stored "H S% L%" value to a CSS/Plotly colour string."""
    hue, saturation, lightness = hsl_value.split()
    return f"hsl({hue},{saturation},{lightness})"


def render_chart_card(key: str, title: str, chart_type: str, chart_data, figure: go.Figure, api_key: str):
    """Render one chart with an on-demand AI description."""
    st.markdown(f"**{title}**")
    st.caption(chart_type)
    st.plotly_chart(figure, use_container_width=True, key=f"chart_{key}")

    description = st.session_state.chart_descriptions.get(key)
    if description:
        st.info(description)
    elif st.button("🤖 Generate AI Insights", key=f"describe_{key}", disabled=not api_key_available(api_key)):
        with st.spinner("Generating..."):
            try:
                st.session_state.chart_descriptions[key] = generate_chart_description(
                    chart_type=chart_type,
                    title=title,
                    chart_data=chart_data,
                    api_key=api_key,
                )
                st.rerun()
            except DashboardError as e:
                st.error(f"Failed to generate AI description: {e}")


def main():
    dashboard: DashboardState = st.session_state.dashboard
    preferences = dashboard.preferences
    accent = accent_css_color(preferences.accent_color.value)

    st.markdown(f"<style>:root {{ --accent: {accent}; }}</style>", unsafe_allow_html=True)
    st.title("🏭 Production Dashboard")
    st.markdown("Upload the daily production report PDF to extract Lantabur and Taqwa figures.")

    # Sidebar for file upload and settings
    with st.sidebar:
        st.header("Upload Production PDF")

        uploaded_file = st.file_uploader(
            "Choose a PDF file",
            type=["pdf"],
            help="Only the first page of the PDF is processed. It must match the known fixed format.",
            disabled=dashboard.is_loading,
        )

        if uploaded_file is not None and dashboard.is_new_upload(uploaded_file.file_id):
            reset_analysis()

            with st.spinner("Processing..."):
                try:
                    asyncio.run(process_upload(
                        dashboard, uploaded_file.getvalue(), uploaded_file.name, upload_id=uploaded_file.file_id
                    ))
                    st.success("✓ PDF processed successfully.")
                except MissingCredential:
                    st.error("API key required. Please set your OpenAI API key in settings to process PDFs.")
                except FileReadFailed as e:
                    st.error(f"File read error: {e}")
                except ExtractionFailed as e:
                    st.error(f"PDF processing failed: {e}")
                except DashboardError as e:
                    st.warning(str(e))

        st.divider()

        # Settings
        st.header("Settings")

        new_api_key = st.text_input(
            "OpenAI API Key",
            value=preferences.api_key,
            type="password",
            help="Stored locally on this machine.",
        )
        if st.button("Save API Key", use_container_width=True):
            dashboard.update_api_key(new_api_key)
            st.success("✓ API key saved")

        if preferences.api_key:
            st.caption("✓ API key loaded")
        else:
            st.caption("✗ API key missing (OPENAI_API_KEY is used if set)")

        palette = available_accent_colors()
        names = [color.name for color in palette]
        selected = st.radio(
            "Accent Color",
            names,
            index=names.index(preferences.accent_color.name),
            horizontal=True,
        )
        if selected != preferences.accent_color.name:
            dashboard.update_accent_color(find_accent_color(selected))
            st.rerun()

    report = dashboard.report

    # Main content area
    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("📄 Extracted Data Summary")
        if report is None:
            st.info("👈 Upload a PDF to see the extracted data summary here.")
        else:
            st.code(dashboard.summary_text, language=None)

            share_col, clear_col = st.columns(2)
            with share_col:
                st.link_button("📤 Send via WhatsApp", whatsapp_share_url(dashboard.summary_text), use_container_width=True)
            with clear_col:
                if st.button("🗑️ Clear All", type="primary", use_container_width=True):
                    dashboard.clear()
                    reset_analysis()
                    st.rerun()

    with col2:
        st.subheader("💡 AI Data Insights")
        if report is None:
            st.info("Upload data to generate AI insights.")
        elif st.session_state.insights:
            for insight in st.session_state.insights:
                st.markdown(f"- {insight}")
        elif st.button("🤖 Generate AI Insights", key="insights", disabled=not api_key_available(preferences.api_key)):
            with st.spinner("Analyzing Data..."):
                try:
                    st.session_state.insights = suggest_data_insights(
                        dashboard.summary_text,
                        api_key=preferences.api_key,
                    )
                    st.rerun()
                except DashboardError as e:
                    st.error(f"Failed to generate AI insights: {e}")

    if report is None:
        return

    st.divider()

    for name, entity in report.entities():
        st.subheader(f"📊 {name}")
        chart_col1, chart_col2 = st.columns(2)

        with chart_col1:
            mix_data = production_mix_chart_data(entity)
            figure = go.Figure(go.Pie(
                labels=[row["name"] for row in mix_data],
                values=[row["value"] for row in mix_data],
                hole=0.4,
                marker={"colors": [accent, "#8884d8"]},
            ))
            render_chart_card(f"{name}_mix", f"{name} Production Mix", "Pie Chart", mix_data, figure, preferences.api_key)

        with chart_col2:
            capacity_data = loading_capacity_chart_data(entity)
            figure = go.Figure(go.Bar(
                x=[row["name"] for row in capacity_data],
                y=[row["value"] for row in capacity_data],
                text=[f"{row['percentage']:.2f}%" for row in capacity_data],
                marker_color=accent,
            ))
            figure.update_layout(yaxis_title="kg")
            render_chart_card(
                f"{name}_capacity", f"{name} Loading Capacity", "Bar Chart", capacity_data, figure, preferences.api_key
            )

    comparison_data = entity_comparison_chart_data(report)
    figure = go.Figure([
        go.Bar(
            name="Daily Total",
            x=[row["name"] for row in comparison_data],
            y=[row["dailyProductionTotal"] for row in comparison_data],
            marker_color=accent,
        ),
        go.Bar(
            name="Avg/day (this month)",
            x=[row["name"] for row in comparison_data],
            y=[row["averagePerDay"] for row in comparison_data],
        ),
    ])
    figure.update_layout(barmode="group", yaxis_title="kg")
    render_chart_card(
        "comparison", "Daily vs Monthly Average", "Grouped Bar Chart", comparison_data, figure, preferences.api_key
    )


if __name__ == "__main__":
    main()
