"""OpenAI GPT client for chart descriptions and production data insights."""

import json
import logging
from typing import Any, List
from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from config import ANALYSIS_MAX_TOKENS, ANALYSIS_TEMPERATURE, OPENAI_MODEL
from exceptions import GenerationFailed
from llm_client import get_openai_client, parse_json_object
from models import ChartDescription, DataInsights

logger = logging.getLogger(__name__)


def _complete_json(client: OpenAI, system_prompt: str, user_prompt: str) -> dict:
    try:
        response = client.chat.completions.create(
            model=OPENAI_MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
            temperature=ANALYSIS_TEMPERATURE,
            max_tokens=ANALYSIS_MAX_TOKENS,
        )
        content = response.choices[0].message.content if response.choices else None
        return parse_json_object(content)
    except (OpenAIError, ValueError) as e:
        logger.error("Analysis request failed: %s", e)
        raise GenerationFailed(str(e)) from e


def generate_chart_description(
    chart_type: str,
    title: str,
    chart_data: Any,
    api_key: str = None,
    client: OpenAI = None,
) -> str:
    """
    Generate a short textual description of a chart and its key insights.

    Args:
        chart_type: Kind of chart, e.g. "Bar Chart", "Pie Chart"
        title: Chart title
        chart_data: JSON-serializable data plotted by the chart
        api_key: OpenAI API key (optional, will use env var if not provided)
        client: Pre-built client (optional)

    Returns:
        Description text
    """
    if client is None:
        client = get_openai_client(api_key)

    prompt = f"""Generate a concise textual description of the following chart, highlighting the key insights.

Chart Title: {title}
Chart Type: {chart_type}
Chart Data: {json.dumps(chart_data)}

Format your response as JSON with this exact structure:
{{
  "description": "Your description here"
}}"""

    data = _complete_json(client, "You are an expert data analyst.", prompt)

    try:
        return ChartDescription.model_validate(data).description
    except ValidationError as e:
        raise GenerationFailed(f"Unexpected chart description format: {e}") from e


def suggest_data_insights(report_text: str, api_key: str = None, client: OpenAI = None) -> List[str]:
    """
    Suggest potential explanations for the trends in a formatted production report.

    Args:
        report_text: The formatted summary text of the report
        api_key: OpenAI API key (optional, will use env var if not provided)
        client: Pre-built client (optional)

    Returns:
        Ordered list of insight strings
    """
    if client is None:
        client = get_openai_client(api_key)

    prompt = f"""Given the following production data, suggest a few potential explanations for the trends and patterns observed.

Production Data:
{report_text}

Format your response as JSON with this exact structure:
{{
  "insights": [
    "Insight 1",
    "Insight 2",
    "Insight 3"
  ]
}}"""

    data = _complete_json(client, "You are an expert production data analyst.", prompt)

    try:
        return DataInsights.model_validate(data).insights
    except ValidationError as e:
        raise GenerationFailed(f"Unexpected insights format: {e}") from e
