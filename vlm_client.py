"""Vision Language Model client for extracting production data from a report page using GPT-4o-mini."""

import json
import logging
from typing import Any, Dict
from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from config import EXTRACTION_MAX_TOKENS, EXTRACTION_TEMPERATURE, OPENAI_MODEL
from exceptions import ExtractionFailed
from llm_client import get_async_openai_client, parse_json_object
from models import DocumentPayload, RawExtraction

logger = logging.getLogger(__name__)


def _entity_schema(description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "description": description,
        "properties": {
            "dailyProductionTotal": {"type": "number", "description": "Total production in kg for the day."},
            "loadingCapacity": {
                "type": "array",
                "description": "Loading capacity (colour group) items in the order they appear.",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "description": "Item name, e.g. \"Black\", \"Double Part\"."},
                        "value": {"type": "number", "description": "Production value in kg."},
                    },
                    "required": ["name", "value"],
                },
            },
            "inHouse": {
                "type": "object",
                "properties": {"value": {"type": "number", "description": "In-house production in kg."}},
                "required": ["value"],
            },
            "subContract": {
                "type": "object",
                "properties": {"value": {"type": "number", "description": "Sub-contracted production in kg."}},
                "required": ["value"],
            },
            "labRft": {"type": "string", "description": "LAB RFT text, e.g. \"0% (0 out of 1)\". Optional."},
            "totalThisMonth": {"type": "number", "description": "Month-to-date production in kg. Optional."},
        },
        "required": ["dailyProductionTotal", "loadingCapacity", "inHouse", "subContract"],
    }


def build_extraction_schema() -> Dict[str, Any]:
    """Return the JSON schema the model output should follow."""
    return {
        "type": "object",
        "properties": {
            "date": {"type": "string", "description": "Date of the report, e.g. \"02 Jun 2025\"."},
            "lantabur": _entity_schema("Extracted data for the Lantabur industry."),
            "taqwa": _entity_schema("Extracted data for the Taqwa industry."),
            "overallGrandTotal": {
                "type": "number",
                "description": "Grand total production across both industries in kg. Optional.",
            },
        },
        "required": ["date", "lantabur", "taqwa"],
    }


def build_extraction_prompt() -> str:
    """Build the instruction text sent alongside the page image."""
    schema = json.dumps(build_extraction_schema(), indent=2)
    return f"""You are an expert data extraction tool specializing in parsing production reports.
The attached image is the first page of a daily production report with data for the 'Lantabur' and 'Taqwa' industries.

Extract:
1. date: the date of the report (e.g. "02 Jun 2025").
2. For each of lantabur and taqwa:
   - dailyProductionTotal: total production in kg
   - loadingCapacity: every loading capacity item with its name and value in kg, in the order shown
   - inHouse.value and subContract.value in kg
   - labRft: the LAB RFT text if present, otherwise omit it
   - totalThisMonth: month-to-date production in kg if present, otherwise omit it
3. overallGrandTotal: the grand total across both industries if present, otherwise omit it.

Rules:
- Numbers must be JSON numbers, not strings.
- Keep item names exactly as printed; do not merge similar items.
- Return ONLY a JSON object that follows this schema:

{schema}"""


async def extract_production_data(
    payload: DocumentPayload,
    api_key: str = None,
    client: AsyncOpenAI = None,
) -> Dict[str, Any]:
    """
    Extract raw production data from a single report page.

    Makes exactly one request to the model; nothing is retried and no timeout
    is imposed here.

    Args:
        payload: Single-page document (image bytes + MIME type)
        api_key: OpenAI API key (optional, will use env var if not provided)
        client: Pre-built async client (optional)

    Returns:
        Raw extraction dict. Individual fields may be missing or mistyped.

    Raises:
        MissingCredential: if no API key is available
        ExtractionFailed: if the model returns no usable structured output
    """
    if client is None:
        client = get_async_openai_client(api_key)

    logger.info("Requesting extraction for %s (%s, %d bytes)", payload.filename, payload.mime_type, len(payload.data))

    try:
        response = await client.chat.completions.create(
            model=OPENAI_MODEL,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": build_extraction_prompt()},
                        {"type": "image_url", "image_url": {"url": payload.to_data_url()}},
                    ],
                }
            ],
            response_format={"type": "json_object"},
            temperature=EXTRACTION_TEMPERATURE,
            max_tokens=EXTRACTION_MAX_TOKENS,
        )
    except OpenAIError as e:
        logger.error("Extraction request failed: %s", e)
        raise ExtractionFailed(f"Could not extract data from the PDF: {e}") from e

    content = response.choices[0].message.content if response.choices else None
    logger.debug("Raw extraction response: %s", (content or "")[:500])

    try:
        data = parse_json_object(content)
        RawExtraction.model_validate(data)
    except (ValueError, ValidationError) as e:
        logger.warning("Unusable extraction response: %s", e)
        raise ExtractionFailed(
            "AI model failed to return data in the expected format. The PDF might not match the fixed format."
        ) from e

    return data
