"""Shared OpenAI client helpers and response parsing."""

import os
import json
from typing import Any, Dict, Optional
from openai import AsyncOpenAI, OpenAI

from exceptions import MissingCredential


def resolve_api_key(api_key: Optional[str] = None) -> str:
    """Return the given key, falling back to OPENAI_API_KEY. Raises MissingCredential if neither is set."""
    if not api_key:
        api_key = os.getenv("OPENAI_API_KEY")

    if not api_key:
        raise MissingCredential("OpenAI API key not found. Set it in Settings or the OPENAI_API_KEY environment variable.")

    return api_key


def get_openai_client(api_key: str = None) -> OpenAI:
    """Get OpenAI client instance."""
    return OpenAI(api_key=resolve_api_key(api_key))


def get_async_openai_client(api_key: str = None) -> AsyncOpenAI:
    """Get async OpenAI client instance."""
    return AsyncOpenAI(api_key=resolve_api_key(api_key))


def strip_code_fences(content: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    content = (content or "").strip()
    if content.startswith("```json"):
        content = content[7:]
    if content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


def parse_json_object(content: str) -> Dict[str, Any]:
    """
    Parse a model response into a JSON object.

    Raises:
        ValueError: if the content is not JSON or the top level is not an object
    """
    cleaned = strip_code_fences(content)
    if not cleaned:
        raise ValueError("model returned an empty response")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"model did not return valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    return data
