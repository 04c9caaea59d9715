"""Unit tests for the extraction request to the vision model."""

import asyncio
import json

import pytest
from openai import OpenAIError

from exceptions import ExtractionFailed, MissingCredential
from models import DocumentPayload
from vlm_client import build_extraction_prompt, build_extraction_schema, extract_production_data


@pytest.fixture
def payload():
    return DocumentPayload(filename="report.pdf", mime_type="image/png", data=b"\x89PNG fake")


class TestExtractionSchema:
    def test_canonical_fields(self):
        schema = build_extraction_schema()

        assert schema["required"] == ["date", "lantabur", "taqwa"]
        assert "overallGrandTotal" in schema["properties"]
        entity = schema["properties"]["lantabur"]
        assert "dailyProductionTotal" in entity["required"]
        assert "total" not in entity["properties"]
        assert "labRft" not in entity["required"]
        assert "totalThisMonth" not in entity["required"]

    def test_prompt_embeds_schema(self):
        prompt = build_extraction_prompt()

        assert "Lantabur" in prompt and "Taqwa" in prompt
        assert '"dailyProductionTotal"' in prompt


class TestExtractProductionData:
    """Tests for extract_production_data()."""

    def test_returns_raw_data(self, payload, raw_extraction, async_client_factory):
        client = async_client_factory(raw_extraction)

        result = asyncio.run(extract_production_data(payload, client=client))

        assert result == raw_extraction
        client.chat.completions.create.assert_awaited_once()

    def test_sends_image_and_schema(self, payload, raw_extraction, async_client_factory):
        client = async_client_factory(raw_extraction)

        asyncio.run(extract_production_data(payload, client=client))

        kwargs = client.chat.completions.create.call_args.kwargs
        content = kwargs["messages"][0]["content"]
        assert content[0]["type"] == "text"
        assert "dailyProductionTotal" in content[0]["text"]
        assert content[1]["image_url"]["url"] == payload.to_data_url()
        assert content[1]["image_url"]["url"].startswith("data:image/png;base64,")
        assert kwargs["response_format"] == {"type": "json_object"}

    def test_fenced_json_is_accepted(self, payload, raw_extraction, async_client_factory):
        client = async_client_factory("```json\n" + json.dumps(raw_extraction) + "\n```")

        result = asyncio.run(extract_production_data(payload, client=client))

        assert result["date"] == "02 Jun 2025"

    def test_missing_optional_fields_do_not_fail(self, payload, async_client_factory):
        client = async_client_factory({"lantabur": {"dailyProductionTotal": "13,266.2"}, "taqwa": {}})

        result = asyncio.run(extract_production_data(payload, client=client))

        assert result["lantabur"]["dailyProductionTotal"] == "13,266.2"

    def test_empty_object_fails(self, payload, async_client_factory):
        client = async_client_factory({})

        with pytest.raises(ExtractionFailed):
            asyncio.run(extract_production_data(payload, client=client))

    @pytest.mark.parametrize("content", ["", "not json", "[1, 2, 3]", '{"lantabur": "text"}', None])
    def test_unusable_output_fails(self, payload, async_client_factory, content):
        client = async_client_factory(content if content is not None else "")
        if content is None:
            client.chat.completions.create.return_value.choices[0].message.content = None

        with pytest.raises(ExtractionFailed):
            asyncio.run(extract_production_data(payload, client=client))

    def test_api_error_becomes_extraction_failed(self, payload, async_client_factory):
        client = async_client_factory(error=OpenAIError("service unavailable"))

        with pytest.raises(ExtractionFailed):
            asyncio.run(extract_production_data(payload, client=client))

    def test_missing_credential(self, payload):
        with pytest.raises(MissingCredential):
            asyncio.run(extract_production_data(payload))
