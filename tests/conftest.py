"""Shared fixtures: synthetic model responses, sample PDFs and fake OpenAI clients."""

import json
from unittest.mock import AsyncMock, Mock

import fitz  # PyMuPDF
import pytest

from preferences import PreferenceStore


@pytest.fixture(autouse=True)
def no_env_api_key(monkeypatch):
    """Keep a developer's OPENAI_API_KEY out of the tests."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def raw_extraction():
    """A realistic extraction for the 02 Jun 2025 report."""
    return {
        "date": "02 Jun 2025",
        "lantabur": {
            "dailyProductionTotal": 13266.2,
            "loadingCapacity": [
                {"name": "Black", "value": 2853},
                {"name": "100% Polyster", "value": 717},
                {"name": "Double Part", "value": 5442},
                {"name": "Double Part -Black", "value": 581.2},
                {"name": "Average", "value": 3673},
            ],
            "inHouse": {"value": 12934.2},
            "subContract": {"value": 332},
            "labRft": "0% (0 out of 1)",
            "totalThisMonth": 13266.2,
        },
        "taqwa": {
            "dailyProductionTotal": 24058,
            "loadingCapacity": [
                {"name": "Double Part", "value": 4766.5},
                {"name": "Average", "value": 13182},
                {"name": "Black", "value": 1101.5},
                {"name": "White", "value": 2156},
                {"name": "N/wash", "value": 28},
            ],
            "inHouse": {"value": 22954},
            "subContract": {"value": 1104},
        },
        "overallGrandTotal": 37324.2,
    }


@pytest.fixture
def preference_store(tmp_path):
    return PreferenceStore(tmp_path / "preferences.json")


@pytest.fixture
def sample_pdf_bytes():
    """A two-page PDF; only the first page should be used."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Lantabur Data: Total = 13,266.2 kg")
    second = doc.new_page()
    second.insert_text((72, 72), "Appendix")
    data = doc.tobytes()
    doc.close()
    return data


def make_completion(content):
    """Build an object shaped like a chat completion response."""
    message = Mock()
    message.content = content
    choice = Mock()
    choice.message = message
    response = Mock()
    response.choices = [choice]
    return response


@pytest.fixture
def async_client_factory():
    """Return a factory for fake AsyncOpenAI clients answering with the given content."""
    def factory(content=None, error=None):
        client = Mock()
        if error is not None:
            client.chat.completions.create = AsyncMock(side_effect=error)
        else:
            if not isinstance(content, str):
                content = json.dumps(content)
            client.chat.completions.create = AsyncMock(return_value=make_completion(content))
        return client
    return factory


@pytest.fixture
def client_factory():
    """Return a factory for fake synchronous OpenAI clients."""
    def factory(content=None, error=None):
        client = Mock()
        if error is not None:
            client.chat.completions.create = Mock(side_effect=error)
        else:
            if not isinstance(content, str):
                content = json.dumps(content)
            client.chat.completions.create = Mock(return_value=make_completion(content))
        return client
    return factory
