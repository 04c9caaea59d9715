"""Unit tests for the dashboard session state transitions."""

import pytest

from exceptions import UploadInProgress
from normalizer import normalize
from preferences import find_accent_color
from presenter import format_report
from state import DashboardState


class TestDashboardState:
    """Tests for DashboardState."""

    @pytest.fixture
    def state(self, preference_store):
        return DashboardState(store=preference_store)

    @pytest.fixture
    def report(self, raw_extraction):
        return normalize(raw_extraction)

    def test_starts_idle_and_empty(self, state):
        assert state.report is None
        assert state.is_loading is False
        assert state.summary_text == "No data available."

    def test_successful_upload(self, state, report):
        state.begin_upload()
        assert state.is_loading is True

        state.complete_upload(report)

        assert state.is_loading is False
        assert state.report == report
        assert state.summary_text == format_report(report)

    def test_new_report_replaces_old(self, state, report):
        state.begin_upload()
        state.complete_upload(report)
        newer = normalize({"date": "03 Jun 2025", "lantabur": {}, "taqwa": {}})

        state.begin_upload()
        assert state.report == report
        state.complete_upload(newer)

        assert state.report.date == "03 Jun 2025"

    def test_failed_upload_clears_report(self, state, report):
        state.begin_upload()
        state.complete_upload(report)

        state.begin_upload()
        state.fail_upload()

        assert state.report is None
        assert state.is_loading is False
        assert state.summary_text == "No data available."

    def test_clear(self, state, report):
        state.begin_upload()
        state.complete_upload(report)

        state.clear()

        assert state.report is None
        assert state.summary_text == "No data available."

    def test_second_upload_rejected_while_loading(self, state):
        state.begin_upload()

        with pytest.raises(UploadInProgress):
            state.begin_upload()
        assert state.is_loading is True

    def test_upload_is_new_until_marked(self, state):
        assert state.is_new_upload("file-1") is True

        state.mark_upload_processed("file-1")

        assert state.is_new_upload("file-1") is False
        assert state.is_new_upload("file-2") is True

    def test_preferences_loaded_at_startup(self, preference_store):
        preference_store.save_api_key("sk-stored")

        state = DashboardState(store=preference_store)

        assert state.preferences.api_key == "sk-stored"

    def test_preference_updates_are_persisted(self, state, preference_store):
        state.update_api_key("sk-new")
        state.update_accent_color(find_accent_color("Coral"))

        assert state.preferences.api_key == "sk-new"
        assert state.preferences.accent_color.name == "Coral"
        reloaded = preference_store.load()
        assert reloaded.api_key == "sk-new"
        assert reloaded.accent_color.name == "Coral"

    def test_preferences_independent_of_report(self, state, report):
        state.update_api_key("sk-new")
        state.begin_upload()
        state.complete_upload(report)

        state.clear()

        assert state.preferences.api_key == "sk-new"
