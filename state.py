"""Session state container: the current report, its summary text, loading flag and preferences."""

import logging
from typing import Optional

from exceptions import UploadInProgress
from models import AccentColor, ProductionReport, UserPreferences
from preferences import PreferenceStore
from presenter import format_report

logger = logging.getLogger(__name__)


class DashboardState:
    """
    Holds at most one ProductionReport for a dashboard session.

    The report only changes through the upload transitions
    (begin_upload -> complete_upload / fail_upload) and clear(), so the
    summary text is always derived from the report currently held.
    """

    def __init__(self, store: PreferenceStore = None):
        self.store = store if store is not None else PreferenceStore()
        self._preferences = self.store.load()
        self._report: Optional[ProductionReport] = None
        self._summary_text = format_report(None)
        self._is_loading = False
        self._processed_upload: Optional[str] = None

    @property
    def report(self) -> Optional[ProductionReport]:
        return self._report

    @property
    def summary_text(self) -> str:
        return self._summary_text

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def preferences(self) -> UserPreferences:
        return self._preferences

    def _set_report(self, report: Optional[ProductionReport]) -> None:
        self._report = report
        self._summary_text = format_report(report)

    def begin_upload(self) -> None:
        """idle -> loading. A second upload while loading is rejected."""
        if self._is_loading:
            raise UploadInProgress("A report is already being processed. Wait for it to finish.")
        self._is_loading = True

    def complete_upload(self, report: ProductionReport) -> None:
        """loading -> idle with the new report replacing any previous one."""
        self._set_report(report)
        self._is_loading = False
        logger.info("Report for %s loaded", report.date or "unknown date")

    def fail_upload(self) -> None:
        """loading -> idle with no report."""
        self._set_report(None)
        self._is_loading = False

    def is_new_upload(self, upload_id: str) -> bool:
        """True until an upload has been processed to a result (report or extraction failure)."""
        return upload_id != self._processed_upload

    def mark_upload_processed(self, upload_id: Optional[str]) -> None:
        self._processed_upload = upload_id

    def clear(self) -> None:
        """Discard the current report."""
        self._set_report(None)

    def update_api_key(self, api_key: str) -> None:
        self.store.save_api_key(api_key)
        self._preferences = self._preferences.model_copy(update={"api_key": api_key})

    def update_accent_color(self, accent: AccentColor) -> None:
        self.store.save_accent_color(accent)
        self._preferences = self._preferences.model_copy(update={"accent_color": accent})
