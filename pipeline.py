"""Upload pipeline: read the PDF, extract with the vision model, normalize, store in session state."""

import logging
from openai import AsyncOpenAI

from exceptions import ExtractionFailed, FileReadFailed
from ingestion import read_uploaded_pdf
from llm_client import resolve_api_key
from models import ProductionReport
from normalizer import normalize
from state import DashboardState
from vlm_client import extract_production_data

logger = logging.getLogger(__name__)


async def process_upload(
    state: DashboardState,
    pdf_bytes: bytes,
    filename: str,
    client: AsyncOpenAI = None,
    upload_id: str = None,
) -> ProductionReport:
    """
    Run one upload through extraction and normalization.

    The credential is checked and the file is read before any state change or
    network call. Once loading has started, a failure always clears the report.

    When given, upload_id is recorded on the state once the upload reaches a
    result (report, unreadable file or failed extraction). A missing
    credential or a busy state leaves it unrecorded so the same file can be
    retried.

    Raises:
        MissingCredential: no API key configured
        FileReadFailed: the upload is not a readable PDF
        UploadInProgress: another upload is still loading
        ExtractionFailed: the model returned no usable data
    """
    api_key = resolve_api_key(state.preferences.api_key)
    try:
        payload = read_uploaded_pdf(pdf_bytes, filename)
    except FileReadFailed:
        state.mark_upload_processed(upload_id)
        raise

    state.begin_upload()
    try:
        raw_data = await extract_production_data(payload, api_key=api_key, client=client)
        report = normalize(raw_data)
    except Exception as e:
        logger.exception("Processing %s failed", filename)
        state.fail_upload()
        if isinstance(e, ExtractionFailed):
            state.mark_upload_processed(upload_id)
        raise

    state.complete_upload(report)
    state.mark_upload_processed(upload_id)
    return report
