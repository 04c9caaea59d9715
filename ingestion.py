"""PDF ingestion: select the first page and render it for the vision model."""

import logging
import fitz  # PyMuPDF

from config import MAX_FILE_SIZE_MB, PAGE_ZOOM_FACTOR
from exceptions import FileReadFailed
from models import DocumentPayload

logger = logging.getLogger(__name__)


def read_uploaded_pdf(pdf_bytes: bytes, filename: str, zoom: float = PAGE_ZOOM_FACTOR) -> DocumentPayload:
    """
    Read an uploaded PDF and render its first page to PNG.

    Only the first page of a report is used; later pages are ignored.

    Args:
        pdf_bytes: Raw PDF file bytes
        filename: Original file name, kept for logging and display
        zoom: Render zoom factor (higher = sharper image, larger payload)

    Returns:
        Single-page DocumentPayload with PNG bytes

    Raises:
        FileReadFailed: if the bytes are empty, too large, or not a readable PDF
    """
    if not pdf_bytes:
        raise FileReadFailed(f"Could not read '{filename}': the file is empty.")

    size_mb = len(pdf_bytes) / (1024 * 1024)
    if size_mb > MAX_FILE_SIZE_MB:
        raise FileReadFailed(
            f"Could not read '{filename}': {size_mb:.1f} MB exceeds the {MAX_FILE_SIZE_MB} MB limit."
        )

    try:
        pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
    except (fitz.FileDataError, RuntimeError, ValueError) as e:
        raise FileReadFailed(f"Could not read '{filename}' as a PDF: {e}") from e

    try:
        if len(pdf_document) == 0:
            raise FileReadFailed(f"Could not read '{filename}': the PDF has no pages.")

        page = pdf_document[0]
        matrix = fitz.Matrix(zoom, zoom)
        pix = page.get_pixmap(matrix=matrix)
        image_bytes = pix.tobytes("png")
        logger.info(
            "Rendered page 1 of %d from %s (%dx%d px, %d bytes)",
            len(pdf_document), filename, pix.width, pix.height, len(image_bytes),
        )
    finally:
        pdf_document.close()

    return DocumentPayload(filename=filename, mime_type="image/png", data=image_bytes)
