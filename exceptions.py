"""Errors surfaced to the dashboard user."""


class DashboardError(Exception):
    """Base class for all user-facing dashboard errors."""


class ExtractionFailed(DashboardError):
    """The model returned no usable structured output for the uploaded page."""


class FileReadFailed(DashboardError):
    """The uploaded document could not be read into memory."""


class MissingCredential(DashboardError, ValueError):
    """An action needing the OpenAI API key was invoked without one."""


class GenerationFailed(DashboardError):
    """A chart description or insight request did not produce a usable answer."""


class UploadInProgress(DashboardError):
    """A second upload was started while the first one is still loading."""
