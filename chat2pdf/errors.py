"""Export error kinds. api.export_chat_to_pdf turns every one of them into a failed ExportResult."""


class ExportError(Exception):
    """Base class for failures that end an export without producing a PDF."""


class SourceError(ExportError):
    """The source page is missing, not HTML, or not a ChatGPT conversation."""


class MissingDependencyError(ExportError):
    """The drawing library behind a surface could not be loaded."""


class NoMessagesError(ExportError):
    """Extraction found no messages that pass the role filter."""
