# report_errors.py
# Exception hierarchy for the medico-legal report pipeline.


class ReportError(Exception):
    """Base exception for all report generation errors."""


class MissingCaseDataError(ReportError):
    """Raised before any page is opened when there is no case to lay out."""


class InvalidOptionsError(ReportError):
    """Raised when render options cannot be built from the supplied values."""


class AssetLoadError(ReportError):
    """A static asset (the signature image) could not be read or decoded."""

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(message)
        self.source = source
