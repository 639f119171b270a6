"""Receipt printing exceptions."""


class PrintingError(RuntimeError):
    """Base error for receipt printing."""


class SourceUnavailableError(PrintingError):
    """Raised when a device enumeration source cannot be queried."""


class PrinterUnavailableError(PrintingError):
    """Raised when the selected printer cannot be reached."""


class PrinterOfflineError(PrinterUnavailableError):
    """Raised when the host reports the selected printer offline/stopped."""


class PrintJobSubmissionError(PrintingError):
    """Raised when executing or submitting a print job fails."""


class RenderingError(PrintingError):
    """Raised when the receipt document or logo cannot be rendered."""
