"""Receipt printing: printer discovery and receipt dispatch entrypoints."""

from .base_driver import PrintJobOptions, PrintJobResult, PrinterDevice, PrinterDriver
from .config import PrinterSettings, get_settings
from .dispatcher import PrintDispatcher, get_printer_driver
from .errors import (
    PrintJobSubmissionError,
    PrinterOfflineError,
    PrinterUnavailableError,
    PrintingError,
    RenderingError,
    SourceUnavailableError,
)
from .models import (
    PrinterDescriptor,
    PrinterKind,
    PrintResult,
    ReceiptItem,
    ReceiptPayload,
    SourceResult,
)
from .registry import DeviceRegistry

__all__ = [
    "DeviceRegistry",
    "PrintDispatcher",
    "PrintJobOptions",
    "PrintJobResult",
    "PrinterDevice",
    "PrinterDriver",
    "PrinterDescriptor",
    "PrinterKind",
    "PrintResult",
    "PrinterSettings",
    "ReceiptItem",
    "ReceiptPayload",
    "SourceResult",
    "get_printer_driver",
    "get_settings",
    "PrintingError",
    "SourceUnavailableError",
    "PrinterUnavailableError",
    "PrinterOfflineError",
    "PrintJobSubmissionError",
    "RenderingError",
]
