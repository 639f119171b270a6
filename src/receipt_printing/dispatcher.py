"""Print dispatcher and factory entrypoints."""

from __future__ import annotations

import asyncio
import logging
import platform
import time
from datetime import datetime
from typing import Callable, List, Optional

from .base_driver import PrintJobOptions, PrinterDriver
from .config import PrinterSettings, get_settings
from .document import ReceiptDocumentRenderer
from .errors import PrinterOfflineError, PrinterUnavailableError, PrintingError
from .layout import build_receipt_job
from .models import (
    MOCK_PRINTER_ID,
    SERIAL_ID_PREFIX,
    PrinterDescriptor,
    PrinterKind,
    PrintResult,
    ReceiptPayload,
)
from .platforms import LinuxPrinterDriver, MacPrinterDriver, WindowsPrinterDriver
from .registry import DeviceRegistry
from .thermal import open_serial_printer, render_escpos, write_to_printer

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def get_printer_driver() -> PrinterDriver:
    """Factory for the platform host print service."""
    system = platform.system().lower()
    if system == "windows":
        return WindowsPrinterDriver()
    if system == "darwin":
        return MacPrinterDriver()
    return LinuxPrinterDriver()


class PrintDispatcher:
    """Facade used by the UI for listing printers and printing receipts."""

    def __init__(
        self,
        registry: Optional[DeviceRegistry] = None,
        settings: Optional[PrinterSettings] = None,
        clock: Optional[Clock] = None,
        open_printer=open_serial_printer,
    ):
        self.settings = settings or get_settings()
        self.registry = registry or DeviceRegistry(self.settings)
        self.renderer = ReceiptDocumentRenderer(self.settings)
        self.clock: Clock = clock or datetime.now
        self.open_printer = open_printer

    def list_devices(self, host: Optional[PrinterDriver]) -> List[PrinterDescriptor]:
        return self.registry.list_devices(host)

    @staticmethod
    def resolve_kind(target_id: str) -> PrinterKind:
        """Backend kind encoded in an id produced by the registry."""
        if target_id == MOCK_PRINTER_ID:
            return PrinterKind.MOCK
        if target_id.startswith(SERIAL_ID_PREFIX):
            return PrinterKind.SERIAL_THERMAL
        return PrinterKind.SYSTEM

    def print_receipt(
        self,
        target_id: str,
        payload: ReceiptPayload,
        host: Optional[PrinterDriver] = None,
    ) -> PrintResult:
        """Print ``payload`` on ``target_id``; always answers with a PrintResult."""
        logger.info("Printing receipt on %s (%s item(s))", target_id, len(payload.items))
        try:
            kind = self.resolve_kind(target_id)
            if kind is PrinterKind.MOCK:
                result = self._print_mock(payload)
            elif kind is PrinterKind.SERIAL_THERMAL:
                result = self._print_thermal(target_id[len(SERIAL_ID_PREFIX):], payload)
            elif kind is PrinterKind.SYSTEM:
                result = self._print_system(target_id, payload, host)
            else:  # pragma: no cover - closed enum
                raise PrintingError(f"Unsupported printer kind: {kind}")
        except Exception as exc:
            logger.exception("Printing error")
            return PrintResult(success=False, message=f"Printing failed: {exc}", route="error")

        log = logger.info if result.success else logger.warning
        log("Print result for %s: %s", target_id, result.message)
        return result

    async def print_receipt_async(
        self,
        target_id: str,
        payload: ReceiptPayload,
        host: Optional[PrinterDriver] = None,
    ) -> PrintResult:
        """Awaitable form; resolves once the backend reports a terminal outcome."""
        return await asyncio.to_thread(self.print_receipt, target_id, payload, host)

    def _print_mock(self, payload: ReceiptPayload) -> PrintResult:
        job = build_receipt_job(payload, self.clock(), self.settings)
        data = render_escpos(job, self.settings, payload.image)
        preview = job.preview()

        if self.settings.mock_print_delay:
            time.sleep(self.settings.mock_print_delay)

        logger.info("Demo receipt print (%s bytes):\n%s", len(data), preview)
        if payload.image:
            logger.info("Image: custom image attached")
        return PrintResult(
            success=True,
            message="Demo receipt printed successfully! Check the log for output.",
            route="mock",
            preview=preview,
        )

    def _print_thermal(self, path: str, payload: ReceiptPayload) -> PrintResult:
        logger.info("Printing to thermal printer: %s", path)
        try:
            printer = self.open_printer(path, self.settings)
        except PrinterUnavailableError as exc:
            return PrintResult(success=False, message=str(exc), route="serial-escpos")

        try:
            job = build_receipt_job(payload, self.clock(), self.settings)
            data = render_escpos(job, self.settings, payload.image)
            write_to_printer(printer, data)
        except PrintingError as exc:
            return PrintResult(
                success=False,
                message=f"Printing failed: {exc}",
                route="serial-escpos",
            )
        finally:
            printer.close()

        return PrintResult(
            success=True,
            message="Receipt printed successfully to thermal printer!",
            route="serial-escpos",
        )

    def _print_system(
        self,
        printer_name: str,
        payload: ReceiptPayload,
        host: Optional[PrinterDriver],
    ) -> PrintResult:
        logger.info("Printing to system printer: %s", printer_name)
        if host is None:
            return PrintResult(
                success=False,
                message="System printing failed: host print context not available",
                route="system",
            )

        try:
            status = host.get_printer_status(printer_name)
            if status in {"offline", "stopped"}:
                raise PrinterOfflineError(f"Printer '{printer_name}' status is '{status}'.")

            pdf_bytes = self.renderer.render_pdf(payload, self.clock())
            options = PrintJobOptions(
                printer_name=printer_name,
                job_name=self.settings.job_name,
                silent=True,
                print_background=True,
                margins="none",
                paper_width_mm=self.settings.paper_width_mm,
                dpi=self.settings.dpi,
            )
            outcome = host.print_document(pdf_bytes, options)
        except Exception as exc:
            return PrintResult(
                success=False,
                message=f"System printing failed: {exc}",
                route="system",
            )

        if not outcome.success:
            return PrintResult(
                success=False,
                message=f"System printing failed: {outcome.message}",
                route=outcome.route,
                job_id=outcome.job_id,
            )
        return PrintResult(
            success=True,
            message="Receipt printed successfully to system printer!",
            route=outcome.route,
            job_id=outcome.job_id,
        )
