"""Linux CUPS/lp print driver implementation."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from PySide6.QtPrintSupport import QPrinterInfo

from ..base_driver import PrintJobOptions, PrintJobResult, PrinterDevice, PrinterDriver
from ..errors import PrintJobSubmissionError, PrinterUnavailableError
from ..qt_bridge import raster_print_document

try:
    import cups  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    cups = None

logger = logging.getLogger(__name__)

# IPP printer-state values
_CUPS_STATES = {3: "idle", 4: "printing", 5: "stopped"}


class LinuxPrinterDriver(PrinterDriver):
    """Linux driver with CUPS direct path, lp and Qt fallbacks."""

    @property
    def name(self) -> str:
        return "linux_cups"

    @property
    def supports_direct_pdf(self) -> bool:
        return cups is not None or shutil.which("lp") is not None

    def _cups_connection(self):
        if cups is None:
            return None
        try:
            return cups.Connection()
        except Exception:
            return None

    def list_printers(self) -> List[PrinterDevice]:
        default_name = self.get_default_printer()
        devices: List[PrinterDevice] = []

        conn = self._cups_connection()
        if conn is not None:
            for name, info in conn.getPrinters().items():
                state = int(info.get("printer-state", 0))
                devices.append(
                    PrinterDevice(
                        name=name,
                        display_name=str(info.get("printer-info") or name),
                        description=str(
                            info.get("printer-make-and-model")
                            or info.get("printer-location")
                            or ""
                        ),
                        is_default=(name == default_name),
                        status=_CUPS_STATES.get(state, "unknown"),
                        raw=info,
                    )
                )
            return devices

        if shutil.which("lpstat"):
            try:
                proc = subprocess.run(
                    ["lpstat", "-a"],
                    capture_output=True,
                    text=True,
                    check=True,
                )
                # sample: "HP_LaserJet accepting requests since ..."
                for line in proc.stdout.splitlines():
                    parts = line.strip().split()
                    if not parts:
                        continue
                    name = parts[0]
                    devices.append(
                        PrinterDevice(
                            name=name,
                            display_name=name,
                            is_default=(name == default_name),
                            status="accepting" if "accepting" in line else "unknown",
                        )
                    )
                return devices
            except (OSError, subprocess.SubprocessError) as exc:
                logger.debug("lpstat enumeration failed: %s", exc)

        # Last fallback: Qt printer info.
        for info in QPrinterInfo.availablePrinters():
            name = info.printerName()
            devices.append(
                PrinterDevice(
                    name=name,
                    display_name=info.description() or name,
                    description=info.makeAndModel(),
                    is_default=(name == default_name),
                    status="unknown",
                )
            )
        return devices

    def get_default_printer(self) -> Optional[str]:
        conn = self._cups_connection()
        if conn is not None:
            try:
                return conn.getDefault() or None
            except Exception:
                return None

        if shutil.which("lpstat"):
            try:
                proc = subprocess.run(
                    ["lpstat", "-d"],
                    capture_output=True,
                    text=True,
                    check=True,
                )
                # sample: "system default destination: HP_LaserJet"
                text = proc.stdout.strip()
                if ":" in text:
                    return text.split(":", 1)[1].strip() or None
            except (OSError, subprocess.SubprocessError):
                pass

        default = QPrinterInfo.defaultPrinter()
        if default.isNull():
            return None
        return default.printerName()

    def get_printer_status(self, printer_name: str) -> str:
        conn = self._cups_connection()
        if conn is not None:
            try:
                info = conn.getPrinters().get(printer_name, {})
                return _CUPS_STATES.get(int(info.get("printer-state", 0)), "unknown")
            except Exception:
                pass
        return "unknown"

    @staticmethod
    def _to_cups_options(options: PrintJobOptions) -> Dict[str, str]:
        cups_options: Dict[str, str] = {"copies": str(options.copies)}
        if options.margins == "none":
            cups_options["print-scaling"] = "none"
            for side in ("page-left", "page-right", "page-top", "page-bottom"):
                cups_options[side] = "0"
        for key, value in options.extra_options.items():
            cups_options[str(key)] = str(value)
        return cups_options

    def _submit_via_cups(self, pdf_path: str, options: PrintJobOptions) -> PrintJobResult:
        conn = self._cups_connection()
        if conn is None:
            raise PrintJobSubmissionError("CUPS connection unavailable.")
        printer_name = options.printer_name or conn.getDefault()
        if not printer_name:
            raise PrinterUnavailableError("No printer selected and no default printer.")

        job_id = conn.printFile(
            printer_name,
            pdf_path,
            options.job_name,
            self._to_cups_options(options),
        )
        return PrintJobResult(
            success=True,
            route="cups-direct-pdf",
            message=f"Submitted print job to CUPS printer '{printer_name}'.",
            job_id=str(job_id),
        )

    def _submit_via_lp(self, pdf_path: str, options: PrintJobOptions) -> PrintJobResult:
        if shutil.which("lp") is None:
            raise PrintJobSubmissionError("lp command unavailable.")

        cmd = ["lp", "-n", str(options.copies), "-t", options.job_name]
        printer_name = options.printer_name or self.get_default_printer()
        if printer_name:
            cmd.extend(["-d", printer_name])
        for key, value in self._to_cups_options(options).items():
            if key != "copies":
                cmd.extend(["-o", f"{key}={value}"])
        cmd.append(pdf_path)

        proc = subprocess.run(cmd, capture_output=True, text=True, check=True)
        out = (proc.stdout or "").strip()
        return PrintJobResult(
            success=True,
            route="lp-direct-pdf",
            message=out or "Submitted print job via lp.",
        )

    def _submit_direct(self, pdf_bytes: bytes, options: PrintJobOptions) -> PrintJobResult:
        with tempfile.NamedTemporaryFile(delete=False, suffix=".pdf") as tmp:
            tmp.write(pdf_bytes)
            temp_path = tmp.name
        try:
            if self._cups_connection() is not None:
                return self._submit_via_cups(temp_path, options)
            return self._submit_via_lp(temp_path, options)
        finally:
            Path(temp_path).unlink(missing_ok=True)

    def print_document(self, pdf_bytes: bytes, options: PrintJobOptions) -> PrintJobResult:
        normalized = options.normalized()
        if self.supports_direct_pdf:
            try:
                return self._submit_direct(pdf_bytes, normalized)
            except PrinterUnavailableError:
                raise
            except Exception as exc:
                logger.warning("Direct PDF submission failed, using Qt spooler: %s", exc)

        # Fallback route: raster stream into Qt print backend.
        return raster_print_document(pdf_bytes, normalized)
