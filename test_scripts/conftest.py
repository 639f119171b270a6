from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytest

# Ensure the package is importable when tests run from a source checkout.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from receipt_printing.base_driver import (  # noqa: E402
    PrintJobOptions,
    PrintJobResult,
    PrinterDevice,
    PrinterDriver,
)
from receipt_printing.config import PrinterSettings  # noqa: E402

FIXED_NOW = datetime(2025, 9, 25, 9, 5, 9)


class FakeHost(PrinterDriver):
    """In-memory host print service."""

    def __init__(
        self,
        printers: Optional[List[PrinterDevice]] = None,
        status: str = "idle",
        outcome: Optional[PrintJobResult] = None,
        fail_with: Optional[Exception] = None,
    ):
        self.printers = printers or []
        self.status = status
        self.outcome = outcome or PrintJobResult(success=True, route="fake-spooler", message="ok", job_id="7")
        self.fail_with = fail_with
        self.submitted: List[tuple] = []

    @property
    def name(self) -> str:
        return "fake"

    def list_printers(self) -> List[PrinterDevice]:
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.printers)

    def get_default_printer(self) -> Optional[str]:
        for printer in self.printers:
            if printer.is_default:
                return printer.name
        return None

    def get_printer_status(self, printer_name: str) -> str:
        return self.status

    def print_document(self, pdf_bytes: bytes, options: PrintJobOptions) -> PrintJobResult:
        if self.fail_with is not None:
            raise self.fail_with
        self.submitted.append((pdf_bytes, options))
        return self.outcome


class FakeSerialPrinter:
    """Stands in for an opened escpos Serial printer."""

    def __init__(self, fail_on_write: Optional[Exception] = None):
        self.writes: List[bytes] = []
        self.closed = False
        self.fail_on_write = fail_on_write

    def _raw(self, data: bytes) -> None:
        if self.fail_on_write is not None:
            raise self.fail_on_write
        self.writes.append(data)

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def settings() -> PrinterSettings:
    return PrinterSettings(_env_file=None)


@pytest.fixture()
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def isolated_tmp(tmp_path, monkeypatch):
    """Route tempfile output into a per-test directory."""
    import tempfile

    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    return tmp_path
