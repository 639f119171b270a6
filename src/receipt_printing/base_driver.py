"""Host print-service contract and the records it exchanges."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

_VALID_MARGINS = {"none", "default"}


@dataclass(slots=True)
class PrinterDevice:
    """Host-OS printer record."""

    name: str
    display_name: str = ""
    description: str = ""
    is_default: bool = False
    status: str = "unknown"
    raw: Optional[Dict[str, object]] = None


@dataclass(slots=True)
class PrintJobOptions:
    """Submission options for a rendered receipt document."""

    printer_name: Optional[str] = None
    job_name: str = "receipt"
    silent: bool = True
    print_background: bool = True
    margins: str = "none"  # none | default
    paper_width_mm: float = 57.0
    dpi: int = 203
    copies: int = 1
    extra_options: Dict[str, str] = field(default_factory=dict)

    def normalized(self) -> "PrintJobOptions":
        """Return a normalized copy used by drivers."""
        margins = (self.margins or "none").strip().lower()
        return PrintJobOptions(
            printer_name=(self.printer_name or "").strip() or None,
            job_name=(self.job_name or "receipt").strip(),
            silent=bool(self.silent),
            print_background=bool(self.print_background),
            margins=margins if margins in _VALID_MARGINS else "none",
            paper_width_mm=max(10.0, float(self.paper_width_mm)),
            dpi=max(72, int(self.dpi)),
            copies=max(1, int(self.copies)),
            extra_options=dict(self.extra_options or {}),
        )


@dataclass(slots=True)
class PrintJobResult:
    """Terminal outcome reported by the host print service."""

    success: bool
    route: str
    message: str
    job_id: Optional[str] = None


class PrinterDriver(ABC):
    """Host print service: enumeration plus document submission."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Driver display name."""

    @property
    def supports_direct_pdf(self) -> bool:
        """Whether this driver can submit raw PDF to the platform spooler."""
        return False

    @abstractmethod
    def list_printers(self) -> List[PrinterDevice]:
        """Enumerate host printers."""

    @abstractmethod
    def get_default_printer(self) -> Optional[str]:
        """Return default printer name if available."""

    @abstractmethod
    def get_printer_status(self, printer_name: str) -> str:
        """Return printer status string."""

    @abstractmethod
    def print_document(self, pdf_bytes: bytes, options: PrintJobOptions) -> PrintJobResult:
        """Submit a rendered receipt and return once the host reports an outcome."""
