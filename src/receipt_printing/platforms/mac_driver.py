"""macOS print driver implementation (CUPS stack)."""

from __future__ import annotations

from .linux_driver import LinuxPrinterDriver


class MacPrinterDriver(LinuxPrinterDriver):
    """macOS enumerates and spools receipts through CUPS like Linux."""

    @property
    def name(self) -> str:
        return "macos_cups"
