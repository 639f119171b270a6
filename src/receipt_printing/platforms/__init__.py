"""Platform-specific host print services."""

from .linux_driver import LinuxPrinterDriver
from .mac_driver import MacPrinterDriver
from .win_driver import WindowsPrinterDriver

__all__ = [
    "WindowsPrinterDriver",
    "LinuxPrinterDriver",
    "MacPrinterDriver",
]
