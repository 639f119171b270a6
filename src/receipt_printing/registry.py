"""Device registry: one printer list merged from independent sources."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence

from serial.tools import list_ports

from .base_driver import PrinterDriver
from .config import PrinterSettings, get_settings
from .errors import SourceUnavailableError
from .models import (
    MOCK_PRINTER_ID,
    SERIAL_ID_PREFIX,
    PrinterDescriptor,
    PrinterKind,
    SourceResult,
)

logger = logging.getLogger(__name__)

SOURCE_HOST = "host"
SOURCE_SERIAL = "serial"
SOURCE_MOCK = "mock"

SerialEnumerator = Callable[[], Iterable[Any]]


def _hex_id(value: Optional[int]) -> Optional[str]:
    return None if value is None else f"{int(value):04x}"


def friendly_name(port: Any) -> str:
    """Human label pyserial reports for a port ("n/a" means none)."""
    for attr in ("description", "product"):
        value = getattr(port, attr, None)
        if value and str(value).strip().lower() != "n/a":
            return str(value).strip()
    return ""


def is_thermal_candidate(
    name: str,
    manufacturer: Optional[str],
    keywords: Sequence[str],
) -> bool:
    """
    Permissive receipt-printer heuristic.

    A port qualifies when its friendly name contains any keyword
    (case-insensitive) or when it reports any manufacturer at all.
    """
    lowered = (name or "").lower()
    if any(keyword.lower() in lowered for keyword in keywords):
        return True
    return bool(manufacturer and str(manufacturer).strip())


def mock_descriptor() -> PrinterDescriptor:
    return PrinterDescriptor(
        id=MOCK_PRINTER_ID,
        name="EPSON TM-T20 (Demo)",
        display_name="EPSON TM-T20 Thermal Printer (Demo)",
        description="Mock EPSON thermal printer for demonstration",
        kind=PrinterKind.MOCK,
        status="available",
        is_demo=True,
    )


class DeviceRegistry:
    """Builds a fresh printer snapshot on every call."""

    def __init__(
        self,
        settings: Optional[PrinterSettings] = None,
        serial_enumerator: Optional[SerialEnumerator] = None,
    ):
        self.settings = settings or get_settings()
        self.serial_enumerator = serial_enumerator or list_ports.comports

    def query_host(self, host: Optional[PrinterDriver]) -> SourceResult:
        """System printers from the host print service passed by the caller."""
        try:
            if host is None:
                raise SourceUnavailableError("host print context not available")
            records = host.list_printers()
        except Exception as exc:
            logger.warning("Skipping system printers: %s", exc)
            return SourceResult.degraded(SOURCE_HOST, str(exc))

        devices: List[PrinterDescriptor] = []
        default_taken = False
        for record in records:
            is_default = bool(record.is_default) and not default_taken
            default_taken = default_taken or is_default
            devices.append(
                PrinterDescriptor(
                    id=record.name,
                    name=record.name,
                    display_name=record.display_name or record.name,
                    description=record.description or "",
                    kind=PrinterKind.SYSTEM,
                    status=record.status,
                    is_default=is_default,
                )
            )
        return SourceResult.ok(SOURCE_HOST, devices)

    def query_serial(self) -> SourceResult:
        """Serial/Bluetooth ports that look like receipt printers."""
        try:
            ports = list(self.serial_enumerator())
        except Exception as exc:
            logger.warning("Skipping serial ports: %s", exc)
            return SourceResult.degraded(SOURCE_SERIAL, str(exc))

        devices: List[PrinterDescriptor] = []
        for port in ports:
            path = str(getattr(port, "device", "") or "")
            if not path:
                continue
            label = friendly_name(port)
            manufacturer = getattr(port, "manufacturer", None)
            if not is_thermal_candidate(label, manufacturer, self.settings.thermal_keywords):
                continue
            fallback = f"Thermal Printer ({path})"
            devices.append(
                PrinterDescriptor(
                    id=f"{SERIAL_ID_PREFIX}{path}",
                    name=fallback,
                    display_name=label or fallback,
                    description=f"Serial thermal printer on {path}",
                    kind=PrinterKind.SERIAL_THERMAL,
                    status="available",
                    path=path,
                    vendor_id=_hex_id(getattr(port, "vid", None)),
                    product_id=_hex_id(getattr(port, "pid", None)),
                    manufacturer=manufacturer or None,
                )
            )
        return SourceResult.ok(SOURCE_SERIAL, devices)

    def enumerate(self, host: Optional[PrinterDriver]) -> List[SourceResult]:
        """Per-source outcomes in listing order: host, serial, mock."""
        return [
            self.query_host(host),
            self.query_serial(),
            SourceResult.ok(SOURCE_MOCK, [mock_descriptor()]),
        ]

    def list_devices(self, host: Optional[PrinterDriver]) -> List[PrinterDescriptor]:
        devices: List[PrinterDescriptor] = []
        for result in self.enumerate(host):
            devices.extend(result.devices)
        logger.info("Found %s printer(s)", len(devices))
        return devices

    def find(self, target_id: str, host: Optional[PrinterDriver]) -> Optional[PrinterDescriptor]:
        for device in self.list_devices(host):
            if device.id == target_id:
                return device
        return None
