"""Shared value types for device discovery and receipt printing."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]

MOCK_PRINTER_ID = "mock_epson_thermal"
SERIAL_ID_PREFIX = "serial_thermal_"

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-zA-Z0-9.+-]+;base64,")


class PrinterKind(str, Enum):
    """Backend that handles a printer."""

    SYSTEM = "system"
    SERIAL_THERMAL = "serial_thermal"
    MOCK = "mock"


@dataclass(frozen=True, slots=True)
class PrinterDescriptor:
    """One printable target in a registry snapshot."""

    id: str
    display_name: str
    kind: PrinterKind
    status: str = "unknown"
    is_default: bool = False
    name: str = ""
    description: str = ""
    # serial_thermal only
    path: Optional[str] = None
    vendor_id: Optional[str] = None
    product_id: Optional[str] = None
    manufacturer: Optional[str] = None
    is_demo: bool = False


@dataclass(frozen=True, slots=True)
class ReceiptItem:
    name: str
    price: Number = 0


def decode_image_data(value: Union[bytes, bytearray, str, None]) -> Optional[bytes]:
    """
    Accept raw bytes, base64 text or a ``data:image/...;base64,`` URL.

    Undecodable text yields None so the receipt still prints without a logo.
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value) or None
    text = _DATA_URL_PREFIX.sub("", value.strip())
    if not text:
        return None
    try:
        return base64.b64decode(text, validate=False)
    except (binascii.Error, ValueError) as exc:
        logger.warning("Ignoring receipt image, not valid base64: %s", exc)
        return None


@dataclass(frozen=True, slots=True)
class ReceiptPayload:
    """
    One print job.

    ``total`` is caller-supplied and is never recomputed from ``items``.
    """

    title: str = ""
    items: Tuple[ReceiptItem, ...] = ()
    total: Number = 0
    image: Optional[bytes] = None

    def __post_init__(self) -> None:
        # Accept any iterable of items but store an immutable tuple.
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReceiptPayload":
        """Build a payload from the dictionary form sent by the UI layer."""
        raw_items: Iterable[Mapping[str, Any]] = data.get("items") or ()
        items = tuple(
            ReceiptItem(
                name=str(item.get("name", "")),
                price=_to_number(item.get("price")),
            )
            for item in raw_items
        )
        return cls(
            title=str(data.get("title") or ""),
            items=items,
            total=_to_number(data.get("total")),
            image=decode_image_data(data.get("image")),
        )


def _to_number(value: Any) -> Number:
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


@dataclass(frozen=True, slots=True)
class PrintResult:
    """Uniform outcome returned for every print call."""

    success: bool
    message: str
    route: str = ""
    job_id: Optional[str] = None
    preview: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SourceResult:
    """
    Outcome of one enumeration source.

    A degraded source carries a reason and contributes no devices.
    """

    source: str
    devices: Tuple[PrinterDescriptor, ...] = ()
    reason: Optional[str] = None

    @classmethod
    def ok(cls, source: str, devices: Iterable[PrinterDescriptor]) -> "SourceResult":
        return cls(source=source, devices=tuple(devices))

    @classmethod
    def degraded(cls, source: str, reason: str) -> "SourceResult":
        return cls(source=source, reason=reason or "unknown error")

    @property
    def is_degraded(self) -> bool:
        return self.reason is not None
