"""ESC/POS output for serial thermal printers and the demo printer.

A job is first rendered into an in-memory ``Dummy`` device and only then
written to the transport in one piece, so a job that fails to render never
leaves partial output on the printer.
"""

from __future__ import annotations

import io
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from escpos.escpos import Escpos
from escpos.printer import Dummy, Serial
from PIL import Image

from .config import PrinterSettings
from .errors import PrinterUnavailableError, PrintJobSubmissionError, RenderingError
from .layout import LINE_WIDTH, RULE_CHAR, ReceiptJob

logger = logging.getLogger(__name__)

ESC_INIT = b"\x1b\x40"  # ESC @
ESC_CHARSET_JAPAN = b"\x1b\x52\x08"  # ESC R 8
FS_KANJI_ON = b"\x1c\x26"  # FS &
FS_KANJI_OFF = b"\x1c\x2e"  # FS .
FS_KANJI_SJIS = b"\x1c\x43\x01"  # FS C 1, Shift_JIS code system


def resize_to_width(img: Image.Image, width: int) -> Image.Image:
    """Scale to ``width`` pixels wide, keeping the aspect ratio."""
    if img.width == width:
        return img.copy()
    height = max(1, round(img.height * width / max(1, img.width)))
    return img.resize((width, height), Image.LANCZOS)


def stage_logo(image_bytes: bytes, width: int) -> str:
    """Decode, resize and write the logo to a temporary PNG; return its path."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            resized = resize_to_width(img.convert("RGB"), width)
    except Exception as exc:
        raise RenderingError(f"Could not decode image: {exc}") from exc

    with tempfile.NamedTemporaryFile(delete=False, suffix=".png", prefix="receipt-logo-") as tmp:
        temp_path = tmp.name
    try:
        resized.save(temp_path, format="PNG")
    except Exception as exc:
        Path(temp_path).unlink(missing_ok=True)
        raise RenderingError(f"Could not stage image: {exc}") from exc
    return temp_path


@contextmanager
def staged_logo(image_bytes: Optional[bytes], width: int) -> Iterator[Optional[str]]:
    """
    Yield the staged logo path, or None when there is no usable image.

    The temporary file is removed on every exit path.
    """
    temp_path: Optional[str] = None
    try:
        if image_bytes:
            try:
                temp_path = stage_logo(image_bytes, width)
            except RenderingError as exc:
                logger.warning("Continuing without logo: %s", exc)
        yield temp_path
    finally:
        if temp_path:
            Path(temp_path).unlink(missing_ok=True)


def _emit_text(printer: Escpos, line: str) -> None:
    if line.isascii():
        printer.text(line + "\n")
        return
    # Wide characters go out as Shift_JIS in Kanji mode.
    encoded = line.encode("shift_jis", errors="replace")
    printer._raw(FS_KANJI_ON + encoded + FS_KANJI_OFF + b"\n")


def emit_job(printer: Escpos, job: ReceiptJob, logo_path: Optional[str] = None) -> None:
    """Send every command of ``job`` to an escpos device."""
    printer._raw(ESC_INIT + ESC_CHARSET_JAPAN + FS_KANJI_SJIS)
    for cmd in job.commands:
        if cmd.op == "image":
            if not logo_path:
                continue
            try:
                printer.set(align="center")
                printer.image(logo_path)
                printer.ln()
            except Exception as exc:
                logger.warning("Could not print image: %s", exc)
        elif cmd.op == "align":
            printer.set(align=str(cmd.args[0]))
        elif cmd.op == "size":
            width, height = cmd.args
            if (width, height) == (1, 1):
                printer.set(normal_textsize=True)
            else:
                printer.set(custom_size=True, width=int(width), height=int(height))
        elif cmd.op == "bold":
            printer.set(bold=bool(cmd.args[0]))
        elif cmd.op == "text":
            _emit_text(printer, str(cmd.args[0]))
        elif cmd.op == "rule":
            printer.text(RULE_CHAR * LINE_WIDTH + "\n")
        elif cmd.op == "feed":
            printer.ln(int(cmd.args[0]))
        elif cmd.op == "cut":
            printer.cut()
        else:
            raise RenderingError(f"Unknown thermal command: {cmd.op!r}")


def render_escpos(job: ReceiptJob, settings: PrinterSettings, image: Optional[bytes] = None) -> bytes:
    """Render ``job`` to the raw ESC/POS byte stream."""
    with staged_logo(image, settings.thermal_image_width) as logo_path:
        buffer = Dummy(profile=settings.thermal_profile)
        emit_job(buffer, job, logo_path)
        return buffer.output


def open_serial_printer(path: str, settings: PrinterSettings) -> Serial:
    """Open the serial transport, raising PrinterUnavailableError if unreachable."""
    try:
        printer = Serial(
            devfile=path,
            baudrate=settings.thermal_baudrate,
            timeout=settings.thermal_timeout,
            profile=settings.thermal_profile,
        )
        printer.open()
    except Exception as exc:
        raise PrinterUnavailableError(
            f"Cannot connect to thermal printer on {path}: {exc}"
        ) from exc

    device = getattr(printer, "device", None)
    if device is None or not getattr(device, "is_open", True):
        raise PrinterUnavailableError(
            f"Cannot connect to thermal printer on {path}. Check connection and try again."
        )
    return printer


def write_to_printer(printer: Escpos, data: bytes) -> None:
    """Flush a rendered job to the transport in one write."""
    try:
        printer._raw(data)
    except Exception as exc:
        raise PrintJobSubmissionError(str(exc)) from exc
