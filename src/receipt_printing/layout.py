"""Receipt layout shared by the thermal, mock and system backends.

Everything here is a pure function of the payload, the timestamp and the
settings: the same inputs always give the same job and the same document.
"""

from __future__ import annotations

import html
import unicodedata
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from .config import PrinterSettings
from .models import Number, ReceiptPayload

# Font A columns on 58mm paper
LINE_WIDTH = 32
RULE_CHAR = "="

MM_PER_INCH = 25.4


@dataclass(frozen=True, slots=True)
class ThermalCommand:
    """One step of a thermal print job.

    ops: image | align | size | bold | text | rule | feed | cut
    """

    op: str
    args: Tuple[object, ...] = ()


@dataclass(frozen=True, slots=True)
class ReceiptJob:
    commands: Tuple[ThermalCommand, ...]

    @property
    def text_lines(self) -> List[str]:
        return [str(cmd.args[0]) for cmd in self.commands if cmd.op == "text"]

    def preview(self, width: int = LINE_WIDTH) -> str:
        """Plain-text rendering of the job, aligned to ``width`` columns."""
        lines: List[str] = []
        align = "left"
        for cmd in self.commands:
            if cmd.op == "align":
                align = str(cmd.args[0])
            elif cmd.op == "image":
                lines.append(_pad("[logo]", "center", width))
            elif cmd.op == "text":
                lines.append(_pad(str(cmd.args[0]), align, width))
            elif cmd.op == "rule":
                lines.append(RULE_CHAR * width)
            elif cmd.op == "feed":
                lines.extend([""] * int(cmd.args[0]))
            elif cmd.op == "cut":
                lines.append("-" * width)
        return "\n".join(line.rstrip() for line in lines)


def display_width(text: str) -> int:
    """Column width with East Asian wide/fullwidth characters counted twice."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def _pad(text: str, align: str, width: int) -> str:
    gap = max(0, width - display_width(text))
    if align == "right":
        return " " * gap + text
    if align == "center":
        return " " * (gap // 2) + text
    return text


def format_amount(value: Number, symbol: str = "¥") -> str:
    """``300`` and ``750.0`` print as ``¥300`` / ``¥750``; fractions are kept."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{symbol}{value}"


def format_timestamp(now: datetime) -> str:
    """Japanese locale short date and time, e.g. ``2025/9/25 9:05:09``."""
    return f"{now.year}/{now.month}/{now.day} {now.hour}:{now.minute:02d}:{now.second:02d}"


def total_line(payload: ReceiptPayload, settings: PrinterSettings) -> str:
    return f"{settings.total_label}: {format_amount(payload.total or 0, settings.currency_symbol)}"


def build_receipt_job(
    payload: ReceiptPayload,
    now: datetime,
    settings: PrinterSettings,
) -> ReceiptJob:
    """Lay out the receipt as an ordered thermal command sequence."""
    symbol = settings.currency_symbol
    cmds: List[ThermalCommand] = []
    add = cmds.append

    if payload.image:
        add(ThermalCommand("image"))

    # Header
    add(ThermalCommand("align", ("center",)))
    add(ThermalCommand("size", (2, 2)))
    add(ThermalCommand("bold", (True,)))
    add(ThermalCommand("text", (payload.title or settings.default_title,)))
    add(ThermalCommand("bold", (False,)))
    add(ThermalCommand("size", (1, 1)))
    add(ThermalCommand("rule"))

    # Items: name on its own line, price right-aligned below it
    add(ThermalCommand("align", ("left",)))
    for item in payload.items:
        add(ThermalCommand("text", (item.name,)))
        add(ThermalCommand("align", ("right",)))
        add(ThermalCommand("text", (format_amount(item.price, symbol),)))
        add(ThermalCommand("align", ("left",)))
    add(ThermalCommand("rule"))

    # Total
    add(ThermalCommand("align", ("right",)))
    add(ThermalCommand("bold", (True,)))
    add(ThermalCommand("size", (1, 2)))
    add(ThermalCommand("text", (total_line(payload, settings),)))
    add(ThermalCommand("bold", (False,)))
    add(ThermalCommand("size", (1, 1)))

    # Footer
    add(ThermalCommand("align", ("center",)))
    add(ThermalCommand("text", ("",)))
    add(ThermalCommand("text", (settings.footer_text,)))
    add(ThermalCommand("text", ("",)))
    add(ThermalCommand("text", (format_timestamp(now),)))
    add(ThermalCommand("feed", (2,)))
    add(ThermalCommand("cut"))
    return ReceiptJob(commands=tuple(cmds))


_RECEIPT_CSS = """
@page {{ size: {page_width}mm auto; margin: 0; }}
body {{
    font-family: monospace;
    font-size: 10px;
    line-height: 1.2;
    margin: 0;
    padding: 2mm;
    width: {body_width}mm;
}}
.center {{ text-align: center; }}
.right {{ text-align: right; }}
.left {{ text-align: left; }}
.bold {{ font-weight: bold; }}
.large {{ font-size: 14px; }}
.separator {{ border-top: 1px dashed #000; margin: 2px 0; }}
.item-line {{ margin: 1px 0; }}
.total {{ font-size: 12px; margin-top: 3px; }}
.logo {{ width: 40mm; margin: 2mm 0; }}
"""


def build_receipt_html(
    payload: ReceiptPayload,
    now: datetime,
    settings: PrinterSettings,
    logo_src: Optional[str] = None,
) -> str:
    """Fixed-layout HTML document for the system printer path."""
    esc = html.escape
    symbol = settings.currency_symbol
    css = _RECEIPT_CSS.format(
        page_width=f"{settings.paper_width_mm:g}",
        body_width=f"{max(1.0, settings.paper_width_mm - 4):g}",
    )

    parts: List[str] = [
        "<!DOCTYPE html>",
        '<html><head><meta charset="UTF-8">',
        f"<style>{css}</style>",
        "</head><body>",
    ]
    if logo_src:
        parts.append(f'<div class="center"><img src="{esc(logo_src)}" class="logo" alt="logo"/></div>')
    parts.append(f'<div class="center bold large">{esc(payload.title or settings.default_title)}</div>')
    parts.append('<div class="separator"></div>')
    for item in payload.items:
        parts.append(
            '<div class="item-line">'
            f'<div class="left">{esc(item.name)}</div>'
            f'<div class="right">{esc(format_amount(item.price, symbol))}</div>'
            "</div>"
        )
    parts.append('<div class="separator"></div>')
    parts.append(f'<div class="right bold total">{esc(total_line(payload, settings))}</div>')
    parts.append("<br/>")
    parts.append(f'<div class="center">{esc(settings.footer_text)}</div>')
    parts.append("<br/>")
    parts.append(f'<div class="center">{esc(format_timestamp(now))}</div>')
    parts.append("</body></html>")
    return "\n".join(parts)


def mm_to_points(mm: float) -> float:
    return float(mm) / MM_PER_INCH * 72.0
