"""Qt print bridge: send rendered receipt pages into the OS spooler via QPrinter."""

from __future__ import annotations

from typing import Generator, Optional

from PySide6.QtCore import QMarginsF, QRectF, QSizeF
from PySide6.QtGui import QPageLayout, QPageSize, QPainter
from PySide6.QtPrintSupport import QPrinter
from PySide6.QtWidgets import QApplication

from .base_driver import PrintJobOptions, PrintJobResult
from .config import get_settings
from .document import ReceiptDocumentRenderer, RenderedPage
from .errors import PrintJobSubmissionError


def _require_qapplication() -> None:
    # The caller owns the QApplication; this module never creates one.
    if QApplication.instance() is None:
        raise PrintJobSubmissionError(
            "Qt application instance required for spooler output."
        )


def _set_page_layout(printer: QPrinter, rendered: RenderedPage, options: PrintJobOptions) -> None:
    page_size = QPageSize(
        QSizeF(rendered.page_rect.width, rendered.page_rect.height),
        QPageSize.Point,
        "receipt-roll",
    )
    layout = printer.pageLayout()
    layout.setOrientation(QPageLayout.Portrait)
    layout.setPageSize(page_size)
    if options.margins == "none":
        layout.setMargins(QMarginsF(0, 0, 0, 0))
    printer.setPageLayout(layout)


def _apply_printer_options(printer: QPrinter, options: PrintJobOptions) -> None:
    printer.setDocName(options.job_name)
    printer.setResolution(options.dpi)
    printer.setCopyCount(options.copies)
    # Background graphics are part of the rasterized page, so color mode
    # decides whether they survive.
    printer.setColorMode(QPrinter.Color if options.print_background else QPrinter.GrayScale)
    printer.setFullPage(options.margins == "none")


def _draw_page_image(painter: QPainter, printer: QPrinter, rendered: RenderedPage) -> None:
    target_rect = QRectF(printer.pageRect(QPrinter.Unit.DevicePixel))
    image = rendered.image
    # Fill the roll width, keep aspect ratio, anchor at the top.
    factor = target_rect.width() / max(1, image.width())
    draw_rect = QRectF(
        target_rect.x(),
        target_rect.y(),
        target_rect.width(),
        image.height() * factor,
    )
    painter.drawImage(draw_rect, image)


def _spool_pages(
    printer: QPrinter,
    pages: Generator[RenderedPage, None, None],
    options: PrintJobOptions,
) -> int:
    """Draw every rendered page into ``printer``; ``pages`` is closed on every exit path."""
    try:
        try:
            first = next(pages)
        except StopIteration as exc:
            raise PrintJobSubmissionError("No rendered pages available.") from exc

        _set_page_layout(printer, first, options)

        painter = QPainter()
        if not painter.begin(printer):
            raise PrintJobSubmissionError(
                f"Cannot start printer context: {options.printer_name or 'default printer'}"
            )

        page_count = 1
        try:
            _draw_page_image(painter, printer, first)
            for rendered in pages:
                _set_page_layout(printer, rendered, options)
                printer.newPage()
                _draw_page_image(painter, printer, rendered)
                page_count += 1
        except Exception as exc:
            raise PrintJobSubmissionError(f"Raster print failed: {exc}") from exc
        finally:
            painter.end()
        return page_count
    finally:
        pages.close()


def raster_print_document(
    pdf_bytes: bytes,
    options: PrintJobOptions,
    renderer: Optional[ReceiptDocumentRenderer] = None,
) -> PrintJobResult:
    """Rasterize the receipt PDF and draw it to a QPrinter without a dialog."""
    normalized = options.normalized()
    _require_qapplication()

    printer = QPrinter(QPrinter.HighResolution)
    if normalized.printer_name:
        printer.setPrinterName(normalized.printer_name)
    if not printer.isValid():
        raise PrintJobSubmissionError(
            f"Printer '{normalized.printer_name or 'default'}' is not available."
        )

    _apply_printer_options(printer, normalized)
    renderer = renderer or ReceiptDocumentRenderer(get_settings())
    page_count = _spool_pages(
        printer, renderer.iter_page_images(pdf_bytes, normalized.dpi), normalized
    )

    return PrintJobResult(
        success=True,
        route="qt-raster->spooler",
        message=f"Submitted {page_count} page(s) to printer.",
    )
