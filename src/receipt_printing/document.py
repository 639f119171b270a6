"""Receipt document renderer for the system print pipeline."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Tuple

import fitz
from PIL import Image
from PySide6.QtGui import QImage

from .assets import default_logo_bytes
from .config import PrinterSettings
from .errors import RenderingError
from .layout import build_receipt_html, mm_to_points
from .models import ReceiptPayload

logger = logging.getLogger(__name__)

LOGO_NAME = "logo.png"
# Tallest receipt page before the story flows onto another page.
MAX_PAGE_HEIGHT_MM = 1000.0
BOTTOM_PADDING_PT = 6.0


@dataclass(slots=True)
class RenderedPage:
    """Rendered page payload for print bridge."""

    page_index: int
    page_rect: fitz.Rect
    image: QImage


def normalize_logo(image_bytes: Optional[bytes]) -> bytes:
    """
    Return PNG bytes for the receipt logo.

    Uploaded images are re-encoded as PNG; an undecodable upload falls back
    to the built-in logo.
    """
    if not image_bytes:
        return default_logo_bytes()
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            out = io.BytesIO()
            img.convert("RGBA").save(out, format="PNG")
            return out.getvalue()
    except Exception as exc:
        logger.warning(f"Could not decode receipt image, using default logo: {exc}")
        return default_logo_bytes()


class ReceiptDocumentRenderer:
    """
    HTML -> PDF -> page image pipeline.

    - the receipt is laid out once as a PDF of ``paper_width_mm`` width
    - the last page is cropped to its content (continuous roll paper)
    - pages are rasterized one at a time for the Qt spooler path
    """

    def __init__(self, settings: PrinterSettings):
        self.settings = settings

    def build_html(self, payload: ReceiptPayload, now: datetime) -> str:
        return build_receipt_html(payload, now, self.settings, logo_src=LOGO_NAME)

    def render_pdf(self, payload: ReceiptPayload, now: datetime) -> bytes:
        """Render the receipt to PDF bytes; the last page ends at its content."""
        html = self.build_html(payload, now)
        logo = normalize_logo(payload.image)

        width = mm_to_points(self.settings.paper_width_mm)
        mediabox = fitz.Rect(0, 0, width, mm_to_points(MAX_PAGE_HEIGHT_MM))

        try:
            page_count, last_bottom = self._measure(html, logo, mediabox)
            last_box = fitz.Rect(
                0, 0, width, min(mediabox.y1, max(1.0, last_bottom + BOTTOM_PADDING_PT))
            )

            story = self._make_story(html, logo)
            buffer = io.BytesIO()
            writer = fitz.DocumentWriter(buffer)
            for page_index in range(page_count):
                box = last_box if page_index == page_count - 1 else mediabox
                device = writer.begin_page(box)
                story.place(box)
                story.draw(device)
                writer.end_page()
            writer.close()
        except Exception as exc:
            raise RenderingError(f"Failed to render receipt document: {exc}") from exc

        return buffer.getvalue()

    @staticmethod
    def _make_story(html: str, logo: bytes) -> fitz.Story:
        archive = fitz.Archive()
        archive.add(logo, LOGO_NAME)
        return fitz.Story(html=html, archive=archive)

    @classmethod
    def _measure(cls, html: str, logo: bytes, mediabox: fitz.Rect) -> Tuple[int, float]:
        """Return the page count and the content bottom of the last page."""
        story = cls._make_story(html, logo)
        page_count = 0
        last_bottom = mediabox.y1
        more = 1
        while more:
            more, filled = story.place(mediabox)
            last_bottom = fitz.Rect(filled).y1
            page_count += 1
        return page_count, last_bottom

    @staticmethod
    def get_page_count(pdf_bytes: bytes) -> int:
        doc = fitz.open("pdf", pdf_bytes)
        try:
            return len(doc)
        finally:
            doc.close()

    @staticmethod
    def _pixmap_to_qimage(pix: fitz.Pixmap) -> QImage:
        fmt = QImage.Format_RGBA8888 if pix.alpha else QImage.Format_RGB888
        # .copy() detaches from fitz memory to keep QImage valid after pixmap is freed.
        return QImage(pix.samples, pix.width, pix.height, pix.stride, fmt).copy()

    def iter_page_images(self, pdf_bytes: bytes, dpi: int) -> Iterator[RenderedPage]:
        """Stream page images in document order."""
        zoom = float(dpi) / 72.0
        matrix = fitz.Matrix(zoom, zoom)

        doc = fitz.open("pdf", pdf_bytes)
        try:
            for page_index in range(len(doc)):
                page = doc[page_index]
                pix = page.get_pixmap(matrix=matrix, colorspace=fitz.csRGB, alpha=False)
                yield RenderedPage(
                    page_index=page_index,
                    page_rect=fitz.Rect(page.rect),
                    image=self._pixmap_to_qimage(pix),
                )
        except Exception as exc:
            raise RenderingError(f"Failed to rasterize receipt: {exc}") from exc
        finally:
            doc.close()
