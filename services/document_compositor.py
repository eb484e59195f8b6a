"""PDF compositing for exported diet plans.

Rasterized plan pages are drawn full-bleed on new A4 pages and spliced into
the master document at fixed offsets:

- the before/after page goes right after the cover (index 1),
- nutrition pages follow the page chosen by the user, shifted by one when a
  before/after page was inserted ahead of them.
"""

from datetime import datetime
from io import BytesIO
from typing import List, Optional, Tuple

from PIL import Image, UnidentifiedImageError
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from core.config import (
    A4_HEIGHT,
    A4_WIDTH,
    BEFORE_AFTER_INSERT_INDEX,
    DEFAULT_INSERT_PAGE,
    EXPORT_FILENAME_PREFIX,
    JPEG_QUALITY,
)
from core.exceptions import DocumentError
from core.logger import get_logger

logger = get_logger("services.document_compositor")


def _to_jpeg(image: bytes) -> bytes:
    try:
        with Image.open(BytesIO(image)) as img:
            out = BytesIO()
            img.convert("RGB").save(out, format="JPEG", quality=JPEG_QUALITY)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise DocumentError(f"Unreadable page image: {exc}")
    return out.getvalue()


def render_image_page(image: bytes):
    """Build a one-page A4 PDF with the image stretched over the whole page."""
    buf = BytesIO()
    pdf = canvas.Canvas(buf, pagesize=(A4_WIDTH, A4_HEIGHT))
    pdf.drawImage(ImageReader(BytesIO(_to_jpeg(image))), 0, 0, width=A4_WIDTH, height=A4_HEIGHT)
    pdf.showPage()
    pdf.save()
    buf.seek(0)
    return PdfReader(buf).pages[0]


def _open_writer(document: bytes) -> PdfWriter:
    try:
        reader = PdfReader(BytesIO(document))
        return PdfWriter(clone_from=reader)
    except (PdfReadError, ValueError, OSError) as exc:
        raise DocumentError(f"Unreadable master PDF: {exc}")


def _insert(writer: PdfWriter, image: bytes, index: int) -> None:
    if index < 0 or index > len(writer.pages):
        raise DocumentError(
            f"Cannot insert at page index {index}; document has {len(writer.pages)} pages",
            index=index,
        )
    writer.insert_page(render_image_page(image), index)


def _to_bytes(writer: PdfWriter) -> bytes:
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


def insert_page_image(document: bytes, image: bytes, index: int) -> bytes:
    """Insert page image `image` at 0-based position `index` in `document`.

    Raises:
        DocumentError: If the PDF or image is unreadable or the index is
            past the end of the document.
    """
    writer = _open_writer(document)
    _insert(writer, image, index)
    return _to_bytes(writer)


def plan_insertions(nutrition_page_count: int, has_before_after: bool, insert_after: int = DEFAULT_INSERT_PAGE) -> Tuple[Optional[int], List[int]]:
    """Return (before/after index, nutrition page indexes) in insertion order."""
    ba_index = BEFORE_AFTER_INSERT_INDEX if has_before_after else None
    start = insert_after + (1 if has_before_after else 0)
    return ba_index, [start + i for i in range(nutrition_page_count)]


def compose_plan_document(
    master: bytes,
    nutrition_pages: List[bytes],
    before_after: Optional[bytes] = None,
    insert_after: int = DEFAULT_INSERT_PAGE,
) -> bytes:
    """Splice all rendered pages into the master document.

    Args:
        master: Master PDF bytes.
        nutrition_pages: Rasterized notes/diet pages in print order.
        before_after: Optional rasterized before/after page.
        insert_after: Page number after which nutrition pages are placed.

    Returns:
        The merged PDF as bytes.
    """
    writer = _open_writer(master)
    ba_index, indexes = plan_insertions(len(nutrition_pages), before_after is not None, insert_after)
    total = len(nutrition_pages) + (1 if before_after is not None else 0)
    processed = 0

    if before_after is not None:
        _insert(writer, before_after, ba_index)
        processed += 1
        logger.info("Inserted page %d/%d (before/after) at index %d", processed, total, ba_index)

    for image, index in zip(nutrition_pages, indexes):
        _insert(writer, image, index)
        processed += 1
        logger.info("Inserted page %d/%d at index %d", processed, total, index)

    return _to_bytes(writer)


def build_export_filename(now: Optional[datetime] = None) -> str:
    """Return e.g. `NutritionPlan_2025-01-31_14-05.pdf`."""
    now = now or datetime.now()
    return f"{EXPORT_FILENAME_PREFIX}_{now.strftime('%Y-%m-%d')}_{now.strftime('%H-%M')}.pdf"
