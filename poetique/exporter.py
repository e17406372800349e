"""A4 PDF export: one capture of the full report, tiled page by page.

Page k shows the capture shifted up by k page heights, so the pages read
as one continuous image. Export never raises; failures come back as an
``ExportOutcome`` carrying a warning for the user.
"""
import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image

from poetique.config import Settings
from poetique.errors import PRINT_FALLBACK, ExportError
from poetique.models import AnalysisResult
from poetique.raster import ReportRasterizer
from poetique.report import export_filename
from poetique.state import ViewStateController

logger = logging.getLogger(__name__)

A4_WIDTH = 595.28  # points
A4_HEIGHT = 841.89


@dataclass(frozen=True)
class ExportedDocument:
    filename: str
    data: bytes
    page_count: int


@dataclass(frozen=True)
class ExportOutcome:
    document: Optional[ExportedDocument] = None

    @property
    def ok(self) -> bool:
        return self.document is not None

    @property
    def warning(self) -> Optional[str]:
        return None if self.ok else PRINT_FALLBACK


def page_offsets(image_height: float, page_height: float = A4_HEIGHT, tolerance: float = 1e-6) -> List[float]:
    """Vertical offset of the capture on each page, in points.

    The first page always exists at offset 0; another page is added while
    more than ``tolerance`` of the image is still unplaced.
    """
    offsets = [0.0]
    height_left = image_height - page_height
    while height_left > tolerance:
        offsets.append(-len(offsets) * page_height)
        height_left -= page_height
    return offsets


def _png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def tile_rows(width_px: int, height_px: int, page_width: float = A4_WIDTH, page_height: float = A4_HEIGHT) -> List[Tuple[int, int]]:
    """Pixel row range ``[top, bottom)`` of the capture visible on each page."""
    px_per_pt = width_px / page_width
    rows = []
    # half a pixel of slack so no page gets an empty tile
    for offset in page_offsets(height_px / px_per_pt, page_height, tolerance=0.5 / px_per_pt):
        top = round(-offset * px_per_pt)
        bottom = min(height_px, round((-offset + page_height) * px_per_pt))
        rows.append((top, bottom))
    # last page takes whatever rounding left over
    rows[-1] = (rows[-1][0], height_px)
    return rows


def assemble_pdf(image: Image.Image, page_width: float = A4_WIDTH, page_height: float = A4_HEIGHT) -> Tuple[bytes, int]:
    if image.width <= 0 or image.height <= 0:
        raise ExportError("empty capture")
    px_per_pt = image.width / page_width

    doc = fitz.open()
    try:
        for top, bottom in tile_rows(image.width, image.height, page_width, page_height):
            tile = image.crop((0, top, image.width, bottom))
            page = doc.new_page(width=page_width, height=page_height)
            page.insert_image(fitz.Rect(0, 0, page_width, (bottom - top) / px_per_pt), stream=_png(tile))
        return doc.tobytes(), doc.page_count
    finally:
        doc.close()


class ReportExporter:
    def __init__(self, settings: Settings, rasterizer: Optional[ReportRasterizer] = None):
        self.settings = settings
        self.rasterizer = rasterizer or ReportRasterizer(settings)

    def export(self, result: AnalysisResult, controller: ViewStateController) -> ExportOutcome:
        snapshot = controller.visible_answers()
        try:
            # every model answer expanded for the capture
            controller.show_all_answers(len(result.exam_questions))
            image = self.rasterizer.capture(result, controller.visible_answers())
            data, pages = assemble_pdf(image)
        except Exception:
            logger.exception("PDF export failed")
            return ExportOutcome()
        finally:
            controller.restore_visibility(snapshot)
        logger.info("Exported %d page(s) from a %dx%d capture", pages, image.width, image.height)
        return ExportOutcome(document=ExportedDocument(export_filename(result), data, pages))
