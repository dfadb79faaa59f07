import os
import logging
from typing import BinaryIO, List, Optional

from reportlab.lib import colors
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from boxoffice.reports.layout import ReportLayout, DEFAULT_LAYOUT

logger = logging.getLogger(__name__)

UNICODE_FONT_NAME = "ReportFont"
# Share of the font size between the top of a text line and its baseline
BASELINE_RATIO = 0.8


def register_font(font_path: Optional[str]) -> tuple:
    """
    Register a TTF font (needed for non-Latin-1 names) and return
    (regular, bold) font names; falls back to the built-in Helvetica pair.
    """
    if font_path and os.path.exists(font_path):
        if UNICODE_FONT_NAME not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(UNICODE_FONT_NAME, font_path))
            logger.info("Using report font: %s", font_path)
        return UNICODE_FONT_NAME, UNICODE_FONT_NAME
    return "Helvetica", "Helvetica-Bold"


class PdfCanvas:
    """
    Absolute-position drawing surface over a reportlab canvas.

    All coordinates are top-down: (x, y) is the top-left corner of a box or
    of a text line.
    """

    def __init__(self, out: BinaryIO, layout: ReportLayout = DEFAULT_LAYOUT, font_path: Optional[str] = None):
        self.layout = layout
        self.font, self.bold_font = register_font(font_path)
        self._canvas = canvas.Canvas(out, pagesize=(layout.page_width, layout.page_height))
        self.pages = 1

    def _flip(self, y: float) -> float:
        return self.layout.page_height - y

    @staticmethod
    def _color(value):
        return colors.toColor(value)

    def _font_name(self, bold: bool) -> str:
        return self.bold_font if bold else self.font

    def string_width(self, value: str, size: float, bold: bool = False) -> float:
        return pdfmetrics.stringWidth(value, self._font_name(bold), size)

    def wrap(self, value: str, size: float, width: float, bold: bool = False) -> List[str]:
        if self.string_width(value, size, bold) <= width:
            return [value]
        return simpleSplit(value, self._font_name(bold), size, width) or [""]

    def text(
        self,
        x: float,
        y: float,
        value: str,
        size: float = 12,
        color: str = "black",
        bold: bool = False,
        width: Optional[float] = None,
        align: str = "left",
        underline: bool = False,
    ) -> None:
        c = self._canvas
        c.setFont(self._font_name(bold), size)
        c.setFillColor(self._color(color))
        baseline = self._flip(y + size * BASELINE_RATIO)
        text_width = self.string_width(value, size, bold)

        if width is not None and align == "center":
            left = x + (width - text_width) / 2
        elif width is not None and align == "right":
            left = x + width - text_width
        else:
            left = x
        c.drawString(left, baseline, value)

        if underline:
            c.setStrokeColor(self._color(color))
            c.setLineWidth(0.5)
            c.line(left, baseline - 2, left + text_width, baseline - 2)

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: Optional[str] = None,
        stroke: Optional[str] = None,
        line_width: float = 1,
    ) -> None:
        c = self._canvas
        if fill is not None:
            c.setFillColor(self._color(fill))
        if stroke is not None:
            c.setStrokeColor(self._color(stroke))
            c.setLineWidth(line_width)
        c.rect(
            x,
            self._flip(y + height),
            width,
            height,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )

    def line(self, x1: float, y1: float, x2: float, y2: float, color: str = "black", line_width: float = 1) -> None:
        c = self._canvas
        c.setStrokeColor(self._color(color))
        c.setLineWidth(line_width)
        c.line(x1, self._flip(y1), x2, self._flip(y2))

    def circle(self, x: float, y: float, radius: float, fill: str = "black") -> None:
        c = self._canvas
        c.setFillColor(self._color(fill))
        c.circle(x, self._flip(y), radius, stroke=0, fill=1)

    def new_page(self) -> None:
        self._canvas.showPage()
        self.pages += 1

    def finish(self) -> None:
        self._canvas.save()
