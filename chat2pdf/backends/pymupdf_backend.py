"""PyMuPDF-based drawing surface: Base-14 fonts, vector shapes and URI links on fixed-size pages."""

import logging
from pathlib import Path

import fitz  # PyMuPDF

from chat2pdf.backends.base import RGB, DrawingSurface

log = logging.getLogger(__name__)

# Points per millimetre
MM = 72.0 / 25.4

# (family, style) -> PDF Base-14 font name understood by PyMuPDF
BASE14_FONTS = {
    ("helvetica", "normal"): "helv",
    ("helvetica", "bold"): "hebo",
    ("helvetica", "italic"): "heit",
    ("helvetica", "bolditalic"): "hebi",
    ("courier", "normal"): "cour",
    ("courier", "bold"): "cobo",
    ("courier", "italic"): "coit",
    ("courier", "bolditalic"): "cobi",
}


def _color(rgb: RGB | None) -> tuple[float, float, float] | None:
    """0-255 RGB -> PyMuPDF 0-1 floats."""
    if rgb is None:
        return None
    return tuple(max(0, min(255, c)) / 255.0 for c in rgb)


def _paint(style: str) -> tuple[bool, bool]:
    """(fill, stroke) flags for a rectangle style string."""
    style = (style or "S").upper()
    return "F" in style, ("S" in style or "D" in style)


class PyMuPDFSurface(DrawingSurface):
    """Draw on a new in-memory PyMuPDF document; units are millimetres, converted to points."""

    def __init__(self, page_width: float = 210.0, page_height: float = 297.0):
        self._width = page_width
        self._height = page_height
        self._doc = fitz.open()
        self._page = self._doc.new_page(width=page_width * MM, height=page_height * MM)
        self._fontname = "helv"
        self._fontsize = 10.0
        self._text_color: RGB = (0, 0, 0)
        self._fill_color: RGB = (0, 0, 0)
        self._draw_color: RGB = (0, 0, 0)
        self._line_width = 0.2

    @property
    def page_width(self) -> float:
        return self._width

    @property
    def page_height(self) -> float:
        return self._height

    @property
    def page_count(self) -> int:
        return len(self._doc)

    def set_font(self, family: str, style: str = "normal", size: float | None = None) -> None:
        key = (family.lower(), (style or "normal").lower())
        if key not in BASE14_FONTS:
            raise ValueError(f"Unsupported font: {family} {style}. Available: {sorted(BASE14_FONTS)}")
        self._fontname = BASE14_FONTS[key]
        if size is not None:
            self._fontsize = size

    def set_font_size(self, size: float) -> None:
        self._fontsize = size

    def set_text_color(self, rgb: RGB) -> None:
        self._text_color = rgb

    def set_fill_color(self, rgb: RGB) -> None:
        self._fill_color = rgb

    def set_draw_color(self, rgb: RGB) -> None:
        self._draw_color = rgb

    def set_line_width(self, width: float) -> None:
        self._line_width = width

    def text_width(self, text: str) -> float:
        if not text:
            return 0.0
        return fitz.get_text_length(text, fontname=self._fontname, fontsize=self._fontsize) / MM

    def text(self, text: str, x: float, y: float) -> None:
        if not text:
            return
        self._page.insert_text(
            fitz.Point(x * MM, y * MM),
            text,
            fontname=self._fontname,
            fontsize=self._fontsize,
            color=_color(self._text_color),
        )

    def text_with_link(self, text: str, x: float, y: float, url: str) -> None:
        self.text(text, x, y)
        if not url or not text:
            return
        ascent = self._fontsize * 0.8 / MM
        descent = self._fontsize * 0.2 / MM
        area = fitz.Rect(x * MM, (y - ascent) * MM, (x + self.text_width(text)) * MM, (y + descent) * MM)
        self._page.insert_link({"kind": fitz.LINK_URI, "from": area, "uri": url})

    def _draw_rect(self, x: float, y: float, w: float, h: float, style: str, radius: float | None) -> None:
        fill, stroke = _paint(style)
        area = fitz.Rect(x * MM, y * MM, (x + w) * MM, (y + h) * MM)
        if area.is_empty:
            log.debug("Skipping empty rectangle at (%s, %s)", x, y)
            return
        self._page.draw_rect(
            area,
            color=_color(self._draw_color) if stroke else None,
            fill=_color(self._fill_color) if fill else None,
            width=self._line_width * MM if stroke else 0,
            radius=radius,
        )

    def rect(self, x: float, y: float, w: float, h: float, style: str = "S") -> None:
        self._draw_rect(x, y, w, h, style, None)

    def rounded_rect(self, x: float, y: float, w: float, h: float, r: float, style: str = "S") -> None:
        # PyMuPDF takes the corner radius relative to the shorter side, at most 0.5
        shorter = min(w, h)
        radius = min(0.5, r / shorter) if shorter > 0 and r > 0 else None
        self._draw_rect(x, y, w, h, style, radius)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._page.draw_line(
            fitz.Point(x1 * MM, y1 * MM),
            fitz.Point(x2 * MM, y2 * MM),
            color=_color(self._draw_color),
            width=self._line_width * MM,
        )

    def add_page(self) -> None:
        self._page = self._doc.new_page(width=self._width * MM, height=self._height * MM)

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._doc.save(str(path), garbage=3, deflate=True)
        log.info("Saved %d pages to %s", len(self._doc), path)
