import fitz  # PyMuPDF
import pytest

from chat2pdf.backends import get_surface
from chat2pdf.backends.pymupdf_backend import MM, PyMuPDFSurface

from conftest import RecordingSurface


# --- split_text (shared by every surface) ---


def test_split_text_wraps_greedily():
    surface = RecordingSurface()  # 10 pt: 2 mm per character
    assert surface.split_text("aa bb cc dd", 10) == ["aa bb", "cc dd"]


def test_split_text_honours_newlines_and_blank_lines():
    surface = RecordingSurface()
    assert surface.split_text("one\n\ntwo", 100) == ["one", "", "two"]


def test_split_text_breaks_long_words():
    surface = RecordingSurface()
    assert surface.split_text("abcdefghij xy", 8) == ["abcd", "efgh", "ij", "xy"]


def test_split_text_empty():
    assert RecordingSurface().split_text("", 50) == [""]


# --- PyMuPDF surface ---


def test_get_surface_builds_pymupdf():
    surface = get_surface("pymupdf", page_width=100, page_height=150)
    assert isinstance(surface, PyMuPDFSurface)
    assert (surface.page_width, surface.page_height, surface.page_count) == (100, 150, 1)


def test_text_width_matches_fitz_in_mm():
    surface = PyMuPDFSurface()
    surface.set_font("courier", "normal", 10)
    expected = fitz.get_text_length("abcd", fontname="cour", fontsize=10) / MM
    assert surface.text_width("abcd") == pytest.approx(expected)
    assert surface.text_width("") == 0


def test_unknown_font_rejected():
    with pytest.raises(ValueError):
        PyMuPDFSurface().set_font("comic sans")


def test_draw_and_save(tmp_path):
    surface = PyMuPDFSurface()
    surface.set_font("helvetica", "bold", 12)
    surface.text("Page one", 20, 20)
    surface.set_fill_color((248, 248, 248))
    surface.set_draw_color((220, 220, 220))
    surface.rounded_rect(17, 30, 176, 20, 2, "FD")
    surface.rect(17, 30, 12, 20, "F")
    surface.rect(17, 30, 0, 0, "F")
    surface.line(29, 30, 29, 50)
    surface.add_page()
    surface.set_font("helvetica", "normal", 10)
    surface.text_with_link("link", 20, 20, "https://example.com")
    assert surface.page_count == 2

    out = tmp_path / "nested" / "out.pdf"
    surface.save(out)
    with fitz.open(str(out)) as doc:
        assert len(doc) == 2
        assert doc[0].rect.width == pytest.approx(210 * MM)
        assert "Page one" in doc[0].get_text()
        assert [link["uri"] for link in doc[1].get_links()] == ["https://example.com"]
