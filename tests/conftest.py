from pathlib import Path

import pytest

from chat2pdf.backends.base import DrawingSurface
from chat2pdf.models import LayoutConfig
from chat2pdf.source import parse_html

CHAR_WIDTH_PER_POINT = 0.2


class RecordingSurface(DrawingSurface):
    """In-memory surface: records every draw call as a tuple, measures text by character count."""

    def __init__(self, page_width: float = 210.0, page_height: float = 297.0):
        self._width = page_width
        self._height = page_height
        self.pages = 1
        self.ops: list[tuple] = []
        self.font = ("helvetica", "normal")
        self.font_size = 10.0
        self.saved_to: Path | None = None

    @property
    def page_width(self) -> float:
        return self._width

    @property
    def page_height(self) -> float:
        return self._height

    @property
    def page_count(self) -> int:
        return self.pages

    def set_font(self, family, style="normal", size=None):
        self.font = (family, style)
        if size is not None:
            self.font_size = size

    def set_font_size(self, size):
        self.font_size = size

    def set_text_color(self, rgb):
        self.ops.append(("text_color", rgb))

    def set_fill_color(self, rgb):
        self.ops.append(("fill_color", rgb))

    def set_draw_color(self, rgb):
        self.ops.append(("draw_color", rgb))

    def set_line_width(self, width):
        self.ops.append(("line_width", width))

    def text_width(self, text):
        return len(text) * self.font_size * CHAR_WIDTH_PER_POINT

    def text(self, text, x, y):
        self.ops.append(("text", text, x, y, self.font, self.font_size))

    def text_with_link(self, text, x, y, url):
        self.ops.append(("link", text, x, y, url))

    def rect(self, x, y, w, h, style="S"):
        self.ops.append(("rect", x, y, w, h, style))

    def rounded_rect(self, x, y, w, h, r, style="S"):
        self.ops.append(("rounded_rect", x, y, w, h, r, style))

    def line(self, x1, y1, x2, y2):
        self.ops.append(("line", x1, y1, x2, y2))

    def add_page(self):
        self.pages += 1
        self.ops.append(("page",))

    def save(self, path):
        self.saved_to = Path(path)

    # helpers for assertions
    def of(self, kind: str) -> list[tuple]:
        return [op for op in self.ops if op[0] == kind]

    def texts(self) -> list[str]:
        return [op[1] for op in self.of("text")]


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def short_layout() -> LayoutConfig:
    """A 100 mm tall page: 14 body lines fit between the top margin and the line threshold."""
    return LayoutConfig(page_height=100.0)


@pytest.fixture()
def short_surface(short_layout) -> RecordingSurface:
    return RecordingSurface(page_height=short_layout.page_height)


CONVERSATION_HTML = """
<html>
<head>
  <title>Trip ideas</title>
  <link rel="canonical" href="https://chatgpt.com/c/abc123">
</head>
<body>
  <div data-message-author-role="user">
    <div class="whitespace-pre-wrap">Hello</div>
  </div>
  <div data-message-author-role="assistant">
    <div class="markdown prose">
      <h2>Plan</h2>
      <pre><code class="hljs language-python">print(1)
print(2)</code></pre>
      <ul><li>Pack</li><li>Go</li></ul>
    </div>
  </div>
</body>
</html>
"""


@pytest.fixture()
def conversation_html() -> str:
    return CONVERSATION_HTML


@pytest.fixture()
def conversation_soup(conversation_html):
    return parse_html(conversation_html)


@pytest.fixture()
def conversation_file(tmp_path, conversation_html) -> Path:
    path = tmp_path / "chat.html"
    path.write_text(conversation_html, encoding="utf-8")
    return path


@pytest.fixture()
def isolated_config(tmp_path, monkeypatch) -> Path:
    """Point config lookup at a file under tmp_path (not created)."""
    path = tmp_path / "cfg" / ".chat2pdf.json"
    monkeypatch.setenv("CHAT2PDF_CONFIG", str(path))
    return path


INTERLEAVED_HTML = """
<html><head><title>Back and forth</title></head><body>
  <div data-message-author-role="user"><div class="whitespace-pre-wrap">Q1</div></div>
  <div data-message-author-role="assistant"><div class="markdown"><p>A1</p></div></div>
  <div data-message-author-role="user"><div class="whitespace-pre-wrap">Q2</div></div>
  <div data-message-author-role="assistant"><div class="markdown"><p>A2</p></div></div>
</body></html>
"""


@pytest.fixture()
def interleaved_soup():
    """Two user turns alternating with two assistant turns."""
    return parse_html(INTERLEAVED_HTML)
