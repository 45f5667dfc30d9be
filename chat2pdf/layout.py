"""
Paginated layout: a vertical cursor and per-node drawing routines.

Page breaks are decided eagerly, without look-ahead: before each node (and
again before each wrapped line, list item, table row and code line) the cursor
is compared with a threshold above the bottom edge, and the page is advanced
when the cursor has already passed it. Code blocks additionally check their
full precomputed height up front and, when they still run off the page,
continue on the next page with the block chrome redrawn for the lines that are
left.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from chat2pdf.backends.base import DrawingSurface
from chat2pdf.emoji_map import normalize_emoji
from chat2pdf.models import LayoutConfig
from chat2pdf.nodes import (
    BlockquoteNode,
    BoldNode,
    CodeBlockNode,
    ContentNode,
    HeaderNode,
    InlineCodeNode,
    ItalicNode,
    LineBreakNode,
    LinkNode,
    ListNode,
    ParagraphBreakNode,
    SeparatorNode,
    TableNode,
    TextNode,
)

log = logging.getLogger(__name__)

ELLIPSIS = "..."
BULLET = "-"
TABLE_CELL_SEPARATOR = " | "


@dataclass
class PageCursor:
    """Current write position. One rendering pass owns it and threads it through every call."""

    y: float
    page_height: float
    margin_top: float
    margin_bottom: float
    page_count: int = 1

    @classmethod
    def for_layout(cls, layout: LayoutConfig) -> "PageCursor":
        return cls(
            y=layout.margin,
            page_height=layout.page_height,
            margin_top=layout.margin,
            margin_bottom=layout.line_threshold,
        )

    @property
    def at_top(self) -> bool:
        return self.y <= self.margin_top

    def past(self, threshold: float) -> bool:
        """True once y has gone below page_height - threshold."""
        return self.y > self.page_height - threshold

    def fits(self, height: float, threshold: float) -> bool:
        """True if a block of height starting at y ends above page_height - threshold."""
        return self.y + height <= self.page_height - threshold

    def advance(self, amount: float) -> None:
        self.y += amount

    def new_page(self, surface: DrawingSurface) -> None:
        surface.add_page()
        self.y = self.margin_top
        self.page_count += 1

    def ensure(self, surface: DrawingSurface, threshold: float | None = None) -> bool:
        """Start a new page if y is past threshold (default margin_bottom). Returns True if it did."""
        if self.past(self.margin_bottom if threshold is None else threshold):
            self.new_page(surface)
            return True
        return False


def truncate_to_width(text: str, budget: float, measure: Callable[[str], float]) -> str:
    """
    Shorten text to fit budget. Text that already fits is returned unchanged;
    otherwise characters are dropped from the end until text + '...' fits, and
    '...' alone is returned when no prefix does.
    """
    if measure(text) <= budget:
        return text
    while text and measure(text + ELLIPSIS) > budget:
        text = text[:-1]
    return text + ELLIPSIS


def code_block_height(line_count: int, layout: LayoutConfig) -> float:
    return line_count * layout.code_line_height + layout.code_padding


class ContentRenderer:
    """Draws content nodes on a surface, one node per render() call, moving the cursor as it goes."""

    def __init__(self, surface: DrawingSurface, layout: LayoutConfig | None = None):
        self.surface = surface
        self.layout = layout or LayoutConfig()

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def render(self, node: ContentNode, cursor: PageCursor) -> None:
        cursor.ensure(self.surface, self.layout.node_threshold)
        kind = node.kind
        if kind == "text":
            self._text(node, cursor)
        elif kind == "header":
            self._header(node, cursor)
        elif kind == "code_block":
            self._code_block(node, cursor)
        elif kind == "inline_code":
            self._inline_code(node, cursor)
        elif kind == "bold":
            self._bold(node, cursor)
        elif kind == "italic":
            self._italic(node, cursor)
        elif kind == "blockquote":
            self._blockquote(node, cursor)
        elif kind == "list":
            self._list(node, cursor)
        elif kind == "table":
            self._table(node, cursor)
        elif kind == "link":
            self._link(node, cursor)
        elif kind == "separator":
            self._separator(node, cursor)
        elif kind == "line_break":
            self._line_break(node, cursor)
        elif kind == "paragraph_break":
            self._paragraph_break(node, cursor)
        else:
            raise TypeError(f"Unknown content node kind: {kind!r}")

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _body_font(self, style: str = "normal") -> None:
        self.surface.set_font("helvetica", style, self.layout.body_font_size)
        self.surface.set_text_color(self.layout.text_color)

    def _wrapped(self, text: str, cursor: PageCursor, x: float, width: float, line_height: float) -> None:
        """Wrap text to width and draw it line by line, re-checking the page bottom before each line."""
        for line in self.surface.split_text(normalize_emoji(text), width):
            cursor.ensure(self.surface, self.layout.line_threshold)
            self.surface.text(line, x, cursor.y)
            cursor.advance(line_height)

    # ------------------------------------------------------------------
    # Text-like nodes
    # ------------------------------------------------------------------

    def _text(self, node: TextNode, cursor: PageCursor) -> None:
        self._body_font()
        self._wrapped(node.text, cursor, self.layout.margin, self.layout.content_width, self.layout.line_height)

    def _bold(self, node: BoldNode, cursor: PageCursor) -> None:
        self._body_font("bold")
        self._wrapped(node.text, cursor, self.layout.margin, self.layout.content_width, self.layout.line_height)
        self._body_font()

    def _italic(self, node: ItalicNode, cursor: PageCursor) -> None:
        self._body_font("italic")
        self._wrapped(node.text, cursor, self.layout.margin, self.layout.content_width, self.layout.line_height)
        self._body_font()

    def _header(self, node: HeaderNode, cursor: PageCursor) -> None:
        layout = self.layout
        self.surface.set_font("helvetica", "bold", layout.header_base_size - node.level)
        self.surface.set_text_color(layout.text_color)
        self._wrapped(node.text, cursor, layout.margin, layout.content_width, layout.header_line_height)
        self._body_font()
        cursor.advance(layout.header_gap)

    def _blockquote(self, node: BlockquoteNode, cursor: PageCursor) -> None:
        layout = self.layout
        self.surface.set_font("helvetica", "italic", layout.body_font_size)
        self.surface.set_text_color(layout.muted_color)
        self._wrapped(
            "> " + node.text,
            cursor,
            layout.margin + layout.blockquote_indent,
            layout.content_width - layout.blockquote_indent,
            layout.line_height,
        )
        self._body_font()
        cursor.advance(layout.blockquote_gap)

    def _list(self, node: ListNode, cursor: PageCursor) -> None:
        layout = self.layout
        self._body_font()
        text_x = layout.margin + layout.list_indent
        text_width = layout.content_width - layout.list_text_inset
        for index, item in enumerate(node.items):
            cursor.ensure(self.surface, layout.line_threshold)
            marker = f"{index + 1}." if node.ordered else BULLET
            self.surface.text(marker, layout.margin, cursor.y)
            lines = self.surface.split_text(normalize_emoji(item), text_width)
            for i, line in enumerate(lines):
                cursor.ensure(self.surface, layout.line_threshold)
                self.surface.text(line, text_x, cursor.y)
                if i < len(lines) - 1:
                    cursor.advance(layout.line_height)
            cursor.advance(layout.list_item_gap)
        cursor.advance(layout.list_gap)

    # ------------------------------------------------------------------
    # Code
    # ------------------------------------------------------------------

    def _language_tag(self, language: str, cursor: PageCursor) -> None:
        layout = self.layout
        label = normalize_emoji(language.upper())
        self.surface.set_font("helvetica", "bold", layout.language_tag_font_size)
        self.surface.set_fill_color(layout.tag_fill)
        self.surface.set_text_color(layout.tag_text_color)
        width = self.surface.text_width(label) + 4
        self.surface.rounded_rect(layout.margin, cursor.y - 4, width, layout.language_tag_height, 1, "F")
        self.surface.text(label, layout.margin + 2, cursor.y)
        cursor.advance(layout.language_tag_advance)

    def _code_chrome(self, top: float, height: float) -> None:
        """Container, line-number gutter and divider for a block (or the rest of one) whose first baseline is top."""
        layout = self.layout
        x = layout.margin - 3
        y = top - 3
        self.surface.set_fill_color(layout.code_fill)
        self.surface.set_draw_color(layout.code_border)
        self.surface.rounded_rect(x, y, layout.content_width + 6, height, layout.code_radius, "FD")
        self.surface.set_fill_color(layout.gutter_fill)
        self.surface.rect(x, y, layout.code_gutter_width, height, "F")
        self.surface.set_draw_color(layout.code_border)
        divider_x = x + layout.code_gutter_width
        self.surface.line(divider_x, y, divider_x, y + height)

    def _code_block(self, node: CodeBlockNode, cursor: PageCursor) -> None:
        layout = self.layout
        surface = self.surface
        lines = node.code.split("\n")
        height = code_block_height(len(lines), layout)

        # A block taller than a whole page starts where it is instead of leaving a blank page
        fresh_page = cursor.at_top
        cursor.advance(layout.code_top_gap)
        needed = height + (layout.language_tag_advance if node.language else 0)
        if not cursor.fits(needed, layout.node_threshold) and not fresh_page:
            log.debug("Code block of %d lines moved to a new page", len(lines))
            cursor.new_page(surface)
        if node.language:
            self._language_tag(node.language, cursor)

        self._code_chrome(cursor.y, height)
        budget = layout.content_width - layout.code_text_inset
        for index, raw in enumerate(lines):
            if cursor.past(layout.line_threshold):
                cursor.new_page(surface)
                remaining = code_block_height(len(lines) - index, layout)
                log.debug("Code block continues on page %d (%d lines left)", cursor.page_count, len(lines) - index)
                self._code_chrome(cursor.y, remaining)

            surface.set_font("courier", "normal", layout.code_line_number_size)
            surface.set_text_color(layout.line_number_color)
            surface.text(str(index + 1).rjust(2), layout.margin - 1, cursor.y)

            surface.set_font_size(layout.code_font_size)
            surface.set_text_color(layout.text_color)
            line = truncate_to_width(normalize_emoji(raw) or " ", budget, surface.text_width)
            surface.text(line, layout.margin + 11, cursor.y)
            cursor.advance(layout.code_line_height)

        cursor.advance(layout.code_bottom_gap)
        self._body_font()

    def _inline_code(self, node: InlineCodeNode, cursor: PageCursor) -> None:
        layout = self.layout
        self.surface.set_font("courier", "normal", layout.inline_code_font_size)
        self.surface.set_text_color(layout.inline_code_color)
        self.surface.text(normalize_emoji(node.text), layout.margin, cursor.y)
        self._body_font()
        cursor.advance(layout.line_height)

    # ------------------------------------------------------------------
    # Tables, links, spacing
    # ------------------------------------------------------------------

    def _table(self, node: TableNode, cursor: PageCursor) -> None:
        layout = self.layout
        surface = self.surface
        surface.set_text_color(layout.text_color)
        if node.headers:
            surface.set_font("helvetica", "bold", layout.table_font_size)
            surface.text(normalize_emoji(TABLE_CELL_SEPARATOR.join(node.headers)), layout.margin, cursor.y)
            cursor.advance(layout.line_height)
        surface.set_font("helvetica", "normal", layout.table_font_size)
        for row in node.rows:
            cursor.ensure(surface, layout.line_threshold)
            surface.text(normalize_emoji(TABLE_CELL_SEPARATOR.join(row)), layout.margin, cursor.y)
            cursor.advance(layout.line_height)
        cursor.advance(layout.table_gap)
        self._body_font()

    def _link(self, node: LinkNode, cursor: PageCursor) -> None:
        layout = self.layout
        self.surface.set_font("helvetica", "normal", layout.body_font_size)
        self.surface.set_text_color(layout.link_color)
        self.surface.text_with_link(normalize_emoji(node.text or node.url), layout.margin, cursor.y, node.url)
        self.surface.set_text_color(layout.text_color)
        cursor.advance(layout.line_height)

    def _separator(self, node: SeparatorNode, cursor: PageCursor) -> None:
        layout = self.layout
        cursor.ensure(self.surface, layout.line_threshold)
        self.surface.set_draw_color(layout.separator_color)
        self.surface.set_line_width(layout.separator_width)
        self.surface.line(layout.margin, cursor.y, layout.margin + layout.content_width, cursor.y)
        cursor.advance(layout.separator_gap)

    def _line_break(self, node: LineBreakNode, cursor: PageCursor) -> None:
        cursor.advance(self.layout.line_break_gap)

    def _paragraph_break(self, node: ParagraphBreakNode, cursor: PageCursor) -> None:
        cursor.advance(self.layout.paragraph_gap)
