"""
Document assembly: build the Document from a conversation page, then lay it out
page by page on a drawing surface.
"""

import logging
from datetime import datetime

from bs4 import BeautifulSoup

from chat2pdf.backends.base import DrawingSurface
from chat2pdf.emoji_map import normalize_emoji
from chat2pdf.errors import NoMessagesError
from chat2pdf.extractor import extract_messages, extract_title
from chat2pdf.layout import ContentRenderer, PageCursor
from chat2pdf.models import LayoutConfig
from chat2pdf.nodes import Document, Message, RoleFilter

log = logging.getLogger(__name__)

NO_MESSAGES = "No messages found in conversation"


def build_document(
    soup: BeautifulSoup,
    role_filter: RoleFilter | str = RoleFilter.BOTH,
    generated_at: datetime | None = None,
) -> Document:
    """Title and filtered messages of a conversation page. Raises NoMessagesError if none qualify."""
    role_filter = RoleFilter(role_filter)
    messages = extract_messages(soup, role_filter)
    if not messages:
        raise NoMessagesError(NO_MESSAGES)
    return Document(
        title=extract_title(soup),
        generated_at=generated_at or datetime.now(),
        filter=role_filter,
        messages=tuple(messages),
    )


def metadata_line(document: Document) -> str:
    return (
        f"Generated: {document.generated_at:%Y-%m-%d} | "
        f"Filter: {document.filter.value} | "
        f"Messages: {len(document.messages)}"
    )


def _render_message(message: Message, renderer: ContentRenderer, cursor: PageCursor) -> None:
    layout = renderer.layout
    surface = renderer.surface
    cursor.ensure(surface, layout.message_threshold)

    surface.set_font("helvetica", "bold", layout.role_font_size)
    if message.role == "user":
        surface.set_text_color(layout.user_color)
        surface.text(layout.user_label, layout.margin, cursor.y)
    else:
        surface.set_text_color(layout.assistant_color)
        surface.text(layout.assistant_label, layout.margin, cursor.y)
    cursor.advance(layout.role_gap)
    surface.set_text_color(layout.text_color)

    for node in message.content:
        renderer.render(node, cursor)
    cursor.advance(layout.message_gap)


def render_document(
    document: Document,
    surface: DrawingSurface,
    layout: LayoutConfig | None = None,
) -> PageCursor:
    """Draw title, metadata line and every message. Returns the cursor after the last message."""
    layout = layout or LayoutConfig()
    cursor = PageCursor.for_layout(layout)
    renderer = ContentRenderer(surface, layout)

    surface.set_font("helvetica", "bold", layout.title_font_size)
    surface.set_text_color(layout.text_color)
    surface.text(normalize_emoji(document.title), layout.margin, cursor.y)
    cursor.advance(layout.title_gap)

    surface.set_font("helvetica", "normal", layout.meta_font_size)
    surface.set_text_color(layout.muted_color)
    surface.text(metadata_line(document), layout.margin, cursor.y)
    cursor.advance(layout.meta_gap)
    surface.set_text_color(layout.text_color)

    for message in document.messages:
        _render_message(message, renderer, cursor)
    log.info("Rendered %d messages on %d pages", len(document.messages), cursor.page_count)
    return cursor
