"""
Public API: export a saved conversation from code.

    from chat2pdf import export_chat_to_pdf
    result = export_chat_to_pdf("chat.html", output_dir="exports", role_filter="both")
"""

import logging
from datetime import datetime
from pathlib import Path

from bs4 import BeautifulSoup

from chat2pdf.assembler import build_document, render_document
from chat2pdf.backends import DrawingSurface, get_surface
from chat2pdf.errors import ExportError
from chat2pdf.models import ExportResult, LayoutConfig
from chat2pdf.naming import build_filename
from chat2pdf.nodes import RoleFilter
from chat2pdf.source import check_conversation_page, load_source

log = logging.getLogger(__name__)


def export_chat_to_pdf(
    source: str | Path | BeautifulSoup,
    output_dir: str | Path = ".",
    *,
    role_filter: RoleFilter | str = RoleFilter.BOTH,
    surface: str | DrawingSurface = "pymupdf",
    source_url: str | None = None,
    layout: LayoutConfig | None = None,
    generated_at: datetime | None = None,
) -> ExportResult:
    """
    Export a ChatGPT conversation page to PDF (library entry point).

    Writes <output_dir>/ChatGPT_<title>_<filter>.pdf. Never raises: a page that is
    not a conversation, a missing drawing library, an empty result after filtering
    and any unexpected error all come back as ExportResult(success=False, error=...).

    Args:
        source: Saved page (.html/.htm path) or an already parsed page.
        output_dir: Directory for the PDF (created if needed).
        role_filter: 'user', 'assistant' or 'both'.
        surface: Surface name from backends.REGISTRY, or a DrawingSurface instance.
        source_url: URL the page came from; overrides the one recorded in the page.
        layout: Page geometry and styling; default is A4 with the stock look.
        generated_at: Timestamp for the metadata line (default: now).

    Returns:
        ExportResult with message count, filename, output path and page count.
    """
    layout = layout or LayoutConfig()
    try:
        role_filter = RoleFilter(role_filter)
        soup = source if isinstance(source, BeautifulSoup) else load_source(source)
        check_conversation_page(soup, source_url)
        document = build_document(soup, role_filter, generated_at)

        if isinstance(surface, str):
            surface = get_surface(surface, page_width=layout.page_width, page_height=layout.page_height)
        cursor = render_document(document, surface, layout)

        filename = build_filename(document.title, role_filter)
        output_path = Path(output_dir) / filename
        surface.save(output_path)
    except ExportError as e:
        log.warning("Export failed: %s", e)
        return ExportResult(success=False, error=str(e), message="Failed to generate PDF")
    except Exception as e:
        log.warning("Export failed unexpectedly: %s", e, exc_info=True)
        return ExportResult(success=False, error=str(e) or type(e).__name__, message="Failed to generate PDF")

    count = len(document.messages)
    return ExportResult(
        success=True,
        message_count=count,
        filename=filename,
        output_path=output_path,
        page_count=cursor.page_count,
        message=f"Exported {count} messages on {cursor.page_count} pages → {output_path}",
    )
