"""Load a saved conversation page and check that it is one. No CLI (typer) dependency."""

import logging
from pathlib import Path
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from chat2pdf.errors import SourceError

log = logging.getLogger(__name__)

HTML_SUFFIXES = (".html", ".htm")
CHATGPT_HOSTS = ("chatgpt.com", "chat.openai.com")
NOT_A_CONVERSATION = "Please open a ChatGPT conversation first"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def load_source(path: str | Path) -> BeautifulSoup:
    """
    Parse a saved page (File > Save Page As..., "HTML only" or "complete").
    Raises SourceError if the file is missing or not an HTML file.
    """
    path = Path(path)
    if not path.is_file():
        raise SourceError(f"Source page not found: {path}")
    if path.suffix.lower() not in HTML_SUFFIXES:
        raise SourceError(f"Not an HTML page: {path} (expected {', '.join(HTML_SUFFIXES)})")
    log.info("Reading %s", path)
    return parse_html(path.read_text(encoding="utf-8", errors="replace"))


def page_url(soup: BeautifulSoup) -> str | None:
    """URL the page was saved from, from <link rel=canonical> or og:url, if present."""
    canonical = soup.find("link", rel="canonical")
    if canonical is not None and canonical.get("href"):
        return canonical["href"]
    og_url = soup.find("meta", attrs={"property": "og:url"})
    if og_url is not None and og_url.get("content"):
        return og_url["content"]
    return None


def is_chatgpt_url(url: str) -> bool:
    host = (urlparse(url).hostname or "").lower()
    return any(host == h or host.endswith("." + h) for h in CHATGPT_HOSTS)


def check_conversation_page(soup: BeautifulSoup, source_url: str | None = None) -> None:
    """
    Raise SourceError when the page is known to come from somewhere other than ChatGPT.
    source_url wins over the URL recorded in the page; pages with no URL at all pass.
    """
    url = source_url or page_url(soup)
    if url and not is_chatgpt_url(url):
        log.debug("Rejecting page from %s", url)
        raise SourceError(NOT_A_CONVERSATION)
