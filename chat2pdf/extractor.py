"""
HTML → content nodes.

extract_content() walks one message container depth-first and returns its
content as a flat list of nodes: block elements with a node type of their own
(headings, code, lists, tables, ...) are captured whole, paragraphs emit their
inline children followed by a paragraph break, and every other element is
walked through transparently.

extract_messages() and extract_title() read a saved ChatGPT conversation page.
"""

import logging
import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

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
    Message,
    ParagraphBreakNode,
    RoleFilter,
    SeparatorNode,
    TableNode,
    TextNode,
)

log = logging.getLogger(__name__)

ROLE_ATTR = "data-message-author-role"
ROLES = ("user", "assistant")
# Tried in order inside each message element
CONTENT_SELECTORS = ('[class*="markdown"]', ".prose", ".whitespace-pre-wrap")

DEFAULT_TITLE = "ChatGPT Conversation"
# Title of a page that has no conversation title of its own
GENERIC_TITLE = "ChatGPT"

HEADING_RE = re.compile(r"^h([1-6])$")
# Class tokens on <code> that are styling, not a language
LANGUAGE_DECORATIONS = ("hljs", "whitespace")
LANGUAGE_PREFIXES = ("language-", "lang-")
# Never part of the visible conversation
SKIPPED_TAGS = ("script", "style", "template")


def _text(node: PageElement) -> str:
    """Flattened, trimmed text of a node."""
    return node.get_text().strip()


def _code_language(code: Tag | None) -> str:
    """Language from a code element's class list, e.g. 'hljs language-python' -> 'python'."""
    if code is None:
        return ""
    classes = code.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    for token in classes:
        lower = token.lower()
        if any(word in lower for word in LANGUAGE_DECORATIONS):
            continue
        for prefix in LANGUAGE_PREFIXES:
            if lower.startswith(prefix):
                token = token[len(prefix):]
                break
        if token:
            return token
    return ""


def _code_block(pre: Tag) -> CodeBlockNode:
    code = pre.find("code")
    source = code if code is not None else pre
    return CodeBlockNode(code=source.get_text().strip(), language=_code_language(code))


def _list(tag: Tag) -> ListNode:
    items = tuple(_text(li) for li in tag.find_all("li", recursive=False))
    return ListNode(ordered=tag.name == "ol", items=items)


def _table(table: Tag) -> TableNode | None:
    headers = [_text(th) for th in table.select("thead th")]
    body_rows = table.select("tbody tr")
    if not headers and not table.find("thead"):
        rows = table.find_all("tr")
        if rows and rows[0].find("th") and not rows[0].find("td"):
            headers = [_text(th) for th in rows[0].find_all("th")]
            if not body_rows:
                body_rows = rows[1:]
    rows = tuple(tuple(_text(td) for td in tr.find_all("td")) for tr in body_rows)
    if not headers and not rows:
        return None
    return TableNode(headers=tuple(headers), rows=rows)


def _visit(node: PageElement, out: list[ContentNode]) -> None:
    if isinstance(node, NavigableString):
        if isinstance(node, PreformattedString):
            return  # comments, doctypes, CDATA
        text = str(node).strip()
        if text:
            out.append(TextNode(text=text))
        return
    if not isinstance(node, Tag):
        return

    name = (node.name or "").lower()
    if name in SKIPPED_TAGS:
        return
    heading = HEADING_RE.match(name)
    if heading:
        out.append(HeaderNode(level=int(heading.group(1)), text=_text(node)))
    elif name == "hr":
        out.append(SeparatorNode())
    elif name == "br":
        out.append(LineBreakNode())
    elif name == "pre":
        out.append(_code_block(node))
    elif name == "code" and not (node.parent is not None and (node.parent.name or "").lower() == "pre"):
        out.append(InlineCodeNode(text=_text(node)))
    elif name in ("strong", "b"):
        out.append(BoldNode(text=_text(node)))
    elif name in ("em", "i"):
        out.append(ItalicNode(text=_text(node)))
    elif name == "blockquote":
        out.append(BlockquoteNode(text=_text(node)))
    elif name in ("ul", "ol"):
        out.append(_list(node))
    elif name == "table":
        table = _table(node)
        if table is not None:
            out.append(table)
    elif name == "a":
        out.append(LinkNode(text=_text(node), url=node.get("href") or ""))
    elif name == "p":
        for child in node.children:
            _visit(child, out)
        out.append(ParagraphBreakNode())
    else:
        for child in node.children:
            _visit(child, out)


def extract_content(node: PageElement) -> list[ContentNode]:
    """Linearize a markup subtree into content nodes in document order."""
    out: list[ContentNode] = []
    _visit(node, out)
    return out


def _content_container(element: Tag) -> Tag | None:
    for selector in CONTENT_SELECTORS:
        found = element.select_one(selector)
        if found is not None:
            return found
    return None


def extract_messages(soup: BeautifulSoup | Tag, role_filter: RoleFilter | str = RoleFilter.BOTH) -> list[Message]:
    """
    Messages of a saved conversation page, in page order, that pass role_filter.

    Turns without a recognizable content container, with no extractable content,
    or with a role other than user/assistant are skipped.
    """
    role_filter = RoleFilter(role_filter)
    messages: list[Message] = []
    for element in soup.find_all(attrs={ROLE_ATTR: True}):
        role = element.get(ROLE_ATTR)
        container = _content_container(element)
        if container is None:
            log.debug("Skipping %s turn without a content container", role)
            continue
        content = extract_content(container)
        if not content:
            continue
        if role not in ROLES or not role_filter.includes(role):
            continue
        messages.append(Message(role=role, content=tuple(content)))
    log.info("Extracted %d messages (filter: %s)", len(messages), role_filter.value)
    return messages


def extract_title(soup: BeautifulSoup | Tag) -> str:
    """Conversation title from <title>, or DEFAULT_TITLE for untitled pages."""
    title_tag = soup.find("title")
    if title_tag is not None:
        title = _text(title_tag)
        if title and title != GENERIC_TITLE:
            return title
    return DEFAULT_TITLE
