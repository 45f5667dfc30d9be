import pytest

from chat2pdf.errors import SourceError
from chat2pdf.source import NOT_A_CONVERSATION, check_conversation_page, is_chatgpt_url, load_source, page_url, parse_html


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://chatgpt.com/c/123", True),
        ("https://chat.openai.com/c/123", True),
        ("https://eu.chatgpt.com/share/1", True),
        ("https://notchatgpt.com/c/1", False),
        ("https://example.com/?next=chatgpt.com", False),
        ("file:///home/me/chat.html", False),
    ],
)
def test_is_chatgpt_url(url, expected):
    assert is_chatgpt_url(url) is expected


def test_page_url_prefers_canonical():
    soup = parse_html(
        '<link rel="canonical" href="https://chatgpt.com/c/1">'
        '<meta property="og:url" content="https://example.com">'
    )
    assert page_url(soup) == "https://chatgpt.com/c/1"


def test_page_url_from_og_url():
    assert page_url(parse_html('<meta property="og:url" content="https://chatgpt.com/c/2">')) == "https://chatgpt.com/c/2"


def test_page_without_url_passes():
    check_conversation_page(parse_html("<p>saved</p>"))


def test_foreign_page_is_rejected():
    soup = parse_html('<link rel="canonical" href="https://example.com/post">')
    with pytest.raises(SourceError, match=NOT_A_CONVERSATION):
        check_conversation_page(soup)


def test_load_source(conversation_file):
    soup = load_source(conversation_file)
    assert soup.title.string == "Trip ideas"


def test_load_source_missing(tmp_path):
    with pytest.raises(SourceError, match="not found"):
        load_source(tmp_path / "nope.html")


def test_load_source_not_html(tmp_path):
    path = tmp_path / "chat.txt"
    path.write_text("hello", encoding="utf-8")
    with pytest.raises(SourceError, match="Not an HTML page"):
        load_source(path)
