import pytest

from chat2pdf.extractor import DEFAULT_TITLE, extract_content, extract_messages, extract_title
from chat2pdf.nodes import (
    BlockquoteNode,
    BoldNode,
    CodeBlockNode,
    HeaderNode,
    InlineCodeNode,
    ItalicNode,
    LineBreakNode,
    LinkNode,
    ListNode,
    ParagraphBreakNode,
    RoleFilter,
    SeparatorNode,
    TableNode,
    TextNode,
)
from chat2pdf.source import parse_html


def nodes(html: str):
    return extract_content(parse_html(f"<div>{html}</div>").div)


@pytest.mark.parametrize(
    "html, expected",
    [
        ("<h1> Title </h1>", HeaderNode(level=1, text="Title")),
        ("<h4>Deep</h4>", HeaderNode(level=4, text="Deep")),
        ("<strong> bold </strong>", BoldNode(text="bold")),
        ("<b>b</b>", BoldNode(text="b")),
        ("<em>it</em>", ItalicNode(text="it")),
        ("<i>i</i>", ItalicNode(text="i")),
        ("<code> x = 1 </code>", InlineCodeNode(text="x = 1")),
        ("<blockquote><p>quoted</p></blockquote>", BlockquoteNode(text="quoted")),
        ('<a href="https://example.com"> site </a>', LinkNode(text="site", url="https://example.com")),
        ("<hr>", SeparatorNode()),
        ("<br>", LineBreakNode()),
        ("plain words", TextNode(text="plain words")),
    ],
)
def test_tag_yields_one_matching_node(html, expected):
    assert nodes(html) == [expected]


def test_paragraph_emits_children_then_break():
    result = nodes("<p>Use <code>pip</code> and <strong>relax</strong></p>")
    assert result == [
        TextNode(text="Use"),
        InlineCodeNode(text="pip"),
        TextNode(text="and"),
        BoldNode(text="relax"),
        ParagraphBreakNode(),
    ]


def test_code_block_language_and_text():
    (node,) = nodes('<pre><div>python</div><code class="hljs language-python">a = 1\nb = 2\n</code></pre>')
    assert node == CodeBlockNode(code="a = 1\nb = 2", language="python")


def test_code_block_without_language_or_code_tag():
    assert nodes("<pre>raw\ntext</pre>") == [CodeBlockNode(code="raw\ntext", language="")]
    assert nodes('<pre><code class="hljs">x</code></pre>') == [CodeBlockNode(code="x")]


def test_code_inside_pre_is_not_inline():
    result = nodes("<pre><code>x</code></pre>")
    assert not any(isinstance(n, InlineCodeNode) for n in result)


def test_lists_keep_direct_items_only():
    result = nodes("<ol><li>one<ul><li>nested</li></ul></li><li>two</li></ol>")
    assert result == [ListNode(ordered=True, items=("onenested", "two"))]


def test_unordered_list():
    assert nodes("<ul><li> a </li><li>b</li></ul>") == [ListNode(ordered=False, items=("a", "b"))]


def test_table_with_thead():
    html = (
        "<table><thead><tr><th>Name</th><th>Age</th></tr></thead>"
        "<tbody><tr><td>Ann</td><td>31</td></tr><tr><td>Bo</td><td>4</td></tr></tbody></table>"
    )
    assert nodes(html) == [TableNode(headers=("Name", "Age"), rows=(("Ann", "31"), ("Bo", "4")))]


def test_table_header_row_without_thead():
    html = "<table><tr><th>K</th><th>V</th></tr><tr><td>a</td><td>1</td></tr></table>"
    assert nodes(html) == [TableNode(headers=("K", "V"), rows=(("a", "1"),))]


def test_empty_table_is_dropped():
    assert nodes("<table></table>") == []


def test_unknown_containers_are_transparent():
    assert nodes("<section><span>a</span><div><em>b</em></div></section>") == [TextNode(text="a"), ItalicNode(text="b")]


def test_scripts_and_comments_are_skipped():
    assert nodes("<script>alert(1)</script><!-- note --><style>p{}</style>ok") == [TextNode(text="ok")]


def test_whitespace_only_text_is_skipped():
    assert nodes("<div>\n   \n</div>") == []


def test_malformed_markup_does_not_raise():
    # html.parser closes strong and em at </p> and drops the stray </strong>
    result = nodes("<p><strong>unclosed<em>mixed</p></strong><li>stray")
    assert result == [BoldNode(text="unclosedmixed"), ParagraphBreakNode(), TextNode(text="stray")]


def test_extract_messages_in_page_order(conversation_soup):
    messages = extract_messages(conversation_soup)
    assert [m.role for m in messages] == ["user", "assistant"]
    assert messages[0].content == (TextNode(text="Hello"),)
    assert messages[1].content == (
        HeaderNode(level=2, text="Plan"),
        CodeBlockNode(code="print(1)\nprint(2)", language="python"),
        ListNode(ordered=False, items=("Pack", "Go")),
    )


@pytest.mark.parametrize(
    "role_filter, roles",
    [
        (RoleFilter.USER, ["user"]),
        (RoleFilter.ASSISTANT, ["assistant"]),
        ("both", ["user", "assistant"]),
    ],
)
def test_extract_messages_filter(conversation_soup, role_filter, roles):
    assert [m.role for m in extract_messages(conversation_soup, role_filter)] == roles


def test_turns_without_container_or_content_are_skipped():
    soup = parse_html(
        '<div data-message-author-role="user"><span>no container</span></div>'
        '<div data-message-author-role="assistant"><div class="markdown"> </div></div>'
        '<div data-message-author-role="system"><div class="markdown">sys</div></div>'
        '<div data-message-author-role="assistant"><div class="markdown">kept</div></div>'
    )
    messages = extract_messages(soup)
    assert [(m.role, m.content) for m in messages] == [("assistant", (TextNode(text="kept"),))]


def test_extract_title(conversation_soup):
    assert extract_title(conversation_soup) == "Trip ideas"


@pytest.mark.parametrize("head", ["", "<title>ChatGPT</title>", "<title>  </title>"])
def test_extract_title_default(head):
    assert extract_title(parse_html(f"<html><head>{head}</head></html>")) == DEFAULT_TITLE


def first_text(message):
    return message.content[0].text


@pytest.mark.parametrize(
    "role_filter, expected",
    [
        (RoleFilter.BOTH, [("user", "Q1"), ("assistant", "A1"), ("user", "Q2"), ("assistant", "A2")]),
        (RoleFilter.USER, [("user", "Q1"), ("user", "Q2")]),
        (RoleFilter.ASSISTANT, [("assistant", "A1"), ("assistant", "A2")]),
    ],
)
def test_filter_keeps_page_order_across_turns(interleaved_soup, role_filter, expected):
    messages = extract_messages(interleaved_soup, role_filter)
    assert [(m.role, first_text(m)) for m in messages] == expected
