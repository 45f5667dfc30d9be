"""
Content nodes and messages produced by the extractor.

A message is a flat sequence of nodes; nesting in the source HTML is not kept.
ContentNode is a closed union discriminated on `kind`, so JSON dumps of a
message (chat2pdf extract) can be validated back into the same node types.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

Role = Literal["user", "assistant"]


class _Node(BaseModel):
    model_config = {"frozen": True}


class TextNode(_Node):
    kind: Literal["text"] = "text"
    text: str


class HeaderNode(_Node):
    kind: Literal["header"] = "header"
    level: int = Field(ge=1, le=6, description="1 for h1 ... 6 for h6")
    text: str


class CodeBlockNode(_Node):
    kind: Literal["code_block"] = "code_block"
    code: str
    language: str = Field(default="", description="Language tag from the code element's class, or empty")


class InlineCodeNode(_Node):
    kind: Literal["inline_code"] = "inline_code"
    text: str


class BoldNode(_Node):
    kind: Literal["bold"] = "bold"
    text: str


class ItalicNode(_Node):
    kind: Literal["italic"] = "italic"
    text: str


class BlockquoteNode(_Node):
    kind: Literal["blockquote"] = "blockquote"
    text: str


class ListNode(_Node):
    kind: Literal["list"] = "list"
    ordered: bool = False
    items: tuple[str, ...] = ()


class TableNode(_Node):
    kind: Literal["table"] = "table"
    headers: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()


class LinkNode(_Node):
    kind: Literal["link"] = "link"
    text: str = ""
    url: str = ""


class SeparatorNode(_Node):
    kind: Literal["separator"] = "separator"


class LineBreakNode(_Node):
    kind: Literal["line_break"] = "line_break"


class ParagraphBreakNode(_Node):
    kind: Literal["paragraph_break"] = "paragraph_break"


ContentNode = Annotated[
    Union[
        TextNode,
        HeaderNode,
        CodeBlockNode,
        InlineCodeNode,
        BoldNode,
        ItalicNode,
        BlockquoteNode,
        ListNode,
        TableNode,
        LinkNode,
        SeparatorNode,
        LineBreakNode,
        ParagraphBreakNode,
    ],
    Field(discriminator="kind"),
]


class RoleFilter(str, Enum):
    """Which authors end up in the PDF."""

    USER = "user"
    ASSISTANT = "assistant"
    BOTH = "both"

    def includes(self, role: str) -> bool:
        return self is RoleFilter.BOTH or self.value == role


class Message(BaseModel):
    """One conversation turn. Immutable once extracted."""

    role: Role
    content: tuple[ContentNode, ...] = ()

    model_config = {"frozen": True}


class Document(BaseModel):
    """Everything one export renders: built per export call, never persisted."""

    title: str
    generated_at: datetime
    filter: RoleFilter = RoleFilter.BOTH
    messages: tuple[Message, ...] = ()
