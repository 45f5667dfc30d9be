"""Data models for layout settings and export results."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

RGB = tuple[int, int, int]


class LayoutConfig(BaseModel):
    """
    Page geometry, spacing, fonts and colours of the rendered PDF.

    Lengths are millimetres, font sizes are points. Thresholds are distances from
    the bottom edge: the cursor advances to a new page once y goes past them.
    """

    page_width: float = Field(default=210.0, description="A4 width")
    page_height: float = Field(default=297.0, description="A4 height")
    margin: float = Field(default=20.0, description="Left margin and top of the first line on each page")
    content_width: float = Field(default=170.0, description="Width available to wrapped text")

    node_threshold: float = Field(default=20.0, description="Checked once before each content node")
    line_threshold: float = Field(default=15.0, description="Checked before each wrapped line, list item, table row and code line")
    message_threshold: float = Field(default=40.0, description="Checked before each role label")

    body_font_size: float = 10.0
    line_height: float = Field(default=5.0, description="Text, bold, italic, blockquote, list, table and link lines")
    header_base_size: float = Field(default=14.0, description="h1 is drawn at base-1, h6 at base-6")
    header_line_height: float = 7.0
    header_gap: float = 3.0
    blockquote_indent: float = 5.0
    blockquote_gap: float = 3.0
    list_indent: float = Field(default=8.0, description="Offset of item text from the marker")
    list_text_inset: float = Field(default=10.0, description="Width taken off item text for the marker column")
    list_item_gap: float = 6.0
    list_gap: float = 3.0
    table_font_size: float = 9.0
    table_gap: float = 5.0
    separator_gap: float = 8.0
    separator_width: float = 0.5
    line_break_gap: float = 5.0
    paragraph_gap: float = 4.0

    code_font_size: float = 8.0
    code_line_number_size: float = 7.0
    code_line_height: float = 4.5
    code_padding: float = Field(default=4.0, description="Added once to lines x line height")
    code_top_gap: float = 2.0
    code_bottom_gap: float = 4.0
    code_text_inset: float = Field(default=15.0, description="Width taken off code lines for the gutter")
    code_gutter_width: float = 12.0
    code_radius: float = 2.0
    language_tag_font_size: float = 8.0
    language_tag_height: float = 6.0
    language_tag_advance: float = 8.0
    inline_code_font_size: float = 9.0

    title_font_size: float = 16.0
    title_gap: float = 10.0
    meta_font_size: float = 9.0
    meta_gap: float = 12.0
    role_font_size: float = 11.0
    role_gap: float = 8.0
    message_gap: float = 10.0

    text_color: RGB = (0, 0, 0)
    muted_color: RGB = (100, 100, 100)
    user_color: RGB = (0, 0, 0)
    assistant_color: RGB = (16, 163, 127)
    link_color: RGB = (0, 0, 238)
    inline_code_color: RGB = (199, 37, 78)
    separator_color: RGB = (200, 200, 200)
    code_fill: RGB = (248, 248, 248)
    code_border: RGB = (220, 220, 220)
    gutter_fill: RGB = (238, 238, 238)
    line_number_color: RGB = (150, 150, 150)
    tag_fill: RGB = (60, 60, 60)
    tag_text_color: RGB = (255, 255, 255)

    user_label: str = "[user] You"
    assistant_label: str = "[AI] ChatGPT"


class ExportResult(BaseModel):
    """Result of one export run."""

    success: bool = Field(description="Whether the PDF was rendered and saved")
    message_count: int = Field(default=0, description="Messages rendered")
    filename: str | None = Field(default=None, description="File name of the PDF, e.g. ChatGPT_Title_both.pdf")
    output_path: Path | None = Field(default=None, description="Where the PDF was written")
    page_count: int = Field(default=0, description="Pages in the PDF")
    error: str | None = Field(default=None, description="Human-readable reason when success is False")
    message: str = Field(default="", description="Human-readable summary")

    def to_contract(self) -> dict[str, Any]:
        """The caller-facing shape: {success, messageCount, filename} or {success, error}."""
        if self.success:
            return {"success": True, "messageCount": self.message_count, "filename": self.filename}
        return {"success": False, "error": self.error or "Failed to generate PDF"}
