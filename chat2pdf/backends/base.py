"""Abstract drawing surface the layout engine draws on."""

from abc import ABC, abstractmethod
from pathlib import Path

RGB = tuple[int, int, int]


class DrawingSurface(ABC):
    """
    Stateful page-drawing interface: font and colours are set first, then used by
    the following draw calls.

    Coordinates are millimetres from the top-left corner of the current page; the
    y of text() is the baseline. Rectangle styles: "F" fill, "S" or "D" stroke,
    "FD" or "DF" fill and stroke.
    """

    @abstractmethod
    def set_font(self, family: str, style: str = "normal", size: float | None = None) -> None:
        """family: 'helvetica' or 'courier'; style: normal, bold, italic, bolditalic."""
        ...

    @abstractmethod
    def set_font_size(self, size: float) -> None:
        ...

    @abstractmethod
    def set_text_color(self, rgb: RGB) -> None:
        ...

    @abstractmethod
    def set_fill_color(self, rgb: RGB) -> None:
        ...

    @abstractmethod
    def set_draw_color(self, rgb: RGB) -> None:
        ...

    @abstractmethod
    def set_line_width(self, width: float) -> None:
        ...

    @abstractmethod
    def text_width(self, text: str) -> float:
        """Width of text in the current font and size."""
        ...

    @abstractmethod
    def text(self, text: str, x: float, y: float) -> None:
        ...

    @abstractmethod
    def text_with_link(self, text: str, x: float, y: float, url: str) -> None:
        """Draw text and make its box a clickable link to url."""
        ...

    @abstractmethod
    def rect(self, x: float, y: float, w: float, h: float, style: str = "S") -> None:
        ...

    @abstractmethod
    def rounded_rect(self, x: float, y: float, w: float, h: float, r: float, style: str = "S") -> None:
        ...

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        ...

    @abstractmethod
    def add_page(self) -> None:
        """Start a new page; later draw calls go to it."""
        ...

    @abstractmethod
    def save(self, path: Path) -> None:
        """Write the finished document to path."""
        ...

    @property
    @abstractmethod
    def page_width(self) -> float:
        ...

    @property
    @abstractmethod
    def page_height(self) -> float:
        ...

    @property
    @abstractmethod
    def page_count(self) -> int:
        ...

    def split_text(self, text: str, max_width: float) -> list[str]:
        """
        Word-wrap text to max_width in the current font. Newlines always break;
        a blank input line yields an empty output line. Words wider than
        max_width are broken between characters.
        """
        lines: list[str] = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate) <= max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                current = ""
                for chunk in self._break_word(word, max_width):
                    if current:
                        lines.append(current)
                    current = chunk
            lines.append(current)
        return lines

    def _break_word(self, word: str, max_width: float) -> list[str]:
        """Split a word into pieces no wider than max_width (at least one character each)."""
        if self.text_width(word) <= max_width:
            return [word]
        pieces: list[str] = []
        piece = ""
        for char in word:
            if piece and self.text_width(piece + char) > max_width:
                pieces.append(piece)
                piece = char
            else:
                piece += char
        if piece:
            pieces.append(piece)
        return pieces
