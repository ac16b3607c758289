"""Value types shared by the tag engine and the editor host adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based cursor location in a document of ordered lines."""

    line: int
    column: int

    def shifted(self, columns: int) -> Position:
        return Position(self.line, self.column + int(columns))


@dataclass(frozen=True, slots=True)
class TagToken:
    """Opening tag found at the cursor.

    `name` is the lowercase identity; `typed_name` keeps the user's casing
    for the closing text.
    """

    name: str
    raw: str
    typed_name: str = ""

    @property
    def closing_text(self) -> str:
        return f"</{self.typed_name or self.name}>"


@dataclass(frozen=True, slots=True)
class OpenTagRecord:
    """Opening tag observed in the document and not yet matched by a close."""

    name: str
    line: int

    @property
    def closing_text(self) -> str:
        return f"</{self.name}>"


class EditorAdapter(Protocol):
    """Host editor surface consumed by the tag engine."""

    def get_cursor_position(self) -> Position: ...

    def get_line_text(self, line: int) -> str: ...

    def get_full_document_text(self) -> str: ...

    def insert_text(self, text: str, position: Position) -> None: ...

    def set_cursor_position(self, position: Position) -> None: ...
