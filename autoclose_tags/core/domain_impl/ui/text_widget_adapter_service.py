"""Tk `Text` widget adapter for the tag engine.

Tk indexes are `"line.column"` with 1-based lines; engine positions are
zero-based on both axes.
"""

from typing import Any

from autoclose_tags.core.editor_state import Position


def tk_index_to_position(index: Any) -> Position:
    line_text, _, column_text = str(index).partition(".")
    return Position(max(0, int(line_text) - 1), max(0, int(column_text or 0)))


def position_to_tk_index(position: Position) -> str:
    return f"{int(position.line) + 1}.{int(position.column)}"


class TkTextEditorAdapter:
    def __init__(self, text_widget: Any):
        self.text = text_widget

    def get_cursor_position(self) -> Position:
        return tk_index_to_position(self.text.index("insert"))

    def get_line_text(self, line: int) -> str:
        row = int(line) + 1
        return str(self.text.get(f"{row}.0", f"{row}.end"))

    def get_full_document_text(self) -> str:
        return str(self.text.get("1.0", "end-1c"))

    def insert_text(self, text: str, position: Position) -> None:
        self.text.insert(position_to_tk_index(position), text)

    def set_cursor_position(self, position: Position) -> None:
        index = position_to_tk_index(position)
        self.text.mark_set("insert", index)
        self.text.see(index)
