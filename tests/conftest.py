import pytest

from autoclose_tags.core.editor_state import Position


class FakeEditor:
    """In-memory editor adapter: a list of lines plus a cursor."""

    def __init__(self, text, cursor=None):
        self.lines = text.split("\n")
        if cursor is None:
            cursor = Position(len(self.lines) - 1, len(self.lines[-1]))
        self.cursor = cursor
        self.inserts = []

    @classmethod
    def typed(cls, text):
        """Cursor at the end of `text`, as if the user just typed it."""
        return cls(text)

    @property
    def text(self):
        return "\n".join(self.lines)

    def get_cursor_position(self):
        return self.cursor

    def get_line_text(self, line):
        if 0 <= line < len(self.lines):
            return self.lines[line]
        return ""

    def get_full_document_text(self):
        return self.text

    def insert_text(self, text, position):
        line = self.lines[position.line]
        self.lines[position.line] = line[: position.column] + text + line[position.column :]
        self.inserts.append((text, position))

    def set_cursor_position(self, position):
        self.cursor = position


class FakeScheduler:
    def __init__(self):
        self.pending = []

    def __call__(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))
        return f"after#{len(self.pending)}"

    def run_all(self):
        pending, self.pending = self.pending, []
        for _delay, callback in pending:
            callback()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def make_editor():
    return FakeEditor
