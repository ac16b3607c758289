"""Auto-close orchestration over the tag detector and balancer.

The engine owns exactly two pieces of mutable state: the settings snapshot
it was last handed and the debounce guard. Both are touched only from the
host's event thread.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from autoclose_tags.core.constants import DEBOUNCE_CLEAR_DELAY_MS
from autoclose_tags.core.domain_impl.tags import tag_balance_service
from autoclose_tags.core.domain_impl.tags import tag_detector_service
from autoclose_tags.core.editor_state import EditorAdapter, Position
from autoclose_tags.core.settings_core import AutoCloseSettings, CursorPlacement
import logging
_LOG = logging.getLogger(__name__)

ScheduleFn = Callable[[int, Callable[[], None]], Any]


class TagEngine:
    def __init__(self, settings: AutoCloseSettings | None = None, schedule_fn: ScheduleFn | None = None):
        self.settings = settings or AutoCloseSettings()
        self._schedule_fn = schedule_fn
        self._last_handled_position: Position | None = None
        self._guard_seq = 0

    def update_settings(self, settings: AutoCloseSettings) -> None:
        self.settings = settings

    @property
    def last_handled_position(self) -> Position | None:
        return self._last_handled_position

    def set_last_handled_position(self, position: Position | None) -> None:
        self._guard_seq += 1
        self._last_handled_position = position

    def _excluded(self, excluded_tags: Iterable[str] | None) -> Iterable[str]:
        if excluded_tags is None:
            return self.settings.excluded_tag_names
        return excluded_tags

    def _place_cursor(self, editor: EditorAdapter, origin: Position, inserted: str) -> Position:
        if self.settings.cursor_placement == CursorPlacement.AFTER:
            target = origin.shifted(len(inserted))
        else:
            target = origin
        editor.set_cursor_position(target)
        return target

    def _arm_guard(self, position: Position) -> None:
        self.set_last_handled_position(position)
        if self._schedule_fn is None:
            return
        expected_seq = self._guard_seq

        def _clear_if_current():
            # A newer auto-close re-armed the guard; leave it alone.
            if self._guard_seq != expected_seq:
                return
            self._last_handled_position = None

        self._schedule_fn(DEBOUNCE_CLEAR_DELAY_MS, _clear_if_current)

    def handle_editor_changed(self, editor: EditorAdapter, excluded_tags: Iterable[str] | None = None) -> bool:
        """Close the opening tag that ends at the cursor; return True when text was inserted."""
        cursor = editor.get_cursor_position()
        guard = self._last_handled_position
        if guard is not None:
            if guard == cursor:
                _LOG.debug("auto-close skipped: position %s already handled", cursor)
                return False
            self.set_last_handled_position(None)

        line = editor.get_line_text(cursor.line)
        if cursor.column == 0 or line[cursor.column - 1 : cursor.column] != ">":
            return False

        token = tag_detector_service.extract_tag_at(line, cursor.column)
        if token is None:
            return False
        if tag_detector_service.is_self_closing(token.raw):
            _LOG.debug("auto-close skipped: <%s> is self-closing", token.name)
            return False
        if tag_detector_service.is_excluded(token.name, self._excluded(excluded_tags)):
            _LOG.debug("auto-close skipped: <%s> is excluded", token.name)
            return False
        if tag_detector_service.should_ignore_position(
            editor.get_line_text,
            line,
            cursor.line,
            cursor.column,
            skip_fenced_code_blocks=self.settings.skip_fenced_code_blocks,
            skip_inline_code_spans=self.settings.skip_inline_code_spans,
        ):
            _LOG.debug("auto-close skipped: <%s> is inside code", token.name)
            return False

        closing_text = token.closing_text
        self._arm_guard(cursor)
        editor.insert_text(closing_text, cursor)
        self._place_cursor(editor, cursor, closing_text)
        _LOG.info("auto-closed <%s> at %d:%d", token.name, cursor.line, cursor.column)
        return True

    def close_nearest_unclosed_tag(self, editor: EditorAdapter, excluded_tags: Iterable[str] | None = None) -> bool:
        """Insert the close for the most recently opened unclosed tag at the cursor."""
        lines = tag_balance_service.split_document_lines(editor.get_full_document_text())
        open_tags = tag_balance_service.find_unclosed_tags(
            lines,
            self._excluded(excluded_tags),
            self.settings.skip_fenced_code_blocks,
            self.settings.skip_inline_code_spans,
        )
        if not open_tags:
            _LOG.info("No unclosed tags found")
            return False

        record = open_tags[-1]
        closing_text = record.closing_text
        cursor = editor.get_cursor_position()
        editor.insert_text(closing_text, cursor)
        self._place_cursor(editor, cursor, closing_text)
        _LOG.info("closed <%s> opened on line %d", record.name, record.line)
        return True

    def has_matching_closing_tag(self, editor: EditorAdapter, tag_name: str, from_line: int, from_column: int) -> bool:
        lines = tag_balance_service.split_document_lines(editor.get_full_document_text())
        return tag_balance_service.has_matching_close_from(lines, tag_name, from_line, from_column)
