"""Keystroke/paste arming and deferred dispatch into the tag engine.

A `>` keypress or a paste arms the binder. The next `<<Modified>>`
notification disarms it and schedules the engine call after a short settle
delay, so the engine reads the buffer with the typed text already in place.
"""

from typing import Any

from autoclose_tags.core.constants import AUTO_CLOSE_SETTLE_DELAY_MS, CLOSE_TAG_SHORTCUT
from autoclose_tags.core.domain_impl.ui.text_widget_adapter_service import TkTextEditorAdapter
from autoclose_tags.core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


class AutoCloseEventBinder:
    def __init__(
        self,
        root: Any,
        text_widget: Any,
        engine: Any,
        adapter: Any=None,
        settle_delay_ms: int=AUTO_CLOSE_SETTLE_DELAY_MS,
        status_fn: Any=None,
    ):
        self.root = root
        self.text = text_widget
        self.engine = engine
        self.adapter = adapter if adapter is not None else TkTextEditorAdapter(text_widget)
        self.settle_delay_ms = max(0, int(settle_delay_ms))
        self.status_fn = status_fn
        self.armed = False

    def bind(self) -> None:
        self.text.bind("<KeyPress>", self.on_key_press, add="+")
        self.text.bind("<<Paste>>", self.on_paste, add="+")
        self.text.bind("<<Modified>>", self.on_modified, add="+")
        self.text.bind(CLOSE_TAG_SHORTCUT, self.close_nearest, add="+")

    def on_key_press(self, event: Any) -> None:
        if getattr(event, "char", "") == ">":
            self.armed = True

    def on_paste(self, _event: Any=None) -> None:
        self.armed = True

    def on_modified(self, _event: Any=None) -> None:
        # Resetting the flag fires <<Modified>> again; that echo is ignored here.
        if not self.text.edit_modified():
            return
        self.text.edit_modified(False)
        if not self.armed:
            return
        self.armed = False
        try:
            self.root.after(self.settle_delay_ms, self.run_pending)
        except EXPECTED_ERRORS as exc:
            _LOG.debug('expected_error', exc_info=exc)

    def run_pending(self) -> bool:
        return bool(self.engine.handle_editor_changed(self.adapter))

    def close_nearest(self, _event: Any=None) -> str:
        """Menu and shortcut handler for the close-last-tag command."""
        closed = bool(self.engine.close_nearest_unclosed_tag(self.adapter))
        if callable(self.status_fn):
            self.status_fn("" if closed else "No unclosed tags found")
        return "break"
