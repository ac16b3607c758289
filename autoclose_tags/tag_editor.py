import os
import sys
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
import logging

from autoclose_tags.core import constants as app_constants
from autoclose_tags.core.domain_impl.infra import settings_store_service
from autoclose_tags.core.domain_impl.tags.tag_engine_core import TagEngine
from autoclose_tags.core.domain_impl.ui import settings_dialog_service
from autoclose_tags.core.domain_impl.ui.text_widget_adapter_service import TkTextEditorAdapter
from autoclose_tags.core.exceptions import EXPECTED_ERRORS
from autoclose_tags.core.settings_core import SettingsManager
from autoclose_tags.services.autoclose_event_service import AutoCloseEventBinder

_LOG = logging.getLogger(__name__)


class TagEditor:
    """Plain-text editor window with tag auto-closing wired in."""

    APP_TITLE = app_constants.APP_TITLE

    def __init__(self, root, path=None, settings_manager=None):
        self.root = root
        self.path = None
        self._settings_window = None
        self.settings_manager = settings_manager or SettingsManager()
        self.settings_manager.load()

        self.engine = TagEngine(self.settings_manager.settings, schedule_fn=self._schedule)
        self.settings_manager.add_listener(self.engine.update_settings)

        self._build_ui()
        self.adapter = TkTextEditorAdapter(self.text)
        self.binder = AutoCloseEventBinder(
            self.root, self.text, self.engine, adapter=self.adapter, status_fn=self.set_status
        )
        self.binder.bind()

        if path:
            self.open_path(path)
        else:
            self._refresh_title()

    def _schedule(self, delay_ms, callback):
        return self.root.after(max(1, int(delay_ms)), callback)

    def _build_ui(self):
        menubar = tk.Menu(self.root)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open...", command=self.open_dialog)
        file_menu.add_command(label="Save", command=self.save)
        file_menu.add_command(label="Save As...", command=self.save_as)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.root.destroy)
        menubar.add_cascade(label="File", menu=file_menu)

        tags_menu = tk.Menu(menubar, tearoff=0)
        tags_menu.add_command(
            label=app_constants.CLOSE_TAG_COMMAND_LABEL,
            accelerator=app_constants.CLOSE_TAG_SHORTCUT_LABEL,
            command=lambda: self.binder.close_nearest(),
        )
        tags_menu.add_command(label="Settings...", command=self.open_settings)
        menubar.add_cascade(label="Tags", menu=tags_menu)
        self.root.config(menu=menubar)

        frame = ttk.Frame(self.root)
        frame.pack(fill="both", expand=True)
        self.text = tk.Text(frame, wrap="none", undo=True)
        v_scroll = ttk.Scrollbar(frame, orient="vertical", command=self.text.yview)
        self.text.configure(yscrollcommand=v_scroll.set)
        v_scroll.pack(fill="y", side="right")
        self.text.pack(fill="both", expand=True, side="left")

        self.status = ttk.Label(self.root, text="", anchor="w")
        self.status.pack(fill="x", side="bottom")

    def set_status(self, text):
        self.status.config(text=str(text or ""))

    def _refresh_title(self):
        name = os.path.basename(self.path) if self.path else "Untitled"
        self.root.title(f"{name} - {self.APP_TITLE}")

    def open_settings(self):
        settings_dialog_service.open_settings_dialog(self, tk_module=tk, ttk_module=ttk)

    def open_dialog(self):
        path = filedialog.askopenfilename(
            parent=self.root,
            filetypes=[("Markdown / HTML", "*.md *.html *.htm *.txt"), ("All files", "*.*")],
        )
        if path:
            self.open_path(path)

    def open_path(self, path):
        try:
            with open(path, "r", encoding="utf-8") as fh:
                content = fh.read()
        except EXPECTED_ERRORS as exc:
            _LOG.warning("could not open %s: %s", path, exc)
            messagebox.showerror("Open failed", f"Could not open {path}:\n{exc}", parent=self.root)
            return False
        self.text.delete("1.0", "end")
        self.text.insert("1.0", content)
        self.text.edit_reset()
        self.text.edit_modified(False)
        self.path = path
        self._refresh_title()
        self.set_status("Loaded")
        return True

    def save(self):
        if not self.path:
            return self.save_as()
        try:
            settings_store_service.write_text_atomic(self.path, self.text.get("1.0", "end-1c"))
        except EXPECTED_ERRORS as exc:
            _LOG.warning("could not save %s: %s", self.path, exc)
            messagebox.showerror("Save failed", f"Could not save {self.path}:\n{exc}", parent=self.root)
            return False
        self.set_status("Saved")
        return True

    def save_as(self):
        path = filedialog.asksaveasfilename(parent=self.root, defaultextension=".md")
        if not path:
            return False
        self.path = path
        self._refresh_title()
        return self.save()


def _configure_logging():
    raw = os.environ.get(app_constants.DEBUG_ENV, "")
    if settings_store_service.parse_bool_token(raw, False):
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main():
    _configure_logging()
    path = None
    if len(sys.argv) > 1:
        path = sys.argv[1]
    root = tk.Tk()
    root.geometry("900x600")
    TagEditor(root, path)
    root.mainloop()


if __name__ == "__main__":
    main()
