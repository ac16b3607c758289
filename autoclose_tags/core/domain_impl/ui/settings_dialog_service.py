"""Settings dialog for the auto-close options.

Each control writes through `SettingsManager.update_setting` and saves
immediately, so the engine sees the new snapshot on its next event.
"""

from __future__ import annotations

from typing import Any

from autoclose_tags.core.constants import CURSOR_POSITION_LABELS
from autoclose_tags.core.exceptions import EXPECTED_ERRORS, SettingsValueError
import logging
_LOG = logging.getLogger(__name__)


def placement_label(value: Any) -> str:
    token = str(getattr(value, "value", value))
    for key, label in CURSOR_POSITION_LABELS:
        if key == token:
            return label
    return CURSOR_POSITION_LABELS[0][1]


def placement_value(label: Any) -> str:
    for key, text in CURSOR_POSITION_LABELS:
        if text == label:
            return key
    return CURSOR_POSITION_LABELS[0][0]


def apply_setting_edit(manager: Any, name: str, value: Any) -> bool:
    """Apply one dialog edit and persist it; return False when rejected."""
    try:
        manager.update_setting(name, value)
    except SettingsValueError as exc:
        _LOG.warning("settings edit rejected: %s", exc)
        return False
    return bool(manager.save())


def open_settings_dialog(owner: Any, *, tk_module: Any, ttk_module: Any) -> Any:
    existing = getattr(owner, "_settings_window", None)
    if existing is not None:
        try:
            if existing.winfo_exists():
                existing.lift()
                existing.focus_force()
                return existing
        except (tk_module.TclError, *EXPECTED_ERRORS) as exc:
            _LOG.debug('expected_error', exc_info=exc)

    manager = owner.settings_manager
    settings = manager.settings

    window = tk_module.Toplevel(owner.root)
    owner._settings_window = window
    window.title("Auto Close Tags Settings")
    window.transient(owner.root)
    window.bind(
        "<Destroy>",
        lambda _evt, win=window: setattr(owner, "_settings_window", None)
        if getattr(owner, "_settings_window", None) is win
        else None,
        add="+",
    )

    frame = ttk_module.Frame(window, padding=12)
    frame.pack(fill="both", expand=True)
    frame.columnconfigure(0, weight=1)

    ttk_module.Label(frame, text="Excluded tags").grid(row=0, column=0, sticky="w")
    ttk_module.Label(
        frame,
        text="Comma-separated list of tags that should not be auto-closed (e.g., div, span, i).",
        wraplength=360,
    ).grid(row=1, column=0, sticky="w", pady=(0, 4))
    excluded_var = tk_module.StringVar(value=settings.excluded_tags)
    ttk_module.Entry(frame, textvariable=excluded_var, width=40).grid(row=2, column=0, sticky="ew", pady=(0, 10))
    excluded_var.trace_add("write", lambda *_args: apply_setting_edit(manager, "excluded_tags", excluded_var.get()))

    ttk_module.Label(frame, text="Cursor position after auto-close").grid(row=3, column=0, sticky="w")
    placement_var = tk_module.StringVar(value=placement_label(settings.cursor_placement))
    placement_box = ttk_module.Combobox(
        frame,
        textvariable=placement_var,
        values=[label for _key, label in CURSOR_POSITION_LABELS],
        state="readonly",
    )
    placement_box.grid(row=4, column=0, sticky="w", pady=(0, 10))
    placement_box.bind(
        "<<ComboboxSelected>>",
        lambda _evt: apply_setting_edit(manager, "cursor_placement", placement_value(placement_var.get())),
    )

    fence_var = tk_module.BooleanVar(value=settings.skip_fenced_code_blocks)
    ttk_module.Checkbutton(
        frame,
        text="Ignore fenced code blocks (``` blocks)",
        variable=fence_var,
        command=lambda: apply_setting_edit(manager, "skip_fenced_code_blocks", fence_var.get()),
    ).grid(row=5, column=0, sticky="w")

    inline_var = tk_module.BooleanVar(value=settings.skip_inline_code_spans)
    ttk_module.Checkbutton(
        frame,
        text="Ignore inline code spans (e.g., `<div>`)",
        variable=inline_var,
        command=lambda: apply_setting_edit(manager, "skip_inline_code_spans", inline_var.get()),
    ).grid(row=6, column=0, sticky="w", pady=(0, 10))

    ttk_module.Button(frame, text="Close", command=window.destroy).grid(row=7, column=0, sticky="e")
    return window
