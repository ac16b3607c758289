APP_VERSION = "1.0.0"
APP_TITLE = "Auto Close Tags"

RUNTIME_DIR_NAME = "AutoCloseTags"
SETTINGS_FILENAME = "autoclose_tags_settings.json"
DEBUG_ENV = "AUTOCLOSE_TAGS_DEBUG"

FENCE_MARKER = "```"
VOID_ELEMENTS = frozenset(
    (
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    )
)

# Host buffer needs a moment to reflect the typed char before we read it.
AUTO_CLOSE_SETTLE_DELAY_MS = 10
DEBOUNCE_CLEAR_DELAY_MS = 100

CLOSE_TAG_COMMAND_ID = "close-last-tag"
CLOSE_TAG_COMMAND_LABEL = "Close last unclosed tag"
CLOSE_TAG_SHORTCUT = "<Control-period>"
CLOSE_TAG_SHORTCUT_LABEL = "Ctrl+."

CURSOR_POSITION_LABELS = (
    ("between", "Between tags"),
    ("after", "After closing tag"),
)
