"""Single-tag classification helpers for the auto-close flow.

Everything here is a total function over plain strings: no match returns
None/False rather than raising. Regex scanning is best-effort and is not a
markup parser (quoted `>` inside attributes and tag-like text inside
attribute values are not special-cased).
"""

import re
from typing import Any, Callable, Iterable

from autoclose_tags.core.constants import FENCE_MARKER, VOID_ELEMENTS
from autoclose_tags.core.editor_state import TagToken

TAG_NAME_PATTERN = r"[a-zA-Z][\w\-]*"

_TAG_BEFORE_CURSOR_RE = re.compile(rf"<({TAG_NAME_PATTERN})\s*([^>]*)>\Z", re.ASCII)
_TAG_NAME_RE = re.compile(rf"<({TAG_NAME_PATTERN})", re.ASCII)
_SELF_CLOSING_TAIL_RE = re.compile(r"/\s*>\Z")


def extract_tag_at(line_text: Any, column: Any) -> TagToken | None:
    """Return the opening tag that ends exactly at `column`, if any."""
    before_cursor = str(line_text or "")[: max(0, int(column))]
    match = _TAG_BEFORE_CURSOR_RE.search(before_cursor)
    if not match or before_cursor.endswith("/>") or before_cursor.endswith("</"):
        return None
    typed_name = match.group(1)
    return TagToken(name=typed_name.lower(), raw=match.group(0), typed_name=typed_name)


def is_self_closing(raw_tag: Any) -> bool:
    text = str(raw_tag or "")
    if _SELF_CLOSING_TAIL_RE.search(text):
        return True
    match = _TAG_NAME_RE.search(text)
    return bool(match) and match.group(1).lower() in VOID_ELEMENTS


def is_excluded(tag_name: Any, excluded_tags: Iterable[str]) -> bool:
    name = str(tag_name or "").lower()
    return any(name == str(item).lower() for item in excluded_tags or ())


def is_fence_line(line_text: Any) -> bool:
    return str(line_text or "").strip().startswith(FENCE_MARKER)


def is_inside_fenced_code_block(line_supplier: Callable[[int], Any], upto_line: int) -> bool:
    """Walk lines 0..upto_line inclusive, toggling on each fence-marker line.

    Linear in the document prefix; callers only run it for the edited line.
    """
    inside = False
    for index in range(max(-1, int(upto_line)) + 1):
        if is_fence_line(line_supplier(index)):
            inside = not inside
    return inside


def is_inside_inline_code_span(line_text: Any, column: Any) -> bool:
    """Odd backtick count before `column` means an inline span is still open.

    Approximation: escaped backticks and multi-backtick delimiters are
    counted like any other backtick.
    """
    return str(line_text or "")[: max(0, int(column))].count("`") % 2 == 1


def should_ignore_position(
    line_supplier: Callable[[int], Any],
    line_text: Any,
    line_index: int,
    column: int,
    *,
    skip_fenced_code_blocks: bool,
    skip_inline_code_spans: bool,
) -> bool:
    if skip_fenced_code_blocks and is_inside_fenced_code_block(line_supplier, line_index):
        return True
    if skip_inline_code_spans and is_inside_inline_code_span(line_text, column):
        return True
    return False
