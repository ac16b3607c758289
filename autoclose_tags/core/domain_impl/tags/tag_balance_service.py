"""Document-wide open/close tag balance scans."""

import re
from typing import Any, Iterable

from autoclose_tags.core.editor_state import OpenTagRecord
from autoclose_tags.core.domain_impl.tags import tag_detector_service
from autoclose_tags.core.domain_impl.tags.tag_detector_service import TAG_NAME_PATTERN

_OPEN_TAG_RE = re.compile(rf"<({TAG_NAME_PATTERN})\s*([^>]*?)>", re.ASCII)
_CLOSE_TAG_RE = re.compile(rf"</({TAG_NAME_PATTERN})>", re.ASCII)


def split_document_lines(text: Any) -> list[str]:
    return str(text or "").split("\n")


def has_matching_close_from(lines: Any, tag_name: Any, start_line: int, start_column: int) -> bool:
    """Return True when a close for the tag opened just before `start` exists later.

    The open count starts at 1 for the tag just opened. Counts are applied a
    whole line at a time, so a close followed by a reopen on the same line
    still reads as balanced.
    """
    name = re.escape(str(tag_name or ""))
    if not name:
        return False
    open_re = re.compile(rf"<{name}(?:\s[^>]*)?>", re.IGNORECASE)
    close_re = re.compile(rf"</{name}>", re.IGNORECASE)
    open_count = 1
    for index in range(max(0, int(start_line)), len(lines)):
        line = lines[index]
        if index == start_line:
            line = line[max(0, int(start_column)) :]
        open_count += len(open_re.findall(line))
        open_count -= len(close_re.findall(line))
        if open_count <= 0:
            return True
    return False


def find_unclosed_tags(
    lines: Any,
    excluded_tags: Iterable[str],
    skip_fenced_code_blocks: bool,
    skip_inline_code_spans: bool,
) -> list[OpenTagRecord]:
    """Return opening tags never matched by a close, oldest first.

    Fence-marker lines are never scanned. With `skip_fenced_code_blocks`,
    opens inside a fence are dropped but closes there still match opens
    from outside it.
    """
    excluded = frozenset(str(item).lower() for item in excluded_tags or ())
    open_tags: list[OpenTagRecord] = []
    inside_fence = False
    for index, line in enumerate(lines):
        if tag_detector_service.is_fence_line(line):
            inside_fence = not inside_fence
            continue

        collect_opens = not (skip_fenced_code_blocks and inside_fence)
        if collect_opens:
            for match in _OPEN_TAG_RE.finditer(line):
                name = match.group(1).lower()
                if name in excluded:
                    continue
                if tag_detector_service.is_self_closing(match.group(0)):
                    continue
                if skip_inline_code_spans and tag_detector_service.is_inside_inline_code_span(line, match.start()):
                    continue
                open_tags.append(OpenTagRecord(name=name, line=index))

        for match in _CLOSE_TAG_RE.finditer(line):
            if skip_inline_code_spans and tag_detector_service.is_inside_inline_code_span(line, match.start()):
                continue
            _remove_last_named(open_tags, match.group(1).lower())
    return open_tags


def _remove_last_named(open_tags: list[OpenTagRecord], name: str) -> None:
    for pos in range(len(open_tags) - 1, -1, -1):
        if open_tags[pos].name == name:
            del open_tags[pos]
            return
