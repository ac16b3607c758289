"""Auto-close settings value and its owning manager.

`AutoCloseSettings` is an immutable snapshot. `SettingsManager` is the only
writer: every edit produces a new snapshot and is pushed to registered
listeners (the tag engine), so consumers never read a half-updated value.
"""

from __future__ import annotations

import dataclasses
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from autoclose_tags.core import constants
from autoclose_tags.core.domain_impl.infra import settings_store_service
from autoclose_tags.core.exceptions import SettingsValueError
import logging
_LOG = logging.getLogger(__name__)


class CursorPlacement(str, Enum):
    BETWEEN = "between"
    AFTER = "after"


def parse_excluded_tags(raw: Any) -> frozenset[str]:
    """Split the comma-separated exclusion text into lowercase tag names."""
    parts = (part.strip().lower() for part in str(raw or "").split(","))
    return frozenset(part for part in parts if part)


@dataclass(frozen=True, slots=True)
class AutoCloseSettings:
    excluded_tags: str = ""
    cursor_placement: CursorPlacement = CursorPlacement.BETWEEN
    skip_fenced_code_blocks: bool = False
    skip_inline_code_spans: bool = True

    @property
    def excluded_tag_names(self) -> frozenset[str]:
        return parse_excluded_tags(self.excluded_tags)

    def to_payload(self) -> dict[str, Any]:
        return {
            "excluded_tags": self.excluded_tags,
            "cursor_position": self.cursor_placement.value,
            "ignore_in_code_blocks": self.skip_fenced_code_blocks,
            "ignore_inline_code": self.skip_inline_code_spans,
        }

    @classmethod
    def from_payload(cls, payload: Any) -> AutoCloseSettings:
        """Overlay persisted values on defaults; invalid entries keep defaults."""
        defaults = cls()
        data = payload if isinstance(payload, dict) else {}
        excluded = data.get("excluded_tags", defaults.excluded_tags)
        if not isinstance(excluded, str):
            excluded = defaults.excluded_tags
        token = str(data.get("cursor_position", "")).strip().lower()
        try:
            placement = CursorPlacement(token)
        except ValueError:
            placement = defaults.cursor_placement
        return cls(
            excluded_tags=excluded,
            cursor_placement=placement,
            skip_fenced_code_blocks=settings_store_service.parse_bool_token(
                data.get("ignore_in_code_blocks"), defaults.skip_fenced_code_blocks
            ),
            skip_inline_code_spans=settings_store_service.parse_bool_token(
                data.get("ignore_inline_code"), defaults.skip_inline_code_spans
            ),
        )


def default_settings_path() -> str:
    base = settings_store_service.settings_dir(constants.RUNTIME_DIR_NAME, sys.platform, os.environ)
    return os.path.join(base, constants.SETTINGS_FILENAME)


def _coerce_setting_value(name: str, value: Any) -> Any:
    match name:
        case "excluded_tags":
            if isinstance(value, (set, frozenset, list, tuple)):
                return ", ".join(str(item).strip() for item in value if str(item).strip())
            return str(value or "")
        case "cursor_placement":
            try:
                return CursorPlacement(str(getattr(value, "value", value)).strip().lower())
            except ValueError:
                raise SettingsValueError(f"invalid cursor placement: {value!r}") from None
        case _:
            parsed = settings_store_service.parse_bool_token(value)
            if parsed is None:
                raise SettingsValueError(f"invalid value for {name}: {value!r}")
            return parsed


class SettingsManager:
    """Owns the current settings snapshot, its file and its listeners."""

    def __init__(self, path: str | None = None, settings: AutoCloseSettings | None = None):
        self._path = path
        self.settings = settings or AutoCloseSettings()
        self._listeners: list[Callable[[AutoCloseSettings], Any]] = []

    @property
    def path(self) -> str:
        if not self._path:
            self._path = default_settings_path()
        return self._path

    def add_listener(self, listener: Callable[[AutoCloseSettings], Any]) -> None:
        self._listeners.append(listener)
        listener(self.settings)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.settings)

    def load(self) -> AutoCloseSettings:
        payload = settings_store_service.read_settings_payload(self.path)
        self.settings = AutoCloseSettings.from_payload(payload)
        _LOG.debug("settings loaded from %s: %s", self.path, self.settings)
        self._notify()
        return self.settings

    def save(self) -> bool:
        return settings_store_service.write_settings_payload(self.path, self.settings.to_payload())

    def update_setting(self, name: str, value: Any) -> AutoCloseSettings:
        if name not in {field.name for field in dataclasses.fields(AutoCloseSettings)}:
            raise SettingsValueError(f"unknown setting: {name!r}")
        coerced = _coerce_setting_value(name, value)
        self.settings = dataclasses.replace(self.settings, **{name: coerced})
        self._notify()
        return self.settings

    def get_excluded_tags(self) -> frozenset[str]:
        return self.settings.excluded_tag_names
