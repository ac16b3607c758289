"""User settings persistence helpers.

Settings live in one JSON object per user. Reads are forgiving: a missing,
unreadable or malformed file yields an empty payload so callers keep their
defaults. Writes replace the file in one step.
"""

import json
import os
import tempfile
from typing import Any
from autoclose_tags.core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)

TRUE_TOKENS = ("1", "true", "yes", "on")
FALSE_TOKENS = ("0", "false", "no", "off")


def parse_bool_token(value: Any, default: Any=None) -> Any:
    """Accept bool/int or 0/1-style text; return `default` for anything else."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(int(value))
    if isinstance(value, str):
        token = value.strip().lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
    return default


def settings_dir(app_dir_name: str, platform_name: str, env: Any, create: bool=True) -> str:
    """Per-user directory for the settings file.

    Windows uses LOCALAPPDATA (then APPDATA); everything else, and Windows
    without either variable, uses ~/.local/state.
    """
    base = ""
    if platform_name == "win32":
        base = str(env.get("LOCALAPPDATA", "") or env.get("APPDATA", "")).strip()
    if not base:
        base = os.path.join(os.path.expanduser("~"), ".local", "state")
    target = os.path.join(base, app_dir_name)
    if create:
        try:
            os.makedirs(target, exist_ok=True)
        except OSError as exc:
            _LOG.warning("could not create settings dir %s: %s", target, exc)
            return os.getcwd()
    return target


def write_text_atomic(path: Any, text: str, encoding: str="utf-8") -> None:
    """Write `text` next to `path` and swap it in, so readers never see half a file."""
    target = os.path.abspath(path)
    folder = os.path.dirname(target)
    os.makedirs(folder, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(prefix=".act_", suffix=".tmp", dir=folder)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(text)
        os.replace(temp_path, target)
    except OSError:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


def read_settings_payload(path: Any) -> dict[str, Any]:
    if not path or not os.path.isfile(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return {}
    if not isinstance(data, dict):
        _LOG.debug("settings payload at %s is not an object; ignoring", path)
        return {}
    return data


def write_settings_payload(path: Any, payload: dict[str, Any]) -> bool:
    """Persist settings payload; return success bool."""
    try:
        write_text_atomic(path, json.dumps(payload, ensure_ascii=False, indent=2))
    except EXPECTED_ERRORS as exc:
        _LOG.warning("could not save settings to %s: %s", path, exc)
        return False
    return True
