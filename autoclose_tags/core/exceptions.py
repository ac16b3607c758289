"""Shared exception classes and expected-error tuple for services/core."""

from __future__ import annotations

from typing import TypeAlias


class AppError(Exception):
    """Base class for expected application-layer failures."""


class SettingsValueError(ValueError, AppError):
    """Raised when a settings edit names an unknown key or carries a bad value."""


EXPECTED_ERRORS: TypeAlias = (
    OSError,
    ValueError,
    TypeError,
    RuntimeError,
    AttributeError,
    KeyError,
    IndexError,
)
