"""Auto-close markup tags while typing, with a close-last-tag command."""

from autoclose_tags.core.constants import APP_VERSION

__version__ = APP_VERSION
