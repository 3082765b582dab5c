"""Template helper that labels the default theme in the theme chooser."""

from __future__ import annotations

import logging
from typing import Any

log = logging.getLogger(__name__)


def theme_option(param: Any, default_theme: Any) -> str:
    """Return the theme name, marked ``(default)`` if it is the default theme.

    The comparison ignores case.
    """
    log.debug("theme_option (template helper)")
    if not isinstance(param, str):
        raise TypeError("Param 0 with String type is required for theme_option helper.")
    if not isinstance(default_theme, str):
        raise TypeError("Type error for `default_theme`, string expected")
    if param.lower() == default_theme.lower():
        return f"{param} (default)"
    return param