"""Translate shell-style globs into SQL LIKE patterns."""

from __future__ import annotations

import re

# Any run of escaped backslashes (group 1, kept as-is), followed by one of:
#   \*  -> *      *  -> %
#   \?  -> ?      ?  -> _
#   %   -> \%     _  -> \_
_GLOB_TOKEN = re.compile(r"((?:\\\\)*)(\\\*|\*|\\\?|\?|%|_)")

_REPLACEMENTS: dict[str, str] = {
    "\\*": "*",
    "*": "%",
    "\\?": "?",
    "?": "_",
    "%": "\\%",
    "_": "\\_",
}

# Escape character the translated patterns are written for.
LIKE_ESCAPE = "\\"


def translate(glob: str) -> str:
    """Translate a file glob into the equivalent SQL LIKE pattern.

    ``*`` and ``?`` become the LIKE wildcards ``%`` and ``_``; their
    backslash-escaped forms become literal characters, and literal ``%``
    and ``_`` are escaped so LIKE does not treat them as wildcards.
    Match the result with ``ESCAPE '\\'``.

    >>> translate("*.log")
    '%.log'
    >>> translate("a?b")
    'a_b'
    >>> translate("100%")
    '100\\\\%'
    """
    return _GLOB_TOKEN.sub(lambda m: m.group(1) + _REPLACEMENTS[m.group(2)], glob)


def has_wildcard(value: str) -> bool:
    """Return True if ``value`` contains a glob wildcard (``*`` or ``?``)."""
    return "*" in value or "?" in value
