"""Vendor prefixes for production stylesheets.

Adds prefixed copies of the declarations that still need them in the
supported browsers. ``-ms-`` prefixes are only emitted when the browser list
targets Internet Explorer.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

PREFIXED_PROPERTIES: dict[str, tuple[str, ...]] = {
    "appearance": ("-webkit-", "-moz-"),
    "backdrop-filter": ("-webkit-",),
    "box-decoration-break": ("-webkit-",),
    "clip-path": ("-webkit-",),
    "hyphens": ("-webkit-", "-ms-"),
    "mask-image": ("-webkit-",),
    "tab-size": ("-moz-",),
    "text-size-adjust": ("-webkit-", "-moz-", "-ms-"),
    "user-select": ("-webkit-", "-moz-", "-ms-"),
}

_DECLARATION = re.compile(
    r"(?P<lead>[{;]\s*)(?P<prop>"
    + "|".join(re.escape(prop) for prop in sorted(PREFIXED_PROPERTIES, key=len, reverse=True))
    + r")\s*:\s*(?P<value>[^;{}]+)"
)


def targets_ie(browsers: Iterable[str]) -> bool:
    return any(query.strip().lower().startswith("ie") for query in browsers)


def add_vendor_prefixes(css: str, browsers: Iterable[str]) -> str:
    """Return *css* with prefixed declarations inserted before the standard ones."""
    include_ms = targets_ie(browsers)

    def _expand(match: re.Match[str]) -> str:
        prop = match.group("prop")
        value = match.group("value").rstrip()
        prefixed = [
            f"{prefix}{prop}:{value};"
            for prefix in PREFIXED_PROPERTIES[prop]
            if include_ms or prefix != "-ms-"
        ]
        return f"{match.group('lead')}{''.join(prefixed)}{prop}:{value}"

    return _DECLARATION.sub(_expand, css)
