"""Translate wiki info/warning/tip boxes into ``!!! kind "title"`` admonitions.

After conversion such a box is a one-cell table whose first row starts with
an icon image, e.g.::

    | ![](/confluence/images/icons/emoticons/warning.png) | **Heads up**
    Body text...
    |

becomes::

    !!! warning "Heads up"
        Body text...

The icon names and the admonition kinds they map to are configurable since
they are specific to one wiki's export format.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from page2md.convert.rules import Rule

DEFAULT_ICON_KINDS: dict[str, str] = {
    "information": "note",
    "check": "tip",
    "warning": "warning",
    "forbidden": "danger",
}

_CLOSING_ROW = re.compile(r"^\|\s*$")
_BOLD_TITLE = re.compile(r"^(\*\*|__)(?P<title>.+?)\1\s*(?P<rest>.*)$")
_INDENT = " " * 4


class AdmonitionRule(Rule):
    name = "admonitions"

    def __init__(self, icon_kinds: Optional[Mapping[str, str]] = None) -> None:
        self.icon_kinds = dict(icon_kinds or DEFAULT_ICON_KINDS)
        icons = "|".join(
            re.escape(icon) for icon in sorted(self.icon_kinds, key=len, reverse=True)
        )
        self._head = re.compile(
            r"^\|\s*!\[[^\]]*\]\([^)\s]*?\b(?P<icon>" + icons + r")\.(?:png|gif|svg)[^)]*\)"
            r"\s*\|[ \t]*(?P<rest>.*?)\s*\|?\s*$"
        )

    def _closing_index(self, lines: list[str], start: int) -> Optional[int]:
        for index in range(start, len(lines)):
            if _CLOSING_ROW.match(lines[index]):
                return index
        return None

    def _head_lines(self, kind: str, rest: str) -> tuple[str, list[str]]:
        """Return the ``!!!`` marker line and any body text left on the head row."""
        bold = _BOLD_TITLE.match(rest)
        if bold:
            title = bold.group("title").strip()
            extra = [bold.group("rest")] if bold.group("rest") else []
            return f'!!! {kind} "{title}"', extra
        # No title: the row text moves down into the body.
        return f"!!! {kind}", [rest] if rest else []

    def apply(self, text: str) -> str:
        lines = text.split("\n")
        out: list[str] = []
        i = 0
        while i < len(lines):
            head = self._head.match(lines[i])
            end = self._closing_index(lines, i + 1) if head else None
            if end is None:
                out.append(lines[i])
                i += 1
                continue

            kind = self.icon_kinds[head.group("icon")]
            marker, body = self._head_lines(kind, head.group("rest"))
            body.extend(lines[i + 1:end])
            while body and not body[0].strip():
                body.pop(0)
            while body and not body[-1].strip():
                body.pop()

            out.append(marker)
            out.extend(_INDENT + line if line.strip() else "" for line in body)
            i = end + 1
        return "\n".join(out)
