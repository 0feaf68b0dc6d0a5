"""Rewrite rule primitives.

A rule is a pure ``text -> text`` transformation.  Rules are kept in ordered
lists and applied one after another by :func:`apply_rules`; no rule sees
anything but the previous rule's output.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Union

logger = logging.getLogger(__name__)

Replacement = Union[str, Callable[["re.Match[str]"], str]]


class Rule(ABC):
    """A single named text rewrite."""

    name: str

    @abstractmethod
    def apply(self, text: str) -> str:
        """Return the rewritten *text*."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class RegexRule(Rule):
    """Substitute every match of *pattern* with *replacement*."""

    def __init__(self, name: str, pattern: str, replacement: Replacement, flags: int = 0) -> None:
        self.name = name
        self.pattern = re.compile(pattern, flags)
        self.replacement = replacement

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


class CallableRule(Rule):
    """Wrap a plain function as a rule."""

    def __init__(self, name: str, func: Callable[[str], str]) -> None:
        self.name = name
        self.func = func

    def apply(self, text: str) -> str:
        return self.func(text)


def apply_rules(rules: Iterable[Rule], text: str) -> str:
    """Run *text* through *rules* in order."""
    for rule in rules:
        rewritten = rule.apply(text)
        if rewritten != text:
            logger.debug("Rule %s changed the text", rule.name)
        text = rewritten
    return text
