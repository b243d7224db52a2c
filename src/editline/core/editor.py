"""Line editors and their composition combinators."""
import logging
import re
from collections.abc import Sequence
from enum import Enum
from re import Pattern
from typing import Union

from .literal_prefix import extract_prefix

logger = logging.getLogger(__name__)


class Action(Enum):
    """Disposition of an edited line."""

    REPLACE = "replace"
    REMOVE = "remove"


class PatternError(ValueError):
    """Raised when an editor is given a regular expression that does not compile."""

    def __init__(self, pattern, message: str):
        super().__init__(f"invalid pattern {pattern!r}: {message}")
        self.pattern = pattern


class InvalidActionError(RuntimeError):
    """Raised when an editor returns something other than an Action member."""


class Editor:
    """Base class for line editors.

    Subclasses implement ``edit``, which must not fail for any input line.
    ``prefix`` is a literal the line must start with for the editor to do
    anything other than pass it through unchanged; an empty prefix means the
    editor has to see every line.
    """

    prefix: str = ""

    def edit(self, line: str) -> tuple[str, Action]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ReplaceLiteral(Editor):
    """Replace every line with a fixed string."""

    def __init__(self, text: str):
        self.text = text

    def edit(self, line: str) -> tuple[str, Action]:
        return self.text, Action.REPLACE

    def __repr__(self) -> str:
        return f"ReplaceLiteral({self.text!r})"


class Remove(Editor):
    """Drop every line."""

    def edit(self, line: str) -> tuple[str, Action]:
        return line, Action.REMOVE


def _compile(pattern: Union[str, Pattern]) -> Pattern:
    if isinstance(pattern, Pattern):
        if not isinstance(pattern.pattern, str):
            raise PatternError(pattern.pattern, "bytes patterns cannot edit text lines")
        return pattern

    try:
        return re.compile(pattern)
    except (re.error, TypeError) as e:
        raise PatternError(pattern, str(e)) from e


class ReplaceRegexp(Editor):
    """Substitute every match of a pattern using an ``re.sub`` template."""

    def __init__(self, pattern: Union[str, Pattern], template: str):
        self.pattern = _compile(pattern)
        self.template = template

        # Group references are resolved when the template is compiled, which
        # happens before any matching, so an empty subject is enough.
        try:
            self.pattern.sub(template, "")
        except (re.error, IndexError) as e:
            raise PatternError(self.pattern.pattern, f"bad template {template!r}: {e}") from e

    def edit(self, line: str) -> tuple[str, Action]:
        return self.pattern.sub(self.template, line), Action.REPLACE

    def __repr__(self) -> str:
        return f"ReplaceRegexp({self.pattern.pattern!r}, {self.template!r})"


class PrefixGuard(Editor):
    """Run ``inner`` only on lines starting with a literal prefix."""

    def __init__(self, prefix: str, inner: Editor):
        self.prefix = prefix
        self.inner = inner

    def edit(self, line: str) -> tuple[str, Action]:
        if line.startswith(self.prefix):
            return self.inner.edit(line)
        return line, Action.REPLACE

    def __repr__(self) -> str:
        return f"PrefixGuard({self.prefix!r}, {self.inner!r})"


class RegexpGuard(Editor):
    """Run ``inner`` only on lines where ``pattern`` matches somewhere.

    The prefix is derived from the pattern when it is anchored at the start
    and opens with a case-sensitive literal; otherwise it is empty.
    """

    def __init__(self, pattern: Union[str, Pattern], inner: Editor):
        self.pattern = _compile(pattern)
        self.inner = inner
        self.prefix = extract_prefix(self.pattern.pattern, self.pattern.flags)
        logger.debug(f"Pattern {self.pattern.pattern!r} has prefix {self.prefix!r}")

    def edit(self, line: str) -> tuple[str, Action]:
        if self.pattern.search(line):
            return self.inner.edit(line)
        return line, Action.REPLACE

    def __repr__(self) -> str:
        return f"RegexpGuard({self.pattern.pattern!r}, {self.inner!r})"


def apply_editors(editors: Sequence[Editor], line: str) -> tuple[str, Action]:
    """Fold ``line`` through ``editors`` in order.

    Replacements are threaded forward; the first Remove stops the fold and is
    returned as is.

    Raises:
        InvalidActionError: If an editor returns something other than an Action
    """
    for editor in editors:
        result, action = editor.edit(line)
        if action is Action.REMOVE:
            return result, action
        if action is not Action.REPLACE:
            raise InvalidActionError(f"{editor!r} returned unknown action {action!r}")
        line = result

    return line, Action.REPLACE


class Sequencer(Editor):
    """Run several editors one after another, as ``apply_editors`` does."""

    def __init__(self, *editors: Editor):
        self.editors = tuple(editors)

    def edit(self, line: str) -> tuple[str, Action]:
        return apply_editors(self.editors, line)

    def __len__(self) -> int:
        return len(self.editors)

    def __repr__(self) -> str:
        inner = ", ".join(repr(e) for e in self.editors)
        return f"Sequencer({inner})"


def replace_literal(text: str) -> Editor:
    """Build an editor that replaces each line with ``text``."""
    return ReplaceLiteral(text)


def remove() -> Editor:
    """Build an editor that removes each line."""
    return Remove()


def replace_regexp(pattern: Union[str, Pattern], template: str) -> Editor:
    """Build an editor substituting every match of ``pattern`` with ``template``.

    Raises:
        PatternError: If the pattern or template is invalid
    """
    return ReplaceRegexp(pattern, template)


def prefix(literal: str, inner: Editor) -> Editor:
    """Build an editor applying ``inner`` to lines starting with ``literal``."""
    return PrefixGuard(literal, inner)


def regexp(pattern: Union[str, Pattern], inner: Editor) -> Editor:
    """Build an editor applying ``inner`` to lines matching ``pattern``.

    Raises:
        PatternError: If the pattern is invalid
    """
    return RegexpGuard(pattern, inner)


def sequencer(*editors: Editor) -> Editor:
    """Build an editor running ``editors`` one after another."""
    return Sequencer(*editors)
