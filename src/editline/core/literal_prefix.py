"""Literal prefix extraction from regular expressions.

A regex editor can only be placed below the root of the prefix trie when every
line it could act on is known to start with some literal. This module derives
that literal from the parsed pattern:

1. the top level must be a sequence of at least two nodes,
2. the first node must be a start anchor (``^`` or ``\\A``),
3. the nodes that follow must be case-sensitive literals.

The literal run is the prefix. Anything else, including every pattern compiled
with ``re.IGNORECASE``, yields ``""``, which keeps the editor at the trie root.

``^`` is accepted with or without ``re.MULTILINE`` because the lines fed to
editors never contain ``\\n``.

The parse tree comes from ``re._parser`` and ``re._constants``, CPython
internals with no public equivalent; they are used as laid out in 3.11+.

Simplification
--------------
With ``simplify=True`` the top-level nodes are rewritten before inspection:

- groups (capturing or not) that do not change flags are inlined, so
  ``^(abc)d`` reads as ``^abcd``;
- fixed-count repeats of a single literal are expanded, so ``^a{3}b`` reads
  as ``^aaab``.

Both rewrites match exactly the same strings as the original. With
``simplify=False`` the parser output is inspected as is, and both examples
above produce ``""``.
"""
import re
from re import Pattern
from re import _constants as sre_constants
from re import _parser as sre_parser
from typing import Union

_START_ANCHORS = (sre_constants.AT_BEGINNING, sre_constants.AT_BEGINNING_STRING)

_REPEATS = (
    sre_constants.MAX_REPEAT,
    sre_constants.MIN_REPEAT,
    sre_constants.POSSESSIVE_REPEAT,
)


def _simplify(items: list) -> list:
    out = []
    for op, av in items:
        if op is sre_constants.SUBPATTERN:
            _group, add_flags, del_flags, sub = av
            if not add_flags and not del_flags:
                out.extend(_simplify(sub.data))
                continue
        elif op in _REPEATS:
            lo, hi, sub = av
            inner = _simplify(sub.data)
            if lo == hi and len(inner) == 1 and inner[0][0] is sre_constants.LITERAL:
                out.extend(inner * lo)
                continue
        out.append((op, av))
    return out


def extract_prefix(
    pattern: Union[str, Pattern], flags: int = 0, simplify: bool = True
) -> str:
    """Return the literal every match of ``pattern`` must start with.

    Args:
        pattern: Regular expression source or compiled pattern
        flags: Extra ``re`` flags the pattern is compiled with
        simplify: Whether to inline groups and expand fixed literal repeats first

    Returns:
        The guaranteed prefix, or ``""`` when none can be proven

    Raises:
        re.error: If the pattern does not parse
    """
    if isinstance(pattern, Pattern):
        flags |= pattern.flags
        pattern = pattern.pattern
    if not isinstance(pattern, str):
        return ""

    parsed = sre_parser.parse(pattern, flags)
    if (flags | parsed.state.flags) & re.IGNORECASE:
        return ""

    items = list(parsed.data)
    if simplify:
        items = _simplify(items)

    if len(items) < 2:
        return ""

    op, av = items[0]
    if op is not sre_constants.AT or av not in _START_ANCHORS:
        return ""

    chars = []
    for op, av in items[1:]:
        if op is not sre_constants.LITERAL:
            break
        chars.append(chr(av))

    return "".join(chars)
