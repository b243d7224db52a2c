"""Streaming line editor: rewrite, redact or drop lines as bytes flow through a pipe."""

from .core import (
    Action,
    Editor,
    InvalidActionError,
    PatternError,
    PrefixGuard,
    PrefixTrie,
    RegexpGuard,
    Remove,
    ReplaceLiteral,
    ReplaceRegexp,
    Sequencer,
    ShortWriteError,
    StreamEditor,
    Writer,
    apply_editors,
    extract_prefix,
    prefix,
    regexp,
    remove,
    replace_literal,
    replace_regexp,
    sequencer,
    stream_copy_with_editors,
)

__version__ = "0.1.0"

__all__ = [
    # Editors
    "Action",
    "Editor",
    "ReplaceLiteral",
    "Remove",
    "ReplaceRegexp",
    "PrefixGuard",
    "RegexpGuard",
    "Sequencer",
    "replace_literal",
    "remove",
    "replace_regexp",
    "prefix",
    "regexp",
    "sequencer",
    "apply_editors",
    "extract_prefix",
    # Errors
    "PatternError",
    "InvalidActionError",
    "ShortWriteError",
    # Writer
    "PrefixTrie",
    "Writer",
    # File helpers
    "StreamEditor",
    "stream_copy_with_editors",
]
