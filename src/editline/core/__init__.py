"""Core line editing modules."""

from .editor import (
    Action,
    Editor,
    InvalidActionError,
    PatternError,
    PrefixGuard,
    RegexpGuard,
    Remove,
    ReplaceLiteral,
    ReplaceRegexp,
    Sequencer,
    apply_editors,
    prefix,
    regexp,
    remove,
    replace_literal,
    replace_regexp,
    sequencer,
)
from .literal_prefix import extract_prefix
from .prefix_trie import PrefixTrie
from .safety import FileRewrite
from .stream_editor import StreamEditor, stream_copy_with_editors
from .writer import ShortWriteError, Writer

__all__ = [
    # Editors
    'Action',
    'Editor',
    'ReplaceLiteral',
    'Remove',
    'ReplaceRegexp',
    'PrefixGuard',
    'RegexpGuard',
    'Sequencer',
    'replace_literal',
    'remove',
    'replace_regexp',
    'prefix',
    'regexp',
    'sequencer',
    'apply_editors',
    'extract_prefix',

    # Errors
    'PatternError',
    'InvalidActionError',
    'ShortWriteError',

    # Dispatch and writing
    'PrefixTrie',
    'Writer',

    # File helpers
    'StreamEditor',
    'stream_copy_with_editors',
    'FileRewrite',
]
