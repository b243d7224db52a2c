"""Prefix trie used to skip editors that cannot match a line."""
from collections.abc import Iterable
from typing import Optional

from .editor import Editor


class _Node:
    __slots__ = ("items", "children")

    def __init__(self):
        self.items: list[tuple[int, Editor]] = []
        self.children: Optional[dict[str, "_Node"]] = None


class PrefixTrie:
    """Index of editors keyed by their literal prefix.

    Each editor is stored at the node spelled by its prefix; editors without a
    prefix live at the root. A lookup collects the items of every node on the
    path the line walks, so an editor is returned whenever its prefix is a
    prefix of the line. Results are ordered by registration index.
    """

    __slots__ = ("_root", "_size")

    def __init__(self):
        self._root = _Node()
        self._size = 0

    @classmethod
    def build(cls, editors: Iterable[Editor]) -> "PrefixTrie":
        """Build a trie from editors in registration order."""
        trie = cls()
        for editor in editors:
            trie._add(getattr(editor, "prefix", "") or "", editor)
        return trie

    def _add(self, prefix: str, editor: Editor) -> None:
        node = self._root
        for ch in prefix:
            if node.children is None:
                node.children = {}
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = _Node()
            node = child

        node.items.append((self._size, editor))
        self._size += 1

    def get(self, line: str) -> list[Editor]:
        """Return the editors that may act on ``line``, in registration order."""
        node = self._root
        items = list(node.items)
        for ch in line:
            if not node.children:
                break
            node = node.children.get(ch)
            if node is None:
                break
            items.extend(node.items)

        items.sort(key=lambda item: item[0])
        return [editor for _, editor in items]

    def __len__(self) -> int:
        return self._size
