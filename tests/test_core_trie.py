"""Tests for the editor prefix trie."""
import pytest
from editline.core.editor import Action, Editor, PrefixGuard, RegexpGuard, Remove
from editline.core.prefix_trie import PrefixTrie
from hypothesis import given
from hypothesis import strategies as st


class _StubEditor(Editor):
    """Editor that only carries a prefix."""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def edit(self, line: str) -> tuple[str, Action]:
        raise AssertionError("trie lookups must not run editors")

    def __repr__(self) -> str:
        return f"_StubEditor({self.prefix!r})"


class _PlainEditor:
    """Duck-typed editor without a prefix attribute."""

    def edit(self, line):
        return line, Action.REPLACE


class TestPrefixTrie:
    """Test trie construction and lookup."""

    def setup_method(self) -> None:
        """Set up the trie used by most tests."""
        self.editors = [
            _StubEditor("aaa"),
            _StubEditor(""),
            _StubEditor("aab"),
            _StubEditor("baab"),
            _StubEditor("baabc"),
        ]
        self.trie = PrefixTrie.build(self.editors)

    @pytest.mark.parametrize(
        "line,indexes",
        [
            ("aaacdsdffe", [0, 1]),
            ("aa", [1]),
            ("baabc", [1, 3, 4]),
            ("baab", [1, 3]),
            ("aab", [1, 2]),
            ("", [1]),
            ("zzz", [1]),
        ],
    )
    def test_lookup(self, line: str, indexes: list[int]) -> None:
        """Test that lookups return root items plus every prefix on the path."""
        assert self.trie.get(line) == [self.editors[i] for i in indexes]

    def test_length(self) -> None:
        """Test the number of indexed editors."""
        assert len(self.trie) == 5

    def test_registration_order_beats_depth(self) -> None:
        """Test that deeper editors registered first come out first."""
        deep = _StubEditor("abc")
        shallow = _StubEditor("a")
        root = _StubEditor("")
        trie = PrefixTrie.build([deep, root, shallow])

        assert trie.get("abcd") == [deep, root, shallow]

    def test_duplicate_prefixes(self) -> None:
        """Test that editors sharing a prefix keep their order."""
        first = _StubEditor("x")
        second = _StubEditor("x")
        trie = PrefixTrie.build([second, first])

        assert trie.get("xy") == [second, first]

    def test_editor_without_prefix_attribute(self) -> None:
        """Test that duck-typed editors land at the root."""
        plain = _PlainEditor()
        trie = PrefixTrie.build([_StubEditor("q"), plain])

        assert trie.get("anything") == [plain]

    def test_real_guards(self) -> None:
        """Test placement of guards derived from literals and patterns."""
        by_literal = PrefixGuard("DEBUG", Remove())
        by_pattern = RegexpGuard("^TRACE ", Remove())
        anywhere = RegexpGuard("secret", Remove())
        trie = PrefixTrie.build([by_literal, by_pattern, anywhere])

        assert trie.get("DEBUG x") == [by_literal, anywhere]
        assert trie.get("TRACE x") == [by_pattern, anywhere]
        assert trie.get("TRACEx") == [anywhere]

    def test_empty_trie(self) -> None:
        """Test lookups with no editors."""
        trie = PrefixTrie.build([])
        assert trie.get("abc") == []
        assert len(trie) == 0

    @given(
        prefixes=st.lists(st.text(alphabet="ab", max_size=3), max_size=8),
        line=st.text(alphabet="ab", max_size=5),
    )
    def test_property_matches_linear_scan(self, prefixes: list[str], line: str) -> None:
        """Property-based testing against a plain startswith filter."""
        editors = [_StubEditor(p) for p in prefixes]
        trie = PrefixTrie.build(editors)

        expected = [e for e in editors if line.startswith(e.prefix)]
        assert trie.get(line) == expected
