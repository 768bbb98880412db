"""Prefix trie over entity names.

The decoder hands the trie the alphanumeric run that follows an ``&`` (plus
the ``;`` when one is present) and asks for the longest entity name that is a
prefix of it. Names that require a semicolon can only terminate on that final
``;``, so a single walk answers both the exact ``name;`` lookup and the legacy
longest-prefix fallback.
"""


class TrieNode:
    """Single node in the trie tree."""

    __slots__ = ("children", "is_terminal", "value")

    def __init__(self):
        self.children = {}  # char -> TrieNode
        self.value = None
        self.is_terminal = False


class Trie:
    """Read-only trie mapping entity names to their replacement text.

    Usage:
        trie = Trie({"amp": "&", "amp;": "&", "not": "\\xac", "notin;": "\\u2209"})

        trie.longest_prefix_item("notin;")  # ("notin;", "\\u2209")
        trie.longest_prefix_item("notit;")  # ("not", "\\xac")
    """

    __slots__ = ("_size", "root")

    def __init__(self, entities):
        self.root = TrieNode()
        self._size = 0
        for name, value in entities.items():
            self._insert(name, value)

    def _insert(self, name, value):
        node = self.root
        for char in name:
            child = node.children.get(char)
            if child is None:
                child = node.children[char] = TrieNode()
            node = child
        if not node.is_terminal:
            self._size += 1
        node.is_terminal = True
        node.value = value

    def longest_prefix_item(self, text):
        """Find the longest entity name matching a prefix of ``text``.

        Returns:
            tuple: ``(entity_name, value)``, or ``None`` when no prefix matches
        """
        node = self.root
        longest_match_len = 0
        longest_value = None
        children = node.children

        for i, char in enumerate(text):
            node = children.get(char)
            if node is None:
                break
            if node.is_terminal:
                longest_match_len = i + 1
                longest_value = node.value
            children = node.children

        if longest_match_len == 0:
            return None
        return text[:longest_match_len], longest_value

    def _find(self, name):
        node = self.root
        for char in name:
            node = node.children.get(char)
            if node is None:
                return None
        return node if node.is_terminal else None

    def get(self, name, default=None):
        node = self._find(name)
        return default if node is None else node.value

    def __contains__(self, name):
        return self._find(name) is not None

    def __getitem__(self, name):
        node = self._find(name)
        if node is None:
            raise KeyError(name)
        return node.value

    def __len__(self):
        return self._size
