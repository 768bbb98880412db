"""HTML5 named character reference table.

Built once at import from Python's complete HTML5 entity list and never
mutated afterwards, so any number of decoders may read it concurrently.
"""

from __future__ import annotations

import html.entities

from .entity_trie import Trie

# 2231 entities. Keys include the trailing semicolon (e.g. "amp;", "lang;");
# the legacy names that browsers accept without one are listed a second time
# without it (e.g. "amp", "not", "copy").
_HTML5_ENTITIES: dict[str, str] = html.entities.html5

# Legacy named character references that can be used without semicolons.
# These are primarily the ISO-8859-1 (Latin-1) entities from HTML4.
LEGACY_ENTITIES: frozenset[str] = frozenset(name for name in _HTML5_ENTITIES if not name.endswith(";"))

# Length of the longest entity name, not counting its semicolon. A longer
# alphanumeric run can only match a legacy prefix.
LONGEST_NAME: int = max(len(name.rstrip(";")) for name in _HTML5_ENTITIES)


class EntityTable:
    """Immutable name -> replacement lookup with legacy prefix matching."""

    __slots__ = ("_trie",)

    def __init__(self, entities: dict[str, str]) -> None:
        self._trie = Trie(entities)

    def lookup(self, candidate: str) -> tuple[str, str] | None:
        """Resolve the entity name at the start of ``candidate``.

        ``candidate`` is the alphanumeric run following ``&``, with ``;``
        appended when the run is immediately followed by one. An exact
        ``name;`` match wins; otherwise the longest legacy (semicolon-free)
        name that prefixes the run is used.

        Returns:
            ``(matched_name, value)``, or ``None`` if nothing matches. The
            length of ``matched_name`` is the number of input characters the
            reference consumed after the ``&``.
        """
        return self._trie.longest_prefix_item(candidate)

    def get(self, name: str) -> str | None:
        return self._trie.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._trie

    def __getitem__(self, name: str) -> str:
        return self._trie[name]

    def __len__(self) -> int:
        return len(self._trie)


ENTITY_TABLE: EntityTable = EntityTable(_HTML5_ENTITIES)
