"""
Helix Tags - Selection.

The set of tag names a user has picked: the contact filter button's
selection, or the tag manager's pending deletes. Held by the caller, never
persisted.
"""

from typing import Iterable


class TagSelection:
    """A set of selected tag names with toggle semantics."""

    EMPTY_LABEL = "Filter by tag"

    def __init__(self, names: Iterable[str] = ()):
        self._names: set[str] = set(names)

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self):
        return iter(sorted(self._names))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagSelection):
            return self._names == other._names
        if isinstance(other, (set, frozenset)):
            return self._names == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"TagSelection({sorted(self._names)!r})"

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._names)

    @property
    def is_empty(self) -> bool:
        return not self._names

    @property
    def label(self) -> str:
        """Button label: 'Filter by tag' when nothing is selected, else '<n> tags'."""
        if not self._names:
            return self.EMPTY_LABEL
        return f"{len(self._names)} tags"

    def toggle(self, name: str) -> bool:
        """Flip membership of ``name``. Returns True if it is now selected."""
        if name in self._names:
            self._names.remove(name)
            return False
        self._names.add(name)
        return True

    def select(self, name: str) -> None:
        self._names.add(name)

    def deselect(self, name: str) -> None:
        self._names.discard(name)

    def clear(self) -> None:
        self._names.clear()

    def available(self, all_names: Iterable[str]) -> list[str]:
        """Names not yet selected, in the order given."""
        return [name for name in all_names if name not in self._names]
