"""Learned facts about the user."""

from collections.abc import Iterator, Mapping


class LearnedFacts:
    """Category -> distinct values, grown by merge.

    Values keep insertion order and are never duplicated within a category.
    Empty categories are not kept.
    """

    def __init__(self, data: Mapping[str, list[str]] | None = None) -> None:
        self._data: dict[str, list[str]] = {}
        if data:
            self.replace(data)

    def merge(self, new: Mapping[str, list[str]]) -> bool:
        """Add new values without removing or overwriting existing ones.

        Returns:
            True if anything was added.
        """
        changed = False
        for category, values in new.items():
            existing = self._data.get(category, [])
            for value in values:
                if value not in existing:
                    existing.append(value)
                    changed = True
            if existing:
                self._data[category] = existing
        return changed

    def replace(self, data: Mapping[str, list[str]]) -> None:
        """Replace all facts, deduplicating values and dropping empty categories."""
        self._data = {}
        self.merge(data)

    def clear(self) -> None:
        self._data = {}

    def remove_category(self, category: str) -> bool:
        """Remove a whole category. Returns True if it existed."""
        return self._data.pop(category, None) is not None

    def remove_value(self, category: str, value: str) -> bool:
        """Remove one value; an emptied category is removed too."""
        values = self._data.get(category)
        if not values or value not in values:
            return False
        values.remove(value)
        if not values:
            del self._data[category]
        return True

    def get(self, category: str) -> list[str]:
        return list(self._data.get(category, []))

    def to_dict(self) -> dict[str, list[str]]:
        """Return a copy safe to hand to callers and serializers."""
        return {category: list(values) for category, values in self._data.items()}

    def __contains__(self, category: object) -> bool:
        return category in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LearnedFacts):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"LearnedFacts({self._data!r})"
