"""Case-insensitive HTTP headers.

``Headers`` is the immutable request-side view. ``MutableHeaders`` is the
response-side multi-map handlers write to: insertion ordered,
case-insensitive, and append-capable for repeatable headers.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header (e.g. multiple ``Cookie``).
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Iterable[tuple[str, str]] = ()) -> None:
        object.__setattr__(self, "_raw", tuple(raw))

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def has(self, key: str) -> bool:
        """Whether *key* is present (case-insensitive)."""
        return key in self

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._raw if name.lower() == key_lower]

    @property
    def raw(self) -> tuple[tuple[str, str], ...]:
        """The header pairs as received."""
        return self._raw


class MutableHeaders:
    """Response headers written by handlers.

    ``set`` replaces every existing value for a name in place (keeping the
    position of the first one), ``append`` adds another entry, and
    ``delete`` drops all entries for a name. Names keep the case of the
    first write; lookups are case-insensitive.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._items: list[tuple[str, str]] = list(items)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({self._items!r})"

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value for *key*, or *default* if missing."""
        key_lower = key.lower()
        for name, value in self._items:
            if name.lower() == key_lower:
                return value
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._items if name.lower() == key_lower]

    def has(self, key: str) -> bool:
        return key in self

    def set(self, key: str, value: str) -> None:
        """Set *key* to a single value, replacing any existing entries."""
        key_lower = key.lower()
        replaced = False
        items: list[tuple[str, str]] = []
        for name, existing in self._items:
            if name.lower() != key_lower:
                items.append((name, existing))
            elif not replaced:
                items.append((name, value))
                replaced = True
        if not replaced:
            items.append((key, value))
        self._items = items

    def append(self, key: str, value: str) -> None:
        """Add another value for *key* after the existing ones."""
        self._items.append((key, value))

    def delete(self, key: str) -> None:
        """Remove every entry for *key*."""
        key_lower = key.lower()
        self._items = [(n, v) for n, v in self._items if n.lower() != key_lower]

    def items(self) -> list[tuple[str, str]]:
        """All entries as ``(name, value)`` pairs, in insertion order."""
        return list(self._items)
