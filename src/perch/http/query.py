"""Decoded query string of a request URL."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Read-only view over ``URL.search``.

    Built from the search string with or without its leading ``?``. Keys
    iterate in first-seen order and ``query[key]`` is the first value;
    ``get_list`` and ``multi_items`` expose repeated keys.
    """

    __slots__ = ("_pairs",)

    def __init__(self, search: str = "") -> None:
        self._pairs: tuple[tuple[str, str], ...] = tuple(
            parse_qsl(search.removeprefix("?"), keep_blank_values=True)
        )

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(set(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"QueryParams({self._pairs!r})"

    def get_list(self, key: str) -> list[str]:
        return [value for name, value in self._pairs if name == key]

    def multi_items(self) -> list[tuple[str, str]]:
        """Every ``(name, value)`` pair, repeats included, in order."""
        return list(self._pairs)
