"""Case-insensitive request headers.

Built once from the raw ASGI byte pairs; names are lower-cased and
values decoded as latin-1 up front so lookups are plain string compares.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only, case-insensitive view over request headers.

    ``headers["Host"]`` returns the first value; ``get_list`` returns all
    of them in arrival order.
    """

    __slots__ = ("_pairs",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        self._pairs: tuple[tuple[str, str], ...] = tuple(
            (name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw
        )

    @classmethod
    def from_dict(cls, values: Mapping[str, str]) -> "Headers":
        """Build headers from a ``str -> str`` mapping."""
        return cls(
            (name.encode("latin-1"), value.encode("latin-1")) for name, value in values.items()
        )

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = key.lower()
        return any(name == wanted for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"Headers({dict(self)!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value sent for *key*."""
        wanted = key.lower()
        return [value for name, value in self._pairs if name == wanted]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Header pairs re-encoded for ASGI."""
        return tuple((name.encode("latin-1"), value.encode("latin-1")) for name, value in self._pairs)
