import typing as t

__all__ = ("PropertyBag",)


class PropertyBag(t.Mapping[str, str]):
    """
    A read-only, ordered mapping of property names to string values.

    Values are converted with `str` on construction, booleans are written as
    `"true"` / `"false"`. Once built the bag never changes, so it can be
    shared between threads.
    """

    __slots__ = ("_items",)

    _items: t.Dict[str, str]

    def __init__(
        self,
        items: t.Mapping[str, t.Any] | t.Iterable[t.Tuple[str, t.Any]] = (),
    ) -> None:
        pairs = items.items() if isinstance(items, t.Mapping) else items

        self._items = {key: to_property(value) for key, value in pairs}

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> t.Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __setitem__(self, key: str, value: t.Any) -> t.NoReturn:
        raise TypeError(f"{type(self).__name__} is read-only")

    def __delitem__(self, key: str) -> t.NoReturn:
        raise TypeError(f"{type(self).__name__} is read-only")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertyBag):
            return self._items == other._items

        if isinstance(other, t.Mapping):
            return self._items == dict(other)

        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def to_dict(self) -> t.Dict[str, str]:
        """
        Returns a mutable copy of the properties.
        """
        return dict(self._items)


def to_property(value: t.Any) -> str:
    match value:
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case _:
            return str(value)
