import typing as t

from sqlbind import core, logging
from sqlbind.drivers import DriverStrategy
from sqlbind.properties import PropertyBag

__all__ = (
    "Registry",
    "Binder",
)


logger = logging.get_logger(__name__)

# properties whose values are never logged or dumped
SECRET_PROPERTIES = frozenset({"JDBC.password"})
REDACTED = "********"


class Registry(t.Protocol):
    """
    The binding registry a datasource configuration is applied to.
    """

    def bind_strategy(self, strategy: DriverStrategy) -> None: ...

    def bind_named_property(self, name: str, value: str) -> None: ...

    def bind_named_property_bag(self, name: str, bag: PropertyBag) -> None: ...


class Binder:
    """
    An in-memory `Registry`.

    By default a repeated binding replaces the previous one. When `strict` is
    set a repeated binding raises `core.DuplicateBindingError` instead.
    """

    strict: bool

    _strategy: DriverStrategy | None
    _properties: t.Dict[str, str]
    _bags: t.Dict[str, PropertyBag]

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

        self._strategy = None
        self._properties = {}
        self._bags = {}

    def _rebind(self, kind: str, name: str) -> None:
        if self.strict:
            raise core.DuplicateBindingError(f"{kind} already bound: {name}")

        logger.warning("registry.rebind", kind=kind, name=name)

    def bind_strategy(self, strategy: DriverStrategy) -> None:
        if self._strategy is not None:
            self._rebind("strategy", strategy.name)

        self._strategy = strategy

    def bind_named_property(self, name: str, value: str) -> None:
        if name in self._properties:
            self._rebind("property", name)

        self._properties[name] = value

    def bind_named_property_bag(self, name: str, bag: PropertyBag) -> None:
        if name in self._bags:
            self._rebind("property bag", name)

        self._bags[name] = bag

    def strategy(self) -> DriverStrategy:
        if self._strategy is None:
            raise core.BindingNotFound("strategy")

        return self._strategy

    def named(self, name: str) -> str:
        try:
            return self._properties[name]
        except KeyError:
            raise core.BindingNotFound(name) from None

    def named_bag(self, name: str) -> PropertyBag:
        try:
            return self._bags[name]
        except KeyError:
            raise core.BindingNotFound(name) from None

    def properties(self) -> PropertyBag:
        """
        Returns all the named properties bound so far.
        """
        return PropertyBag(self._properties)

    def as_dict(self) -> t.Dict[str, t.Any]:
        """
        Returns a serialisable snapshot of the bindings with secrets redacted.
        """
        return {
            "strategy": None if self._strategy is None else self._strategy.name,
            "properties": {
                name: REDACTED if name in SECRET_PROPERTIES else value
                for name, value in self._properties.items()
            },
            "bags": {name: bag.to_dict() for name, bag in self._bags.items()},
        }
