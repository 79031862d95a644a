"""
Argmatch utilities shared by specs, registry, matcher, results and faults.

- Unset: "no value given", kept apart from None (falsey, prints as "Unset").
- coalesce(value, default): swaps Unset for default and leaves everything else alone.
- rename(callable, name) / @rename(name): gives generated callables a readable name.
- mirror("attr"): read-only property over self._attr, handing out frozen views
  of containers (tuple, mappingproxy, frozenset).

    >>> class Holder:
    ...     items = mirror("items")
    ...     def __init__(self):
    ...         self._items = {"a": 1}
    >>> Holder().items
    mappingproxy({'a': 1})
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel; every call returns the same instance.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, else object (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) sets __name__ and __qualname__ and returns callable;
    rename(name) returns a decorator doing the same.
    """
    match parameters:
        case (callable, name):
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__name__ = callable.__qualname__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case (name,):
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def decorator(callable):
                return rename(callable, name)

            return decorator
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    # non-string sequences, mappings and sets become read-only; the rest passes through
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property returning a frozen view of self._<name>.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
