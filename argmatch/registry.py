"""
Argmatch registry: the set of argument specs a matcher works against.

Responsibilities
- Enforce global uniqueness across specs: names, short aliases, long aliases,
  position indices and flag names can each be used only once.
- Classify each accepted spec into zero or more lookup tables:
  • options   (name → spec)   when spec.takes_value
  • positions (index → spec)  when spec.index is set
  • flags     (name → spec)   when spec.is_flag
- Offer alias lookups used by the matcher (short/long, per role).

Lifecycle
- Build-up: register() is append-only; there is no de-registration.
- Frozen: freeze() (called by the matcher) makes the registry read-only; a frozen
  registry can be shared freely.

Registration is atomic: every uniqueness check runs before any table is touched,
so a rejected spec leaves no trace.
"""
from .faults import *
from .specs import ArgSpec
from .utils import *


class ArgRegistry:
    """
    Accumulates ArgSpecs and classifies them for matching.

        >>> registry = ArgRegistry()
        >>> registry.register(ArgSpec("foo").long("foo").take_value())
        >>> registry.register(ArgSpec("param").position(1))
    """

    options = mirror("options")
    positions = mirror("positions")
    flags = mirror("flags")

    def __init__(self, *specs):
        self._specs = {}
        self._shorts = {}
        self._longs = {}
        self._indices = set()

        self._options = {}
        self._positions = {}
        self._flags = {}

        self._frozen = False

        for spec in specs:
            self.register(spec)

    def register(self, spec, /):
        """
        validate a spec against the registered ones, then classify it.

        raises
        - TypeError when spec is not an ArgSpec or the registry is frozen.
        - DuplicateFlagError / DuplicateNameError / DuplicateShortError /
          DuplicateLongError / DuplicatePositionError on the first conflict found.

        a flag re-registered under a taken flag name is reported as a duplicate
        flag; any other reuse of a name is a duplicate name.
        """
        if not isinstance(spec, ArgSpec):
            raise TypeError("register() argument must be an ArgSpec")
        if self._frozen:
            raise TypeError("register() cannot be called on a frozen registry")

        name = spec.name

        if spec.is_flag and name in self._flags:
            raise DuplicateFlagError(
                "flag %r is already registered" % name,
                code=FaultCode.DUPLICATE_FLAG,
                title="duplicate flag",
                hint="register each flag once",
                name=name,
            )
        if name in self._specs:
            raise DuplicateNameError(
                "argument name %r is already used" % name,
                code=FaultCode.DUPLICATE_NAME,
                title="duplicate argument name",
                hint="give every argument its own name",
                name=name,
            )
        if spec.short_alias is not None and spec.short_alias in self._shorts:
            raise DuplicateShortError(
                "short alias %r of %r is already used by %r" % (spec.short_alias, name, self._shorts[spec.short_alias].name),
                code=FaultCode.DUPLICATE_SHORT,
                title="duplicate short alias",
                hint="pick another letter for -%s" % spec.short_alias,
                name=name,
                alias=spec.short_alias,
            )
        if spec.long_alias is not None and spec.long_alias in self._longs:
            raise DuplicateLongError(
                "long alias %r of %r is already used by %r" % (spec.long_alias, name, self._longs[spec.long_alias].name),
                code=FaultCode.DUPLICATE_LONG,
                title="duplicate long alias",
                hint="pick another spelling for --%s" % spec.long_alias,
                name=name,
                alias=spec.long_alias,
            )
        if spec.index is not None and spec.index in self._indices:
            raise DuplicatePositionError(
                "position %d of %r is already used by %r" % (spec.index, name, self._positions[spec.index].name),
                code=FaultCode.DUPLICATE_POSITION,
                title="duplicate position",
                hint="give every positional argument its own index",
                name=name,
                index=spec.index,
            )

        # From here on nothing can fail.
        self._specs[name] = spec.seal()
        if spec.short_alias is not None:
            self._shorts[spec.short_alias] = spec
        if spec.long_alias is not None:
            self._longs[spec.long_alias] = spec

        if spec.takes_value:
            self._options[name] = spec
        if spec.index is not None:
            self._indices.add(spec.index)
            self._positions[spec.index] = spec
        if spec.is_flag:
            self._flags[name] = spec

        return self

    def freeze(self):
        """
        make the registry read-only; returns self.
        """
        self._frozen = True
        return self

    @property
    def frozen(self):
        return self._frozen

    def option_for_short(self, alias, /):
        spec = self._shorts.get(alias)
        return spec if spec is not None and spec.takes_value else None

    def option_for_long(self, alias, /):
        spec = self._longs.get(alias)
        return spec if spec is not None and spec.takes_value else None

    def flag_for_short(self, alias, /):
        spec = self._shorts.get(alias)
        return spec if spec is not None and spec.is_flag else None

    def flag_for_long(self, alias, /):
        spec = self._longs.get(alias)
        return spec if spec is not None and spec.is_flag else None

    def position_for(self, index, /):
        return self._positions.get(index)

    def __getitem__(self, name, /):
        return self._specs[name]

    def __contains__(self, name, /):
        return name in self._specs

    def __iter__(self):
        return iter(self._specs.values())

    def __len__(self):
        return len(self._specs)

    def __rich_repr__(self):
        yield "options", sorted(self._options)
        yield "positions", {index: spec.name for index, spec in sorted(self._positions.items())}
        yield "flags", sorted(self._flags)
        yield "frozen", self._frozen

    def __repr__(self):
        return "arg-registry(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "ArgRegistry",
)
