r"""
Argmatch argument specifications.

Overview
- ArgSpec: the declaration of one accepted argument, built step by step:
    >>> ArgSpec("output").short("o").long("output").take_value()
    >>> ArgSpec("verbose").short("v").flag()
    >>> ArgSpec("file").position(1)

Roles (independent; one spec may hold several)
- option: takes_value is set; the token after the alias is its value.
- flag: is_flag is set; presence alone is the signal.
- positional: index is set; matched by the order of non-dashed tokens.

Validation (each builder call checks its own precondition, immediately)
- name: non-empty, ASCII lowercase letters and digits only.
- short(c): exactly one ASCII lowercase letter.
- long(s): two or more ASCII lowercase letters.
- take_value() / flag(): require a short or long alias to be set first.
- position(i): forbidden once a short or long alias is set; 0 <= i <= 255.

Construction order is part of the contract: aliases come before take_value(),
flag() and position(). Violations raise SpecificationError subclasses (see
argmatch.faults); wrongly typed parameters raise TypeError.

Once an ArgRegistry accepts a spec, the spec is sealed and every further
builder call raises TypeError.
"""
import re

from .faults import *
from .utils import *

_NAME = re.compile(r"[a-z0-9]+")
_SHORT = re.compile(r"[a-z]")
_LONG = re.compile(r"[a-z]{2,}")


class ArgSpec:
    """
    Declaration of one argument (name, aliases and roles).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      mirroring the built values.
    """

    __introspectable__ = (
        "name",
        "short_alias",
        "long_alias",
        "takes_value",
        "index",
        "is_flag",
    )

    name = mirror("name")
    short_alias = mirror("short_alias")
    long_alias = mirror("long_alias")
    takes_value = mirror("takes_value")
    index = mirror("index")
    is_flag = mirror("is_flag")

    def __init__(self, name, /):
        if not isinstance(name, str):
            raise TypeError("argument spec name must be a string")
        if not _NAME.fullmatch(name):
            raise InvalidNameError(
                "bad argument name %r" % name,
                code=FaultCode.INVALID_NAME,
                title="invalid argument name",
                hint="use a non-empty name made of ascii lowercase letters and digits (for example: out2)",
                name=name,
            )
        self._name = name
        self._short_alias = None
        self._long_alias = None
        self._takes_value = False
        self._index = None
        self._is_flag = False
        self._sealed = False

    @property
    def aliased(self):
        """
        true when a short or long alias is set.
        """
        return self._short_alias is not None or self._long_alias is not None

    def short(self, alias, /):
        """
        set the single-character alias (matched as '-c').
        """
        self._guard("short")
        if not isinstance(alias, str):
            raise TypeError("short alias must be a string")
        if not _SHORT.fullmatch(alias):
            raise InvalidShortError(
                "bad short alias %r for argument %r" % (alias, self._name),
                code=FaultCode.INVALID_SHORT,
                title="invalid short alias",
                hint="use exactly one ascii lowercase letter (for example: v)",
                name=self._name,
                alias=alias,
            )
        self._short_alias = alias
        return self

    def long(self, alias, /):
        """
        set the multi-character alias (matched as '--alias').
        """
        self._guard("long")
        if not isinstance(alias, str):
            raise TypeError("long alias must be a string")
        if not _LONG.fullmatch(alias):
            raise InvalidLongError(
                "bad long alias %r for argument %r" % (alias, self._name),
                code=FaultCode.INVALID_LONG,
                title="invalid long alias",
                hint="use two or more ascii lowercase letters (for example: verbose)",
                name=self._name,
                alias=alias,
            )
        self._long_alias = alias
        return self

    def take_value(self):
        """
        make this spec an option: the token after its alias becomes its value.
        """
        self._guard("take_value")
        if not self.aliased:
            raise MissingAliasError(
                "argument %r cannot take a value without an alias" % self._name,
                code=FaultCode.MISSING_ALIAS,
                title="alias required",
                hint="call short() or long() before take_value()",
                name=self._name,
            )
        self._takes_value = True
        return self

    def position(self, index, /):
        """
        make this spec positional, matched by the order of non-dashed tokens (from 1).
        """
        self._guard("position")
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("position index must be an integer")
        if self.aliased:
            raise AliasedPositionError(
                "argument %r cannot be positional once it has an alias" % self._name,
                code=FaultCode.ALIASED_POSITION,
                title="positional with alias",
                hint="declare either a position or short/long aliases, not both",
                name=self._name,
                index=index,
            )
        if not 0 <= index <= 255:
            raise InvalidPositionError(
                "bad position %d for argument %r" % (index, self._name),
                code=FaultCode.INVALID_POSITION,
                title="invalid position",
                hint="use an index between 0 and 255 (matching starts counting at 1)",
                name=self._name,
                index=index,
            )
        self._index = index
        return self

    def flag(self):
        """
        make this spec a flag: its presence alone is recorded.
        """
        self._guard("flag")
        if not self.aliased:
            raise MissingAliasError(
                "flag %r requires an alias" % self._name,
                code=FaultCode.MISSING_ALIAS,
                title="alias required",
                hint="call short() or long() before flag()",
                name=self._name,
            )
        self._is_flag = True
        return self

    def seal(self):
        """
        freeze this spec; called by ArgRegistry.register().
        """
        self._sealed = True
        return self

    @property
    def sealed(self):
        return self._sealed

    def _guard(self, method):
        if self._sealed:
            raise TypeError(f"{method}() cannot be called on a registered argument spec ({self._name!r})")

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "arg-spec(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "ArgSpec",
)
