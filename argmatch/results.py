"""
Argmatch results: what a matching run found, queryable by argument name.
"""
from .utils import *


class ParseResult:
    """
    Option values, positional values and present flags of one matching run.

    A result is filled by the matcher and then frozen; the public views
    (options, positionals, flags) are read-only.

    Queries
    - value_of(name): option value, else positional value, else None.
    - is_present(name): name was matched as an option, a positional or a flag.
    """

    options = mirror("options")
    positionals = mirror("positionals")
    flags = mirror("flags")

    def __init__(self):
        self._options = {}
        self._positionals = {}
        self._flags = set()
        self._frozen = False

    def _set_option(self, name, value):
        assert not self._frozen, "result is frozen"
        self._options[name] = value

    def _set_positional(self, name, value):
        assert not self._frozen, "result is frozen"
        self._positionals[name] = value

    def _set_flag(self, name):
        assert not self._frozen, "result is frozen"
        self._flags.add(name)

    def _freeze(self):
        self._frozen = True
        return self

    def value_of(self, name, /):
        # options win over positionals
        if name in self._options:
            return self._options[name]
        return self._positionals.get(name)

    def is_present(self, name, /):
        return name in self._options or name in self._positionals or name in self._flags

    def __contains__(self, name, /):
        return self.is_present(name)

    def __rich_repr__(self):
        yield "options", dict(self._options)
        yield "positionals", dict(self._positionals)
        yield "flags", sorted(self._flags)

    def __repr__(self):
        return "parse-result(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "ParseResult",
)
