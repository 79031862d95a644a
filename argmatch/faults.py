"""
Argmatch faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the package
  can surface. Codes are grouped by domain to keep messages consistent and make
  logs/searches predictable.
- ArgumentFault / ArgumentWarning: base types that carry message + options and
  know how to render themselves (plain or fancy, colorful or not) through rich.
- MatchExit: groups several faults collected during one matching run.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).

Integration
- Specs and the registry raise their faults directly: they signal programming
  mistakes by whoever declares the arguments.
- The matcher collects unknown tokens (when asked to) and surfaces them via trigger().
- In non-shell mode, exceptions are raised and warnings emitted; in shell mode, they
  are rendered on stderr via rich.

Host hooks (looked up on __main__)
- __codes__: {FaultCode: label} used by FaultCode.normalize().
- __styles__: {style-name: rich style} overriding the default palette.
- __prog__: program name shown in the fault header.
"""
import copy
import inspect
import re
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)

# Every fault carries these options; trigger()/__replace__ override them.
_defaults = {
    "code": None,
    "title": "",
    "hint": "",
    "shell": False,
    "fancy": False,
    "colorful": True,
    "deferred": False,
}


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - specification (211xx): malformed names/aliases and out-of-order builder calls.
    - registration (221xx): identifiers reused across specs of one registry.
    - matching (231xx): tokens nothing was declared for (strict policy only).
    - source (241xx): specification documents that cannot be loaded.
    - warnings (251xx): soft problems, never fatal.

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- specification errors (21xxx) ---
    INVALID_NAME        = 21101
    INVALID_SHORT       = 21102
    INVALID_LONG        = 21103
    INVALID_POSITION    = 21104
    MISSING_ALIAS       = 21111
    ALIASED_POSITION    = 21112

    # --- registration errors (22xxx) ---
    DUPLICATE_NAME      = 22101
    DUPLICATE_SHORT     = 22102
    DUPLICATE_LONG      = 22103
    DUPLICATE_POSITION  = 22104
    DUPLICATE_FLAG      = 22105

    # --- matching errors (23xxx) ---
    UNKNOWN_SWITCH        = 23101
    UNEXPECTED_POSITIONAL = 23102

    # --- source errors (24xxx) ---
    MALFORMED_SOURCE    = 24101

    # --- warnings (25xxx) ---
    UNKNOWN_TOKEN       = 25101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_error_palette = {
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "title": "bold #FF4DA6",  # pinky title
    "message": "#C8C8D0",  # soft light gray message
    "hint-arrow": "#9CE19C dim",  # green arrow
    "hint": "italic #9CE19C",  # green hint text
}

_warning_palette = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #FFB400",  # amber code for warnings
    "title": "bold #FFC2E0",
    "message": "#D6D6DE",
    "hint-arrow": "#B8EFAF dim",
    "hint": "italic #B8EFAF",
}


def _styler(options, palette):
    """
    build the (styler, text) pair used by every renderer.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if options["colorful"] else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not options["colorful"]:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def _prog():
    return getattr(__import__("__main__"), "__prog__", "argmatch")


def _render(fault, palette):
    options = fault.options
    styler, text = _styler(options, palette)

    title = options["title"] or re.sub(r"(?<!^)(?=[A-Z])", " ", type(fault).__name__).lower()
    code = options["code"].normalize() if options["code"] is not None else "-"

    header = Text.assemble(
        "[ ",
        text(_prog(), styler("prog-name")),
        " — ",
        text(code, styler("code")),
        " | ",
        text(title.title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))

    if not options["hint"]:
        body = (message,)
    else:
        body = (message, Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler("hint"))))

    if options["fancy"]:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*body), title=header, title_align="left", width=width)

    return Group(header, *body)


class ArgumentFault(Exception):
    """
    base class of every argmatch error.

    message is a short, lowercased sentence; options carry the fault code, a
    title, a hint and any context the raiser wants to attach (e.g. name, token).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, (str, UnsetType))
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(_defaults | options)

    @property
    def code(self):
        return self.options["code"]

    def __rich__(self):
        return _render(self, _error_palette)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        if self.options["deferred"]:
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class SpecificationError(ArgumentFault, ValueError): ...
class InvalidNameError(SpecificationError): ...
class InvalidShortError(SpecificationError): ...
class InvalidLongError(SpecificationError): ...
class InvalidPositionError(SpecificationError): ...
class MissingAliasError(SpecificationError): ...
class AliasedPositionError(SpecificationError): ...

class RegistrationError(ArgumentFault, ValueError): ...
class DuplicateNameError(RegistrationError): ...
class DuplicateShortError(RegistrationError): ...
class DuplicateLongError(RegistrationError): ...
class DuplicatePositionError(RegistrationError): ...
class DuplicateFlagError(RegistrationError): ...

class MatchError(ArgumentFault): ...
class UnknownSwitchError(MatchError): ...
class UnexpectedPositionalError(MatchError): ...

class SourceError(ArgumentFault, ValueError): ...
class MalformedSourceError(SourceError): ...


class ArgumentWarning(Warning):
    """
    base class of every argmatch warning (soft, never fatal).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, (str, UnsetType))
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(_defaults | options)

    @property
    def code(self):
        return self.options["code"]

    def __rich__(self):
        return _render(self, _warning_palette)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownTokenWarning(ArgumentWarning): ...


class MatchExit(ExceptionGroup[ArgumentFault]):
    """
    every fault collected during one matching run, surfaced at once.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad match", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad match", tuple(exceptions))
        self.options = MappingProxyType(_defaults | options)

    def __rich__(self):
        styler, text = _styler(self.options, _error_palette)

        header = Text.assemble(
            "[ ",
            text(_prog(), styler("prog-name")),
            " — ",
            text(self.message.title(), styler("title")),
            " ]"
        )
        renders = [copy.replace(exception, ratio=2/3) for exception in self.exceptions]

        if self.options["fancy"]:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise errors are
      raised and warnings emitted through the warnings module.

    typical options
    - shell, fancy, colorful, deferred, title, code, hint, and any other context
      the reporter may want to show (e.g., token/index/name).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentFault",
    "SpecificationError",
    "InvalidNameError",
    "InvalidShortError",
    "InvalidLongError",
    "InvalidPositionError",
    "MissingAliasError",
    "AliasedPositionError",
    "RegistrationError",
    "DuplicateNameError",
    "DuplicateShortError",
    "DuplicateLongError",
    "DuplicatePositionError",
    "DuplicateFlagError",
    "MatchError",
    "UnknownSwitchError",
    "UnexpectedPositionalError",
    "SourceError",
    "MalformedSourceError",
    "ArgumentWarning",
    "UnknownTokenWarning",
    "MatchExit",
    "trigger",
)
