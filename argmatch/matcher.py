"""
Argmatch matcher: walk a raw command string and classify every token.

What this module provides
- tokenize(prompt): pure whitespace splitting (no quoting, no escaping).
- Matcher: binds a registry and the runtime options (unknown-token policy,
  shell/fancy/colorful rendering) and produces a ParseResult per run().
- run(registry, prompt, **options): one-shot convenience around Matcher.

Classification (one token of lookahead; the positional counter starts at 1)
1. a token not starting with '-' is positional: it is recorded under the spec
   declared at the current counter value (dropped when there is none), then the
   counter advances. The counter only counts non-dashed tokens.
2. a token starting with '-' is
   a. a flag when it is the last token;
   b. a flag when, stripped of its dashes, it equals a registered flag name;
   c. a flag when the next token starts with '-' too (that one cannot be a value);
   d. otherwise an option, and the next token is its value (both are consumed).

Flag tokens
- one character after the dashes → short flag alias.
- '--name' → long flag alias, exact match only.
- '-abc' → bundle: each character is a short flag alias of its own.

Option tokens
- one character after the dashes → short option alias, else long option alias.

Unknown tokens
- matching never stops on input it does not recognize. What happens to the
  dropped tokens is the 'unknown' policy:
  • "ignore" (default): dropped silently.
  • "warn": an UnknownTokenWarning per dropped token.
  • "error": an UnknownSwitchError/UnexpectedPositionalError per dropped token,
    raised together as a MatchExit once the whole input has been walked.

A spec that is both an option and a flag is reached through one path per token:
whichever rule above classifies the token decides.
"""
import functools
import sys
from collections import deque
from collections.abc import Iterable

from .faults import *
from .registry import ArgRegistry
from .results import ParseResult
from .utils import *

_POLICIES = ("ignore", "warn", "error")


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def tokenize(prompt=Unset, /):
    """
    Split a prompt into tokens on runs of whitespace.

    Parameters
    - prompt:
      • Unset: the process arguments (sys.argv[1:]).
      • str: the raw command string.
      • Iterable[str]: each item is split in turn and the pieces concatenated.

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str].
    """
    if prompt is Unset:
        prompt = sys.argv[1:]
    if isinstance(prompt, str):
        return prompt.split()
    if not isinstance(prompt, Iterable):
        raise TypeError("tokenize() argument must be a string or an iterable of strings")

    tokens = []
    for item in prompt:
        if not isinstance(item, str):
            raise TypeError("tokenize() argument must be a string or an iterable of strings")
        tokens.extend(item.split())
    return tokens


class Matcher:
    """
    Token classifier bound to one registry.

    Options
    - unknown: "ignore" | "warn" | "error" — what to do with dropped tokens.
    - shell: render faults on stderr (and exit on errors) instead of raising/warning.
    - fancy: render faults inside panels.
    - colorful: render faults with colors.

    The registry is frozen when the matcher is created. A matcher keeps per-run
    state while run() executes; use one matcher per thread.
    """

    def __init__(self, registry, /, *, unknown="ignore", shell=False, fancy=False, colorful=True):
        if not isinstance(registry, ArgRegistry):
            raise TypeError("Matcher() argument must be an ArgRegistry")
        if not isinstance(unknown, str):
            raise TypeError("Matcher() 'unknown' must be a string")
        if unknown not in _POLICIES:
            raise ValueError("Matcher() 'unknown' must be one of 'ignore', 'warn', or 'error'")

        self._registry = registry.freeze()
        self._unknown = unknown
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

        self._result = None
        self._faults = []
        self._index = 0

    @property
    def registry(self):
        return self._registry

    @property
    def unknown(self):
        return self._unknown

    def run(self, prompt=Unset, /):
        """
        Match a prompt (see tokenize) and return the frozen ParseResult.

        Raises
        - MatchExit: under unknown="error" when tokens were dropped (non-shell mode).
        """
        tokens = deque(tokenize(prompt))

        self._result = ParseResult()
        self._faults = []
        self._index = 0
        counter = 1

        try:
            while tokens:
                token = tokens.popleft()
                self._index += 1

                if not token.startswith("-"):
                    self._match_positional(token, counter)
                    counter += 1
                elif self._is_flag(token, tokens):
                    self._match_flag(token)
                else:
                    self._match_option(token, tokens.popleft())
                    self._index += 1

            self._finalize()
            return self._result._freeze()
        finally:
            self._result = None

    def _is_flag(self, token, tokens):
        # rules 2a-2c; anything else is an option with a value
        if not tokens:
            return True
        if token.lstrip("-") in self._registry.flags:
            return True
        return tokens[0].startswith("-")

    def _match_positional(self, token, counter):
        spec = self._registry.position_for(counter)
        if spec is None:
            return self._drop(UnexpectedPositionalError(
                "unexpected positional %r at %s position" % (token, _ordinal(self._index)),
                title="unexpected positional",
                code=FaultCode.UNEXPECTED_POSITIONAL,
                hint="no argument is declared at position %d" % counter,
                token=token,
                index=self._index,
            ))
        self._result._set_positional(spec.name, token)

    def _match_flag(self, token):
        stripped = token.lstrip("-")

        if len(stripped) == 1:
            aliases = [stripped]
            lookup = self._registry.flag_for_short
        elif token.startswith("--"):
            aliases = [stripped]
            lookup = self._registry.flag_for_long
        else:
            aliases = list(stripped)
            lookup = self._registry.flag_for_short

        for alias in aliases:
            spec = lookup(alias)
            if spec is None:
                self._drop(UnknownSwitchError(
                    "unknown flag %r in %r at %s position" % (alias, token, _ordinal(self._index)),
                    title="unknown flag",
                    code=FaultCode.UNKNOWN_SWITCH,
                    hint="check the declared short and long flag aliases",
                    token=token,
                    alias=alias,
                    index=self._index,
                ))
                continue
            self._result._set_flag(spec.name)

    def _match_option(self, token, value):
        stripped = token.lstrip("-")

        if len(stripped) == 1:
            spec = self._registry.option_for_short(stripped)
        else:
            spec = self._registry.option_for_long(stripped)

        if spec is None:
            return self._drop(UnknownSwitchError(
                "unknown option %r (with value %r) at %s position" % (token, value, _ordinal(self._index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_SWITCH,
                hint="check the declared short and long option aliases",
                token=token,
                value=value,
                index=self._index,
            ))
        self._result._set_option(spec.name, value)

    def _drop(self, fault):
        match self._unknown:
            case "ignore":
                return
            case "warn":
                self._faults.append(UnknownTokenWarning(
                    fault.message,
                    **{**fault.options, "code": FaultCode.UNKNOWN_TOKEN, "title": "unknown token"}
                ))
            case "error":
                self._faults.append(fault)

    def _finalize(self):
        """
        surface the collected faults: warnings first, then every error at once.
        """
        options = {"shell": self._shell, "fancy": self._fancy, "colorful": self._colorful}
        exceptions = []

        for fault in self._faults:
            if isinstance(fault, ArgumentWarning):
                trigger(fault, **options)
            elif isinstance(fault, ArgumentFault):
                exceptions.append(fault)
            else:
                raise RuntimeError("unexpected fault")

        if not exceptions:
            return

        trigger(MatchExit(exceptions), **options)

    def __rich_repr__(self):
        yield "registry", self._registry
        yield "unknown", self._unknown
        yield "shell", self._shell

    def __repr__(self):
        return "matcher(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def run(registry, prompt=Unset, /, **options):
    """
    Match prompt against registry in one call: Matcher(registry, **options).run(prompt).
    """
    return Matcher(registry, **options).run(prompt)


__all__ = (
    "Matcher",
    "tokenize",
    "run",
)
