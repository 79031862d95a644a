"""
Argmatch loader: build a registry from a YAML specification document.

Document shape
    args:
      - name: foo          # required
        long: foo          # optional long alias
        short: f           # optional short alias
        take_value: true   # optional, option role
        flag: true         # optional, flag role
        position: 1        # optional, positional role

Field values are type-checked before any builder call: name/short/long are
strings, take_value/flag booleans, position an integer (a null optional field
counts as absent). YAML 1.1 reads bare on/off/yes/no as booleans, so such
aliases must be quoted. Wrong types, undecodable files and invalid YAML all
raise MalformedSourceError.

Records are applied in document order; within a record the builder calls run
as short → long → take_value → flag → position, so specification and
registration faults surface exactly as they would from hand-written code.
"""
import yaml

from .faults import *
from .matcher import run
from .registry import ArgRegistry
from .specs import ArgSpec

_TYPES = {
    "name": str,
    "short": str,
    "long": str,
    "take_value": bool,
    "flag": bool,
    "position": int,
}
_FIELDS = frozenset(_TYPES)
_NOUNS = {str: "a string", bool: "true or false", int: "an integer"}


def _malformed(message, hint, **context):
    return MalformedSourceError(
        message,
        code=FaultCode.MALFORMED_SOURCE,
        title="malformed specification",
        hint=hint,
        **context,
    )


def build(document, /):
    """
    Build a registry from an already decoded document (a mapping with 'args').

    Raises
    - MalformedSourceError: when the document shape or a field type is wrong.
    - SpecificationError / RegistrationError: as raised by the builder and registry.
    """
    if not isinstance(document, dict) or not isinstance(document.get("args"), list):
        raise _malformed(
            "specification must be a mapping with an 'args' list",
            "start the document with 'args:' followed by one entry per argument",
        )

    registry = ArgRegistry()

    for number, record in enumerate(document["args"], 1):
        if not isinstance(record, dict):
            raise _malformed(
                "argument #%d must be a mapping" % number,
                "write each argument as 'name: ...' with optional fields below it",
                record=number,
            )
        if unknown := set(record) - _FIELDS:
            raise _malformed(
                "argument #%d has unknown fields: %s" % (number, ", ".join(sorted(map(str, unknown)))),
                "allowed fields are: %s" % ", ".join(sorted(_FIELDS)),
                record=number,
            )
        if "name" not in record:
            raise _malformed(
                "argument #%d has no name" % number,
                "add a 'name' field",
                record=number,
            )
        for field, value in record.items():
            expected = _TYPES[field]
            if value is None and field != "name":
                continue
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise _malformed(
                    "argument #%d field %r must be %s, not %r" % (number, field, _NOUNS[expected], value),
                    "quote names and aliases that yaml reads as other values (for example: long: 'on')",
                    record=number,
                    field=field,
                )

        spec = ArgSpec(record["name"])
        if record.get("short") is not None:
            spec.short(record["short"])
        if record.get("long") is not None:
            spec.long(record["long"])
        if record.get("take_value"):
            spec.take_value()
        if record.get("flag"):
            spec.flag()
        if record.get("position") is not None:
            spec.position(record["position"])

        registry.register(spec)

    return registry


def loads(text, /):
    """
    Build a registry from YAML text.
    """
    if not isinstance(text, str):
        raise TypeError("loads() argument must be a string")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as error:
        raise _malformed(
            "specification is not valid yaml: %s" % error,
            "check indentation and quoting of the document",
        ) from error
    return build(document)


def load(path, /):
    """
    Build a registry from a YAML file (read as UTF-8).
    """
    try:
        with open(path, "r", encoding="utf-8") as file:
            text = file.read()
    except UnicodeDecodeError as error:
        raise _malformed(
            "specification %r is not valid utf-8: %s" % (str(path), error.reason),
            "save the document with utf-8 encoding",
            path=str(path),
        ) from error
    return loads(text)


def match(text, prompt, /, **options):
    """
    Load a YAML specification and match prompt against it in one call.
    """
    return run(loads(text), prompt, **options)


__all__ = (
    "build",
    "loads",
    "load",
    "match",
)
