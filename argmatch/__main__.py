"""
Process entry point: python -m argmatch SPEC.yml [ARGS...]

Loads the YAML specification, matches ARGS against it (unknown tokens are
reported as warnings) and pretty-prints the result.
"""
import sys

from rich.pretty import pprint

from .faults import ArgumentFault, console, trigger
from .loader import load
from .matcher import Matcher


def main(argv=None):
    argv = sys.argv[1:] if argv is None else list(argv)

    if not argv:
        console.print("usage: python -m argmatch SPEC.yml [ARGS...]")
        return 2

    path, *prompt = argv

    try:
        registry = load(path)
    except OSError as error:
        console.print("argmatch: cannot read %r: %s" % (path, error.strerror or error))
        return 1
    except ArgumentFault as fault:
        trigger(fault, shell=True)

    result = Matcher(registry, unknown="warn", shell=True).run(prompt)
    pprint(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
