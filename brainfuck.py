#!/usr/bin/env python3
import argparse
import os
import sys

from bf_runner import BFError, BracketMismatchError, BFRuntimeError, run_bf

__version__ = "0.1.0"

EXIT_OK = 0
EXIT_RUNTIME = 1
EXIT_SYNTAX = 2


class Colors:
    FAIL = '\033[91m'
    ENDC = '\033[0m'


class ProgramSourceError(BFError):
    pass


def load_program(source, stdin=None):
    """
    Return the program bytes for `source`.
    An existing file is read; any other argument is the code itself.
    With no argument the whole of stdin is the program.
    """
    if source is None:
        stdin = stdin if stdin is not None else sys.stdin.buffer
        return stdin.read()

    if os.path.isfile(source):
        try:
            with open(source, 'rb') as f:
                return f.read()
        except OSError as e:
            raise ProgramSourceError(f"cannot read program file {source}: {e.strerror}") from e

    return os.fsencode(source)


def report(message, color=True):
    if color and sys.stderr.isatty():
        print(f"{Colors.FAIL}{message}{Colors.ENDC}", file=sys.stderr)
    else:
        print(message, file=sys.stderr)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='bfrun',
        description="Brainfuck interpreter. Pass it the code or a file to run. "
                    "If there are no arguments, the program is read from standard input.")
    parser.add_argument('program', nargs='?', help="program code or file to run")
    parser.add_argument('--no-color', action='store_true', help="never colour diagnostics")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    color = not args.no_color

    try:
        code = load_program(args.program)
    except ProgramSourceError as e:
        report(f"error: {e}", color)
        return EXIT_RUNTIME
    except OSError as e:
        report(f"error: cannot read program from standard input: {e}", color)
        return EXIT_RUNTIME

    try:
        run_bf(code)
    except BracketMismatchError as e:
        report(f"syntax error: {e}", color)
        return EXIT_SYNTAX
    except BFRuntimeError as e:
        report(f"runtime error: {e}", color)
        return EXIT_RUNTIME
    except OSError as e:
        # Every "." already flushed; keep the flush at exit from failing again
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        report(f"runtime error: I/O failure: {e}", color)
        return EXIT_RUNTIME

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
