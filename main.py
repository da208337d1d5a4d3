#!/usr/bin/env python3
"""
miniforth - small Forth-derived interpreter

Usage:
1. Interactive REPL:       python main.py repl
2. Run a Forth file:       python main.py program.fth
3. Evaluate inline code:   python main.py -e "0 5 do i . loop"
"""

import argparse
import sys

from miniforth import ForthSession
from miniforth.core import RECURSION_LIMIT


def run_file(session, path):
    """Evaluate a file line by line against one session

    Returns the number of lines that halted on an error.
    """
    failures = 0
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            if line.strip():
                session.execute(line)
                if session.last_error is not None:
                    failures += 1
    return failures


def build_parser():
    parser = argparse.ArgumentParser(
        description="A small Forth-derived stack language interpreter.",
        epilog=__doc__,
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument("target", nargs="?",
                        help="'repl' or the path of a .fth/.forth file")
    parser.add_argument("-e", "--eval", dest="program",
                        help="Evaluate a program given on the command line.")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Do not echo the stack after each evaluation.")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    if args.program is not None:
        session = ForthSession(echo_stack=not args.quiet)
        session.execute(args.program)
        return 1 if session.last_error else 0

    if args.target == 'repl':
        ForthSession(echo_stack=not args.quiet).repl()
        return 0

    if args.target and args.target.endswith(('.fth', '.forth')):
        session = ForthSession(echo_stack=False)
        try:
            failures = run_file(session, args.target)
        except OSError as e:
            print(f"Error: could not read '{args.target}': {e}", file=sys.stderr)
            return 1
        print()
        return 1 if failures else 0

    if args.target:
        print(f"Unrecognised argument: {args.target}")
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
