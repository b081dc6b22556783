"""
Command line entry point.

Joins its arguments into one expression, parses it and prints either the
pretty (or full) form or the diagnostic.

Author: xwest
"""

import argparse
import logging
import sys
from typing import List, Optional

from .driver import parse, parse_file
from .parser import ParserConfig

NOTHING_TO_DO = "Nothing to do."


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathparser",
        description="Parse Mathematica-style expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    mathparser '1 + 2x'                 # Plus[1, Times[2, x]]
    mathparser --full-form 'f[a, {b}]'  # ["f", "a", ["List", "b"]]
    mathparser --file input.m           # Parse a file
        """
    )

    parser.add_argument('expression', nargs='*',
                        help='Expression text; multiple arguments are joined with spaces')
    parser.add_argument('--file', metavar='PATH',
                        help='Parse the contents of a file instead of the arguments')
    parser.add_argument('--full-form', action='store_true',
                        help='Print the full (Lisp) form instead of the pretty form')
    parser.add_argument('--no-implicit-multiplication', action='store_true',
                        help='Treat juxtaposed operands as a syntax error')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log debug information to stderr and show help text with failures')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if args.file and args.expression:
        parser.error("--file cannot be combined with expression arguments")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = ParserConfig(implicit_multiplication=not args.no_implicit_multiplication)

    if args.file:
        try:
            output = parse_file(args.file, config)
        except OSError as e:
            print(f"mathparser: cannot read {args.file}: {e.strerror}", file=sys.stderr)
            return 2
    elif args.expression:
        output = parse(" ".join(args.expression), config=config)
    else:
        print(NOTHING_TO_DO)
        return 0

    if not output.success:
        print(output.diagnostic.render(show_help=args.verbose))
        return 1

    print(output.to_full_form() if args.full_form else output.to_pretty_form())
    return 0


if __name__ == "__main__":
    sys.exit(main())
