"""Command-line entry point: reduces λ-terms and prints them as text, De Bruijn text or BLC bits. Terms come from the
command line, from a file (one per line, ';;' starts a comment) or from stdin. Called from the blcalc executable script.
"""

import argparse
import sys

from blcalc.lang.error import ErrorHandler, GenericException
from blcalc.lang.surface import desugar
from blcalc.pure.bruijn import render_bruijn, to_binary, to_bruijn
from blcalc.pure.parser import parse_text, unparse_text
from blcalc.pure.reduction import NormalOrderReducer, interpret

MODES = ("normal", "bruijn", "binary")
ARGS_FILE = "<args>"    # pseudo filename of terms given on the command line
STDIN_FILE = "<stdin>"


def steps(value):
    """argparse type of --max-steps."""
    try:
        value = int(value)
        assert value >= 0
    except (AssertionError, ValueError):
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got '{value}'")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog="blcalc", description="Lambda calculus interpreter and BLC encoder")
    parser.add_argument("exprs", nargs="*", help="terms to run (if empty, reads --file or stdin)")
    parser.add_argument("-f", "--file", help="file with one term per line")
    parser.add_argument("-m", "--mode", choices=MODES, default="normal",
                        help="normal: print the reduced term; bruijn: De Bruijn text; binary: BLC bits")
    parser.add_argument("-s", "--surface", action="store_true",
                        help="accept surface syntax (spaces, numerals, named combinators)")
    parser.add_argument("-r", "--reduce", action="store_true", help="reduce before converting in bruijn/binary mode")
    parser.add_argument("--free", action="store_true",
                        help="index free variables as implicit outer binders instead of rejecting them")
    parser.add_argument("--max-steps", type=steps, default=NormalOrderReducer.MAX_STEPS,
                        help=f"reduction step cap (default: {NormalOrderReducer.MAX_STEPS})")
    parser.add_argument("-v", "--verbose", action="store_true", help="print every reduction step")
    return parser


def preprocess_line(line):
    """Strips comments and surrounding whitespace."""
    if ";;" in line:
        line = line[:line.index(";;")]
    return line.strip()


def read_lines(args):
    """Yields (path, line_num, line) for every non-empty term line."""
    if args.exprs:
        source = [(ARGS_FILE, args.exprs)]
    elif args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as file:
                source = [(args.file, file.read().splitlines())]
        except OSError:
            raise GenericException("'{}' could not be opened", args.file, diagnosis=False)
    else:
        source = [(STDIN_FILE, sys.stdin.read().splitlines())]

    for path, lines in source:
        for line_num, line in enumerate(lines):
            line = preprocess_line(line)
            if line:
                yield path, line_num + 1, line


def run_line(line, args, error_handler):
    """Returns the output for a single term."""
    term = desugar(line) if args.surface else parse_text(line)

    if args.mode == "normal" or args.reduce:
        term = interpret(term, args.max_steps, error_handler)

    if args.mode == "normal":
        return unparse_text(term)

    indexed = to_bruijn(term, free_variables=[] if args.free else None)
    if args.mode == "bruijn":
        return render_bruijn(indexed)
    return to_binary(indexed)


def main(argv=None):
    """Runs blcalc. Returns the exit status: 0 if every term ran, 1 otherwise."""
    with ErrorHandler() as fatal_handler:
        args = build_parser().parse_args(argv)
        lines = list(read_lines(args))

    error_handler = ErrorHandler(fatal=False, verbose=args.verbose)
    for path, line_num, line in lines:
        error_handler.register_line(path, line, line_num)
        with error_handler:
            print(run_line(line, args, error_handler))
        error_handler.remove_line(path)

    return 1 if error_handler.failed or fatal_handler.failed else 0
