"""Lambda calculus interpreter and BLC encoder.

For reference:
- "Pure lambda calculus": lambda calculus as defined by Church, written in the core alphabet ( ) λ . a-z
- "Surface syntax": spaces, multi-letter combinator names and numerals on top of it (see lang/surface.py)

Basic program flow, every arrow being a pure function of its input:
    1. Lexer: text -> tokens (pure/tokens.py)
    2. Parser: tokens -> term (pure/parser.py)
    3. Interpreter: term -> term in normal form, or as far as the step cap goes (pure/reduction.py)
    4. De Bruijn converter: term -> index term -> De Bruijn text or BLC bits (pure/bruijn.py)
    5. Unparser: term -> tokens -> text (pure/parser.py)
"""

from blcalc.pure.bruijn import render_bruijn, to_binary, to_bruijn
from blcalc.pure.parser import parse_text, unparse_text
from blcalc.pure.reduction import NormalOrderReducer, interpret


def evaluate(program, max_steps=NormalOrderReducer.MAX_STEPS, error_handler=None):
    """Text of program reduced by normal-order reduction."""
    return unparse_text(interpret(parse_text(program), max_steps, error_handler))


def bruijn(program, free_variables=None):
    """De Bruijn text of program, e.g. λx.λy.(xy) -> λ.λ.(2 1)."""
    return render_bruijn(to_bruijn(parse_text(program), free_variables=free_variables))


def bruijn_binary(program, free_variables=None):
    """BLC bit string of program, e.g. λx.x -> 0010."""
    return to_binary(to_bruijn(parse_text(program), free_variables=free_variables))
