"""Recursive descent parser (tokens -> term) and unparser (term -> tokens) for pure lambda calculus.

Grammar, where each production consumes a prefix of the token stream:

```
<term>        ::= <variable> | <abstraction> | <application>
<variable>    ::= <letter>
<abstraction> ::= "λ" <variable> "." <term>      ; λx.λy.b nests to the right (curried)
<application> ::= "(" <term> <term> ")"          ; exactly two sub-terms, parentheses required
```

The first token always decides the production, so no backtracking is needed. Unparsing is the structural inverse:
parse(unparse(term)) == term.

Both directions recurse once per level of nesting, so input nested deeper than sys.getrecursionlimit() raises
RecursionError.
"""

from blcalc.lang.error import LambdaSyntaxError
from blcalc.pure.terms import Application, Function, Variable
from blcalc.pure.tokens import Dot, Lambda, LeftParen, Letter, RightParen, tokenize, untokenize


def parse(tokens):
    """Parses a whole token sequence into a term. Raises LambdaSyntaxError on an unexpected token, on input that ends
    where a term was expected, or on trailing tokens.
    """
    tokens = list(tokens)
    text = untokenize(tokens)

    term, pos = _term(tokens, 0, text)
    if pos != len(tokens):
        raise LambdaSyntaxError("'{}' has trailing tokens after a complete λ-term", text, position=pos,
                                end=len(text))
    return term


def parse_text(text):
    """Tokenizes and parses text."""
    return parse(tokenize(text))


def _expect(tokens, pos, kind, text, what):
    if pos >= len(tokens):
        raise LambdaSyntaxError("'{}' ended where {} was expected", (text, what), position=pos)
    if not isinstance(tokens[pos], kind):
        raise LambdaSyntaxError("'{}' has unexpected '{}' where {} was expected", (text, tokens[pos].char, what),
                                position=pos)
    return tokens[pos]


def _variable(tokens, pos, text):
    letter = _expect(tokens, pos, Letter, text, "a variable")
    return Variable(letter.value), pos + 1


def _term(tokens, pos, text):
    """Returns (term, position of the first unconsumed token)."""
    if pos >= len(tokens):
        raise LambdaSyntaxError("'{}' ended where a λ-term was expected", text, position=pos)

    token = tokens[pos]
    if isinstance(token, Letter):
        return Variable(token.value), pos + 1

    elif isinstance(token, Lambda):
        parameter, pos = _variable(tokens, pos + 1, text)
        _expect(tokens, pos, Dot, text, "'.'")
        body, pos = _term(tokens, pos + 1, text)
        return Function(parameter, body), pos

    elif isinstance(token, LeftParen):
        function, pos = _term(tokens, pos + 1, text)
        argument, pos = _term(tokens, pos, text)
        _expect(tokens, pos, RightParen, text, "')'")
        return Application(function, argument), pos + 1

    raise LambdaSyntaxError("'{}' has unexpected '{}' where a λ-term was expected", (text, token.char), position=pos)


def unparse(expr):
    """Returns the token sequence of expr: the inverse of parse."""
    if isinstance(expr, Variable):
        return [Letter(expr.name)]
    elif isinstance(expr, Function) and expr.parameter is not None:
        return [Lambda()] + unparse(expr.parameter) + [Dot()] + unparse(expr.body)
    elif isinstance(expr, Application):
        return [LeftParen()] + unparse(expr.function) + unparse(expr.argument) + [RightParen()]
    raise TypeError(f"not a named λ-term: {expr!r} (use bruijn.render_bruijn for index terms)")


def unparse_text(expr):
    """Canonical text of expr, e.g. λx.λy.(xy)."""
    return untokenize(unparse(expr))
