"""De Bruijn indices and Binary Lambda Calculus (BLC).

A bound variable is replaced by the number of binders between it and its binder (1 = innermost), and an abstraction
loses its parameter name: λx.λy.(xy) becomes λ.λ.(2 1). BLC then writes the index term as a prefix code:

```
index n         ->  "1" * n + "0"
λ.body          ->  "00" + body
(left right)    ->  "01" + left + right
```

Free variables have no binder to count to. By default they are rejected with UnboundReferenceError; a caller that wants
them encoded passes an explicit registry list, and each free name is then numbered as if the term were wrapped in
outer binders for the registry's names (first registered = innermost of those).
"""

import re

from blcalc.lang.error import EncodingError, UnboundReferenceError
from blcalc.pure.terms import Application, DeBruijnIndex, Function, Variable


def to_bruijn(expr, context=(), free_variables=None):
    """Converts a named term to its De Bruijn index term. context holds the names of the enclosing binders, innermost
    first. free_variables, if given, is the registry list described in the module docstring (it is extended in place).
    """
    context = tuple(context)

    if isinstance(expr, Variable):
        if expr.name in context:
            return DeBruijnIndex(context.index(expr.name) + 1)
        if free_variables is None:
            raise UnboundReferenceError("'{}' is free: it has no enclosing λ to be indexed against", expr.name,
                                        diagnosis=False)
        if expr.name not in free_variables:
            free_variables.append(expr.name)
        return DeBruijnIndex(len(context) + free_variables.index(expr.name) + 1)

    elif isinstance(expr, Function):
        return Function(None, to_bruijn(expr.body, (expr.parameter.name,) + context, free_variables))

    elif isinstance(expr, Application):
        return Application(to_bruijn(expr.function, context, free_variables),
                           to_bruijn(expr.argument, context, free_variables))

    raise TypeError(f"not a named λ-term: {expr!r}")


def to_binary(expr):
    """Encodes an index term as a string of '0'/'1' characters."""
    if isinstance(expr, DeBruijnIndex):
        if expr.value < 1:
            raise EncodingError("De Bruijn index must be positive, got {}", str(expr.value), diagnosis=False)
        return "1" * expr.value + "0"
    elif isinstance(expr, Function):
        return "00" + to_binary(expr.body)
    elif isinstance(expr, Application):
        return "01" + to_binary(expr.function) + to_binary(expr.argument)
    raise TypeError(f"not a De Bruijn λ-term: {expr!r}")


def from_binary(bits):
    """Decodes a BLC string into an index term: from_binary(to_binary(term)) == term."""
    if not bits:
        raise EncodingError("bit string cannot be empty")
    for idx, bit in enumerate(bits):
        if bit not in "01":
            raise EncodingError("'{}' contains '{}', which is not a bit", (bits, bit), start=idx, end=idx + 1)

    term, pos = _decode(bits, 0)
    if pos != len(bits):
        raise EncodingError("'{}' has trailing bits after a complete λ-term", bits, start=pos)
    return term


def _decode(bits, pos):
    """Returns (term, position of the first unread bit)."""
    if pos >= len(bits):
        raise EncodingError("'{}' ended where a λ-term was expected", bits, start=pos, end=pos + 1)

    if bits[pos] == "1":
        end = bits.find("0", pos)
        if end == -1:
            raise EncodingError("'{}' ends inside an index", bits, start=pos)
        return DeBruijnIndex(end - pos), end + 1

    if pos + 1 >= len(bits):
        raise EncodingError("'{}' ends inside a two-bit tag", bits, start=pos)

    if bits[pos + 1] == "0":
        body, pos = _decode(bits, pos + 2)
        return Function(None, body), pos

    function, pos = _decode(bits, pos + 2)
    argument, pos = _decode(bits, pos)
    return Application(function, argument), pos


def render_bruijn(expr):
    """Text of an index term, e.g. λ.λ.(2 1)."""
    if isinstance(expr, DeBruijnIndex):
        return str(expr.value)
    elif isinstance(expr, Function):
        return "λ." + render_bruijn(expr.body)
    elif isinstance(expr, Application):
        return f"({render_bruijn(expr.function)} {render_bruijn(expr.argument)})"
    raise TypeError(f"not a De Bruijn λ-term: {expr!r}")


BRUIJN_TOKENS = re.compile(r"\d+|λ\.|[()]|\s+|.")


def parse_bruijn(text):
    """Inverse of render_bruijn. Whitespace between tokens is ignored."""
    tokens = [match for match in BRUIJN_TOKENS.finditer(text) if not match.group().isspace()]
    for match in tokens:
        if match.group() not in ("λ.", "(", ")") and not match.group().isdecimal():
            raise EncodingError("'{}' has unexpected '{}'", (text, match.group()), start=match.start(),
                                end=match.end())

    term, idx = _parse_bruijn(tokens, 0, text)
    if idx != len(tokens):
        raise EncodingError("'{}' has trailing tokens after a complete λ-term", text, start=tokens[idx].start())
    return term


def _parse_bruijn(tokens, idx, text):
    if idx >= len(tokens):
        raise EncodingError("'{}' ended where a λ-term was expected", text, start=len(text))

    match = tokens[idx]
    token = match.group()
    if token.isdecimal():
        if int(token) < 1:
            raise EncodingError("'{}' has index {}, indices start at 1", (text, token), start=match.start(),
                                end=match.end())
        return DeBruijnIndex(int(token)), idx + 1

    elif token == "λ.":
        body, idx = _parse_bruijn(tokens, idx + 1, text)
        return Function(None, body), idx

    elif token == "(":
        function, idx = _parse_bruijn(tokens, idx + 1, text)
        argument, idx = _parse_bruijn(tokens, idx, text)
        if idx >= len(tokens) or tokens[idx].group() != ")":
            start = tokens[idx].start() if idx < len(tokens) else len(text)
            raise EncodingError("'{}' is missing ')'", text, start=start, end=start + 1)
        return Application(function, argument), idx + 1

    raise EncodingError("'{}' has unexpected '{}'", (text, token), start=match.start(), end=match.end())
