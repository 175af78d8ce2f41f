"""Surface syntax: a friendlier way of writing λ-terms that desugars into the core term language.

```
<term>   ::= <lambda> <params> "." <term>     ; λx y.b and λxy.b both curry to λx.λy.b
           | <atom>+                          ; application, associating by left: a b c = ((a b) c)
<atom>   ::= "(" <term> ")"
           | <letter>                         ; variable
           | <word>                           ; two or more letters: a named combinator from lang/library.py
           | <digits>                         ; Church numeral
           | <lambda> <params> "." <term>     ; abstraction bodies are greedy: x λy.y z = x (λy.(y z))
<lambda> ::= "λ" | "\"
```

Whitespace separates tokens and is otherwise ignored. The result is an ordinary core term, so its canonical text
(parser.unparse_text) is accepted by the core parser.

Based on: https://tadeuzagallo.com/blog/writing-a-lambda-calculus-interpreter-in-javascript/
"""

import re
from functools import lru_cache

from blcalc.lang.error import LambdaSyntaxError, LexError
from blcalc.lang.library import COMBINATORS
from blcalc.lang.numerical import cnumber
from blcalc.pure.parser import unparse_text
from blcalc.pure.terms import Application, Function, Variable

TOKEN = re.compile(r"(?P<space>\s+)|(?P<lam>[λ\\])|(?P<dot>\.)|(?P<lparen>\()|(?P<rparen>\))"
                   r"|(?P<word>[a-z]+)|(?P<num>[0-9]+)|(?P<other>.)")
LAM, DOT, LPAREN, RPAREN, WORD, NUM = "lam", "dot", "lparen", "rparen", "word", "num"


def lex(text):
    """Returns [(kind, value, position)]. Raises LexError on characters outside of the surface alphabet."""
    tokens = []
    for match in TOKEN.finditer(text):
        kind = match.lastgroup
        if kind == "space":
            continue
        if kind == "other":
            raise LexError("'{}' contains invalid character '{}'", (text, match.group()), start=match.start(),
                           end=match.end())
        tokens.append((kind, match.group(), match.start()))
    return tokens


class SurfaceParser:
    """Recursive descent parser over the tokens of one surface expression."""

    def __init__(self, text):
        self.text = text
        self.tokens = lex(text)
        self.pos = 0

    def peek(self):
        return self.tokens[self.pos][0] if self.pos < len(self.tokens) else None

    def next(self):
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def position(self):
        return self.tokens[self.pos][2] if self.pos < len(self.tokens) else len(self.text)

    def error(self, msg, *exprs):
        return LambdaSyntaxError(msg, (self.text,) + exprs, position=self.position())

    def parse(self):
        if not self.tokens:
            raise self.error("λ-term cannot be empty")
        term = self.term()
        if self.peek() is not None:
            raise self.error("'{}' has unexpected '{}'", self.tokens[self.pos][1])
        return term

    def term(self):
        if self.peek() == LAM:
            return self.abstraction()
        return self.application()

    def abstraction(self):
        self.next()
        params = []
        while self.peek() == WORD:
            params.extend(self.next()[1])  # λxy. is λx.λy.
        if not params:
            raise self.error("'{}' is missing a parameter after 'λ'")
        if self.peek() != DOT:
            raise self.error("'{}' is missing '.' after the parameters")
        self.next()

        term = self.term()
        for param in reversed(params):
            term = Function(Variable(param), term)
        return term

    def application(self):
        lhs = self.atom()
        if lhs is None:
            if self.peek() is None:
                raise self.error("'{}' ended where a λ-term was expected")
            raise self.error("'{}' has unexpected '{}'", self.tokens[self.pos][1])

        while True:
            rhs = self.atom()
            if rhs is None:
                return lhs
            lhs = Application(lhs, rhs)

    def atom(self):
        kind = self.peek()
        if kind == LPAREN:
            self.next()
            term = self.term()
            if self.peek() != RPAREN:
                raise self.error("'{}' is missing ')'")
            self.next()
            return term

        elif kind == LAM:
            return self.abstraction()

        elif kind == WORD:
            start = self.position()
            __, word, __ = self.next()
            if len(word) == 1:
                return Variable(word)
            if word not in COMBINATORS:
                raise LambdaSyntaxError("'{}' uses unknown name '{}'", (self.text, word), position=start,
                                        end=start + len(word))
            return combinator(word)

        elif kind == NUM:
            return cnumber(int(self.next()[1]))

        return None


@lru_cache(maxsize=None)
def combinator(name):
    """Returns the core term of the named combinator."""
    return desugar(COMBINATORS[name])


def desugar(text):
    """Parses surface syntax into a core term."""
    return SurfaceParser(text).parse()


def desugar_text(text):
    """Surface syntax -> canonical core text."""
    return unparse_text(desugar(text))
