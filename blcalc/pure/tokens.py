"""Lexical alphabet of pure lambda calculus.

The core term language is written with exactly five kinds of symbols:

```
"("  "λ"  "."  ")"  <letter>      ; letter is a single lowercase ASCII character
```

Every character maps to exactly one Token, so a token's index in the token sequence is also its character index in
the source text (errors use that to point at the offending character). Whitespace is not part of the alphabet: the
friendlier surface syntax lives in lang/surface.py.
"""

from dataclasses import dataclass
from string import ascii_lowercase

from blcalc.lang.error import LambdaSyntaxError, LexError


@dataclass(frozen=True)
class Token:
    """Superclass of every token in pure lambda calculus."""

    @property
    def char(self):
        raise NotImplementedError()


@dataclass(frozen=True)
class LeftParen(Token):

    @property
    def char(self):
        return "("


@dataclass(frozen=True)
class RightParen(Token):

    @property
    def char(self):
        return ")"


@dataclass(frozen=True)
class Lambda(Token):

    @property
    def char(self):
        return "λ"


@dataclass(frozen=True)
class Dot(Token):

    @property
    def char(self):
        return "."


@dataclass(frozen=True)
class Letter(Token):
    value: str

    @property
    def char(self):
        return self.value


BUILTINS = {
    "(": LeftParen(),
    ")": RightParen(),
    "λ": Lambda(),
    ".": Dot()
}
LETTERS = ascii_lowercase


def tokenize(chars):
    """Converts a character sequence into a list of Tokens, one per character. Raises LexError on any character that
    is not part of the alphabet.
    """
    text = "".join(chars)
    tokens = []
    for idx, char in enumerate(text):
        if char in BUILTINS:
            tokens.append(BUILTINS[char])
        elif char in LETTERS:
            tokens.append(Letter(char))
        else:
            raise LexError("'{}' contains invalid character '{}'", (text, char), start=idx, end=idx + 1)
    return tokens


def untokenize(tokens):
    """Inverse of tokenize: untokenize(tokenize(text)) == text."""
    chars = []
    for idx, token in enumerate(tokens):
        if not isinstance(token, Token) or type(token) is Token:
            raise LambdaSyntaxError("'{}' is not a token", repr(token), position=idx, diagnosis=False)
        chars.append(token.char)
    return "".join(chars)
