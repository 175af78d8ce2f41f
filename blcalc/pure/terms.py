"""Pure lambda calculus abstract syntax.

```
<λ-term> ::= <variable>                 ; Variable: a single lowercase letter
           | "λ" <variable> "." <λ-term> ; Function: binds parameter within body
           | "(" <λ-term> <λ-term> ")"   ; Application: function applied to argument
```

Terms are immutable values: substitution, alpha-conversion and reduction all build new terms and never rewrite a node
in place, so there are no parent pointers to keep up to date. Scoping is resolved by passing the enclosing binders down
the recursion instead.

DeBruijnIndex only appears in the De Bruijn representation (see bruijn.py), where a Function has parameter=None.
"""

from dataclasses import dataclass
from typing import Optional


class Expression:
    """Superclass of every term."""


@dataclass(frozen=True)
class Variable(Expression):
    name: str


@dataclass(frozen=True)
class Function(Expression):
    parameter: Optional[Variable]
    body: Expression


@dataclass(frozen=True)
class Application(Expression):
    function: Expression
    argument: Expression


@dataclass(frozen=True)
class DeBruijnIndex(Expression):
    """Number of binders between an occurrence and its binder (1 = innermost)."""
    value: int


def free_variables(expr):
    """Returns the set of variables occurring free in expr."""
    if isinstance(expr, Variable):
        return {expr}
    elif isinstance(expr, Function):
        return free_variables(expr.body) - {expr.parameter}
    elif isinstance(expr, Application):
        return free_variables(expr.function) | free_variables(expr.argument)
    raise TypeError(f"not a named λ-term: {expr!r}")


def occurs_free(var, expr):
    """Whether or not var occurs free in expr: false beneath a binder of the same name."""
    if isinstance(expr, Variable):
        return var == expr
    elif isinstance(expr, Function):
        return expr.parameter != var and occurs_free(var, expr.body)
    elif isinstance(expr, Application):
        return occurs_free(var, expr.function) or occurs_free(var, expr.argument)
    raise TypeError(f"not a named λ-term: {expr!r}")


def binds_free(binder, var, expr):
    """Whether or not a binder of binder in expr has a free occurrence of var beneath it, i.e. whether renaming var
    to binder would capture."""
    if isinstance(expr, Variable):
        return False
    elif isinstance(expr, Function):
        if expr.parameter == var:
            return False
        if expr.parameter == binder:
            return occurs_free(var, expr.body)
        return binds_free(binder, var, expr.body)
    elif isinstance(expr, Application):
        return binds_free(binder, var, expr.function) or binds_free(binder, var, expr.argument)
    raise TypeError(f"not a named λ-term: {expr!r}")
