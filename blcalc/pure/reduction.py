"""Normal-order beta reduction with capture-avoiding substitution.

A term is in normal form when it contains no redex, i.e. no Application whose function side is directly a Function.
One reduction step rewrites the leftmost outermost redex; when the current node is not a redex, the step descends
into it (both sides of an Application are stepped).

Substituting a value under a binder whose parameter occurs free in that value would capture it, so such a binder is
alpha-converted to a fresh name first. Fresh names are picked deterministically: the letters following the parameter
(wrapping around from z to a) are tried in order, and the first one that is not free in the body, is not to be avoided
and has no binder of its own above a free occurrence of the parameter wins. Inner binders may reuse the name.

Reduction is capped at a number of steps so that terms without a normal form (e.g. (λx.(xx)λx.(xx))) still return.
A capped result is a best-effort partial reduction, not a normal form: check NormalOrderReducer.normal.

Every walker recurses once per level of nesting, so terms nested deeper than sys.getrecursionlimit() (e.g.
cnumber(1000)) raise RecursionError, which ErrorHandler reports as "nested too deeply".
"""

from blcalc.lang.error import FreshNameError
from blcalc.pure.parser import unparse_text
from blcalc.pure.terms import Application, Function, Variable, binds_free, free_variables, occurs_free
from blcalc.pure.tokens import LETTERS


def has_beta_redex(expr):
    """Whether or not expr contains a redex anywhere."""
    if isinstance(expr, Variable):
        return False
    elif isinstance(expr, Function):
        return has_beta_redex(expr.body)
    elif isinstance(expr, Application):
        if isinstance(expr.function, Function):
            return True
        return has_beta_redex(expr.function) or has_beta_redex(expr.argument)
    raise TypeError(f"not a named λ-term: {expr!r}")


def reduce_step(expr):
    """Performs one normal-order reduction step on expr."""
    if isinstance(expr, Variable):
        return expr
    elif isinstance(expr, Function):
        return Function(expr.parameter, reduce_step(expr.body))
    elif isinstance(expr, Application):
        if isinstance(expr.function, Function):
            return beta_reduce(expr.function, expr.argument)
        return Application(reduce_step(expr.function), reduce_step(expr.argument))
    raise TypeError(f"not a named λ-term: {expr!r}")


def beta_reduce(function, argument):
    """(λp.body) argument -> body with every free p replaced by argument."""
    return substitute(argument, function.parameter, function.body)


def substitute(value, target, body):
    """Replaces every free occurrence of target in body with value, alpha-converting binders that would capture a free
    variable of value.
    """
    if isinstance(body, Variable):
        return value if body == target else body

    elif isinstance(body, Function):
        if body.parameter == target:
            return body  # target is shadowed, nothing free to replace
        if not occurs_free(body.parameter, value):
            return Function(body.parameter, substitute(value, target, body.body))
        if not occurs_free(target, body.body):
            return body
        converted = alpha_convert(body, avoid=free_variables(value) | {target})
        return Function(converted.parameter, substitute(value, target, converted.body))

    elif isinstance(body, Application):
        return Application(substitute(value, target, body.function), substitute(value, target, body.argument))

    raise TypeError(f"not a named λ-term: {body!r}")


def fresh_variable(var, body, avoid=()):
    """Returns the next letter after var that is not free in body, is not in avoid and would not be captured by a
    binder of body if var were renamed to it.
    """
    avoid = {v.name for v in avoid}
    start = LETTERS.index(var.name) if var.name in LETTERS else -1

    for offset in range(1, len(LETTERS) + 1):
        candidate = Variable(LETTERS[(start + offset) % len(LETTERS)])
        if (candidate != var and candidate.name not in avoid and not occurs_free(candidate, body)
                and not binds_free(candidate, var, body)):
            return candidate

    raise FreshNameError("no fresh variable left to rename '{}' in '{}'", (var.name, unparse_text(body)),
                         diagnosis=False)


def alpha_convert(function, avoid=()):
    """Renames function's parameter, and every occurrence bound to it, to a fresh variable."""
    new_parameter = fresh_variable(function.parameter, function.body, avoid)
    return Function(new_parameter, rename(function.parameter, new_parameter, function.body))


def rename(old, new, expr):
    """Rewrites the free occurrences of old in expr to new. A binder of old or new stops the rewrite beneath it."""
    if isinstance(expr, Variable):
        return new if expr == old else expr
    elif isinstance(expr, Function):
        if expr.parameter in (old, new):
            return expr
        return Function(expr.parameter, rename(old, new, expr.body))
    elif isinstance(expr, Application):
        return Application(rename(old, new, expr.function), rename(old, new, expr.argument))
    raise TypeError(f"not a named λ-term: {expr!r}")


class NormalOrderReducer:
    """Implements normal-order beta reduction of a term, bounded by max_steps."""
    MAX_STEPS = 100

    def __init__(self, expr, max_steps=MAX_STEPS):
        if max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")

        self.original = expr
        self.tree = expr
        self.max_steps = max_steps

        self.steps = 0

    @property
    def normal(self):
        """Whether or not self.tree is in normal form."""
        return not has_beta_redex(self.tree)

    def beta_reduce(self, error_handler=None):
        """Reduces self.tree until it has no redex or max_steps steps were taken, and returns it. error_handler (if
        any) is given every step and warned if the cap is reached before a normal form.
        """
        while self.steps < self.max_steps and has_beta_redex(self.tree):
            self.tree = reduce_step(self.tree)
            self.steps += 1
            if error_handler is not None:
                error_handler.register_step("β", unparse_text(self.tree))

        if error_handler is not None and not self.normal:
            error_handler.warn("'{}' has no beta-normal form within {} steps", (unparse_text(self.original),
                                                                               self.max_steps))
        return self.tree

    def __repr__(self):
        return f"NormalOrderReducer({unparse_text(self.tree)!r}, steps={self.steps})"


def interpret(expr, max_steps=NormalOrderReducer.MAX_STEPS, error_handler=None):
    """Reduces expr to normal form, or as far as max_steps steps get it."""
    return NormalOrderReducer(expr, max_steps).beta_reduce(error_handler)
