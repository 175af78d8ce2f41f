"""Natural numbers encoded as Church numerals. Operations (succ, add, ...) are not implemented here but in
lang/library.py, as lambda terms, thus keeping everything as pure as possible.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from blcalc.lang.error import GenericException
from blcalc.pure.parser import parse_text
from blcalc.pure.terms import Application, Function, Variable


def cnumber(num):
    """Returns the Church numeral of num (cnum = Church numeral): λf.λx.(f(f...x))."""
    try:
        assert not isinstance(num, (bool, float))
        num = int(num)
        assert num >= 0
    except (AssertionError, TypeError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    header = "λf.λx."
    composed = "(f" * num
    application = "x" + ")" * num

    return parse_text(header + composed + application)


def number(cnum):
    """Returns the int encoded by cnum. If cnum isn't a Church numeral, returns None."""
    try:
        assert isinstance(cnum, Function)
        first_arg, first_body = cnum.parameter, cnum.body

        assert isinstance(first_body, Function)
        second_arg, nth_body = first_body.parameter, first_body.body
        assert first_arg != second_arg
    except AssertionError:
        return None

    num = 0
    while isinstance(nth_body, Application):
        if nth_body.function != first_arg:
            return None
        nth_body = nth_body.argument
        num += 1

    return num if isinstance(nth_body, Variable) and nth_body == second_arg else None
