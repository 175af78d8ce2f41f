import unittest

from blcalc.lang.error import LambdaSyntaxError, LexError
from blcalc.pure.parser import parse, parse_text, unparse, unparse_text
from blcalc.pure.terms import Application, DeBruijnIndex, Function, Variable
from blcalc.pure.tokens import Dot, Lambda, Letter, tokenize

x, y, z, f = Variable("x"), Variable("y"), Variable("z"), Variable("f")


class ParseTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "x": x,
            "λx.x": Function(x, x),
            "(xy)": Application(x, y),
            "λx.λy.x": Function(x, Function(y, x)),
            "(λx.xy)": Application(Function(x, x), y),
            "λx.(xy)": Function(x, Application(x, y)),
            "((xy)z)": Application(Application(x, y), z),
            "(x(yz))": Application(x, Application(y, z)),
            "λx.λy.λz.((xz)(yz))": Function(x, Function(y, Function(z, Application(Application(x, z),
                                                                                     Application(y, z))))),
            "(λx.(xx)λx.(xx))": Application(Function(x, Application(x, x)), Function(x, Application(x, x))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_text(case), case)

    def test_parse_tokens(self):
        self.assertEqual(Function(f, f), parse([Lambda(), Letter("f"), Dot(), Letter("f")]))
        self.assertEqual(Function(f, f), parse(iter(tokenize("λf.f"))))

    def test_syntax_errors(self):
        should_raise = {
            "": 0,          # nothing to parse
            "xy": 1,        # application without parentheses
            "λ.x": 1,       # missing parameter
            "λxx": 2,       # missing '.'
            "λx.": 3,       # missing body
            "(x)": 2,       # application needs two terms
            "(xyz)": 3,     # ... and exactly two
            "(xy": 3,       # unclosed
            "x)": 1,        # trailing
            ")": 0,
            ".x": 0,
            "λ(x).x": 1,
            "(λx.x": 5,
        }
        for case, position in should_raise.items():
            with self.assertRaises(LambdaSyntaxError, msg=case) as context:
                parse_text(case)
            self.assertEqual(position, context.exception.position, case)
            self.assertIsInstance(context.exception, SyntaxError)

    def test_lex_errors_propagate(self):
        self.assertRaises(LexError, parse_text, "λx. x")


class UnparseTestCase(unittest.TestCase):

    def test_unparse(self):
        cases = {
            "x": x,
            "λx.λy.x": Function(x, Function(y, x)),
            "(λx.xy)": Application(Function(x, x), y),
            "λx.(xy)": Function(x, Application(x, y)),
            "((xy)z)": Application(Application(x, y), z),
        }
        for expected, case in cases.items():
            self.assertEqual(expected, unparse_text(case), expected)
            self.assertEqual(tokenize(expected), unparse(case), expected)

    def test_round_trip(self):
        cases = [
            x,
            Function(x, Function(y, Function(z, Application(Application(x, z), Application(y, z))))),
            Application(Function(x, Application(x, x)), Function(x, Application(x, x))),
            Application(Application(Function(f, f), Function(x, Function(f, x))), Application(z, z)),
        ]
        for case in cases:
            self.assertEqual(case, parse(unparse(case)), case)

    def test_index_terms_cannot_be_unparsed(self):
        should_raise = [DeBruijnIndex(1), Function(None, DeBruijnIndex(1))]
        for case in should_raise:
            self.assertRaises(TypeError, unparse, case)


if __name__ == '__main__':
    unittest.main()
