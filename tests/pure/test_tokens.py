import unittest

from blcalc.lang.error import LambdaSyntaxError, LexError
from blcalc.pure.tokens import Dot, Lambda, LeftParen, Letter, RightParen, Token, tokenize, untokenize


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "": [],
            "x": [Letter("x")],
            "λx.x": [Lambda(), Letter("x"), Dot(), Letter("x")],
            "(xy)": [LeftParen(), Letter("x"), Letter("y"), RightParen()],
            ")(.λ": [RightParen(), LeftParen(), Dot(), Lambda()],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), case)

    def test_tokenize_accepts_iterables(self):
        self.assertEqual([Letter("a"), Letter("b")], tokenize(iter("ab")))

    def test_invalid_character(self):
        should_raise = {"λx. x": 3, "X": 0, "λx.x1": 4, "\\x.x": 0, "(xy)z!": 5, "é": 0}
        for case, position in should_raise.items():
            with self.assertRaises(LexError, msg=case) as context:
                tokenize(case)
            self.assertEqual(position, context.exception.start, case)
            self.assertEqual(case, context.exception.expr, case)

    def test_round_trip(self):
        cases = ["", "x", "λx.λy.x", "(λx.(xx)λx.(xx))", "λf.λx.(f(fx))", "))((..λλab", "abcdefghijklmnopqrstuvwxyz"]
        for case in cases:
            self.assertEqual(case, untokenize(tokenize(case)), case)

    def test_untokenize_rejects_non_tokens(self):
        should_raise = [["x"], [Letter("x"), None], [Token()]]
        for case in should_raise:
            self.assertRaises(LambdaSyntaxError, untokenize, case)


if __name__ == '__main__':
    unittest.main()
