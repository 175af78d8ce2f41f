import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from blcalc.main import main, preprocess_line


class MainTestCase(unittest.TestCase):

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(list(argv))
        return status, out.getvalue()

    def test_modes(self):
        cases = {
            ("(λx.xλy.y)",): "λy.y\n",
            ("-m", "bruijn", "λx.λy.(xy)"): "λ.λ.(2 1)\n",
            ("-m", "binary", "λx.x"): "0010\n",
            ("-m", "bruijn", "-r", "(λx.xλy.y)"): "λ.1\n",
            ("-m", "bruijn", "(λx.xλy.y)"): "(λ.1 λ.1)\n",
            ("-s", "add 2 3"): "λf.λx.(f(f(f(f(fx)))))\n",
            ("λx.x", "x"): "λx.x\nx\n",
        }
        for argv, expected in cases.items():
            self.assertEqual((0, expected), self.run_main(*argv), argv)

    def test_free_variables(self):
        status, output = self.run_main("-m", "binary", "x")
        self.assertEqual(1, status)
        self.assertIn("is free", output)

        self.assertEqual((0, "10\n"), self.run_main("-m", "binary", "--free", "x"))

    def test_errors_do_not_stop_other_terms(self):
        status, output = self.run_main("xy", "λx.x")
        self.assertEqual(1, status)
        self.assertIn("<args>:1: ", output)
        self.assertTrue(output.endswith("λx.x\n"))

    def test_max_steps(self):
        status, output = self.run_main("--max-steps", "2", "(λx.(xx)λx.(xx))")
        self.assertEqual(0, status)
        self.assertIn("warning: ", output)
        self.assertTrue(output.endswith("(λx.(xx)λx.(xx))\n"))

        with redirect_stderr(io.StringIO()):
            self.assertRaises(SystemExit, main, ["--max-steps", "-1", "x"])

    def test_deep_nesting_is_reported(self):
        status, output = self.run_main("-s", "5000", "λx.x")
        self.assertEqual(1, status)
        self.assertIn("nested too deeply", output)
        self.assertTrue(output.endswith("λx.x\n"))

    def test_verbose(self):
        status, output = self.run_main("-v", "((λx.λy.xa)b)")
        self.assertEqual(0, status)
        self.assertEqual(["(λy.ab)", "a", "a"], [line.split()[-1] for line in output.splitlines()])

    def test_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".lc", delete=False, encoding="utf-8") as file:
            file.write(";; identity\n(λx.xλy.y)\n\n  λx.λy.x  ;; true\n")
        try:
            self.assertEqual((0, "λy.y\nλx.λy.x\n"), self.run_main("-f", file.name))
        finally:
            os.remove(file.name)

    def test_missing_file(self):
        with self.assertRaises(SystemExit) as context:
            self.run_main("-f", os.path.join(tempfile.gettempdir(), "does-not-exist.lc"))
        self.assertEqual(1, context.exception.code)

    def test_stdin(self):
        with mock.patch("sys.stdin", io.StringIO("(λx.xz)\n")):
            self.assertEqual((0, "z\n"), self.run_main())

    def test_preprocess_line(self):
        cases = {"  λx.x ;; id": "λx.x", ";; comment": "", "x": "x", "": ""}
        for case, expected in cases.items():
            self.assertEqual(expected, preprocess_line(case), case)


if __name__ == '__main__':
    unittest.main()
