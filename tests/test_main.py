import contextlib
import io
import unittest
from unittest import mock

from widecalc.main import main


class TestMain(unittest.TestCase):
    def _main(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(argv)
        return out.getvalue()

    def test_eval(self):
        self.assertEqual(self._main(["eval", "x = 2", "x * 21"]), "2\n42\n")

    def test_eval_signed(self):
        self.assertEqual(self._main(["eval", "--signed", "0 - 7"]), "-7\n")
        self.assertEqual(self._main(["eval", "0 - 7"]), "340282366920938463463374607431768211449\n")

    def test_eval_error_exits(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            with self.assertRaises(SystemExit) as cm:
                main(["eval", "1 / 0"])
        self.assertEqual(cm.exception.code, 1)
        self.assertEqual(out.getvalue(), "Error: Division by zero in '/'\n")

    def test_format(self):
        self.assertEqual(self._main(["format", "0xffffffffffffffff", "0xffffffffffffffff"]),
                         "340282366920938463463374607431768211455\n")
        self.assertEqual(self._main(["format", "--signed", "0", "0x8000000000000000"]),
                         "-170141183460469231731687303715884105728\n")
        self.assertEqual(self._main(["format", "10", "0"]), "10\n")

    def test_repl(self):
        lines = ["x = 3", "x * x", "", "y", "x++; x", EOFError()]
        with mock.patch('builtins.input', side_effect=lines):
            output = self._main(["repl"])
        self.assertEqual(output, "3\n9\nError: Undefined variable: y\n3\n4\n")

    def test_repl_prints_results_before_an_error(self):
        lines = ["x = 5; y; x", "x", EOFError()]
        with mock.patch('builtins.input', side_effect=lines):
            output = self._main(["repl"])
        self.assertEqual(output, "5\nError: Undefined variable: y\n5\n")


if __name__ == '__main__':
    unittest.main()
