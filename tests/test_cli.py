"""
Test suite for the mathparser command line.

Author: xwest
"""

import unittest
import sys
import os
import io
import tempfile
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mathparser.cli import main, NOTHING_TO_DO


class TestCommandLine(unittest.TestCase):
    """Test cases for mathparser.cli.main."""

    def _run(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            status = main(list(argv))
        return status, stdout.getvalue(), stderr.getvalue()

    def test_nothing_to_do(self):
        status, out, _ = self._run()
        self.assertEqual(status, 0)
        self.assertEqual(out, NOTHING_TO_DO + "\n")

    def test_arguments_joined(self):
        status, out, _ = self._run("1", "+", "2")
        self.assertEqual(status, 0)
        self.assertEqual(out, "Plus[1, 2]\n")

    def test_full_form(self):
        status, out, _ = self._run("--full-form", "f[a, {b}]")
        self.assertEqual(status, 0)
        self.assertEqual(out, '["f", "a", ["List", "b"]]\n')

    def test_failure(self):
        status, out, _ = self._run("1 +")
        self.assertEqual(status, 1)
        self.assertTrue(out.startswith("<string>:1:4 failure: expected expression"))

    def test_no_implicit_multiplication(self):
        self.assertEqual(self._run("2x")[0], 0)
        self.assertEqual(self._run("--no-implicit-multiplication", "2x")[0], 1)

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sum.m")
            with open(path, "w", encoding="utf-8") as f:
                f.write("a;;b")
            status, out, _ = self._run("--file", path)
        self.assertEqual(status, 0)
        self.assertEqual(out, "Span[a, b]\n")

    def test_file_and_expression_rejected(self):
        with self.assertRaises(SystemExit) as context:
            self._run("--file", "sum.m", "1 + 2")
        self.assertEqual(context.exception.code, 2)

    def test_verbose_failure_shows_help(self):
        with mock.patch("mathparser.cli.logging.basicConfig") as basic_config:
            status, out, _ = self._run("-v", "1 +")
        basic_config.assert_called_once()
        self.assertEqual(status, 1)
        self.assertIn("\n  help: ", out)
        self.assertNotIn("help:", self._run("1 +")[1])

    def test_missing_file(self):
        status, out, err = self._run("--file", os.path.join(tempfile.gettempdir(), "missing", "x.m"))
        self.assertEqual(status, 2)
        self.assertEqual(out, "")
        self.assertIn("cannot read", err)


if __name__ == '__main__':
    unittest.main()
