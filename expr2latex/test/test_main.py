import io
import os
import tempfile
import contextlib
from path import Path as path
from expr2latex.main import expr2latex, CommandLine
from expr2latex.tree import UnsupportedNode

#-----------------------------------------------------------------------------
# unit tests

import unittest

class Test_expr2latex(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.dir = path(self.tmpdir.name)

    def test_convert1(self):
        e2l = expr2latex(["x**2", "sin(pi)", "frac(a, b)"])
        latex = e2l.convert(skip_output=True)
        self.assertEqual(latex, ["x^2", r"\sin(\pi)", r"\frac{a}{b}"])

    def test_wrap1(self):
        latex = expr2latex(["x**2"], wrap="inline").convert(skip_output=True)
        self.assertEqual(latex, [r"\(x^2\)"])
        latex = expr2latex(["x**2"], wrap="display").convert(skip_output=True)
        self.assertEqual(latex, [r"\[x^2\]"])

    def test_bad_wrap(self):
        with self.assertRaises(ValueError):
            expr2latex(["x"], wrap="block")

    def test_file1(self):
        fn = self.dir / "formulas.txt"
        fn.write_text("# formulas\nsqrt(x)\n\n  alpha + 1  \n", encoding="utf8")
        e2l = expr2latex(fn=fn, verbose=1)
        self.assertEqual(e2l.expressions, ["sqrt(x)", "alpha + 1"])
        self.assertEqual(e2l.convert(skip_output=True), [r"\sqrt{x}", r"\alpha + 1"])

    def test_output_file(self):
        ofn = self.dir / "out.tex"
        expr2latex(["a + b", "hat(x)"]).convert(ofn=ofn)
        self.assertEqual(ofn.read_text(encoding="utf8"), "a + b\n\\hat{x}\n")

    def test_stdout(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            expr2latex(["x[i]"]).convert()
        self.assertEqual(out.getvalue(), "x_i\n")

    def test_error1(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            with self.assertRaises(UnsupportedNode):
                expr2latex(["x + 1", "x.y"]).convert(skip_output=True)
        assert "[expr2latex] Error" in out.getvalue()


class Test_CommandLine(unittest.TestCase):

    def test_cmdline1(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            ofn = os.path.join(tmpdir, "out.tex")
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                CommandLine(arglist=["x + y", "frac(1, 2)", "-o", ofn, "--wrap", "inline"])
            with open(ofn) as fp:
                self.assertEqual(fp.read(), "\\(x + y\\)\n\\(\\frac{1}{2}\\)\n")
            assert "Wrote" in out.getvalue()

    def test_cmdline_html(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            CommandLine(arglist=["--html", "p('hi', b('there'))"])
        self.assertEqual(out.getvalue(), "<p>hi<b>there</b></p>\n")

    def test_cmdline_nothing(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                CommandLine(arglist=[])
