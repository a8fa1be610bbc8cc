#!/usr/bin/env python

import sys
import argparse
from importlib.metadata import version as dist_version, PackageNotFoundError
from path import Path as path

from .tree import UnsupportedNode, from_python
from .lib.latex import translate
from .lib.markup import with_html, pretty

# -----------------------------------------------------------------------------

class expr2latex:
    WRAPPERS = {None: ("", ""),
                'inline': (r"\(", r"\)"),
                'display': (r"\[", r"\]"),
    }

    def __init__(self, expressions=None, fn=None, verbose=0, wrap=None):
        '''
        expressions = (list of str) Python math expressions to translate
        fn = filename to read more expressions from, one per line ('#' starts a comment line)
        wrap = None, 'inline' or 'display': math delimiters to put around each result
        '''
        if wrap not in self.WRAPPERS:
            raise ValueError("Unknown wrap '%s', must be one of inline, display" % wrap)
        self.fn = fn or ""
        self.verbose = verbose or 0
        self.wrap = wrap
        self.expressions = list(expressions or [])
        if self.fn:
            self.expressions += self.read_expressions(self.fn)

    def read_expressions(self, fn):
        '''
        Read expressions from file fn, skipping blank lines and comments.
        '''
        lines = path(fn).read_text(encoding="utf8").splitlines()
        exprs = [x.strip() for x in lines if x.strip() and not x.strip().startswith('#')]
        if self.verbose:
            print("[expr2latex] read %d expressions from %s" % (len(exprs), fn))
        return exprs

    def translate_one(self, expr):
        '''
        Translate one expression string into LaTeX, wrapped as requested.
        '''
        try:
            tree = from_python(expr)
            latex = translate(tree)
        except (UnsupportedNode, SyntaxError) as err:
            print("[expr2latex] Error translating '%s': %s" % (expr, err))
            raise
        if self.verbose > 1:
            print("[expr2latex] %s -> %r" % (expr, tree))
        left, right = self.WRAPPERS[self.wrap]
        return left + latex + right

    def convert(self, ofn=None, skip_output=False):
        results = [self.translate_one(expr) for expr in self.expressions]

        if skip_output:
            return results

        text = "\n".join(results) + "\n"
        if ofn:
            path(ofn).write_text(text, encoding="utf8")
            print("Wrote %s" % ofn)
        else:
            sys.stdout.write(text)
        return results

#-----------------------------------------------------------------------------

class VAction(argparse.Action):
    def __call__(self, parser, args, values, option_string=None):
        curval = getattr(args, self.dest, 0) or 0
        values=values.count('v')+1
        setattr(args, self.dest, values + curval)

# -----------------------------------------------------------------------------

def get_version():
    try:
        return dist_version("expr2latex")
    except PackageNotFoundError:
        return "unknown"


def CommandLine(args=None, arglist=None):
    '''
    Main command line.  Accepts args, to allow for simple unit testing.
    '''
    help_text = """usage: expr2latex [options] expression ...

Translate Python math expressions into LaTeX, e.g.

    expr2latex "sqrt(frac(alpha, 2)) + x**2"

With --html, each argument is instead HTML DSL code, e.g.

    expr2latex --html "p('Some text', b('bold'), class_='intro')"

Version: {}

""".format(get_version())

    parser = argparse.ArgumentParser(description=help_text, formatter_class=argparse.RawTextHelpFormatter)

    parser.add_argument("expressions", nargs="*", help="expressions to translate")
    parser.add_argument('-v', "--verbose", nargs=0, help="increase output verbosity (add more -v to increase versbosity)", action=VAction, dest='verbose')
    parser.add_argument("-f", "--file", help="file with one expression per line", default="")
    parser.add_argument("-o", "--output", help="output filename", default="")
    parser.add_argument("--wrap", help="wrap output in math delimiters", choices=["inline", "display"], default=None)
    parser.add_argument("--html", help="evaluate HTML DSL code instead of translating math", action="store_true")

    if not args:
        args = parser.parse_args(arglist)

    if args.html:
        for code in args.expressions:
            markup = with_html(code)
            if args.verbose:
                markup = pretty(markup)
            print(markup)
        return

    if not args.expressions and not args.file:
        parser.error("no expressions given")

    e2l = expr2latex(args.expressions, fn=args.file, verbose=args.verbose, wrap=args.wrap)
    e2l.convert(ofn=args.output)
