"""
Translator from expression trees to LaTeX math.

Main function is translate(); to_math() does the same starting from a
Python expression string.

Translation is done in two passes over the tree. The first pass collects
the vocabulary of the expression (free names and called functions) and
builds a Scope from it; the second reduces the tree bottom-up, looking
every identifier and every function up in that Scope.
"""

import numbers
from collections import ChainMap
from types import MappingProxyType

import numpy

from ..tree import UnsupportedNode, from_python, reduce_tree

#-----------------------------------------------------------------------------

GREEK = (
    "alpha theta tau beta vartheta pi upsilon gamma varpi phi delta kappa "
    "rho varphi epsilon lambda varrho chi varepsilon mu sigma psi zeta nu "
    "varsigma omega eta xi "
    "Gamma Lambda Sigma Psi Delta Xi Upsilon Omega Theta Pi Phi"
).split()

GREEK_SYMBOLS = MappingProxyType(
    {letter: r"\{letter}".format(letter=letter) for letter in GREEK}
)


def unary_op(left, right):
    """
    Make a renderer which wraps its single operand in `left` and `right`.
    """
    def render_unary(operand):
        return left + operand + right
    return render_unary


def binary_op(sep, prefix=False):
    """
    Make a renderer which joins its operands with `sep`.

    With `prefix`, a single operand gets the separator as a prefix, so that
    unary minus renders as '-x'. Otherwise it needs at least two.
    """
    def render_binary(first, *rest):
        if not rest:
            if not prefix:
                raise TypeError("expected at least 2 operands, got 1")
            return sep.strip() + first
        return sep.join((first,) + rest)
    return render_binary


def render_frac(numerator, denominator):
    r"""
    Stack two operands as '\frac{numerator}{denominator}'.
    """
    return r"\frac{{{num}}}{{{den}}}".format(num=numerator, den=denominator)


def render_paste(*operands):
    """
    Concatenate the operands as they are; an escape hatch for raw LaTeX.
    """
    return "".join(operands)


KNOWN_FUNCTIONS = MappingProxyType({
    # Binary operators
    '+': binary_op(" + ", prefix=True),
    '-': binary_op(" - ", prefix=True),
    '*': binary_op(" * "),
    '/': binary_op(" / "),
    '^': binary_op("^"),
    '[': binary_op("_"),
    '%': binary_op(r" \bmod "),

    # Comparison and logic
    '==': binary_op(" = "),
    '!=': binary_op(r" \neq "),
    '<': binary_op(" < "),
    '<=': binary_op(r" \leq "),
    '>': binary_op(" > "),
    '>=': binary_op(r" \geq "),
    '&': binary_op(r" \land "),
    '|': binary_op(r" \lor "),
    '!': unary_op(r"\lnot ", ""),

    # Grouping
    '{': unary_op(r"\left{ ", r" \right}"),
    '(': unary_op(r"\left( ", r" \right)"),
    'paste': render_paste,

    # Other math functions
    'sqrt': unary_op(r"\sqrt{", "}"),
    'sin': unary_op(r"\sin(", ")"),
    'log': unary_op(r"\log(", ")"),
    'abs': unary_op(r"\left| ", r"\right| "),
    'frac': render_frac,

    # Labelling
    'hat': unary_op(r"\hat{", "}"),
    'tilde': unary_op(r"\tilde{", "}"),
})


def unknown_op(name):
    r"""
    Make the renderer for a function with no entry in KNOWN_FUNCTIONS.

    e.g. f(a, b) -> '\mathrm{f}(a, b)'
    """
    prefix = r"\mathrm{{{name}}}(".format(name=name)

    def render_unknown(*operands):
        return prefix + ", ".join(operands) + ")"
    return render_unknown


def render_literal(value):
    """
    Give the textual form of a literal value.

    Floats drop a trailing '.0', so 2.0 renders as '2'. Strings are used
    verbatim.
    """
    if isinstance(value, bool) or value is None:
        return str(value)
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, (float, numpy.floating)):
        return numpy.format_float_positional(value, trim='-')
    return str(value)

#-----------------------------------------------------------------------------
# Pass 1: vocabulary of an expression

def collect_free_names(node):
    """
    Return the set of identifiers used in value position anywhere in `node`.

    Function names are not included, unless they also appear as values.
    """
    collect_actions = {
        'literal': lambda node, kids: set(),
        'identifier': lambda node, kids: {node.name},
        'call': lambda node, kids: set().union(*kids),
    }
    return reduce_tree(node, collect_actions)


def collect_call_names(node):
    """
    Return the set of operator and function names called anywhere in `node`.
    """
    collect_actions = {
        'literal': lambda node, kids: set(),
        'identifier': lambda node, kids: set(),
        'call': lambda node, kids: {node.name}.union(*kids),
    }
    return reduce_tree(node, collect_actions)


class Scope(ChainMap):
    """
    Layered lookup of renderers, highest precedence first.

    Indexing looks a name up in value position: the first layer holding the
    name wins. `renderer()` looks a name up in call position, where layers
    binding the name to plain text are passed over.
    """

    def renderer(self, name):
        for layer in self.maps:
            binding = layer.get(name)
            if callable(binding):
                return binding
        raise KeyError(name)


def build_scope(node):
    """
    Create the Scope used to translate the tree rooted at `node`.

    From lowest to highest precedence the layers are:
     -renderers for every called function missing from KNOWN_FUNCTIONS,
     -KNOWN_FUNCTIONS,
     -every free name bound to its own spelling,
     -GREEK_SYMBOLS.
    So a variable named 'pi' always renders as '\\pi'.
    """
    free_names = collect_free_names(node)
    call_names = collect_call_names(node)

    unknown_functions = {name: unknown_op(name) for name in call_names
                         if name not in KNOWN_FUNCTIONS}
    free_symbols = {name: name for name in free_names}

    scope = Scope(unknown_functions)
    scope = scope.new_child(KNOWN_FUNCTIONS)
    scope = scope.new_child(free_symbols)
    scope = scope.new_child(GREEK_SYMBOLS)
    return scope

#-----------------------------------------------------------------------------
# Pass 2: rendering

def translate(node):
    """
    Convert the expression tree `node` into a LaTeX string.

    Raise UnsupportedNode if the tree holds anything other than literals,
    identifiers and calls, or a call whose renderer cannot take its number
    of arguments (e.g. frac with three).
    """
    scope = build_scope(node)

    def render_call(node, kids):
        renderer = scope.renderer(node.name)
        try:
            return renderer(*kids)
        except TypeError as err:
            raise UnsupportedNode(
                "Cannot render '{}' with {} argument(s): {}".format(
                    node.name, len(kids), err)
            ) from err

    render_actions = {
        'literal': lambda node, kids: render_literal(node.value),
        'identifier': lambda node, kids: scope[node.name],
        'call': render_call,
    }
    return reduce_tree(node, render_actions)


def to_math(math_expr):
    """
    Convert a Python expression string into LaTeX.

    e.g. 'sqrt(frac(a, b))' -> '\\sqrt{\\frac{a}{b}}'
    """
    return translate(from_python(math_expr))
