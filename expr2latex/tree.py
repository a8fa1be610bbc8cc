"""
Expression trees for the math DSL.

A tree is built from three node kinds only: Literal, Identifier and Call.
Trees are normally produced by `from_python`, which reuses Python's own
parser (the `ast` module) and maps the parts of a Python expression that
make sense as mathematics onto these nodes.
"""

import ast
from collections import namedtuple


class UnsupportedNode(Exception):
    """
    Indicate a node (or a piece of source syntax) that is not a literal,
    an identifier or a call.
    """
    pass


#-----------------------------------------------------------------------------

class Node(object):
    """
    Mixin shared by the three node kinds.
    """
    __slots__ = ()
    kind = None

    @property
    def children(self):
        return ()

    # nodes of different kinds never compare equal, even with equal fields
    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.kind, tuple.__hash__(self)))


class Literal(Node, namedtuple('Literal', 'value')):
    """
    A constant: number, string, boolean or None.
    """
    __slots__ = ()
    kind = 'literal'


class Identifier(Node, namedtuple('Identifier', 'name')):
    """
    A bare name, used in value position.
    """
    __slots__ = ()
    kind = 'identifier'


class Call(Node, namedtuple('Call', 'name args names')):
    """
    An operator or function applied to an ordered tuple of arguments.

    `names` holds one keyword name (or None) per argument; it is kept for
    the benefit of front ends and is ignored by the translator.
    """
    __slots__ = ()
    kind = 'call'

    def __new__(cls, name, args=(), names=None):
        if not isinstance(name, str):
            raise UnsupportedNode(
                "Unsupported call name kind '{}'".format(type(name).__name__)
            )
        args = tuple(args)
        if names is None:
            names = (None,) * len(args)
        names = tuple(names)
        if len(names) != len(args):
            raise ValueError("Call '{}' has {} arguments but {} names".format(
                name, len(args), len(names)))
        return super(Call, cls).__new__(cls, name, args, names)

    @property
    def children(self):
        return self.args


def node_kind(node):
    """
    Return the kind of `node`, or raise UnsupportedNode naming its type.
    """
    if isinstance(node, Node) and node.kind is not None:
        return node.kind
    raise UnsupportedNode(
        "Unsupported node kind '{}'".format(type(node).__name__)
    )


def reduce_tree(node, handle_actions):
    """
    Call `handle_actions` recursively on the tree rooted at `node`.

    `handle_actions` is a dictionary of node kinds ('literal', 'identifier',
    'call') to functions of the form `action(node, handled_kids)`, where
    `handled_kids` is the list of results for the node's children, computed
    left to right before the action runs.
    """
    def handle_node(node):
        kind = node_kind(node)
        if kind not in handle_actions:
            raise UnsupportedNode("Unknown branch name '{}'".format(kind))

        action = handle_actions[kind]
        handled_kids = [handle_node(k) for k in node.children]
        return action(node, handled_kids)

    return handle_node(node)

#-----------------------------------------------------------------------------
# Python source -> tree

BINARY_OPERATORS = {
    ast.Add: '+',
    ast.Sub: '-',
    ast.Mult: '*',
    ast.Div: '/',
    ast.Mod: '%',
    ast.Pow: '^',
    ast.BitXor: '^',
}

UNARY_OPERATORS = {
    ast.USub: '-',
    ast.UAdd: '+',
    ast.Not: '!',
}

BOOLEAN_OPERATORS = {
    ast.And: '&',
    ast.Or: '|',
}

COMPARISON_OPERATORS = {
    ast.Eq: '==',
    ast.NotEq: '!=',
    ast.Lt: '<',
    ast.LtE: '<=',
    ast.Gt: '>',
    ast.GtE: '>=',
}

# Binding strength of each operator when written infix; higher binds tighter.
PRECEDENCE = {
    '|': 1,
    '&': 2,
    '!': 3,
    '==': 4, '!=': 4, '<': 4, '<=': 4, '>': 4, '>=': 4,
    '+': 5, '-': 5,
    '*': 6, '/': 6, '%': 6,
    'unary': 7,
    '^': 8,
    '[': 9,
}

RIGHT_ASSOCIATIVE = ('^',)


def precedence(node):
    """
    Binding strength of `node` when it appears as an operand.

    Atoms (literals, identifiers, function calls, groups) never need parens.
    """
    if not isinstance(node, Call) or node.name not in PRECEDENCE:
        return None
    if node.name in ('-', '+') and len(node.args) == 1:
        return PRECEDENCE['unary']
    return PRECEDENCE[node.name]


def group(node, outer, right_side=False):
    """
    Wrap `node` in a '(' call if it binds more loosely than operator `outer`.

    Python's parser drops grouping parentheses; this puts back the ones the
    precedence of the enclosing operator makes necessary.
    """
    inner = precedence(node)
    if inner is None:
        return node
    if outer in RIGHT_ASSOCIATIVE:
        right_side = not right_side
    limit = PRECEDENCE['unary'] if outer == 'unary' else PRECEDENCE[outer]
    if inner < limit or (inner == limit and right_side):
        return Call('(', (node,))
    return node


class PythonConverter(ast.NodeVisitor):
    """
    Turn a Python `ast` expression into Literal/Identifier/Call nodes.
    """

    def convert(self, source):
        module = ast.parse(source.strip(), mode='eval')
        return self.visit(module.body)

    def generic_visit(self, node):
        raise UnsupportedNode(
            "Unsupported node kind '{}'".format(type(node).__name__)
        )

    def visit_Constant(self, node):
        if node.value is Ellipsis or isinstance(node.value, bytes):
            return self.generic_visit(node)
        return Literal(node.value)

    def visit_Name(self, node):
        return Identifier(node.id)

    def visit_BinOp(self, node):
        op = BINARY_OPERATORS.get(type(node.op))
        if op is None:
            return self.generic_visit(node.op)
        left = group(self.visit(node.left), op)
        right = group(self.visit(node.right), op, right_side=True)
        return Call(op, (left, right))

    def visit_UnaryOp(self, node):
        op = UNARY_OPERATORS.get(type(node.op))
        if op is None:
            return self.generic_visit(node.op)
        operand = self.visit(node.operand)
        if op == '!':
            operand = group(operand, '!', right_side=True)
        else:
            operand = group(operand, 'unary', right_side=True)
        return Call(op, (operand,))

    def visit_BoolOp(self, node):
        op = BOOLEAN_OPERATORS[type(node.op)]
        values = [self.visit(v) for v in node.values]
        result = group(values[0], op)
        for value in values[1:]:
            result = Call(op, (result, group(value, op, right_side=True)))
        return result

    def visit_Compare(self, node):
        result = self.visit(node.left)
        for op_node, comparator in zip(node.ops, node.comparators):
            op = COMPARISON_OPERATORS.get(type(op_node))
            if op is None:
                return self.generic_visit(op_node)
            left = group(result, op)
            right = group(self.visit(comparator), op, right_side=True)
            result = Call(op, (left, right))
        return result

    def visit_Subscript(self, node):
        base = group(self.visit(node.value), '[')
        return Call('[', (base, self.visit(node.slice)))

    def visit_Set(self, node):
        if len(node.elts) != 1:
            raise UnsupportedNode("Braces must enclose exactly one expression")
        return Call('{', (self.visit(node.elts[0]),))

    def visit_Call(self, node):
        if not isinstance(node.func, ast.Name):
            raise UnsupportedNode(
                "Unsupported callee kind '{}'".format(type(node.func).__name__)
            )
        args = [self.visit(a) for a in node.args]
        names = [None] * len(args)
        for keyword in node.keywords:
            if keyword.arg is None:
                raise UnsupportedNode("Unsupported '**' argument in call to '{}'".format(node.func.id))
            args.append(self.visit(keyword.value))
            names.append(keyword.arg)
        return Call(node.func.id, args, names)


def from_python(source):
    """
    Convert a single Python expression (as a string) into an expression tree.

    e.g. "frac(a, b) + x**2" ->
      Call('+', (Call('frac', (Identifier('a'), Identifier('b'))),
                 Call('^', (Identifier('x'), Literal(2)))))
    """
    return PythonConverter().convert(source)
