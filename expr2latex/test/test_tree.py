from expr2latex.tree import (
    Literal, Identifier, Call, UnsupportedNode, from_python, reduce_tree, node_kind,
)

#-----------------------------------------------------------------------------
# unit tests

import unittest

a, b, c, x = (Identifier(n) for n in "abcx")


class Test_nodes(unittest.TestCase):

    def test_kinds(self):
        self.assertEqual(node_kind(Literal(1)), "literal")
        self.assertEqual(node_kind(Identifier("x")), "identifier")
        self.assertEqual(node_kind(Call("f", (x,))), "call")
        with self.assertRaises(UnsupportedNode):
            node_kind("x")

    def test_call_defaults(self):
        call = Call("f", [a, b])
        self.assertEqual(call.args, (a, b))
        self.assertEqual(call.names, (None, None))
        self.assertEqual(call.children, (a, b))
        self.assertEqual(Literal(2).children, ())

    def test_call_bad_names(self):
        with self.assertRaises(ValueError):
            Call("f", (a,), names=(None, "b"))

    def test_immutable(self):
        with self.assertRaises(AttributeError):
            Literal(1).value = 2
        with self.assertRaises(AttributeError):
            Call("f", (a,)).name = "g"

    def test_kinds_not_equal(self):
        assert Literal("x") != Identifier("x")
        assert not Literal("x") == Identifier("x")
        assert Literal("x") != ("x",)
        assert Call("f", ()) != Identifier("f")
        self.assertEqual(len({Literal("x"), Identifier("x")}), 2)
        self.assertEqual(Identifier("x"), Identifier("x"))
        self.assertEqual(hash(Call("f", (a,))), hash(Call("f", (a,))))

    def test_call_name_must_be_text(self):
        for name in (Identifier("f"), 3, ["f"], None):
            with self.assertRaises(UnsupportedNode):
                Call(name, (x,))

    def test_reduce_tree(self):
        count_actions = {
            'literal': lambda node, kids: 1,
            'identifier': lambda node, kids: 1,
            'call': lambda node, kids: 1 + sum(kids),
        }
        tree = Call("+", (a, Call("f", (Literal(2), b))))
        self.assertEqual(reduce_tree(tree, count_actions), 5)

    def test_reduce_tree_order(self):
        seen = []
        actions = {
            'literal': lambda node, kids: seen.append(node.value),
            'identifier': lambda node, kids: seen.append(node.name),
            'call': lambda node, kids: seen.append(node.name),
        }
        reduce_tree(Call("f", (a, Call("g", (b,)), Literal(3))), actions)
        self.assertEqual(seen, ["a", "b", "g", 3, "f"])

    def test_reduce_tree_missing_action(self):
        with self.assertRaises(UnsupportedNode):
            reduce_tree(Literal(1), {'identifier': lambda node, kids: None})


class Test_from_python(unittest.TestCase):

    def test_leaves(self):
        self.assertEqual(from_python("x"), x)
        self.assertEqual(from_python(" 2 "), Literal(2))
        self.assertEqual(from_python("'text'"), Literal("text"))
        self.assertNotEqual(from_python("'x'"), x)

    def test_example1(self):
        expect = Call("+", (Call("frac", (a, b)), Call("^", (x, Literal(2)))))
        self.assertEqual(from_python("frac(a, b) + x**2"), expect)

    def test_keywords(self):
        tree = from_python("f(a, b=c)")
        self.assertEqual(tree, Call("f", (a, c), (None, "b")))

    def test_subscript_and_braces(self):
        self.assertEqual(from_python("x[a]"), Call("[", (x, a)))
        self.assertEqual(from_python("{a}"), Call("{", (a,)))

    def test_groups_subscript(self):
        self.assertEqual(from_python("(a + b)[c]"),
                         Call("[", (Call("(", (Call("+", (a, b)),)), c)))
        self.assertEqual(from_python("(a ** b)[c]"),
                         Call("[", (Call("(", (Call("^", (a, b)),)), c)))
        self.assertEqual(from_python("x[a][b]"),
                         Call("[", (Call("[", (x, a)), b)))
        self.assertEqual(from_python("x[a] ** 2"),
                         Call("^", (Call("[", (x, a)), Literal(2))))

    def test_groups_left_assoc(self):
        self.assertEqual(from_python("(a + b) * c"),
                         Call("*", (Call("(", (Call("+", (a, b)),)), c)))
        self.assertEqual(from_python("a - (b - c)"),
                         Call("-", (a, Call("(", (Call("-", (b, c)),)))))
        self.assertEqual(from_python("(a - b) - c"),
                         Call("-", (Call("-", (a, b)), c)))

    def test_groups_power(self):
        self.assertEqual(from_python("(a ** b) ** c"),
                         Call("^", (Call("(", (Call("^", (a, b)),)), c)))
        self.assertEqual(from_python("a ** (b ** c)"),
                         Call("^", (a, Call("^", (b, c)))))
        self.assertEqual(from_python("(-a) ** 2"),
                         Call("^", (Call("(", (Call("-", (a,)),)), Literal(2))))

    def test_unary(self):
        self.assertEqual(from_python("-a"), Call("-", (a,)))
        self.assertEqual(from_python("not a"), Call("!", (a,)))
        self.assertEqual(from_python("-(a + b)"),
                         Call("-", (Call("(", (Call("+", (a, b)),)),)))

    def test_boolean_and_compare(self):
        self.assertEqual(from_python("a and b and c"),
                         Call("&", (Call("&", (a, b)), c)))
        self.assertEqual(from_python("(a or b) and c"),
                         Call("&", (Call("(", (Call("|", (a, b)),)), c)))
        self.assertEqual(from_python("a < b <= c"),
                         Call("<=", (Call("<", (a, b)), c)))

    def test_unsupported(self):
        for source in ("x.y", "[1, 2]", "f(*a)", "f(**a)", "a // b", "x if a else b",
                       "{a, b}", "a is b", "obj.f(x)", "lambda: 1", "..."):
            with self.assertRaises(UnsupportedNode):
                from_python(source)

    def test_syntax_error(self):
        with self.assertRaises(SyntaxError):
            from_python("a +")
