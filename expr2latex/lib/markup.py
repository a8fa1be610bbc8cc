"""
HTML generation from nested function calls.

Every HTML tag is a callable: positional arguments become the children of
the element, keyword arguments its attributes.

    with_html(lambda t: t.p("Some text. ", t.b(t.i("some bold italic text")), id="myid"))
    -> "<p id='myid'>Some text. <b><i>some bold italic text</i></b></p>"

Text children are escaped; output of other tags is marked as HTML and
passes through untouched.
"""

from types import SimpleNamespace

from lxml import etree, html as lxml_html

from ..tree import UnsupportedNode, from_python, reduce_tree


class VoidTagError(Exception):
    """
    Indicate children passed to a tag which cannot have any, e.g. <img>.
    """
    pass


class HTML(str):
    """
    Text which is already valid markup and must not be escaped again.
    """

    def __repr__(self):
        return "<HTML> {}".format(str.__repr__(self))

#-----------------------------------------------------------------------------

def escape(text):
    """
    Escape &, < and > in `text`, unless it is already HTML.
    """
    if isinstance(text, HTML):
        return text
    text = str(text)
    return HTML(text.replace("&", "&amp;")
                    .replace("<", "&lt;")
                    .replace(">", "&gt;"))


def escape_attr(value):
    """
    Escape an attribute value, including quotes and line breaks.
    """
    value = escape(value)
    return HTML(value.replace("'", "&#39;")
                     .replace('"', "&quot;")
                     .replace("\r", "&#13;")
                     .replace("\n", "&#10;"))


def html_attribute(name, value=None):
    """
    Render a single attribute.

    None gives a bare attribute name, booleans are spelled 'true'/'false'.
    A trailing underscore is dropped from the name, so that class_="x" can
    be written in Python.
    """
    name = name.rstrip("_") or name
    if value is None:
        return name
    if isinstance(value, bool):
        value = str(value).lower()
    else:
        value = escape_attr(value)
    return "{}='{}'".format(name, value)


def html_attributes(attrs):
    if not attrs:
        return ""
    return "".join(" " + html_attribute(name, value) for name, value in attrs.items())


class MarkupTag(object):
    """
    Callable producing one HTML element.

    Void tags (<br>, <img>, ...) take attributes only, and render as
    self-closing elements.
    """

    def __init__(self, name, void=False):
        self.name = name
        self.void = void

    def __call__(self, *children, **attrs):
        name = self.name
        attribs = html_attributes(attrs)

        if self.void:
            if children:
                raise VoidTagError("<{}> must not have unnamed arguments".format(name))
            return HTML("<{}{} />".format(name, attribs))

        body = "".join(escape(child) for child in children)
        return HTML("<{}{}>{}</{}>".format(name, attribs, body, name))

    def __repr__(self):
        return "MarkupTag({!r}, void={})".format(self.name, self.void)


def tag(name):
    return MarkupTag(name)


def void_tag(name):
    return MarkupTag(name, void=True)

#-----------------------------------------------------------------------------

TAGS = "a abbr address article aside audio b bdi bdo blockquote body button " \
       "canvas caption cite code colgroup data datalist dd del details dfn div " \
       "dl dt em eventsource fieldset figcaption figure footer form h1 h2 h3 h4 " \
       "h5 h6 head header hgroup html i iframe ins kbd label legend li mark map " \
       "menu meter nav noscript object ol optgroup option output p pre progress " \
       "q ruby rp rt s samp script section select small span strong style sub " \
       "summary sup table tbody td textarea tfoot th thead time title tr u ul " \
       "var video".split()

VOID_TAGS = "area base br col command embed hr img input keygen link meta " \
            "param source track wbr".split()

HTML_TAGS = {}
HTML_TAGS.update((name, tag(name)) for name in TAGS)
HTML_TAGS.update((name, void_tag(name)) for name in VOID_TAGS)


def render_tag_call(node, kids):
    """
    Apply the tag named by a call node; keyword arguments become attributes.
    """
    markup_tag = HTML_TAGS.get(node.name)
    if markup_tag is None:
        raise UnsupportedNode("Unknown HTML tag '{}'".format(node.name))
    children = [kid for kid, name in zip(kids, node.names) if name is None]
    attrs = {name: kid for kid, name in zip(kids, node.names) if name is not None}
    return markup_tag(*children, **attrs)


def reject_name(node, kids):
    raise UnsupportedNode("Unknown name '{}' in HTML code".format(node.name))


HTML_ACTIONS = {
    'literal': lambda node, kids: node.value,
    'identifier': reject_name,
    'call': render_tag_call,
}


def with_html(code):
    """
    Evaluate a block of nested tag calls, with every HTML tag in scope.

    `code` is either a callable, given a namespace whose attributes are the
    tags (t.div, t.p, ...), or a string of Python source made only of tag
    calls and constants. The string is never executed: it is parsed into
    an expression tree and each call is looked up in HTML_TAGS.
    Anything else in the string raises UnsupportedNode.
    """
    if callable(code):
        result = code(SimpleNamespace(**HTML_TAGS))
    else:
        result = reduce_tree(from_python(code), HTML_ACTIONS)
    return escape(result)


def pretty(markup):
    """
    Re-indent `markup` for display. The input must hold a single element.
    """
    element = lxml_html.fragment_fromstring(markup)
    text = etree.tostring(element, pretty_print=True, method='html', encoding='unicode')
    return text.rstrip("\n")
