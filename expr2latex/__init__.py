from .tree import Literal, Identifier, Call, UnsupportedNode, from_python
from .lib.latex import translate, to_math
from .lib.markup import HTML, with_html
