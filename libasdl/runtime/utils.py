import io
from prompt_toolkit.data_structures import Size
from prompt_toolkit.output.vt100 import Vt100_Output
from prompt_toolkit import print_formatted_text, HTML

from .arena import Handle
from .node import AST, SimpleSumBase
from .trivia import TriviaNode, TriviaItem


def iter_fields(node):
    """
    Yield a tuple of ``(fieldname, value)`` for each field in ``node._fields``
    that is present on *node*.
    """
    for field in node._fields:
        try:
            yield field, getattr(node, field)
        except AttributeError:
            pass

def _deref(node):
    if isinstance(node, Handle):
        return node.node
    return node

def dump(node, annotate_fields=True, include_attributes=False):
    """
    Return a formatted dump of the tree in *node*.  This is mainly useful for
    debugging purposes.  The returned string will show the names and the values
    for fields.  Attributes such as line numbers and column offsets are not
    dumped by default.  If this is wanted, *include_attributes* can be set to
    True, which also shows the source location of every node.
    """
    def _format(node):
        node = _deref(node)
        if isinstance(node, AST):
            fields = [(a, _format(b)) for a, b in iter_fields(node)]
            rv = '%s(%s' % (node.__class__.__name__, ', '.join(
                ('%s=%s' % field for field in fields)
                if annotate_fields else
                (b for a, b in fields)
            ))
            if include_attributes:
                attrs = [(a, getattr(node, a)) for a in node._attributes]
                if node.loc is not None:
                    attrs.append(("loc", str(node.loc)))
                if attrs:
                    rv += fields and ', ' or ''
                    rv += ', '.join('%s=%s' % (a, _format(b))
                        for a, b in attrs)
            return rv + ')'
        elif isinstance(node, (list, tuple)):
            return '[%s]' % ', '.join(_format(x) for x in node)
        return repr(node)
    if not isinstance(_deref(node), (AST, list, tuple)):
        raise TypeError('expected AST, got %r' % node.__class__.__name__)
    return _format(node)

def to_tuple(node, include_location=False):
    """
    Converts the tree in `node` to nested tuples that compare equal exactly
    when the trees are structurally equal. Handles are replaced by the nodes
    they point to, so trees in different arenas can be compared.
    """
    node = _deref(node)
    if isinstance(node, AST):
        r = [node.__class__.__name__]
        for field, value in iter_fields(node):
            r.append(to_tuple(value, include_location))
        for a in node._attributes:
            r.append(to_tuple(getattr(node, a), include_location))
        if include_location and not isinstance(node, SimpleSumBase):
            r.append(node.loc)
        return tuple(r)
    elif isinstance(node, (list, tuple)):
        return [to_tuple(x, include_location) for x in node]
    elif isinstance(node, TriviaNode):
        return ("TriviaNode", to_tuple(node.inside), to_tuple(node.after))
    elif isinstance(node, TriviaItem):
        return (node.__class__.__name__,) + tuple(getattr(node, f)
            for f in node._fields)
    return node

def equal(a, b, include_location=False):
    return to_tuple(a, include_location) == to_tuple(b, include_location)

def walk(node):
    """
    Yield every node and product of the tree in `node`, parents before their
    children and children in field order. The traversal does not recurse, so
    it works for arbitrarily deep trees.
    """
    stack = [node]
    while stack:
        node = _deref(stack.pop())
        if not isinstance(node, AST) or isinstance(node, SimpleSumBase):
            continue
        yield node
        children = []
        for field, value in iter_fields(node):
            if isinstance(value, tuple):
                children.extend(value)
            elif isinstance(value, (Handle, AST)):
                children.append(value)
        stack.extend(reversed(children))

def make_tree(root, children, color=False):
    """
    Takes strings `root` and a list of strings `children` and it returns a
    string with the tree properly formatted.

    color ... True: print the tree in color, False: no colors

    Example:

    >>> from libasdl.runtime.utils import make_tree
    >>> print(make_tree("a", ["1", "2"]))
    a
    ├─1
    ╰─2
    >>> print(make_tree("a", [make_tree("A", ["B", "C"]), "2"]))
    a
    ├─A
    │ ├─B
    │ ╰─C
    ╰─2
    """
    def indent(s, type=1, color=False):
        x = s.split("\n")
        r = []
        if type == 1:
            tree_char = "├─"
        else:
            tree_char = "╰─"
        if color:
            tree_char = fmt("<bold><ansigreen>%s</ansigreen></bold>" \
                % tree_char)
        r.append(tree_char + x[0])
        for a in x[1:]:
            if type == 1:
                tree_char = "│ "
            else:
                tree_char = "  "
            if color:
                tree_char = fmt("<bold><ansigreen>%s</ansigreen></bold>" \
                    % tree_char)
            r.append(tree_char + a)
        return '\n'.join(r)
    f = []
    f.append(root)
    if len(children) > 0:
        for a in children[:-1]:
            f.append(indent(a, 1, color))
        f.append(indent(children[-1], 2, color))
    return '\n'.join(f)

def fmt(text):
    s = io.StringIO()
    o = Vt100_Output(s, lambda : Size(rows=24, columns=80))
    print_formatted_text(HTML(text), end='', output=o)
    return s.getvalue()

def tree_str(node, color=True):
    """
    Returns the tree in `node` drawn with box characters, one field per line.
    """
    def _format(node):
        node = _deref(node)
        if isinstance(node, AST) and not isinstance(node, SimpleSumBase):
            t = node.__class__.__bases__[0]
            if t.__module__ == node.__class__.__module__:
                root = t.__name__ + "."
            else:
                root = ""
            root += node.__class__.__name__
            if color:
                root = fmt("<bold><ansiblue>%s</ansiblue></bold>" % root)
            children = []
            for a, b in iter_fields(node):
                if isinstance(b, tuple):
                    if len(b) == 0:
                        children.append(make_tree(a + "=[]", [], color))
                    else:
                        children.append(make_tree(a + "=↓",
                            [_format(x) for x in b], color))
                else:
                    children.append(a + "=" + _format(b))
            return make_tree(root, children, color)
        if isinstance(node, SimpleSumBase):
            r = node.__class__.__name__
        else:
            r = repr(node)
        if color:
            r = fmt("<ansigreen>%s</ansigreen>" % r.replace("&", "&amp;")
                .replace("<", "&lt;").replace(">", "&gt;"))
        return r
    if not isinstance(_deref(node), AST):
        raise TypeError('expected AST, got %r' % node.__class__.__name__)
    s = ""
    if color:
        s += fmt("Legend: "
            "<bold><ansiblue>Node</ansiblue></bold>, "
            "Field, "
            "<ansigreen>Token</ansigreen>"
            "\n"
            )
    s += _format(node)
    return s

def print_tree(node, color=True):
    print(tree_str(node, color))
