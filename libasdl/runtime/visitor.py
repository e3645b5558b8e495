"""
# Visitors

Base classes of the visitors generated for a schema. Each generated module
defines

* `ASTVisitor`: lists the constructors of the schema; a concrete subclass
  must define `visit_<Constructor>` for each of them,
* `GenericASTVisitor`: walks the whole tree, override the methods you need,
* `ASTTransformer`: rebuilds the tree into another arena,
* `Builder`: one method per constructor that allocates a node.

The check for missing methods runs when the class statement is executed, so
adding a constructor to the schema breaks every visitor that does not handle
it as soon as its module is imported. Intermediate classes that are not meant
to be complete are declared with `abstract=True`:

    class Base(ast.ASTVisitor, abstract=True):
        ...
"""

from .arena import Handle, TreeConstructionError


class NonExhaustiveVisitorError(TypeError):

    def __init__(self, cls_name, missing):
        super(NonExhaustiveVisitorError, self).__init__("Visitor %s does not "
            "handle: %s" % (cls_name, ", ".join(missing)))
        self.cls_name = cls_name
        self.missing = missing


class VisitorBase(object):
    _constructors_ = ()
    _simple_constructors_ = ()

    def __init_subclass__(cls, abstract=False, **kwargs):
        super().__init_subclass__(**kwargs)
        if not abstract:
            missing = [name for name in cls._constructors_
                if getattr(cls, "visit_" + name, None) is None]
            if missing:
                raise NonExhaustiveVisitorError(cls.__name__, missing)

    def visit(self, node):
        if isinstance(node, Handle):
            node = node.node
        return node.walkabout(self)

    def visit_sequence(self, seq):
        for node in seq:
            self.visit(node)


class TransformerBase(VisitorBase, abstract=True):
    """
    Rebuilds a frozen tree into `arena`. Each `visit_X` returns the handle
    of the new node. In a sequence a visit may also return None to drop the
    element or a list to replace it with several.
    """

    def __init__(self, arena):
        self.arena = arena

    def visit(self, node):
        if isinstance(node, Handle):
            source = node.arena
            if source is self.arena:
                raise TreeConstructionError("Cannot transform a tree into "
                    "its own arena")
            if not source.frozen:
                raise TreeConstructionError("The source arena must be frozen "
                    "before it is transformed")
        return VisitorBase.visit(self, node)

    def visit_sequence(self, seq):
        new_seq = []
        for node in seq:
            value = self.visit(node)
            if value is None:
                continue
            elif isinstance(value, list):
                new_seq.extend(value)
            else:
                new_seq.append(value)
        return new_seq

    def transform(self, node):
        return self.visit(node)


class BuilderBase(object):

    def __init__(self, arena):
        self.arena = arena
