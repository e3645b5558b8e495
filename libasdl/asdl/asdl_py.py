"""
Generate AST node definitions from an ASDL description.

The generated module contains the node classes, an `ASTVisitor` base that
lists every constructor, a `GenericASTVisitor` that walks a tree, an
`ASTTransformer` that rebuilds one into another arena and a `Builder` with
one allocating method per constructor. It only depends on `libasdl.runtime`.
"""

import io
import sys

from . import asdl
from .check import check


class ASDLVisitor(asdl.VisitorBase):

    def __init__(self, stream, data):
        super(ASDLVisitor, self).__init__()
        self.stream = stream
        self.data = data

    def visitModule(self, mod, *args):
        for df in mod.dfns:
            self.visit(df, *args)

    def visitSum(self, sum, *args):
        for tp in sum.types:
            self.visit(tp, *args)

    def visitType(self, tp, *args):
        self.visit(tp.value, *args)

    def visitProduct(self, prod, *args):
        for field in prod.fields:
            self.visit(field, *args)

    def visitConstructor(self, cons, *args):
        for field in cons.fields:
            self.visit(field, *args)

    def visitField(self, field, *args):
        pass

    def emit(self, line, level=0):
        indent = "    "*level
        if line:
            self.stream.write(indent + line + "\n")
        else:
            self.stream.write("\n")


is_simple_sum = asdl.is_simple_sum

def attr_default(attr):
    if attr.seq:
        return "()"
    elif attr.opt:
        return "None"
    elif attr.type == "int":
        if attr.name in ["lineno", "col_offset"]:
            return "1"
        return "0"
    return "None"

def attr_to_args(attrs):
    return ", ".join("%s=%s" % (attr.name, attr_default(attr))
        for attr in attrs)

def fields_to_args(fields, attrs):
    """
    Constructor arguments: the fields in declared order, with defaults for
    the optional and sequence fields after the last required one, then the
    attributes and the source location.
    """
    last_required = -1
    for i, field in enumerate(fields):
        if not (field.seq or field.opt):
            last_required = i
    args = []
    for i, field in enumerate(fields):
        if i <= last_required:
            args.append(field.name)
        elif field.seq:
            args.append(field.name + "=()")
        else:
            args.append(field.name + "=None")
    if attrs:
        args.append(attr_to_args(attrs))
    args.append("loc=None")
    return ", ".join(args)

def tuple_repr(names):
    s = ", ".join(names)
    if len(names) == 1:
        s = s + ","
    return "(%s)" % s

multiplicity_names = {
    asdl.REQUIRED: "REQUIRED",
    asdl.OPTIONAL: "OPTIONAL",
    asdl.SEQUENCE: "SEQUENCE",
}


class ASDLData(object):

    def __init__(self, schema):
        self.schema = schema
        self.simple_types = schema.simple_types()
        self.products = set(tp.name for tp in schema.products())
        self.sums = set(tp.name for tp in schema.sums()) - self.simple_types
        # Names of the classes a visitor has to handle, in declaration order
        self.constructors = []
        self.simple_constructors = []
        for tp in schema.module.dfns:
            if isinstance(tp.value, asdl.Product):
                self.constructors.append(tp.name)
            elif tp.name in self.simple_types:
                self.simple_constructors.extend(c.name for c in tp.value.types)
            else:
                self.constructors.extend(c.name for c in tp.value.types)

    def python_type(self, field):
        if field.type in asdl.scalar_types:
            return "_t_" + asdl.scalar_types[field.type].__name__
        elif field.type == "trivia":
            return "TriviaNode"
        elif field.type in self.simple_types or field.type in self.products:
            return "_t_" + field.type
        # sums and `node`
        return "Handle"

    def is_handle(self, field):
        return field.type == "node" or field.type in self.sums

    def is_visited(self, field):
        return self.is_handle(field) or field.type in self.products


class ASTNodeVisitor(ASDLVisitor):

    def visitType(self, tp):
        self.visit(tp.value, tp.name)

    def visitSum(self, sum, base):
        if is_simple_sum(sum):
            self.emit("class %s(SimpleSumBase): # Simple sum" % (base,))
            self.emit(    "pass", 1)
            self.emit("")
            self.emit("")
            for cons in sum.types:
                self.emit("class %s(%s): # Type" % (cons.name, base))
                self.emit(    "ntype = %d" % cons.ntype, 1)
                self.emit("")
                self.emit(    "def walkabout(self, visitor):", 1)
                self.emit(        "return visitor.visit_%s(self)" % cons.name, 2)
                self.emit("")
                self.emit("")
        else:
            self.emit("class %s(SumBase): # Sum" % (base,))
            if sum.attributes:
                self.emit("_attributes = %s" % tuple_repr(["'%s'" % a.name
                    for a in sum.attributes]), 1)
                self.emit("")
                self.emit("def __init__(self, %s, loc=None):" \
                    % attr_to_args(sum.attributes), 1)
                for attr in sum.attributes:
                    self.visitField(attr, True)
                self.emit(    "SumBase.__init__(self, loc)", 2)
            else:
                self.emit("pass", 1)
            self.emit("")
            self.emit("")
            for cons in sum.types:
                self.visit(cons, base, sum.attributes)

    def visitProduct(self, product, name):
        self.emit("class %s(ProductBase): # Product" % (name,))
        self.emit(    "ntype = 0", 1)
        self.emit_class_data(product.fields, product.attributes)
        self.emit("")
        self.emit("def __init__(self, %s):" % fields_to_args(product.fields,
            product.attributes), 1)
        for field in product.fields:
            self.visitField(field)
        for attr in product.attributes:
            self.visitField(attr, True)
        self.emit(    "ProductBase.__init__(self, loc)", 2)
        self.emit_check_refs(product.fields + product.attributes)
        self.emit_walkabout(name)

    def visitConstructor(self, cons, base, extra_attributes):
        self.emit("class %s(%s): # Constructor" % (cons.name, base))
        self.emit(    "ntype = %d" % cons.ntype, 1)
        self.emit_class_data(cons.fields, extra_attributes)
        self.emit("")
        self.emit("def __init__(self, %s):" % fields_to_args(cons.fields,
            extra_attributes), 1)
        for field in cons.fields:
            self.visitField(field)
        base_args = [attr.name for attr in extra_attributes] + ["loc"]
        self.emit(    "_t_%s.__init__(self, %s)" % (base,
            ", ".join(base_args)), 2)
        self.emit_check_refs(cons.fields + extra_attributes)
        self.emit_walkabout(cons.name)

    def emit_class_data(self, fields, attributes):
        self.emit("_fields = %s" % tuple_repr(["'%s'" % f.name
            for f in fields]), 1)
        self.emit("_multiplicity = %s" % tuple_repr([
            multiplicity_names[f.multiplicity] for f in fields + attributes]),
            1)
        if attributes:
            self.emit("_attributes = %s" % tuple_repr(["'%s'" % a.name
                for a in attributes]), 1)
        for field in fields + attributes:
            if field.type == "trivia":
                self.emit("_trivia_field = '%s'" % field.name, 1)

    def emit_walkabout(self, name):
        self.emit("")
        self.emit("def walkabout(self, visitor):", 1)
        self.emit(    "return visitor.visit_%s(self)" % (name,), 2)
        self.emit("")
        self.emit("")

    def emit_check_refs(self, fields):
        refs = [f for f in fields if self.data.is_visited(f)]
        if not refs:
            return
        self.emit("")
        self.emit("def _check_refs(self, arena):", 1)
        for field in refs:
            if self.data.is_handle(field):
                if field.type == "node":
                    tp = "None"
                else:
                    tp = "_t_" + field.type
                template = "arena.check_ref(%%s, %s, '%s')" % (tp, field.name)
            else:
                template = "%s._check_refs(arena)"
            if field.seq:
                self.emit("for x in self.%s:" % field.name, 2)
                self.emit(template % "x", 3)
            elif field.opt:
                self.emit("if self.%s is not None:" % field.name, 2)
                self.emit(template % ("self." + field.name), 3)
            else:
                self.emit(template % ("self." + field.name), 2)

    def visitField(self, field, attribute=False):
        type_ = self.data.python_type(field)
        if field.seq:
            self.emit("self.%s = checkseq(%s, %s, '%s')" % (field.name,
                field.name, type_, field.name), 2)
        else:
            opt = field.opt or (attribute and attr_default(field) == "None")
            self.emit("checkinstance(%s, %s, %r, '%s')" % (field.name, type_,
                opt, field.name), 2)
            self.emit("self.%s = %s" % (field.name, field.name), 2)


def emit_name_list(visitor, name, names):
    if not names:
        visitor.emit("%s = ()" % name, 1)
        return
    visitor.emit("%s = (" % name, 1)
    for n in names:
        visitor.emit("'%s'," % n, 2)
    visitor.emit(")", 1)


class ASTVisitorVisitor(ASDLVisitor):

    def visitModule(self, mod):
        self.emit("class ASTVisitor(VisitorBase, abstract=True):")
        emit_name_list(self, "_constructors_", self.data.constructors)
        emit_name_list(self, "_simple_constructors_",
            self.data.simple_constructors)
        self.emit("_node_classes_ = {", 1)
        for name in self.data.constructors + self.data.simple_constructors:
            self.emit("'%s': %s," % (name, name), 2)
        self.emit("}", 1)
        self.emit("")
        self.emit("")


class GenericASTVisitorVisitor(ASDLVisitor):

    def visitModule(self, mod):
        self.emit("class GenericASTVisitor(ASTVisitor):")
        self.emit("")
        super(GenericASTVisitorVisitor, self).visitModule(mod)
        self.emit("")

    def visitType(self, tp):
        if isinstance(tp.value, asdl.Product):
            self.make_visitor(tp.name, tp.value.fields + tp.value.attributes)
        elif not is_simple_sum(tp.value):
            for cons in tp.value.types:
                self.make_visitor(cons.name,
                    cons.fields + tp.value.attributes)

    def make_visitor(self, name, fields):
        self.emit("def visit_%s(self, node):" % (name,), 1)
        have_body = False
        for field in fields:
            if self.visitField(field):
                have_body = True
        if not have_body:
            self.emit("pass", 2)
        self.emit("")

    def visitField(self, field):
        if self.data.is_visited(field):
            level = 2
            template = "self.visit(node.%s)"
            if field.seq:
                template = "self.visit_sequence(node.%s)"
            elif field.opt:
                self.emit("if node.%s is not None:" % (field.name,), 2)
                level = 3
            self.emit(template % (field.name,), level)
            return True
        return False


class ASTTransformerVisitor(ASDLVisitor):

    def visitModule(self, mod):
        self.emit("class ASTTransformer(TransformerBase, ASTVisitor):")
        self.emit("")
        super(ASTTransformerVisitor, self).visitModule(mod)
        self.emit("")

    def visitType(self, tp):
        if isinstance(tp.value, asdl.Product):
            self.make_visitor(tp.name, tp.value.fields, tp.value.attributes,
                False)
        elif not is_simple_sum(tp.value):
            for cons in tp.value.types:
                self.make_visitor(cons.name, cons.fields,
                    tp.value.attributes, True)

    def make_visitor(self, name, fields, attributes, allocate):
        self.emit("def visit_%s(self, node):" % (name,), 1)
        args = [self.visitField(field) for field in fields]
        for attr in attributes:
            args.append("%s=%s" % (attr.name, self.visitField(attr)))
        args.append("loc=node.loc")
        if allocate:
            self.emit("return self.arena.allocate(_t_%s," % name, 2)
        else:
            self.emit("return _t_%s(" % name, 2)
        for arg in args[:-1]:
            self.emit(arg + ",", 3)
        self.emit(args[-1] + ")", 3)
        self.emit("")

    def visitField(self, field):
        """
        Returns the expression rebuilding `field` of `node`.
        """
        if not self.data.is_visited(field):
            return "node.%s" % field.name
        elif field.seq:
            return "self.visit_sequence(node.%s)" % field.name
        elif field.opt:
            return "None if node.%s is None else self.visit(node.%s)" \
                % (field.name, field.name)
        return "self.visit(node.%s)" % field.name


class BuilderVisitor(ASDLVisitor):

    def visitModule(self, mod):
        self.emit("class Builder(BuilderBase):")
        self.emit("")
        super(BuilderVisitor, self).visitModule(mod)
        self.emit("")

    def visitType(self, tp):
        if (isinstance(tp.value, asdl.Sum) and
                not is_simple_sum(tp.value)):
            super(BuilderVisitor, self).visitType(tp, tp.value)

    def visitConstructor(self, cons, sum):
        params = fields_to_args(cons.fields, sum.attributes)
        args = [f.name for f in cons.fields]
        args.extend("%s=%s" % (a.name, a.name) for a in sum.attributes)
        args.append("loc=loc")
        self.emit("def %s(self, %s):" % (cons.name, params), 1)
        self.emit(    "return self.arena.allocate(_t_%s, %s)" % (cons.name,
            ", ".join(args)), 2)
        self.emit("")


class ClassAliasVisitor(ASDLVisitor):
    """
    Emits a `_t_<name>` alias for every node class. Generated methods refer to
    the classes through these, as their parameters are named after the
    fields and can hide any type or constructor name.
    """

    def visitModule(self, mod):
        super(ClassAliasVisitor, self).visitModule(mod)
        self.emit("")
        self.emit("")

    def visitType(self, tp):
        self.emit("_t_%s = %s" % (tp.name, tp.name))
        if isinstance(tp.value, asdl.Sum):
            for cons in tp.value.types:
                self.emit("_t_%s = %s" % (cons.name, cons.name))


HEAD = r"""# Generated by libasdl/asdl/asdl_py.py from %(name)s.asdl

from libasdl.runtime.arena import Handle, TreeConstructionError
from libasdl.runtime.node import (AST, SumBase, ProductBase, SimpleSumBase,
        Location, checkinstance, checkseq, REQUIRED, OPTIONAL, SEQUENCE)
from libasdl.runtime.trivia import TriviaNode
from libasdl.runtime.visitor import VisitorBase, TransformerBase, BuilderBase

_t_str, _t_int, _t_float, _t_bool = str, int, float, bool


"""

visitors = [ASTNodeVisitor, ClassAliasVisitor, ASTVisitorVisitor,
    GenericASTVisitorVisitor, ASTTransformerVisitor, BuilderVisitor]


def generate(schema):
    """
    Returns the Python source of the module implementing `schema`.
    """
    data = ASDLData(schema)
    fp = io.StringIO()
    fp.write(HEAD % {"name": schema.name})
    for visitor in visitors:
        visitor(fp, data).visit(schema.module)
    return fp.getvalue()


def main(argv):
    if len(argv) == 3:
        def_file, out_file = argv[1:]
    else:
        print("usage: asdl_py.py FILE.asdl OUT.py")
        return 2
    schema = check(asdl.parse_file(def_file))
    with open(out_file, "w", encoding="utf-8") as fp:
        fp.write(generate(schema))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
