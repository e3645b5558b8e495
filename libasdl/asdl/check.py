"""
# Grammar validator

`check()` goes over a parsed `Module` and either returns a closed `Schema`
or raises `SchemaCheckError` with every error found in the pass:

* every field type resolves to a declared type or a builtin;
* type, constructor and field names are unique and usable as Python names;
* `trivia` fields are optional and appear at most once per constructor;
* every type can be built as a finite tree.

The last point is decided with a fixpoint: builtins are finite, a product is
finite if all its required fields are, and a sum is finite if at least one of
its constructors has only finite required fields. Optional and sequence
fields never force recursion (absence and the empty list terminate it), so
`expr = BinOp(expr left, expr right) | Num(int n)` is fine while
`a = (b x)` with `b = (a y)` is not.

After a successful check every field has `decl` set to the resolved `Type`
(None for builtins) and every constructor has a dense `ntype`, numbered in
declaration order within its sum. The numbering only depends on the order of
the constructors in the source, so it is stable across runs.
"""

import keyword

from . import asdl
from .errors import (SchemaCheckError, UnresolvedTypeError,
        DuplicateDeclarationError, ReservedNameError, TriviaFieldError,
        InvalidRecursionError)

# Names defined by the generated module
generated_names = {
    "AST", "SumBase", "ProductBase", "SimpleSumBase", "ASTVisitor",
    "GenericASTVisitor", "ASTTransformer", "Builder", "Handle", "TriviaNode",
    "Location", "VisitorBase", "TransformerBase", "BuilderBase",
    "TreeConstructionError", "checkinstance", "checkseq", "REQUIRED",
    "OPTIONAL", "SEQUENCE",
}

# Attributes of the node classes and names used by the generated methods
reserved_field_names = {"self", "loc", "ntype", "walkabout",
    "trivia_value"} | generated_names


class Schema(object):
    """
    A closed ASDL module: all references resolved, discriminants assigned.
    """

    def __init__(self, module):
        self.module = module
        self.name = module.name
        self.types = {}
        self.constructors = {}

    def sums(self):
        return [tp for tp in self.module.dfns if isinstance(tp.value, asdl.Sum)]

    def products(self):
        return [tp for tp in self.module.dfns
            if isinstance(tp.value, asdl.Product)]

    def simple_types(self):
        return {tp.name for tp in self.sums() if asdl.is_simple_sum(tp.value)}

    def discriminants(self):
        """
        Returns a list of `(type, constructor, ntype)` triples.
        """
        r = []
        for tp in self.sums():
            for cons in tp.value.types:
                r.append((tp.name, cons.name, cons.ntype))
        return r

    def __repr__(self):
        return "Schema(%s)" % self.name


class Check(asdl.VisitorBase):

    def __init__(self):
        super(Check, self).__init__()
        self.errors = []
        self.names = {}
        self.uses = {}

    def error(self, cls, name, msg, node):
        self.errors.append(cls(name, msg, node.lineno, node.col))

    def declare(self, name, what, node):
        if (keyword.iskeyword(name) or name in generated_names
                or name.startswith("_t_")):
            self.error(ReservedNameError, name,
                "%s name %r is reserved" % (what, name), node)
        conflict = self.names.get(name)
        if conflict is None:
            self.names[name] = (what, node)
        else:
            self.error(DuplicateDeclarationError, name,
                "redefinition of %r (already defined as a %s at %d:%d)"
                % (name, conflict[0], conflict[1].lineno, conflict[1].col),
                node)

    def visitModule(self, mod):
        for dfn in mod.dfns:
            self.visit(dfn)

    def visitType(self, type):
        self.declare(type.name, "type", type)
        self.visit(type.value, type.name)

    def visitSum(self, sum, name):
        self.check_fields(sum.attributes, name, True)
        for i, t in enumerate(sum.types):
            t.ntype = i
            self.declare(t.name, "constructor", t)
            self.check_fields(t.fields, t.name, True, sum.attributes)

    def visitProduct(self, prod, name):
        self.check_fields(prod.fields + prod.attributes, name, False)

    def check_fields(self, fields, owner, is_constructor, attributes=()):
        """
        Checks `fields`; the sum `attributes` of a constructor have been
        checked already, only clashes with them are reported.
        """
        name_fields(fields)
        seen = set(f.name for f in attributes)
        trivia = len([f for f in attributes if f.type == "trivia"])
        for f in fields:
            if f.name in seen:
                self.error(DuplicateDeclarationError, f.name,
                    "field %r repeated in %r" % (f.name, owner), f)
            seen.add(f.name)
            if (keyword.iskeyword(f.name) or f.name in reserved_field_names
                    or f.name.startswith("_")):
                self.error(ReservedNameError, f.name,
                    "field name %r in %r is reserved" % (f.name, owner), f)
            if f.type == "trivia":
                trivia += 1
                if not is_constructor:
                    self.error(TriviaFieldError, f.name,
                        "product %r cannot carry trivia" % owner, f)
                elif not f.opt:
                    self.error(TriviaFieldError, f.name,
                        "trivia field %r in %r must be optional (trivia?)"
                        % (f.name, owner), f)
                elif trivia == 2:
                    self.error(TriviaFieldError, f.name,
                        "%r has more than one trivia field" % owner, f)
            self.uses.setdefault(f.type, []).append((owner, f))


def name_fields(fields):
    """
    Names positional fields after their type: `expr`, `expr1`, `expr2`, ...
    """
    counts = {}
    for f in fields:
        if f.name is None:
            n = counts.get(f.type, 0)
            counts[f.type] = n + 1
            if n == 0:
                f.name = f.type
            else:
                f.name = "%s%d" % (f.type, n)

def _required_types(fields):
    return [f.type for f in fields if not (f.seq or f.opt)]

def finite_types(mod):
    """
    Returns the set of type names (builtins included) that have a finite
    inhabitant. Unresolved names count as finite, they are reported
    separately.
    """
    declared = mod.types
    finite = set(asdl.builtin_types)
    finite.update(t for t in
        (f.type for tp in mod.dfns for f in _all_fields(tp.value))
        if t not in declared)
    changed = True
    while changed:
        changed = False
        for tp in mod.dfns:
            if tp.name in finite:
                continue
            value = tp.value
            if isinstance(value, asdl.Product):
                ok = all(t in finite for t in
                    _required_types(value.fields + value.attributes))
            else:
                ok = any(all(t in finite for t in
                    _required_types(cons.fields + value.attributes))
                    for cons in value.types)
            if ok:
                finite.add(tp.name)
                changed = True
    return finite

def _all_fields(value):
    if isinstance(value, asdl.Product):
        return value.fields + value.attributes
    fields = list(value.attributes)
    for cons in value.types:
        fields.extend(cons.fields)
    return fields

def _infinite_successor(value, finite):
    if isinstance(value, asdl.Product):
        fields = value.fields + value.attributes
    else:
        fields = value.types[0].fields + value.attributes
    for t in _required_types(fields):
        if t not in finite:
            return t
    raise AssertionError("finite type reported as infinite")

def recursion_errors(mod):
    finite = finite_types(mod)
    dfns = {tp.name: tp for tp in mod.dfns}
    errors = []
    reported = set()
    for tp in mod.dfns:
        if tp.name in finite:
            continue
        path = [tp.name]
        name = _infinite_successor(tp.value, finite)
        while name not in path:
            path.append(name)
            name = _infinite_successor(dfns[name].value, finite)
        cycle = path[path.index(name):]
        key = frozenset(cycle)
        if key in reported:
            continue
        reported.add(key)
        first = dfns[cycle[0]]
        errors.append(InvalidRecursionError(first.name, cycle + [cycle[0]],
            first.lineno, first.col))
    return errors


def check(mod):
    """
    Checks the parsed ASDL module and returns the closed `Schema`.

    Raises `SchemaCheckError` listing every error found.
    """
    v = Check()
    v.visit(mod)
    errors = v.errors

    for t in sorted(v.uses):
        if t not in mod.types and t not in asdl.builtin_types:
            owner, f = v.uses[t][0]
            users = ", ".join(sorted(set(o for o, _ in v.uses[t])))
            errors.append(UnresolvedTypeError(t,
                "undefined type %r, used in %s" % (t, users), f.lineno, f.col))

    errors.extend(recursion_errors(mod))
    if errors:
        raise SchemaCheckError(errors)

    schema = Schema(mod)
    for tp in mod.dfns:
        schema.types[tp.name] = tp
    for tp in mod.dfns:
        for f in _all_fields(tp.value):
            f.decl = schema.types.get(f.type)
        if isinstance(tp.value, asdl.Sum):
            for cons in tp.value.types:
                schema.constructors[cons.name] = (cons, tp)
    return schema
