"""
# ASDL model and parser

Parses a Zephyr ASDL description into a tree of `Module`, `Type`, `Sum`,
`Product`, `Constructor` and `Field` instances. The grammar is:

    module      = "module" Id "{" type+ "}"
    type        = lname "=" (sum | product)
    sum         = constructor ("|" constructor)* ["attributes" "(" fields ")"]
    product     = "(" fields ")" ["attributes" "(" fields ")"]
    constructor = Uname ["(" fields ")"]
    fields      = field ("," field)*
    field       = typeid ["?" | "*"] [name]

Comments start with `--` and run to the end of the line.

The parser only checks the syntax. Name resolution, duplicates and recursion
are checked by `check.check()`, which turns a `Module` into a closed `Schema`.
"""

import re

from ..runtime.node import REQUIRED, OPTIONAL, SEQUENCE
from .errors import SchemaSyntaxError

# Scalars stored as Python values
scalar_types = {
    "identifier": str,
    "string": str,
    "int": int,
    "float": float,
    "bool": bool,
}

# `node` is a handle to any node, `trivia` a TriviaNode
builtin_types = set(scalar_types) | {"node", "trivia"}


class AST(object):
    lineno = 0
    col = 0

    def at(self, lineno, col):
        self.lineno = lineno
        self.col = col
        return self


class Module(AST):
    def __init__(self, name, dfns):
        self.name = name
        self.dfns = dfns
        self.types = {type.name: type.value for type in dfns}

    def __repr__(self):
        return "Module(%s, %s)" % (self.name, self.dfns)


class Type(AST):
    def __init__(self, name, value):
        self.name = name
        self.value = value

    def __repr__(self):
        return "Type(%s, %s)" % (self.name, self.value)


class Constructor(AST):
    def __init__(self, name, fields=None):
        self.name = name
        self.fields = fields or []
        self.ntype = None

    def __repr__(self):
        return "Constructor(%s, %s)" % (self.name, self.fields)


class Field(AST):
    def __init__(self, type, name=None, seq=False, opt=False):
        self.type = type
        self.name = name
        self.seq = seq
        self.opt = opt
        # Set by check(): the resolved Type, None for builtins
        self.decl = None

    @property
    def multiplicity(self):
        if self.seq:
            return SEQUENCE
        elif self.opt:
            return OPTIONAL
        return REQUIRED

    def __repr__(self):
        if self.seq:
            extra = ", seq=True"
        elif self.opt:
            extra = ", opt=True"
        else:
            extra = ""
        if self.name is None:
            return "Field(%s%s)" % (self.type, extra)
        else:
            return "Field(%s, %s%s)" % (self.type, self.name, extra)


class Sum(AST):
    def __init__(self, types, attributes=None):
        self.types = types
        self.attributes = attributes or []

    def __repr__(self):
        if self.attributes:
            return "Sum(%s, %s)" % (self.types, self.attributes)
        else:
            return "Sum(%s)" % self.types


class Product(AST):
    def __init__(self, fields, attributes=None):
        self.fields = fields
        self.attributes = attributes or []
        self.ntype = 0

    def __repr__(self):
        if self.attributes:
            return "Product(%s, %s)" % (self.fields, self.attributes)
        else:
            return "Product(%s)" % self.fields


def is_simple_sum(sum):
    """
    Returns true if `sum` is a simple sum.

    Example of a simple sum:

        boolop = And | Or

    Example of not a simple sum:

        type
            = Integer(int kind)
            | Real(int kind)

    """
    assert isinstance(sum, Sum)
    for constructor in sum.types:
        if constructor.fields:
            return False
    return True


class VisitorBase(object):
    """
    Generic visitor for the ASDL model, dispatching to `visit<ClassName>`.
    """

    def __init__(self):
        self.cache = {}

    def visit(self, obj, *args):
        klass = obj.__class__
        meth = self.cache.get(klass)
        if meth is None:
            methname = "visit" + klass.__name__
            meth = getattr(self, methname, None)
            self.cache[klass] = meth
        if meth:
            return meth(obj, *args)


# ----------------------------
# Tokenizer

class Token(object):
    def __init__(self, kind, value, lineno, col):
        self.kind = kind
        self.value = value
        self.lineno = lineno
        self.col = col

    def __repr__(self):
        return "Token(%s, %r, %d:%d)" % (self.kind, self.value, self.lineno,
            self.col)

_token_re = re.compile(r"""
      (?P<comment>--[^\n]*)
    | (?P<newline>\n)
    | (?P<space>[ \t\r\f]+)
    | (?P<id>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<punct>[{}()|,=?*])
""", re.VERBOSE)

def tokenize(source):
    lineno = 1
    line_start = 0
    pos = 0
    while pos < len(source):
        m = _token_re.match(source, pos)
        col = pos - line_start + 1
        if m is None:
            raise SchemaSyntaxError("Invalid character %r" % source[pos],
                lineno, col)
        kind = m.lastgroup
        value = m.group(kind)
        pos = m.end()
        if kind == "newline":
            lineno += 1
            line_start = pos
        elif kind == "id":
            yield Token("id", value, lineno, col)
        elif kind == "punct":
            yield Token(value, value, lineno, col)
    yield Token("eof", None, lineno, pos - line_start + 1)


# ----------------------------
# Parser

def _describe(token):
    if token.kind == "eof":
        return "end of file"
    return repr(token.value)

class ASDLParser(object):
    """
    Recursive descent parser for ASDL. The grammar is LL(1), so a single
    token of lookahead is enough.
    """

    def __init__(self):
        self.tokens = None
        self.cur = None

    def parse(self, source):
        self.tokens = tokenize(source)
        self._advance()
        return self._parse_module()

    def _advance(self):
        prev = self.cur
        self.cur = next(self.tokens)
        return prev

    def _at(self, kind):
        return self.cur.kind == kind

    def _at_keyword(self, keyword):
        return self.cur.kind == "id" and self.cur.value == keyword

    def _error(self, expected):
        raise SchemaSyntaxError("Expected %s, got %s" % (expected,
            _describe(self.cur)), self.cur.lineno, self.cur.col)

    def _expect(self, kind, expected=None):
        if not self._at(kind):
            self._error(expected or repr(kind))
        return self._advance()

    def _expect_keyword(self, keyword):
        if not self._at_keyword(keyword):
            self._error("keyword %r" % keyword)
        return self._advance()

    def _parse_module(self):
        start = self._expect_keyword("module")
        name = self._expect("id", "module name").value
        self._expect("{")
        defs = []
        while not self._at("}"):
            if self._at("eof"):
                self._error("'}'")
            defs.append(self._parse_definition())
        if not defs:
            self._error("a type definition")
        self._advance()
        if not self._at("eof"):
            self._error("end of file")
        return Module(name, defs).at(start.lineno, start.col)

    def _parse_definition(self):
        tok = self._expect("id", "type name")
        if not (tok.value[0].islower() or tok.value[0] == "_"):
            raise SchemaSyntaxError("Type name %r must start with a "
                "lowercase letter" % tok.value, tok.lineno, tok.col)
        self._expect("=")
        if self._at("("):
            value = self._parse_product()
        else:
            value = self._parse_sum()
        return Type(tok.value, value).at(tok.lineno, tok.col)

    def _parse_product(self):
        tok = self._expect("(")
        fields = self._parse_fields()
        self._expect(")")
        attributes = self._parse_optional_attributes()
        return Product(fields, attributes).at(tok.lineno, tok.col)

    def _parse_sum(self):
        tok = self.cur
        types = [self._parse_constructor()]
        while self._at("|"):
            self._advance()
            types.append(self._parse_constructor())
        attributes = self._parse_optional_attributes()
        return Sum(types, attributes).at(tok.lineno, tok.col)

    def _parse_constructor(self):
        tok = self._expect("id", "constructor name")
        if not tok.value[0].isupper():
            raise SchemaSyntaxError("Constructor name %r must start with an "
                "uppercase letter" % tok.value, tok.lineno, tok.col)
        fields = []
        if self._at("("):
            self._advance()
            fields = self._parse_fields()
            self._expect(")")
        return Constructor(tok.value, fields).at(tok.lineno, tok.col)

    def _parse_optional_attributes(self):
        if self._at_keyword("attributes"):
            self._advance()
            self._expect("(")
            attributes = self._parse_fields()
            self._expect(")")
            return attributes
        return None

    def _parse_fields(self):
        fields = [self._parse_field()]
        while self._at(","):
            self._advance()
            fields.append(self._parse_field())
        return fields

    def _parse_field(self):
        tok = self._expect("id", "field type")
        seq = opt = False
        if self._at("*"):
            self._advance()
            seq = True
        elif self._at("?"):
            self._advance()
            opt = True
        name = None
        if self._at("id"):
            name = self._advance().value
        return Field(tok.value, name, seq=seq, opt=opt).at(tok.lineno, tok.col)


def parse(source):
    """
    Parse the ASDL `source` string into a `Module`.
    """
    return ASDLParser().parse(source)

def parse_file(filename):
    with open(filename, encoding="utf-8") as f:
        source = f.read()
    return parse(source)
