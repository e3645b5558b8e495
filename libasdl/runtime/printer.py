r"""
# Source printer

`SourcePrinter` turns a tree back into source text. A printer for a schema
is a class deriving from both `SourcePrinter` and the generated
`ASTVisitor`, with one template per constructor and one string per simple
constructor:

    class Printer(SourcePrinter, ast.ASTVisitor):
        templates = {
            "If": "IF {test} THEN{body#}[ELSE{orelse#}]END IF",
            "BinOp": "{left} {op} {right}",
            ...
        }
        operators = {"Add": "+", "Mul": "*"}

Both tables must cover the whole schema; like for any other visitor this is
checked when the class is created. A constructor can also be printed by an
explicit `visit_X` method, which then takes precedence over its template.

Template directives:

    {f}         the value of field f (nothing if it is None)
    {f|text}    the value of f, or `text` if f is None
    {f*sep}     the elements of the sequence f joined by `sep`
    {f#}, {f#N} the elements of f as a block, one per line, indented by N
                levels (default 1)
    [...]       printed only if one of the optional or sequence fields
                used inside is present
    \{ \} \[ \] \\ literal braces, brackets and backslash

Statements are the nodes that have a trivia field or a block. They end
their line themselves: the header line of the first block with the `inside`
trivia, the last line with the `after` trivia.
"""

import re

from .arena import Handle
from .node import AST, SimpleSumBase, OPTIONAL, SEQUENCE
from .trivia import TriviaError, TriviaNode, Comment, EOLComment, Semicolon
from .visitor import VisitorBase, NonExhaustiveVisitorError


class TemplateError(Exception):
    pass


_directive_re = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)(.*)\Z", re.S)

def parse_directive(text, name):
    m = _directive_re.match(text)
    if m is None:
        raise TemplateError("%s: invalid directive {%s}" % (name, text))
    field, rest = m.groups()
    if not rest:
        return ("value", field)
    elif rest[0] == "|":
        return ("default", field, rest[1:])
    elif rest[0] == "*":
        return ("join", field, rest[1:])
    elif rest[0] == "#":
        if not rest[1:]:
            return ("block", field, 1)
        elif rest[1:].isdigit():
            return ("block", field, int(rest[1:]))
    raise TemplateError("%s: invalid directive {%s}" % (name, text))

def template_fields(parts):
    fields = []
    for part in parts:
        if part[0] == "group":
            fields.extend(template_fields(part[1]))
        elif part[0] != "text":
            fields.append(part[1])
    return fields

def has_block(parts):
    for part in parts:
        if part[0] == "block":
            return True
        elif part[0] == "group" and has_block(part[1]):
            return True
    return False

def compile_template(text, name="template"):
    """
    Compiles a template into a list of parts: `("text", s)`,
    `("group", parts, fields)` or one of the directives returned by
    `parse_directive()`.
    """
    if "\n" in text:
        raise TemplateError("%s: templates cannot contain newlines, use a "
            "block directive" % name)
    stack = [[]]
    literal = []
    def flush():
        if literal:
            stack[-1].append(("text", "".join(literal)))
            del literal[:]
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\":
            if i + 1 == len(text):
                raise TemplateError("%s: trailing '\\'" % name)
            literal.append(text[i+1])
            i += 2
        elif c == "{":
            end = text.find("}", i)
            if end == -1:
                raise TemplateError("%s: unterminated '{'" % name)
            flush()
            stack[-1].append(parse_directive(text[i+1:end], name))
            i = end + 1
        elif c == "[":
            flush()
            stack.append([])
            i += 1
        elif c == "]":
            if len(stack) == 1:
                raise TemplateError("%s: unbalanced ']'" % name)
            flush()
            parts = stack.pop()
            stack[-1].append(("group", parts, template_fields(parts)))
            i += 1
        elif c == "}":
            raise TemplateError("%s: unbalanced '}'" % name)
        else:
            literal.append(c)
            i += 1
    flush()
    if len(stack) != 1:
        raise TemplateError("%s: unterminated '['" % name)
    return stack[0]


def _template_visitor(name):
    def visit(self, node):
        return self.render(node, name)
    visit.__name__ = "visit_" + name
    return visit


class _LineState(object):

    def __init__(self, inside):
        self.inside = inside
        self.header_closed = False


class SourcePrinter(VisitorBase, abstract=True):
    templates = {}
    operators = {}
    indent = "  "
    bool_format = ("False", "True")

    def __init_subclass__(cls, abstract=False, **kwargs):
        if not abstract:
            cls._compile_templates()
            missing = [name for name in cls._simple_constructors_
                if name not in cls.operators]
            if missing:
                raise NonExhaustiveVisitorError(cls.__name__, missing)
        super().__init_subclass__(abstract=abstract, **kwargs)

    @classmethod
    def _compile_templates(cls):
        classes = getattr(cls, "_node_classes_", {})
        compiled = {}
        for name, text in cls.templates.items():
            if name not in cls._constructors_:
                raise TemplateError("%s: template for unknown constructor %r"
                    % (cls.__name__, name))
            parts = compile_template(text, name)
            node_cls = classes.get(name)
            if node_cls is not None:
                known = node_cls._fields + node_cls._attributes
                for field in template_fields(parts):
                    if field not in known:
                        raise TemplateError("%s: %s has no field %r"
                            % (cls.__name__, name, field))
            compiled[name] = parts
            if "visit_" + name not in cls.__dict__:
                setattr(cls, "visit_" + name, _template_visitor(name))
        cls._compiled_ = compiled
        cls._line_level_ = set(name for name, parts in compiled.items()
            if has_block(parts))

    def print(self, node):
        """
        Returns the source text of the tree in `node`.
        """
        self._out = []
        self._bol = True
        self._level = 0
        self.visit(node)
        return "".join(self._out)

    def write(self, text):
        if not text:
            return
        if self._bol:
            self._out.append(self.indent * self._level)
            self._bol = False
        self._out.append(text)

    def newline(self):
        self._out.append("\n")
        self._bol = True

    def close_line(self, items):
        """
        Ends the current line with the trivia `items`.
        """
        if not items:
            self.newline()
            return
        first = items[0]
        if isinstance(first, Semicolon):
            self.write("; ")
            return
        elif isinstance(first, EOLComment):
            self.write(" " + first.comment)
        self.newline()
        for item in items[1:]:
            if isinstance(item, Comment):
                self.write(item.comment)
            self.newline()

    def is_line_level(self, node):
        if isinstance(node, Handle):
            node = node.node
        if not isinstance(node, AST):
            return False
        return (node._trivia_field is not None
            or node.__class__.__name__ in self._line_level_)

    def emit(self, value):
        if isinstance(value, SimpleSumBase):
            self.write(self.operators[value.__class__.__name__])
        elif isinstance(value, (Handle, AST)):
            self.visit(value)
        elif isinstance(value, bool):
            self.write(self.bool_format[value])
        elif isinstance(value, TriviaNode):
            raise TemplateError("Trivia cannot be printed as a field")
        else:
            self.write(str(value))

    def emit_line(self, value):
        self.emit(value)
        if not self._bol and not self.is_line_level(value):
            self.newline()

    def render(self, node, name):
        trivia = node.trivia_value
        state = _LineState(trivia.inside if trivia is not None else ())
        self.render_parts(node, self._compiled_[name], state)
        if node._trivia_field is not None or name in self._line_level_:
            after = trivia.after if trivia is not None else ()
            if not self._bol:
                self.close_line(after)
            elif after:
                raise TriviaError("%s ends with a block, there is no line for "
                    "its 'after' trivia" % name)
        if state.inside and not state.header_closed:
            raise TriviaError("%s has no block header line for its 'inside' "
                "trivia" % name)

    def render_parts(self, node, parts, state):
        for part in parts:
            kind = part[0]
            if kind == "text":
                self.write(part[1])
            elif kind == "group":
                if self.group_present(node, part[2]):
                    self.render_parts(node, part[1], state)
            else:
                value = getattr(node, part[1])
                if kind == "value":
                    if isinstance(value, tuple):
                        self.emit_join(value, ", ")
                    elif value is not None:
                        self.emit(value)
                elif kind == "default":
                    if value is None:
                        self.write(part[2])
                    else:
                        self.emit(value)
                elif kind == "join":
                    if isinstance(value, tuple):
                        self.emit_join(value, part[2])
                    elif value is not None:
                        self.emit(value)
                else:
                    self.emit_block(value, part[2], state)

    def emit_join(self, values, sep):
        for i, value in enumerate(values):
            if i > 0:
                self.write(sep)
            self.emit(value)

    def emit_block(self, value, level, state):
        if not self._bol:
            if state.header_closed:
                self.close_line(())
            else:
                state.header_closed = True
                self.close_line(state.inside)
        self._level += level
        if isinstance(value, tuple):
            for x in value:
                self.emit_line(x)
        elif value is not None:
            self.emit_line(value)
        self._level -= level

    def group_present(self, node, fields):
        multiplicity = dict(zip(node._fields + node._attributes,
            node._multiplicity))
        present = None
        for field in fields:
            m = multiplicity[field]
            if m == OPTIONAL:
                present = present or getattr(node, field) is not None
            elif m == SEQUENCE:
                present = present or len(getattr(node, field)) > 0
        return present is None or present
