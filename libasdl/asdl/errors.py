"""
Errors reported while loading an ASDL schema.

All of them are build-time errors: the schema has to be fixed, nothing is
retried. They are raised to the caller and never printed here.
"""

class SchemaError(Exception):
    pass


class SchemaSyntaxError(SchemaError):

    def __init__(self, msg, lineno, col):
        super(SchemaSyntaxError, self).__init__("%d:%d: %s" % (lineno, col,
            msg))
        self.msg = msg
        self.lineno = lineno
        self.col = col


class SchemaSemanticError(SchemaError):
    """
    Base class of the errors collected by `check()`. `name` is the offending
    identifier, `lineno` and `col` the best available position.
    """
    kind = "semantic error"

    def __init__(self, name, msg, lineno=0, col=0):
        super(SchemaSemanticError, self).__init__("%d:%d: %s: %s" % (lineno,
            col, self.kind, msg))
        self.name = name
        self.msg = msg
        self.lineno = lineno
        self.col = col

class UnresolvedTypeError(SchemaSemanticError):
    kind = "unresolved type"

class DuplicateDeclarationError(SchemaSemanticError):
    kind = "duplicate declaration"

class ReservedNameError(SchemaSemanticError):
    kind = "reserved name"

class TriviaFieldError(SchemaSemanticError):
    kind = "invalid trivia field"

class InvalidRecursionError(SchemaSemanticError):
    kind = "invalid recursion"

    def __init__(self, name, cycle, lineno=0, col=0):
        super(InvalidRecursionError, self).__init__(name,
            "type %r can only be built as an infinite tree: %s" % (name,
            " -> ".join(cycle)), lineno, col)
        self.cycle = cycle


class SchemaCheckError(SchemaError):
    """
    All errors found in one validation pass, in the order they were found.
    """

    def __init__(self, errors):
        super(SchemaCheckError, self).__init__("%d error(s) in schema:\n%s"
            % (len(errors), "\n".join(str(e) for e in errors)))
        self.errors = errors
