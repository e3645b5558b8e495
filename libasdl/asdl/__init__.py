"""
Loading ASDL schemas.

`load()` and `load_file()` parse and check a schema, generate its node
classes and return them as a module:

    ast = load_file("Fortran.asdl", "libasdl.fortran.ast")
    b = ast.Builder(arena)
"""

import linecache
import sys
import types

from .asdl import parse, parse_file
from .check import check, Schema
from .errors import (SchemaError, SchemaSyntaxError, SchemaSemanticError,
        SchemaCheckError, UnresolvedTypeError, DuplicateDeclarationError,
        ReservedNameError, TriviaFieldError, InvalidRecursionError)
from .asdl_py import generate


def build_module(schema, modname=None, register=False):
    """
    Executes the generated source for `schema` in a new module. If
    `register` is True the module is also added to `sys.modules`.
    """
    if modname is None:
        modname = schema.name.lower()
    source = generate(schema)
    filename = "<asdl %s>" % schema.name
    # Keep the source around for tracebacks
    linecache.cache[filename] = (len(source), None,
        source.splitlines(True), filename)
    mod = types.ModuleType(modname,
        "Node classes generated from the %s schema." % schema.name)
    mod.__file__ = filename
    exec(compile(source, filename, "exec"), mod.__dict__)
    mod.__schema__ = schema
    mod.__source__ = source
    if register:
        sys.modules[modname] = mod
    return mod

def load(source, modname=None, register=False):
    return build_module(check(parse(source)), modname, register)

def load_file(filename, modname=None, register=False):
    return build_module(check(parse_file(filename)), modname, register)
