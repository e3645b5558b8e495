"""
# Fortran AST

The node classes of the Fortran abstract syntax tree are generated from
`Fortran.asdl` when this package is imported and are available as the `ast`
module (also importable as `libasdl.fortran.ast`). The `ast_to_src()`
function prints a tree back as Fortran source code, keeping the comments and
blank lines stored in the trivia of its statements.

A Fortran parser is not part of this package: it builds trees through
`ast.Builder(arena)`, and `libasdl.runtime.roundtrip` checks it together
with `ast_to_src()`.
"""

import os

from ..asdl import load_file

ast = load_file(os.path.join(os.path.dirname(__file__), "Fortran.asdl"),
    __name__ + ".ast", register=True)

from .ast_to_src import FortranPrinterVisitor, ast_to_src
