"""
# libasdl

Generates typed AST node classes and visitors from Zephyr ASDL schemas:

* `libasdl.asdl`: schema parser, validator and code generator,
* `libasdl.runtime`: arenas, nodes, trivia, visitors and the source printer
  used by the generated code,
* `libasdl.fortran`: the Fortran schema and its printer.
"""
