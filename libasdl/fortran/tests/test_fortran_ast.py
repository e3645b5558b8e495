import sys

import pytest

from libasdl.fortran import ast
from libasdl.runtime import Arena, TreeConstructionError, is_present

class CountNum(ast.GenericASTVisitor):

    def __init__(self):
        self.count = 0

    def visit_Num(self, node):
        self.count += 1


def test_module():
    assert sys.modules["libasdl.fortran.ast"] is ast
    assert ast.__schema__.name == "Fortran"
    assert "DoLoop" in ast.ASTVisitor._constructors_
    assert "var_sym" in ast.ASTVisitor._constructors_
    assert "Add" in ast.ASTVisitor._simple_constructors_

def test_num():
    arena = Arena()
    b = ast.Builder(arena)
    node = b.Num(42)
    assert node.node.n == 42
    assert node.node.kind is None
    v = ast.GenericASTVisitor()
    v.visit(node)
    c = CountNum()
    c.visit(node)
    assert c.count == 1

def test_print():
    arena = Arena()
    b = ast.Builder(arena)
    p = b.Print(None, [b.Num(42)])
    assert p.node.values[0].node.n == 42
    assert not is_present(p, "fmt")
    c = CountNum()
    c.visit(p)
    assert c.count == 1

def test_BinOp():
    arena = Arena()
    b = ast.Builder(arena)
    node = b.BinOp(left=b.Num(1), right=b.Num(2), op=ast.Add())
    assert isinstance(node.node.op, ast.Add)
    assert node.node.left.node.n == 1
    assert node.node.right.node.n == 2
    c = CountNum()
    c.visit(node)
    assert c.count == 2

def test_program():
    arena = Arena()
    b = ast.Builder(arena)
    i = ast.var_sym("i", [], None, b.Num(0), ast.SymbolEqual())
    decl = b.Declaration(b.AttrType(ast.TypeInteger()), [], [i])
    loop = b.DoLoop("i", b.Num(1), b.Num(10), None,
        [b.Print(None, [b.Name("i")])])
    p = b.Program("test", [], [b.ImplicitNone()], [decl], [loop])
    assert arena.root == p
    c = CountNum()
    c.visit(p)
    # The initializer in the declaration is visited as well
    assert c.count == 3

def test_statement_fields():
    arena = Arena()
    b = ast.Builder(arena)
    s = b.Continue(label=10)
    assert s.node.label == 10
    assert s.node.trivia is None
    assert ast.Continue._trivia_field == "trivia"
    assert ast.IfSingle._trivia_field is None
    with pytest.raises(TreeConstructionError):
        # The body of a single line if is a statement
        b.IfSingle(b.Name("x"), b.Num(1))
    with pytest.raises(TreeConstructionError):
        b.Continue(label="10")
