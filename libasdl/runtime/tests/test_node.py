import pytest

from libasdl.runtime import (Arena, Location, Position, TreeConstructionError,
        is_present, sequence_length, REQUIRED, OPTIONAL, SEQUENCE)
from libasdl.runtime.tests.mini import ast


def test_class_data():
    assert ast.Assign._fields == ("target", "value", "trivia")
    assert ast.Assign._multiplicity == (REQUIRED, REQUIRED, OPTIONAL)
    assert ast.If._multiplicity == (REQUIRED, SEQUENCE, SEQUENCE, OPTIONAL)
    assert ast.Assign._trivia_field == "trivia"
    assert ast.BinOp._trivia_field is None
    assert issubclass(ast.If, ast.stmt)
    assert issubclass(ast.Add, ast.operator)

def test_discriminants():
    assert ast.Assign.ntype == 0
    assert ast.If.ntype == 1
    assert ast.BinOp.ntype == 0
    assert ast.Name.ntype == 1
    assert ast.Num.ntype == 2
    assert ast.Add.ntype == 0
    assert ast.Mul.ntype == 1

def test_immutable():
    arena = Arena()
    x = ast.Builder(arena).Name("x")
    with pytest.raises(TreeConstructionError):
        x.node.id = "y"
    with pytest.raises(TreeConstructionError):
        del x.node.id
    assert x.node.id == "x"

def test_sequences_are_tuples():
    arena = Arena()
    b = ast.Builder(arena)
    body = [b.Assign("y", b.Num(1))]
    s = b.If(b.Name("x"), body)
    body.append(b.Assign("z", b.Num(2)))
    assert s.node.body == (body[0],)
    assert s.node.orelse == ()
    with pytest.raises(TreeConstructionError):
        b.If(b.Name("x"), body[0])

def test_simple_sum_equality():
    assert ast.Add() == ast.Add()
    assert ast.Add() != ast.Mul()
    assert len({ast.Add(), ast.Add(), ast.Mul()}) == 2

def test_is_present():
    arena = Arena()
    b = ast.Builder(arena)
    s = b.Assign("y", b.Num(1))
    assert not is_present(s, "trivia")
    assert not is_present(s.node, "trivia")
    with pytest.raises(TypeError):
        is_present(s, "value")
    with pytest.raises(AttributeError):
        is_present(s, "orelse")

def test_sequence_length():
    arena = Arena()
    b = ast.Builder(arena)
    s = b.If(b.Name("x"), [b.Assign("y", b.Num(1))])
    assert sequence_length(s, "body") == 1
    assert sequence_length(s, "orelse") == 0
    with pytest.raises(TypeError):
        sequence_length(s, "test")

def test_location():
    loc = Location(Position(1, 1), Position(2, 7))
    assert str(loc) == "1:1-2:7"
    arena = Arena()
    x = ast.Builder(arena).Name("x", loc=loc)
    assert x.node.loc == loc
    assert x.node.loc.first.line == 1
    assert ast.Builder(arena).Name("y").node.loc is None
    with pytest.raises(TreeConstructionError):
        ast.Builder(arena).Name("z", loc=(1, 2))

def test_repr():
    arena = Arena()
    b = ast.Builder(arena)
    s = b.Assign("y", b.Num(1))
    assert repr(s.node) == "Assign(target='y', value=Handle(0), trivia=None)"
