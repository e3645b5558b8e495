import pytest

from libasdl.runtime import Arena, Location, Position, TriviaNode, Semicolon
from libasdl.runtime.utils import (make_tree, dump, to_tuple, equal,
        tree_str, print_tree, fmt)
from libasdl.runtime.tests.mini import ast

def test_tree1():
    assert make_tree("a", []) == """\
a\
"""
    assert make_tree("a", ["1"]) == """\
a
╰─1\
"""
    assert make_tree("a", ["1", "2"]) == """\
a
├─1
╰─2\
"""
    t = make_tree("a", ["1", "2", "3"])
    assert t  == """\
a
├─1
├─2
╰─3\
"""
    assert make_tree("a", [t, "2", "3"]) == """\
a
├─a
│ ├─1
│ ├─2
│ ╰─3
├─2
╰─3\
"""
    assert make_tree("a", ["1", "2", t]) == """\
a
├─1
├─2
╰─a
  ├─1
  ├─2
  ╰─3\
"""
    assert make_tree("a", ["1\n2", "3"]) == """\
a
├─1
│ 2
╰─3\
"""

def make_assign(arena, loc=None):
    b = ast.Builder(arena)
    return b.Assign("y", b.BinOp(b.Name("x"), ast.Mul(), b.Num(2)),
        TriviaNode(after=[Semicolon()]), loc=loc)

def test_dump():
    arena = Arena()
    s = make_assign(arena)
    assert dump(s) == "Assign(target='y', value=BinOp(left=Name(id='x'), " \
        "op=Mul(), right=Num(n=2)), trivia=TriviaNode(inside=[], " \
        "after=[Semicolon()]))"
    assert dump(s.node.value, annotate_fields=False) == \
        "BinOp(Name('x'), Mul(), Num(2))"
    with pytest.raises(TypeError):
        dump(5)

def test_dump_location():
    arena = Arena()
    loc = Location(Position(3, 1), Position(3, 10))
    s = make_assign(arena, loc)
    assert dump(s, include_attributes=True).endswith(
        "after=[Semicolon()]), loc='3:1-3:10')")

def test_to_tuple():
    arena = Arena()
    s = make_assign(arena)
    assert to_tuple(s) == ("Assign", "y", ("BinOp", ("Name", "x"),
        ("Mul",), ("Num", 2)), ("TriviaNode", [], [("Semicolon",)]))

def test_equal():
    a1 = Arena()
    a2 = Arena()
    s1 = make_assign(a1)
    s2 = make_assign(a2, Location(Position(1, 1), Position(1, 9)))
    assert equal(s1, s2)
    assert not equal(s1, s2, include_location=True)
    b = ast.Builder(a2)
    assert not equal(s1, b.Assign("y", b.Num(2)))

def test_tree_str():
    arena = Arena()
    b = ast.Builder(arena)
    s = b.Assign("y", b.BinOp(b.Name("x"), ast.Mul(), b.Num(2)))
    assert tree_str(s, color=False) == """\
stmt.Assign
├─target='y'
├─value=expr.BinOp
│ ├─left=expr.Name
│ │ ╰─id='x'
│ ├─op=Mul
│ ╰─right=expr.Num
│   ╰─n=2
╰─trivia=None\
"""
    u = b.Unit([s])
    assert tree_str(u, color=False).startswith("""\
unit.Unit
╰─body=↓
  ╰─stmt.Assign
""")

def test_print_tree(capsys):
    arena = Arena()
    b = ast.Builder(arena)
    print_tree(b.Num(5), color=False)
    out, err = capsys.readouterr()
    assert out == "expr.Num\n╰─n=5\n"

def test_color():
    s = fmt("<bold>x</bold>")
    assert "x" in s
    assert "\x1b[" in s
    arena = Arena()
    b = ast.Builder(arena)
    s = tree_str(b.Num(5))
    assert "Legend: " in s
    assert "Num" in s
