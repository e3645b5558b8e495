import pytest

from libasdl.runtime import (Arena, TriviaNode, Comment, EOLComment,
        EndOfLine, Semicolon)
from libasdl.runtime.roundtrip import check_round_trip, RoundTripMismatch
from libasdl.runtime.utils import dump, equal
from libasdl.runtime.tests.mini import ast, to_src, parse, MiniSyntaxError


def test_parse():
    u = parse("""\
x = 1
IF x THEN ! check x
  y = 1 + 2 * z
END IF
""")
    assert u.arena.frozen
    assert dump(u) == "Unit(body=[Assign(target='x', value=Num(n=1), " \
        "trivia=None), If(test=Name(id='x'), body=[Assign(target='y', " \
        "value=BinOp(left=Num(n=1), op=Add(), right=BinOp(left=Num(n=2), " \
        "op=Mul(), right=Name(id='z'))), trivia=None)], orelse=[], " \
        "trivia=TriviaNode(inside=[EOLComment(comment='! check x')], " \
        "after=[]))])"

def test_parse_error():
    with pytest.raises(MiniSyntaxError):
        parse("IF x\n")
    with pytest.raises(MiniSyntaxError):
        parse("x = = 1\n")

def test_round_trip():
    arena = Arena()
    b = ast.Builder(arena)
    u = b.Unit([
        b.Assign("x", b.Num(1), TriviaNode(after=[Semicolon()])),
        b.Assign("z", b.Num(2), TriviaNode(after=[EOLComment("! z"),
            EndOfLine(), Comment("! the test")])),
        b.If(b.Name("x"), [
            b.Assign("y", b.BinOp(b.Name("x"), ast.Add(), b.Num(1))),
        ], [
            b.Assign("y", b.Num(0)),
        ], TriviaNode(inside=[EOLComment("! x is set")])),
    ])
    arena.freeze()
    s = check_round_trip(u, to_src, parse)
    assert s == """\
x = 1; z = 2 ! z

! the test
IF x THEN ! x is set
  y = x + 1
ELSE
  y = 0
END IF
"""
    t = parse(s)
    assert equal(t, u)

def test_round_trip_normalizes():
    arena = Arena()
    b = ast.Builder(arena)
    # A lone end of line is the default and is not kept by the parser
    u = b.Unit([b.Assign("x", b.Num(1), TriviaNode(after=[EndOfLine()]))])
    arena.freeze()
    assert check_round_trip(u, to_src, parse) == "x = 1\n"
    assert not equal(u, parse("x = 1\n"))

def test_changed_source():
    arena = Arena()
    b = ast.Builder(arena)
    u = b.Unit([b.Assign("x", b.Num(1), TriviaNode(after=[EOLComment("! c")]))])
    def parse_without_comments(text):
        return parse("\n".join(line.split("!")[0] for line in
            text.split("\n")))
    with pytest.raises(RoundTripMismatch) as e:
        check_round_trip(u, to_src, parse_without_comments)
    assert "-x = 1 ! c" in str(e.value)
    assert "+x = 1" in str(e.value)

def test_changed_tree():
    calls = []
    def parse_counting(text):
        calls.append(text)
        arena = Arena()
        b = ast.Builder(arena)
        return b.Assign("x", b.Num(len(calls)))
    def print_constant(tree):
        return "x = 1\n"
    arena = Arena()
    b = ast.Builder(arena)
    u = b.Assign("x", b.Num(1))
    with pytest.raises(RoundTripMismatch) as e:
        check_round_trip(u, print_constant, parse_counting)
    assert len(calls) == 2
    assert "Num(n=1)" in str(e.value)
    assert "Num(n=2)" in str(e.value)
