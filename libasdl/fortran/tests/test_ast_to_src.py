from libasdl.fortran import ast, ast_to_src
from libasdl.runtime import (Arena, TriviaNode, Comment, EOLComment,
        EndOfLine, Semicolon)


def test_program():
    arena = Arena()
    b = ast.Builder(arena)
    integer = b.AttrType(ast.TypeInteger())
    syms = [ast.var_sym(n, [], None, None, ast.SymbolNone())
        for n in ["i", "s"]]
    p = b.Program("test", [], [b.ImplicitNone()],
        [b.Declaration(integer, [], syms)], [
        b.Assignment(b.Name("s"), b.Num(0)),
        b.DoLoop("i", b.Num(1), b.Num(10), None, [
            b.Assignment(b.Name("s"), b.BinOp(b.Name("s"), ast.Add(),
                b.Name("i"))),
        ]),
        b.Print(None, [b.String("sum"), b.Name("s")]),
    ])
    assert ast_to_src(p) == """\
program test
    implicit none
    integer :: i, s
    s = 0
    do i = 1, 10
        s = s + i
    end do
    print *, "sum", s
end program test
"""

def test_trivia():
    arena = Arena()
    b = ast.Builder(arena)
    p = b.Program("test", body=[
        b.Assignment(b.Name("x"), b.Num(1), trivia=TriviaNode(after=[
            EOLComment("! first"), EndOfLine(), Comment("! second")])),
        b.Assignment(b.Name("y"), b.Num(2),
            trivia=TriviaNode(after=[Semicolon()])),
        b.Assignment(b.Name("z"), b.Num(3)),
        b.If(b.Name("x"), [b.Continue()], trivia=TriviaNode(
            inside=[EOLComment("! check")])),
    ], trivia=TriviaNode(inside=[EOLComment("! main")]))
    assert ast_to_src(p) == """\
program test ! main
    x = 1 ! first

    ! second
    y = 2; z = 3
    if (x) then ! check
        continue
    end if
end program test
"""

def test_labels_and_names():
    arena = Arena()
    b = ast.Builder(arena)
    loop = b.DoLoop(body=[
        b.IfSingle(b.Compare(b.Name("i"), ast.Gt(), b.Num(5)),
            b.Exit("outer")),
        b.Cycle(),
    ], stmt_name="outer")
    u = b.TranslationUnit([loop, b.Continue(label=10), b.GoTo(10, label=20)])
    assert ast_to_src(u) == """\
outer: do
    if (i > 5) exit outer
    cycle
end do outer
10 continue
20 go to 10
"""

def test_else():
    arena = Arena()
    b = ast.Builder(arena)
    s = b.If(b.BoolOp(b.Name("a"), ast.And(), b.UnaryOp(ast.Not(),
            b.Name("b"))),
        [b.Assignment(b.Name("x"), b.Num(1))],
        [b.Assignment(b.Name("x"), b.Num(2))])
    assert ast_to_src(s) == """\
if (a .and. .not. b) then
    x = 1
else
    x = 2
end if
"""

def test_select():
    arena = Arena()
    b = ast.Builder(arena)
    s = b.Select(b.Name("i"), [
        b.CaseStmt([b.CaseCondExpr(b.Num(1)),
            b.CaseCondRange(b.Num(3), None)],
            [b.Assignment(b.Name("x"), b.Num(1))]),
        b.CaseDefault([b.Assignment(b.Name("x"), b.Num(0))]),
    ])
    assert ast_to_src(s) == """\
select case (i)
    case (1, 3:)
        x = 1
    case default
        x = 0
end select
"""

def test_module():
    arena = Arena()
    b = ast.Builder(arena)
    dp = b.KindValue(None, b.Name("dp"))
    real_dp = b.AttrType(ast.TypeReal(), [dp])
    pi = ast.var_sym("pi", [], None, b.Real("3.14_dp"), ast.SymbolEqual())
    x = ast.var_sym("x", [b.ArraySection(None, None, None)], None, None,
        ast.SymbolNone())
    f = b.Function("f", [ast.arg("x")],
        [b.SimpleAttribute(ast.AttrPure())], b.Name("r"),
        decl=[
            b.Declaration(real_dp, [b.AttrIntent(ast.In())], [x]),
        ],
        body=[
            b.Assignment(b.Name("r"), b.FuncCallOrArray("sum",
                args=[b.ArrayIndex(b.Name("x"))])),
        ])
    s = b.Subroutine("s", bind=ast.bind_spec([ast.keyword(None,
        b.Name("c"))]))
    m = b.Module("m", [
        b.UseOnly(None, "iso_fortran_env", [b.UseSymbol("real64", "dp")]),
    ], [b.ImplicitNone()], [
        b.Declaration(real_dp, [b.SimpleAttribute(ast.AttrParameter())],
            [pi]),
    ], [f, s])
    assert ast_to_src(m) == """\
module m
    use iso_fortran_env, only: dp => real64
    implicit none
    real(dp), parameter :: pi = 3.14_dp
contains
    pure function f(x) result(r)
        real(dp), intent(in) :: x(:)
        r = sum(x)
    end function f
    subroutine s bind(c)
    end subroutine s
end module m
"""

def test_expressions():
    arena = Arena()
    b = ast.Builder(arena)
    def src(e):
        return ast_to_src(e)
    assert src(b.Num(5, "dp")) == "5_dp"
    assert src(b.Logical(True)) == ".true."
    assert src(b.Logical(False, "lk")) == ".false._lk"
    assert src(b.String('a"b')) == '"a""b"'
    assert src(b.String("x", "ck")) == 'ck_"x"'
    assert src(b.StrOp(b.String("a"), ast.Concat(), b.Name("s"))) == \
        '"a" // s'
    assert src(b.BinOp(b.Parenthesis(b.BinOp(b.Name("a"), ast.Add(),
        b.Num(1))), ast.Pow(), b.Num(2))) == "(a + 1) ** 2"
    assert src(b.Complex(b.Real("1.0"), b.Real("2.0"))) == "(1.0, 2.0)"
    assert src(b.ArrayInitializer(None, [b.Num(1), b.Num(2)])) == "[1, 2]"
    assert src(b.ArrayInitializer(b.AttrType(ast.TypeInteger()),
        [b.Num(1)])) == "[integer :: 1]"
    assert src(b.ImpliedDoLoop([b.Name("i")], "i", b.Num(1),
        b.Num(3))) == "(i, i = 1, 3)"
    assert src(b.Name("x", [ast.struct_member("a", [b.ArrayIndex(
        b.Num(1))])])) == "a(1)%x"
    assert src(b.FuncCallOrArray("f", args=[b.KeywordArg("n",
        b.Num(2))])) == "f(n=2)"
    assert src(b.DefBinOp(b.Name("a"), "cross", b.Name("b"))) == \
        "a .cross. b"

def test_coarrays():
    arena = Arena()
    b = ast.Builder(arena)
    r = b.CoarrayRef("a", args=[b.ArrayIndex(b.Num(1))],
        coargs=[b.CoarrayIndex(b.Num(2))])
    assert ast_to_src(r) == "a(1)[2]"
    assert ast_to_src(b.CoarrayRef("a", coargs=[b.CoarrayStar()])) == "a[*]"
    assert ast_to_src(b.AttrCodimension([b.CoarraySection(None, None),
        b.CoarrayStar()])) == "codimension[:, *]"
