import os

from libasdl.cli import main, schema_tree
from libasdl.asdl import load, parse, check

SRC = """\
module Shapes
{
shape = Circle(float r) | Square(float side)
}
"""

def write_schema(tmp_path, src=SRC):
    filename = os.path.join(str(tmp_path), "shapes.asdl")
    with open(filename, "w") as f:
        f.write(src)
    return filename

def test_generate(tmp_path, capsys):
    filename = write_schema(tmp_path)
    assert main([filename]) == 0
    out, err = capsys.readouterr()
    assert out == load(SRC).__source__
    assert err == ""

def test_output_file(tmp_path, capsys):
    filename = write_schema(tmp_path)
    out_file = os.path.join(str(tmp_path), "shapes_ast.py")
    assert main([filename, "-o", out_file, "-v"]) == 0
    out, err = capsys.readouterr()
    assert out == ""
    assert "Generating..." in err
    with open(out_file) as f:
        assert "class Circle(shape): # Constructor" in f.read()

def test_check(tmp_path, capsys):
    filename = write_schema(tmp_path)
    assert main([filename, "--check"]) == 0
    out, err = capsys.readouterr()
    assert out == "%s: 1 types, 2 constructors\n" % filename

def test_check_fortran(capsys):
    import libasdl.fortran
    filename = os.path.join(os.path.dirname(libasdl.fortran.__file__),
        "Fortran.asdl")
    assert main([filename, "--check"]) == 0

def test_errors(tmp_path, capsys):
    filename = write_schema(tmp_path, "module Shapes { shape = Circle(real r) "
        "| Square(real side) }")
    assert main([filename]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.count(filename + ":1:") == 1
    assert "undefined type 'real'" in err
    filename = write_schema(tmp_path, "module Shapes { shape = circle }")
    assert main([filename]) == 1
    out, err = capsys.readouterr()
    assert err.startswith(filename + ":1:")

def test_show_schema(tmp_path, capsys):
    filename = write_schema(tmp_path)
    assert main([filename, "--show-schema", "--no-color"]) == 0
    out, err = capsys.readouterr()
    assert out == """\
module Shapes
╰─sum shape
  ├─Circle (ntype=0)
  │ ╰─float r
  ╰─Square (ntype=1)
    ╰─float side
"""

def test_schema_tree():
    schema = check(parse("""
module M
{
stmt = Pass(trivia? trivia) | Block(stmt* body)
op = Add | Sub
pair = (int a, int? b)
}
"""))
    assert schema_tree(schema, color=False) == """\
module M
├─sum stmt
│ ├─Pass (ntype=0)
│ │ ╰─trivia? trivia
│ ╰─Block (ntype=1)
│   ╰─stmt* body
├─simple sum op
│ ├─Add (ntype=0)
│ ╰─Sub (ntype=1)
╰─product pair
  ├─int a
  ╰─int? b\
"""
