import argparse
import sys

def schema_tree(schema, color=True):
    """
    Returns the types and constructors of `schema` drawn as a tree.
    """
    from .asdl import asdl
    from .runtime.utils import make_tree, fmt

    def field_str(f):
        s = f.type
        if f.seq:
            s += "*"
        elif f.opt:
            s += "?"
        s += " " + f.name
        if color:
            s = fmt("<ansigreen>%s</ansigreen>" % s)
        return s

    def cons_str(name, ntype, fields):
        root = "%s (ntype=%d)" % (name, ntype)
        if color:
            root = fmt("<bold><ansiblue>%s</ansiblue></bold>" % root)
        return make_tree(root, [field_str(f) for f in fields], color)

    types = []
    for tp in schema.module.dfns:
        value = tp.value
        if isinstance(value, asdl.Product):
            root = "product " + tp.name
            children = [field_str(f) for f in value.fields + value.attributes]
        else:
            if asdl.is_simple_sum(value):
                root = "simple sum " + tp.name
            else:
                root = "sum " + tp.name
            children = [cons_str(c.name, c.ntype, c.fields + value.attributes)
                for c in value.types]
        if color:
            root = fmt("<bold>%s</bold>" % root)
        types.append(make_tree(root, children, color))
    return make_tree("module " + schema.name, types, color)

def main(argv=None):
    parser = argparse.ArgumentParser(description="ASDL node class generator.")
    parser.add_argument('file', help="ASDL file")
    parser.add_argument('-o', metavar="FILE",
            help="place the generated Python module into FILE (default: "
            "standard output)")
    parser.add_argument('-v', action="store_true",
            help="be more verbose")
    parser.add_argument('--check', action="store_true",
            help="only check the schema and exit")
    parser.add_argument('--show-schema', action="store_true",
            help="show the types and constructors of the schema and exit")
    parser.add_argument('--no-color', action="store_true",
            help="do not use colors with --show-schema")
    args = parser.parse_args(argv)

    filename = args.file
    verbose = args.v

    if verbose: print("Importing generator...", file=sys.stderr)
    from .asdl import (parse_file, check, generate, SchemaSyntaxError,
            SchemaCheckError)
    if verbose: print("    Done.", file=sys.stderr)
    try:
        if verbose: print("Parsing...", file=sys.stderr)
        mod = parse_file(filename)
        if verbose: print("    Done.", file=sys.stderr)
        if verbose: print("Checking...", file=sys.stderr)
        schema = check(mod)
        if verbose: print("    Done.", file=sys.stderr)
    except SchemaSyntaxError as err:
        print("%s:%s" % (filename, err), file=sys.stderr)
        return 1
    except SchemaCheckError as err:
        for e in err.errors:
            print("%s:%s" % (filename, e), file=sys.stderr)
        return 1

    if args.check:
        print("%s: %d types, %d constructors" % (filename,
            len(schema.types), len(schema.constructors)))
        return 0
    if args.show_schema:
        print(schema_tree(schema, color=not args.no_color))
        return 0

    if verbose: print("Generating...", file=sys.stderr)
    source = generate(schema)
    if verbose: print("    Done.", file=sys.stderr)
    if args.o:
        with open(args.o, "w", encoding="utf-8") as f:
            f.write(source)
    else:
        sys.stdout.write(source)
    return 0
