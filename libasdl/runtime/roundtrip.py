"""
Round trip check for a printer and a parser of the same language.

For a tree `t`:

    s1 = print(t)
    t2 = parse(s1)
    s2 = print(t2)        s1 == s2
    t3 = parse(s2)        t2 == t3 (structurally)

The printed form is a fixpoint after one normalization, which holds even if
the parser does not keep every piece of trivia of the first print.
"""

import difflib

from .utils import equal, dump


class RoundTripMismatch(AssertionError):
    pass


def _diff(a, b):
    return "".join(difflib.unified_diff(a.splitlines(True),
        b.splitlines(True), "first print", "second print"))

def check_round_trip(tree, print_fn, parse_fn):
    """
    Runs the round trip for `tree` and returns the normalized source.

    `print_fn` takes a tree and returns a string, `parse_fn` takes a string
    and returns a tree (a handle or a node). Raises `RoundTripMismatch`.
    """
    s1 = print_fn(tree)
    t2 = parse_fn(s1)
    s2 = print_fn(t2)
    if s1 != s2:
        raise RoundTripMismatch("Printed source changed after parsing it "
            "back:\n%s" % _diff(s1, s2))
    t3 = parse_fn(s2)
    if not equal(t2, t3):
        raise RoundTripMismatch("Parsing the same source twice gave "
            "different trees:\n%s\n%s" % (dump(t2), dump(t3)))
    return s2
